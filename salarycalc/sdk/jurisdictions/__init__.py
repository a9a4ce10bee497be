"""jurisdictions - Regional and municipal surtax tables.

Scope:
- Read-only lookup of regional/municipal surtax rules (registry.py)
- Province capital -> region index for narrowing municipality choices
- Packaged 2025 tables under data/ (YAML, validated by pydantic schemas)

Constraints:
- Lookups never raise: unknown names resolve to the DEFAULT entry
- Built once, never mutated; inject a custom registry for tests

Usage:
    from salarycalc.sdk.jurisdictions import default_registry

    registry = default_registry()
    rule = registry.lookup_region("Emilia-Romagna")
    registry.provinces_of("LOMBARDIA")
"""

from .registry import (
    DATA_DIR,
    DEFAULT_KEY,
    JurisdictionDataError,
    JurisdictionRegistry,
    default_registry,
    load_registry,
    normalize_name,
)

__all__ = [
    "DATA_DIR",
    "DEFAULT_KEY",
    "JurisdictionDataError",
    "JurisdictionRegistry",
    "default_registry",
    "load_registry",
    "normalize_name",
]

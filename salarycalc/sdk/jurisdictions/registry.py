"""Jurisdiction registry - regional and municipal surtax tables.

Tables live as YAML files in a directory (the packaged ``data/`` directory
by default):

- regions.yaml: region name -> RegionalRule
- municipalities.yaml: municipality name -> MunicipalRule
- provinces.yaml: list of province capitals with their region

Both rule tables must carry a DEFAULT entry. Lookups never fail: a missing
or unknown name resolves to DEFAULT, so absent jurisdiction data never
blocks a calculation. The registry is read-only once built and may be
shared freely between calculations.
"""

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Union

import yaml
from pydantic import TypeAdapter, ValidationError

from ..schemas import MunicipalRule, ProvincialCapital, RegionalRule

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_KEY = "DEFAULT"

REGIONS_FILENAME = "regions.yaml"
MUNICIPALITIES_FILENAME = "municipalities.yaml"
PROVINCES_FILENAME = "provinces.yaml"

_REGION_TABLE = TypeAdapter(Dict[str, RegionalRule])
_MUNICIPAL_TABLE = TypeAdapter(Dict[str, MunicipalRule])
_PROVINCE_LIST = TypeAdapter(List[ProvincialCapital])


class JurisdictionDataError(Exception):
    """Raised when jurisdiction tables are missing or malformed."""
    pass


def normalize_name(name: Optional[str]) -> str:
    """Canonical lookup key: upper case, hyphens as spaces, single spaces.

    "Emilia-Romagna", "EMILIA ROMAGNA" and " emilia  romagna " all map to
    "EMILIA ROMAGNA".
    """
    if not name:
        return ""
    return " ".join(str(name).upper().replace("-", " ").split())


def _index(table: Mapping[str, Any], label: str) -> Mapping[str, Any]:
    """Re-key a table by normalized name, rejecting collisions."""
    indexed = {}
    for raw_name, rule in table.items():
        key = normalize_name(raw_name)
        if not key:
            raise JurisdictionDataError(f"{label}: empty jurisdiction name")
        if key in indexed:
            raise JurisdictionDataError(f"{label}: duplicate entry for '{key}' ('{raw_name}')")
        indexed[key] = rule

    if DEFAULT_KEY not in indexed:
        raise JurisdictionDataError(f"{label}: missing required '{DEFAULT_KEY}' entry")

    return MappingProxyType(indexed)


class JurisdictionRegistry:
    """Read-only lookup of surtax rules by region and municipality."""

    def __init__(
        self,
        regions: Mapping[str, RegionalRule],
        municipalities: Mapping[str, MunicipalRule],
        provinces: Iterable[ProvincialCapital] = (),
    ):
        self._regions = _index(regions, "regions")
        self._municipalities = _index(municipalities, "municipalities")
        self._provinces = tuple(provinces)

    @classmethod
    def from_dicts(
        cls,
        regions: Dict[str, Any],
        municipalities: Dict[str, Any],
        provinces: Optional[List[Any]] = None,
    ) -> "JurisdictionRegistry":
        """Build a registry from raw (YAML-shaped) dicts, validating each rule.

        Raises:
            JurisdictionDataError: If any table fails schema validation.
        """
        try:
            region_rules = _REGION_TABLE.validate_python(regions or {})
            municipal_rules = _MUNICIPAL_TABLE.validate_python(municipalities or {})
            capitals = _PROVINCE_LIST.validate_python(provinces or [])
        except ValidationError as e:
            raise JurisdictionDataError(f"Invalid jurisdiction data: {e}") from e

        return cls(region_rules, municipal_rules, capitals)

    @classmethod
    def from_directory(cls, path: Union[str, Path]) -> "JurisdictionRegistry":
        """Load regions.yaml, municipalities.yaml and provinces.yaml from a directory."""
        data_dir = Path(path)
        logger.debug(f"loading jurisdiction tables from {data_dir}")

        regions = _load_yaml(data_dir / REGIONS_FILENAME)
        municipalities = _load_yaml(data_dir / MUNICIPALITIES_FILENAME)

        provinces_file = data_dir / PROVINCES_FILENAME
        provinces = []
        if provinces_file.exists():
            provinces = (_load_yaml(provinces_file) or {}).get("provinces", [])

        registry = cls.from_dicts(regions, municipalities, provinces)
        logger.debug(
            f"loaded {len(registry._regions)} regions, "
            f"{len(registry._municipalities)} municipalities, "
            f"{len(registry._provinces)} provinces"
        )
        return registry

    # --- Lookups ---

    def lookup_region(self, name: Optional[str]) -> RegionalRule:
        """Regional rule for a region name, DEFAULT when absent or unknown."""
        key = normalize_name(name)
        rule = self._regions.get(key)
        if rule is None:
            if key:
                logger.warning(f"region '{name}' not in registry, using {DEFAULT_KEY}")
            return self._regions[DEFAULT_KEY]
        return rule

    def lookup_municipality(self, name: Optional[str]) -> MunicipalRule:
        """Municipal rule for a municipality name, DEFAULT when absent or unknown."""
        key = normalize_name(name)
        rule = self._municipalities.get(key)
        if rule is None:
            if key:
                logger.warning(f"municipality '{name}' not in registry, using {DEFAULT_KEY}")
            return self._municipalities[DEFAULT_KEY]
        return rule

    def has_region(self, name: Optional[str]) -> bool:
        return normalize_name(name) in self._regions

    def has_municipality(self, name: Optional[str]) -> bool:
        return normalize_name(name) in self._municipalities

    def regions(self) -> List[str]:
        """Region names with a dedicated schedule (DEFAULT excluded)."""
        return sorted(k for k in self._regions if k != DEFAULT_KEY)

    def municipalities(self) -> List[str]:
        """Municipality names with a dedicated schedule (DEFAULT excluded)."""
        return sorted(k for k in self._municipalities if k != DEFAULT_KEY)

    # --- Province index ---

    def provinces_by_region(self, region: Optional[str]) -> List[ProvincialCapital]:
        """Province capitals of a region, in table order. Empty for no region."""
        key = normalize_name(region)
        if not key:
            return []
        return [p for p in self._provinces if normalize_name(p.region) == key]

    def provinces_of(self, region: Optional[str]) -> Set[str]:
        """Names of the province capitals of a region."""
        return {p.name for p in self.provinces_by_region(region)}


def _load_yaml(path: Path) -> Any:
    if not path.exists():
        raise JurisdictionDataError(f"Jurisdiction table not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise JurisdictionDataError(f"Cannot parse {path}: {e}") from e


@lru_cache(maxsize=None)
def load_registry(path: Union[str, Path] = str(DATA_DIR)) -> JurisdictionRegistry:
    """Load (once per directory) the registry stored under ``path``."""
    return JurisdictionRegistry.from_directory(path)


def default_registry() -> JurisdictionRegistry:
    """Registry used when a caller does not inject one: the packaged tables."""
    return load_registry()

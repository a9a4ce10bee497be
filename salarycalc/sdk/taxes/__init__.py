"""taxes - Employee-side tax calculations.

Scope:
- Progressive bracket evaluation and national IRPEF (brackets.py)
- Work deduction, fiscal-wedge credit and bonus, supplementary bonus (deductions.py)
- Regional and municipal surtax resolution (surtax.py)

Constraints:
- Pure calculation - no settings access, no I/O
- Jurisdiction rules come from the registry; nothing here branches on names
- Rounding to cents happens only where surtax amounts are returned

Usage:
    from salarycalc.sdk.taxes import calc_national_tax, regional_surtax

    tax = calc_national_tax(27243)
    addizionale = regional_surtax(27243, "LOMBARDIA")
"""

from .brackets import (
    IRPEF_BRACKETS,
    calc_bracket_tax,
    calc_national_tax,
    round_money,
)

from .deductions import (
    calc_work_deduction,
    calc_wedge_credit,
    calc_wedge_bonus,
    calc_supplementary_bonus,
)

from .surtax import (
    MANUAL_MUNICIPALITY,
    calc_regional_surtax,
    calc_municipal_surtax,
    is_manual_municipality,
    regional_surtax,
    municipal_surtax,
)

__all__ = [
    # Brackets
    "IRPEF_BRACKETS",
    "calc_bracket_tax",
    "calc_national_tax",
    "round_money",
    # Deductions and bonuses
    "calc_work_deduction",
    "calc_wedge_credit",
    "calc_wedge_bonus",
    "calc_supplementary_bonus",
    # Surtax
    "MANUAL_MUNICIPALITY",
    "calc_regional_surtax",
    "calc_municipal_surtax",
    "is_manual_municipality",
    "regional_surtax",
    "municipal_surtax",
]

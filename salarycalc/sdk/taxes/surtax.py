"""Regional and municipal IRPEF surtax (addizionali).

Both surtaxes are computed on IRPEF taxable income. Each jurisdiction's
rule picks the method (flat rate, flat rate above an exemption threshold,
progressive brackets) and may carry declarative adjustments, which are
evaluated here without knowing which region they belong to:

- low_income_override: up to the threshold, the lowest bracket rate is
  applied to the whole income instead of marginal evaluation
- mid_band_fixed_deduction: fixed amount off the surtax inside a band
- dependent_credit: fixed amount per dependent below an income ceiling

Amounts are rounded to cents on return only.
"""

import logging
from typing import Optional

from ..jurisdictions import JurisdictionRegistry, default_registry
from ..schemas import (
    DependentCredit,
    LowIncomeOverride,
    MidBandFixedDeduction,
    MunicipalRule,
    RegionalRule,
)
from .brackets import calc_bracket_tax, round_money

logger = logging.getLogger(__name__)

# Label used by the UI for "no municipality, type the rate by hand"
MANUAL_MUNICIPALITY = "Manuale"


def is_manual_municipality(name: Optional[str]) -> bool:
    """True when no municipality was chosen (manual rate mode)."""
    return not name or not name.strip() or name.strip().upper() == MANUAL_MUNICIPALITY.upper()


def calc_regional_surtax(taxable_income: float, rule: RegionalRule, dependents: int = 0) -> float:
    """Regional surtax owed under a rule.

    Args:
        taxable_income: IRPEF taxable income
        rule: Regional rule from the registry
        dependents: Dependent children, used by dependent_credit adjustments

    Returns:
        Surtax rounded to cents
    """
    income = max(0.0, taxable_income)

    if rule.method == "flat":
        amount = income * rule.rate
    elif rule.method == "flat_above_threshold":
        # Cliff: above the threshold the whole income is taxed, not the excess
        amount = 0.0 if income <= rule.exemption_threshold else income * rule.rate
    else:
        for override in rule.adjustments_of(LowIncomeOverride):
            if income <= override.income_threshold:
                return round_money(income * rule.brackets[0].rate)
        amount = calc_bracket_tax(income, rule.brackets)

    for adjustment in rule.adjustments:
        if isinstance(adjustment, DependentCredit):
            if dependents > 0 and income <= adjustment.income_ceiling:
                amount = max(0.0, amount - adjustment.amount_per_dependent * dependents)
        elif isinstance(adjustment, MidBandFixedDeduction):
            if adjustment.lower < income <= adjustment.upper:
                amount = max(0.0, amount - adjustment.amount)

    return round_money(amount)


def calc_municipal_surtax(
    taxable_income: float,
    rule: Optional[MunicipalRule],
    manual_rate_percent: float = 0.0,
) -> float:
    """Municipal surtax owed.

    Args:
        taxable_income: IRPEF taxable income
        rule: Municipal rule, or None for manual mode
        manual_rate_percent: Rate in percent (0.8 = 0.8%) used in manual mode,
            applied to the whole income with no exemption

    Returns:
        Surtax rounded to cents
    """
    income = max(0.0, taxable_income)

    if rule is None:
        return round_money(income * max(0.0, manual_rate_percent) / 100)

    if rule.exemption_threshold > 0 and income <= rule.exemption_threshold:
        return 0.0

    if rule.is_progressive:
        amount = calc_bracket_tax(income, rule.brackets)
    else:
        amount = income * rule.flat_rate

    return round_money(amount)


def regional_surtax(
    taxable_income: float,
    region: Optional[str],
    dependents: int = 0,
    registry: Optional[JurisdictionRegistry] = None,
) -> float:
    """Regional surtax for a region name (DEFAULT rule when unknown)."""
    registry = registry or default_registry()
    return calc_regional_surtax(taxable_income, registry.lookup_region(region), dependents)


def municipal_surtax(
    taxable_income: float,
    municipality: Optional[str],
    manual_rate_percent: float = 0.0,
    registry: Optional[JurisdictionRegistry] = None,
) -> float:
    """Municipal surtax for a municipality name, or the manual rate when none is given."""
    if is_manual_municipality(municipality):
        logger.debug(f"municipal surtax in manual mode at {manual_rate_percent}%")
        return calc_municipal_surtax(taxable_income, None, manual_rate_percent)

    registry = registry or default_registry()
    return calc_municipal_surtax(taxable_income, registry.lookup_municipality(municipality))

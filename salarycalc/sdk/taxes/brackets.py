"""Progressive bracket evaluation and national income tax (IRPEF 2025)."""

from typing import List, Sequence

from ..schemas import TaxBracket


# IRPEF 2025: three brackets
IRPEF_BRACKETS: List[TaxBracket] = [
    TaxBracket(up_to=28000, rate=0.23),
    TaxBracket(up_to=50000, rate=0.35),
    TaxBracket(rate=0.43),
]

# Cumulative form of the same brackets.
# Format: (income_threshold, base_tax, marginal_rate)
IRPEF_TABLE_2025 = [
    (28000, 0, 0.23),
    (50000, 6440, 0.35),
    (float('inf'), 14140, 0.43),
]


def round_money(amount: float) -> float:
    """Round to cents. Applied only where a value is returned, never mid-computation."""
    return round(amount, 2)


def calc_bracket_tax(income: float, brackets: Sequence[TaxBracket]) -> float:
    """Calculate tax using progressive brackets.

    Each bracket's rate applies only to the slice of income between the
    previous bracket's upper bound and its own. Stops once the whole
    income has been allocated.

    Args:
        income: Taxable income (negative treated as zero)
        brackets: Ordered brackets covering [0, inf)

    Returns:
        Unrounded tax amount
    """
    tax = 0.0
    prev_limit = 0.0
    for bracket in brackets:
        if income <= prev_limit:
            break
        limit = bracket.upper_bound
        taxable_in_bracket = min(income, limit) - prev_limit
        tax += taxable_in_bracket * bracket.rate
        prev_limit = limit
    return tax


def calc_national_tax(taxable_income: float) -> float:
    """Gross IRPEF using the cumulative table.

    Gives the same result as calc_bracket_tax(taxable_income, IRPEF_BRACKETS).
    """
    if taxable_income <= 0:
        return 0.0

    prev_threshold = 0
    for threshold, base_tax, rate in IRPEF_TABLE_2025:
        if taxable_income <= threshold:
            return base_tax + (taxable_income - prev_threshold) * rate
        prev_threshold = threshold
    return 0.0

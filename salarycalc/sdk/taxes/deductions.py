"""Employee deductions, credits and bonuses (Legge di Bilancio 2025).

All functions take IRPEF taxable income and return an unrounded annual
amount. Apprentices do not receive the fiscal-wedge credit or bonus; the
engine skips those calls for them.
"""

# Detrazioni lavoro dipendente
WORK_DEDUCTION_BASE = 1955          # up to 15k
WORK_DEDUCTION_MID_BASE = 1910      # 15k-28k base
WORK_DEDUCTION_MID_COEFF = 1190     # 15k-28k sliding part
WORK_DEDUCTION_HIGH_BASE = 1910     # 28k-50k, decays to zero

# Cuneo fiscale 2025: tax credit between 20k and 40k
WEDGE_CREDIT_START = 20000
WEDGE_CREDIT_MID = 32000
WEDGE_CREDIT_END = 40000
WEDGE_CREDIT_AMOUNT = 1000

# Cuneo fiscale 2025: cash bonus up to 20k.
# Format: (income_limit, rate, limit_inclusive); rate applies to the whole income.
WEDGE_BONUS_TIERS = [
    (8500, 0.071, False),
    (15000, 0.053, False),
    (20000, 0.048, True),
]

# Trattamento integrativo (ex bonus Renzi)
SUPPLEMENTARY_BONUS = 1200
SUPPLEMENTARY_BONUS_FLOOR = 8174   # exclusive
SUPPLEMENTARY_BONUS_CEILING = 15000


def calc_work_deduction(taxable_income: float) -> float:
    """Employment income deduction, a piecewise function of taxable income.

    - <= 15000: flat 1955
    - 15000-28000: 1910 + 1190 * (28000 - x) / 13000
    - 28000-50000: 1910 * (50000 - x) / 22000
    - > 50000: 0
    """
    if taxable_income <= 15000:
        return float(WORK_DEDUCTION_BASE)
    if taxable_income <= 28000:
        ratio = (28000 - taxable_income) / 13000
        return WORK_DEDUCTION_MID_BASE + WORK_DEDUCTION_MID_COEFF * ratio
    if taxable_income <= 50000:
        ratio = (50000 - taxable_income) / 22000
        return WORK_DEDUCTION_HIGH_BASE * ratio
    return 0.0


def calc_wedge_credit(taxable_income: float) -> float:
    """Fiscal-wedge tax credit: 1000 flat from 20k to 32k, linear to zero at 40k."""
    if WEDGE_CREDIT_START < taxable_income <= WEDGE_CREDIT_MID:
        return float(WEDGE_CREDIT_AMOUNT)
    if WEDGE_CREDIT_MID < taxable_income <= WEDGE_CREDIT_END:
        ratio = (WEDGE_CREDIT_END - taxable_income) / (WEDGE_CREDIT_END - WEDGE_CREDIT_MID)
        return WEDGE_CREDIT_AMOUNT * ratio
    return 0.0


def calc_wedge_bonus(taxable_income: float) -> float:
    """Fiscal-wedge cash bonus.

    A step function on the rate: the tier's rate multiplies the whole
    taxable income, not only the part inside the tier. Zero above 20000.
    """
    for limit, rate, inclusive in WEDGE_BONUS_TIERS:
        if taxable_income < limit or (inclusive and taxable_income == limit):
            return taxable_income * rate
    return 0.0


def calc_supplementary_bonus(taxable_income: float) -> float:
    """Flat 1200 for 8174 < taxable income <= 15000."""
    if SUPPLEMENTARY_BONUS_FLOOR < taxable_income <= SUPPLEMENTARY_BONUS_CEILING:
        return float(SUPPLEMENTARY_BONUS)
    return 0.0

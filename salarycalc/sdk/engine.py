"""Salary engine - net pay and employer cost for a gross annual salary.

Entry points:
- calculate_salary: employee net pay plus employer cost with the single
  incentive chosen by the caller
- calculate_employer_cost: employer cost with the best incentive an
  employee profile is eligible for
- simulate_scenario: both of the above for the same salary

Every call is a pure function of its inputs and the (read-only)
jurisdiction registry. Out-of-range input degrades the result instead of
raising: negative gross is treated as zero, unknown jurisdictions use the
DEFAULT rules, inapplicable incentives save nothing.
"""

import logging
from typing import Optional, Tuple, Union

from .config import DEFAULT_MANUAL_MUNICIPAL_RATE, DEFAULT_MUNICIPALITY, DEFAULT_REGION
from .incentives import (
    EMPLOYER_CONTRIBUTION_RATE,
    CostBasis,
    coerce_incentive,
    evaluate_choice,
    rank_candidates,
    rule_for_choice,
    select_best,
)
from .jurisdictions import JurisdictionRegistry, default_registry
from .schemas import (
    EmployeeProfile,
    EmployerCostResult,
    IncentiveType,
    SalaryResult,
    ScenarioResult,
)
from .taxes import (
    MANUAL_MUNICIPALITY,
    calc_national_tax,
    calc_supplementary_bonus,
    calc_wedge_bonus,
    calc_wedge_credit,
    calc_work_deduction,
    is_manual_municipality,
    municipal_surtax,
    regional_surtax,
    round_money,
)

logger = logging.getLogger(__name__)


MONTHLY_PAYMENTS = 13
EMPLOYEE_CONTRIBUTION_RATE = 0.0919    # INPS, employee share
APPRENTICE_EMPLOYEE_RATE = 0.0584
INSURANCE_RATE = 0.004                 # INAIL
SEVERANCE_DIVISOR = 13.5               # TFR


def employer_components(gross: float) -> Tuple[float, float, float]:
    """Standard (contribution, insurance premium, severance accrual) for a gross salary."""
    contribution = gross * EMPLOYER_CONTRIBUTION_RATE
    insurance = gross * INSURANCE_RATE
    severance = gross / SEVERANCE_DIVISOR
    return contribution, insurance, severance


def calculate_salary(
    gross: float,
    incentive: Union[IncentiveType, str, None] = IncentiveType.NONE,
    region: Optional[str] = DEFAULT_REGION,
    municipality: Optional[str] = DEFAULT_MUNICIPALITY,
    manual_municipal_rate: float = DEFAULT_MANUAL_MUNICIPAL_RATE,
    *,
    dependents: int = 0,
    registry: Optional[JurisdictionRegistry] = None,
) -> SalaryResult:
    """Calculate net pay and employer cost for a gross annual salary (RAL).

    Args:
        gross: Gross annual salary; negative values are treated as zero
        incentive: Incentive selected by the caller (at most one applies)
        region: Region name for the regional surtax and South-only caps
        municipality: Municipality name, or None/"Manuale" for manual rate mode
        manual_municipal_rate: Municipal rate in percent for manual mode
        dependents: Dependent children for regional dependent credits
        registry: Jurisdiction tables (default: packaged registry)

    Returns:
        SalaryResult with every intermediate amount
    """
    registry = registry or default_registry()
    gross = max(0.0, float(gross))
    incentive = coerce_incentive(incentive)
    is_apprentice = incentive == IncentiveType.APPRENDISTATO

    # --- 1. Employee net ---

    employee_rate = APPRENTICE_EMPLOYEE_RATE if is_apprentice else EMPLOYEE_CONTRIBUTION_RATE
    employee_contribution = gross * employee_rate
    taxable_income = max(0.0, gross - employee_contribution)

    gross_income_tax = calc_national_tax(taxable_income)
    work_deduction = calc_work_deduction(taxable_income)
    wedge_credit = 0.0 if is_apprentice else calc_wedge_credit(taxable_income)
    total_deductions = work_deduction + wedge_credit
    net_income_tax = max(0.0, gross_income_tax - total_deductions)

    regional = regional_surtax(taxable_income, region, dependents, registry=registry)
    municipal = municipal_surtax(
        taxable_income, municipality, manual_municipal_rate, registry=registry
    )

    wedge_bonus = 0.0 if is_apprentice else calc_wedge_bonus(taxable_income)
    supplementary_bonus = calc_supplementary_bonus(taxable_income)

    annual_net = (
        taxable_income - net_income_tax - regional - municipal
        + wedge_bonus + supplementary_bonus
    )

    logger.debug(
        f"gross={gross:.2f} taxable={taxable_income:.2f} irpef={gross_income_tax:.2f} "
        f"deductions={total_deductions:.2f} regional={regional:.2f} "
        f"municipal={municipal:.2f} net={annual_net:.2f}"
    )

    # --- 2. Employer cost ---

    standard_contribution, insurance, severance = employer_components(gross)
    basis = CostBasis(
        gross=gross,
        employer_contribution=standard_contribution,
        standard_total_cost=gross + standard_contribution + insurance + severance,
        region=region or "",
    )

    candidate = evaluate_choice(incentive, basis)
    savings = candidate.savings if candidate else 0.0

    rule = rule_for_choice(incentive)
    if rule is not None and rule.replaces_base:
        employer_contribution = standard_contribution - savings
    else:
        employer_contribution = max(0.0, standard_contribution - savings)

    employer_total_cost = gross + employer_contribution + insurance + severance

    return SalaryResult(
        gross_salary=gross,
        monthly_gross=gross / MONTHLY_PAYMENTS,
        employee_contribution=employee_contribution,
        taxable_income=taxable_income,
        gross_income_tax=gross_income_tax,
        work_deduction=work_deduction,
        wedge_credit=wedge_credit,
        total_deductions=total_deductions,
        net_income_tax=net_income_tax,
        regional_surtax=regional,
        municipal_surtax=municipal,
        wedge_bonus=wedge_bonus,
        supplementary_bonus=supplementary_bonus,
        employee_total_tax=gross - annual_net,
        annual_net=annual_net,
        monthly_net=annual_net / MONTHLY_PAYMENTS,
        employer_contribution=employer_contribution,
        insurance_premium=insurance,
        severance_accrual=severance,
        employer_total_cost=employer_total_cost,
        incentive_applied=incentive,
        incentive=candidate,
        company_savings=savings,
        selected_region=region or "",
        selected_municipality=(
            MANUAL_MUNICIPALITY if is_manual_municipality(municipality) else municipality
        ),
    )


def calculate_employer_cost(gross: float, profile: EmployeeProfile) -> EmployerCostResult:
    """Employer cost with the most favorable incentive for a profile.

    Every incentive the profile is eligible for is evaluated against the
    standard cost; the largest saving is applied. On equal savings the
    incentive evaluated first wins.

    Args:
        gross: Gross annual salary; negative values are treated as zero
        profile: Hired-worker profile (age, sex, disability, unemployment, ...)

    Returns:
        EmployerCostResult with the ranked candidate list
    """
    gross = max(0.0, float(gross))
    contribution, insurance, severance = employer_components(gross)
    standard_cost = gross + contribution + insurance + severance

    basis = CostBasis(
        gross=gross,
        employer_contribution=contribution,
        standard_total_cost=standard_cost,
        region=profile.region,
    )
    candidates = [
        c.model_copy(update={"savings": round_money(c.savings)})
        for c in rank_candidates(profile, basis)
    ]
    best = select_best(candidates)
    savings = best.savings if best else 0.0
    final_cost = standard_cost - savings

    if best:
        logger.debug(f"best incentive {best.id} of {len(candidates)}: saves {savings:.2f}")
    else:
        logger.debug("no eligible incentive for profile")

    return EmployerCostResult(
        gross_salary=gross,
        standard_cost=round_money(standard_cost),
        applied_incentive=best,
        final_cost=round_money(final_cost),
        cost_multiplier=round(final_cost / gross, 2) if gross > 0 else 0.0,
        candidates=candidates,
    )


def simulate_scenario(
    gross: float,
    profile: EmployeeProfile,
    region: Optional[str] = None,
    municipality: Optional[str] = DEFAULT_MUNICIPALITY,
    manual_municipal_rate: float = DEFAULT_MANUAL_MUNICIPAL_RATE,
    *,
    registry: Optional[JurisdictionRegistry] = None,
) -> ScenarioResult:
    """Run the employee net calculation (no incentive) and the employer auto-selection.

    The region defaults to the profile's region, then to DEFAULT_REGION.
    """
    employee = calculate_salary(
        gross,
        IncentiveType.NONE,
        region or profile.region or DEFAULT_REGION,
        municipality,
        manual_municipal_rate,
        registry=registry,
    )
    employer = calculate_employer_cost(gross, profile)
    return ScenarioResult(employee=employee, employer=employer)

"""Pydantic schemas for salary-calc data and results.

Jurisdiction tables (YAML) are validated through these models when the
registry is built. Result objects are frozen: one instance per calculation
call, never mutated afterwards.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Brackets
# =============================================================================


class TaxBracket(BaseModel):
    """Single progressive bracket.

    The rate applies only to the slice of income between the previous
    bracket's upper bound and this one.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    up_to: Optional[float] = Field(default=None, gt=0, description="Upper bound (None = no limit)")
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")

    @property
    def upper_bound(self) -> float:
        return float("inf") if self.up_to is None else self.up_to


def check_brackets(brackets: List[TaxBracket]) -> None:
    """Validate that brackets cover [0, inf) without gaps or overlaps.

    Raises:
        ValueError: If bounds are not strictly increasing or the last
            bracket is not open-ended.
    """
    if not brackets:
        raise ValueError("bracket list is empty")

    previous = 0.0
    for index, bracket in enumerate(brackets):
        is_last = index == len(brackets) - 1
        if bracket.up_to is None and not is_last:
            raise ValueError(f"bracket {index} is open-ended but is not the last one")
        if bracket.upper_bound <= previous:
            raise ValueError(
                f"bracket {index} upper bound {bracket.upper_bound} "
                f"is not above previous bound {previous}"
            )
        previous = bracket.upper_bound

    if brackets[-1].up_to is not None:
        raise ValueError("last bracket must be open-ended (up_to: null)")


# =============================================================================
# Jurisdiction rules
# =============================================================================


class DependentCredit(BaseModel):
    """Fixed credit per dependent child, only below an income ceiling."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["dependent_credit"] = "dependent_credit"
    amount_per_dependent: float = Field(..., ge=0)
    income_ceiling: float = Field(..., ge=0)


class LowIncomeOverride(BaseModel):
    """Up to the threshold the lowest bracket rate applies to the whole income."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["low_income_override"] = "low_income_override"
    income_threshold: float = Field(..., ge=0)


class MidBandFixedDeduction(BaseModel):
    """Fixed amount subtracted from the surtax for lower < income <= upper."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["mid_band_fixed_deduction"] = "mid_band_fixed_deduction"
    lower: float = Field(..., ge=0)
    upper: float = Field(..., ge=0)
    amount: float = Field(..., ge=0)

    @model_validator(mode="after")
    def check_band(self) -> "MidBandFixedDeduction":
        if self.upper <= self.lower:
            raise ValueError(f"band upper ({self.upper}) must exceed lower ({self.lower})")
        return self


Adjustment = Annotated[
    Union[DependentCredit, LowIncomeOverride, MidBandFixedDeduction],
    Field(discriminator="kind"),
]

RegionalMethod = Literal["flat", "flat_above_threshold", "brackets", "brackets_with_adjustments"]


class RegionalRule(BaseModel):
    """Regional surtax rule (addizionale regionale)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    method: RegionalMethod
    rate: Optional[float] = Field(default=None, ge=0, le=1, description="Flat rate as decimal")
    exemption_threshold: Optional[float] = Field(default=None, ge=0)
    brackets: List[TaxBracket] = Field(default_factory=list)
    adjustments: List[Adjustment] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_method(self) -> "RegionalRule":
        if self.method in ("flat", "flat_above_threshold"):
            if self.rate is None:
                raise ValueError(f"method '{self.method}' requires 'rate'")
            if self.method == "flat_above_threshold" and self.exemption_threshold is None:
                raise ValueError("method 'flat_above_threshold' requires 'exemption_threshold'")
            if any(isinstance(a, LowIncomeOverride) for a in self.adjustments):
                raise ValueError("low_income_override only applies to bracket methods")
        else:
            check_brackets(self.brackets)
            if self.method == "brackets_with_adjustments" and not self.adjustments:
                raise ValueError("method 'brackets_with_adjustments' requires adjustments")
        return self

    def adjustments_of(self, kind: type) -> list:
        return [a for a in self.adjustments if isinstance(a, kind)]


class MunicipalRule(BaseModel):
    """Municipal surtax rule (addizionale comunale)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    exemption_threshold: float = Field(default=0, ge=0)
    is_progressive: bool = False
    flat_rate: Optional[float] = Field(default=None, ge=0, le=1)
    brackets: List[TaxBracket] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_shape(self) -> "MunicipalRule":
        if self.is_progressive:
            check_brackets(self.brackets)
        elif self.flat_rate is None:
            raise ValueError("non-progressive municipal rule requires 'flat_rate'")
        return self


class ProvincialCapital(BaseModel):
    """Province capital entry of the province -> region index."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    code: str = Field(..., min_length=2, max_length=2, description="Province code (sigla)")
    region: str = Field(..., min_length=1)


# =============================================================================
# Incentives and profiles
# =============================================================================


class IncentiveType(str, Enum):
    """Incentive chosen by the caller for the single-choice calculation."""

    NONE = "NONE"
    UNDER_30 = "UNDER_30"
    UNDER_36 = "UNDER_36"
    DONNE_SVANTAGGIATE = "DONNE_SVANTAGGIATE"
    APPRENDISTATO = "APPRENDISTATO"
    SUD = "SUD"


class IncentiveCandidate(BaseModel):
    """An evaluated incentive with its savings for one calculation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    label: str
    savings: float = Field(..., ge=0)
    description: str = ""


class EmployeeProfile(BaseModel):
    """Hired-worker profile used by the incentive auto-selector."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    age: int = Field(..., ge=0)
    sex: Literal["M", "F"] = "M"
    disability_pct: float = Field(default=0, ge=0, le=100)
    unemployment_months: int = Field(default=0, ge=0)
    region: str = ""
    has_had_permanent_contract: bool = False
    is_apprenticeship: bool = False


# =============================================================================
# Results
# =============================================================================


class SalaryResult(BaseModel):
    """Net pay and employer cost for one gross salary."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_salary: float = Field(..., ge=0, description="RAL")
    monthly_gross: float = Field(..., ge=0, description="Gross over 13 monthly payments")

    # Employee side
    employee_contribution: float = Field(..., ge=0)
    taxable_income: float = Field(..., ge=0)
    gross_income_tax: float = Field(..., ge=0)
    work_deduction: float = Field(..., ge=0)
    wedge_credit: float = Field(..., ge=0, description="Fiscal-wedge tax credit")
    total_deductions: float = Field(..., ge=0)
    net_income_tax: float = Field(..., ge=0)
    regional_surtax: float = Field(..., ge=0)
    municipal_surtax: float = Field(..., ge=0)
    wedge_bonus: float = Field(..., ge=0, description="Fiscal-wedge cash bonus")
    supplementary_bonus: float = Field(..., ge=0)
    employee_total_tax: float = Field(..., description="Gross minus annual net")
    annual_net: float
    monthly_net: float

    # Employer side
    employer_contribution: float = Field(..., ge=0, description="After incentive savings")
    insurance_premium: float = Field(..., ge=0)
    severance_accrual: float = Field(..., ge=0)
    employer_total_cost: float = Field(..., ge=0)

    # Meta
    incentive_applied: IncentiveType
    incentive: Optional[IncentiveCandidate] = None
    company_savings: float = Field(..., ge=0)
    selected_region: str
    selected_municipality: str


class EmployerCostResult(BaseModel):
    """Employer cost with the best incentive the profile is eligible for."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_salary: float = Field(..., ge=0)
    standard_cost: float = Field(..., ge=0)
    applied_incentive: Optional[IncentiveCandidate] = None
    final_cost: float
    cost_multiplier: float = Field(..., description="Final cost over gross salary")
    candidates: List[IncentiveCandidate] = Field(
        default_factory=list, description="Every eligible incentive, best first"
    )


class ScenarioResult(BaseModel):
    """Employee net pay and employer cost for the same gross salary."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    employee: SalaryResult
    employer: EmployerCostResult

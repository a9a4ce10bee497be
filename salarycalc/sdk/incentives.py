"""Employer hiring incentives (agevolazioni contributive).

One rule table serves both calculation paths:

- Single choice: the caller picks an IncentiveType from the dropdown and
  only the rule answering to that choice is evaluated (evaluate_choice).
- Auto-selection: every rule whose eligibility predicate accepts the
  employee profile is evaluated, and the largest saving wins
  (rank_candidates / select_best).

Rule order in INCENTIVE_RULES is significant: candidates are sorted by
savings with a stable sort, so on equal savings the rule listed first wins.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from .jurisdictions import normalize_name
from .schemas import EmployeeProfile, IncentiveCandidate, IncentiveType

logger = logging.getLogger(__name__)


# Employer-side contribution rates
EMPLOYER_CONTRIBUTION_RATE = 0.30     # INPS, average for the tertiary sector
APPRENTICE_EMPLOYER_RATE = 0.116      # INPS for apprenticeship contracts

# Caps (EUR per year)
CAP_YOUTH_NORTH = 6000
CAP_YOUTH_SOUTH = 7800
CAP_WOMEN_2025 = 8000
CAP_UNDER_30 = 3000
CAP_SOUTH_DECONTRIBUTION = 1740

DISABILITY_PCT_THRESHOLD = 79         # exclusive
DISABILITY_REFUND_RATE = 0.70
APPRENTICESHIP_COST_SAVING_RATE = 0.13
MIN_UNEMPLOYMENT_MONTHS = 12

# Mezzogiorno regions for incentives
SOUTH_REGIONS = frozenset({
    "ABRUZZO", "BASILICATA", "CALABRIA", "CAMPANIA",
    "MOLISE", "PUGLIA", "SARDEGNA", "SICILIA",
})
# Macro-area names accepted in place of a region
SOUTH_ALIASES = frozenset({"SUD", "MEZZOGIORNO"})


def is_south(region: Optional[str]) -> bool:
    """True for a Mezzogiorno region (name compared after normalization)."""
    key = normalize_name(region)
    return key in SOUTH_REGIONS or key in SOUTH_ALIASES


@dataclass(frozen=True)
class CostBasis:
    """Employer-side amounts an incentive's savings are computed from."""

    gross: float
    employer_contribution: float    # standard, before any incentive
    standard_total_cost: float
    region: str = ""

    @property
    def is_south(self) -> bool:
        return is_south(self.region)


@dataclass(frozen=True)
class IncentiveRule:
    """A single incentive scheme.

    choice: dropdown value this rule answers to (None = auto-selection only)
    eligible: profile predicate (None = never auto-selected)
    replaces_base: savings come from a reduced contribution rate rather
        than a capped discount
    """

    id: str
    label: str
    description: str
    savings: Callable[[CostBasis], float]
    choice: Optional[IncentiveType] = None
    eligible: Optional[Callable[[EmployeeProfile], bool]] = None
    replaces_base: bool = False

    def evaluate(self, basis: CostBasis) -> IncentiveCandidate:
        return IncentiveCandidate(
            id=self.id,
            label=self.label,
            savings=max(0.0, self.savings(basis)),
            description=self.description,
        )


def _youth_cap(basis: CostBasis) -> float:
    return CAP_YOUTH_SOUTH if basis.is_south else CAP_YOUTH_NORTH


def _young_first_hire(profile: EmployeeProfile, max_age: int) -> bool:
    return profile.age < max_age and not profile.has_had_permanent_contract


def _long_term_unemployed_woman(profile: EmployeeProfile) -> bool:
    return profile.sex == "F" and profile.unemployment_months >= MIN_UNEMPLOYMENT_MONTHS


INCENTIVE_RULES = (
    IncentiveRule(
        id="DISABILI_70",
        label="Incentivo Disabilità (>79%)",
        description="Restituzione del 70% della RAL lorda",
        savings=lambda b: b.gross * DISABILITY_REFUND_RATE,
        eligible=lambda p: p.disability_pct > DISABILITY_PCT_THRESHOLD,
    ),
    IncentiveRule(
        id="APPRENDISTATO",
        label="Apprendistato",
        description="Aliquota contributiva ridotta all'11,6%",
        savings=lambda b: b.employer_contribution - b.gross * APPRENTICE_EMPLOYER_RATE,
        choice=IncentiveType.APPRENDISTATO,
        replaces_base=True,
    ),
    IncentiveRule(
        id="APPRENDISTATO_PROFESSIONALIZZANTE",
        label="Apprendistato Professionalizzante",
        description="Aliquota contributiva ridotta strutturale",
        savings=lambda b: b.standard_total_cost * APPRENTICESHIP_COST_SAVING_RATE,
        eligible=lambda p: p.age <= 29 and p.is_apprenticeship,
    ),
    IncentiveRule(
        id="UNDER_35_2025",
        label="Bonus Giovani 2025 (Under 35)",
        description="Esonero 100% contributi fino a 6.000€ (7.800€ al Sud)",
        savings=lambda b: min(b.employer_contribution, _youth_cap(b)),
        choice=IncentiveType.UNDER_36,
        eligible=lambda p: _young_first_hire(p, 35),
    ),
    IncentiveRule(
        id="UNDER_30_STRUTTURALE",
        label="Incentivo Under 30 (Strutturale)",
        description="Esonero 50% contributi fino a 3.000€",
        savings=lambda b: min(b.employer_contribution * 0.50, CAP_UNDER_30),
        choice=IncentiveType.UNDER_30,
        eligible=lambda p: _young_first_hire(p, 30),
    ),
    IncentiveRule(
        id="DONNE_V2",
        label="Donne Svantaggiate 2025",
        description="Esonero 100% contributi fino a 8.000€",
        savings=lambda b: min(b.employer_contribution, CAP_WOMEN_2025),
        choice=IncentiveType.DONNE_SVANTAGGIATE,
        eligible=_long_term_unemployed_woman,
    ),
    IncentiveRule(
        id="DONNE_STRUTTURALE",
        label="Donne Svantaggiate (Strutturale)",
        description="Esonero 50% contributi senza tetto massimo",
        savings=lambda b: b.employer_contribution * 0.50,
        eligible=_long_term_unemployed_woman,
    ),
    IncentiveRule(
        id="OVER_50",
        label="Incentivo Over 50",
        description="Esonero 50% contributi per 18 mesi (indeterminato)",
        savings=lambda b: b.employer_contribution * 0.50,
        eligible=lambda p: p.age >= 50 and p.unemployment_months >= MIN_UNEMPLOYMENT_MONTHS,
    ),
    IncentiveRule(
        id="DECONTRIBUZIONE_SUD",
        label="Decontribuzione Sud",
        description="Esonero contributivo fino a 1.740€ (solo Mezzogiorno)",
        # Outside the South the choice is kept but yields nothing
        savings=lambda b: min(b.employer_contribution, CAP_SOUTH_DECONTRIBUTION) if b.is_south else 0.0,
        choice=IncentiveType.SUD,
    ),
)


def coerce_incentive(value: Union[IncentiveType, str, None]) -> IncentiveType:
    """Turn a dropdown value into an IncentiveType; unknown values become NONE."""
    if isinstance(value, IncentiveType):
        return value
    if not value:
        return IncentiveType.NONE
    try:
        return IncentiveType(str(value).strip().upper())
    except ValueError:
        logger.warning(f"unknown incentive '{value}', treating as NONE")
        return IncentiveType.NONE


def rule_for_choice(choice: IncentiveType) -> Optional[IncentiveRule]:
    """Rule answering to a dropdown choice (None for NONE)."""
    for rule in INCENTIVE_RULES:
        if rule.choice is not None and rule.choice == choice:
            return rule
    return None


def evaluate_choice(choice: IncentiveType, basis: CostBasis) -> Optional[IncentiveCandidate]:
    """Evaluate the single incentive the caller selected.

    No eligibility check and no redirection: an inapplicable choice
    yields a candidate with zero savings.
    """
    rule = rule_for_choice(choice)
    if rule is None:
        return None
    candidate = rule.evaluate(basis)
    logger.debug(f"incentive {rule.id}: savings {candidate.savings:.2f}")
    return candidate


def eligible_rules(profile: EmployeeProfile) -> List[IncentiveRule]:
    """Rules the profile qualifies for, in table order."""
    return [r for r in INCENTIVE_RULES if r.eligible is not None and r.eligible(profile)]


def rank_candidates(profile: EmployeeProfile, basis: CostBasis) -> List[IncentiveCandidate]:
    """Evaluate every eligible incentive, best savings first.

    The sort is stable, so equal savings keep table order.
    """
    candidates = [rule.evaluate(basis) for rule in eligible_rules(profile)]
    return sorted(candidates, key=lambda c: c.savings, reverse=True)


def select_best(candidates: List[IncentiveCandidate]) -> Optional[IncentiveCandidate]:
    """First candidate of a ranked list, or None."""
    return candidates[0] if candidates else None

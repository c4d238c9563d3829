"""Contribution normalization and retirement projection math.

Every surface of the planner (saved state, live preview) goes through these
functions so the reported percent and projection never drift apart.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

MAX_PERCENT = 50.0
MAX_DOLLAR = 5000.0

HIGH_SAVINGS_PERCENT = 20.0
LOW_SAVINGS_PERCENT = 5.0


class ContributionKind(str, Enum):
    PERCENT = "percent"
    DOLLAR = "dollar"


class SavingsHint(str, Enum):
    HIGH = "high"
    LOW = "low"


class ContributionSelection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ContributionKind
    value: float


class AccountSnapshot(BaseModel):
    """Account facts used as projection inputs. None means "not known yet"."""

    model_config = ConfigDict(frozen=True)

    age: Optional[float] = None
    salary: Optional[float] = None
    pay_periods_per_year: Optional[float] = None
    current_balance: Optional[float] = None
    ytd_contribution: Optional[float] = None  # display only


class ProjectionAssumptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    retirement_age: Optional[float] = 65
    annual_return_rate: float = 0.05


class NormalizedContribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    equivalent_percent: float
    per_paycheck_amount: float
    yearly_amount: float


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    projected_balance: float


class ContributionPreview(BaseModel):
    model_config = ConfigDict(frozen=True)

    normalized: NormalizedContribution
    projection: Optional[ProjectionResult]
    projection_plus_one: Optional[ProjectionResult]
    delta: Optional[float]
    hint: Optional[SavingsHint]


def normalize_contribution(
    selection: ContributionSelection, snapshot: AccountSnapshot
) -> NormalizedContribution:
    """
    Express a selection as {equivalent percent, per-paycheck $, yearly $}.

    When salary or pay periods are missing or <= 0 every dollar figure is 0,
    and a dollar selection reports 0%. A percent selection always reports its
    own value. Nothing is rounded here.
    """
    salary = snapshot.salary or 0.0
    pay_periods = snapshot.pay_periods_per_year or 0.0
    is_percent = selection.kind == ContributionKind.PERCENT

    if salary <= 0 or pay_periods <= 0:
        return NormalizedContribution(
            equivalent_percent=selection.value if is_percent else 0.0,
            per_paycheck_amount=0.0,
            yearly_amount=0.0,
        )

    if is_percent:
        yearly = salary * (selection.value / 100)
        return NormalizedContribution(
            equivalent_percent=selection.value,
            per_paycheck_amount=yearly / pay_periods,
            yearly_amount=yearly,
        )

    yearly = selection.value * pay_periods
    return NormalizedContribution(
        equivalent_percent=(yearly / salary) * 100,
        per_paycheck_amount=selection.value,
        yearly_amount=yearly,
    )


def annuity_factor(rate: float, years: float) -> float:
    """Future value of `years` level yearly payments of 1 at `rate`."""
    if rate == 0:
        return years
    return ((1 + rate) ** years - 1) / rate


def project_retirement_balance(
    snapshot: AccountSnapshot,
    assumptions: ProjectionAssumptions,
    yearly_contribution_amount: float,
) -> Optional[ProjectionResult]:
    """
    Project the balance at retirement age.

    Returns None (indeterminate) when age, retirement age, salary or current
    balance is unknown, so callers can tell "no input yet" from a zero balance.

    At or past retirement age the result is the current balance plus one more
    year's contribution, with no growth applied.
    """
    if (
        snapshot.age is None
        or assumptions.retirement_age is None
        or snapshot.salary is None
        or snapshot.current_balance is None
    ):
        return None

    years = assumptions.retirement_age - snapshot.age
    if years <= 0:
        return ProjectionResult(
            projected_balance=snapshot.current_balance + yearly_contribution_amount
        )

    r = assumptions.annual_return_rate
    future_balance = snapshot.current_balance * (1 + r) ** years
    future_contributions = yearly_contribution_amount * annuity_factor(r, years)
    return ProjectionResult(projected_balance=future_balance + future_contributions)


def savings_hint(equivalent_percent: float) -> Optional[SavingsHint]:
    if equivalent_percent > HIGH_SAVINGS_PERCENT:
        return SavingsHint.HIGH
    if 0 < equivalent_percent < LOW_SAVINGS_PERCENT:
        return SavingsHint.LOW
    return None


def preview_contribution(
    selection: ContributionSelection,
    snapshot: AccountSnapshot,
    assumptions: ProjectionAssumptions,
    increase_percent: float = 1.0,
) -> ContributionPreview:
    """
    Everything the contribution form shows for a selection:
      1) the normalized selection,
      2) the projection at that selection,
      3) the projection with the rate raised by `increase_percent` points,
      4) the difference between the two, and a savings-rate hint.
    """
    normalized = normalize_contribution(selection, snapshot)
    projection = project_retirement_balance(
        snapshot, assumptions, normalized.yearly_amount
    )

    raised = normalize_contribution(
        ContributionSelection(
            kind=ContributionKind.PERCENT,
            value=normalized.equivalent_percent + increase_percent,
        ),
        snapshot,
    )
    projection_plus_one = project_retirement_balance(
        snapshot, assumptions, raised.yearly_amount
    )

    delta = None
    if projection is not None and projection_plus_one is not None:
        delta = projection_plus_one.projected_balance - projection.projected_balance

    return ContributionPreview(
        normalized=normalized,
        projection=projection,
        projection_plus_one=projection_plus_one,
        delta=delta,
        hint=savings_hint(normalized.equivalent_percent),
    )


__all__ = [
    "MAX_PERCENT",
    "MAX_DOLLAR",
    "HIGH_SAVINGS_PERCENT",
    "LOW_SAVINGS_PERCENT",
    "ContributionKind",
    "SavingsHint",
    "ContributionSelection",
    "AccountSnapshot",
    "ProjectionAssumptions",
    "NormalizedContribution",
    "ProjectionResult",
    "ContributionPreview",
    "normalize_contribution",
    "annuity_factor",
    "project_retirement_balance",
    "savings_hint",
    "preview_contribution",
]

"""Data contracts for the contribution endpoints."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from planner.core.contribution_math import (
    MAX_DOLLAR,
    MAX_PERCENT,
    AccountSnapshot,
    ContributionKind,
    ContributionPreview,
    ContributionSelection,
    NormalizedContribution,
    ProjectionAssumptions,
    ProjectionResult,
)
from planner.core.exceptions import ContributionValidationError
from planner.core.store import ContributionState


def as_number(value: Any) -> Optional[float]:
    """Coerce JSON input to a finite float, or None when it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        # huge JSON integers overflow instead of becoming inf
        number = float(value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


# (payload key, state field, accept predicate)
_SNAPSHOT_RULES = (
    ("age", "age", lambda n: 0 < n < 100),
    ("salary", "salary", lambda n: n >= 0),
    ("ytdContribution", "ytd_contribution", lambda n: n >= 0),
    ("currentBalance", "current_balance", lambda n: n >= 0),
    ("payPeriodsPerYear", "pay_periods_per_year", lambda n: 0 < n <= 52),
)


class ContributionUpdate(BaseModel):
    """
    Raw save/preview payload.

    Fields stay loosely typed so that bad values produce the user-facing
    messages below instead of a generic schema error.
    """

    model_config = ConfigDict(extra="ignore")

    contributionType: Any = None
    contributionValue: Any = None
    age: Any = None
    salary: Any = None
    ytdContribution: Any = None
    currentBalance: Any = None
    payPeriodsPerYear: Any = None

    def to_selection(self) -> ContributionSelection:
        try:
            kind = ContributionKind(self.contributionType)
        except ValueError:
            raise ContributionValidationError(
                "Invalid contributionType", field="contributionType"
            ) from None

        value = as_number(self.contributionValue)
        if value is None or value < 0:
            raise ContributionValidationError(
                "Invalid contributionValue", field="contributionValue"
            )
        if kind == ContributionKind.PERCENT and value > MAX_PERCENT:
            raise ContributionValidationError("Percent too high", field="contributionValue")
        if kind == ContributionKind.DOLLAR and value > MAX_DOLLAR:
            raise ContributionValidationError(
                "Dollar amount too high", field="contributionValue"
            )

        return ContributionSelection(kind=kind, value=value)

    def snapshot_changes(self) -> Tuple[Dict[str, float], List[str]]:
        """Return (valid snapshot updates keyed by state field, ignored payload keys)."""
        changes: Dict[str, float] = {}
        ignored: List[str] = []
        for key, field, accept in _SNAPSHOT_RULES:
            raw = getattr(self, key)
            if raw is None:
                continue
            number = as_number(raw)
            if number is not None and accept(number):
                changes[field] = number
            else:
                ignored.append(key)
        return changes, ignored


class AssumptionsOut(BaseModel):
    retirementAge: Optional[float]
    annualReturnPercent: float

    @classmethod
    def from_assumptions(cls, assumptions: ProjectionAssumptions) -> "AssumptionsOut":
        return cls(
            retirementAge=assumptions.retirement_age,
            annualReturnPercent=assumptions.annual_return_rate * 100,
        )


def _balance(result: Optional[ProjectionResult]) -> Optional[float]:
    return result.projected_balance if result is not None else None


class ContributionStateOut(BaseModel):
    """Saved state as stored, in the UI's field names."""

    userId: str
    age: float
    salary: float
    payPeriodsPerYear: float
    ytdContribution: float
    currentBalance: float
    contributionType: ContributionKind
    contributionValue: float

    @classmethod
    def from_state(cls, state: ContributionState) -> "ContributionStateOut":
        return cls(
            userId=state.user_id,
            age=state.age,
            salary=state.salary,
            payPeriodsPerYear=state.pay_periods_per_year,
            ytdContribution=state.ytd_contribution,
            currentBalance=state.current_balance,
            contributionType=state.contribution_type,
            contributionValue=state.contribution_value,
        )


class ContributionResponse(ContributionStateOut):
    """GET /api/contribution: saved state plus figures derived from it."""

    currentPercent: float
    perPaycheckAmount: float
    yearlyAmount: float
    projectedBalance: Optional[float]
    assumptions: AssumptionsOut

    @classmethod
    def build(
        cls,
        state: ContributionState,
        normalized: NormalizedContribution,
        projection: Optional[ProjectionResult],
        assumptions: ProjectionAssumptions,
    ) -> "ContributionResponse":
        return cls(
            **ContributionStateOut.from_state(state).model_dump(),
            currentPercent=normalized.equivalent_percent,
            perPaycheckAmount=normalized.per_paycheck_amount,
            yearlyAmount=normalized.yearly_amount,
            projectedBalance=_balance(projection),
            assumptions=AssumptionsOut.from_assumptions(assumptions),
        )


class SaveResponse(BaseModel):
    ok: bool = True
    contributionState: ContributionStateOut


class PreviewResponse(BaseModel):
    """POST /api/contribution/preview: live numbers for an unsaved selection."""

    contributionType: ContributionKind
    contributionValue: float
    equivalentPercent: float
    perPaycheckAmount: float
    yearlyAmount: float
    projectedBalance: Optional[float]
    projectedBalancePlusOne: Optional[float]
    delta: Optional[float]
    hint: Optional[str] = Field(None, description="'high', 'low' or null")
    assumptions: AssumptionsOut

    @classmethod
    def build(
        cls,
        selection: ContributionSelection,
        preview: ContributionPreview,
        assumptions: ProjectionAssumptions,
    ) -> "PreviewResponse":
        return cls(
            contributionType=selection.kind,
            contributionValue=selection.value,
            equivalentPercent=preview.normalized.equivalent_percent,
            perPaycheckAmount=preview.normalized.per_paycheck_amount,
            yearlyAmount=preview.normalized.yearly_amount,
            projectedBalance=_balance(preview.projection),
            projectedBalancePlusOne=_balance(preview.projection_plus_one),
            delta=preview.delta,
            hint=preview.hint.value if preview.hint is not None else None,
            assumptions=AssumptionsOut.from_assumptions(assumptions),
        )


def snapshot_with_overrides(
    state: ContributionState, changes: Dict[str, float]
) -> AccountSnapshot:
    return state.snapshot().model_copy(update=changes)

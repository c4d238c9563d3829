"""In-memory contribution store owned by the application instance."""

from __future__ import annotations

import threading
from typing import Optional

from pydantic import BaseModel, ConfigDict

from planner.core.contribution_math import (
    AccountSnapshot,
    ContributionKind,
    ContributionSelection,
)


class ContributionState(BaseModel):
    """Saved selection plus the account snapshot it was saved against."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    age: float
    salary: float
    pay_periods_per_year: float
    ytd_contribution: float
    contribution_type: ContributionKind
    contribution_value: float
    current_balance: float

    def selection(self) -> ContributionSelection:
        return ContributionSelection(
            kind=self.contribution_type, value=self.contribution_value
        )

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            age=self.age,
            salary=self.salary,
            pay_periods_per_year=self.pay_periods_per_year,
            current_balance=self.current_balance,
            ytd_contribution=self.ytd_contribution,
        )


# mock account the demo starts from
DEFAULT_STATE = ContributionState(
    user_id="mock-user-123",
    age=30,
    salary=120000,
    pay_periods_per_year=24,  # semi-monthly
    ytd_contribution=8500,
    contribution_type=ContributionKind.PERCENT,
    contribution_value=10,
    current_balance=15000,
)

SNAPSHOT_FIELDS = (
    "age",
    "salary",
    "pay_periods_per_year",
    "ytd_contribution",
    "current_balance",
)


class ContributionStore:
    """Holds one ContributionState; reads and writes are serialized."""

    def __init__(self, initial: Optional[ContributionState] = None) -> None:
        self._state = initial if initial is not None else DEFAULT_STATE
        self._lock = threading.Lock()

    def get(self) -> ContributionState:
        with self._lock:
            return self._state

    def save(
        self, selection: ContributionSelection, **snapshot_changes: float
    ) -> ContributionState:
        """Replace the selection and any given snapshot fields; return the new state."""
        unknown = set(snapshot_changes) - set(SNAPSHOT_FIELDS)
        if unknown:
            raise TypeError(f"unknown snapshot fields: {sorted(unknown)}")

        with self._lock:
            self._state = self._state.model_copy(
                update={
                    "contribution_type": selection.kind,
                    "contribution_value": selection.value,
                    **snapshot_changes,
                }
            )
            return self._state

    def reset(self) -> ContributionState:
        with self._lock:
            self._state = DEFAULT_STATE
            return self._state

"""Planner exception hierarchy."""

from __future__ import annotations


class PlannerError(Exception):
    """Base exception for all planner errors."""


class ContributionValidationError(PlannerError):
    """A contribution request was rejected; `message` is shown to the user."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)

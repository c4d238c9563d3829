"""HTTP routes for the Flask API."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from planner.core.config import Settings
from planner.core.contribution_math import (
    normalize_contribution,
    preview_contribution,
    project_retirement_balance,
)
from planner.core.exceptions import ContributionValidationError
from planner.core.logging import get_logger
from planner.core.store import ContributionStore
from planner.schemas.contribution import (
    ContributionResponse,
    ContributionStateOut,
    ContributionUpdate,
    PreviewResponse,
    SaveResponse,
    snapshot_with_overrides,
)

api_bp = Blueprint("api", __name__)
logger = get_logger(__name__)


def _settings() -> Settings:
    return current_app.extensions["planner.settings"]


def _store() -> ContributionStore:
    return current_app.extensions["planner.store"]


def _read_update() -> ContributionUpdate:
    raw_payload = request.get_json(force=True, silent=False)
    if not isinstance(raw_payload, dict):
        raise ContributionValidationError("Request body must be a JSON object")
    return ContributionUpdate.model_validate(raw_payload)


@api_bp.errorhandler(ContributionValidationError)
def _handle_contribution_error(exc: ContributionValidationError):
    logger.warning("contribution_rejected", error=exc.message, field=exc.field)
    return jsonify({"error": exc.message}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(BadRequest)
def _handle_bad_json(exc: BadRequest):
    return jsonify({"error": "Malformed JSON body"}), HTTPStatus.BAD_REQUEST


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    return jsonify({"status": "ok"})


@api_bp.get("/contribution")
def get_contribution() -> Any:
    """Saved selection, snapshot and the figures derived from them."""
    state = _store().get()
    assumptions = _settings().assumptions()

    snapshot = state.snapshot()
    normalized = normalize_contribution(state.selection(), snapshot)
    projection = project_retirement_balance(
        snapshot, assumptions, normalized.yearly_amount
    )

    response = ContributionResponse.build(state, normalized, projection, assumptions)
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/contribution")
def save_contribution() -> Any:
    """Persist a new selection and any valid snapshot fields sent with it."""
    payload = _read_update()
    selection = payload.to_selection()
    changes, ignored = payload.snapshot_changes()
    if ignored:
        logger.info("snapshot_fields_ignored", fields=ignored)

    state = _store().save(selection, **changes)
    logger.info(
        "contribution_saved",
        user_id=state.user_id,
        contribution_type=state.contribution_type.value,
        contribution_value=state.contribution_value,
        updated_fields=sorted(changes),
    )

    response = SaveResponse(contributionState=ContributionStateOut.from_state(state))
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/contribution/preview")
def preview() -> Any:
    """Live numbers for a selection that has not been saved."""
    payload = _read_update()
    selection = payload.to_selection()
    changes, _ = payload.snapshot_changes()

    snapshot = snapshot_with_overrides(_store().get(), changes)
    assumptions = _settings().assumptions()
    result = preview_contribution(selection, snapshot, assumptions)

    response = PreviewResponse.build(selection, result, assumptions)
    body: Dict[str, Any] = response.model_dump(mode="json")
    return jsonify(body)

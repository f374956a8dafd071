"""Filter endpoints for dashboard."""

from __future__ import annotations

from flask import jsonify, request

from . import bp, get_datastore
from .helpers import FilterRequestError, apply_update, build_state
from onboard.utils.filter_params import ALL, OnboardingStatus


@bp.route("/filters/options", methods=["GET"])
def filter_options():
    """Sidebar choices: every present value per facet, each led by "All"."""
    datastore = get_datastore()
    options = {name: [ALL] + values for name, values in datastore.facet_options().items()}
    options["onboarding_status"] = [ALL] + [status.value for status in OnboardingStatus]

    summary = datastore.compute_summary()
    return jsonify(
        {
            "options": options,
            "dates": {"min": summary["date_min"], "max": summary["date_max"]},
            "rows": summary["rows"],
        }
    )


@bp.route("/filters/defaults", methods=["GET"])
def filter_defaults():
    return jsonify(get_datastore().default_state().to_dict())


@bp.route("/filters/update", methods=["POST"])
def filter_update():
    """Apply one filter change (or a reset) to the posted state."""
    datastore = get_datastore()
    payload = request.get_json(silent=True) or {}

    if payload.get("reset"):
        return jsonify(datastore.default_state().to_dict())

    current = payload.get("state") or {}
    if not isinstance(current, dict):
        raise FilterRequestError("state must be an object")
    if "dimension" not in payload:
        raise FilterRequestError("dimension is required")

    state = apply_update(build_state(current, datastore), payload["dimension"], payload.get("value"))
    return jsonify(state.to_dict())

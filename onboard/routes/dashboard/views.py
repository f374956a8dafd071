"""Dashboard index view."""

from __future__ import annotations

from flask import jsonify, request

from . import bp, get_charts, get_datastore, get_metrics
from .helpers import filtered_subset
from onboard.services.view import build_dashboard


def index():
    """Every artifact for the current filters in one payload."""
    datastore = get_datastore()
    state, filtered = filtered_subset(request.args, datastore)

    payload = build_dashboard(filtered, get_metrics(), get_charts())
    payload["filters"] = state.to_dict()
    payload["is_default"] = state.is_default(datastore.date_bounds)
    payload["total_rows"] = int(len(datastore.get()))
    return jsonify(payload)


bp.add_url_rule("/", view_func=index, methods=["GET"])

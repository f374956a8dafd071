"""Dashboard blueprint package."""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify

bp = Blueprint("dashboard", __name__)
logger = logging.getLogger("onboard")


def get_metrics():
    from flask import current_app

    return current_app.extensions["metrics"]


def get_datastore():
    from flask import current_app

    return current_app.extensions["datastore"]


def get_charts():
    from flask import current_app

    return current_app.config["CHARTS"]


from . import aggregates, filters, health, views  # noqa: E402,F401
from .helpers import FilterRequestError  # noqa: E402


@bp.errorhandler(FilterRequestError)
def bad_filter(exc: FilterRequestError):
    logger.warning("Rejected filter input: %s", exc)
    return jsonify({"error": str(exc)}), 400


__all__ = ["bp", "get_charts", "get_metrics", "get_datastore"]

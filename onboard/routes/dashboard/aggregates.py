"""Aggregate chart endpoints."""

from __future__ import annotations

from flask import jsonify, request

from . import bp, get_charts, get_datastore, get_metrics
from .helpers import filtered_subset
from onboard.services.aggregates import country_rates, scalar_metrics
from onboard.services.view import DISTRIBUTIONS, country_payload, distribution_payload


@bp.route("/metrics", methods=["GET"])
def metrics_data():
    state, filtered = filtered_subset(request.args, get_datastore())
    scalars = scalar_metrics(filtered)
    return jsonify(
        {
            "filters": state.to_dict(),
            "values": scalars.as_dict(),
            "cards": get_metrics().cards(scalars),
        }
    )


def _distribution(key: str):
    state, filtered = filtered_subset(request.args, get_datastore())
    table = DISTRIBUTIONS[key](filtered)
    payload = distribution_payload(table, get_charts().get(key, {}))
    payload["filters"] = state.to_dict()
    return jsonify(payload)


@bp.route("/channel-data", methods=["GET"])
def channel_data():
    return _distribution("channels")


@bp.route("/goals-data", methods=["GET"])
def goals_data():
    return _distribution("goals")


@bp.route("/learning-data", methods=["GET"])
def learning_data():
    return _distribution("learning")


@bp.route("/country-data", methods=["GET"])
def country_data():
    """Onboarding rate per world-map region."""
    state, filtered = filtered_subset(request.args, get_datastore())
    payload = country_payload(country_rates(filtered), get_charts().get("countries", {}))
    payload["filters"] = state.to_dict()
    return jsonify(payload)

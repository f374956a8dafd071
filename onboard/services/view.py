"""Filtered view engine: base dataset + filter state -> working subset -> artifacts."""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

import pandas as pd

from onboard.services.aggregates import (
    channel_distribution,
    country_rates,
    goals_distribution,
    learning_distribution,
    scalar_metrics,
)
from onboard.services.metrics import Metrics
from onboard.utils.filter_params import FilterState

# chart key -> aggregator producing its table
DISTRIBUTIONS: Dict[str, Callable[[pd.DataFrame], pd.DataFrame]] = {
    "channels": channel_distribution,
    "goals": goals_distribution,
    "learning": learning_distribution,
}


def apply_filters(base: pd.DataFrame, state: FilterState) -> pd.DataFrame:
    """Return a fresh frame of the rows of ``base`` passing ``state``.

    Recomputed in full on every call and never a view onto ``base``, so the
    caller may hand it to any aggregator without affecting the store.
    """
    return state.apply(base).copy()


def distribution_payload(table: pd.DataFrame, chart: Mapping[str, str]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "labels": table["label"].tolist(),
        "values": [int(v) for v in table["count"]],
        "title": chart.get("title", ""),
        "axis_label": chart.get("axis_label", ""),
    }
    if "percentage" in table.columns:
        payload["percentages"] = [float(v) for v in table["percentage"]]
    return payload


def country_payload(table: pd.DataFrame, chart: Mapping[str, str]) -> Dict[str, Any]:
    regions = [
        {
            "region": str(region),
            "total": int(row["total"]),
            "onboarded": int(row["onboarded"]),
            "rate": float(row["rate"]),
        }
        for region, row in table.iterrows()
    ]
    return {"regions": regions, "title": chart.get("title", ""), "limits": [0, 100]}


def build_dashboard(
    subset: pd.DataFrame,
    metrics: Metrics,
    charts: Mapping[str, Mapping[str, str]],
) -> Dict[str, Any]:
    """Run every aggregator over ``subset``; none depends on another."""
    out: Dict[str, Any] = {"metrics": metrics.cards(scalar_metrics(subset))}
    for key, aggregator in DISTRIBUTIONS.items():
        out[key] = distribution_payload(aggregator(subset), charts.get(key, {}))
    out["countries"] = country_payload(country_rates(subset), charts.get("countries", {}))
    return out


__all__ = [
    "DISTRIBUTIONS",
    "apply_filters",
    "build_dashboard",
    "country_payload",
    "distribution_payload",
]

"""Shared helper functions for dashboard routes."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence, Tuple

import pandas as pd

from onboard.services.datastore import DataStore
from onboard.services.view import apply_filters
from onboard.utils.filter_params import CATEGORICAL_COLUMNS, FilterState


class FilterRequestError(ValueError):
    """Filter input from a request that cannot be turned into a FilterState."""


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        parsed = pd.to_datetime(value, errors="coerce")
        return parsed.date() if pd.notna(parsed) else None


def _date_range(values: Mapping[str, Any], defaults: FilterState) -> Tuple[Optional[date], Optional[date]]:
    default_start, default_end = defaults.date_range
    start = _parse_date(values.get("start_date"))
    end = _parse_date(values.get("end_date"))
    return (start if start is not None else default_start, end if end is not None else default_end)


def _request_value(value: Any) -> Any:
    # an empty field in a request is an untouched control, never a category
    return None if value == "" else value


def build_state(values: Mapping[str, Any], datastore: DataStore) -> FilterState:
    """Build a ``FilterState`` from request args or a JSON object.

    Missing or empty values leave a dimension unset; dates that do
    not parse fall back to the dataset bounds.
    """
    state = datastore.default_state()
    try:
        for dimension in (*CATEGORICAL_COLUMNS, "onboarding_status"):
            value = _request_value(values.get(dimension))
            if value is not None:
                state = state.with_value(dimension, value)
    except ValueError as e:
        raise FilterRequestError(str(e)) from e
    return state.with_value("date_range", _date_range(values, state))


def apply_update(state: FilterState, dimension: Any, value: Any) -> FilterState:
    """Apply one filter-change event received as JSON."""
    if dimension == "date_range":
        if not isinstance(value, Sequence) or isinstance(value, str) or len(value) != 2:
            raise FilterRequestError("date_range expects [start_date, end_date]")
        if not all(v is None or isinstance(v, str) for v in value):
            raise FilterRequestError("date_range bounds must be ISO date strings or null")
        value = (_parse_date(value[0]), _parse_date(value[1]))
    else:
        value = _request_value(value)
    try:
        return state.with_value(str(dimension), value)
    except KeyError as e:
        raise FilterRequestError(e.args[0]) from e
    except ValueError as e:
        raise FilterRequestError(str(e)) from e


def filtered_subset(values: Mapping[str, Any], datastore: DataStore) -> Tuple[FilterState, pd.DataFrame]:
    state = build_state(values, datastore)
    return state, apply_filters(datastore.get(), state)


__all__ = [
    "FilterRequestError",
    "_parse_date",
    "apply_update",
    "build_state",
    "filtered_subset",
]

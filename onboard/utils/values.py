"""Absent-value rules shared by loading, filtering and aggregation."""

from __future__ import annotations

from typing import Any

import pandas as pd

# Literal markers the export tool writes for missing values
SENTINELS = ("NULL", "")


def is_absent(value: Any) -> bool:
    """True for None/NaN/NaT, the string ``"NULL"`` and the empty string."""
    if value is None:
        return True
    if isinstance(value, str):
        return value in SENTINELS
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def absent_mask(series: pd.Series) -> pd.Series:
    """Vectorised :func:`is_absent` over a column."""
    return series.isna() | series.isin(SENTINELS)


def present(series: pd.Series) -> pd.Series:
    """Return only the non-absent values of ``series``, keeping the index."""
    return series[~absent_mask(series)]


__all__ = ["SENTINELS", "absent_mask", "is_absent", "present"]

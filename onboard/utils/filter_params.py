# filter_params.py
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from onboard.utils.values import absent_mask

# Sidebar token for "no filter on this dimension"
ALL = "All"

DATE_COL = "user_registered"

# filter dimension -> record column it tests
CATEGORICAL_COLUMNS: Dict[str, str] = {
    "country": "onboarding_country",
    "subscription_type": "subscription_type",
    "channel": "onboarding_heard_from_label",
}

FILTER_DIMENSIONS = ("country", "subscription_type", "onboarding_status", "channel", "date_range")

DateRange = Tuple[Optional[date], Optional[date]]


class OnboardingStatus(str, Enum):
    ONBOARDED = "onboarded"
    NOT_ONBOARDED = "not-onboarded"

    @classmethod
    def parse(cls, value: Any) -> Optional["OnboardingStatus"]:
        """Map ``None``/``"All"`` to unset; reject anything outside the enum."""
        if value is None or value == ALL:
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            raise ValueError(f"unknown onboarding status: {value!r}") from None


def _category(value: Any) -> Optional[str]:
    if value is None or value == ALL:
        return None
    return str(value)


@dataclass(frozen=True)
class FilterState:
    country: Optional[str] = None
    subscription_type: Optional[str] = None
    onboarding_status: Optional[OnboardingStatus] = None
    channel: Optional[str] = None
    date_range: DateRange = (None, None)

    @classmethod
    def defaults(cls, bounds: DateRange) -> "FilterState":
        """Startup state: every categorical unset, dates spanning ``bounds``."""
        return cls(date_range=(bounds[0], bounds[1]))

    # -------- filter-change events --------
    def with_value(self, dimension: str, value: Any) -> "FilterState":
        """Return a copy with exactly one dimension changed."""
        if dimension not in FILTER_DIMENSIONS:
            raise KeyError(f"unknown filter dimension: {dimension!r}")
        if dimension == "onboarding_status":
            return replace(self, onboarding_status=OnboardingStatus.parse(value))
        if dimension == "date_range":
            start, end = value
            return replace(self, date_range=(start, end))
        return replace(self, **{dimension: _category(value)})

    def is_default(self, bounds: DateRange) -> bool:
        return self == FilterState.defaults(bounds)

    # -------- pandas path --------
    def predicate(self, df: pd.DataFrame) -> pd.Series:
        """
        Boolean mask of rows that pass every active filter.

        INTERSECTION (AND) of:
          - exact match on each set categorical (absent values never match)
          - onboarding status against the two-valued enum
          - registration date within [start, end] inclusive; null dates
            always fail, whatever the bounds
        """
        mask = pd.Series(True, index=df.index)

        for dimension, col in CATEGORICAL_COLUMNS.items():
            wanted = getattr(self, dimension)
            if wanted is None:
                continue
            values = df[col]
            mask &= ~absent_mask(values) & (values == wanted)

        if self.onboarding_status is not None:
            mask &= df["onboarded"] == self.onboarding_status.value

        dates = df[DATE_COL]
        mask &= dates.notna()
        start, end = self.date_range
        if start is not None:
            mask &= dates >= pd.Timestamp(start)
        if end is not None:
            mask &= dates <= pd.Timestamp(end)

        return mask.fillna(False).astype(bool)

    def apply(self, df: pd.DataFrame) -> pd.DataFrame:
        """Return the rows of ``df`` matching :meth:`predicate`, in order."""
        return df[self.predicate(df)]

    # -------- serialisation --------
    def to_dict(self) -> Dict[str, Any]:
        start, end = self.date_range
        return {
            "country": self.country,
            "subscription_type": self.subscription_type,
            "onboarding_status": (
                self.onboarding_status.value if self.onboarding_status is not None else None
            ),
            "channel": self.channel,
            "start_date": start.isoformat() if start is not None else None,
            "end_date": end.isoformat() if end is not None else None,
        }


class FilterSession:
    """Filter state owned by one user, with an atomic reset."""

    def __init__(self, defaults: FilterState):
        self.defaults = defaults
        self.state = defaults

    def update(self, dimension: str, value: Any) -> FilterState:
        self.state = self.state.with_value(dimension, value)
        return self.state

    def reset(self) -> FilterState:
        # single assignment of an immutable value, never field by field
        self.state = self.defaults
        return self.state

"""Aggregators over the working subset.

Every function here is pure: it reads the filtered frame it is given and
returns a fresh artifact, so they can be called in any order and as often as
the front end re-renders.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

import pandas as pd

from onboard.services.geography import canonicalize
from onboard.utils.filter_params import OnboardingStatus
from onboard.utils.values import absent_mask, present

CHANNEL_COL = "onboarding_heard_from_label"
GOALS_COL = "onboarding_goals_label"
LEARN_COL = "onboarding_learn_label"
COUNTRY_COL = "onboarding_country"


@dataclass(frozen=True)
class ScalarMetrics:
    total: int
    surveys_completed: int
    onboarding_rate: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _onboarded(df: pd.DataFrame) -> pd.Series:
    return df["onboarded"] == OnboardingStatus.ONBOARDED.value


def scalar_metrics(df: pd.DataFrame) -> ScalarMetrics:
    total = int(len(df))
    completed = int(_onboarded(df).sum()) if total else 0
    rate = round(completed / total * 100, 1) if total > 0 else 0.0
    return ScalarMetrics(total=total, surveys_completed=completed, onboarding_rate=float(rate))


def categorical_distribution(
    df: pd.DataFrame, column: str, with_percentage: bool = False
) -> pd.DataFrame:
    """
    Count records per value of ``column``.

    Absent values are dropped first. Rows come out by descending count;
    equal counts are ordered alphabetically by label.
    """
    values = present(df[column]).astype(str)
    counts = values.value_counts(sort=False)

    out = pd.DataFrame({"label": counts.index.astype(str), "count": counts.values.astype(int)})
    out = out.sort_values(["count", "label"], ascending=[False, True], kind="mergesort")
    out = out.reset_index(drop=True)

    if with_percentage:
        total = int(out["count"].sum())
        out["percentage"] = out["count"] / total * 100 if total else out["count"].astype(float)
    return out


def channel_distribution(df: pd.DataFrame) -> pd.DataFrame:
    return categorical_distribution(df, CHANNEL_COL, with_percentage=True)


def goals_distribution(df: pd.DataFrame) -> pd.DataFrame:
    return categorical_distribution(df, GOALS_COL)


def learning_distribution(df: pd.DataFrame) -> pd.DataFrame:
    return categorical_distribution(df, LEARN_COL)


def country_rates(df: pd.DataFrame) -> pd.DataFrame:
    """
    Onboarding rate per canonical country key.

    Country names are mapped through the alias table before grouping, so two
    spellings of one country land in a single row. Indexed by ``region``.
    """
    known = df[~absent_mask(df[COUNTRY_COL])]
    if known.empty:
        return pd.DataFrame(
            {"total": pd.Series(dtype=int), "onboarded": pd.Series(dtype=int), "rate": pd.Series(dtype=float)},
            index=pd.Index([], name="region", dtype=object),
        )

    frame = pd.DataFrame(
        {
            "region": canonicalize(known[COUNTRY_COL].astype(str)),
            "onboarded": _onboarded(known).astype(int),
        }
    )
    grouped = frame.groupby("region", sort=True)["onboarded"].agg(["size", "sum"])
    grouped.columns = ["total", "onboarded"]
    grouped = grouped.astype(int)
    grouped["rate"] = (grouped["onboarded"] / grouped["total"] * 100).where(grouped["total"] > 0, 0.0)
    return grouped


__all__ = [
    "CHANNEL_COL",
    "COUNTRY_COL",
    "GOALS_COL",
    "LEARN_COL",
    "ScalarMetrics",
    "categorical_distribution",
    "channel_distribution",
    "country_rates",
    "goals_distribution",
    "learning_distribution",
    "scalar_metrics",
]

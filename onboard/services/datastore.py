"""Record store: loads the onboarding export once and serves it read-only."""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
from datetime import date
import duckdb
import pandas as pd

from onboard.utils.filter_params import CATEGORICAL_COLUMNS as FACET_COLUMNS
from onboard.utils.filter_params import DateRange, FilterState
from onboard.utils.values import SENTINELS, absent_mask

logger = logging.getLogger("onboard")

REQUIRED_COLUMNS = (
    "user_id",
    "user_paid",
    "user_registered",
    "onboarded",
    "subscription_type",
    "completed_date",
    "onboarding_country",
    "onboarding_heard_from_label",
    "onboarding_goals_label",
    "onboarding_learn_label",
)
DATE_COLUMNS = ("user_registered", "completed_date")
CATEGORICAL_COLUMNS = tuple(c for c in REQUIRED_COLUMNS if c not in DATE_COLUMNS)

TABLE = "onboarding"


class DataLoadError(RuntimeError):
    """The input file is missing or its header lacks required columns."""


class DataStore:
    """Own data loading, type normalisation and the immutable base dataset.

    Storage backend: DuckDB (in-memory unless DUCKDB_PATH points at a file)
    - Source data: the CSV at Config.DATA_PATH, read with every column as text
    - Materialized table: onboarding
    """

    def __init__(self, config: Mapping[str, Any]):
        self.config = config
        self._df: Optional[pd.DataFrame] = None
        self._bounds: DateRange = (None, None)
        self._con: Optional[duckdb.DuckDBPyConnection] = None

    # ---------- DuckDB helpers ----------

    def _connect(self) -> duckdb.DuckDBPyConnection:
        if self._con is None:
            db_path = str(self.config.get("DUCKDB_PATH") or ":memory:")
            if db_path != ":memory:" and os.path.dirname(db_path):
                os.makedirs(os.path.dirname(db_path), exist_ok=True)
            self._con = duckdb.connect(db_path)
        return self._con

    def _table_exists(self) -> bool:
        con = self._connect()
        return bool(
            con.execute(
                "SELECT COUNT(*) FROM information_schema.tables WHERE table_name = ?;", [TABLE]
            ).fetchone()[0]
        )

    def run_query(self, sql: str, params=None) -> pd.DataFrame:
        """Execute SQL on DuckDB and return as pandas DataFrame."""
        con = self._connect()
        return con.execute(sql, params or []).df()

    def _build_table(self, csv_path: Path) -> None:
        con = self._connect()
        source = str(csv_path).replace("'", "''")
        con.execute(f"DROP TABLE IF EXISTS {TABLE};")
        con.execute(
            f"""
            CREATE TABLE {TABLE} AS
            SELECT * FROM read_csv('{source}', header=true, all_varchar=true, null_padding=true);
            """
        )

        columns = [row[0] for row in con.execute(f"DESCRIBE {TABLE};").fetchall()]
        missing = [c for c in REQUIRED_COLUMNS if c not in columns]
        if missing:
            raise DataLoadError(f"{csv_path}: header is missing column(s) {', '.join(missing)}")

        # sentinel strings become SQL NULL so facet queries see one kind of absence
        for col in CATEGORICAL_COLUMNS:
            con.execute(f'UPDATE {TABLE} SET "{col}" = NULL WHERE "{col}" IN (?, ?);', list(SENTINELS))

    # ---------- pandas normalisation ----------

    def _preprocess(self, df: pd.DataFrame) -> pd.DataFrame:
        df = df[list(REQUIRED_COLUMNS)].copy()

        for col in CATEGORICAL_COLUMNS:
            values = df[col].astype(object)
            df[col] = values.where(~absent_mask(values), None)

        date_fmt = self.config.get("DATE_FMT", "%m/%d/%Y")
        for col in DATE_COLUMNS:
            raw = df[col]
            parsed = pd.to_datetime(raw, format=date_fmt, errors="coerce").dt.normalize()
            bad = int((parsed.isna() & ~absent_mask(raw)).sum())
            if bad:
                logger.warning("%d value(s) in %s did not match %s; treated as missing.", bad, col, date_fmt)
            df[col] = parsed

        return df.reset_index(drop=True)

    @staticmethod
    def _date_bounds(df: pd.DataFrame) -> DateRange:
        dates = df["user_registered"].dropna()
        if dates.empty:
            return None, None
        return dates.min().date(), dates.max().date()

    # ---------- public API ----------

    def load(self) -> pd.DataFrame:
        if self._df is not None:
            return self._df

        csv_path = Path(self.config.get("DATA_PATH", ""))
        if not csv_path.is_file():
            raise DataLoadError(f"input file not found: {csv_path}")

        try:
            self._build_table(csv_path)
            raw = self.run_query(f"SELECT * FROM {TABLE};")
        except duckdb.Error as e:
            raise DataLoadError(f"{csv_path}: could not read CSV ({e})") from e

        self.set_df(raw)
        logger.info("Loaded %d onboarding record(s) from %s.", len(self._df), csv_path)
        return self._df

    def set_df(self, df: pd.DataFrame) -> None:
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise DataLoadError(f"dataset is missing column(s) {', '.join(missing)}")
        self._df = self._preprocess(df)
        self._bounds = self._date_bounds(self._df)
        logger.info("DataStore holds %d record(s); registration dates %s to %s.", len(self._df), *self._bounds)

    def get(self) -> pd.DataFrame:
        """The base dataset. Callers must not modify it."""
        return self.load()

    @property
    def date_bounds(self) -> DateRange:
        self.load()
        return self._bounds

    def default_state(self) -> FilterState:
        return FilterState.defaults(self.date_bounds)

    def facet_options(self) -> Dict[str, List[str]]:
        """Sorted distinct present values of every sidebar facet."""
        self.load()
        if not self._table_exists():
            raise DataLoadError(f"table {TABLE} was never built; facet queries need load()")
        options: Dict[str, List[str]] = {}
        for name, col in FACET_COLUMNS.items():
            df = self.run_query(
                f"""
                SELECT DISTINCT "{col}" AS v
                FROM {TABLE}
                WHERE "{col}" IS NOT NULL AND "{col}" NOT IN (?, ?)
                ORDER BY v;
                """,
                list(SENTINELS),
            )
            options[name] = df["v"].astype(str).tolist()
        return options

    def compute_summary(self) -> Dict[str, Any]:
        df = self.load()
        start, end = self._bounds
        return {
            "rows": int(len(df)),
            "cols": int(len(df.columns)),
            "date_min": start.isoformat() if isinstance(start, date) else "",
            "date_max": end.isoformat() if isinstance(end, date) else "",
        }


__all__ = ["DataLoadError", "DataStore", "FACET_COLUMNS", "REQUIRED_COLUMNS"]

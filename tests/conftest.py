import csv

import pandas as pd
import pytest

from onboard import create_app
from onboard.services.datastore import REQUIRED_COLUMNS, DataStore

# Raw export rows as they appear in the CSV (month/day/year dates).
RAW_ROWS = [
    ["u1", "1", "01/05/2023", "onboarded", "monthly", "01/06/2023",
     "United States of America", "Google", "Career", "Python"],
    ["u2", "0", "1/20/2023", "not-onboarded", "annual", "",
     "United States of America", "Friend", "Hobby", "SQL"],
    ["u3", "1", "02/10/2023", "onboarded", "monthly", "02/11/2023",
     "France", "Google", "Career", "Python"],
    ["u4", "0", "NULL", "onboarded", "NULL", "", "", "NULL", "", "R"],
    ["u5", "0", "not a date", "not-onboarded", "quarterly", "",
     "United Kingdom", "Friend", "Career", ""],
    ["u6", "1", "03/15/2023", "onboarded", "annual", "03/16/2023",
     "UK", "YouTube", "School", "SQL"],
    ["u7", "1", "12/31/2022", "NULL", "monthly", "",
     "France", "", "Hobby", "Python"],
]


@pytest.fixture
def raw_frame():
    return pd.DataFrame(RAW_ROWS, columns=list(REQUIRED_COLUMNS))


@pytest.fixture
def store(csv_path):
    datastore = DataStore({"DATA_PATH": csv_path, "DUCKDB_PATH": ":memory:", "DATE_FMT": "%m/%d/%Y"})
    datastore.load()
    return datastore


@pytest.fixture
def base(store):
    return store.get()


@pytest.fixture
def make_frame():
    """Build a normalised record frame from partial dicts."""

    def _make(rows):
        defaults = {col: None for col in REQUIRED_COLUMNS}
        defaults["user_registered"] = "2023-01-01"
        records = [{**defaults, "user_id": f"r{i}", **row} for i, row in enumerate(rows)]
        df = pd.DataFrame(records, columns=list(REQUIRED_COLUMNS))
        df["user_registered"] = pd.to_datetime(df["user_registered"])
        df["completed_date"] = pd.to_datetime(df["completed_date"])
        return df

    return _make


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "data_visualization.csv"
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(REQUIRED_COLUMNS)
        writer.writerows(RAW_ROWS)
    return path


@pytest.fixture
def app(csv_path):
    return create_app({"DATA_PATH": str(csv_path), "DUCKDB_PATH": ":memory:", "TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()

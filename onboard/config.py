"""Application configuration objects."""

import os
from typing import Dict
from dotenv import load_dotenv
from pathlib import Path

load_dotenv()


class Config:
    """Base configuration for the onboarding dashboard."""

    # -------------------------
    # Data paths
    # -------------------------
    # Onboarding export, read once at startup
    DATA_PATH = Path(os.getenv("ONBOARD_DATA_PATH", "data/data_visualization.csv"))

    # DuckDB database backing the facet queries
    DUCKDB_PATH = os.getenv("ONBOARD_DUCKDB_PATH", ":memory:")

    # -------------------------
    # Data schema
    # -------------------------
    DATE_FMT = os.getenv("ONBOARD_DATE_FMT", "%m/%d/%Y")  # month/day/year

    # -------------------------
    # Value boxes
    # -------------------------
    METRICS: Dict[str, str] = {
        "total": "Total Students",
        "surveys_completed": "Total Surveys Completed",
        "onboarding_rate": "Onboarding Rate",
    }

    # -------------------------
    # Chart titles
    # -------------------------
    CHARTS: Dict[str, Dict[str, str]] = {
        "channels": {"title": "User Acquisition Channels", "axis_label": "Channel"},
        "goals": {"title": "User Goals Distribution", "axis_label": "Goal"},
        "learning": {"title": "Learning Interests", "axis_label": "Topic"},
        "countries": {"title": "Global Onboarding Rate by Country"},
    }


__all__ = ["Config"]

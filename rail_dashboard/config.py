"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, List, Optional

import streamlit as st


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("readings", "Map & Readings"),
    TabConfig("data_quality", "Data Quality & Definitions"),
]

RAW_COLUMNS: List[str] = [
    "UNIX_TIME",
    "LATITUDE",
    "LONGITUDE",
    "POSITION_YARDS",
    "SCORE",
    "RECORDING_ID",
]
NUMERIC_COLUMNS: List[str] = ["UNIX_TIME", "LATITUDE", "LONGITUDE", "POSITION_YARDS", "SCORE"]

SEVERITY_HIGH = "HIGH"
SEVERITY_MEDIUM = "MEDIUM"
SEVERITY_LOW = "LOW"
SEVERITY_ALL = "ALL"
SEVERITY_LEVELS: List[str] = [SEVERITY_HIGH, SEVERITY_MEDIUM, SEVERITY_LOW]
SEVERITY_RANK: Dict[str, int] = {SEVERITY_HIGH: 3, SEVERITY_MEDIUM: 2, SEVERITY_LOW: 1}

HIGH_THRESHOLD_C = 70.0
MEDIUM_THRESHOLD_C = 55.0

SEVERITY_COLORS: Dict[str, str] = {
    SEVERITY_HIGH: "#ef4444",
    SEVERITY_MEDIUM: "#f59e0b",
    SEVERITY_LOW: "#22c55e",
}
UNKNOWN_SEVERITY_COLOR = "#666666"
SEVERITY_BADGE_COLORS: Dict[str, str] = {
    SEVERITY_HIGH: "#FEE2E2",
    SEVERITY_MEDIUM: "#FEF3C7",
    SEVERITY_LOW: "#DCFCE7",
}

DISPLAY_TIMESTAMP_FORMAT = "%d/%m/%Y, %H:%M:%S"
INVALID_DATE = "Invalid Date"

# Sortable table columns in display order, mapped to header labels
SORTABLE_COLUMNS: Dict[str, str] = {
    "display_timestamp": "Date/Time",
    "RECORDING_ID": "Recording",
    "POSITION_YARDS": "Position (yards)",
    "LATITUDE": "Latitude",
    "LONGITUDE": "Longitude",
    "SCORE": "Temp (°C)",
    "severity": "Severity",
}

# Columns whose string form is matched by the free-text search
SEARCH_COLUMNS: List[str] = [
    "display_timestamp",
    "SCORE",
    "POSITION_YARDS",
    "LATITUDE",
    "LONGITUDE",
    "RECORDING_ID",
]

DEFAULT_TEMPERATURE_RANGE = (40.0, 80.0)

DEFAULT_READINGS_SOURCE = "data/ta_exceedences.csv"
DEFAULT_DISPLAY_TIMEZONE = "Europe/London"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CACHE_TTL = 600

ROUTE_CAPTION = "London South Eastern Mainline : **Hungerford Bridge** - **Orpington**"


def get_setting(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists
        pass
    return default


def readings_source() -> str:
    return get_setting("READINGS_SOURCE", DEFAULT_READINGS_SOURCE) or DEFAULT_READINGS_SOURCE


def display_timezone() -> str:
    return get_setting("DISPLAY_TIMEZONE", DEFAULT_DISPLAY_TIMEZONE) or DEFAULT_DISPLAY_TIMEZONE


def log_level() -> str:
    return (get_setting("LOG_LEVEL", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()


def cache_ttl() -> int:
    raw = get_setting("LOAD_CACHE_TTL")
    try:
        return int(raw) if raw else DEFAULT_CACHE_TTL
    except ValueError:
        return DEFAULT_CACHE_TTL

"""
Normalisation helpers that turn loaded rows into readings with the derived
fields required across the dashboard (display timestamp and severity).
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
import pandas as pd

from rail_dashboard.config import (
    DISPLAY_TIMESTAMP_FORMAT,
    HIGH_THRESHOLD_C,
    INVALID_DATE,
    MEDIUM_THRESHOLD_C,
    RAW_COLUMNS,
    SEVERITY_HIGH,
    SEVERITY_LOW,
    SEVERITY_MEDIUM,
)

# Seconds since epoch representable as datetime64[ns] (roughly 1677-2262)
_MAX_EPOCH_SECONDS = 9.2e9


def classify_severity(score: Any) -> str:
    try:
        value = float(score)
    except (TypeError, ValueError):
        return SEVERITY_LOW
    if value >= HIGH_THRESHOLD_C:
        return SEVERITY_HIGH
    if value >= MEDIUM_THRESHOLD_C:
        return SEVERITY_MEDIUM
    # NaN fails both comparisons and lands here as well
    return SEVERITY_LOW


def classify_severity_series(scores: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(scores, errors="coerce")
    labels = np.select(
        [numeric >= HIGH_THRESHOLD_C, numeric >= MEDIUM_THRESHOLD_C],
        [SEVERITY_HIGH, SEVERITY_MEDIUM],
        default=SEVERITY_LOW,
    )
    return pd.Series(labels, index=scores.index, dtype=object)


def format_display_timestamp(unix_seconds: pd.Series, tz: str) -> pd.Series:
    """Render epoch seconds as local wall-clock strings, "Invalid Date" when unusable."""
    numeric = pd.to_numeric(unix_seconds, errors="coerce").astype("float64")
    usable = np.isfinite(numeric) & (numeric.abs() < _MAX_EPOCH_SECONDS)
    numeric = numeric.where(usable)
    instants = pd.to_datetime(numeric, unit="s", utc=True, errors="coerce")
    rendered = instants.dt.tz_convert(tz).dt.strftime(DISPLAY_TIMESTAMP_FORMAT)
    return rendered.where(instants.notna(), INVALID_DATE).astype(object)


def parse_display_timestamp(display: pd.Series) -> pd.Series:
    """Reinterpret display strings as naive local timestamps (NaT when invalid)."""
    as_text = display.where(display.map(lambda v: isinstance(v, str)), None)
    return pd.to_datetime(as_text, format=DISPLAY_TIMESTAMP_FORMAT, errors="coerce")


def plain_str(value: Any) -> str:
    """Default string form of a field value; missing values become an empty string.

    Whole-valued floats drop their trailing ``.0`` so that an identifier read
    as ``1042.0`` still prints (and searches) as ``1042``.
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(float(value))
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value)


def normalize_readings(df: pd.DataFrame, tz: str) -> pd.DataFrame:
    """Return a copy of ``df`` with ``display_timestamp`` and ``severity`` added.

    Rows are converted independently and none is dropped, so the output has
    the same length and order as the input.
    """
    normalized = df.copy()
    for col in RAW_COLUMNS:
        if col not in normalized.columns:
            normalized[col] = np.nan
    normalized["display_timestamp"] = format_display_timestamp(normalized["UNIX_TIME"], tz)
    normalized["severity"] = classify_severity_series(normalized["SCORE"])
    return normalized

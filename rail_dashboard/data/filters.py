"""
Filter utilities that apply the dashboard filters to the readings dataset.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from rail_dashboard.config import DEFAULT_TEMPERATURE_RANGE, SEARCH_COLUMNS, SEVERITY_ALL
from rail_dashboard.data.enrichment import parse_display_timestamp, plain_str

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadingFilters:
    date_range: Tuple[Optional[pd.Timestamp], Optional[pd.Timestamp]] = (None, None)
    severity: Optional[str] = None
    temperature_range: Optional[Tuple[Optional[float], Optional[float]]] = None
    search: str = ""


DEFAULT_FILTERS = ReadingFilters(temperature_range=DEFAULT_TEMPERATURE_RANGE)

OPEN_FILTERS = ReadingFilters()


def _severity_selected(severity: Optional[str]) -> bool:
    return severity not in (None, "", SEVERITY_ALL)


def has_active_filters(filters: ReadingFilters) -> bool:
    start, end = filters.date_range
    temp_active = filters.temperature_range is not None and any(
        bound is not None for bound in filters.temperature_range
    )
    return bool(
        start is not None
        or end is not None
        or _severity_selected(filters.severity)
        or temp_active
        or filters.search
    )


def _naive(value) -> pd.Timestamp:
    # Display timestamps are naive local wall-clock times
    ts = pd.Timestamp(value)
    return ts.tz_localize(None) if ts.tzinfo is not None else ts


def _search_mask(df: pd.DataFrame, term: str) -> pd.Series:
    needle = term.lower()
    mask = pd.Series(False, index=df.index)
    for col in SEARCH_COLUMNS:
        if col not in df:
            continue
        # Missing values stringify to "" and cannot contain a non-empty term
        haystack = df[col].map(plain_str).astype(str).str.lower()
        mask |= haystack.str.contains(needle, regex=False)
    return mask


def apply_reading_filters(df: pd.DataFrame, filters: ReadingFilters) -> pd.DataFrame:
    """
    Apply the currently selected filter values to the normalised readings.

    Every predicate is ANDed and skipped when its filter value is unset. Rows
    keep their input order. A malformed value only fails the predicate that
    reads it.
    """
    if df.empty:
        return df
    keep = pd.Series(True, index=df.index)

    start, end = filters.date_range
    if (start is not None or end is not None) and "display_timestamp" in df:
        instants = parse_display_timestamp(df["display_timestamp"])
        # NaT compares False, so unparseable timestamps fail only this predicate
        if start is not None:
            keep &= instants >= _naive(start)
        if end is not None:
            keep &= instants <= _naive(end)

    if _severity_selected(filters.severity) and "severity" in df:
        keep &= df["severity"] == filters.severity

    if filters.temperature_range and "SCORE" in df:
        temp_min, temp_max = filters.temperature_range
        scores = pd.to_numeric(df["SCORE"], errors="coerce")
        if temp_min is not None:
            keep &= scores >= temp_min
        if temp_max is not None:
            keep &= scores <= temp_max

    if filters.search:
        keep &= _search_mask(df, filters.search)

    filtered = df[keep]
    filtered.attrs["applied_filters"] = serialize_filters(filters)
    logger.debug("Filters kept %d of %d readings: %s", len(filtered), len(df), filtered.attrs["applied_filters"])
    return filtered


def serialize_filters(filters: ReadingFilters) -> Dict[str, Any]:
    """
    Convert the ReadingFilters dataclass to a JSON-serialisable dictionary to be
    stored in session_state or used for logging/debugging.
    """
    return {
        "date_range": tuple(
            v.isoformat() if hasattr(v, "isoformat") else v for v in filters.date_range
        ),
        "severity": filters.severity if _severity_selected(filters.severity) else SEVERITY_ALL,
        "temperature_range": tuple(filters.temperature_range) if filters.temperature_range else None,
        "search": filters.search,
    }

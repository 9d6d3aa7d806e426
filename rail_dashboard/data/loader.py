"""
Loading of the exceedance readings CSV into a loosely typed DataFrame.

Every failure mode (missing file, unreachable URL, unparseable content, no
rows) is logged and degrades to an empty frame with the expected columns, so
the dashboard can always render an empty state.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Set

import pandas as pd
import streamlit as st

from rail_dashboard.config import NUMERIC_COLUMNS, RAW_COLUMNS, cache_ttl, readings_source

logger = logging.getLogger(__name__)

SENTINELS: Set[str] = {"", "None", "none", "N/A", "n/a", "NA", "na", "NaN", "nan", "null", "Null", "-", "—"}


def _empty_frame(source: str, reason: str) -> pd.DataFrame:
    df = pd.DataFrame({col: pd.Series(dtype="float64") for col in RAW_COLUMNS})
    df.attrs["diagnostics"] = {
        "source": source,
        "raw_row_count": 0,
        "dataframe_row_count": 0,
        "load_error": reason,
    }
    return df


def _is_text(series: pd.Series) -> bool:
    # pandas 3 reads dtype=str columns as the dedicated string dtype
    return pd.api.types.is_object_dtype(series) or pd.api.types.is_string_dtype(series)


def _normalize_sentinels(df: pd.DataFrame) -> pd.DataFrame:
    """Replace sentinel string tokens with None (in-place) and record counts in df.attrs.

    Adds / updates:
        df.attrs['sentinel_replacements'] = {column: count_replaced, ...}
    """
    replacements = {}
    for col in df.columns:
        if _is_text(df[col]):
            mask = df[col].apply(lambda v: isinstance(v, str) and v.strip() in SENTINELS)
            count = int(mask.sum())
            if count:
                replacements[col] = count
                df.loc[mask, col] = None
    if replacements:
        existing = df.attrs.get("sentinel_replacements", {})
        existing.update(replacements)
        df.attrs["sentinel_replacements"] = existing
    return df


def _strip(series: pd.Series) -> pd.Series:
    return series.map(lambda v: v.strip() if isinstance(v, str) else v)


def _coerce_numeric(df: pd.DataFrame) -> Dict[str, int]:
    """Coerce numeric columns in place and return per-column counts of unparseable values."""
    unparsed: Dict[str, int] = {}
    for col in NUMERIC_COLUMNS:
        raw = df[col]
        parsed = pd.to_numeric(_strip(raw), errors="coerce")
        failed = int((parsed.isna() & raw.notna()).sum())
        if failed:
            unparsed[col] = failed
        df[col] = parsed.astype("float64")
    return unparsed


def _coerce_recording_id(series: pd.Series) -> pd.Series:
    # Identifiers stay numeric only when every present value is numeric
    present = series.dropna()
    if present.empty:
        return series.astype(object)
    stripped = _strip(series)
    numeric = pd.to_numeric(stripped, errors="coerce")
    if int(numeric.notna().sum()) == len(present):
        return numeric.astype("float64")
    return stripped.astype(object)


def read_readings(source: str) -> pd.DataFrame:
    """Read and type the readings CSV from a local path or URL.

    Never raises for data problems: the error is logged and an empty frame
    carrying a ``load_error`` diagnostic is returned instead.
    """
    bad_lines: List[List[str]] = []

    def _on_bad_line(line: List[str]):
        bad_lines.append(line)
        return None

    try:
        df = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_on_bad_line,
        )
    except (OSError, ValueError) as exc:
        # ValueError covers pandas ParserError, EmptyDataError and decode errors
        logger.error("Failed to load readings from %s: %s", source, exc)
        return _empty_frame(source, str(exc))

    if bad_lines:
        logger.warning("Skipped %d malformed line(s) in %s", len(bad_lines), source)

    if df.empty:
        logger.error("Readings source %s contained no rows", source)
        return _empty_frame(source, "no rows")

    df.columns = [str(col).strip() for col in df.columns]
    missing_columns = [col for col in RAW_COLUMNS if col not in df.columns]
    if missing_columns:
        logger.warning("Readings source %s is missing column(s): %s", source, ", ".join(missing_columns))
        for col in missing_columns:
            df[col] = None

    df = _normalize_sentinels(df)
    unparsed = _coerce_numeric(df)
    df["RECORDING_ID"] = _coerce_recording_id(df["RECORDING_ID"])
    if unparsed:
        logger.warning("Unparseable numeric values in %s: %s", source, unparsed)

    df.attrs["diagnostics"] = {
        "source": source,
        "raw_row_count": int(len(df) + len(bad_lines)),
        "dataframe_row_count": int(len(df)),
        "malformed_lines": len(bad_lines),
        "missing_columns": missing_columns,
        "sentinel_replacements": df.attrs.get("sentinel_replacements", {}),
        "unparsed_numeric_values": unparsed,
    }
    logger.info("Loaded %d readings from %s", len(df), source)
    return df


@st.cache_data(show_spinner=False, ttl=cache_ttl())
def _load_readings_impl(source: str) -> pd.DataFrame:
    """Cached by source so the file is fetched once per TTL window."""
    return read_readings(source)


def load_readings() -> pd.DataFrame:
    """Wrapper that resolves the configured source and calls the cached implementation."""
    return _load_readings_impl(readings_source())


def clear_readings_cache() -> None:
    _load_readings_impl.clear()  # type: ignore[attr-defined]

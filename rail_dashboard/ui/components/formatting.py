"""
Utility helpers for formatting numeric values, temperatures, and coordinates.
"""

from __future__ import annotations

from typing import Any, Optional

from rail_dashboard.data.enrichment import plain_str

MISSING = "–"


def _to_float(value: Any) -> Optional[float]:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return None
    if numeric != numeric:  # NaN
        return None
    return numeric


def format_number(value: Optional[float], decimals: int = 0) -> str:
    numeric = _to_float(value)
    if numeric is None:
        return MISSING
    return f"{numeric:,.{decimals}f}"


def format_coordinate(value: Optional[float]) -> str:
    numeric = _to_float(value)
    if numeric is None:
        return MISSING
    return f"{numeric:.6f}"


def format_temperature(value: Optional[float]) -> str:
    text = plain_str(value)
    return f"{text}°C" if text else MISSING


def format_plain(value: Any) -> str:
    return plain_str(value) or MISSING


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    numeric = _to_float(value)
    if numeric is None:
        return MISSING
    return f"{numeric:.{decimals}f}%"

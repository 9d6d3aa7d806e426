"""
Ordering of readings for the table view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from rail_dashboard.config import SEVERITY_RANK, SORTABLE_COLUMNS
from rail_dashboard.data.enrichment import parse_display_timestamp, plain_str

logger = logging.getLogger(__name__)

_POSITION_COLUMN = "__input_position"
_KEY_COLUMN = "__sort_key"


@dataclass(frozen=True)
class SortState:
    key: Optional[str] = None
    ascending: bool = True


NO_SORT = SortState()


def next_sort_state(current: SortState, key: str) -> SortState:
    """Header-click semantics: a new key sorts ascending, the active ascending key flips."""
    if current.key == key and current.ascending:
        return SortState(key=key, ascending=False)
    return SortState(key=key, ascending=True)


def _sort_values(df: pd.DataFrame, key: str) -> pd.Series:
    if key == "display_timestamp":
        return parse_display_timestamp(df["display_timestamp"])
    if key == "severity":
        return df["severity"].map(SEVERITY_RANK).astype("float64")
    values = df[key]
    if pd.api.types.is_object_dtype(values) or pd.api.types.is_string_dtype(values):
        numeric = pd.to_numeric(values, errors="coerce")
        if int(numeric.notna().sum()) == int(values.notna().sum()):
            return numeric
        # Mixed identifiers compare as text so that no comparison raises
        return values.map(lambda v: plain_str(v) or None)
    return values


def apply_sort(df: pd.DataFrame, sort: SortState) -> pd.DataFrame:
    """Return ``df`` ordered by ``sort`` without mutating it.

    Ties keep their input order in both directions: the original position is
    an explicit ascending tie-breaker. Missing values always sort last.
    """
    if sort.key is None or df.empty:
        return df
    if sort.key not in SORTABLE_COLUMNS or sort.key not in df.columns:
        logger.warning("Ignoring sort on unknown column %r", sort.key)
        return df

    decorated = df.assign(**{
        _KEY_COLUMN: _sort_values(df, sort.key),
        _POSITION_COLUMN: np.arange(len(df)),
    })
    ordered = decorated.sort_values(
        by=[_KEY_COLUMN, _POSITION_COLUMN],
        ascending=[sort.ascending, True],
        na_position="last",
        kind="mergesort",
    )
    logger.debug("Sorted %d readings by %s (%s)", len(df), sort.key, "asc" if sort.ascending else "desc")
    return ordered.drop(columns=[_KEY_COLUMN, _POSITION_COLUMN])

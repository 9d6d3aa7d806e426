"""
Dashboard controller: owns the view state and derives what is displayed.

The base readings are loaded and normalised once. Every state mutation runs
exactly one recomputation of the displayed frame and then notifies subscribers,
so renderers never observe a half-updated view.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from rail_dashboard.config import (
    RAW_COLUMNS,
    SEVERITY_COLORS,
    SEVERITY_LEVELS,
    UNKNOWN_SEVERITY_COLOR,
)
from rail_dashboard.data.bounds import GeoBounds, compute_geo_bounds
from rail_dashboard.data.enrichment import normalize_readings, plain_str
from rail_dashboard.data.filters import DEFAULT_FILTERS, ReadingFilters, apply_reading_filters
from rail_dashboard.data.sorting import NO_SORT, SortState, apply_sort, next_sort_state

logger = logging.getLogger(__name__)

Loader = Callable[[], pd.DataFrame]
Subscriber = Callable[[pd.DataFrame], None]


@dataclass(frozen=True)
class DashboardState:
    filters: ReadingFilters = DEFAULT_FILTERS
    sort: SortState = NO_SORT
    map_expanded: bool = False
    dark_mode: bool = False


@dataclass
class MapMarker:
    lat: float
    lng: float
    severity: str
    color: str
    popup: Dict[str, str] = field(default_factory=dict)


def _as_float(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


class DashboardController:
    def __init__(self, loader: Loader, timezone: str) -> None:
        self._loader = loader
        self._timezone = timezone
        self._state = DashboardState()
        self._base = normalize_readings(pd.DataFrame(columns=RAW_COLUMNS), timezone)
        self._bounds: Optional[GeoBounds] = None
        self._filtered = self._base
        self._displayed = self._base
        self._subscribers: List[Subscriber] = []
        self._loaded = False

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def base(self) -> pd.DataFrame:
        return self._base

    @property
    def bounds(self) -> Optional[GeoBounds]:
        return self._bounds

    @property
    def filtered(self) -> pd.DataFrame:
        return self._filtered

    @property
    def displayed(self) -> pd.DataFrame:
        return self._displayed

    @property
    def load_diagnostics(self) -> Dict[str, Any]:
        return dict(self._base.attrs.get("diagnostics", {}))

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for displayed-frame updates; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def load(self) -> None:
        """Fetch and normalise the dataset once, then run the first filter/sort pass."""
        if self._loaded:
            return
        try:
            raw = self._loader()
        except Exception:
            # Any loader failure degrades to the empty state
            logger.exception("Readings loader failed; continuing with an empty dataset")
            raw = None
        if raw is None:
            raw = pd.DataFrame(columns=RAW_COLUMNS)
        if raw.empty:
            logger.warning("No readings available; dashboard will show its empty state")
        self._base = normalize_readings(raw, self._timezone)
        # Framing reflects the full dataset and is not recomputed on filter changes
        self._bounds = compute_geo_bounds(self._base)
        self._loaded = True
        self._recompute(refilter=True)

    def update_filters(self, filters: ReadingFilters) -> None:
        if filters == self._state.filters:
            return
        self._state = replace(self._state, filters=filters)
        self._recompute(refilter=True)

    def update_sort(self, sort: SortState) -> None:
        if sort == self._state.sort:
            return
        self._state = replace(self._state, sort=sort)
        self._recompute(refilter=False)

    def toggle_sort(self, key: str) -> None:
        self.update_sort(next_sort_state(self._state.sort, key))

    def reset(self) -> None:
        """Restore default filters and clear sorting with a single recomputation."""
        if self._state.filters == DEFAULT_FILTERS and self._state.sort == NO_SORT:
            return
        self._state = replace(self._state, filters=DEFAULT_FILTERS, sort=NO_SORT)
        self._recompute(refilter=True)

    def toggle_map_expanded(self) -> None:
        self._state = replace(self._state, map_expanded=not self._state.map_expanded)

    def toggle_dark_mode(self) -> None:
        self._state = replace(self._state, dark_mode=not self._state.dark_mode)

    def _recompute(self, refilter: bool) -> None:
        if refilter:
            self._filtered = apply_reading_filters(self._base, self._state.filters)
        self._displayed = apply_sort(self._filtered, self._state.sort)
        for callback in list(self._subscribers):
            callback(self._displayed)

    def severity_counts(self) -> Dict[str, int]:
        counts = self._filtered["severity"].value_counts() if not self._filtered.empty else {}
        return {level: int(counts.get(level, 0)) for level in SEVERITY_LEVELS}

    def map_markers(self) -> List[MapMarker]:
        """One marker per displayed reading with usable coordinates."""
        markers: List[MapMarker] = []
        for row in self._displayed.itertuples(index=False):
            record = row._asdict()
            lat = _as_float(record.get("LATITUDE"))
            lng = _as_float(record.get("LONGITUDE"))
            if lat is None or lng is None:
                continue
            severity = record.get("severity")
            markers.append(
                MapMarker(
                    lat=lat,
                    lng=lng,
                    severity=severity,
                    color=SEVERITY_COLORS.get(severity, UNKNOWN_SEVERITY_COLOR),
                    popup={
                        "Temperature": f"{plain_str(record.get('SCORE'))}°C",
                        "Position": f"{plain_str(record.get('POSITION_YARDS'))} yards",
                        "Recording": plain_str(record.get("RECORDING_ID")),
                        "Date": record.get("display_timestamp"),
                        "Severity": str(severity).upper(),
                    },
                )
            )
        return markers

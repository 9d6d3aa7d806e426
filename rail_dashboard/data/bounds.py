"""
Geographic framing for the readings map.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

LatLng = Tuple[float, float]


@dataclass(frozen=True)
class GeoBounds:
    center: LatLng
    south_west: LatLng
    north_east: LatLng

    @property
    def lat_span(self) -> float:
        return self.north_east[0] - self.south_west[0]

    @property
    def lng_span(self) -> float:
        return self.north_east[1] - self.south_west[1]

    def zoom_hint(self, max_zoom: float = 16.0) -> float:
        """Web-mercator zoom level at which the rectangle roughly fills the map."""
        span = max(self.lat_span, self.lng_span)
        if span <= 0:
            return max_zoom
        return float(min(max_zoom, max(1.0, math.log2(360.0 / span) - 0.5)))


def compute_geo_bounds(df: pd.DataFrame) -> Optional[GeoBounds]:
    """Center and bounding rectangle covering every usable coordinate in ``df``.

    Returns None when there is nothing to frame; callers must then skip the map
    rather than fall back to a (0, 0) rectangle.
    """
    if df.empty or not {"LATITUDE", "LONGITUDE"}.issubset(df.columns):
        return None
    lats = pd.to_numeric(df["LATITUDE"], errors="coerce")
    lngs = pd.to_numeric(df["LONGITUDE"], errors="coerce")
    usable = lats.between(-90, 90) & lngs.between(-180, 180)
    if not usable.any():
        logger.warning("No usable coordinates among %d readings; map bounds unavailable", len(df))
        return None
    skipped = int((~usable).sum())
    if skipped:
        logger.warning("Ignoring %d reading(s) with missing or out-of-range coordinates for map bounds", skipped)

    lats, lngs = lats[usable], lngs[usable]
    min_lat, max_lat = float(lats.min()), float(lats.max())
    min_lng, max_lng = float(lngs.min()), float(lngs.max())
    return GeoBounds(
        center=((min_lat + max_lat) / 2, (min_lng + max_lng) / 2),
        south_west=(min_lat, min_lng),
        north_east=(max_lat, max_lng),
    )

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from rail_dashboard.data.enrichment import normalize_readings

TZ = "UTC"


def raw_rows(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    base = {
        "UNIX_TIME": 1658145600.0,
        "LATITUDE": 51.5,
        "LONGITUDE": -0.1,
        "POSITION_YARDS": 100.0,
        "SCORE": 60.0,
        "RECORDING_ID": 1.0,
    }
    return pd.DataFrame([{**base, **row} for row in rows])


def readings(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    return normalize_readings(raw_rows(rows), TZ)

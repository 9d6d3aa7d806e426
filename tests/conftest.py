from __future__ import annotations

import pandas as pd
import pytest

from tests.helpers import readings


@pytest.fixture
def sample_readings() -> pd.DataFrame:
    return readings(
        [
            {"UNIX_TIME": 1658138400.0, "SCORE": 52.4, "RECORDING_ID": 30117.0, "LATITUDE": 51.506512, "LONGITUDE": -0.119845},
            {"UNIX_TIME": 1658145600.0, "SCORE": 61.3, "RECORDING_ID": 30118.0, "LATITUDE": 51.498006, "LONGITUDE": -0.101563},
            {"UNIX_TIME": 1658152800.0, "SCORE": 71.2, "RECORDING_ID": 30119.0, "LATITUDE": 51.486320, "LONGITUDE": -0.074813},
            {"UNIX_TIME": 1658235600.0, "SCORE": 75.3, "RECORDING_ID": 30122.0, "LATITUDE": 51.429418, "LONGITUDE": 0.011592},
            {"UNIX_TIME": 1658250000.0, "SCORE": 48.6, "RECORDING_ID": 30124.0, "LATITUDE": 51.383014, "LONGITUDE": 0.075236},
        ]
    )

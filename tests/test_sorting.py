"""Tests for the readings sort engine."""

import pandas as pd
import pytest

from rail_dashboard.data.sorting import NO_SORT, SortState, apply_sort, next_sort_state

from tests.helpers import readings


def _ids(df: pd.DataFrame) -> list:
    return df["RECORDING_ID"].tolist()


class TestApplySort:
    def test_no_key_returns_input_unchanged(self, sample_readings: pd.DataFrame) -> None:
        assert apply_sort(sample_readings, NO_SORT) is sample_readings

    def test_timestamp_sorts_chronologically_not_lexically(self) -> None:
        # "01/02/2022" sorts before "02/01/2022" as text but is a month later
        df = readings(
            [
                {"UNIX_TIME": 1643673600.0, "RECORDING_ID": 1.0},  # 01/02/2022
                {"UNIX_TIME": 1641081600.0, "RECORDING_ID": 2.0},  # 02/01/2022
                {"UNIX_TIME": 1641114000.0, "RECORDING_ID": 3.0},  # 02/01/2022, 09:00
                {"UNIX_TIME": 1641117600.0, "RECORDING_ID": 4.0},  # 02/01/2022, 10:00
            ]
        )
        ordered = apply_sort(df, SortState(key="display_timestamp"))
        assert _ids(ordered) == [2.0, 3.0, 4.0, 1.0]

    def test_severity_sorts_by_rank(self, sample_readings: pd.DataFrame) -> None:
        ascending = apply_sort(sample_readings, SortState(key="severity"))
        descending = apply_sort(sample_readings, SortState(key="severity", ascending=False))
        assert ascending["severity"].tolist() == ["LOW", "LOW", "MEDIUM", "HIGH", "HIGH"]
        assert descending["severity"].tolist() == ["HIGH", "HIGH", "MEDIUM", "LOW", "LOW"]

    def test_severity_uses_stored_value(self, sample_readings: pd.DataFrame) -> None:
        tampered = sample_readings.copy()
        tampered["severity"] = ["HIGH", "LOW", "LOW", "LOW", "LOW"]
        ordered = apply_sort(tampered, SortState(key="severity", ascending=False))
        assert _ids(ordered)[0] == 30117.0

    @pytest.mark.parametrize("key", ["SCORE", "LATITUDE", "LONGITUDE", "POSITION_YARDS", "RECORDING_ID"])
    def test_numeric_keys_use_natural_order(self, sample_readings: pd.DataFrame, key: str) -> None:
        ordered = apply_sort(sample_readings, SortState(key=key, ascending=False))
        values = ordered[key].tolist()
        assert values == sorted(values, reverse=True)

    @pytest.mark.parametrize("ascending", [True, False])
    def test_ties_keep_input_order(self, ascending: bool) -> None:
        df = readings(
            [
                {"SCORE": 60.0, "RECORDING_ID": 1.0},
                {"SCORE": 72.0, "RECORDING_ID": 2.0},
                {"SCORE": 60.0, "RECORDING_ID": 3.0},
                {"SCORE": 72.0, "RECORDING_ID": 4.0},
                {"SCORE": 60.0, "RECORDING_ID": 5.0},
            ]
        )
        ordered = apply_sort(df, SortState(key="SCORE", ascending=ascending))
        expected = [1.0, 3.0, 5.0, 2.0, 4.0] if ascending else [2.0, 4.0, 1.0, 3.0, 5.0]
        assert _ids(ordered) == expected

    @pytest.mark.parametrize("ascending", [True, False])
    def test_severity_ties_keep_input_order(self, ascending: bool) -> None:
        df = readings([{"SCORE": s, "RECORDING_ID": float(i)} for i, s in enumerate([71, 56, 80, 57, 75])])
        ordered = apply_sort(df, SortState(key="severity", ascending=ascending))
        expected = [1.0, 3.0, 0.0, 2.0, 4.0] if ascending else [0.0, 2.0, 4.0, 1.0, 3.0]
        assert _ids(ordered) == expected

    def test_sorting_twice_is_idempotent(self, sample_readings: pd.DataFrame) -> None:
        sort = SortState(key="SCORE", ascending=False)
        once = apply_sort(sample_readings, sort)
        pd.testing.assert_frame_equal(apply_sort(once, sort), once)

    def test_input_is_not_mutated(self, sample_readings: pd.DataFrame) -> None:
        before = sample_readings.copy()
        ordered = apply_sort(sample_readings, SortState(key="SCORE"))
        pd.testing.assert_frame_equal(sample_readings, before)
        assert list(ordered.columns) == list(sample_readings.columns)

    @pytest.mark.parametrize("ascending", [True, False])
    def test_missing_values_sort_last(self, ascending: bool) -> None:
        df = readings(
            [
                {"SCORE": float("nan"), "RECORDING_ID": 1.0},
                {"SCORE": 50.0, "RECORDING_ID": 2.0},
                {"SCORE": 70.0, "RECORDING_ID": 3.0},
            ]
        )
        ordered = apply_sort(df, SortState(key="SCORE", ascending=ascending))
        assert _ids(ordered)[-1] == 1.0

    def test_mixed_identifiers_sort_as_text(self) -> None:
        df = readings([{"RECORDING_ID": "B7"}, {"RECORDING_ID": 12.0}, {"RECORDING_ID": "A3"}])
        ordered = apply_sort(df, SortState(key="RECORDING_ID"))
        assert _ids(ordered) == [12.0, "A3", "B7"]

    def test_numeric_text_in_string_dtype_sorts_numerically(self) -> None:
        df = readings([{"RECORDING_ID": "10"}, {"RECORDING_ID": "9"}, {"RECORDING_ID": "11"}])
        df["RECORDING_ID"] = df["RECORDING_ID"].astype("string")
        ordered = apply_sort(df, SortState(key="RECORDING_ID"))
        assert _ids(ordered) == ["9", "10", "11"]

    def test_unknown_key_is_ignored(self, sample_readings: pd.DataFrame) -> None:
        assert apply_sort(sample_readings, SortState(key="UNIX_TIME")) is sample_readings


class TestNextSortState:
    def test_new_key_starts_ascending(self) -> None:
        assert next_sort_state(NO_SORT, "SCORE") == SortState(key="SCORE", ascending=True)

    def test_active_key_toggles(self) -> None:
        ascending = SortState(key="SCORE", ascending=True)
        descending = next_sort_state(ascending, "SCORE")
        assert descending == SortState(key="SCORE", ascending=False)
        assert next_sort_state(descending, "SCORE") == ascending

    def test_switching_key_resets_direction(self) -> None:
        current = SortState(key="SCORE", ascending=False)
        assert next_sort_state(current, "severity") == SortState(key="severity", ascending=True)

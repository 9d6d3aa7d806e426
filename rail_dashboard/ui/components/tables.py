"""
Readings table with clickable sort headers, severity badges and CSV export.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st

from rail_dashboard.config import SEVERITY_BADGE_COLORS, SORTABLE_COLUMNS
from rail_dashboard.controller import DashboardController
from rail_dashboard.data.sorting import SortState
from rail_dashboard.ui.components.formatting import format_coordinate, format_plain, format_temperature

NO_MATCH_MESSAGE = "No records found matching the current filters"

EXPORT_COLUMNS = ["display_timestamp", "RECORDING_ID", "POSITION_YARDS", "LATITUDE", "LONGITUDE", "SCORE", "severity", "UNIX_TIME"]


def sort_arrow(sort: SortState, key: str) -> str:
    if sort.key != key:
        return ""
    return " ↑" if sort.ascending else " ↓"


def format_readings(df: pd.DataFrame) -> pd.DataFrame:
    """Display strings for each sortable column, keyed by header label."""
    display = pd.DataFrame(index=df.index)
    display[SORTABLE_COLUMNS["display_timestamp"]] = df["display_timestamp"]
    display[SORTABLE_COLUMNS["RECORDING_ID"]] = df["RECORDING_ID"].map(format_plain)
    display[SORTABLE_COLUMNS["POSITION_YARDS"]] = df["POSITION_YARDS"].map(format_plain)
    display[SORTABLE_COLUMNS["LATITUDE"]] = df["LATITUDE"].map(format_coordinate)
    display[SORTABLE_COLUMNS["LONGITUDE"]] = df["LONGITUDE"].map(format_coordinate)
    display[SORTABLE_COLUMNS["SCORE"]] = df["SCORE"].map(format_temperature)
    display[SORTABLE_COLUMNS["severity"]] = df["severity"].astype(str).str.upper()
    return display


def _badge_style(val) -> str:
    color = SEVERITY_BADGE_COLORS.get(str(val).upper())
    if color is None:
        return ""
    return f"background-color: {color}; color: #000000;"


def _sort_header(controller: DashboardController) -> None:
    sort = controller.state.sort
    cols = st.columns([2, 1, 1, 1, 1, 1, 1])
    for col, (key, label) in zip(cols, SORTABLE_COLUMNS.items()):
        with col:
            if st.button(
                f"{label}{sort_arrow(sort, key)}",
                key=f"sr_sort_{key}",
                type="secondary" if sort.key != key else "primary",
                use_container_width=True,
            ):
                controller.toggle_sort(key)
                st.rerun()


def render_readings_table(controller: DashboardController, height: int = 500) -> None:
    _sort_header(controller)

    displayed = controller.displayed
    if displayed.empty:
        st.info(NO_MATCH_MESSAGE)
        return

    formatted = format_readings(displayed)
    styled = formatted.style.map(_badge_style, subset=[SORTABLE_COLUMNS["severity"]])
    st.dataframe(styled, use_container_width=True, height=height, hide_index=True)

    export = displayed[[col for col in EXPORT_COLUMNS if col in displayed.columns]]
    st.download_button(
        "Download CSV",
        data=export.to_csv(index=False).encode("utf-8"),
        file_name="exceedances_filtered.csv",
        mime="text/csv",
    )

"""
Layout helpers for the Streamlit application (page setup, header, sidebar filters).
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional, Tuple

import pandas as pd
import streamlit as st

from rail_dashboard.config import SEVERITY_ALL, SEVERITY_LEVELS
from rail_dashboard.controller import DashboardController
from rail_dashboard.data.enrichment import parse_display_timestamp
from rail_dashboard.data.filters import DEFAULT_FILTERS, ReadingFilters

STATE_PREFIX = "sr_"


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="Railway Temperature Exceedance",
        layout="wide",
        page_icon=":railway_track:",
    )


def header_controls(controller: DashboardController) -> None:
    state = controller.state
    col_title, col_map, col_theme = st.columns([6, 1, 1])
    with col_title:
        st.title("Railway Temperature Exceedance")
    with col_map:
        if st.button("Minimize Map" if state.map_expanded else "Expand Map", key="sr_toggle_map"):
            controller.toggle_map_expanded()
            st.rerun()
    with col_theme:
        if st.button("☀️ Light Mode" if state.dark_mode else "🌙 Dark Mode", key="sr_toggle_theme"):
            controller.toggle_dark_mode()
            st.rerun()


def _dataset_extent(controller: DashboardController) -> Tuple[pd.Timestamp, pd.Timestamp]:
    instants = parse_display_timestamp(controller.base["display_timestamp"]).dropna()
    if instants.empty:
        today = pd.Timestamp.now().normalize()
        return today, today
    return instants.min(), instants.max()


def datetime_bound(day: dt.date, time: dt.time, end_of_minute: bool = False) -> pd.Timestamp:
    """Combine the picked date and minute; ``end_of_minute`` covers every second within it."""
    bound = pd.Timestamp(dt.datetime.combine(day, time.replace(second=0, microsecond=0)))
    if end_of_minute:
        # Display timestamps carry whole seconds
        bound += pd.Timedelta(seconds=59)
    return bound


def _datetime_bound(
    label: str, key: str, fallback: pd.Timestamp, end_of_minute: bool = False
) -> Optional[pd.Timestamp]:
    enabled = st.sidebar.checkbox(f"Limit {label.lower()}", value=False, key=f"{key}_enabled")
    if not enabled:
        return None
    col_date, col_time = st.sidebar.columns(2)
    with col_date:
        day = st.date_input(label, value=fallback.date(), key=f"{key}_date")
    with col_time:
        time = st.time_input("Time", value=fallback.time(), key=f"{key}_time", step=60)
    return datetime_bound(day, time, end_of_minute=end_of_minute)


def resolve_temperature_range(
    temp_min: Optional[float],
    temp_max: Optional[float],
    min_open: bool = False,
    max_open: bool = False,
) -> Optional[Tuple[Optional[float], Optional[float]]]:
    low = None if min_open else temp_min
    high = None if max_open else temp_max
    if low is None and high is None:
        return None
    return (low, high)


def _temperature_range() -> Optional[Tuple[Optional[float], Optional[float]]]:
    default_min, default_max = DEFAULT_FILTERS.temperature_range or (None, None)
    col_min, col_max = st.sidebar.columns(2)
    with col_min:
        min_open = st.checkbox("No minimum", value=False, key="sr_temp_min_open")
        temp_min = st.number_input(
            "Min (°C)", value=default_min, step=1.0, key="sr_temp_min", disabled=min_open
        )
    with col_max:
        max_open = st.checkbox("No maximum", value=False, key="sr_temp_max_open")
        temp_max = st.number_input(
            "Max (°C)", value=default_max, step=1.0, key="sr_temp_max", disabled=max_open
        )
    temperature_range = resolve_temperature_range(temp_min, temp_max, min_open, max_open)
    if temperature_range is not None:
        low, high = temperature_range
        if low is not None and high is not None and high < low:
            st.sidebar.warning("Max temperature is below Min temperature; no readings will match.")
    return temperature_range


def sidebar_filters_ui(controller: DashboardController) -> ReadingFilters:
    """
    Render the sidebar filter controls and return the selected values.
    """
    st.sidebar.header("Filters")

    severity_options = [SEVERITY_ALL] + SEVERITY_LEVELS
    severity_choice = st.sidebar.selectbox(
        "Severity",
        options=severity_options,
        index=0,
        key="sr_severity",
        format_func=lambda v: "All Severities" if v == SEVERITY_ALL else v.title(),
    )

    earliest, latest = _dataset_extent(controller)
    date_from = _datetime_bound("Date From", "sr_date_from", earliest)
    date_to = _datetime_bound("Date To", "sr_date_to", latest, end_of_minute=True)
    if date_from is not None and date_to is not None and date_from > date_to:
        st.sidebar.warning("Date From is after Date To; no readings will match.")

    st.sidebar.markdown("**Temperature Range**")
    temperature_range = _temperature_range()

    search = st.sidebar.text_input("Search", placeholder="Search records...", key="sr_search")

    if st.sidebar.button("Reset Filters", key="sr_reset_filters", type="primary"):
        _clear_state_prefixes([STATE_PREFIX])
        controller.reset()
        st.rerun()

    return ReadingFilters(
        date_range=(date_from, date_to),
        severity=None if severity_choice == SEVERITY_ALL else severity_choice,
        temperature_range=temperature_range,
        search=search,
    )


def _clear_state_prefixes(prefixes: List[str]) -> None:
    for prefix in prefixes:
        for key in list(st.session_state.keys()):
            if key.startswith(prefix):
                del st.session_state[key]

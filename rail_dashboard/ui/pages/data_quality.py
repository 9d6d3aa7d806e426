from __future__ import annotations

import pandas as pd
import streamlit as st

from rail_dashboard.config import HIGH_THRESHOLD_C, MEDIUM_THRESHOLD_C, INVALID_DATE
from rail_dashboard.ui.components.formatting import format_percent
from rail_dashboard.ui.components.kpi import KpiCard, render_kpi_cards
from rail_dashboard.ui.pages.context import PageContext


def _percentage(mask: pd.Series) -> float:
    total = len(mask)
    if total == 0:
        return 0.0
    return float(mask.sum() / total * 100)


def _compute_quality_metrics(df: pd.DataFrame) -> list[KpiCard]:
    invalid_dates = _percentage(df["display_timestamp"] == INVALID_DATE)
    missing_scores = _percentage(pd.to_numeric(df["SCORE"], errors="coerce").isna())
    missing_coords = _percentage(
        pd.to_numeric(df["LATITUDE"], errors="coerce").isna()
        | pd.to_numeric(df["LONGITUDE"], errors="coerce").isna()
    )
    return [
        KpiCard(label="Readings Loaded", value=len(df)),
        KpiCard(label="Invalid Timestamps", value_display=format_percent(invalid_dates)),
        KpiCard(label="Missing Scores", value_display=format_percent(missing_scores)),
        KpiCard(label="Missing Coordinates", value_display=format_percent(missing_coords)),
    ]


def render(context: PageContext) -> None:
    st.subheader("Data Quality & Definitions")
    controller = context.controller

    diagnostics = controller.load_diagnostics
    if controller.base.empty:
        st.warning("The readings source returned no rows.")
    else:
        render_kpi_cards(_compute_quality_metrics(controller.base), columns=4)

    st.markdown("#### Diagnostics Summary")
    if diagnostics:
        for key, value in diagnostics.items():
            st.write(f"- **{key.replace('_', ' ').title()}**: {value}")
    else:
        st.info("No diagnostics metadata available.")

    bounds = controller.bounds
    if bounds is not None:
        st.markdown("#### Map Extent")
        st.write(
            f"- **Center**: {bounds.center[0]:.6f}, {bounds.center[1]:.6f}\n"
            f"- **South-west**: {bounds.south_west[0]:.6f}, {bounds.south_west[1]:.6f}\n"
            f"- **North-east**: {bounds.north_east[0]:.6f}, {bounds.north_east[1]:.6f}"
        )

    st.markdown("#### Definitions")
    st.write(
        f"""
        - **Score**: rail temperature in degrees Celsius at the recorded position.
        - **High severity**: score of {HIGH_THRESHOLD_C:g}°C or more.
        - **Medium severity**: score of {MEDIUM_THRESHOLD_C:g}°C up to {HIGH_THRESHOLD_C:g}°C.
        - **Low severity**: anything below {MEDIUM_THRESHOLD_C:g}°C, including unreadable scores.
        - **Map extent** covers the whole dataset and does not follow the filters.
        - **Search** matches raw values at full precision, not the rounded table values.
        """
    )

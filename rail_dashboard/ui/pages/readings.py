from __future__ import annotations

import streamlit as st

from rail_dashboard.config import ROUTE_CAPTION
from rail_dashboard.ui.components.kpi import render_kpi_cards, severity_cards
from rail_dashboard.ui.components.map import render_readings_map
from rail_dashboard.ui.components.tables import render_readings_table
from rail_dashboard.ui.pages.context import PageContext


def render(context: PageContext) -> None:
    controller = context.controller
    st.markdown(ROUTE_CAPTION)
    if controller.base.empty:
        st.info("No readings loaded. Check the data source and refresh.")
        return

    render_readings_map(controller)
    render_kpi_cards(severity_cards(controller.severity_counts(), len(controller.filtered)))

    st.markdown("#### Readings")
    render_readings_table(controller)

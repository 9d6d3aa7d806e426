import rail_dashboard.bootstrap_env  # must be first to set env/secrets and logging
import logging

import streamlit as st

from rail_dashboard.config import TABS, display_timezone
from rail_dashboard.controller import DashboardController
from rail_dashboard.data.filters import has_active_filters, serialize_filters
from rail_dashboard.data.loader import clear_readings_cache, load_readings
from rail_dashboard.ui.layout import header_controls, setup_page, sidebar_filters_ui
from rail_dashboard.ui.pages import data_quality, readings
from rail_dashboard.ui.pages.context import PageContext

logger = logging.getLogger(__name__)

CONTROLLER_KEY = "rail_controller"

PAGE_RENDERERS = {
    "readings": readings.render,
    "data_quality": data_quality.render,
}


def _get_controller() -> DashboardController:
    controller = st.session_state.get(CONTROLLER_KEY)
    if controller is None:
        controller = DashboardController(loader=load_readings, timezone=display_timezone())
        controller.load()
        st.session_state[CONTROLLER_KEY] = controller
    return controller


def _active_filter_summary(controller: DashboardController) -> None:
    filters = controller.state.filters
    if not has_active_filters(filters):
        st.markdown("**Active Filters: All data**")
    else:
        applied = serialize_filters(filters)
        badges = [f"Severity: {applied['severity'].title()}"]
        if filters.temperature_range:
            low, high = filters.temperature_range
            badges.append(f"Temp: {'–' if low is None else f'{low:g}'} to {'–' if high is None else f'{high:g}'} °C")
        start, end = applied["date_range"]
        if start or end:
            badges.append(f"Dates: {start or '…'} → {end or '…'}")
        if filters.search:
            badges.append(f"Search: “{filters.search}”")
        st.markdown("**Active Filters: " + " | ".join(badges) + "**")
    st.caption(f"Showing {len(controller.filtered):,} of {len(controller.base):,} readings after filters.")


def main() -> None:
    setup_page()

    if st.sidebar.button("🔄 Refresh Data"):
        clear_readings_cache()
        st.session_state.pop(CONTROLLER_KEY, None)
        logger.info("Readings cache cleared on user request")

    controller = _get_controller()
    header_controls(controller)

    filters = sidebar_filters_ui(controller)
    controller.update_filters(filters)

    if controller.base.empty:
        st.warning("No readings could be loaded. See the Data Quality tab and application logs for details.")

    _active_filter_summary(controller)

    context = PageContext(controller=controller)
    streamlit_tabs = st.tabs([tab.label for tab in TABS])
    for streamlit_tab, tab_config in zip(streamlit_tabs, TABS):
        renderer = PAGE_RENDERERS.get(tab_config.key)
        if renderer is None:
            continue
        with streamlit_tab:
            renderer(context)


if __name__ == "__main__":
    main()

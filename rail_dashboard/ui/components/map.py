"""
Plotly map of readings, coloured by severity and framed on the full dataset.
"""

from __future__ import annotations

from typing import List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from rail_dashboard.config import SEVERITY_COLORS, SEVERITY_LEVELS
from rail_dashboard.controller import DashboardController, MapMarker
from rail_dashboard.data.bounds import GeoBounds

LIGHT_TILES = "open-street-map"
DARK_TILES = "carto-darkmatter"
EXPANDED_HEIGHT = 600
COLLAPSED_HEIGHT = 300
POPUP_FIELDS = ["Temperature", "Position", "Recording", "Date", "Severity"]


def markers_frame(markers: List[MapMarker]) -> pd.DataFrame:
    rows = [
        {"lat": m.lat, "lng": m.lng, "severity": m.severity, **m.popup}
        for m in markers
    ]
    return pd.DataFrame(rows, columns=["lat", "lng", "severity", *POPUP_FIELDS])


def readings_map(
    markers: pd.DataFrame,
    bounds: GeoBounds,
    dark_mode: bool = False,
    height: int = COLLAPSED_HEIGHT,
) -> go.Figure:
    fig = px.scatter_map(
        markers,
        lat="lat",
        lon="lng",
        color="severity",
        color_discrete_map=SEVERITY_COLORS,
        category_orders={"severity": SEVERITY_LEVELS},
        hover_name="Recording",
        hover_data={field: True for field in POPUP_FIELDS} | {"lat": False, "lng": False, "severity": False},
        center={"lat": bounds.center[0], "lon": bounds.center[1]},
        zoom=bounds.zoom_hint(),
        height=height,
    )
    fig.update_traces(marker={"size": 12})
    fig.update_layout(
        map_style=DARK_TILES if dark_mode else LIGHT_TILES,
        template="plotly_dark" if dark_mode else "plotly_white",
        legend_title="Severity",
        legend=dict(yanchor="bottom", y=0.02, xanchor="right", x=0.98),
        margin=dict(l=0, r=0, t=0, b=0),
    )
    return fig


def render_readings_map(controller: DashboardController) -> None:
    bounds = controller.bounds
    if bounds is None:
        st.info("No readings with coordinates are available to map.")
        return
    state = controller.state
    fig = readings_map(
        markers_frame(controller.map_markers()),
        bounds,
        dark_mode=state.dark_mode,
        height=EXPANDED_HEIGHT if state.map_expanded else COLLAPSED_HEIGHT,
    )
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})

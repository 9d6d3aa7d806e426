from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import streamlit as st

from rail_dashboard.config import SEVERITY_LEVELS
from rail_dashboard.ui.components.formatting import format_number


@dataclass
class KpiCard:
    label: str
    value: Optional[float] = None
    value_display: Optional[str] = None
    decimals: int = 0
    help_text: Optional[str] = None


def severity_cards(counts: Dict[str, int], total: int) -> list[KpiCard]:
    cards = [KpiCard(label="Readings Shown", value=total)]
    for level in SEVERITY_LEVELS:
        cards.append(KpiCard(label=f"{level.title()} Severity", value=counts.get(level, 0)))
    return cards


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 4) -> None:
    """
    Render KPI cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                value = card.value_display if card.value_display is not None else format_number(card.value, card.decimals)
                st.metric(label=card.label, value=value)
                if card.help_text:
                    st.caption(card.help_text)

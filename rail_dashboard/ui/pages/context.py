from __future__ import annotations

from dataclasses import dataclass

from rail_dashboard.controller import DashboardController


@dataclass
class PageContext:
    controller: DashboardController

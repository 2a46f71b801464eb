"""In-memory view state owned by the dashboard's main loop."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum

__all__ = ["DashboardState", "View"]


class View(Enum):
    HOME = "home"
    DATA_LIST = "data_list"


@dataclass
class DashboardState:
    active_view: View = View.HOME
    selection: int = 0
    notice: str | None = None
    notice_time: float = 0.0

    def set_notice(self, message: str) -> None:
        self.notice = message
        self.notice_time = time.time()

    def notice_text(self, ttl_seconds: float = 3.0, now: float | None = None) -> str | None:
        if not self.notice:
            return None
        if (time.time() if now is None else now) - self.notice_time > ttl_seconds:
            return None
        return self.notice

    def has_selection(self, count: int) -> bool:
        return 0 <= self.selection < count

    def clamp_selection(self, count: int) -> None:
        """Pull the selection back into range after the collection changed."""
        if count <= 0:
            self.selection = 0
        else:
            self.selection = max(0, min(self.selection, count - 1))

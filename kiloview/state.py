from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from .rows import RowStore
from .viewport import Viewport

STATUS_MESSAGE_SECONDS = 5.0


@dataclass
class Session:
    """All mutable state for one viewing session, passed explicitly to each component."""

    rows: RowStore
    viewport: Viewport
    filename: str = ""
    status_message: str = ""
    status_message_time: float = 0.0
    message_seconds: float = STATUS_MESSAGE_SECONDS
    running: bool = True
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    @classmethod
    def create(
        cls,
        rows: RowStore,
        screen_rows: int,
        screen_cols: int,
        filename: str = "",
        message_seconds: float = STATUS_MESSAGE_SECONDS,
    ) -> Session:
        viewport = Viewport(rows, max(1, screen_rows), max(1, screen_cols))
        return cls(rows=rows, viewport=viewport, filename=filename, message_seconds=message_seconds)

    def set_status_message(self, message: str) -> None:
        self.status_message = message
        self.status_message_time = self.clock()

    def status_message_visible(self, now: float | None = None) -> bool:
        if not self.status_message:
            return False
        if now is None:
            now = self.clock()
        return now - self.status_message_time < self.message_seconds

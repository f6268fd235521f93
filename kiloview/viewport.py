"""Cursor and scroll-offset state machine over a ``RowStore``.

Cursor rows range over ``[0, row_count]``; ``row_count`` itself is the
one-past-end anchor row, which is never indexed. ``cx`` is re-clamped to the
destination row length after every vertical move, and ``scroll`` nudges the
offsets by the minimum amount needed to keep the cursor on screen.
"""

from __future__ import annotations

from dataclasses import dataclass

from .rows import RowStore, cx_to_rx


@dataclass
class Viewport:
    rows: RowStore
    screen_rows: int
    screen_cols: int
    cy: int = 0
    cx: int = 0
    rx: int = 0
    row_offset: int = 0
    col_offset: int = 0

    def __post_init__(self) -> None:
        if self.screen_rows < 1 or self.screen_cols < 1:
            raise ValueError("viewport needs at least one row and one column")

    @property
    def num_rows(self) -> int:
        return self.rows.row_count()

    def _row_length(self) -> int:
        return self.rows.row_length(self.cy)

    def _clamp_cx(self) -> None:
        self.cx = min(self.cx, self._row_length())

    def move_left(self) -> None:
        if self.cx > 0:
            self.cx -= 1
        elif self.cy > 0:
            self.cy -= 1
            self.cx = self._row_length()

    def move_right(self) -> None:
        if self.cy >= self.num_rows:
            return
        if self.cx < self._row_length():
            self.cx += 1
        elif self.cy + 1 < self.num_rows:
            self.cy += 1
            self.cx = 0

    def move_up(self) -> None:
        if self.cy > 0:
            self.cy -= 1
        self._clamp_cx()

    def move_down(self) -> None:
        if self.cy < self.num_rows:
            self.cy += 1
        self._clamp_cx()

    def page_up(self) -> None:
        self.cy = min(self.row_offset, self.num_rows)
        for _ in range(self.screen_rows):
            self.move_up()

    def page_down(self) -> None:
        # Landing below the buffer would break the cy <= num_rows bound.
        self.cy = min(self.row_offset + self.screen_rows - 1, self.num_rows)
        for _ in range(self.screen_rows):
            self.move_down()

    def home(self) -> None:
        self.cx = 0

    def end(self) -> None:
        if self.cy < self.num_rows:
            self.cx = self._row_length()

    def scroll(self) -> None:
        """Recompute ``rx`` and nudge offsets so the cursor cell is visible."""
        self.rx = 0
        if self.cy < self.num_rows:
            self.rx = cx_to_rx(self.rows.row_at(self.cy), self.cx)

        if self.cy < self.row_offset:
            self.row_offset = self.cy
        if self.cy >= self.row_offset + self.screen_rows:
            self.row_offset = self.cy - self.screen_rows + 1

        if self.rx < self.col_offset:
            self.col_offset = self.rx
        if self.rx >= self.col_offset + self.screen_cols:
            self.col_offset = self.rx - self.screen_cols + 1

    def screen_cursor(self) -> tuple[int, int]:
        """Zero-based cursor cell relative to the top-left of the content area."""
        return self.cy - self.row_offset, self.rx - self.col_offset

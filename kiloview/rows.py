"""Row storage with tab-expanded display text.

Each ``Row`` keeps the file line verbatim in ``content`` and a derived
``render`` form where tabs advance to the next tab stop. ``cx_to_rx`` maps a
logical column into that display form using the same rule.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .errors import RowIndexError

DEFAULT_TAB_STOP = 4


def expand_tabs(content: str, tab_stop: int = DEFAULT_TAB_STOP) -> str:
    """Return ``content`` with each tab widened to the next multiple of ``tab_stop``.

    Pure and total: a tab always emits at least one space, every other
    character is copied unchanged and advances one column.
    """
    out: list[str] = []
    idx = 0
    for ch in content:
        if ch == "\t":
            out.append(" ")
            idx += 1
            while idx % tab_stop != 0:
                out.append(" ")
                idx += 1
        else:
            out.append(ch)
            idx += 1
    return "".join(out)


@dataclass(frozen=True)
class Row:
    content: str
    tab_stop: int = DEFAULT_TAB_STOP
    render: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "render", expand_tabs(self.content, self.tab_stop))

    def __len__(self) -> int:
        return len(self.content)


def cx_to_rx(row: Row, cx: int) -> int:
    """Translate a logical column in ``row.content`` to its display column."""
    tab_stop = row.tab_stop
    rx = 0
    for ch in row.content[:cx]:
        if ch == "\t":
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx


class RowStore:
    """Ordered, read-only sequence of rows for one open document."""

    def __init__(self, rows: Iterable[Row] = ()) -> None:
        self._rows: tuple[Row, ...] = tuple(rows)

    @classmethod
    def load_lines(cls, lines: Iterable[str], tab_stop: int = DEFAULT_TAB_STOP) -> RowStore:
        if tab_stop < 1:
            raise ValueError("tab_stop must be >= 1")
        return cls(Row(line, tab_stop) for line in lines)

    def row_count(self) -> int:
        return len(self._rows)

    def row_at(self, index: int) -> Row:
        if not 0 <= index < len(self._rows):
            raise RowIndexError(f"row {index} out of range [0, {len(self._rows)})")
        return self._rows[index]

    def row_length(self, index: int) -> int:
        """Length of ``content`` at ``index``, or 0 for the one-past-end anchor row."""
        if index == len(self._rows):
            return 0
        return len(self.row_at(index))

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

"""Frame compositor for the viewer.

Builds one complete escape-coded frame from session state: content rows,
the inverse-video status bar, the message bar, and final cursor placement.
The frame is written with a single buffered write so the terminal never
shows a half-drawn screen.
"""

from __future__ import annotations

import os
import re

from ..errors import StreamError
from ..state import Session
from .bars import INVERT_SGR, RESET_SGR, banner_line, build_message_line, build_status_line

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CURSOR_HOME = "\x1b[H"
CLEAR_LINE = "\x1b[K"
CLEAR_SCREEN = "\x1b[2J"
LINE_BREAK = "\r\n"

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")

__all__ = [
    "CLEAR_SCREEN",
    "CURSOR_HOME",
    "banner_line",
    "build_frame",
    "build_message_line",
    "build_status_line",
    "content_rows",
    "render_frame",
    "sanitize_terminal_text",
    "write_all",
]


def sanitize_terminal_text(text: str) -> str:
    """Show each control character as one inverse-video ``?`` cell.

    One cell per character keeps display columns aligned with ``rx``.
    """
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(INVERT_SGR + "?" + RESET_SGR, text)


def content_rows(session: Session) -> list[str]:
    """Visible text for each content row, without line control codes."""
    viewport = session.viewport
    rows = session.rows
    num_rows = rows.row_count()
    out: list[str] = []
    for y in range(viewport.screen_rows):
        file_row = y + viewport.row_offset
        if file_row < num_rows:
            render = rows.row_at(file_row).render
            visible = render[viewport.col_offset : viewport.col_offset + viewport.screen_cols]
            out.append(sanitize_terminal_text(visible))
        elif num_rows == 0 and y == viewport.screen_rows // 3:
            out.append(banner_line(viewport.screen_cols))
        else:
            out.append("~")
    return out


def build_frame(session: Session, now: float | None = None) -> str:
    """Scroll the viewport into place and return the full frame text."""
    viewport = session.viewport
    viewport.scroll()

    out: list[str] = [HIDE_CURSOR, CURSOR_HOME]
    for line in content_rows(session):
        out.append(line)
        out.append(CLEAR_LINE)
        out.append(LINE_BREAK)

    out.append(INVERT_SGR)
    out.append(build_status_line(session))
    out.append(RESET_SGR)
    out.append(LINE_BREAK)

    out.append(CLEAR_LINE)
    out.append(build_message_line(session, now))

    cursor_row, cursor_col = viewport.screen_cursor()
    out.append(f"\x1b[{cursor_row + 1};{cursor_col + 1}H")
    out.append(SHOW_CURSOR)
    return "".join(out)


def write_all(fd: int, data: bytes) -> None:
    view = memoryview(data)
    try:
        while view:
            written = os.write(fd, view)
            view = view[written:]
    except OSError as exc:
        raise StreamError(f"write output: {exc}") from exc


def render_frame(session: Session, stdout_fd: int, now: float | None = None) -> None:
    write_all(stdout_fd, build_frame(session, now).encode("utf-8", errors="replace"))

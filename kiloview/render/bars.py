"""Status bar, message bar, and empty-buffer banner text."""

from __future__ import annotations

from .. import __version__
from ..state import Session

STATUS_FILENAME_MAX = 20
NO_NAME = "[No Name]"
INVERT_SGR = "\x1b[7m"
RESET_SGR = "\x1b[m"


def banner_line(screen_cols: int) -> str:
    """Centered welcome line with a leading ``~`` marker when there is room."""
    welcome = f"Kilo viewer -- version {__version__}"[:screen_cols]
    padding = (screen_cols - len(welcome)) // 2
    if padding <= 0:
        return welcome
    return "~" + " " * (padding - 1) + welcome


def build_status_line(session: Session) -> str:
    """Plain status text exactly ``screen_cols`` wide when both parts fit.

    The filename summary is left-aligned and the ``line/total`` indicator is
    right-aligned; when they collide the indicator is dropped.
    """
    cols = session.viewport.screen_cols
    num_rows = session.rows.row_count()
    name = (session.filename or NO_NAME)[:STATUS_FILENAME_MAX]
    status = f"{name} - {num_rows} lines"[:cols]
    line_status = f"{session.viewport.cy + 1}/{num_rows}"
    gap = cols - len(status) - len(line_status)
    if gap < 0:
        return status + " " * (cols - len(status))
    return status + " " * gap + line_status


def build_message_line(session: Session, now: float | None = None) -> str:
    if not session.status_message_visible(now):
        return ""
    return session.status_message[: session.viewport.screen_cols]

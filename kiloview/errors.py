"""Error kinds raised by the viewer.

Every failure is fatal: errors bubble up to ``runtime.app.run_viewer``,
which resets the screen, reports the message, and exits non-zero.
"""

from __future__ import annotations


class ViewerError(Exception):
    """Base class for all fatal viewer failures."""


class TerminalControlError(ViewerError):
    """Terminal mode save/restore or geometry query failed."""


class StreamError(ViewerError):
    """Read or write on the terminal byte streams failed (including EOF)."""


class FileAccessError(ViewerError):
    """The target file could not be opened or read."""


class FileNotFoundViewerError(FileAccessError):
    """The target file does not exist."""


class CursorParseError(ViewerError):
    """The terminal replied to a cursor-position query with malformed bytes."""


class RowIndexError(ViewerError, IndexError):
    """A row index fell outside ``[0, row_count)``."""

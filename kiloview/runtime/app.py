"""Runtime composition layer for kiloview.

Loads the buffer, enters raw mode, sizes the screen, and runs the loop.
This is the only place fatal ``ViewerError``s are caught and reported.
"""

from __future__ import annotations

import contextlib
import os
import sys
from pathlib import Path

from ..errors import ViewerError
from ..input import FdByteSource, KeyDecoder
from ..render import CLEAR_SCREEN, CURSOR_HOME
from ..rows import RowStore
from ..source import load_file, read_text
from ..state import Session
from .config import ViewerConfig
from .loop import run_main_loop
from .terminal import TerminalController

RESERVED_BAR_ROWS = 2
HELP_MESSAGE = "HELP: Ctrl-Q = quit"


def die(error: BaseException, stdout_fd: int) -> None:
    """Best-effort screen reset on a terminal, then report ``error`` on stderr."""
    with contextlib.suppress(OSError):
        if os.isatty(stdout_fd):
            os.write(stdout_fd, (CLEAR_SCREEN + CURSOR_HOME).encode("ascii"))
    sys.stderr.write(f"kiloview: {error}\n")
    sys.stderr.flush()


def _print_plain(path: Path | None) -> None:
    if path is not None:
        sys.stdout.write(read_text(path))
        sys.stdout.flush()


def run_viewer(
    path: Path | None,
    config: ViewerConfig,
    nopager: bool = False,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> int:
    """Run one viewing session and return the process exit status.

    ``0`` on a clean Ctrl-Q quit or plain (non-interactive) output, ``1`` on
    any fatal error. The terminal mode is restored before the error is
    reported.
    """
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()

    try:
        if nopager or not os.isatty(stdin_fd):
            _print_plain(path)
            return 0

        lines = load_file(path) if path is not None else []
        rows = RowStore.load_lines(lines, config.tab_stop)
        terminal = TerminalController(stdin_fd, stdout_fd)
        with terminal.raw_mode():
            screen_rows, screen_cols = terminal.query_screen_size()
            session = Session.create(
                rows,
                screen_rows - RESERVED_BAR_ROWS,
                screen_cols,
                filename=str(path) if path is not None else "",
                message_seconds=config.message_seconds,
            )
            session.set_status_message(HELP_MESSAGE)
            decoder = KeyDecoder(FdByteSource(stdin_fd), config.escape_timeout_ms)
            run_main_loop(session, decoder, stdout_fd)
    except ViewerError as exc:
        die(exc, stdout_fd)
        return 1
    return 0

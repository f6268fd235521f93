"""Terminal control helpers for the viewer session.

Owns the raw-mode lifecycle and alternate-screen switching, plus the screen
geometry query used once at startup.
"""

from __future__ import annotations

import contextlib
import os
import re
import termios
import tty

from ..errors import CursorParseError, StreamError, TerminalControlError

CURSOR_FAR_CORNER = b"\x1b[999C\x1b[999B"
CURSOR_POSITION_REQUEST = b"\x1b[6n"
_CURSOR_REPLY_RE = re.compile(rb"\x1b\[(\d+);(\d+)")
_CURSOR_REPLY_MAX_BYTES = 32


def parse_cursor_reply(reply: bytes) -> tuple[int, int]:
    """Parse ``ESC [ rows ; cols`` (the bytes before the final ``R``)."""
    match = _CURSOR_REPLY_RE.fullmatch(reply)
    if match is None:
        raise CursorParseError(f"failed to parse cursor position reply {reply!r}")
    return int(match.group(1)), int(match.group(2))


class TerminalController:
    """Capture, switch, and restore terminal modes for one session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalControlError(f"capture terminal mode: {exc}") from exc

    def _write(self, data: bytes) -> None:
        try:
            os.write(self.stdout_fd, data)
        except OSError as exc:
            raise StreamError(f"write output: {exc}") from exc

    def enable_raw_mode(self) -> None:
        """Enter raw mode on the alternate screen."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalControlError(f"apply raw mode: {exc}") from exc
        self._write(b"\x1b[?1049h")

    def disable_raw_mode(self) -> None:
        """Show the cursor, leave the alternate screen, and restore the saved mode."""
        with contextlib.suppress(OSError):
            os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except termios.error as exc:
            raise TerminalControlError(f"restore terminal mode: {exc}") from exc

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that restores the original mode on every exit path."""
        try:
            self.enable_raw_mode()
            yield
        finally:
            self.disable_raw_mode()

    def _read_cursor_reply(self) -> bytes:
        buffer = bytearray()
        while len(buffer) < _CURSOR_REPLY_MAX_BYTES:
            try:
                ch = os.read(self.stdin_fd, 1)
            except OSError as exc:
                raise StreamError(f"read cursor position: {exc}") from exc
            if not ch:
                raise StreamError("read cursor position: end of stream")
            if ch == b"R":
                return bytes(buffer)
            buffer += ch
        raise CursorParseError("cursor position reply too long")

    def query_cursor_size(self) -> tuple[int, int]:
        """Move the cursor to the far corner and ask the terminal where it landed."""
        self._write(CURSOR_FAR_CORNER + CURSOR_POSITION_REQUEST)
        return parse_cursor_reply(self._read_cursor_reply())

    def query_screen_size(self) -> tuple[int, int]:
        """Return ``(rows, cols)``, preferring the OS window size over the cursor probe."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = None
        if size is not None and size.lines > 0 and size.columns > 0:
            return size.lines, size.columns
        return self.query_cursor_size()

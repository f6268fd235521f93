"""Low-level terminal input decoding.

Reads raw bytes from a file descriptor and turns them into ``KeyEvent``s.
Escape sequences are tokenized by a small state machine with bounded
lookahead; a stalled sequence times out into ``BareEscape``.
"""

from __future__ import annotations

import os
import select
from collections import deque
from enum import Enum

from ..errors import StreamError
from .keys import ESC, BareEscape, Key, KeyEvent, LiteralKey, NamedKey

ESC_SEQUENCE_TIMEOUT_MS = 25

_CSI_FINAL_KEYS = {
    ord("A"): Key.ARROW_UP,
    ord("B"): Key.ARROW_DOWN,
    ord("C"): Key.ARROW_RIGHT,
    ord("D"): Key.ARROW_LEFT,
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}
_SS3_FINAL_KEYS = {
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}
_TILDE_DIGIT_KEYS = {
    ord("1"): Key.HOME,
    ord("3"): Key.DELETE,
    ord("4"): Key.END,
    ord("5"): Key.PAGE_UP,
    ord("6"): Key.PAGE_DOWN,
    ord("7"): Key.HOME,
    ord("8"): Key.END,
}
# ESC 0 is accepted as an SS3 introducer alongside ESC O.
_SS3_INTRODUCERS = {ord("O"), ord("0")}
_CSI_INTRODUCER = ord("[")


class DecoderState(Enum):
    IDLE = "idle"
    SAW_ESCAPE = "saw_escape"
    SAW_BRACKET_OR_O = "saw_bracket_or_o"
    AWAITING_TILDE = "awaiting_tilde"


class FdByteSource:
    """Blocking one-byte reader over a file descriptor."""

    def __init__(self, fd: int) -> None:
        self.fd = fd

    def read_byte(self, timeout_ms: int | None = None) -> int | None:
        """Return the next byte, or ``None`` if ``timeout_ms`` elapses first.

        End of stream and OS read failures raise ``StreamError``.
        """
        try:
            if timeout_ms is not None:
                ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
                if not ready:
                    return None
            ch = os.read(self.fd, 1)
        except OSError as exc:
            raise StreamError(f"read input: {exc}") from exc
        if not ch:
            raise StreamError("read input: end of stream")
        return ch[0]


class KeyDecoder:
    """Decode one logical key per ``next_key`` call."""

    def __init__(self, source: FdByteSource, escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> None:
        self.source = source
        self.escape_timeout_ms = escape_timeout_ms
        self._pending: deque[int] = deque()
        self.state = DecoderState.IDLE

    def _read(self, timeout_ms: int | None = None) -> int | None:
        if self._pending:
            return self._pending.popleft()
        return self.source.read_byte(timeout_ms)

    def next_key(self) -> KeyEvent:
        self.state = DecoderState.IDLE
        try:
            return self._decode()
        finally:
            self.state = DecoderState.IDLE

    def _decode(self) -> KeyEvent:
        introducer = 0
        digit = 0
        while True:
            if self.state is DecoderState.IDLE:
                byte = self._read()
                if byte is None:
                    continue
                if byte != ESC:
                    return LiteralKey(byte)
                self.state = DecoderState.SAW_ESCAPE
                continue

            byte = self._read(self.escape_timeout_ms)
            if byte is None:
                return BareEscape()

            if self.state is DecoderState.SAW_ESCAPE:
                if byte == _CSI_INTRODUCER or byte in _SS3_INTRODUCERS:
                    introducer = byte
                    self.state = DecoderState.SAW_BRACKET_OR_O
                    continue
                # Not a sequence: hand the byte back as the next key.
                self._pending.append(byte)
                return BareEscape()

            if self.state is DecoderState.SAW_BRACKET_OR_O:
                if introducer == _CSI_INTRODUCER:
                    if ord("0") <= byte <= ord("9"):
                        digit = byte
                        self.state = DecoderState.AWAITING_TILDE
                        continue
                    key = _CSI_FINAL_KEYS.get(byte)
                else:
                    key = _SS3_FINAL_KEYS.get(byte)
                return BareEscape() if key is None else NamedKey(key)

            key = _TILDE_DIGIT_KEYS.get(digit)
            if byte != ord("~") or key is None:
                return BareEscape()
            return NamedKey(key)

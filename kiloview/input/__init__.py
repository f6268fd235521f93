"""Input-layer public API: key event types and the raw-byte decoder."""

from .keys import QUIT_KEY, BareEscape, Key, KeyEvent, LiteralKey, NamedKey, ctrl_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, DecoderState, FdByteSource, KeyDecoder

__all__ = [
    "BareEscape",
    "DecoderState",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "FdByteSource",
    "Key",
    "KeyDecoder",
    "KeyEvent",
    "LiteralKey",
    "NamedKey",
    "QUIT_KEY",
    "ctrl_key",
]

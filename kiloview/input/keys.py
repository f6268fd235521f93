"""Logical key events produced by the decoder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

ESC = 0x1B


class Key(Enum):
    ARROW_LEFT = "ARROW_LEFT"
    ARROW_RIGHT = "ARROW_RIGHT"
    ARROW_UP = "ARROW_UP"
    ARROW_DOWN = "ARROW_DOWN"
    DELETE = "DELETE"
    PAGE_UP = "PAGE_UP"
    PAGE_DOWN = "PAGE_DOWN"
    HOME = "HOME"
    END = "END"


@dataclass(frozen=True)
class LiteralKey:
    """A single non-escape byte, printable or control."""

    byte: int

    @property
    def is_control(self) -> bool:
        return self.byte < 32 or self.byte == 127


@dataclass(frozen=True)
class NamedKey:
    key: Key


@dataclass(frozen=True)
class BareEscape:
    """ESC on its own, or an escape sequence the decoder does not recognize."""


KeyEvent = Union[LiteralKey, NamedKey, BareEscape]


def ctrl_key(ch: str) -> int:
    """Byte sent by the terminal for Ctrl+``ch``."""
    return ord(ch) & 0x1F


QUIT_KEY = LiteralKey(ctrl_key("q"))

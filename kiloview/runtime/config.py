"""Read-only JSON config helpers.

Supplies tab-stop width, escape-sequence timeout, and message lifetime.
All access is defensive: malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..input import ESC_SEQUENCE_TIMEOUT_MS
from ..rows import DEFAULT_TAB_STOP
from ..state import STATUS_MESSAGE_SECONDS

APP_NAME = "kiloview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

TAB_STOP_RANGE = (1, 16)
ESCAPE_TIMEOUT_RANGE_MS = (0, 1000)


@dataclass(frozen=True)
class ViewerConfig:
    tab_stop: int = DEFAULT_TAB_STOP
    escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS
    message_seconds: float = STATUS_MESSAGE_SECONDS


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _bounded_int(value: object, bounds: tuple[int, int], default: int) -> int:
    """Accept only real integers inside ``bounds``; booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    low, high = bounds
    if value < low or value > high:
        return default
    return value


def load_viewer_config() -> ViewerConfig:
    data = load_config()
    message_seconds = data.get("message_seconds")
    if isinstance(message_seconds, bool) or not isinstance(message_seconds, (int, float)) or message_seconds <= 0:
        message_seconds = STATUS_MESSAGE_SECONDS
    return ViewerConfig(
        tab_stop=_bounded_int(data.get("tab_stop"), TAB_STOP_RANGE, DEFAULT_TAB_STOP),
        escape_timeout_ms=_bounded_int(
            data.get("escape_timeout_ms"), ESCAPE_TIMEOUT_RANGE_MS, ESC_SEQUENCE_TIMEOUT_MS
        ),
        message_seconds=float(message_seconds),
    )

"""Command-line front door for kiloview.

Parses CLI options, merges them over the JSON config, and dispatches into
the interactive viewer runtime. Exits with the runtime's status code.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from . import __version__
from .runtime import run_viewer
from .runtime.config import ESCAPE_TIMEOUT_RANGE_MS, TAB_STOP_RANGE, load_viewer_config


def _bounded_int(bounds: tuple[int, int]):
    """Build an argparse type accepting integers inside ``bounds``."""
    low, high = bounds

    def parse(value: str) -> int:
        try:
            parsed = int(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
        if parsed < low or parsed > high:
            raise argparse.ArgumentTypeError(f"value must be between {low} and {high}")
        return parsed

    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kiloview",
        description="View a text file in a full-screen terminal viewer.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Path to file. Omit for an empty buffer.")
    parser.add_argument(
        "--tab-stop",
        type=_bounded_int(TAB_STOP_RANGE),
        default=None,
        help="Tab stop width in columns (default: config value or 4).",
    )
    parser.add_argument(
        "--escape-timeout-ms",
        type=_bounded_int(ESCAPE_TIMEOUT_RANGE_MS),
        default=None,
        help="How long to wait for the rest of an escape sequence (default: config value or 25).",
    )
    parser.add_argument("--nopager", action="store_true", help="Print the file directly without the viewer.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, run the viewer, and exit with its status."""
    args = build_parser().parse_args(argv)

    config = load_viewer_config()
    if args.tab_stop is not None:
        config = replace(config, tab_stop=args.tab_stop)
    if args.escape_timeout_ms is not None:
        config = replace(config, escape_timeout_ms=args.escape_timeout_ms)

    path = Path(args.path) if args.path is not None else None
    raise SystemExit(run_viewer(path, config, args.nopager))


if __name__ == "__main__":
    main()

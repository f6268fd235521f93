"""File loading for the viewer buffer."""

from __future__ import annotations

from pathlib import Path

from .errors import FileAccessError, FileNotFoundViewerError


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics. Open/read failures raise
    ``FileAccessError``.
    """
    try:
        for encoding in ("utf-8", "utf-8-sig", "latin-1"):
            try:
                return path.read_text(encoding=encoding)
            except UnicodeDecodeError:
                continue
        return path.read_bytes().decode("utf-8", errors="replace")
    except FileNotFoundError as exc:
        raise FileNotFoundViewerError(f"open file: {path}: no such file") from exc
    except OSError as exc:
        raise FileAccessError(f"open file: {path}: {exc.strerror or exc}") from exc


def split_lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping one trailing ``\\r`` per line and the empty tail."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_file(path: Path) -> list[str]:
    if path.is_dir():
        raise FileAccessError(f"open file: {path}: is a directory")
    return split_lines(read_text(path))

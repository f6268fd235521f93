"""Tests for viewer bootstrap, exit status, and fatal error reporting."""

from __future__ import annotations

import contextlib
import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from kiloview.errors import StreamError
from kiloview.runtime import app
from kiloview.runtime.config import ViewerConfig


class FakeTerminal:
    instances: list["FakeTerminal"] = []

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.events: list[str] = []
        FakeTerminal.instances.append(self)

    @contextlib.contextmanager
    def raw_mode(self):
        self.events.append("enter")
        try:
            yield
        finally:
            self.events.append("exit")

    def query_screen_size(self) -> tuple[int, int]:
        return 24, 80


class RunViewerTests(unittest.TestCase):
    def setUp(self) -> None:
        FakeTerminal.instances.clear()
        self.out_read_fd, self.out_write_fd = os.pipe()

    def tearDown(self) -> None:
        os.close(self.out_read_fd)
        os.close(self.out_write_fd)

    def _run(self, path: Path | None, loop_side_effect=None) -> tuple[int, mock.MagicMock, str]:
        stderr = io.StringIO()
        with mock.patch("kiloview.runtime.app.os.isatty", return_value=True), mock.patch(
            "kiloview.runtime.app.TerminalController", FakeTerminal
        ), mock.patch("kiloview.runtime.app.run_main_loop", side_effect=loop_side_effect) as loop_mock, redirect_stderr(
            stderr
        ):
            status = app.run_viewer(path, ViewerConfig(tab_stop=8), stdin_fd=0, stdout_fd=self.out_write_fd)
        return status, loop_mock, stderr.getvalue()

    def test_clean_session_returns_zero(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "doc.txt"
            path.write_text("a\tb\nsecond\n", encoding="utf-8")
            status, loop_mock, stderr = self._run(path)

        self.assertEqual(status, 0)
        self.assertEqual(stderr, "")
        session = loop_mock.call_args.args[0]
        self.assertEqual(session.rows.row_count(), 2)
        self.assertEqual(session.rows.row_at(0).render, "a       b")
        self.assertEqual((session.viewport.screen_rows, session.viewport.screen_cols), (22, 80))
        self.assertEqual(session.filename, str(path))
        self.assertEqual(session.status_message, app.HELP_MESSAGE)
        self.assertEqual(FakeTerminal.instances[0].events, ["enter", "exit"])

    def test_no_path_starts_empty_buffer(self) -> None:
        status, loop_mock, _stderr = self._run(None)
        self.assertEqual(status, 0)
        session = loop_mock.call_args.args[0]
        self.assertEqual(session.rows.row_count(), 0)
        self.assertEqual(session.filename, "")

    def test_loop_error_restores_terminal_and_returns_one(self) -> None:
        status, _loop_mock, stderr = self._run(None, loop_side_effect=StreamError("read input: end of stream"))

        self.assertEqual(status, 1)
        self.assertEqual(FakeTerminal.instances[0].events, ["enter", "exit"])
        self.assertEqual(stderr, "kiloview: read input: end of stream\n")
        self.assertEqual(os.read(self.out_read_fd, 64), b"\x1b[2J\x1b[H")

    def test_missing_file_fails_before_raw_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            status, loop_mock, stderr = self._run(Path(tmp) / "missing.txt")

        self.assertEqual(status, 1)
        self.assertTrue(stderr.startswith("kiloview: open file:"))
        self.assertEqual(FakeTerminal.instances, [])
        loop_mock.assert_not_called()

    def test_missing_file_on_plain_output_skips_screen_reset(self) -> None:
        stderr = io.StringIO()
        with tempfile.TemporaryDirectory() as tmp, redirect_stderr(stderr):
            status = app.run_viewer(
                Path(tmp) / "missing.txt", ViewerConfig(), nopager=True, stdin_fd=0, stdout_fd=self.out_write_fd
            )

        self.assertEqual(status, 1)
        self.assertTrue(stderr.getvalue().startswith("kiloview: open file:"))
        os.set_blocking(self.out_read_fd, False)
        with self.assertRaises(BlockingIOError):
            os.read(self.out_read_fd, 64)

    def test_nopager_prints_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "doc.txt"
            path.write_text("plain\n", encoding="utf-8")
            stdout = io.StringIO()
            with redirect_stdout(stdout), mock.patch("kiloview.runtime.app.TerminalController") as terminal_mock:
                status = app.run_viewer(path, ViewerConfig(), nopager=True, stdin_fd=0, stdout_fd=self.out_write_fd)

        self.assertEqual(status, 0)
        self.assertEqual(stdout.getvalue(), "plain\n")
        terminal_mock.assert_not_called()

    def test_non_tty_stdin_prints_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "doc.txt"
            path.write_text("piped\n", encoding="utf-8")
            stdout = io.StringIO()
            with redirect_stdout(stdout), mock.patch("kiloview.runtime.app.os.isatty", return_value=False):
                status = app.run_viewer(path, ViewerConfig(), stdin_fd=0, stdout_fd=self.out_write_fd)

        self.assertEqual(status, 0)
        self.assertEqual(stdout.getvalue(), "piped\n")


if __name__ == "__main__":
    unittest.main()

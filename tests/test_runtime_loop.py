"""Tests for key dispatch and the main render/input loop."""

from __future__ import annotations

import os
import unittest
from unittest import mock

from kiloview.errors import StreamError
from kiloview.input import QUIT_KEY, BareEscape, FdByteSource, Key, KeyDecoder, LiteralKey, NamedKey
from kiloview.rows import RowStore
from kiloview.runtime.loop import process_keypress, run_main_loop
from kiloview.state import Session


def make_session(lines: list[str]) -> Session:
    return Session.create(RowStore.load_lines(lines), 5, 20)


class ProcessKeypressTests(unittest.TestCase):
    def test_quit_clears_screen_and_stops(self) -> None:
        session = make_session(["a"])
        with mock.patch("kiloview.render.os.write", side_effect=lambda fd, data: len(data)) as write_mock:
            process_keypress(session, QUIT_KEY, 1)

        self.assertFalse(session.running)
        write_mock.assert_called_once()
        self.assertEqual(bytes(write_mock.call_args.args[1]), b"\x1b[2J\x1b[H")

    def test_navigation_keys_move_viewport(self) -> None:
        session = make_session(["abc", "de"])
        process_keypress(session, NamedKey(Key.ARROW_DOWN), 1)
        process_keypress(session, NamedKey(Key.END), 1)
        self.assertEqual((session.viewport.cy, session.viewport.cx), (1, 2))
        process_keypress(session, NamedKey(Key.ARROW_RIGHT), 1)
        process_keypress(session, NamedKey(Key.HOME), 1)
        process_keypress(session, NamedKey(Key.ARROW_LEFT), 1)
        self.assertEqual((session.viewport.cy, session.viewport.cx), (0, 3))
        process_keypress(session, NamedKey(Key.PAGE_DOWN), 1)
        self.assertEqual(session.viewport.cy, 2)
        process_keypress(session, NamedKey(Key.PAGE_UP), 1)
        process_keypress(session, NamedKey(Key.ARROW_UP), 1)
        self.assertEqual(session.viewport.cy, 0)

    def test_other_keys_are_ignored(self) -> None:
        session = make_session(["abc"])
        for event in (LiteralKey(ord("x")), LiteralKey(0x7F), BareEscape(), NamedKey(Key.DELETE)):
            process_keypress(session, event, 1)
        self.assertTrue(session.running)
        self.assertEqual((session.viewport.cy, session.viewport.cx), (0, 0))
        self.assertEqual([row.content for row in session.rows], ["abc"])


class RunMainLoopTests(unittest.TestCase):
    def _run(self, payload: bytes, close_writer: bool) -> tuple[Session, list[tuple[int, int]]]:
        session = make_session(["abc", "defg", "hi"])
        frames: list[tuple[int, int]] = []

        def fake_render(current: Session, _fd: int) -> None:
            frames.append((current.viewport.cy, current.viewport.cx))

        read_fd, write_fd = os.pipe()
        os.write(write_fd, payload)
        if close_writer:
            os.close(write_fd)
        try:
            decoder = KeyDecoder(FdByteSource(read_fd), escape_timeout_ms=20)
            with mock.patch("kiloview.render.os.write", side_effect=lambda fd, data: len(data)):
                run_main_loop(session, decoder, 1, render=fake_render)
        finally:
            os.close(read_fd)
            if not close_writer:
                os.close(write_fd)
        return session, frames

    def test_loop_renders_before_each_key_until_quit(self) -> None:
        session, frames = self._run(b"\x1b[B\x1b[Cx\x11", close_writer=False)
        self.assertFalse(session.running)
        self.assertEqual(frames, [(0, 0), (1, 0), (1, 1), (1, 1)])

    def test_decode_errors_propagate(self) -> None:
        with self.assertRaises(StreamError):
            self._run(b"\x1b[B", close_writer=True)


if __name__ == "__main__":
    unittest.main()

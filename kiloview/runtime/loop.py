"""Main interactive event loop for the viewer.

Each iteration renders one frame, decodes one key, and dispatches it.
Decode and render errors are not caught here; they propagate to the caller.
"""

from __future__ import annotations

from collections.abc import Callable

from ..input import QUIT_KEY, Key, KeyDecoder, KeyEvent, NamedKey
from ..render import CLEAR_SCREEN, CURSOR_HOME, render_frame, write_all
from ..state import Session
from ..viewport import Viewport

NAVIGATION_ACTIONS: dict[Key, Callable[[Viewport], None]] = {
    Key.ARROW_LEFT: Viewport.move_left,
    Key.ARROW_RIGHT: Viewport.move_right,
    Key.ARROW_UP: Viewport.move_up,
    Key.ARROW_DOWN: Viewport.move_down,
    Key.PAGE_UP: Viewport.page_up,
    Key.PAGE_DOWN: Viewport.page_down,
    Key.HOME: Viewport.home,
    Key.END: Viewport.end,
}


def process_keypress(session: Session, event: KeyEvent, stdout_fd: int) -> None:
    """Apply one decoded key to the session.

    Ctrl-Q clears the screen and stops the session; navigation keys move the
    viewport; everything else (including Delete) is ignored by the viewer.
    """
    if event == QUIT_KEY:
        write_all(stdout_fd, (CLEAR_SCREEN + CURSOR_HOME).encode("ascii"))
        session.running = False
        return
    if isinstance(event, NamedKey):
        action = NAVIGATION_ACTIONS.get(event.key)
        if action is not None:
            action(session.viewport)


def run_main_loop(
    session: Session,
    decoder: KeyDecoder,
    stdout_fd: int,
    render: Callable[[Session, int], None] = render_frame,
) -> None:
    """Render and dispatch keys until the session stops running."""
    while session.running:
        render(session, stdout_fd)
        process_keypress(session, decoder.next_key(), stdout_fd)

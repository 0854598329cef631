"""Curses front end: draws the top frame and turns keys into dispatcher events."""

from __future__ import annotations

import curses
import logging
from typing import Optional

from dvach.dispatcher import Cancel, Confirm, CursorMoved, Dispatcher, Event, FilterEdited, Quit
from dvach.navigation import NavigationStack, PostsFrame, ViewFrame

logger = logging.getLogger(__name__)

KEY_ESC = 27
KEY_CTRL_X = 24
ENTER_KEYS = (curses.KEY_ENTER, 10, 13)
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)

LIST_HELP = "type to filter  Up/Down move  Enter open  Esc back  F10 quit"
POSTS_HELP = "Up/Down PgUp/PgDn scroll  Esc back  F10 quit"

# Rows taken by title, filter input and help line
CHROME_ROWS = 3


def key_to_event(key: int | str, frame: ViewFrame, page: int) -> Optional[Event]:
    """
    Translate a key from `get_wch` into an event for `frame`, or None to ignore it.

    Characters arrive as str and function keys as int; control characters
    are matched by their code either way.
    """
    if isinstance(key, str) and len(key) == 1 and (ord(key) < 32 or ord(key) == 127):
        key = ord(key)

    if isinstance(key, str):
        if isinstance(frame, PostsFrame) or not key.isprintable():
            return None
        return FilterEdited(frame.entries.needle + key)

    if key in (curses.KEY_F10, KEY_CTRL_X):
        return Quit()
    if key == KEY_ESC:
        return Cancel()
    if key in ENTER_KEYS:
        return Confirm()

    if key == curses.KEY_UP:
        return CursorMoved(-1)
    if key == curses.KEY_DOWN:
        return CursorMoved(1)
    if key == curses.KEY_PPAGE:
        return CursorMoved(-page)
    if key == curses.KEY_NPAGE:
        return CursorMoved(page)
    if key == curses.KEY_HOME:
        return CursorMoved(-(1 << 30))
    if key == curses.KEY_END:
        return CursorMoved(1 << 30)

    if key in BACKSPACE_KEYS and not isinstance(frame, PostsFrame):
        needle = frame.entries.needle
        return FilterEdited(needle[:-1]) if needle else None
    return None


class Screen:
    """Draws frames onto a curses window."""

    def __init__(self, stdscr):
        self.stdscr = stdscr

    @property
    def page(self) -> int:
        height, _ = self.stdscr.getmaxyx()
        return max(1, height - CHROME_ROWS)

    def read_key(self) -> int | str:
        return self.stdscr.get_wch()

    def draw(self, frame: ViewFrame) -> None:
        self.stdscr.erase()
        height, _ = self.stdscr.getmaxyx()

        self._safe_addstr(0, 0, frame.title, curses.A_BOLD)
        if isinstance(frame, PostsFrame):
            self._draw_posts(frame)
            self._safe_addstr(height - 1, 0, POSTS_HELP, curses.A_DIM)
        else:
            self._draw_list(frame)
            self._safe_addstr(height - 1, 0, LIST_HELP, curses.A_DIM)
            # Keep the terminal cursor at the end of the filter input
            self._move(1, 2 + len(frame.entries.needle))
        self.stdscr.refresh()

    def status(self, text: str) -> None:
        """Replace the help line with `text` and show it immediately."""
        height, _ = self.stdscr.getmaxyx()
        self.stdscr.move(height - 1, 0)
        self.stdscr.clrtoeol()
        self._safe_addstr(height - 1, 0, text, curses.A_BOLD)
        self.stdscr.refresh()

    def _draw_list(self, frame: ViewFrame) -> None:
        model = frame.entries
        self._safe_addstr(1, 0, f"> {model.needle}")

        page = self.page
        offset = max(0, model.cursor - page + 1)
        for row, entry in enumerate(model.visible[offset:offset + page]):
            attr = curses.A_REVERSE if offset + row == model.cursor else curses.A_NORMAL
            self._safe_addstr(2 + row, 0, entry.label, attr)

    def _draw_posts(self, frame: PostsFrame) -> None:
        page = self.page + 1
        for row, line in enumerate(frame.lines[frame.scroll:frame.scroll + page]):
            self._safe_addstr(1 + row, 0, line)

    def _safe_addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        height, width = self.stdscr.getmaxyx()
        if y < 0 or y >= height or x >= width:
            return
        text = text.replace("\t", " ")[: width - x]
        # Writing the bottom-right cell scrolls the window
        if y == height - 1:
            text = text[: width - x - 1]
        if not text:
            return
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass

    def _move(self, y: int, x: int) -> None:
        height, width = self.stdscr.getmaxyx()
        try:
            self.stdscr.move(min(y, height - 1), min(x, width - 1))
        except curses.error:
            pass


def run_session(stack: NavigationStack) -> None:
    """
    Run the interactive session until quit.

    curses.wrapper restores the terminal on every exit path, including
    fetch failures propagating out of the loop.
    """
    curses.wrapper(_main, stack)


def _main(stdscr, stack: NavigationStack) -> None:
    # Esc cancels; do not wait a full second for an escape sequence
    curses.set_escdelay(25)
    try:
        curses.curs_set(1)
    except curses.error:
        pass
    stdscr.keypad(True)

    screen = Screen(stdscr)
    screen.status("Loading boards...")
    stack.start()

    dispatcher = Dispatcher(stack)
    running = True
    while running:
        screen.draw(stack.top)
        key = screen.read_key()
        if key == curses.KEY_RESIZE:
            continue
        event = key_to_event(key, stack.top, screen.page)
        if event is None:
            continue
        if isinstance(event, Confirm):
            # Opening a frame blocks on a fetch
            screen.status("Loading...")
        running = dispatcher.dispatch(event)
    logger.info("Terminal session finished: depth=%s", stack.depth)

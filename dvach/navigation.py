from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Union

from dvach.api import DvachApi
from dvach.formatting import board_label, format_post, thread_label
from dvach.listmodel import FilterableList
from dvach.models import ListEntry

logger = logging.getLogger(__name__)


@dataclass
class BoardsFrame:
    entries: FilterableList

    @property
    def title(self) -> str:
        return "dvach"


@dataclass
class ThreadsFrame:
    board_id: str
    entries: FilterableList

    @property
    def title(self) -> str:
        return f"/{self.board_id}/"


@dataclass
class PostsFrame:
    board_id: str
    thread_id: str
    blocks: tuple[str, ...]
    # Index of the first rendered line shown on screen
    scroll: int = 0
    lines: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        out: list[str] = []
        for block in self.blocks:
            out.extend(block.split("\n"))
            out.append("")
        self.lines = tuple(out)

    @property
    def title(self) -> str:
        return f"/{self.board_id}/ #{self.thread_id}"

    def scroll_by(self, delta: int) -> None:
        self.scroll = max(0, min(len(self.lines) - 1, self.scroll + delta))


ViewFrame = Union[BoardsFrame, ThreadsFrame, PostsFrame]


class NavigationStack:
    """
    Stack of view frames: Boards -> Threads(board) -> Posts(board, thread).

    Only the top frame is interactive. Every push follows a confirmed
    selection in the frame below and carries the selected key as its scope.
    Popping hands back the parent frame object exactly as it was left;
    nothing is cached, so pushing again re-fetches.
    """

    def __init__(self, api: DvachApi, comment_width: int = 80):
        self.api = api
        self.comment_width = comment_width
        self._frames: list[ViewFrame] = []
        self._running = False

    @property
    def frames(self) -> tuple[ViewFrame, ...]:
        return tuple(self._frames)

    @property
    def top(self) -> ViewFrame:
        return self._frames[-1]

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> BoardsFrame:
        """Fetch boards and install the root frame."""
        boards = sorted(self.api.fetch_boards(), key=lambda b: b.id)
        root = BoardsFrame(FilterableList(ListEntry(board_label(b), b.id) for b in boards))
        self._frames = [root]
        self._running = True
        logger.info("Session started: boards=%s", len(boards))
        return root

    def confirm(self) -> None:
        """Open the entry under the cursor of the top frame, if any."""
        frame = self.top
        if isinstance(frame, PostsFrame):
            return

        key = frame.entries.selected_key()
        if key is None:
            return

        if isinstance(frame, BoardsFrame):
            self.push_threads(key)
        else:
            self.push_posts(frame.board_id, key)

    def push_threads(self, board_id: str) -> ThreadsFrame:
        threads = sorted(self.api.fetch_threads(board_id), key=lambda t: t.id)
        frame = ThreadsFrame(
            board_id=board_id,
            entries=FilterableList(ListEntry(thread_label(t), t.id) for t in threads),
        )
        self._frames.append(frame)
        logger.info("Opened board: board=%s threads=%s depth=%s", board_id, len(threads), self.depth)
        return frame

    def push_posts(self, board_id: str, thread_id: str) -> PostsFrame:
        # Posts keep API order
        posts = self.api.fetch_posts(board_id, thread_id)
        frame = PostsFrame(
            board_id=board_id,
            thread_id=thread_id,
            blocks=tuple(format_post(p, self.comment_width) for p in posts),
        )
        self._frames.append(frame)
        logger.info(
            "Opened thread: board=%s thread=%s posts=%s depth=%s",
            board_id, thread_id, len(posts), self.depth,
        )
        return frame

    def cancel(self) -> None:
        """Pop the top frame; at the root this ends the session."""
        if self.depth <= 1:
            self.quit()
            return
        popped = self._frames.pop()
        logger.debug("Closed frame: title=%s depth=%s", popped.title, self.depth)

    def quit(self) -> None:
        self._running = False
        logger.info("Session ended")

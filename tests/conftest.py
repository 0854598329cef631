from __future__ import annotations

import pytest

from dvach.models import Board, Image, Post, Thread
from dvach.navigation import NavigationStack


class FakeApi:
    """In-memory stand-in for DvachApi that records every fetch."""

    def __init__(self):
        self.calls: list[tuple] = []

    def fetch_boards(self) -> list[Board]:
        self.calls.append(("boards",))
        return [
            Board(id="pr", category="Tech", name="Programming"),
            Board(id="b", category="Misc", name="Random"),
            Board(id="po", category="Politics", name="Politics"),
        ]

    def fetch_threads(self, board_id: str) -> list[Thread]:
        self.calls.append(("threads", board_id))
        return [
            Thread(id="300", subject="c", comment="<b>third</b> thread"),
            Thread(id="100", subject="a", comment="first<br>line"),
            Thread(id="200", subject="b", comment="second"),
        ]

    def fetch_posts(self, board_id: str, thread_id: str) -> list[Post]:
        self.calls.append(("posts", board_id, thread_id))
        return [
            Post(id=102, comment="<p>late reply</p>", date="02/01/20 Чтв 10:00:00"),
            Post(
                id=100,
                comment="op<br>text",
                date="01/01/20 Срд 09:00:00",
                images=(Image(name="15.png", fullname="cat.png", path="/pr/src/100/15.png"),),
            ),
        ]


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def stack(fake_api: FakeApi) -> NavigationStack:
    s = NavigationStack(fake_api, comment_width=80)
    s.start()
    return s

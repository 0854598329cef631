from __future__ import annotations

import logging
from typing import Any, BinaryIO

from dvach.errors import DecodeFailure, InvariantViolation
from dvach.http_client import HttpClient
from dvach.models import Board, Image, Post, Thread

logger = logging.getLogger(__name__)


class DvachApi:
    """
    Read-only client for the board service JSON API.

    Scope:
    - Boards list:  <base>/makaba/mobile.fcgi?task=get_boards
    - Board catalog: <base>/<board>/catalog.json
    - Thread posts: <base>/<board>/res/<thread>.json
    - Files:        <base><relative path>

    The boards list comes from the "mobile" API because the JSON API has no
    board listing.
    """

    BOARDS_PATH = "/makaba/mobile.fcgi?task=get_boards"

    def __init__(self, base_url: str, http: HttpClient):
        self.base_url = base_url.rstrip("/")
        self.http = http

    def fetch_boards(self) -> list[Board]:
        url = f"{self.base_url}{self.BOARDS_PATH}"
        logger.info("Fetching boards: url=%s", url)
        return self._parse_boards(self.http.get_json(url))

    def fetch_threads(self, board_id: str) -> list[Thread]:
        url = f"{self.base_url}/{board_id}/catalog.json"
        logger.info("Fetching threads: board=%s url=%s", board_id, url)
        return self._parse_threads(self.http.get_json(url))

    def fetch_posts(self, board_id: str, thread_id: int | str) -> list[Post]:
        """
        Fetch all posts of a thread, in API order.

        Raises:
            InvariantViolation: if the response has no thread wrapper
        """
        url = f"{self.base_url}/{board_id}/res/{thread_id}.json"
        logger.info("Fetching posts: board=%s thread=%s url=%s", board_id, thread_id, url)
        return self._parse_posts(self.http.get_json(url))

    def download(self, path: str, out: BinaryIO) -> int:
        """Stream the file at `path` (relative to the service root) into `out`."""
        url = f"{self.base_url}{path}"
        logger.info("Downloading: url=%s", url)
        return self.http.stream_to(url, out)

    # -------------------------
    # Parsing (unit-test target)
    # -------------------------

    def _parse_boards(self, payload: Any) -> list[Board]:
        # {"<category>": [board, ...], ...}
        if not isinstance(payload, dict):
            raise DecodeFailure(f"Boards payload must be an object, got {type(payload).__name__}")

        boards: list[Board] = []
        for category, items in payload.items():
            for item in self._as_list(items, f"boards[{category!r}]"):
                boards.append(
                    Board(
                        id=self._field(item, "id", str),
                        category=self._field(item, "category", str),
                        name=self._field(item, "name", str),
                    )
                )
        return boards

    def _parse_threads(self, payload: Any) -> list[Thread]:
        items = self._as_list(self._field(payload, "threads", list), "threads")
        return [
            Thread(
                id=str(self._field(item, "num", (str, int))),
                subject=self._field(item, "subject", str),
                comment=self._field(item, "comment", str),
            )
            for item in items
        ]

    def _parse_posts(self, payload: Any) -> list[Post]:
        wrappers = self._as_list(self._field(payload, "threads", list), "threads")
        # The API always answers with one wrapper for an existing thread.
        if not wrappers:
            logger.error("Posts payload has no thread wrapper")
            raise InvariantViolation("threads must be present in posts payload")

        items = self._as_list(self._field(wrappers[0], "posts", list), "threads[0].posts")
        return [self._parse_post(item) for item in items]

    def _parse_post(self, item: Any) -> Post:
        num = self._field(item, "num", (int, str))
        try:
            post_id = int(num)
        except ValueError as e:
            raise DecodeFailure(f"Post num is not an integer: {num!r}") from e

        files = item.get("files") or []
        images = tuple(
            Image(
                name=self._field(f, "name", str),
                fullname=self._field(f, "fullname", str),
                path=self._field(f, "path", str),
            )
            for f in self._as_list(files, "files")
        )
        return Post(
            id=post_id,
            comment=self._field(item, "comment", str),
            date=self._field(item, "date", str),
            images=images,
        )

    # -------------------------
    # Helpers
    # -------------------------

    def _field(self, obj: Any, name: str, expected: type | tuple[type, ...]) -> Any:
        if not isinstance(obj, dict):
            raise DecodeFailure(f"Expected an object holding {name!r}, got {type(obj).__name__}")
        if name not in obj:
            raise DecodeFailure(f"Missing field {name!r}")
        value = obj[name]
        # bool is an int subclass; never accept it as an id
        if isinstance(value, bool) or not isinstance(value, expected):
            raise DecodeFailure(f"Field {name!r} has unexpected type {type(value).__name__}")
        return value

    def _as_list(self, value: Any, what: str) -> list[Any]:
        if not isinstance(value, list):
            raise DecodeFailure(f"{what} must be a list, got {type(value).__name__}")
        return value

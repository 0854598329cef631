from __future__ import annotations

import io
from typing import Any

import pytest

from dvach.api import DvachApi
from dvach.errors import DecodeFailure, InvariantViolation
from dvach.http_client import HttpClient, HttpConfig
from dvach.models import Board, Image


class _DummyHttp(HttpClient):
    def __init__(self, payloads: dict[str, Any] | None = None):
        super().__init__(HttpConfig(timeout_sec=1.0, user_agent="test"))
        self.payloads = payloads or {}
        self.requested: list[str] = []

    def get_json(self, url: str) -> Any:
        self.requested.append(url)
        return self.payloads[url]

    def stream_to(self, url: str, out) -> int:
        self.requested.append(url)
        out.write(b"PNG")
        return 3


def _api(payloads: dict[str, Any] | None = None) -> DvachApi:
    return DvachApi("https://2ch.hk/", _DummyHttp(payloads))


def test_fetch_boards_flattens_categories_in_order():
    api = _api(
        {
            "https://2ch.hk/makaba/mobile.fcgi?task=get_boards": {
                "Tech": [{"id": "pr", "category": "Tech", "name": "Programming", "bump_limit": 500}],
                "Misc": [
                    {"id": "b", "category": "Misc", "name": "Random"},
                    {"id": "soc", "category": "Misc", "name": "Social"},
                ],
            }
        }
    )
    boards = api.fetch_boards()
    assert [b.id for b in boards] == ["pr", "b", "soc"]
    assert boards[0] == Board(id="pr", category="Tech", name="Programming")


def test_fetch_threads_accepts_numeric_and_string_num():
    api = _api(
        {
            "https://2ch.hk/pr/catalog.json": {
                "threads": [
                    {"num": 1299618, "subject": "Rust", "comment": "<b>hi</b>"},
                    {"num": "1300000", "subject": "Go", "comment": ""},
                ]
            }
        }
    )
    threads = api.fetch_threads("pr")
    assert [t.id for t in threads] == ["1299618", "1300000"]
    assert threads[0].comment == "<b>hi</b>"


def test_fetch_posts_reads_first_thread_wrapper():
    api = _api(
        {
            "https://2ch.hk/pr/res/1299618.json": {
                "threads": [
                    {
                        "posts": [
                            {
                                "num": 1299618,
                                "comment": "op",
                                "date": "01/01/20",
                                "files": [{"name": "15.png", "fullname": "cat.png", "path": "/pr/src/1/15.png"}],
                            },
                            {"num": "1299620", "comment": "reply", "date": "01/01/20", "files": None},
                            {"num": 1299619, "comment": "late", "date": "01/01/20"},
                        ]
                    }
                ]
            }
        }
    )
    posts = api.fetch_posts("pr", 1299618)
    assert [p.id for p in posts] == [1299618, 1299620, 1299619]
    assert posts[0].images == (Image(name="15.png", fullname="cat.png", path="/pr/src/1/15.png"),)
    assert posts[1].images == ()
    assert posts[2].images == ()


def test_fetch_posts_without_thread_wrapper_is_invariant_violation():
    api = _api({"https://2ch.hk/pr/res/1.json": {"threads": []}})
    with pytest.raises(InvariantViolation):
        api.fetch_posts("pr", 1)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"threads": "nope"},
        {"threads": [{"num": 1, "subject": "x"}]},
        {"threads": [{"num": True, "subject": "x", "comment": ""}]},
    ],
)
def test_fetch_threads_rejects_unexpected_shapes(payload):
    api = _api({"https://2ch.hk/b/catalog.json": payload})
    with pytest.raises(DecodeFailure):
        api.fetch_threads("b")


def test_fetch_boards_rejects_non_object_payload():
    api = _api({"https://2ch.hk/makaba/mobile.fcgi?task=get_boards": ["pr", "b"]})
    with pytest.raises(DecodeFailure):
        api.fetch_boards()


def test_post_num_must_be_integer():
    api = _api({"https://2ch.hk/pr/res/1.json": {"threads": [{"posts": [{"num": "abc", "comment": "", "date": ""}]}]}})
    with pytest.raises(DecodeFailure):
        api.fetch_posts("pr", 1)


def test_download_joins_base_url_and_path():
    http = _DummyHttp()
    api = DvachApi("https://2ch.hk", http)
    out = io.BytesIO()
    assert api.download("/pr/src/1/15.png", out) == 3
    assert http.requested == ["https://2ch.hk/pr/src/1/15.png"]
    assert out.getvalue() == b"PNG"

from __future__ import annotations

import io
from unittest.mock import MagicMock

import pytest
import requests

from dvach.errors import DecodeFailure, FetchFailure
from dvach.http_client import HttpClient, HttpConfig


def _client(session: MagicMock) -> HttpClient:
    return HttpClient(HttpConfig(timeout_sec=2.0, user_agent="test-agent"), session=session)


def test_get_json_returns_decoded_body():
    session = MagicMock()
    session.get.return_value.json.return_value = {"threads": []}

    assert _client(session).get_json("https://example/x.json") == {"threads": []}
    session.get.assert_called_once_with("https://example/x.json", timeout=2.0, stream=False)
    session.headers.update.assert_called_once_with({"User-Agent": "test-agent"})


def test_get_json_wraps_transport_errors():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("boom")

    with pytest.raises(FetchFailure):
        _client(session).get_json("https://example/x.json")


def test_get_json_wraps_http_errors():
    session = MagicMock()
    session.get.return_value.raise_for_status.side_effect = requests.HTTPError("404")

    with pytest.raises(FetchFailure):
        _client(session).get_json("https://example/x.json")


def test_get_json_wraps_invalid_json():
    session = MagicMock()
    session.get.return_value.json.side_effect = ValueError("not json")

    with pytest.raises(DecodeFailure):
        _client(session).get_json("https://example/x.json")


def test_stream_to_copies_chunks():
    session = MagicMock()
    resp = session.get.return_value
    resp.__enter__.return_value = resp
    resp.iter_content.return_value = [b"ab", b"cd"]
    out = io.BytesIO()

    assert _client(session).stream_to("https://example/img.png", out) == 4
    assert out.getvalue() == b"abcd"
    session.get.assert_called_once_with("https://example/img.png", timeout=2.0, stream=True)


def test_stream_to_wraps_interrupted_transfer():
    session = MagicMock()
    resp = session.get.return_value
    resp.__enter__.return_value = resp
    resp.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("cut")

    with pytest.raises(FetchFailure):
        _client(session).stream_to("https://example/img.png", io.BytesIO())

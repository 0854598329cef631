from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Optional

import requests

from dvach.errors import DecodeFailure, FetchFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpConfig:
    timeout_sec: float
    user_agent: str
    chunk_size: int = 64 * 1024


class HttpClient:
    """
    Thin HTTP client wrapper:
    - Timeout
    - JSON decoding
    - Streaming downloads
    - Logs meaningful failures

    Requests are issued once. A failure is fatal for the caller, so nothing
    is retried here.
    """

    def __init__(self, config: HttpConfig, session: Optional[requests.Session] = None):
        self._cfg = config
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self._cfg.user_agent})

    def get_json(self, url: str) -> Any:
        """
        GET an URL and return the decoded JSON body.

        Raises:
            FetchFailure: network errors and non-2xx responses
            DecodeFailure: body is not valid JSON
        """
        resp = self._get(url, stream=False)
        try:
            return resp.json()
        except ValueError as e:
            logger.error("Invalid JSON: url=%s err=%s", url, e)
            raise DecodeFailure(f"Cannot decode JSON from {url}: {e}") from e

    def stream_to(self, url: str, out: BinaryIO) -> int:
        """
        GET an URL and copy the body to `out` chunk by chunk.

        Returns:
            Number of bytes written.

        Raises:
            FetchFailure: network errors, non-2xx responses, broken transfers
        """
        written = 0
        with self._get(url, stream=True) as resp:
            try:
                for chunk in resp.iter_content(chunk_size=self._cfg.chunk_size):
                    out.write(chunk)
                    written += len(chunk)
            except requests.RequestException as e:
                logger.error("Download interrupted: url=%s bytes=%s err=%s", url, written, e)
                raise FetchFailure(f"Cannot download {url}: {e}") from e
        out.flush()
        logger.info("Downloaded: url=%s bytes=%s", url, written)
        return written

    def _get(self, url: str, stream: bool) -> requests.Response:
        logger.debug("HTTP GET: url=%s stream=%s", url, stream)
        try:
            resp = self._session.get(url, timeout=self._cfg.timeout_sec, stream=stream)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("HTTP GET failed: url=%s err=%s", url, e)
            raise FetchFailure(f"Cannot get {url}: {e}") from e
        return resp

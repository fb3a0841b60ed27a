"""Streaming HTTP source using requests."""

import io
import logging

import requests
import urllib3

from ..core.model import OpenError
from .base import RawSource, HTTP_TIMEOUT

logger = logging.getLogger(__name__)

# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class ResponseStream(io.RawIOBase):
    """Undecoded response body; urllib3 read failures surface as OSError."""

    def __init__(self, response: requests.Response):
        self._raw = response.raw
        self.name = response.url

    def readable(self):
        return True

    def read(self, size=-1):
        try:
            return self._raw.read(None if size is None or size < 0 else size)
        except urllib3.exceptions.HTTPError as e:
            raise OSError(f"{self.name}: {e}") from e

    def read1(self, size=-1):
        try:
            return self._raw.read1(None if size is None or size < 0 else size)
        except urllib3.exceptions.HTTPError as e:
            raise OSError(f"{self.name}: {e}") from e


def open_http_source(url: str) -> RawSource:
    """Start a streaming GET and expose the undecoded response body."""
    try:
        response = _get_session().get(url, stream=True, timeout=HTTP_TIMEOUT)
    except requests.RequestException as e:
        raise OpenError(url, f"GET request failed: {e}") from e

    if response.status_code >= 400:
        response.close()
        raise OpenError(url, f"GET request failed with status {response.status_code}")

    # Leave Content-Encoding alone: gzip bodies are detected and inflated by
    # the reader like any other gzip source.
    response.raw.decode_content = False
    logger.debug("streaming %s (status %d)", url, response.status_code)
    return RawSource(ResponseStream(response), url, close=response.close)

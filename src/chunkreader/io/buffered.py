"""Fixed-size lookahead buffer over any object with ``read``."""

from __future__ import annotations

from typing import BinaryIO

from ..core.model import UndoError
from .base import DEFAULT_BUFFER_SIZE, MIN_BUFFER_SIZE

UTF8_MAX = 4
REPLACEMENT_CHAR = "\ufffd"


def _utf8_width(lead: int) -> int:
    """Byte length announced by a UTF-8 lead byte, 0 if it cannot start a sequence."""
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


class BufferedSource:
    """Buffered reader with peek, delimiter scans and one-character unread.

    Data is pulled from the wrapped stream in ``buffer_size`` chunks. Consumed
    bytes are only dropped when more data has to be fetched, so the bytes of the
    last character read stay available for ``unread_char``.
    """

    def __init__(self, stream: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE):
        self._stream = stream
        # read1 returns what is available instead of blocking for a full chunk
        self._read_chunk = getattr(stream, "read1", stream.read)
        self.buffer_size = max(buffer_size, MIN_BUFFER_SIZE)
        self._buf = bytearray()
        self._pos = 0
        self._eof = False
        self._last_char_size = -1

    @property
    def buffered(self) -> int:
        """Number of unread bytes currently held in the buffer."""
        return len(self._buf) - self._pos

    def _refill(self) -> bool:
        """Append one chunk from the stream. Return False at end of stream."""
        if self._eof:
            return False
        if self._pos:
            del self._buf[:self._pos]
            self._pos = 0
        chunk = self._read_chunk(self.buffer_size)
        if not chunk:
            self._eof = True
            return False
        self._buf += chunk
        return True

    def _fill(self, size: int) -> None:
        while self.buffered < size and self._refill():
            pass

    def peek(self, size: int) -> bytes:
        self._last_char_size = -1
        self._fill(size)
        return bytes(self._buf[self._pos:self._pos + size])

    def read(self, size: int = -1) -> bytes:
        self._last_char_size = -1
        if size is None or size < 0:
            parts = []
            while self.buffered or self._refill():
                parts.append(bytes(self._buf[self._pos:]))
                self._pos = len(self._buf)
            return b"".join(parts)
        if size == 0 or (not self.buffered and not self._refill()):
            return b""
        end = min(self._pos + size, len(self._buf))
        data = bytes(self._buf[self._pos:end])
        self._pos = end
        return data

    def read_until(self, delim: int) -> tuple[bytes, bool]:
        """Read through the first ``delim`` byte.

        Returns ``(data, found)``; ``found`` is False when the stream ended first,
        in which case ``data`` is everything that was left.
        """
        self._last_char_size = -1
        # nothing is consumed until the delimiter or the end is found
        scanned = 0
        while True:
            idx = self._buf.find(delim, self._pos + scanned)
            if idx >= 0:
                data = bytes(self._buf[self._pos:idx + 1])
                self._pos = idx + 1
                return data, True
            scanned = self.buffered
            if not self._refill():
                data = bytes(self._buf[self._pos:])
                self._pos = len(self._buf)
                return data, False

    def read_char(self) -> tuple[str, int]:
        """Decode one UTF-8 character. Returns ``("", 0)`` at end of stream.

        Invalid or truncated sequences come back as U+FFFD with width 1.
        """
        self._last_char_size = -1
        self._fill(UTF8_MAX)
        if not self.buffered:
            return "", 0

        lead = self._buf[self._pos]
        width = _utf8_width(lead)
        if width == 1:
            char = chr(lead)
        else:
            raw = bytes(self._buf[self._pos:self._pos + width])
            try:
                char = raw.decode("utf-8") if width and len(raw) == width else None
            except UnicodeDecodeError:
                char = None
            if char is None:
                char, width = REPLACEMENT_CHAR, 1

        self._pos += width
        self._last_char_size = width
        return char, width

    def unread_char(self) -> None:
        """Step back over the character returned by the previous ``read_char``."""
        if self._last_char_size < 0 or self._pos < self._last_char_size:
            raise UndoError("previous operation was not a read_char")
        self._pos -= self._last_char_size
        self._last_char_size = -1

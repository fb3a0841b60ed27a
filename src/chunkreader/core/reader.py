from __future__ import annotations
from typing import Optional, Tuple, Union

from .model import EndOfStream, UndoError

Delimiter = Union[int, bytes, str]


def delimiter_byte(delim: Delimiter) -> int:
    """Normalise a one-byte delimiter given as int, bytes or ASCII str."""
    if isinstance(delim, int):
        if 0 <= delim <= 0xFF:
            return delim
    elif isinstance(delim, (bytes, bytearray)):
        if len(delim) == 1:
            return delim[0]
    elif isinstance(delim, str):
        if len(delim) == 1 and ord(delim) < 0x80:
            return ord(delim)
    raise ValueError(f"delimiter must be a single byte, got {delim!r}")


class ChunkReader:
    """Buffered reader that keeps a running byte offset and newline count.

    The offset starts at 0 and counts bytes handed to the caller (decompressed
    bytes when the source is compressed). The line count is the number of
    newlines among them. Each read records the counters beforehand so a single
    ``read_char`` can be undone with ``unread_char``.

    Not safe for concurrent use.
    """

    def __init__(self, source, name: str, *, compressed: bool = False, encoding: str = "utf-8"):
        self._source = source
        self.name = name
        self.compressed = compressed
        self.encoding = encoding
        self._offset = 0
        self._line = 0
        self._snapshot: Optional[Tuple[int, int]] = None

    @property
    def offset(self) -> int:
        """Bytes consumed so far."""
        return self._offset

    @property
    def line_count(self) -> int:
        """Newlines consumed so far."""
        return self._line

    def _remember(self) -> None:
        self._snapshot = (self._offset, self._line)

    def read_until(self, delim: Delimiter) -> bytes:
        """Return bytes up to and including ``delim``.

        Raises EndOfStream if the stream ends first; the leftover bytes (possibly
        empty) are on the exception's ``partial`` and are already counted.
        """
        byte = delimiter_byte(delim)
        self._remember()
        data, found = self._source.read_until(byte)
        self._offset += len(data)
        self._line += data.count(b"\n")
        if not found:
            raise EndOfStream(data)
        return data

    def read_string(self, delim: Delimiter) -> str:
        """Like read_until, but decoded with the reader's encoding."""
        byte = delimiter_byte(delim)
        self._remember()
        data, found = self._source.read_until(byte)
        text = data.decode(self.encoding, errors="replace")
        self._offset += len(data)
        self._line += text.count("\n")
        if not found:
            raise EndOfStream(text)
        return text

    def read_char(self) -> Tuple[str, int]:
        """Return the next UTF-8 character and its width in bytes."""
        self._remember()
        char, width = self._source.read_char()
        if not width:
            raise EndOfStream("")
        self._offset += width
        if char == "\n":
            self._line += 1
        return char, width

    def unread_char(self) -> None:
        """Push back the character from the last read_char and restore the counters."""
        if self._snapshot is None:
            raise UndoError("no read to undo")
        snapshot, self._snapshot = self._snapshot, None
        self._source.unread_char()
        self._offset, self._line = snapshot

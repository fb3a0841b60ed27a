"""Base protocols and shared types for I/O layer."""

from typing import BinaryIO, Callable, Optional, Protocol, runtime_checkable


STDIN_NAME = "-"
STDIN_DISPLAY_NAME = "/dev/stdin"

SNIFF_LEN = 512
DEFAULT_BUFFER_SIZE = 4096
MIN_BUFFER_SIZE = 16

HTTP_TIMEOUT = 60


@runtime_checkable
class ByteSource(Protocol):
    """Protocol for buffered byte sources the reader and sniffer share."""

    def read(self, size: int = -1) -> bytes:
        """Return up to `size` bytes; b"" only at end of stream."""
        ...

    def peek(self, size: int) -> bytes:
        """Return up to `size` upcoming bytes without consuming them."""
        ...


class RawSource:
    """An opened, unbuffered origin of bytes plus the means to release it."""

    def __init__(self, stream: BinaryIO, name: str, *,
                 close: Optional[Callable[[], None]] = None, owned: bool = True):
        self.stream = stream
        self.name = name
        self._close = close or stream.close
        self._owned = owned

    def close(self) -> None:
        """Release the origin if we opened it."""
        if self._owned:
            self._close()

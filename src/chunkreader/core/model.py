from __future__ import annotations
from dataclasses import dataclass


@dataclass(slots=True)
class ScanResult:
    source: str
    success: bool
    compressed: bool
    records: int
    lines: int                 # newlines consumed, see ChunkReader.line_count
    offset: int                # bytes consumed, decompressed if compressed
    error: str | None


class OpenError(RuntimeError):
    """Raised when a source cannot be opened for reading."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"cannot open {source}: {reason}")


class DecompressionInitError(RuntimeError):
    """Raised when a source looks compressed but its decompressor cannot start."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: cannot decompress: {reason}")


class UndoError(RuntimeError):
    """Raised when there is no single character read to undo."""
    pass


class EndOfStream(EOFError):
    """Raised by the read primitives once the source is exhausted.

    ``partial`` holds whatever was read before the end was hit (bytes for
    ``read_until``, text for ``read_string``). It is empty when nothing was left.
    """

    def __init__(self, partial: bytes | str = b""):
        self.partial = partial
        super().__init__(f"end of stream ({len(partial)} trailing)")

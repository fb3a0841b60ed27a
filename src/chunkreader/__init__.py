"""chunkreader - position-tracking byte stream reader with transparent gzip support."""

import logging
import zlib
from contextlib import contextmanager
from typing import Callable, Iterator, Tuple

from .core.model import (ScanResult, OpenError, DecompressionInitError,   # re-export
                         UndoError, EndOfStream)
from .core.reader import ChunkReader, Delimiter
from .core.registry import _REGISTRY, detect_content_type             # singleton
from .io import open_source, BufferedSource, SNIFF_LEN, DEFAULT_BUFFER_SIZE

# Import codecs to trigger registration
from .compression import gz  # noqa: F401

logger = logging.getLogger(__name__)


def open_chunk_reader(source, *, buffer_size: int = DEFAULT_BUFFER_SIZE,
                      encoding: str = "utf-8") -> Tuple[ChunkReader, Callable[[], None]]:
    """Open a path, ``-`` (stdin), URL or binary stream for position-tracked reading.

    gzip input is decompressed transparently: a ``.gz`` name is trusted as is,
    anything else is sniffed from its first 512 bytes. Returns the reader and a
    cleanup function the caller must call exactly once when done.
    """
    raw = open_source(source)
    try:
        # 1) extension hint, trusted without looking at the content
        codec = _REGISTRY.for_extension(raw.name)
        if codec is not None:
            compressed_input = raw.stream
            content_type = codec.content_type
        else:
            # 2) magic-number sniff without consuming anything
            compressed_input = BufferedSource(raw.stream, buffer_size)
            content_type = detect_content_type(compressed_input.peek(SNIFF_LEN))
            codec = _REGISTRY.for_content_type(content_type)
        logger.debug("%s: content type %s", raw.name, content_type)

        if codec is None:
            reader = ChunkReader(compressed_input, raw.name, encoding=encoding)
            return reader, raw.close

        decoder = codec.open(compressed_input, name=raw.name)
    except OSError as e:
        # the source opened but its first bytes could not be read
        raw.close()
        raise OpenError(raw.name, f"read failed: {e}") from e
    except Exception:
        raw.close()
        raise

    def cleanup() -> None:
        try:
            decoder.close()
        finally:
            raw.close()

    logger.debug("%s: decompressing with %s", raw.name, codec.__name__)
    reader = ChunkReader(BufferedSource(decoder, buffer_size), raw.name,
                         compressed=True, encoding=encoding)
    return reader, cleanup


@contextmanager
def chunk_reader(source, **kwargs) -> Iterator[ChunkReader]:
    """Context-manager form of open_chunk_reader."""
    reader, cleanup = open_chunk_reader(source, **kwargs)
    try:
        yield reader
    finally:
        cleanup()


def scan(source, *, delim: Delimiter = b"\n", buffer_size: int = DEFAULT_BUFFER_SIZE) -> ScanResult:
    """Read a whole source record by record and report where it ended.

    Open failures propagate. Failures while reading are returned in the result
    together with the line and offset they happened at.
    """
    records = 0
    with chunk_reader(source, buffer_size=buffer_size) as reader:
        try:
            while True:
                try:
                    reader.read_until(delim)
                except EndOfStream as eos:
                    if eos.partial:
                        records += 1
                    break
                records += 1
            error = None
        except (OSError, EOFError, zlib.error) as e:
            error = f"read failed at line {reader.line_count}, offset {reader.offset}: {e}"
            logger.warning("%s: %s", reader.name, error)

    return ScanResult(
        source=reader.name,
        success=error is None,
        compressed=reader.compressed,
        records=records,
        lines=reader.line_count,
        offset=reader.offset,
        error=error,
    )


__all__ = [
    "open_chunk_reader", "chunk_reader", "scan",
    "ChunkReader", "ScanResult", "detect_content_type",
    "OpenError", "DecompressionInitError", "UndoError", "EndOfStream",
]

"""I/O layer for chunkreader - raw sources and the buffered byte source."""

# Re-export these for import convenience
from .base import (ByteSource, RawSource, STDIN_NAME, STDIN_DISPLAY_NAME,
                   SNIFF_LEN, DEFAULT_BUFFER_SIZE)
from .buffered import BufferedSource
from .local import open_local_source
from .http_sync import open_http_source


def open_source(source):
    """Factory function to create the appropriate RawSource based on source type."""
    if hasattr(source, 'read'):  # BinaryIO
        return open_local_source(source)

    source_str = str(source)
    if source_str.startswith(('http://', 'https://')):
        return open_http_source(source_str)
    else:
        return open_local_source(source)

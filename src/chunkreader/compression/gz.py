from __future__ import annotations

import gzip
import zlib
from typing import BinaryIO, ClassVar

from ..core.codec_base import Codec
from ..core.model import DecompressionInitError
from ..io.base import ByteSource
from ..io.buffered import BufferedSource

# gzip member header: ID1 ID2 CM(deflate)
GZIP_SIG = b'\x1f\x8b\x08'


class GzipCodec(Codec):
    """gzip / deflate decompression via the standard library."""

    formats: ClassVar = ("gz",)
    signatures: ClassVar = ((0, GZIP_SIG),)
    content_type: ClassVar = "application/x-gzip"
    priority: ClassVar = 10

    @classmethod
    def open(cls, fileobj: BinaryIO, *, name: str) -> BinaryIO:
        if not isinstance(fileobj, ByteSource):
            fileobj = BufferedSource(fileobj)
        # GzipFile reads an empty input as an empty stream; a gzip stream
        # always has a header, so no bytes at all is a failed init.
        if not fileobj.peek(1):
            raise DecompressionInitError(name, "empty input, no gzip header")

        stream = gzip.GzipFile(fileobj=fileobj, mode="rb")
        # GzipFile parses the header lazily; force it now so a bad header
        # fails at open time instead of on the caller's first read.
        try:
            stream.peek(1)
        except (OSError, EOFError, zlib.error) as e:
            stream.close()
            raise DecompressionInitError(name, str(e) or type(e).__name__) from None
        return stream

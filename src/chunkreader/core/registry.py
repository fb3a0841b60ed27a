from __future__ import annotations
import bisect
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Type

from .codec_base import Codec

TEXT_PLAIN = "text/plain; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

# control bytes that never appear in text (same table browsers sniff with)
_BINARY_BYTES = frozenset(
    [*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)]
)


class CodecRegistry:
    def __init__(self) -> None:
        self._by_ext: Dict[str, List[tuple[int, str, Type[Codec]]]] = defaultdict(list)
        self._codecs: List[tuple[int, str, Type[Codec]]] = []   # sorted by priority

    # called from Codec.__init_subclass__
    def register(self, codec_cls: Type[Codec]) -> None:
        # Use (priority, class_name, codec_cls) to ensure stable sorting
        entry = (codec_cls.priority, codec_cls.__name__, codec_cls)
        bisect.insort(self._codecs, entry)
        for ext in codec_cls.formats:
            bisect.insort(self._by_ext[ext], entry)

    # --- detection helpers ---
    def _sniff(self, prefix: bytes) -> Type[Codec] | None:
        for _, _, c in self._codecs:
            for offset, pat in c.signatures:
                if len(prefix) >= offset + len(pat):
                    if prefix[offset : offset + len(pat)] == pat:
                        return c
        return None

    def detect_content_type(self, prefix: bytes) -> str:
        """Guess a MIME type from the first bytes of a stream."""
        codec = self._sniff(prefix)
        if codec:
            return codec.content_type
        if any(b in _BINARY_BYTES for b in prefix):
            return OCTET_STREAM
        return TEXT_PLAIN

    def for_extension(self, name: str | Path) -> Type[Codec] | None:
        """Codec whose extension the name ends in. Case-sensitive: ``x.GZ`` is no match."""
        ext = Path(str(name)).suffix.lstrip(".")
        if ext and (lst := self._by_ext.get(ext)):
            return lst[0][2]             # first by priority
        return None

    def for_content_type(self, content_type: str) -> Type[Codec] | None:
        for _, _, c in self._codecs:
            if c.content_type == content_type:
                return c
        return None


# singleton used project-wide
_REGISTRY = CodecRegistry()


def detect_content_type(prefix: bytes) -> str:
    return _REGISTRY.detect_content_type(prefix)

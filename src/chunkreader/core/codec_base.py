from abc import ABC, abstractmethod
from typing import BinaryIO, ClassVar, Sequence, Tuple

Signature = Tuple[int, bytes]          # (offset, byte-pattern)


class Codec(ABC):
    # --- required by subclasses ---
    formats: ClassVar[tuple[str, ...]]      # file-extensions (lower, no dot)
    signatures: ClassVar[Sequence[Signature]]  # magic bytes patterns
    content_type: ClassVar[str]              # MIME type reported when sniffed
    priority: ClassVar[int] = 100            # lower = examined earlier

    @classmethod
    @abstractmethod
    def open(cls, fileobj: BinaryIO, *, name: str) -> BinaryIO:
        """Wrap ``fileobj`` in a decompressing stream.

        Implementations must fail here, with DecompressionInitError, when the
        stream header is unusable rather than on the first read.
        """
        ...

    # --- registry hook ---
    def __init_subclass__(cls, **kw):
        super().__init_subclass__(**kw)
        from .registry import _REGISTRY
        _REGISTRY.register(cls)           # noqa: E402

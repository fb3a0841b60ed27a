"""Local file, stdin and file-object sources."""

import logging
import sys
from pathlib import Path
from typing import BinaryIO, Union

from ..core.model import OpenError
from .base import RawSource, STDIN_NAME, STDIN_DISPLAY_NAME

logger = logging.getLogger(__name__)


def _stream_name(stream: BinaryIO) -> str:
    name = getattr(stream, "name", None)
    return name if isinstance(name, str) else "<stream>"


def open_local_source(source: Union[Path, str, BinaryIO]) -> RawSource:
    """Open a path, bind stdin for ``-``, or adopt an already open binary stream.

    Adopted streams are not closed on release; the caller still owns them.
    """
    if hasattr(source, 'read'):
        return RawSource(source, _stream_name(source), owned=False)

    name = str(source)
    if name == STDIN_NAME:
        stdin = sys.stdin.buffer
        return RawSource(stdin, STDIN_DISPLAY_NAME)

    try:
        f = open(name, 'rb')
    except OSError as e:
        raise OpenError(name, e.strerror or str(e)) from e
    logger.debug("opened %s", name)
    return RawSource(f, name)

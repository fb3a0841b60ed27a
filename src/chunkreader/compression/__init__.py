"""Decompression codecs for chunkreader."""

from .gz import GzipCodec

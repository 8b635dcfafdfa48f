"""
Line Source Module

Feeds SP3 text lines to the reader from a plain or gzip compressed file.
Compression is detected from the file suffix or the gzip magic bytes, so
"*.SP3.gz" products can be read without unpacking them first.
"""

import gzip
import io
import logging
import os
from typing import Iterable, Iterator, Union

from sp3core.global_config import get_global_config

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


class LineSource:
    """
    Iterable over the lines of an SP3 file.

    Attributes:
        path (str): File path
        encoding (str): Text encoding used to decode the file
    """

    def __init__(self, path: Union[str, os.PathLike], encoding: str = None):
        self.path = os.fspath(path)
        self.encoding = encoding or get_global_config().encoding

    def is_gzip(self) -> bool:
        """True when the file is gzip compressed (by suffix or magic bytes)."""
        suffixes = get_global_config().gzip_suffixes
        if any(self.path.lower().endswith(suffix) for suffix in suffixes):
            return True
        with open(self.path, "rb") as fd:
            return fd.read(2) == GZIP_MAGIC

    def open(self) -> io.TextIOBase:
        if self.is_gzip():
            logger.debug(f"Opening {self.path} as gzip stream")
            return gzip.open(self.path, "rt", encoding=self.encoding, errors="replace")
        return open(self.path, "r", encoding=self.encoding, errors="replace")

    def __iter__(self) -> Iterator[str]:
        with self.open() as stream:
            for line in stream:
                yield line.rstrip("\r\n")


def iter_lines(source: Union[str, os.PathLike, LineSource, Iterable[str]]) -> Iterator[str]:
    """
    Return an iterator of text lines from a path, a LineSource or any iterable of strings.
    """
    if isinstance(source, (str, os.PathLike)):
        source = LineSource(source)
    return iter(source)

# ABOUTME: Forward-only character scanner over a (possibly compressed) corpus stream
# ABOUTME: Finds the nearer of several markers and reads text up to terminator characters

import bz2
import functools
import gzip
import re
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from wikitaxon.extraction.base import CorpusReadError

DEFAULT_CHUNK_SIZE = 1 << 16


@functools.lru_cache(maxsize=32)
def _marker_pattern(markers: tuple[str, ...], ignore_case: bool) -> re.Pattern[str]:
    flags = re.IGNORECASE if ignore_case else 0
    return re.compile("|".join(f"({re.escape(marker)})" for marker in markers), flags)


class CorpusReader:
    """Buffered scanner reading a text stream strictly forward.

    Only the unread part of the current chunk is kept in memory. I/O and
    decoding errors are raised as `CorpusReadError`.
    """

    def __init__(self, stream: TextIO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.stream = stream
        self.chunk_size = chunk_size
        self._buffer = ""
        self._pos = 0
        self._eof = False

    def _fill(self) -> bool:
        """Drop the consumed prefix and append one chunk. Returns False at end of stream."""
        if self._eof:
            return False
        try:
            chunk = self.stream.read(self.chunk_size)
        except (OSError, UnicodeDecodeError, EOFError) as e:
            raise CorpusReadError(f"Failed to read corpus: {e}") from e
        if not chunk:
            self._eof = True
            return False
        self._buffer = self._buffer[self._pos :] + chunk
        self._pos = 0
        return True

    def find(self, *markers: str, ignore_case: bool = False) -> int:
        """Advance past the nearest occurrence of any marker.

        Returns:
            Index of the marker found first, or -1 at end of stream
        """
        pattern = _marker_pattern(markers, ignore_case)
        longest = max(len(marker) for marker in markers)
        while True:
            match = pattern.search(self._buffer, self._pos)
            # a longer marker may start before the match but end beyond the buffer
            if match and (match.start() + longest <= len(self._buffer) or self._eof):
                self._pos = match.end()
                return (match.lastindex or 1) - 1
            if not match:
                self._pos = max(self._pos, len(self._buffer) - longest + 1)
            if not self._fill():
                if match:
                    self._pos = match.end()
                    return (match.lastindex or 1) - 1
                self._pos = len(self._buffer)
                return -1

    def find_ignore_case(self, *markers: str) -> int:
        return self.find(*markers, ignore_case=True)

    def read_to(self, *terminators: str, limit: int | None = None) -> str | None:
        """Read up to the first terminator character and consume it.

        Args:
            terminators: Single-character terminators
            limit: Give up when no terminator occurs within this many characters;
                nothing is consumed in that case

        Returns:
            The text before the terminator, or None if there is none
        """
        offset = 0
        while True:
            bound = len(self._buffer) if limit is None else min(len(self._buffer), self._pos + limit + 1)
            positions = [
                p for p in (self._buffer.find(t, self._pos + offset, bound) for t in terminators) if p != -1
            ]
            if positions:
                end = min(positions)
                text = self._buffer[self._pos : end]
                self._pos = end + 1
                return text
            if limit is not None and len(self._buffer) - self._pos > limit:
                return None
            offset = len(self._buffer) - self._pos
            if not self._fill():
                self._pos = len(self._buffer)
                return None

    def read_to_string(self, terminator: str, limit: int | None = None, ignore_case: bool = False) -> str | None:
        """Read up to a terminator string and consume it; None if it does not occur (within the limit)."""
        pattern = _marker_pattern((terminator,), ignore_case)
        offset = 0
        while True:
            match = pattern.search(self._buffer, self._pos + offset)
            if match and (limit is None or match.start() - self._pos <= limit):
                text = self._buffer[self._pos : match.start()]
                self._pos = match.end()
                return text
            if limit is not None and len(self._buffer) - self._pos > limit + len(terminator):
                return None
            offset = max(0, len(self._buffer) - self._pos - len(terminator) + 1)
            if not self._fill():
                self._pos = len(self._buffer)
                return None


@contextmanager
def open_corpus(path: Path, encoding: str = "utf-8") -> Iterator[CorpusReader]:
    """Open a plain, .bz2 or .gz corpus file as a `CorpusReader`."""
    try:
        if path.suffix == ".bz2":
            stream = bz2.open(path, "rt", encoding=encoding)
        elif path.suffix == ".gz":
            stream = gzip.open(path, "rt", encoding=encoding)
        else:
            stream = open(path, encoding=encoding)
    except OSError as e:
        raise CorpusReadError(f"Cannot open corpus {path}: {e}") from e
    with stream:
        yield CorpusReader(stream)

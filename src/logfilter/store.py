"""Append-only line storage fed by arbitrary byte chunks."""

from __future__ import annotations

import codecs
import logging

logger = logging.getLogger(__name__)

SEPARATOR = "\n"


class LineStore:
    """Complete lines in arrival order plus the still-open trailing line.

    Chunks may split lines (and multi-byte characters) anywhere; ingesting a
    stream in pieces always yields the same store as ingesting it whole.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._pending: str = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def lines(self) -> list[str]:
        return self._lines

    @property
    def pending(self) -> str:
        """Text received since the last separator, without a trailing CR."""
        return self._pending.removesuffix("\r")

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def ingest(self, chunk: bytes) -> list[str]:
        """Decode a chunk of bytes and return the lines it completed."""
        if not chunk:
            return []
        return self.write(self._decoder.decode(chunk))

    def write(self, text: str) -> list[str]:
        """Append decoded text and return the lines it completed."""
        if not text:
            return []

        *complete, rest = text.split(SEPARATOR)
        if not complete:
            self._pending += rest
            return []

        complete[0] = self._pending + complete[0]
        new_lines = [line.removesuffix("\r") for line in complete]
        self._lines.extend(new_lines)
        self._pending = rest
        logger.debug("stored %d new lines (%d total)", len(new_lines), len(self._lines))
        return new_lines

    def content(self) -> list[str]:
        """All lines, with the pending line last when there is one."""
        if self.pending:
            return [*self._lines, self.pending]
        return list(self._lines)

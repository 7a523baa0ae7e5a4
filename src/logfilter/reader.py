"""Byte producers that poll a log source and yield raw chunks."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
from typing import TYPE_CHECKING

import aiofiles

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.032
_PIPE_READ_SIZE = 64 * 1024


def is_pipe() -> bool:
    """Check if stdin is a pipe (not a terminal)."""
    return not sys.stdin.isatty()


class ChunkProducer:
    """Reads a file or pipe and yields whatever bytes became available.

    A file is polled every `interval` seconds and each poll that finds new
    data yields it as a single chunk. A pipe is read as data arrives and the
    producer finishes at end of input. `stop()` ends either loop at its next
    wait instead of relying on the consumer going away.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        fd: int | None = None,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        if (path is None) == (fd is None):
            msg = "exactly one of path or fd is required"
            raise ValueError(msg)
        self._source: Path | int = path if path is not None else fd  # type: ignore[assignment]
        self._interval = interval
        self._stop = asyncio.Event()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        """Ask the polling loop to finish."""
        self._stop.set()

    async def _wait(self) -> None:
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(self._stop.wait(), timeout=self._interval)

    def chunks(self) -> AsyncIterator[bytes]:
        """Yield chunks until stopped or, for a pipe, until end of input."""
        if isinstance(self._source, int):
            return self._read_pipe(self._source)
        return self._poll_file(self._source)

    async def _poll_file(self, path: Path) -> AsyncIterator[bytes]:
        logger.debug("tailing %s every %.3fs", path, self._interval)
        offset = 0
        async with aiofiles.open(path, "rb") as f:
            while not self.stopped:
                data = await f.read()
                if data:
                    offset += len(data)
                    yield data
                elif path.stat().st_size < offset:
                    # Truncated (log rotation): start over from the beginning
                    logger.info("%s was truncated, rewinding", path)
                    await f.seek(0)
                    offset = 0
                    continue
                await self._wait()
        logger.debug("stopped tailing %s", path)

    async def _read_pipe(self, fd: int) -> AsyncIterator[bytes]:
        async with aiofiles.open(fd, "rb", closefd=True) as f:
            while not self.stopped:
                data = await f.read1(_PIPE_READ_SIZE)
                if not data:
                    logger.debug("end of input on fd %d", fd)
                    return
                yield data

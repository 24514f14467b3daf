"""
Byte-stream wrappers that report every transferred chunk to a progress sink.

A progress sink is any callable taking ``(buffer, length)``. It only observes
the bytes; the data read or written is never altered.
"""

from __future__ import annotations

import os
from typing import BinaryIO, Callable, Optional, Union

ProgressSink = Callable[[bytes, int], None]
PathLike = Union[str, "os.PathLike[str]"]


class _ProgressStream:
    def __init__(self, raw: BinaryIO, progress: Optional[ProgressSink]):
        self._raw = raw
        self._progress = progress
        self.bytes_transferred = 0

    def _report(self, chunk: bytes) -> None:
        self.bytes_transferred += len(chunk)
        if self._progress is not None:
            self._progress(chunk, len(chunk))

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._raw.seek(offset, whence)

    def tell(self) -> int:
        return self._raw.tell()

    def close(self) -> None:
        self._raw.close()

    @property
    def closed(self) -> bool:
        return self._raw.closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ProgressReader(_ProgressStream):
    """Readable wrapper; reports each non-empty chunk returned by ``read``.

    The SDK seeks the body back to its start before retrying a request. Bytes
    read again after such a rewind were already reported and are not reported
    twice, so ``bytes_transferred`` never exceeds the stream length.
    """

    def __init__(self, raw: BinaryIO, progress: Optional[ProgressSink]):
        super().__init__(raw, progress)
        self._high_water = raw.tell()

    def read(self, size: int = -1) -> bytes:
        start = self._raw.tell()
        chunk = self._raw.read(size)
        fresh = chunk[max(0, self._high_water - start):]
        if fresh:
            self._high_water = start + len(chunk)
            self._report(fresh)
        return chunk

    def readable(self) -> bool:
        return True


class ProgressWriter(_ProgressStream):
    """Writable wrapper; reports each chunk after it has been written."""

    def write(self, data: bytes) -> int:
        written = self._raw.write(data)
        if data:
            self._report(bytes(data))
        return written if written is not None else len(data)

    def writable(self) -> bool:
        return True

    def flush(self) -> None:
        self._raw.flush()


def open_progress_reader(path: PathLike, progress: Optional[ProgressSink]) -> ProgressReader:
    return ProgressReader(open(path, "rb"), progress)


def open_progress_writer(path: PathLike, progress: Optional[ProgressSink]) -> ProgressWriter:
    return ProgressWriter(open(path, "wb"), progress)

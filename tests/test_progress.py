"""Unit tests for progress-reporting stream wrappers."""

import io
from pathlib import Path

from bos_wagon.bos.progress import (
    ProgressReader,
    ProgressWriter,
    open_progress_reader,
    open_progress_writer,
)


class Sink:

    def __init__(self):
        self.chunks = []

    def __call__(self, buffer: bytes, length: int) -> None:
        self.chunks.append((bytes(buffer), length))


class TestProgressReader:

    def test_reports_each_chunk_unchanged(self) -> None:
        sink = Sink()
        reader = ProgressReader(io.BytesIO(b"abcdefgh"), sink)

        assert reader.read(3) == b"abc"
        assert reader.read(3) == b"def"
        assert reader.read() == b"gh"
        assert reader.read() == b""

        assert sink.chunks == [(b"abc", 3), (b"def", 3), (b"gh", 2)]
        assert reader.bytes_transferred == 8

    def test_seek_and_tell_delegate(self) -> None:
        reader = ProgressReader(io.BytesIO(b"abcdef"), None)
        reader.read(4)
        assert reader.tell() == 4
        reader.seek(0)
        assert reader.read(2) == b"ab"

    def test_rewind_does_not_report_bytes_twice(self) -> None:
        sink = Sink()
        reader = ProgressReader(io.BytesIO(b"abcdef"), sink)

        reader.read(4)
        reader.seek(0)
        assert reader.read() == b"abcdef"

        assert sink.chunks == [(b"abcd", 4), (b"ef", 2)]
        assert reader.bytes_transferred == 6

    def test_closes_file_on_exit(self, tmp_path: Path) -> None:
        path = tmp_path / "in.bin"
        path.write_bytes(b"data")

        with open_progress_reader(path, Sink()) as reader:
            assert reader.read() == b"data"
        assert reader.closed


class TestProgressWriter:

    def test_reports_after_write(self, tmp_path: Path) -> None:
        sink = Sink()
        path = tmp_path / "out.bin"

        with open_progress_writer(path, sink) as writer:
            writer.write(b"hello ")
            writer.write(b"")
            writer.write(b"world")

        assert path.read_bytes() == b"hello world"
        assert sink.chunks == [(b"hello ", 6), (b"world", 5)]

    def test_without_sink(self) -> None:
        raw = io.BytesIO()
        writer = ProgressWriter(raw, None)
        assert writer.write(b"xyz") == 3
        assert raw.getvalue() == b"xyz"
        assert writer.bytes_transferred == 3

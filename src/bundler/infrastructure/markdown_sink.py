"""
Markdown sink rendering bundle records as labeled fenced blocks.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from bundler.core.file_scanner import BundleRecord, BundleSinkInterface

logger = logging.getLogger(__name__)


def render_record(record: BundleRecord) -> bytes:
    """
    Render one record.

    Layout: a 'File: /<path>' header, a fence tagged with the language,
    the raw content, the closing fence, and an empty separator line.
    """
    header = f"File: /{record.relative_path}\n```{record.language}\n".encode("utf-8")
    return header + record.content + b"\n```\n\n"


class MarkdownSink(BundleSinkInterface):
    """
    Writes records to a binary stream in markdown form.

    Content is written byte-for-byte; no decoding happens, so files in any
    text encoding round-trip unchanged.
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._records_written = 0
        self._bytes_written = 0

    @classmethod
    @contextmanager
    def open(cls, path: Path | str) -> Iterator["MarkdownSink"]:
        """
        Open path for writing and yield a sink over it.

        Parent directories are created. The file is closed on exit; the
        caller (normally the scanner) is responsible for finalize().
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as stream:
            yield cls(stream)

    @property
    def records_written(self) -> int:
        return self._records_written

    @property
    def bytes_written(self) -> int:
        return self._bytes_written

    def write(self, record: BundleRecord) -> None:
        data = render_record(record)
        self._stream.write(data)
        self._records_written += 1
        self._bytes_written += len(data)

    def finalize(self) -> None:
        self._stream.flush()
        logger.debug(
            f"Flushed {self._records_written} records ({self._bytes_written} bytes)"
        )

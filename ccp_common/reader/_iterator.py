__all__ = ["LineIterator", "FileLineIterator", "StreamLineIterator"]

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import BinaryIO

from ccp_common.encoding import CharacterEncoding

from ._line import Line
from ._line_reader import FileLineReader, LineReader, StreamLineReader

logger = logging.getLogger(__name__)


class LineIterator(ABC, Iterator[Line]):
    """Single pass iterator over the lines produced by a `LineReader`.

    `has_next` reads ahead at most one line and can be called repeatedly
    without moving the iterator forward.
    """

    def __init__(
        self,
        source,
        encoding: CharacterEncoding | None = None,
        skip_line_prefix: str | None = None,
    ):
        self._reader = self._init_line_reader(
            source, encoding, skip_line_prefix
        )
        self._next_line: Line | None = None

    @abstractmethod
    def _init_line_reader(
        self,
        source,
        encoding: CharacterEncoding | None,
        skip_line_prefix: str | None,
    ) -> LineReader:
        raise NotImplementedError

    def has_next(self) -> bool:
        if self._next_line is None:
            self._next_line = self._reader.read_line()

        return self._next_line is not None

    def __next__(self) -> Line:
        if not self.has_next():
            raise StopIteration

        line = self._next_line
        self._next_line = None
        return line  # type: ignore[return-value]

    def close(self) -> None:
        self._reader.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FileLineIterator(LineIterator):
    """Iterate over the lines of a file with byte offsets."""

    def __init__(
        self,
        path: str | os.PathLike,
        encoding: CharacterEncoding | None = None,
        skip_line_prefix: str | None = None,
    ):
        super().__init__(path, encoding, skip_line_prefix)
        logger.debug("Iterating through lines for file: %s", path)

    def _init_line_reader(
        self, path, encoding, skip_line_prefix
    ) -> FileLineReader:
        return FileLineReader(path, encoding, skip_line_prefix)

    def seek(self, position: int | Line) -> None:
        """Restart iteration at a byte position or an earlier line.

        See `FileLineReader.seek`. Any line read ahead by `has_next` is
        dropped.
        """
        self._next_line = None
        self._reader.seek(position)  # type: ignore[attr-defined]


class StreamLineIterator(LineIterator):
    """Iterate over the lines of a binary stream (or file) as a stream.

    Lines returned have no byte offset.
    """

    def __init__(
        self,
        source: str | os.PathLike | BinaryIO,
        encoding: CharacterEncoding | None = None,
        skip_line_prefix: str | None = None,
    ):
        super().__init__(source, encoding, skip_line_prefix)
        if isinstance(source, (str, os.PathLike)):
            logger.debug("Iterating through lines for file: %s", source)

    def _init_line_reader(
        self, source, encoding, skip_line_prefix
    ) -> StreamLineReader:
        return StreamLineReader(source, encoding, skip_line_prefix)

"""Base class for parsers of line-oriented delimited files."""

__all__ = ["LineFileParser", "to_frame"]

import dataclasses
import os
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import BinaryIO, Generic, TypeVar

import pandas as pd

from ccp_common.archive import is_zipped_file, open_input
from ccp_common.encoding import CharacterEncoding
from ccp_common.reader import (
    FileLineIterator,
    Line,
    LineIterator,
    StreamLineIterator,
)
from ccp_common.strings import split_with_field_enclosure

from ._columns import column as _column
from ._errors import ColumnCountError, FileFormatChangeError

T = TypeVar("T")

# Tells an omitted comment_indicator apart from an explicit None.
_UNSET = object()


class LineFileParser(ABC, Generic[T], Iterator[T]):
    """Turn the lines of a delimited file into records.

    Subclasses describe the format through class attributes and implement
    `parse_record`. They can override `initialize` to check a header.

    Attributes
    ----------
    delimiter : str
        Regex matching the column delimiter.
    field_enclosure : str, optional
        Regex matching the enclosure of fields that may contain the delimiter.
    comment_indicator : str, optional
        Lines starting with this are skipped.
    column_count : int, optional
        Exact number of columns every line must have.
    min_column_count, max_column_count : int, optional
        Allowed range of columns when the count may vary. Only used when
        `column_count` is None.

    """

    delimiter: str = r"\t"
    field_enclosure: str | None = None
    comment_indicator: str | None = None
    column_count: int | None = None
    min_column_count: int | None = None
    max_column_count: int | None = None

    def __init__(
        self,
        source: str | os.PathLike | BinaryIO,
        encoding: CharacterEncoding | None = None,
        comment_indicator: str | None | object = _UNSET,
    ):
        """Open a file or stream for parsing.

        Parameters
        ----------
        source : str, path-like or binary stream
            The file to parse. Plain files are read with byte offset tracking.
            Compressed files (.gz, .bz2, .zip) and streams are decompressed
            and read as streams. Streams passed in are closed with the parser.
        encoding : CharacterEncoding, optional
            Encoding of the file's text, defaults to the config's encoding.
        comment_indicator : str or None, optional
            Override the format's comment indicator. Pass None to not skip any
            lines.

        Raises
        ------
        FileFormatChangeError
            If the file's header does not match the expected format.

        """
        if comment_indicator is not _UNSET:
            self.comment_indicator = comment_indicator  # type: ignore[assignment]

        self._lines = self._open(source, encoding)
        self._next_record: T | None = None
        try:
            self.initialize()
        except BaseException:
            self.close()
            raise

    def _open(
        self,
        source: str | os.PathLike | BinaryIO,
        encoding: CharacterEncoding | None,
    ) -> LineIterator:
        if not isinstance(source, (str, os.PathLike)):
            return StreamLineIterator(source, encoding, self.comment_indicator)

        if is_zipped_file(source):
            return StreamLineIterator(
                open_input(source), encoding, self.comment_indicator
            )

        return FileLineIterator(source, encoding, self.comment_indicator)

    def initialize(self) -> None:
        """Prepare to parse, called once before any record is read.

        Does nothing by default. Override to read and validate headers.
        """

    def _read_header(self) -> Line:
        """Consume the first line or raise if the file is empty."""
        if not self._lines.has_next():
            raise FileFormatChangeError(
                "File format change detected. Expected a header line but the"
                " file is empty."
            )

        return next(self._lines)

    @abstractmethod
    def parse_record(self, line: Line) -> T | None:
        """Build a record from a line. Returning None skips the line."""
        raise NotImplementedError

    def columns(self, line: Line | str) -> list[str]:
        """Split a line into columns, checking the column count.

        Raises
        ------
        ColumnCountError
            If the number of columns doesn't match the format.

        """
        text = line.text if isinstance(line, Line) else line
        cols = split_with_field_enclosure(
            text, self.delimiter, self.field_enclosure
        )
        self._check_column_count(cols, text)
        return cols

    def _check_column_count(self, cols: list[str], text: str) -> None:
        if self.column_count is not None:
            if len(cols) != self.column_count:
                raise ColumnCountError(
                    f"Expected {self.column_count} columns but there were"
                    f" {len(cols)} columns. Line = {text}"
                )
            return

        if self.min_column_count is not None and (
            len(cols) < self.min_column_count
        ):
            raise ColumnCountError(
                f"Expected at least {self.min_column_count} columns but there"
                f" were {len(cols)} columns. Line = {text}"
            )

        if self.max_column_count is not None and (
            len(cols) > self.max_column_count
        ):
            raise ColumnCountError(
                f"Expected at most {self.max_column_count} columns but there"
                f" were {len(cols)} columns. Line = {text}"
            )

    @staticmethod
    def column(cols: list[str], index: int, line: Line | str) -> str:
        """Return column `index` or raise `ColumnIndexError`."""
        text = line.text if isinstance(line, Line) else line
        return _column(cols, index, text)

    def has_next(self) -> bool:
        while self._next_record is None:
            if not self._lines.has_next():
                return False

            self._next_record = self.parse_record(next(self._lines))

        return True

    def __next__(self) -> T:
        if not self.has_next():
            raise StopIteration

        record = self._next_record
        self._next_record = None
        return record  # type: ignore[return-value]

    def close(self) -> None:
        self._lines.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def to_frame(records: Iterable) -> pd.DataFrame:
    """Collect dataclass records (e.g. a parser) into a data frame.

    Columns are named after the record's fields. A parser passed in is read
    to exhaustion but not closed.
    """
    return pd.DataFrame([dataclasses.asdict(rec) for rec in records])

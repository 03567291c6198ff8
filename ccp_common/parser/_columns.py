"""Pull columns out of delimited lines and files."""

__all__ = ["column", "columns_from_line", "load_columns", "load_lines"]

import os
from typing import Sequence

from ccp_common.encoding import CharacterEncoding
from ccp_common.reader import StreamLineIterator
from ccp_common.strings import split_with_field_enclosure

from ._errors import ColumnIndexError


def column(columns: Sequence[str], index: int, line: str) -> str:
    """Return `columns[index]`, raising `ColumnIndexError` if it's missing."""
    if not 0 <= index < len(columns):
        raise ColumnIndexError(
            f"Column index {index} does not exist on line. There are only"
            f" {len(columns)} columns on line: {line}"
        )

    return columns[index]


def columns_from_line(
    line: str,
    delimiter_regex: str | None,
    field_enclosure: str | None = None,
    column_indexes: Sequence[int] | None = None,
) -> list[str]:
    """Split a line and return the requested columns.

    Parameters
    ----------
    line : str
        The text to split.
    delimiter_regex : str or None
        The column delimiter. If None the whole line is the only column.
    field_enclosure : str, optional
        Regex for the enclosure around fields that may contain the delimiter,
        see `ccp_common.strings.split_with_field_enclosure`.
    column_indexes : sequence of int, optional
        Which columns to return, in order. By default all columns.

    Raises
    ------
    ColumnIndexError
        If one of `column_indexes` is not on the line.

    """
    if delimiter_regex is None:
        return [line]

    tokens = split_with_field_enclosure(line, delimiter_regex, field_enclosure)
    if column_indexes is None or len(column_indexes) == 0:
        return tokens

    return [column(tokens, idx, line) for idx in column_indexes]


def load_columns(
    path: str | os.PathLike,
    delimiter_regex: str | None,
    column_indexes: Sequence[int] | None = None,
    encoding: CharacterEncoding | None = None,
    comment_indicator: str | None = None,
    field_enclosure: str | None = None,
) -> list[list[str]]:
    """Read the requested columns of every line of a delimited file.

    With a delimiter, at least one column index must be requested; to get
    whole lines pass `delimiter_regex=None` (or use `load_lines`).
    """
    if delimiter_regex is not None and not column_indexes:
        raise ValueError(
            f'Cannot parse columns from line. A delimiter "{delimiter_regex}"'
            " has been specified, however no columns have been requested. If"
            " you want the entire line, set the delimiter to be None."
        )

    with StreamLineIterator(path, encoding, comment_indicator) as lines:
        return [
            columns_from_line(
                line.text, delimiter_regex, field_enclosure, column_indexes
            )
            for line in lines
        ]


def load_lines(
    path: str | os.PathLike,
    encoding: CharacterEncoding | None = None,
    comment_indicator: str | None = None,
) -> list[str]:
    columns = load_columns(path, None, None, encoding, comment_indicator)
    return [cols[0] for cols in columns]

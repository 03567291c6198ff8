__all__ = ["Line", "LineTerminator"]

import dataclasses
from enum import Enum


class LineTerminator(Enum):
    """The three kinds of line break."""

    CR = "\r"
    LF = "\n"
    # Windows
    CRLF = "\r\n"

    @property
    def terminator(self) -> str:
        return self.value

    @property
    def length(self) -> int:
        return len(self.value)


@dataclasses.dataclass(frozen=True)
class Line:
    """A single line read from a file or stream.

    Attributes
    ----------
    text : str
        The decoded line with its terminator removed.
    terminator : LineTerminator
        The line break found at the end of the line. Needed to reconstruct
        exact offsets of the following line.
    character_offset : int
        Number of UTF-16 code units before this line.
    code_point_offset : int
        Number of Unicode code points before this line. Smaller than
        `character_offset` when earlier lines contain characters outside the
        basic multilingual plane.
    line_number : int
        Zero-based position of the line among the lines that were not skipped.
    byte_offset : int, optional
        Number of bytes from the beginning of the file to the start of the
        line's text. Only tracked by file-backed readers.

    """

    text: str
    terminator: LineTerminator
    character_offset: int
    code_point_offset: int
    line_number: int
    byte_offset: int | None = None

    def __str__(self) -> str:
        return "(Line:{} Offset:{}) {}".format(
            self.line_number, self.character_offset, self.text
        )

__all__ = ["LineReader", "FileLineReader", "StreamLineReader"]

import io
import os
from abc import ABC, abstractmethod
from typing import BinaryIO

from ccp_common.encoding import CharacterEncoding, default_encoding
from ccp_common.strings import utf16_length

from ._buffered import BufferedRafReader
from ._line import Line, LineTerminator

_PhysicalLine = tuple[str, LineTerminator, int | None]


class LineReader(ABC):
    """Base class for reading `Line`s while tracking their offsets.

    Subclasses only need to provide the next physical line. This class keeps
    the running character and code point offsets, drops lines starting with
    `skip_line_prefix` and numbers the remaining lines.
    """

    def __init__(self, skip_line_prefix: str | None = None):
        """Set up offset tracking.

        Parameters
        ----------
        skip_line_prefix : str, optional
            Lines whose text (ignoring leading whitespace) starts with this
            prefix are read but never returned. Skipped lines do not take a
            line number but still count towards the offsets of later lines.

        """
        self.skip_line_prefix = skip_line_prefix
        self._reset_counters()

    def _reset_counters(
        self,
        line_number: int = 0,
        character_offset: int = 0,
        code_point_offset: int = 0,
    ) -> None:
        self._line_number = line_number
        self._character_offset = character_offset
        self._code_point_offset = code_point_offset

    @abstractmethod
    def _read_physical_line(self) -> _PhysicalLine | None:
        """Return the next line's text, terminator and byte offset or None."""
        raise NotImplementedError

    def skip_line(self, text: str) -> bool:
        if self.skip_line_prefix is None:
            return False

        return text.strip().startswith(self.skip_line_prefix)

    def read_line(self) -> Line | None:
        """Return the next line that isn't skipped or None when exhausted."""
        while (physical := self._read_physical_line()) is not None:
            text, terminator, byte_offset = physical
            character_offset = self._character_offset
            code_point_offset = self._code_point_offset
            self._character_offset += utf16_length(text) + terminator.length
            self._code_point_offset += len(text) + terminator.length

            if self.skip_line(text):
                continue

            line = Line(
                text,
                terminator,
                character_offset,
                code_point_offset,
                self._line_number,
                byte_offset,
            )
            self._line_number += 1
            return line

        return None

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FileLineReader(LineReader):
    """Read lines from a file with full offset tracking.

    Lines are read with a `BufferedRafReader` so, in addition to character and
    code point offsets, each line records the byte offset of its start and the
    reader can be repositioned with `seek`.
    """

    def __init__(
        self,
        path: str | os.PathLike,
        encoding: CharacterEncoding | None = None,
        skip_line_prefix: str | None = None,
        buffer_size: int | None = None,
    ):
        super().__init__(skip_line_prefix)
        if not os.path.isfile(path):
            raise FileNotFoundError(f'File "{os.fspath(path)}" does not exist.')

        self.path = os.fspath(path)
        self._reader = BufferedRafReader(
            path, encoding or default_encoding(), buffer_size
        )

    @property
    def file_pointer(self) -> int:
        return self._reader.file_pointer

    def _read_physical_line(self) -> _PhysicalLine | None:
        byte_offset = self._reader.file_pointer
        text = self._reader.read_buffered_line()
        if text is None:
            return None

        return (text, self._reader.line_terminator, byte_offset)

    def seek(self, position: int | Line) -> None:
        """Restart reading from a byte position or a previously read line.

        Given a `Line`, the next call to `read_line` returns that line again
        and offsets and line numbers continue from it. Given a byte position,
        offsets and line numbers are counted from zero starting at that
        position.
        """
        if isinstance(position, Line):
            if position.byte_offset is None:
                raise ValueError("Line has no byte offset to seek to.")

            self._reader.seek(position.byte_offset)
            self._reset_counters(
                position.line_number,
                position.character_offset,
                position.code_point_offset,
            )
        else:
            self._reader.seek(position)
            self._reset_counters()

    def close(self) -> None:
        self._reader.close()


class StreamLineReader(LineReader):
    """Read lines from a stream without byte offsets.

    Useful for input that can't be seeked, like a decompressed or piped
    stream. Lines have character and code point offsets and line numbers but
    `byte_offset` is always None.
    """

    def __init__(
        self,
        source: str | os.PathLike | BinaryIO,
        encoding: CharacterEncoding | None = None,
        skip_line_prefix: str | None = None,
    ):
        """Wrap a binary stream (or open a file) for line reading.

        A stream passed in is closed along with the reader.
        """
        super().__init__(skip_line_prefix)
        encoding = encoding or default_encoding()
        if isinstance(source, (str, os.PathLike)):
            source = open(source, "rb")

        # newline="" leaves "\r", "\n" and "\r\n" untranslated while still
        # splitting lines on any of them.
        self._reader = io.TextIOWrapper(
            source, encoding=encoding.charset, errors="strict", newline=""
        )

    def _read_physical_line(self) -> _PhysicalLine | None:
        raw = self._reader.readline()
        if raw == "":
            return None

        if raw.endswith("\r\n"):
            return (raw[:-2], LineTerminator.CRLF, None)
        if raw.endswith("\r"):
            return (raw[:-1], LineTerminator.CR, None)
        if raw.endswith("\n"):
            return (raw[:-1], LineTerminator.LF, None)

        return (raw, LineTerminator.LF, None)

    def close(self) -> None:
        self._reader.close()

"""Buffered random access reading of files.

Reading a file one byte at a time with `seek` support is slow when every read
is a system call. `BufferedRafReader` keeps a chunk of the file in memory and
serves single bytes and whole lines out of it, only touching the file again
when a read or seek leaves the buffered window.
"""

__all__ = ["BufferedRafReader", "ByteList", "EOF"]

import os

from ccp_common import config
from ccp_common.encoding import CharacterEncoding, default_encoding

from ._line import LineTerminator

EOF = -1

_LF = ord("\n")
_CR = ord("\r")


class ByteList:
    """Collect the bytes of one line and decode them."""

    def __init__(self, encoding: CharacterEncoding):
        self.encoding = encoding
        self._bytes = bytearray()

    def add(self, byte: int) -> None:
        self._bytes.append(byte)

    def clear(self) -> None:
        self._bytes.clear()

    def __len__(self) -> int:
        return len(self._bytes)

    def decode(self) -> str:
        """Decode collected bytes, raising `UnicodeDecodeError` if malformed."""
        return self.encoding.decode(bytes(self._bytes))


class BufferedRafReader:
    """Read bytes and lines from a file through a fixed size buffer."""

    def __init__(
        self,
        path: str | os.PathLike,
        encoding: CharacterEncoding | None = None,
        buffer_size: int | None = None,
    ):
        """Open `path` for buffered reading.

        Parameters
        ----------
        path : str or path-like
            The file to read.
        encoding : CharacterEncoding, optional
            Encoding used to decode lines returned by `read_buffered_line`.
            Defaults to the config's `encoding` (UTF-8).
        buffer_size : int, optional
            Number of bytes to hold in memory. Defaults to the config's
            `buffer_size` (64 KiB).

        """
        self.buffer_size = buffer_size or config.buffer_size
        if self.buffer_size < 1:
            raise ValueError("Buffer size must be positive.")

        self._fp = open(path, "rb")
        self._buffer = b""
        self._buffer_start = 0
        self._pos = 0
        self._bytes = ByteList(encoding or default_encoding())
        self._line_terminator: LineTerminator | None = None
        self.chunk_reads = 0

    @property
    def encoding(self) -> CharacterEncoding:
        return self._bytes.encoding

    @property
    def file_pointer(self) -> int:
        """Absolute position of the next byte to be read."""
        return self._buffer_start + self._pos

    @property
    def line_terminator(self) -> LineTerminator:
        """Terminator of the line most recently returned by `read_buffered_line`."""
        if self._line_terminator is None:
            raise RuntimeError(
                "The line terminator has not been set. A call to"
                " read_buffered_line() must precede requesting it."
            )

        return self._line_terminator

    def read(self) -> int:
        """Return the next byte as an int or `EOF` at the end of the file."""
        if self._pos >= len(self._buffer):
            if self._read_chunk(self.file_pointer) == 0:
                return EOF

        self._pos += 1
        return self._buffer[self._pos - 1]

    def read_buffered_line(self) -> str | None:
        """Read up to the next LF, CR or CRLF and return the decoded text.

        Returns None only once the end of the file is reached with no bytes
        left, so an empty line is returned as "". A line ending at the end of
        the file without a terminator reports `LineTerminator.LF`.
        """
        self._bytes.clear()
        while True:
            c = self.read()
            if c == EOF or c == _LF:
                terminator = LineTerminator.LF
                break

            if c == _CR:
                terminator = LineTerminator.CR
                cur = self.file_pointer
                if self.read() == _LF:
                    terminator = LineTerminator.CRLF
                else:
                    self.seek(cur)
                break

            self._bytes.add(c)

        if c == EOF and len(self._bytes) == 0:
            return None

        text = self._bytes.decode()
        self._line_terminator = terminator
        return text

    def seek(self, pos: int) -> None:
        """Move the read position to absolute byte offset `pos`.

        Positions inside the buffered window only move the cursor. Anything
        else reloads the buffer starting at `pos`.
        """
        if pos < 0:
            raise ValueError(f"Cannot seek to negative position {pos}.")

        if self._buffer_start <= pos < self._buffer_start + len(self._buffer):
            self._pos = pos - self._buffer_start
        else:
            self._read_chunk(pos)

    def _read_chunk(self, pos: int) -> int:
        self._fp.seek(pos)
        self._buffer = self._fp.read(self.buffer_size)
        self._buffer_start = pos
        self._pos = 0
        self.chunk_reads += 1
        return len(self._buffer)

    def close(self) -> None:
        self._fp.close()

    @property
    def closed(self) -> bool:
        return self._fp.closed

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

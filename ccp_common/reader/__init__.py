"""Read lines from files and streams while tracking their offsets."""

from ._buffered import EOF, BufferedRafReader, ByteList
from ._iterator import FileLineIterator, LineIterator, StreamLineIterator
from ._line import Line, LineTerminator
from ._line_reader import FileLineReader, LineReader, StreamLineReader

__all__ = [
    "EOF",
    "BufferedRafReader",
    "ByteList",
    "Line",
    "LineTerminator",
    "LineReader",
    "FileLineReader",
    "StreamLineReader",
    "LineIterator",
    "FileLineIterator",
    "StreamLineIterator",
]

"""Character encodings supported by the readers and their file suffixes."""

__all__ = ["CharacterEncoding", "default_encoding"]

import codecs
import os
from enum import Enum

from ccp_common import config


class CharacterEncoding(Enum):
    """A character set paired with the canonical suffix for files using it.

    Decoding and encoding are strict: malformed input raises
    `UnicodeDecodeError` (or `UnicodeEncodeError`) instead of being replaced.
    """

    US_ASCII = ("US-ASCII", ".ascii")
    UTF_8 = ("UTF-8", ".utf8")
    ISO_8859_1 = ("ISO-8859-1", ".iso8859-1")

    def __init__(self, charset: str, file_suffix: str):
        self.charset = charset
        self.file_suffix = file_suffix

    def decode(self, data: bytes) -> str:
        return data.decode(self.charset, errors="strict")

    def encode(self, text: str) -> bytes:
        return text.encode(self.charset, errors="strict")

    def has_specific_file_name(self, path: str | os.PathLike) -> bool:
        """Whether the file name already ends with this encoding's suffix."""
        return os.fspath(path).endswith(self.file_suffix)

    def specific_file_name(self, path: str | os.PathLike) -> str:
        """Append the encoding's suffix to `path` if it's not already there."""
        path = os.fspath(path)
        if self.has_specific_file_name(path):
            return path

        return path + self.file_suffix

    @classmethod
    def from_name(cls, name: str) -> "CharacterEncoding":
        """Look up an encoding by charset name or alias.

        Any name Python's codecs know works, e.g. "UTF-8", "utf8", "ASCII" or
        "latin-1".
        """
        try:
            canonical = codecs.lookup(name).name
        except LookupError:
            raise ValueError(
                f'Unsupported character encoding "{name}".'
            ) from None

        for member in cls:
            if codecs.lookup(member.charset).name == canonical:
                return member

        raise ValueError(f'Unsupported character encoding "{name}".')


def default_encoding() -> CharacterEncoding:
    """Return the encoding set in the config file (UTF-8 unless changed)."""
    return CharacterEncoding.from_name(config.encoding)

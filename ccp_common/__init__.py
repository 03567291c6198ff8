"""Streaming readers and parsers for line-oriented bioinformatics files."""

__all__ = ["CharacterEncoding", "archive", "config", "data", "parser", "reader"]

from . import archive, config, data, parser, reader
from .encoding import CharacterEncoding

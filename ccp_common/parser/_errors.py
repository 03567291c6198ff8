__all__ = ["FileFormatChangeError", "ColumnCountError", "ColumnIndexError"]


class FileFormatChangeError(ValueError):
    """A file's header no longer matches the format the parser expects."""


class ColumnCountError(ValueError):
    """A line has a different number of columns than the format requires."""


class ColumnIndexError(IndexError):
    """A requested column does not exist on a line."""

import dataclasses
import gzip
import io

import pytest

from ccp_common.parser import (
    ColumnCountError,
    ColumnIndexError,
    FileFormatChangeError,
    LineFileParser,
    columns_from_line,
    load_columns,
    load_lines,
    to_frame,
)
from ccp_common.reader import Line


@dataclasses.dataclass(frozen=True)
class _Value:
    text: str
    line_number: int


class PairParser(LineFileParser[tuple]):
    comment_indicator = "#"
    column_count = 2

    def parse_record(self, line: Line) -> tuple | None:
        if line.text == "skip":
            return None

        return tuple(self.columns(line))


class RangeParser(LineFileParser[list]):
    min_column_count = 2
    max_column_count = 3

    def parse_record(self, line: Line) -> list:
        return self.columns(line)


class HeaderParser(LineFileParser[str]):
    def initialize(self) -> None:
        header = self._read_header()
        if header.text != "HEADER":
            raise FileFormatChangeError(
                f"File format change detected. Observed: {header.text}"
            )

    def parse_record(self, line: Line) -> str:
        return line.text


def _write(tmp_path, text: str, name: str = "data.txt") -> str:
    path = tmp_path / name
    path.write_text(text)
    return str(path)


class TestLineFileParser:
    def test_records(self, tmp_path):
        path = _write(tmp_path, "# comment\na\tb\nskip\nc\td\n")
        with PairParser(path) as parser:
            assert list(parser) == [("a", "b"), ("c", "d")]

    def test_has_next_and_exhaustion(self, tmp_path):
        path = _write(tmp_path, "a\tb\n")
        with PairParser(path) as parser:
            assert parser.has_next()
            assert parser.has_next()
            assert next(parser) == ("a", "b")
            assert not parser.has_next()
            with pytest.raises(StopIteration):
                next(parser)

    def test_only_skipped_records(self, tmp_path):
        path = _write(tmp_path, "skip\nskip\n")
        with PairParser(path) as parser:
            assert not parser.has_next()

    def test_column_count(self, tmp_path):
        path = _write(tmp_path, "a\tb\tc\n")
        with PairParser(path) as parser:
            with pytest.raises(ColumnCountError) as excinfo:
                next(parser)

        message = str(excinfo.value)
        assert "Expected 2 columns but there were 3" in message
        assert "a\tb\tc" in message

    def test_column_range(self, tmp_path):
        path = _write(tmp_path, "a\tb\na\tb\tc\na\n")
        with RangeParser(path) as parser:
            assert next(parser) == ["a", "b"]
            assert next(parser) == ["a", "b", "c"]
            with pytest.raises(ColumnCountError):
                next(parser)

        path = _write(tmp_path, "a\tb\tc\td\n", "wide.txt")
        with RangeParser(path) as parser:
            with pytest.raises(ColumnCountError):
                next(parser)

    def test_comment_indicator_override(self, tmp_path):
        path = _write(tmp_path, "#\tx\na\tb\n")
        with PairParser(path, comment_indicator=None) as parser:
            assert list(parser) == [("#", "x"), ("a", "b")]

    def test_gzipped_input(self, tmp_path):
        path = tmp_path / "data.txt.gz"
        with gzip.open(path, "wt") as fp:
            fp.write("# comment\na\tb\n")

        with PairParser(path) as parser:
            assert list(parser) == [("a", "b")]

    def test_stream_input(self):
        with PairParser(io.BytesIO(b"a\tb\r\nc\td\r\n")) as parser:
            assert list(parser) == [("a", "b"), ("c", "d")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PairParser(tmp_path / "missing.txt")

    def test_header(self, tmp_path):
        path = _write(tmp_path, "HEADER\nrow\n")
        with HeaderParser(path) as parser:
            assert list(parser) == ["row"]

    def test_header_mismatch_closes_input(self):
        stream = io.BytesIO(b"NOT A HEADER\nrow\n")
        with pytest.raises(FileFormatChangeError):
            HeaderParser(stream)

        assert stream.closed

    def test_missing_header(self):
        with pytest.raises(FileFormatChangeError):
            HeaderParser(io.BytesIO(b""))

    def test_requires_parse_record(self, tmp_path):
        class Incomplete(LineFileParser[str]):
            pass

        with pytest.raises(TypeError):
            Incomplete(_write(tmp_path, "x\n"))

    def test_column(self):
        cols = ["a", "b"]
        assert LineFileParser.column(cols, 1, "a\tb") == "b"
        with pytest.raises(ColumnIndexError) as excinfo:
            LineFileParser.column(cols, 2, "a\tb")

        assert "Column index 2 does not exist on line" in str(excinfo.value)
        assert "only 2 columns" in str(excinfo.value)

    def test_to_frame(self, tmp_path):
        path = _write(tmp_path, "HEADER\nx\ny\n")

        class Frameable(HeaderParser):
            def parse_record(self, line):
                return _Value(line.text, line.line_number)

        with Frameable(path) as parser:
            frame = to_frame(parser)

        assert list(frame.columns) == ["text", "line_number"]
        assert frame["text"].tolist() == ["x", "y"]
        assert frame["line_number"].tolist() == [1, 2]


class TestColumns:
    def test_columns_from_line(self):
        assert columns_from_line("a\tb\tc", r"\t", column_indexes=[2, 0]) == [
            "c",
            "a",
        ]
        assert columns_from_line("a\tb", None) == ["a\tb"]
        assert columns_from_line('"a,b",c', ",", '"') == ['"a,b"', "c"]

    def test_columns_from_line_bad_index(self):
        with pytest.raises(ColumnIndexError):
            columns_from_line("a\tb", r"\t", column_indexes=[5])

    def test_load_columns(self, tmp_path):
        path = _write(tmp_path, "#h\ta\na\t1\nb\t2\n")
        assert load_columns(path, r"\t", [1], comment_indicator="#") == [
            ["1"],
            ["2"],
        ]

    def test_load_columns_requires_indexes(self, tmp_path):
        path = _write(tmp_path, "a\t1\n")
        with pytest.raises(ValueError):
            load_columns(path, r"\t")

    def test_load_lines(self, tmp_path):
        path = _write(tmp_path, "!skip\none\ntwo\n")
        assert load_lines(path, comment_indicator="!") == ["one", "two"]

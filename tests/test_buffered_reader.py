import pytest

from ccp_common import CharacterEncoding
from ccp_common.reader import EOF, BufferedRafReader, LineTerminator


def _write(tmp_path, content: bytes, name: str = "sample.txt") -> str:
    path = tmp_path / name
    path.write_bytes(content)
    return str(path)


class TestBufferedRafReader:
    def test_read_bytes_until_eof(self, tmp_path):
        path = _write(tmp_path, b"ab")
        with BufferedRafReader(path) as reader:
            assert reader.read() == ord("a")
            assert reader.read() == ord("b")
            assert reader.read() == EOF
            assert reader.read() == EOF

    def test_line_terminators(self, tmp_path):
        path = _write(tmp_path, b"one\ntwo\r\nthree\rfour")
        expected = [
            ("one", LineTerminator.LF),
            ("two", LineTerminator.CRLF),
            ("three", LineTerminator.CR),
            ("four", LineTerminator.LF),
        ]
        with BufferedRafReader(path) as reader:
            for text, terminator in expected:
                assert reader.read_buffered_line() == text
                assert reader.line_terminator == terminator

            assert reader.read_buffered_line() is None

    def test_empty_lines_are_not_eof(self, tmp_path):
        path = _write(tmp_path, b"a\n\nb\n")
        with BufferedRafReader(path) as reader:
            lines = [reader.read_buffered_line() for _ in range(4)]

        assert lines == ["a", "", "b", None]

    def test_utf8_lines(self, tmp_path):
        path = _write(tmp_path, "café\n\U0001f600\n".encode("utf-8"))
        with BufferedRafReader(path, CharacterEncoding.UTF_8) as reader:
            assert reader.read_buffered_line() == "café"
            assert reader.read_buffered_line() == "\U0001f600"
            assert reader.file_pointer == 11

    def test_cr_pushed_back_across_buffer_boundary(self, tmp_path):
        path = _write(tmp_path, b"ab\rcd\n")
        with BufferedRafReader(path, buffer_size=3) as reader:
            assert reader.read_buffered_line() == "ab"
            assert reader.line_terminator == LineTerminator.CR
            assert reader.file_pointer == 3
            assert reader.chunk_reads == 2

            assert reader.read_buffered_line() == "cd"
            assert reader.line_terminator == LineTerminator.LF
            assert reader.chunk_reads == 2

    def test_crlf_split_across_buffers(self, tmp_path):
        path = _write(tmp_path, b"ab\r\ncd")
        with BufferedRafReader(path, buffer_size=3) as reader:
            assert reader.read_buffered_line() == "ab"
            assert reader.line_terminator == LineTerminator.CRLF
            assert reader.read_buffered_line() == "cd"

    def test_trailing_cr(self, tmp_path):
        path = _write(tmp_path, b"ab\r")
        with BufferedRafReader(path) as reader:
            assert reader.read_buffered_line() == "ab"
            assert reader.line_terminator == LineTerminator.CR
            assert reader.read_buffered_line() is None

    def test_seek_inside_buffer_does_not_reload(self, tmp_path):
        path = _write(tmp_path, b"line one\nline two\n")
        with BufferedRafReader(path) as reader:
            assert reader.read_buffered_line() == "line one"
            assert reader.chunk_reads == 1

            reader.seek(0)
            assert reader.chunk_reads == 1
            assert reader.read_buffered_line() == "line one"

            reader.seek(5)
            assert reader.read_buffered_line() == "one"
            assert reader.chunk_reads == 1

    def test_seek_outside_buffer_reloads(self, tmp_path):
        path = _write(tmp_path, b"0123456789\n")
        with BufferedRafReader(path, buffer_size=4) as reader:
            assert reader.read() == ord("0")
            reader.seek(8)
            assert reader.chunk_reads == 2
            assert reader.file_pointer == 8
            assert reader.read_buffered_line() == "89"

    def test_seek_past_end(self, tmp_path):
        path = _write(tmp_path, b"abc\n")
        with BufferedRafReader(path) as reader:
            reader.seek(100)
            assert reader.read() == EOF
            assert reader.read_buffered_line() is None

    def test_negative_seek(self, tmp_path):
        path = _write(tmp_path, b"abc\n")
        with BufferedRafReader(path) as reader:
            with pytest.raises(ValueError):
                reader.seek(-1)

    def test_terminator_before_read(self, tmp_path):
        path = _write(tmp_path, b"abc\n")
        with BufferedRafReader(path) as reader:
            with pytest.raises(RuntimeError):
                reader.line_terminator

    def test_malformed_utf8(self, tmp_path):
        path = _write(tmp_path, b"ok\n\xff\xfe\n")
        with BufferedRafReader(path, CharacterEncoding.UTF_8) as reader:
            assert reader.read_buffered_line() == "ok"
            with pytest.raises(UnicodeDecodeError):
                reader.read_buffered_line()

    def test_non_ascii_in_ascii_file(self, tmp_path):
        path = _write(tmp_path, "café\n".encode("utf-8"))
        with BufferedRafReader(path, CharacterEncoding.US_ASCII) as reader:
            with pytest.raises(UnicodeDecodeError):
                reader.read_buffered_line()

    def test_latin1(self, tmp_path):
        path = _write(tmp_path, "café\n".encode("latin-1"))
        with BufferedRafReader(path, CharacterEncoding.ISO_8859_1) as reader:
            assert reader.read_buffered_line() == "café"

    def test_close(self, tmp_path):
        path = _write(tmp_path, b"abc\n")
        reader = BufferedRafReader(path)
        reader.close()
        assert reader.closed

    def test_invalid_buffer_size(self, tmp_path):
        path = _write(tmp_path, b"abc\n")
        with pytest.raises(ValueError):
            BufferedRafReader(path, buffer_size=-1)

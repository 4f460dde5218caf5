"""
Tests for the line source and comment filter.
"""

import io

import pytest

from mtxread.data.errors import EarlyEOFError, MtxIOError
from mtxread.data.lines import (
    LineSource,
    find_first_record,
    is_banner,
    is_comment,
    open_source,
    skip_comments,
)


class FailingStream:
    name = "failing"

    def readline(self):
        raise OSError("disk on fire")


class TestLineSource:
    def test_line_numbers(self):
        source = LineSource(io.StringIO("a\nb\n"))
        assert source.next_line() == "a"
        assert source.next_line() == "b"
        assert source.line_no == 2
        assert source.next_line() is None
        assert source.line_no == 2

    def test_last_line_without_newline(self):
        source = LineSource(io.StringIO("a\nlast"))
        source.next_line()
        assert source.next_line() == "last"

    def test_blank_line_is_not_eof(self):
        source = LineSource(io.StringIO("\nx\n"))
        assert source.next_line() == ""
        assert source.next_line() == "x"

    def test_decodes_bytes(self):
        source = LineSource(io.BytesIO(b"1 2\n"))
        assert source.next_line() == "1 2"

    def test_require_line(self):
        source = LineSource(io.StringIO(""))
        with pytest.raises(EarlyEOFError) as exc_info:
            source.require_line("size line")
        assert "size line" in str(exc_info.value)

    def test_read_error(self):
        with pytest.raises(MtxIOError) as exc_info:
            LineSource(FailingStream()).next_line()
        assert isinstance(exc_info.value.__cause__, OSError)


class TestCommentFilter:
    def test_predicates(self):
        assert is_comment("  % note")
        assert not is_comment("1 2 3")
        assert is_banner("%%MatrixMarket matrix array real general")
        assert not is_banner("% note")
        assert not is_banner("%% generated by tool v1")
        assert is_banner("%%matrixmarket matrix array real general")

    def test_skip_comments(self):
        source = LineSource(io.StringIO("% a\n\n  %b\n2 3\n"))
        assert skip_comments(source, "size line") == "2 3"
        assert source.line_no == 4

    def test_skip_comments_eof(self):
        with pytest.raises(EarlyEOFError):
            skip_comments(LineSource(io.StringIO("% a\n%b\n")), "size line")

    def test_find_first_record_banner(self):
        source = LineSource(io.StringIO("% x\n\n%%MatrixMarket matrix array real general\n"))
        assert find_first_record(source).startswith("%%MatrixMarket")

    def test_find_first_record_skips_double_percent_comment(self):
        source = LineSource(io.StringIO("%% tool output\n%%MatrixMarket matrix array real general\n"))
        assert find_first_record(source).startswith("%%MatrixMarket")
        assert source.line_no == 2

    def test_find_first_record_sizes(self):
        source = LineSource(io.StringIO("% x\n2 3\n"))
        assert find_first_record(source) == "2 3"


class TestOpenSource:
    def test_path_is_closed(self, write_mtx):
        path = write_mtx("2 3\n")
        with open_source(path) as source:
            stream = source.stream
            assert source.next_line() == "2 3"
        assert stream.closed

    def test_path_closed_on_error(self, write_mtx):
        path = write_mtx("2 3\n")
        with pytest.raises(RuntimeError):
            with open_source(path) as source:
                stream = source.stream
                raise RuntimeError("boom")
        assert stream.closed

    def test_stream_not_closed(self):
        stream = io.StringIO("x\n")
        with open_source(stream) as source:
            assert source.stream is stream
        assert not stream.closed

    def test_missing_path(self, tmp_path):
        with pytest.raises(MtxIOError):
            with open_source(tmp_path / "nope.mtx"):
                pass

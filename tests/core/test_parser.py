"""Tests for --vimgrep output parsing."""

import pytest

from rgbridge.constants import MAX_RESULTS
from rgbridge.search import parser
from rgbridge.search.parser import (
    DriveLetterSplitter,
    PlainSplitter,
    parse_line,
    parse_output,
    select_splitter,
)

PLAIN = PlainSplitter()
DRIVE = DriveLetterSplitter()


class TestSelectSplitter:

    def test_injected_modes(self):
        assert isinstance(select_splitter(True), DriveLetterSplitter)
        assert isinstance(select_splitter(False), PlainSplitter)

    def test_detects_host(self, monkeypatch):
        monkeypatch.setattr(parser, "host_uses_drive_letters", lambda: True)
        assert isinstance(select_splitter(), DriveLetterSplitter)

        monkeypatch.setattr(parser, "host_uses_drive_letters", lambda: False)
        assert isinstance(select_splitter(), PlainSplitter)


class TestParseLinePlain:

    def test_plain_path(self):
        result = parse_line("/foo/bar.txt:12:5:hello world", "hello", PLAIN)

        assert result.file == "/foo/bar.txt"
        assert result.line == 12
        assert result.column == 5
        assert result.content == "hello world"
        assert result.match_text == "hello"

    def test_content_keeps_its_colons(self):
        result = parse_line("src/app.py:3:1:x = {'a': 1}  # note: y", "x", PLAIN)

        assert result.file == "src/app.py"
        assert result.content == "x = {'a': 1}  # note: y"

    def test_empty_content(self):
        result = parse_line("a.txt:1:1:", "x", PLAIN)

        assert result is not None
        assert result.content == ""

    @pytest.mark.parametrize(
        "line", ["", "no colons here", "a.txt:1", "a.txt:1:2"]
    )
    def test_too_few_segments_skipped(self, line):
        assert parse_line(line, "x", PLAIN) is None

    @pytest.mark.parametrize(
        "line_no,column",
        [("abc", "5"), ("12", ""), ("-3", "5"), (" 12", "5"), ("12", "+5"), ("１２", "5")],
    )
    def test_unparseable_numbers_become_zero(self, line_no, column):
        result = parse_line(f"/a.txt:{line_no}:{column}:text", "x", PLAIN)

        assert result is not None
        assert result.content == "text"
        expected_line = 12 if line_no == "12" else 0
        expected_column = 5 if column == "5" else 0
        assert result.line == expected_line
        assert result.column == expected_column

    def test_drive_letter_path_misparsed_in_plain_mode(self):
        # Plain mode does not know about drive letters
        result = parse_line("C:\\foo\\bar.txt:12:5:hello world", "hello", PLAIN)

        assert result.file == "C"
        assert result.line == 0
        assert result.content == "5:hello world"


class TestParseLineDriveLetter:

    def test_drive_letter_path(self):
        result = parse_line("C:\\foo\\bar.txt:12:5:hello world", "hello", DRIVE)

        assert result.file == "C:\\foo\\bar.txt"
        assert result.line == 12
        assert result.column == 5
        assert result.content == "hello world"
        assert result.match_text == "hello"

    def test_content_keeps_its_colons(self):
        result = parse_line("D:\\a.py:7:9:url = 'http://x:80'", "url", DRIVE)

        assert result.file == "D:\\a.py"
        assert result.line == 7
        assert result.column == 9
        assert result.content == "url = 'http://x:80'"

    def test_path_without_drive_letter_skipped(self):
        assert parse_line("src\\a.py:7:9:content", "x", DRIVE) is None

    def test_too_few_segments_skipped(self):
        assert parse_line("C:\\a.py:7", "x", DRIVE) is None


class TestParseOutput:

    def test_order_preserved(self):
        stdout = "b.txt:2:1:second\na.txt:1:1:first\n"
        results = parse_output(stdout, "x", PLAIN)

        assert [r.file for r in results] == ["b.txt", "a.txt"]

    def test_crlf_line_endings(self):
        stdout = "C:\\a.txt:1:1:one\r\nC:\\b.txt:2:3:two\r\n"
        results = parse_output(stdout, "o", DRIVE)

        assert [r.content for r in results] == ["one", "two"]
        assert results[1].file == "C:\\b.txt"

    def test_malformed_lines_skipped(self):
        stdout = "a.txt:1:1:ok\ngarbage\n\nb.txt:2:2:also ok\n"
        results = parse_output(stdout, "ok", PLAIN)

        assert [r.file for r in results] == ["a.txt", "b.txt"]

    def test_content_with_unicode_separators_stays_one_line(self):
        stdout = "a.txt:1:1:left\u2028right\x0cend\n"
        results = parse_output(stdout, "x", PLAIN)

        assert len(results) == 1
        assert results[0].content == "left\u2028right\x0cend"

    def test_match_text_is_pattern_for_every_result(self):
        stdout = "a.txt:1:1:Foo\na.txt:2:1:FOO\na.txt:3:1:foo\n"
        results = parse_output(stdout, "foo", PLAIN)

        assert len(results) == 3
        assert all(r.match_text == "foo" for r in results)

    def test_empty_output(self):
        assert parse_output("", "x", PLAIN) == []

    def test_capped_at_max_results(self):
        stdout = "".join(f"f.txt:{i}:1:line\n" for i in range(1, MAX_RESULTS + 51))
        results = parse_output(stdout, "line", PLAIN)

        assert len(results) == MAX_RESULTS
        assert results[-1].line == MAX_RESULTS

    def test_malformed_lines_do_not_count_toward_cap(self):
        stdout = "bad\nbad\nf.txt:1:1:a\nbad\nf.txt:2:1:b\nf.txt:3:1:c\n"
        results = parse_output(stdout, "x", PLAIN, max_results=2)

        assert [r.line for r in results] == [1, 2]

    def test_cap_cannot_exceed_limit(self):
        stdout = "".join(f"f.txt:{i}:1:line\n" for i in range(1, MAX_RESULTS + 11))
        results = parse_output(stdout, "line", PLAIN, max_results=MAX_RESULTS * 2)

        assert len(results) == MAX_RESULTS

    def test_same_output_same_results(self):
        stdout = "a.txt:1:1:x\nb.txt:2:2:y\n"
        assert parse_output(stdout, "x", PLAIN) == parse_output(stdout, "x", PLAIN)

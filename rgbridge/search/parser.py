"""Parse ripgrep --vimgrep output into SearchResult records.

Each output line is ``path:line:column:content``. On hosts with
drive-letter paths (``C:\\src\\app.py``) the path itself holds a colon, so
the line is split one extra time and the first two pieces are rejoined.
The splitting rule is a strategy picked once per call, so both rules can
be exercised on any host.
"""

import os
from typing import Iterator, List, Optional, Tuple

from rgbridge.constants import MAX_RESULTS
from rgbridge.search.models import SearchResult

Fields = Tuple[str, str, str, str]


class PlainSplitter:
    """``path:line:column:content`` with a colon-free path."""

    segments = 4

    def split(self, line: str) -> Optional[Fields]:
        parts = line.split(":", self.segments - 1)
        if len(parts) != self.segments:
            return None
        file, line_no, column, content = parts
        return file, line_no, column, content


class DriveLetterSplitter:
    """``X:path:line:column:content``, path rebuilt from the first two pieces."""

    segments = 5

    def split(self, line: str) -> Optional[Fields]:
        parts = line.split(":", self.segments - 1)
        if len(parts) != self.segments:
            return None
        drive, rest, line_no, column, content = parts
        return f"{drive}:{rest}", line_no, column, content


def host_uses_drive_letters() -> bool:
    return os.name == "nt"


def select_splitter(drive_letters: Optional[bool] = None):
    """Pick the splitting strategy.

    Args:
        drive_letters: Force a mode. None detects it from the host.
    """
    if drive_letters is None:
        drive_letters = host_uses_drive_letters()
    return DriveLetterSplitter() if drive_letters else PlainSplitter()


def _position(text: str) -> int:
    """Line/column number, or 0 if the text is not a plain decimal."""
    if text.isascii() and text.isdigit():
        return int(text)
    return 0


def parse_line(line: str, pattern: str, splitter=None) -> Optional[SearchResult]:
    """Parse one output line. Returns None for a malformed line."""
    if splitter is None:
        splitter = select_splitter()

    fields = splitter.split(line)
    if fields is None:
        return None

    file, line_no, column, content = fields
    return SearchResult(
        file=file,
        line=_position(line_no),
        column=_position(column),
        content=content,
        match_text=pattern,
    )


def _lines(text: str) -> Iterator[str]:
    # str.splitlines() would also break on \x0b, \x1c, \u2028 etc. inside content
    for line in text.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


def parse_output(
    stdout: str,
    pattern: str,
    splitter=None,
    max_results: int = MAX_RESULTS,
) -> List[SearchResult]:
    """Parse the full captured output, in tool order.

    Malformed lines are skipped and do not count toward max_results.
    Parsing stops as soon as max_results records exist; the rest of the
    output is discarded.
    """
    if splitter is None:
        splitter = select_splitter()
    max_results = min(max_results, MAX_RESULTS)

    results: List[SearchResult] = []
    for line in _lines(stdout):
        if len(results) >= max_results:
            break
        result = parse_line(line, pattern, splitter)
        if result is not None:
            results.append(result)
    return results

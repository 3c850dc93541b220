"""Search pipeline: request -> argv -> tool run -> parsed results."""

from rgbridge.search.args import build_args
from rgbridge.search.models import SearchRequest, SearchResult
from rgbridge.search.parser import (
    DriveLetterSplitter,
    PlainSplitter,
    parse_line,
    parse_output,
    select_splitter,
)
from rgbridge.search.runner import ProcessRunner, RunOutcome, RunStatus, classify
from rgbridge.search.service import SearchResponse, SearchService, search

__all__ = [
    "SearchRequest",
    "SearchResult",
    "build_args",
    "ProcessRunner",
    "RunOutcome",
    "RunStatus",
    "classify",
    "PlainSplitter",
    "DriveLetterSplitter",
    "select_splitter",
    "parse_line",
    "parse_output",
    "SearchService",
    "SearchResponse",
    "search",
]

"""Search pipeline: build args, run the tool, parse its output.

SearchService.search() is what the CLI and MCP server call. The
module-level search() is the plain front-end entry point: it returns the
result list, or the error message as a string.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from rgbridge.constants import DEFAULT_BINARY, MAX_RESULTS
from rgbridge.primitives.errors import (
    ExecutionError,
    HistoryError,
    LaunchError,
    SearchCancelled,
)
from rgbridge.search.args import build_args
from rgbridge.search.models import SearchRequest, SearchResult
from rgbridge.search.parser import parse_output, select_splitter
from rgbridge.search.runner import ProcessRunner, RunOutcome, RunStatus

logger = logging.getLogger(__name__)


@dataclass
class SearchResponse:
    """Outcome of one search.

    Exactly one of these holds: error is set, cancelled is True, or
    results is the (possibly empty) result list.
    """

    results: List[SearchResult] = field(default_factory=list)
    error: Optional[str] = None
    cancelled: bool = False
    duration_ms: float = 0.0
    status: Optional[RunStatus] = None

    @property
    def success(self) -> bool:
        return self.error is None and not self.cancelled

    @property
    def total(self) -> int:
        return len(self.results)

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {"error": self.error}
        if self.cancelled:
            return {"cancelled": True, "results": [], "total": 0}
        return {
            "results": [r.to_dict() for r in self.results],
            "total": self.total,
        }

    def raise_for_error(self) -> List[SearchResult]:
        """Return the results, or raise the matching SearchError."""
        if self.cancelled:
            raise SearchCancelled("search cancelled")
        if self.status == RunStatus.LAUNCH_FAILED:
            raise LaunchError(self.error or "launch failed")
        if self.error is not None:
            raise ExecutionError(self.error)
        return self.results


class SearchService:
    """Runs searches against one search binary.

    Args:
        binary: Search tool to invoke (looked up on PATH).
        runner: Optional ProcessRunner; overrides binary.
        drive_letters: Force drive-letter output parsing on or off.
            None detects it from the host.
        max_results: Result cap, never above MAX_RESULTS.
        history: Optional SearchHistory; successful searches are added.
    """

    def __init__(
        self,
        binary: str = DEFAULT_BINARY,
        runner: Optional[ProcessRunner] = None,
        drive_letters: Optional[bool] = None,
        max_results: int = MAX_RESULTS,
        history=None,
    ):
        self.runner = runner if runner is not None else ProcessRunner(binary)
        self.drive_letters = drive_letters
        self.max_results = min(max_results, MAX_RESULTS)
        self.history = history

    async def search(
        self,
        request: SearchRequest,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> SearchResponse:
        start_time = time.time()

        outcome = await self.runner.run(build_args(request), cancel_event)
        response = self._respond(request, outcome)
        response.duration_ms = (time.time() - start_time) * 1000

        if response.success:
            logger.debug(
                "Search for %r in %s: %d results%s",
                request.pattern,
                request.root_path,
                response.total,
                " (capped)" if response.total >= self.max_results else "",
            )
            await self._record(request)
        return response

    def _respond(self, request: SearchRequest, outcome: RunOutcome) -> SearchResponse:
        if outcome.is_error:
            return SearchResponse(error=outcome.error, status=outcome.status)
        if outcome.status == RunStatus.CANCELLED:
            return SearchResponse(cancelled=True, status=outcome.status)
        if outcome.status == RunStatus.NO_MATCHES:
            return SearchResponse(status=outcome.status)

        splitter = select_splitter(self.drive_letters)
        results = parse_output(
            outcome.stdout, request.pattern, splitter, self.max_results
        )
        return SearchResponse(results=results, status=outcome.status)

    async def _record(self, request: SearchRequest) -> None:
        if self.history is None:
            return
        try:
            # File write off the event loop
            await asyncio.to_thread(self.history.add, request)
        except HistoryError as e:
            logger.warning("Could not save search history: %s", e)


async def search(
    root_path: str,
    pattern: str,
    case_insensitive: bool = False,
    whole_word: bool = False,
    regex: bool = False,
    ignore_hidden: bool = False,
    max_depth: int = 0,
    *,
    include_types: Sequence[str] = (),
    exclude_types: Sequence[str] = (),
    binary: str = DEFAULT_BINARY,
) -> Union[List[SearchResult], str]:
    """Front-end entry point.

    Returns:
        The results in tool order (empty when nothing matched), or the
        error message string when the tool could not run or failed.
    """
    request = SearchRequest(
        root_path=root_path,
        pattern=pattern,
        case_insensitive=case_insensitive,
        whole_word=whole_word,
        regex=regex,
        ignore_hidden=ignore_hidden,
        max_depth=max_depth,
        include_types=include_types,
        exclude_types=exclude_types,
    )
    response = await SearchService(binary).search(request)
    if response.error is not None:
        return response.error
    return response.results

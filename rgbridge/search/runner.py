"""Run the search tool and classify how it ended.

ripgrep overloads a nonzero exit status: it means "no matches" when
stderr is empty and "error" when stderr has text.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from rgbridge.constants import DEFAULT_BINARY
from rgbridge.primitives.subprocess import (
    ProcessExecutor,
    SubprocessPrimitive,
    SubprocessResult,
)

logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    MATCHES = "matches"
    NO_MATCHES = "no_matches"
    FAILED = "failed"
    LAUNCH_FAILED = "launch_failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class RunOutcome:
    """Classified result of one tool run.

    Attributes:
        status: How the run ended.
        stdout: Captured output; only meaningful for MATCHES.
        error: stderr text for FAILED, launch description for
            LAUNCH_FAILED, None otherwise.
        return_code: Exit code of the tool, if it ran.
    """

    status: RunStatus
    stdout: str = ""
    error: Optional[str] = None
    return_code: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.status in (RunStatus.FAILED, RunStatus.LAUNCH_FAILED)


def classify(result: SubprocessResult) -> RunOutcome:
    """Map a raw SubprocessResult to a RunOutcome."""
    if result.launch_error is not None:
        return RunOutcome(RunStatus.LAUNCH_FAILED, error=result.launch_error)
    if result.cancelled:
        return RunOutcome(RunStatus.CANCELLED, return_code=result.return_code)
    if result.success:
        return RunOutcome(
            RunStatus.MATCHES, stdout=result.stdout, return_code=result.return_code
        )
    if not result.stderr:
        return RunOutcome(RunStatus.NO_MATCHES, return_code=result.return_code)
    return RunOutcome(
        RunStatus.FAILED, error=result.stderr, return_code=result.return_code
    )


class ProcessRunner:
    """Invokes the search binary through an injectable executor."""

    def __init__(
        self,
        binary: str = DEFAULT_BINARY,
        executor: Optional[ProcessExecutor] = None,
    ):
        self.binary = binary
        self.executor = executor if executor is not None else SubprocessPrimitive()

    def argv(self, args: Sequence[str]) -> List[str]:
        return [self.binary, *args]

    async def run(
        self,
        args: Sequence[str],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> RunOutcome:
        """Run the binary with args and wait for it to exit.

        Args:
            args: Arguments from build_args().
            cancel_event: Setting this terminates the tool; the outcome is
                then CANCELLED.

        Returns:
            RunOutcome. Launch and tool failures are outcomes, not exceptions.
        """
        result = await self.executor.execute(self.argv(args), cancel_event)
        outcome = classify(result)

        if outcome.status == RunStatus.FAILED:
            logger.info(
                "%s exited %s with error output", self.binary, outcome.return_code
            )
        elif outcome.status == RunStatus.NO_MATCHES:
            logger.debug("%s exited %s: no matches", self.binary, outcome.return_code)

        return outcome

"""Subprocess execution primitive.

Runs one child process per call, buffers both output streams in memory
and reaps the child on every exit path. No shell is involved: argv is
passed straight to the OS.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple

from rgbridge.constants import TERMINATE_GRACE

logger = logging.getLogger(__name__)


@dataclass
class SubprocessResult:
    """Result of subprocess execution.

    Attributes:
        success: True if return code is 0.
        stdout: Standard output from process.
        stderr: Standard error from process.
        return_code: Exit code from process.
        duration_ms: Time taken for execution in milliseconds.
        launch_error: Description of why the process could not start,
            or None if it started.
        cancelled: True if the process was terminated by a cancel signal.
    """

    success: bool
    stdout: str
    stderr: str
    return_code: int
    duration_ms: float
    launch_error: Optional[str] = None
    cancelled: bool = False


class ProcessExecutor(Protocol):
    """Anything that can run argv and hand back a SubprocessResult."""

    async def execute(
        self,
        argv: Sequence[str],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> SubprocessResult: ...


class SubprocessPrimitive:
    """Executes a command with asyncio and captures its output."""

    def __init__(self, grace: float = TERMINATE_GRACE):
        self.grace = grace

    async def execute(
        self,
        argv: Sequence[str],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> SubprocessResult:
        """Execute argv and wait for it to exit.

        Args:
            argv: Command and arguments. argv[0] is looked up on PATH.
            cancel_event: Optional event; setting it terminates the child.

        Returns:
            SubprocessResult with execution details. Never raises for
            launch failures or nonzero exits.
        """
        start_time = time.time()
        argv = list(argv)

        if not argv:
            return SubprocessResult(
                success=False,
                stdout="",
                stderr="",
                return_code=-1,
                duration_ms=(time.time() - start_time) * 1000,
                launch_error="No command specified",
            )

        logger.debug("Launching: %s", argv)
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            logger.warning("Command not found: %s", argv[0])
            return self._launch_failure(argv[0], e, 127, start_time)
        except OSError as e:
            logger.warning("Failed to launch %s: %s", argv[0], e)
            return self._launch_failure(argv[0], e, 126, start_time)
        except ValueError as e:
            # NUL bytes cannot be passed through exec
            logger.warning("Invalid argv for %s: %s", argv[0], e)
            return self._launch_failure(argv[0], e, 126, start_time)

        communicate = asyncio.ensure_future(proc.communicate())
        try:
            if cancel_event is not None:
                finished = await self._wait_or_cancel(communicate, cancel_event)
                if not finished:
                    await self._terminate(proc)
                    stdout_bytes, stderr_bytes = await communicate
                    logger.info("Cancelled: %s (pid %s)", argv[0], proc.pid)
                    return SubprocessResult(
                        success=False,
                        stdout=_decode(stdout_bytes),
                        stderr=_decode(stderr_bytes),
                        return_code=proc.returncode if proc.returncode is not None else -1,
                        duration_ms=(time.time() - start_time) * 1000,
                        cancelled=True,
                    )
            stdout_bytes, stderr_bytes = await communicate
        except asyncio.CancelledError:
            communicate.cancel()
            await self._terminate(proc)
            raise

        return SubprocessResult(
            success=proc.returncode == 0,
            stdout=_decode(stdout_bytes),
            stderr=_decode(stderr_bytes),
            return_code=proc.returncode,
            duration_ms=(time.time() - start_time) * 1000,
        )

    async def _wait_or_cancel(
        self,
        communicate: "asyncio.Future[Tuple[bytes, bytes]]",
        cancel_event: asyncio.Event,
    ) -> bool:
        """Wait for the child or the cancel event. True if the child won."""
        if cancel_event.is_set():
            return communicate.done()

        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait(
                {communicate, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            waiter.cancel()
        return communicate.done()

    async def _terminate(self, proc: asyncio.subprocess.Process) -> None:
        """SIGTERM, then SIGKILL after the grace period. Always reaps."""
        if proc.returncode is not None:
            return
        try:
            proc.terminate()
        except ProcessLookupError:
            pass
        try:
            await asyncio.wait_for(proc.wait(), timeout=self.grace)
        except asyncio.TimeoutError:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()

    def _launch_failure(
        self, command: str, error: Exception, return_code: int, start_time: float
    ) -> SubprocessResult:
        return SubprocessResult(
            success=False,
            stdout="",
            stderr="",
            return_code=return_code,
            duration_ms=(time.time() - start_time) * 1000,
            launch_error=f"Failed to launch {command}: {error}",
        )


def _decode(data: Optional[bytes]) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


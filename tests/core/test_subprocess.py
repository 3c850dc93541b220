"""Tests for subprocess primitive.

The running interpreter stands in for the child process.
"""

import asyncio
import os
import sys

import pytest

from rgbridge.primitives.subprocess import SubprocessPrimitive, SubprocessResult

PY = sys.executable

posix_only = pytest.mark.skipif(os.name == "nt", reason="POSIX process semantics")


def py(code: str):
    return [PY, "-c", code]


class TestSubprocessResult:
    """Test SubprocessResult dataclass."""

    def test_create_subprocess_result_success(self):
        result = SubprocessResult(
            success=True,
            stdout="output",
            stderr="",
            return_code=0,
            duration_ms=100,
        )
        assert result.success is True
        assert result.stdout == "output"
        assert result.launch_error is None
        assert result.cancelled is False

    def test_create_subprocess_result_launch_failure(self):
        result = SubprocessResult(
            success=False,
            stdout="",
            stderr="",
            return_code=127,
            duration_ms=1,
            launch_error="Failed to launch rg: not found",
        )
        assert result.success is False
        assert result.launch_error.startswith("Failed to launch")


@pytest.mark.asyncio
class TestSubprocessPrimitive:
    """Test SubprocessPrimitive.execute."""

    async def test_execute_simple_command(self):
        result = await SubprocessPrimitive().execute(py("print('hello')"))

        assert result.success is True
        assert result.stdout.strip() == "hello"
        assert result.stderr == ""
        assert result.return_code == 0
        assert result.duration_ms >= 0
        assert result.launch_error is None

    async def test_failed_command_with_stderr(self):
        result = await SubprocessPrimitive().execute(
            py("import sys; sys.stderr.write('boom'); sys.exit(2)")
        )

        assert result.success is False
        assert result.return_code == 2
        assert result.stderr == "boom"
        assert result.launch_error is None

    async def test_failed_command_without_stderr(self):
        result = await SubprocessPrimitive().execute(py("import sys; sys.exit(1)"))

        assert result.success is False
        assert result.return_code == 1
        assert result.stderr == ""

    async def test_stdout_and_stderr_captured_separately(self):
        result = await SubprocessPrimitive().execute(
            py("import sys; print('out'); sys.stderr.write('err')")
        )

        assert result.stdout.strip() == "out"
        assert result.stderr == "err"

    async def test_invalid_utf8_is_replaced(self):
        result = await SubprocessPrimitive().execute(
            py("import sys; sys.stdout.buffer.write(b'\\xff ok')")
        )

        assert result.success is True
        assert result.stdout == "\ufffd ok"

    async def test_arguments_are_not_shell_interpreted(self):
        arg = "$HOME; echo 'x' | cat && *"
        result = await SubprocessPrimitive().execute(
            [PY, "-c", "import sys; sys.stdout.write(sys.argv[1])", arg]
        )

        assert result.stdout == arg

    async def test_stdin_is_closed(self):
        result = await SubprocessPrimitive().execute(
            py("import sys; sys.stdout.write(repr(sys.stdin.read()))")
        )

        assert result.stdout == "''"

    async def test_nonexistent_command_is_launch_failure(self):
        result = await SubprocessPrimitive().execute(["nonexistent_command_xyz_42"])

        assert result.success is False
        assert result.return_code == 127
        assert "nonexistent_command_xyz_42" in result.launch_error

    @posix_only
    async def test_non_executable_file_is_launch_failure(self, tmp_path):
        script = tmp_path / "not_executable"
        script.write_text("#!/bin/sh\necho hi\n")
        script.chmod(0o644)

        result = await SubprocessPrimitive().execute([str(script)])

        assert result.success is False
        assert result.return_code == 126
        assert result.launch_error is not None

    async def test_nul_byte_in_argument_is_launch_failure(self):
        result = await SubprocessPrimitive().execute([PY, "-c", "pass", "a\x00b"])

        assert result.success is False
        assert result.return_code == 126
        assert result.launch_error.startswith(f"Failed to launch {PY}")

    async def test_no_command_specified(self):
        result = await SubprocessPrimitive().execute([])

        assert result.success is False
        assert result.launch_error == "No command specified"


@pytest.mark.asyncio
class TestCancellation:
    """cancel_event terminates the child and marks the result cancelled."""

    async def test_unset_event_does_not_interfere(self):
        cancel_event = asyncio.Event()
        result = await SubprocessPrimitive().execute(py("print('done')"), cancel_event)

        assert result.success is True
        assert result.cancelled is False
        assert result.stdout.strip() == "done"

    async def test_cancel_running_process(self):
        cancel_event = asyncio.Event()
        asyncio.get_running_loop().call_later(0.3, cancel_event.set)

        result = await SubprocessPrimitive().execute(
            py("import time; time.sleep(30)"), cancel_event
        )

        assert result.cancelled is True
        assert result.success is False
        assert result.duration_ms < 20000

    async def test_event_already_set(self):
        cancel_event = asyncio.Event()
        cancel_event.set()

        result = await SubprocessPrimitive().execute(
            py("import time; time.sleep(30)"), cancel_event
        )

        assert result.cancelled is True

    @posix_only
    async def test_kill_after_grace_when_sigterm_ignored(self):
        cancel_event = asyncio.Event()
        asyncio.get_running_loop().call_later(1.0, cancel_event.set)

        result = await SubprocessPrimitive(grace=0.2).execute(
            py(
                "import signal, time\n"
                "signal.signal(signal.SIGTERM, signal.SIG_IGN)\n"
                "time.sleep(30)\n"
            ),
            cancel_event,
        )

        assert result.cancelled is True
        assert result.duration_ms < 20000

    async def test_task_cancellation_propagates(self):
        task = asyncio.ensure_future(
            SubprocessPrimitive().execute(py("import time; time.sleep(30)"))
        )
        await asyncio.sleep(0.3)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

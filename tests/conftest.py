"""Shared fixtures: every test gets its own RGBRIDGE_HOME."""

import os
import stat
import sys
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _setup_home(tmp_path, monkeypatch):
    """Point the config/history/log directory at a temporary RGBRIDGE_HOME."""
    home = tmp_path / "rgbridge_home"
    home.mkdir()

    monkeypatch.setenv("RGBRIDGE_HOME", str(home))
    monkeypatch.delenv("RGBRIDGE_RG_BINARY", raising=False)

    yield home


@pytest.fixture
def fake_rg(tmp_path):
    """Write an executable that prints canned --vimgrep output.

    Returns a factory: fake_rg(stdout="", stderr="", exit_code=0) -> path.
    """
    if os.name == "nt":
        pytest.skip("fake rg script needs a POSIX shebang")

    counter = {"n": 0}

    def make(stdout: str = "", stderr: str = "", exit_code: int = 0) -> str:
        counter["n"] += 1
        script = tmp_path / f"fake_rg_{counter['n']}"
        script.write_text(
            f"#!{sys.executable}\n"
            "import sys\n"
            f"sys.stdout.write({stdout!r})\n"
            f"sys.stderr.write({stderr!r})\n"
            f"sys.exit({exit_code})\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return make

"""Shared test fixtures for dockside."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any
from unittest.mock import patch

import pytest

# ---------------------------------------------------------------------------
# Shared helpers (plain functions/classes, not fixtures — importable by test files)
# ---------------------------------------------------------------------------


def make_settings(**overrides):
    """Create a Settings object from pure defaults: no dockside.toml, no .env.

    Usage::

        s = make_settings(docker=DockerConfig(path="/opt/docker"))
    """
    from dockside.config import DockerConfig, ResourcePolicy, Settings

    defaults = {
        "docker": DockerConfig(),
        "resources": ResourcePolicy(),
    }
    defaults.update(overrides)
    return Settings.model_construct(**defaults)


class FakeProcess:
    """Simulates asyncio.subprocess.Process for testing.

    Streams that were not requested as pipes are None, as with DEVNULL.
    """

    def __init__(self, *, capture_stdout: bool = True, capture_stderr: bool = True) -> None:
        self.stdin = None
        self.stdout = asyncio.StreamReader() if capture_stdout else None
        self.stderr = asyncio.StreamReader() if capture_stderr else None
        self._returncode: int | None = None
        self._wait_event = asyncio.Event()
        self._lost = False
        self.pid = 12345

    def emit_stdout(self, data: bytes) -> None:
        if self.stdout is not None:
            self.stdout.feed_data(data)

    def emit_stderr(self, data: bytes) -> None:
        if self.stderr is not None:
            self.stderr.feed_data(data)

    def close(self, code: int = 0) -> None:
        """Simulate process exit."""
        self._returncode = code
        for stream in (self.stdout, self.stderr):
            if stream is not None and stream.exception() is None:
                stream.feed_eof()
        self._wait_event.set()

    def lose(self) -> None:
        """Simulate the child being reaped elsewhere: wait() cannot observe it."""
        self._lost = True
        self.close(0)

    async def wait(self) -> int:
        await self._wait_event.wait()
        if self._lost:
            raise ChildProcessError("No child processes")
        return self._returncode  # type: ignore[return-value]

    @property
    def returncode(self) -> int | None:
        return self._returncode


@dataclass
class Script:
    """How FakeShell should behave for one command line."""

    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    delay: float = 0.0  # seconds before the process exits
    hang: bool = False  # never exit on its own
    lost: bool = False  # exit status cannot be observed
    stderr_error: OSError | None = None
    spawn_error: OSError | None = None


class FakeShell:
    """Scripted stand-in for asyncio.create_subprocess_shell.

    Unscripted commands exit 0 with no output. Records every command line
    in spawn order and the peak number of processes alive at once.
    """

    def __init__(self) -> None:
        self.scripts: dict[str, Script] = {}
        self.commands: list[str] = []
        self.processes: list[FakeProcess] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def on(self, command: str, **kwargs: Any) -> None:
        self.scripts[command] = Script(**kwargs)

    def _exit(self, proc: FakeProcess, script: Script) -> None:
        self.in_flight -= 1
        if script.lost:
            proc.lose()
        else:
            proc.close(script.returncode)

    async def __call__(self, command: str, **kwargs: Any) -> FakeProcess:
        assert kwargs.get("stdin") == asyncio.subprocess.DEVNULL
        script = self.scripts.get(command, Script())
        self.commands.append(command)
        if script.spawn_error is not None:
            raise script.spawn_error

        proc = FakeProcess(
            capture_stdout=kwargs.get("stdout") == asyncio.subprocess.PIPE,
            capture_stderr=kwargs.get("stderr") == asyncio.subprocess.PIPE,
        )
        self.processes.append(proc)
        proc.emit_stdout(script.stdout.encode())
        proc.emit_stderr(script.stderr.encode())
        if script.stderr_error is not None and proc.stderr is not None:
            proc.stderr.set_exception(script.stderr_error)

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        if not script.hang:
            loop = asyncio.get_running_loop()
            loop.call_later(script.delay, self._exit, proc, script)
        return proc


# ---------------------------------------------------------------------------
# Autouse fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Each test starts from default Settings and no cached Docker handle."""
    monkeypatch.setattr("dockside.config._settings", make_settings())
    monkeypatch.setattr("dockside.runtime._docker", None)


# ---------------------------------------------------------------------------
# Reusable fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def fake_shell():
    """Must be async so StreamReaders are created on the test's event loop."""
    shell = FakeShell()
    with patch("dockside.docker._process.asyncio.create_subprocess_shell", shell):
        yield shell


@pytest.fixture
def cpu_mounts(tmp_path):
    """A mount table with a v1 cpu,cpuacct hierarchy."""
    mounts = tmp_path / "mounts"
    mounts.write_text(
        "proc /proc proc rw,nosuid,nodev,noexec,relatime 0 0\n"
        "cgroup /sys/fs/cgroup/cpu,cpuacct cgroup rw,nosuid,cpu,cpuacct 0 0\n"
    )
    return str(mounts)

"""Process management — spawning CLI commands and harvesting their output.

Provides:
  - spawn() — start a shell command line with optional stdout/stderr capture
  - Subprocess — handle exposing the exit status and the captured streams
  - check_error() — succeed only on an observed zero exit status
  - command_failure() — build the CommandFailure for an unsuccessful outcome
  - describe_status() — human-readable form of a return code
"""

from __future__ import annotations

import asyncio
import signal

from dockside.errors import CommandFailure, SpawnError, StreamIOError
from dockside.logger import logger
from dockside.types import CommandOutcome


def describe_status(code: int) -> str:
    """Describe a return code the way a wait status reads.

    asyncio reports death-by-signal as a negative return code.
    """
    if code < 0:
        try:
            name = signal.Signals(-code).name
        except ValueError:
            name = str(-code)
        return f"terminated with signal {name}"
    return f"exited with status {code}"


class Subprocess:
    """Handle on a spawned CLI process.

    Captured pipes are drained concurrently with the wait so a chatty
    process can never block on a full pipe buffer. The exit status is
    resolved exactly once and shared by every awaiter.
    """

    def __init__(self, command: str, proc: asyncio.subprocess.Process) -> None:
        self.command = command
        self.proc = proc
        self._status_task: asyncio.Task | None = None  # type: ignore[type-arg]
        self._captured: dict[str, bytes] = {}
        self._read_errors: dict[str, OSError] = {}

    async def status(self) -> int | None:
        """Wait for exit. None means the process could not be observed to completion."""
        if self._status_task is None:
            self._status_task = asyncio.ensure_future(self._wait())
        return await asyncio.shield(self._status_task)

    async def read_stdout(self) -> str:
        return await self._read("stdout")

    async def read_stderr(self) -> str:
        return await self._read("stderr")

    # ------------------------------------------------------------------

    async def _wait(self) -> int | None:
        await asyncio.gather(self._drain("stdout"), self._drain("stderr"))
        try:
            return await self.proc.wait()
        except ChildProcessError as exc:
            logger.warning("Lost track of process", cmd=self.command, err=str(exc))
            return None

    async def _drain(self, name: str) -> None:
        stream: asyncio.StreamReader | None = getattr(self.proc, name)
        if stream is None:
            return
        try:
            self._captured[name] = await stream.read()
        except OSError as exc:
            # Surfaced by _read(); the wait itself must still complete.
            self._read_errors[name] = exc

    async def _read(self, name: str) -> str:
        if getattr(self.proc, name) is None:
            raise StreamIOError(name, "stream was not captured")
        await self.status()
        err = self._read_errors.get(name)
        if err is not None:
            raise StreamIOError(name, str(err)) from err
        return self._captured.get(name, b"").decode(errors="replace")


async def spawn(command: str, *, stdout: bool = False, stderr: bool = True) -> Subprocess:
    """Start *command* through the shell; stdin is always /dev/null.

    Streams that are not captured go to /dev/null.
    """
    logger.debug("Running docker command", cmd=command)
    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE if stdout else asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE if stderr else asyncio.subprocess.DEVNULL,
        )
    except OSError as exc:
        raise SpawnError(command, str(exc)) from exc
    return Subprocess(command, proc)


def command_failure(
    command: str,
    outcome: CommandOutcome,
    harvest_error: BaseException | None = None,
) -> CommandFailure:
    """Build the error for an outcome that did not exit cleanly.

    A failure to harvest stderr never replaces the primary error: it is
    named in the message and chained as the cause.
    """
    if outcome.exit_status is None:
        msg = f"No status found for '{command}'"
    else:
        msg = (
            f"Failed to '{command}': {describe_status(outcome.exit_status)},"
            f" stderr = {outcome.stderr.strip()}"
        )
    if harvest_error is not None:
        msg += f" (stderr unavailable: {harvest_error})"

    exc = CommandFailure(command, outcome.exit_status, outcome.stderr, message=msg)
    exc.__cause__ = harvest_error
    return exc


async def failure_for(command: str, s: Subprocess, status: int | None) -> CommandFailure:
    """Harvest stderr (best-effort) and turn it into a CommandFailure."""
    stderr = ""
    harvest_error: StreamIOError | None = None
    try:
        stderr = await s.read_stderr()
    except StreamIOError as exc:
        harvest_error = exc
    return command_failure(command, CommandOutcome(status, stderr=stderr), harvest_error)


async def check_error(command: str, s: Subprocess) -> None:
    """Return only if the exit status was observed and is zero."""
    status = await s.status()
    if status == 0:
        return
    raise await failure_for(command, s, status)

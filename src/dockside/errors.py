"""Exception types raised by the docker lifecycle layer.

Every failure surfaces to the awaiting caller as one of these; nothing is
logged-and-dropped inside the core. Builtin ``EnvironmentError``/``IOError``
are aliases of ``OSError``, hence the ``Docker``/``Stream`` prefixes.
"""

from __future__ import annotations


class DockerError(Exception):
    """Base class for all dockside errors."""


class DockerEnvironmentError(DockerError):
    """The host cannot run containers: cgroups missing or the CLI unresponsive."""


class SpawnError(DockerError):
    """The runtime CLI process could not be created."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        super().__init__(f"Failed to spawn '{command}': {reason}")


class StreamIOError(DockerError):
    """A captured stdout/stderr stream could not be read."""

    def __init__(self, stream: str, reason: str) -> None:
        self.stream = stream
        super().__init__(f"Cannot read {stream}: {reason}")


class CommandFailure(DockerError):
    """A CLI invocation exited non-zero, or its exit status was never observed.

    ``exit_code`` is None when no status was found. ``stderr`` is best-effort:
    it is empty when harvesting failed, in which case the harvesting error is
    chained as ``__cause__``.
    """

    def __init__(
        self,
        command: str,
        exit_code: int | None,
        stderr: str = "",
        message: str | None = None,
    ) -> None:
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(message or f"Failed to '{command}'")


class ParseError(DockerError):
    """CLI output (JSON or tabular) did not have the expected shape."""


class AmbiguousResultError(DockerError):
    """``inspect`` matched zero containers, or more than one."""

    def __init__(self, container: str, count: int) -> None:
        self.container = container
        self.count = count
        if count == 0:
            msg = f"Failed to find container '{container}'"
        else:
            msg = (
                f"Ambiguous container '{container}': inspect returned {count} matches,"
                " expected exactly one"
            )
        super().__init__(msg)

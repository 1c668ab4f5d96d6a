"""Data models for dockside."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Container:
    """A container as reported by ``docker inspect``.

    ``pid`` is None when the runtime reports pid 0, i.e. the container has
    no traceable process (stopped, or not yet started).
    """

    id: str
    name: str
    pid: int | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Container id must be non-empty")
        if not self.name:
            raise ValueError("Container name must be non-empty")


@dataclass(frozen=True)
class ResourceRequest:
    cpu_cores: float | None = None
    memory_bytes: int | None = None


@dataclass(frozen=True)
class CommandOutcome:
    """Observed result of a single CLI invocation.

    ``exit_status`` is None when the process could not be observed to
    completion; that always counts as failure.
    """

    exit_status: int | None
    stdout: str = ""
    stderr: str = ""

"""dockside — asynchronous container lifecycle management over the docker CLI."""

from dockside.docker import Docker
from dockside.errors import (
    AmbiguousResultError,
    CommandFailure,
    DockerEnvironmentError,
    DockerError,
    ParseError,
    SpawnError,
    StreamIOError,
)
from dockside.logger import configure_logging
from dockside.runtime import get_docker
from dockside.types import CommandOutcome, Container, ResourceRequest

__all__ = [
    "AmbiguousResultError",
    "CommandFailure",
    "CommandOutcome",
    "Container",
    "Docker",
    "DockerEnvironmentError",
    "DockerError",
    "ParseError",
    "ResourceRequest",
    "SpawnError",
    "StreamIOError",
    "configure_logging",
    "get_docker",
]

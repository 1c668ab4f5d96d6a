"""Process-wide Docker handle built from settings."""

from __future__ import annotations

from dockside.config import get_settings
from dockside.docker import Docker
from dockside.logger import logger

_docker: Docker | None = None


async def get_docker() -> Docker:
    """Lazy singleton — validates the host on first use."""
    global _docker  # noqa: PLW0603
    if _docker is None:
        s = get_settings()
        _docker = await Docker.create(
            s.docker.path,
            s.docker.validate_on_create,
            policy=s.resources,
            mounts_file=s.docker.mounts_file,
        )
        logger.info("Docker runtime ready", path=_docker.path)
    return _docker


def reset_docker() -> None:
    """Clear the cached handle (for tests)."""
    global _docker  # noqa: PLW0603
    _docker = None

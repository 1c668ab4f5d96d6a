"""Startup validation — one-shot check that the host can run containers.

Two gates, no retries:
  1. a cgroup hierarchy with the ``cpu`` subsystem is mounted
  2. ``docker info`` exits 0 within INFO_TIMEOUT seconds
"""

from __future__ import annotations

import asyncio

from dockside import cgroups
from dockside.docker._process import describe_status, spawn
from dockside.errors import DockerEnvironmentError, SpawnError
from dockside.logger import logger

INFO_TIMEOUT = 5.0  # seconds


def check_cpu_hierarchy(mounts_file: str = "/proc/mounts") -> str:
    """Return the cpu hierarchy mount point, or raise DockerEnvironmentError."""
    try:
        mount_point = cgroups.hierarchy("cpu", mounts_file)
    except OSError as exc:
        raise DockerEnvironmentError(f"Failed to read mount table '{mounts_file}': {exc}") from exc
    if mount_point is None:
        raise DockerEnvironmentError(
            "Failed to find a mounted cgroups hierarchy for the 'cpu' subsystem, "
            "you probably need to mount cgroups manually!"
        )
    return mount_point


async def probe_info(path: str) -> None:
    """Run ``<path> info`` with output discarded; raise unless it exits 0 in time."""
    try:
        s = await spawn(f"{path} info", stdout=False, stderr=False)
    except SpawnError as exc:
        raise DockerEnvironmentError(f"Docker info failed: {exc}") from exc

    # On timeout only the shield is cancelled: the docker info process is
    # not killed and its status task stays pending until the process exits.
    try:
        status = await asyncio.wait_for(s.status(), timeout=INFO_TIMEOUT)
    except TimeoutError as exc:
        raise DockerEnvironmentError("Docker info failed with time out") from exc

    if status != 0:
        msg = "Docker info failed to execute"
        if status is not None:
            msg += f", {describe_status(status)}"
        raise DockerEnvironmentError(msg)


async def validate_environment(path: str, mounts_file: str = "/proc/mounts") -> None:
    mount_point = check_cpu_hierarchy(mounts_file)
    logger.debug("Found cpu cgroup hierarchy", mount_point=mount_point)
    await probe_info(path)
    logger.info("Docker validated", path=path)

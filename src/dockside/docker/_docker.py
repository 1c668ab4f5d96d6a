"""Container lifecycle — run, kill, rm, inspect and ps through the docker CLI.

Each operation spawns its own CLI process and awaits it; operations share
no state, so any number may run concurrently. Failures raise the typed
errors from :mod:`dockside.errors`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field

from dockside.config import ResourcePolicy
from dockside.docker._parsing import parse_inspect_output, parse_ps_names
from dockside.docker._process import check_error, failure_for, spawn
from dockside.docker._resources import translate
from dockside.docker._validation import validate_environment
from dockside.logger import logger
from dockside.types import Container, ResourceRequest


@dataclass(frozen=True)
class Docker:
    """Validated entry point to a docker CLI binary.

    Build with :meth:`create`; the handle is immutable and safe to share.
    """

    path: str
    policy: ResourcePolicy = field(default_factory=ResourcePolicy)

    @classmethod
    async def create(
        cls,
        path: str,
        validate: bool = True,
        *,
        policy: ResourcePolicy | None = None,
        mounts_file: str = "/proc/mounts",
    ) -> Docker:
        """Return a handle for *path*, checking the host first unless *validate* is False.

        Raises DockerEnvironmentError if the cpu cgroup hierarchy is missing or
        ``docker info`` fails, times out or cannot be executed.
        """
        if validate:
            await validate_environment(path, mounts_file)
        return cls(path=path, policy=policy or ResourcePolicy())

    async def run(
        self,
        image: str,
        command: str,
        name: str,
        resources: ResourceRequest | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Start a detached container on the host network."""
        parts = [
            self.path,
            "run",
            "-d",
            *translate(resources, env, self.policy),
            "--net=host",
            f"--name={name}",
            image,
            command,
        ]
        cmd = " ".join(parts)
        s = await spawn(cmd)
        await check_error(cmd, s)

    async def kill(self, container: str, remove: bool = False) -> None:
        """Kill *container*; with *remove*, then remove it.

        When removing, the outcome of the kill is superseded by the removal:
        a kill that did not exit cleanly escalates to ``rm -f``.
        """
        cmd = f"{self.path} kill {container}"
        s = await spawn(cmd)
        status = await s.status()

        if remove:
            force = status != 0
            if force:
                logger.debug(
                    "Kill did not succeed, force removing",
                    container=container,
                    status=status,
                )
            await self.rm(container, force=force)
            return

        await check_error(cmd, s)

    async def rm(self, container: str, force: bool = False) -> None:
        cmd = f"{self.path} rm -f {container}" if force else f"{self.path} rm {container}"
        s = await spawn(cmd)
        await check_error(cmd, s)

    async def inspect(self, container: str) -> Container:
        """Inspect a single container by name or id.

        Raises AmbiguousResultError unless exactly one container matches.
        """
        cmd = f"{self.path} inspect {container}"
        s = await spawn(cmd, stdout=True)
        status = await s.status()
        if status != 0:
            raise await failure_for(cmd, s, status)

        output = await s.read_stdout()
        return parse_inspect_output(container, output)

    async def ps(self, all: bool = False, prefix: str | None = None) -> list[Container]:  # noqa: A002
        """List containers, inspecting each one whose name starts with *prefix*.

        Inspects run concurrently; results keep the row order of ``docker ps``.
        Any failed inspect fails the whole listing, once every inspect has
        finished. The first failure in row order is raised.
        """
        cmd = f"{self.path} ps -a" if all else f"{self.path} ps"
        s = await spawn(cmd, stdout=True)
        status = await s.status()
        if status != 0:
            raise await failure_for(cmd, s, status)

        names = parse_ps_names(await s.read_stdout(), prefix)
        results = await asyncio.gather(
            *(self.inspect(name) for name in names), return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

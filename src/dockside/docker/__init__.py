"""Docker lifecycle layer — drives the docker CLI for the host agent.

This package is split into focused submodules:
  _process     — spawning CLI processes, exit status, stderr harvesting
  _parsing     — inspect JSON / ps table parsing into Container
  _resources   — resource requests and env vars into ``docker run`` flags
  _validation  — one-shot startup checks (cpu cgroup, ``docker info``)
  _docker      — the Docker handle and its lifecycle operations
"""

from dockside.docker._docker import Docker
from dockside.docker._parsing import parse_container, parse_inspect_output, parse_ps_names
from dockside.docker._process import (
    Subprocess,
    check_error,
    command_failure,
    describe_status,
    spawn,
)
from dockside.docker._resources import env_flags, resource_flags, translate
from dockside.docker._validation import INFO_TIMEOUT, validate_environment

__all__ = [
    "INFO_TIMEOUT",
    "Docker",
    "Subprocess",
    "check_error",
    "command_failure",
    "describe_status",
    "env_flags",
    "parse_container",
    "parse_inspect_output",
    "parse_ps_names",
    "resource_flags",
    "spawn",
    "translate",
    "validate_environment",
]

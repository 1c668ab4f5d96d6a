"""Resource translation — turn abstract resource requests into ``docker run`` flags."""

from __future__ import annotations

from collections.abc import Mapping

from dockside.config import ResourcePolicy
from dockside.types import ResourceRequest

DEFAULT_POLICY = ResourcePolicy()


def cpu_shares(cpu_cores: float, policy: ResourcePolicy = DEFAULT_POLICY) -> int:
    return max(int(policy.cpu_shares_per_cpu * cpu_cores), policy.min_cpu_shares)


def memory_limit(memory_bytes: int, policy: ResourcePolicy = DEFAULT_POLICY) -> int:
    return max(memory_bytes, policy.min_memory_bytes)


def resource_flags(
    request: ResourceRequest | None,
    policy: ResourcePolicy = DEFAULT_POLICY,
) -> list[str]:
    """``-c <shares>`` and ``-m <bytes>`` for whichever resources are requested."""
    if request is None:
        return []
    flags: list[str] = []
    if request.cpu_cores is not None:
        flags.append(f"-c {cpu_shares(request.cpu_cores, policy)}")
    if request.memory_bytes is not None:
        flags.append(f"-m {memory_limit(request.memory_bytes, policy)}")
    return flags


def _escape_quotes(s: str) -> str:
    return s.replace('"', '\\"')


def env_flags(env: Mapping[str, str] | None) -> list[str]:
    """``-e "KEY=VALUE"`` per variable, in mapping order.

    Only double quotes are escaped. Other shell metacharacters ($, `, \\)
    still reach the shell unescaped.
    """
    if not env:
        return []
    return [f'-e "{_escape_quotes(k)}={_escape_quotes(v)}"' for k, v in env.items()]


def translate(
    request: ResourceRequest | None,
    env: Mapping[str, str] | None = None,
    policy: ResourcePolicy = DEFAULT_POLICY,
) -> list[str]:
    """All resource and environment flags for ``docker run``, in command-line order."""
    return resource_flags(request, policy) + env_flags(env)

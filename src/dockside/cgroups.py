"""Control-group hierarchy lookup (existence checks only)."""

from __future__ import annotations

from pathlib import Path


def _v2_controllers(mount_point: str) -> set[str]:
    path = Path(mount_point) / "cgroup.controllers"
    try:
        text = path.read_text(encoding="utf-8").strip()
    except OSError:
        return set()
    return set(text.split())


def hierarchy(subsystem: str, mounts_file: str | Path = "/proc/mounts") -> str | None:
    """Return the mount point of a cgroup hierarchy with *subsystem* attached.

    v1 hierarchies list their subsystems in the mount options; a v2 unified
    hierarchy qualifies when its ``cgroup.controllers`` names the subsystem.
    Returns None when no such hierarchy is mounted. Raises OSError if the
    mount table cannot be read.
    """
    lines = Path(mounts_file).read_text(encoding="utf-8").splitlines()
    for line in lines:
        fields = line.split()
        if len(fields) < 4:
            continue
        mount_point, fs_type, options = fields[1], fields[2], fields[3]
        if fs_type == "cgroup" and subsystem in options.split(","):
            return mount_point
        if fs_type == "cgroup2" and subsystem in _v2_controllers(mount_point):
            return mount_point
    return None

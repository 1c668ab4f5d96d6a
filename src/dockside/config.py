"""Centralized configuration — Pydantic BaseSettings with TOML + dotenv sources.

Settings live in dockside.toml. Environment variables override it using
``__`` as the nested delimiter (e.g. ``DOCKER__PATH=/usr/local/bin/docker``).

Priority (highest wins): init args > env vars > .env > dockside.toml

Usage::

    from dockside.config import get_settings

    s = get_settings()
    print(s.docker.path)
    print(s.resources.min_cpu_shares)
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

# ---------------------------------------------------------------------------
# Sub-models (each maps to a [section] in dockside.toml)
# ---------------------------------------------------------------------------


class _StrictModel(BaseModel):
    """Base for all config sub-models — reject unknown keys so typos fail loudly."""

    model_config = {"extra": "forbid"}


class DockerConfig(_StrictModel):
    path: str = "docker"
    validate_on_create: bool = True
    mounts_file: str = "/proc/mounts"  # consulted for the cpu cgroup hierarchy


class ResourcePolicy(_StrictModel):
    """Floors and ratios used when turning resource requests into run flags.

    Frozen: the policy is fixed for the lifetime of the process.
    """

    model_config = {"extra": "forbid", "frozen": True}

    cpu_shares_per_cpu: int = 1024
    min_cpu_shares: int = 10
    min_memory_bytes: int = 32 * 1024 * 1024  # 32MB

    @field_validator("cpu_shares_per_cpu", "min_cpu_shares", "min_memory_bytes")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be non-negative")
        return v


# ---------------------------------------------------------------------------
# Root Settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        toml_file="dockside.toml",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    docker: DockerConfig = DockerConfig()
    resources: ResourcePolicy = ResourcePolicy()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority: init > env vars > .env > dockside.toml > file secrets."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_settings: Settings | None = None


def get_settings() -> Settings:
    """Lazy cached singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Clear the cached singleton (for tests)."""
    global _settings
    _settings = None

"""Configuration management for the user management service."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import yaml

from .database import resolve_database_path

DEFAULT_HEALTH_UPSTREAM_URL = (
    "http://authentication-service-jx-staging.gitops.ibenta.com/actuator/health"
)
DEFAULT_HEALTH_TIMEOUT = 10.0

_KNOWN_KEYS = {"database_path", "health_upstream_url", "health_timeout"}


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the HTTP service and its collaborators."""

    database_path: Path
    health_upstream_url: str = DEFAULT_HEALTH_UPSTREAM_URL
    health_timeout: float = DEFAULT_HEALTH_TIMEOUT

    @staticmethod
    def from_dict(data: Dict[str, object], base_path: Path | None = None) -> "Settings":
        """Create :class:`Settings` from raw dictionary data."""
        unknown = set(data.keys()) - _KNOWN_KEYS
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        raw_db_path = data.get("database_path")
        if raw_db_path:
            candidate = Path(str(raw_db_path)).expanduser()
            if not candidate.is_absolute() and base_path is not None:
                candidate = base_path / candidate
            database_path = resolve_database_path(str(candidate))
        else:
            database_path = resolve_database_path(None)

        raw_timeout = data.get("health_timeout")
        try:
            timeout = DEFAULT_HEALTH_TIMEOUT if raw_timeout is None else float(raw_timeout)
        except (TypeError, ValueError) as exc:
            raise ValueError("health_timeout must be a positive number of seconds") from exc
        if timeout <= 0:
            raise ValueError("health_timeout must be a positive number of seconds")

        return Settings(
            database_path=database_path,
            health_upstream_url=str(data.get("health_upstream_url") or DEFAULT_HEALTH_UPSTREAM_URL),
            health_timeout=timeout,
        )


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the configuration file."""
    if env_value:
        candidate = Path(env_value).expanduser().resolve(strict=False)
    else:
        candidate = (Path(__file__).resolve().parent.parent / "config" / "usermgmt.yaml").resolve(strict=False)
    return candidate


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from the YAML file, then apply environment overrides."""
    path = config_path or resolve_config_path(os.getenv("USERMGMT_CONFIG"))

    raw: Dict[str, object] = {}
    if path.is_file():
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        raw.update(loaded)

    env_db_path = os.getenv("USERMGMT_DB_PATH")
    if env_db_path:
        raw["database_path"] = env_db_path
    env_health_url = os.getenv("USERMGMT_HEALTH_URL")
    if env_health_url:
        raw["health_upstream_url"] = env_health_url
    env_health_timeout = os.getenv("USERMGMT_HEALTH_TIMEOUT")
    if env_health_timeout:
        raw["health_timeout"] = env_health_timeout

    return Settings.from_dict(raw, base_path=path.parent)


__all__ = [
    "DEFAULT_HEALTH_UPSTREAM_URL",
    "Settings",
    "load_settings",
    "resolve_config_path",
]

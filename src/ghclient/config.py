"""Configuration loading for ghclient."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class ClientConfig:
    """Settings for a GitHubClient.

    Attributes:
        base_url: API root, e.g. https://api.github.com or a GHE host's /api/v3.
        token: Token sent as a bearer credential. Anonymous when None.
        timeout: Per-request timeout in seconds.
        dry_run: Log write operations instead of sending them.
    """

    base_url: str = DEFAULT_BASE_URL
    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    dry_run: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        """Create config from a dictionary.

        Args:
            data: Configuration mapping, e.g. parsed from YAML.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a key is unknown or a value has the wrong type.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        base_url = data.get("base_url", DEFAULT_BASE_URL)
        if not isinstance(base_url, str) or not base_url:
            raise ConfigError("base_url must be a non-empty string")

        token = data.get("token")
        if token is not None and not isinstance(token, str):
            raise ConfigError("token must be a string")

        timeout = data.get("timeout", DEFAULT_TIMEOUT)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError(f"timeout must be a positive number, got {timeout!r}")

        dry_run = data.get("dry_run", False)
        if not isinstance(dry_run, bool):
            raise ConfigError(f"dry_run must be true or false, got {dry_run!r}")

        return cls(
            base_url=base_url,
            token=token or None,
            timeout=float(timeout),
            dry_run=dry_run,
        )

    def merge(self, **overrides: Any) -> ClientConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(config_path: Path | str) -> ClientConfig:
    """Load client configuration from a YAML file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return ClientConfig.from_dict(data)


def config_from_env(environ: Mapping[str, str] | None = None) -> ClientConfig:
    """Build configuration from environment variables.

    Reads GITHUB_API_URL, GITHUB_TOKEN, GHCLIENT_TIMEOUT and GHCLIENT_DRY_RUN.
    Unset variables keep their defaults.

    Raises:
        ConfigError: If GHCLIENT_TIMEOUT or GHCLIENT_DRY_RUN can't be parsed.
    """
    if environ is None:
        environ = os.environ

    data: dict[str, Any] = {}
    if environ.get("GITHUB_API_URL"):
        data["base_url"] = environ["GITHUB_API_URL"]
    if environ.get("GITHUB_TOKEN"):
        data["token"] = environ["GITHUB_TOKEN"]

    raw_timeout = environ.get("GHCLIENT_TIMEOUT")
    if raw_timeout:
        try:
            data["timeout"] = float(raw_timeout)
        except ValueError as e:
            raise ConfigError(f"GHCLIENT_TIMEOUT must be a number, got {raw_timeout!r}") from e

    raw_dry_run = environ.get("GHCLIENT_DRY_RUN")
    if raw_dry_run is not None:
        value = raw_dry_run.strip().lower()
        if value in _TRUE_VALUES:
            data["dry_run"] = True
        elif value in _FALSE_VALUES:
            data["dry_run"] = False
        else:
            raise ConfigError(f"GHCLIENT_DRY_RUN must be a boolean, got {raw_dry_run!r}")

    return ClientConfig.from_dict(data)

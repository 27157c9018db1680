"""Configuration constants and .env parsing."""

from __future__ import annotations

import os
from pathlib import Path

ENV_KEYS = ["TREECOPY_RETRY_COUNT", "TREECOPY_RETRY_DELAY", "TREECOPY_CONTINUE_ON_ERROR"]


def read_env_file(keys: list[str]) -> dict[str, str]:
    """Parse .env file and return values for requested keys.

    Does NOT load into os.environ; callers decide what to do with values.
    """
    env_file = Path.cwd() / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


class ConfigError(ValueError):
    """A TREECOPY_* setting holds a value that cannot be used."""


def _lookup(key: str, env_config: dict[str, str], default: str) -> str:
    return os.environ.get(key) or env_config.get(key, default)


def _non_negative(key: str, env_config: dict[str, str], kind: type[int] | type[float]) -> int | float:
    raw = _lookup(key, env_config, "0")
    try:
        value = kind(raw)
    except ValueError as err:
        raise ConfigError(f"{key} must be a non-negative {kind.__name__}, got {raw!r}") from err
    if value < 0:
        raise ConfigError(f"{key} must be a non-negative {kind.__name__}, got {raw!r}")
    return value


class CopyDefaults:
    """Defaults for the trailing copy parameters (retries, continue-on-error)."""

    def __init__(self, retry_count: int = 0, retry_delay: float = 0.0, continue_on_error: bool = False) -> None:
        if retry_count < 0:
            raise ValueError(f"retry_count must be >= 0, got {retry_count}")
        self.retry_count = retry_count
        self.retry_delay = retry_delay
        self.continue_on_error = continue_on_error

    @classmethod
    def from_env(cls) -> CopyDefaults:
        """Read defaults from os.environ, falling back to .env in the working directory.

        Raises ConfigError when a numeric setting is malformed or negative.
        """
        env_config = read_env_file(ENV_KEYS)
        return cls(
            retry_count=int(_non_negative("TREECOPY_RETRY_COUNT", env_config, int)),
            retry_delay=float(_non_negative("TREECOPY_RETRY_DELAY", env_config, float)),
            continue_on_error=_lookup("TREECOPY_CONTINUE_ON_ERROR", env_config, "") == "true",
        )

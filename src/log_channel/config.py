"""Environment-driven configuration for the CLI and host applications.

Purpose
-------
Load an optional ``.env`` file and resolve the channel defaults used by the
command line demo, keeping explicit arguments ahead of environment values.

Contents
--------
* :func:`enable_dotenv` / :func:`should_use_dotenv` – ``.env`` handling via
  :mod:`python-dotenv`.
* :class:`ChannelDefaults` – name/threshold read from ``LOG_CHANNEL_*``.

System Role
-----------
Edge module; nothing in the dispatch core reads the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from .domain.levels import LogLevel

DOTENV_ENV_VAR = "LOG_CHANNEL_USE_DOTENV"
NAME_ENV_VAR = "LOG_CHANNEL_NAME"
LEVEL_ENV_VAR = "LOG_CHANNEL_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}

_loaded_path: Path | None = None


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether ``.env`` loading is on; an explicit flag beats the environment.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding variables already set.

    Parameters
    ----------
    search_from:
        Directory to start the upward search from; defaults to the current
        working directory.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, or ``None`` when none was found.
    """

    global _loaded_path
    if _loaded_path is not None:
        return _loaded_path
    candidate = _search_upwards(search_from if search_from is not None else Path.cwd())
    if candidate is None:
        return None
    load_dotenv(candidate, override=False)
    _loaded_path = candidate.resolve()
    return _loaded_path


def _search_upwards(start: Path) -> Path | None:
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    """Forget which ``.env`` file was loaded so tests start clean."""

    global _loaded_path
    _loaded_path = None


@dataclass(frozen=True)
class ChannelDefaults:
    """Name and threshold used when the caller does not supply them."""

    name: str = "app"
    level: LogLevel = LogLevel.DEBUG

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ChannelDefaults":
        """Read ``LOG_CHANNEL_NAME`` and ``LOG_CHANNEL_LEVEL``.

        Raises
        ------
        ValueError
            When ``LOG_CHANNEL_LEVEL`` names no known level.
        """

        env = os.environ if environ is None else environ
        name = env.get(NAME_ENV_VAR, "").strip() or cls.name
        raw_level = env.get(LEVEL_ENV_VAR, "").strip()
        level = LogLevel.from_name(raw_level) if raw_level else cls.level
        return cls(name=name, level=level)


__all__ = [
    "DOTENV_ENV_VAR",
    "LEVEL_ENV_VAR",
    "NAME_ENV_VAR",
    "ChannelDefaults",
    "enable_dotenv",
    "should_use_dotenv",
]

"""Runtime settings for reforged.

Settings come from the process environment. The nearest ``.env`` file, searched
from the working directory upwards, is loaded first without overriding
variables that are already set.

    REFORGED_LOG_CAPTURES   1/true/yes/on to log every captured exception at
                            WARNING with its traceback (default: DEBUG only)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"", "0", "false", "no", "off"})


@dataclass(frozen=True)
class Settings:
    log_captures: bool = False

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from ``.env`` and the environment.

        Raises ValueError when a variable is set to something unrecognisable,
        and OSError when the ``.env`` file cannot be read.
        """
        load_dotenv(find_dotenv(usecwd=True))
        raw = os.getenv("REFORGED_LOG_CAPTURES", "")

        match raw.strip().lower():
            case flag if flag in _TRUTHY:
                return cls(log_captures=True)
            case flag if flag in _FALSY:
                return cls(log_captures=False)
            case _:
                raise ValueError(
                    f"REFORGED_LOG_CAPTURES must be a boolean flag, got {raw!r}"
                )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        try:
            _settings = Settings.from_env()
        except (ValueError, OSError) as e:
            logger.warning("Ignoring invalid settings, using defaults: %s", e)
            _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None

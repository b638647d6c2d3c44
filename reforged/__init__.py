"""reforged: an optional-or-exception container with failure-capturing combinators."""

from .config import Settings, get_settings, reset_settings
from .optional import (
    Empty,
    Failure,
    Optional,
    Value,
    none,
    of,
    of_failure,
    of_nullable,
    try_create,
)

__all__ = [
    # States
    "Empty", "Failure", "Optional", "Value",
    # Construction
    "none", "of", "of_failure", "of_nullable", "try_create",
    # Config
    "Settings", "get_settings", "reset_settings",
]

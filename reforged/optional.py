"""Optional-or-exception container.

An Optional is in exactly one of three states, each its own frozen
dataclass:

- Value: holds a payload of type T
- Empty: holds nothing
- Failure: holds a captured exception

Combinators (``map``, ``bind``) derive a new Optional without unwrapping.
An exception raised by the user function inside a combinator is captured
into a Failure instead of propagating, and a Failure passes through any
later combinator untouched. Only ``or_else_throw`` raises it again.

The state is the variant class, never the payload. ``of(None)`` is a
``Value(None)``, not Empty. Use ``of_nullable`` when ``None`` should
collapse into the Empty state.

Example:
    of(5).map(str).or_else("")                  # "5"
    of_failure(ValueError("boom")).or_else(10)  # 10
    try_create(lambda: of(int("x")))            # Failure(ValueError(...))
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, Generic, TypeVar, assert_never

from .config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


# ---------------------------------------------------------------------------
# Capture
# ---------------------------------------------------------------------------


def _log_capture(where: str, error: Exception) -> None:
    if get_settings().log_captures:
        logger.warning(
            "%s captured %s: %s", where, type(error).__name__, error, exc_info=error
        )
    else:
        logger.debug("%s captured %s: %s", where, type(error).__name__, error)


def _capture(where: str, thunk: Callable[[], Optional[U]]) -> Optional[U]:
    """Run ``thunk`` and turn anything it raises into a Failure.

    Only ``Exception`` is captured; KeyboardInterrupt, SystemExit and the
    like still unwind.
    """
    try:
        result = thunk()
    except Exception as e:
        _log_capture(where, e)
        return Failure(e)

    match result:
        case Value() | Empty() | Failure():
            return result
        case _:
            error = TypeError(
                f"{where} expected an Optional, got {type(result).__name__}"
            )
            _log_capture(where, error)
            return Failure(error)


# ---------------------------------------------------------------------------
# Shared operations
# ---------------------------------------------------------------------------


class _OptionalOps(Generic[T]):
    """Operations common to all three states. Dispatch is on ``self``."""

    def map(self, mapper: Callable[[T], U]) -> Optional[U]:
        """Apply ``mapper`` to the value and wrap the result.

        Failure short-circuits and Empty stays Empty; ``mapper`` is not
        called for either.
        """
        match self:
            case Value(value):
                return _capture("map", lambda: Value(mapper(value)))
            case Empty():
                return Empty()
            case Failure(error, origin):
                logger.debug("map skipped, carrying %s", type(error).__name__)
                return Failure(error, origin)
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def bind(self, binder: Callable[[T], Optional[U]]) -> Optional[U]:
        """Apply ``binder`` to the value and return its Optional as is."""
        match self:
            case Value(value):
                return _capture("bind", lambda: binder(value))
            case Empty():
                return Empty()
            case Failure(error, origin):
                logger.debug("bind skipped, carrying %s", type(error).__name__)
                return Failure(error, origin)
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def or_else(self, default: T) -> T | None:
        """Return the contained value, or ``default`` only on Failure.

        Empty has no failure, so it yields its contained value, ``None``.
        """
        match self:
            case Value(value):
                return value
            case Empty():
                return None
            case Failure():
                return default
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def or_else_throw(self) -> T | None:
        """Return the contained value, or raise the captured exception.

        The exception is raised with the traceback it had when captured, so
        repeated calls do not pile frames onto it.
        """
        match self:
            case Value(value):
                return value
            case Empty():
                return None
            case Failure(error, origin):
                raise error.with_traceback(origin)
            case _:
                assert_never(self)  # type: ignore[arg-type]

    def match(
        self,
        on_value: Callable[[T], R],
        on_none: Callable[[], R],
        on_failure: Callable[[Exception], R],
    ) -> R:
        """Call the handler for the current state and return its result.

        Handler exceptions are not captured.
        """
        match self:
            case Value(value):
                return on_value(value)
            case Empty():
                return on_none()
            case Failure(error):
                return on_failure(error)
            case _:
                assert_never(self)  # type: ignore[arg-type]

    @property
    def is_value(self) -> bool:
        return isinstance(self, Value)

    @property
    def is_none(self) -> bool:
        return isinstance(self, Empty)

    @property
    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    def __str__(self) -> str:
        return self.match(
            lambda value: f"Optional({value})",
            lambda: "Optional.None",
            lambda error: f"Optional.Exception({error!r})",
        )


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Value(_OptionalOps[T]):
    value: T


@dataclass(frozen=True)
class Empty(_OptionalOps[Any]):
    pass


@dataclass(frozen=True)
class Failure(_OptionalOps[Any]):
    error: Exception
    traceback: TracebackType | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.error, Exception):
            raise TypeError(
                f"Failure requires an Exception, got {type(self.error).__name__}"
            )
        if self.traceback is None:
            object.__setattr__(self, "traceback", self.error.__traceback__)


type Optional[T] = Value[T] | Empty | Failure


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def of(value: T) -> Optional[T]:
    """Wrap ``value``. ``None`` is a legal payload and stays a Value."""
    return Value(value)


def of_failure(error: Exception) -> Optional[Any]:
    """Wrap a captured exception. Raises TypeError for non-exceptions."""
    return Failure(error)


def of_nullable(value: T | None) -> Optional[T]:
    """Like ``of``, but ``None`` gives the Empty state."""
    if value is None:
        return Empty()
    return Value(value)


def none() -> Optional[Any]:
    return Empty()


def try_create(producer: Callable[[], Optional[T]]) -> Optional[T]:
    """Call ``producer`` and return its Optional, or a Failure if it raised.

    A producer that returns something other than an Optional yields a
    Failure holding a TypeError.
    """
    return _capture("try_create", producer)

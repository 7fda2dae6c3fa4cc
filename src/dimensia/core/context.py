"""
dimensia.core.context
=====================

Arithmetic configuration.

An :class:`ArithmeticContext` bundles the numeric strategy and the simplify
mode. Pass one explicitly to any Quantity operation (``q.mul(r, context=ctx)``)
to keep a computation independent of global state. When no context is given,
the process-wide default is used; it is meant to be configured once, before
any arithmetic runs.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from dimensia.core.errors import ArgumentError
from dimensia.core.numeric import REAL_STRATEGY, NumericStrategy

logger = logging.getLogger(__name__)


class SimplifyMode(str, Enum):
    """How eagerly dimension maps are simplified.

    Currently stored but not acted upon; zero-cancellation is the only
    simplification performed in every mode.
    """

    AUTO = "auto"
    MANUAL = "manual"
    STEP = "step"


def _coerce_mode(mode: "SimplifyMode | str") -> SimplifyMode:
    try:
        return SimplifyMode(mode)
    except ValueError:
        choices = ", ".join(m.value for m in SimplifyMode)
        raise ArgumentError(f"Unknown simplify mode {mode!r}; expected one of: {choices}") from None


def _check_strategy(strategy: object) -> NumericStrategy[Any]:
    if not isinstance(strategy, NumericStrategy):
        raise TypeError(
            f"{type(strategy).__name__} does not implement NumericStrategy "
            "(add, sub, mul, div, pow, one, reciprocal)"
        )
    return strategy


@dataclass(frozen=True, slots=True)
class ArithmeticContext:
    """Immutable arithmetic configuration."""

    strategy: NumericStrategy[Any] = REAL_STRATEGY
    simplify_mode: SimplifyMode = SimplifyMode.AUTO

    def __post_init__(self) -> None:
        _check_strategy(self.strategy)
        object.__setattr__(self, "simplify_mode", _coerce_mode(self.simplify_mode))

    def replace(self, **changes: Any) -> ArithmeticContext:
        return dataclasses.replace(self, **changes)


# ---------------------------------------------------------------------------
# Process-wide default
# ---------------------------------------------------------------------------
_lock = threading.RLock()
_default = ArithmeticContext()


def get_default_context() -> ArithmeticContext:
    return _default


def set_default_context(context: ArithmeticContext) -> None:
    global _default
    if not isinstance(context, ArithmeticContext):
        raise TypeError(f"Expected ArithmeticContext, got {type(context).__name__}")
    with _lock:
        _default = context
    logger.debug("Default arithmetic context set to %r", context)


def _update_default(**changes: Any) -> None:
    global _default
    with _lock:
        _default = _default.replace(**changes)
    logger.debug("Default arithmetic context updated: %r", changes)


def set_numeric_strategy(strategy: NumericStrategy[Any]) -> None:
    """Replace the strategy used by operations that receive no explicit context."""
    _update_default(strategy=_check_strategy(strategy))


def get_numeric_strategy() -> NumericStrategy[Any]:
    return _default.strategy


def set_simplify_mode(mode: "SimplifyMode | str") -> None:
    _update_default(simplify_mode=_coerce_mode(mode))


def get_simplify_mode() -> SimplifyMode:
    return _default.simplify_mode


@contextmanager
def local_context(**changes: Any) -> Iterator[ArithmeticContext]:
    """
    Temporarily replace fields of the default context.

    Example::

        with local_context(strategy=FRACTION_STRATEGY):
            q = Quantity.from_physical(1, "m") / Quantity.from_physical(3, "s")
            str(q)  # "1/3 m*s^-1"
    """
    previous = get_default_context()
    ctx = previous.replace(**changes)
    set_default_context(ctx)
    try:
        yield ctx
    finally:
        set_default_context(previous)


__all__ = [
    "SimplifyMode",
    "ArithmeticContext",
    "get_default_context",
    "set_default_context",
    "set_numeric_strategy",
    "get_numeric_strategy",
    "set_simplify_mode",
    "get_simplify_mode",
    "local_context",
]

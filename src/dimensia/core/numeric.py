"""
dimensia.core.numeric
=====================

Numeric strategies: the arithmetic primitives applied to a Quantity's value.

A strategy is any object satisfying :class:`NumericStrategy`. Sign handling
for negative powers and the zero-power identity belong to the caller
(:class:`dimensia.core.quantity.Quantity`); a strategy's ``pow`` only sees
non-negative integer magnitudes.
"""

from __future__ import annotations

import numbers
from fractions import Fraction
from numbers import Integral
from typing import Any, Protocol, TypeVar, runtime_checkable

from dimensia.core.errors import NonIntegerPowerError

T = TypeVar("T")

Number = int | float


@runtime_checkable
class NumericStrategy(Protocol[T]):
    """Closed set of operations a payload type must support."""

    def add(self, a: T, b: T) -> T: ...
    def sub(self, a: T, b: T) -> T: ...
    def mul(self, a: T, b: T) -> T: ...
    def div(self, a: T, b: T) -> T: ...

    # ``n`` is a non-negative integer magnitude
    def pow(self, a: T, n: int) -> T: ...

    # Multiplicative identity in the payload type of ``a``
    def one(self, a: T) -> T: ...

    def reciprocal(self, a: T) -> T: ...


def _check_magnitude(n: Any) -> int:
    if isinstance(n, bool) or not isinstance(n, Integral) or n < 0:
        raise NonIntegerPowerError(f"Power must be a non-negative integer, got {n!r}")
    return int(n)


class RealStrategy:
    """Plain ``int``/``float`` arithmetic. The default strategy."""

    __slots__ = ()

    def add(self, a: Number, b: Number) -> Number:
        return a + b

    def sub(self, a: Number, b: Number) -> Number:
        return a - b

    def mul(self, a: Number, b: Number) -> Number:
        return a * b

    def div(self, a: Number, b: Number) -> Number:
        # ZeroDivisionError propagates; it is an ArithmeticError.
        return a / b

    def pow(self, a: Number, n: int) -> Number:
        return a ** _check_magnitude(n)

    def one(self, a: Number) -> Number:
        # Keep the payload type (Fraction, Decimal ...); bool counts as int.
        if isinstance(a, bool):
            return 1
        if isinstance(a, numbers.Number):
            return type(a)(1)
        return 1.0

    def reciprocal(self, a: Number) -> Number:
        return 1 / a

    def __repr__(self) -> str:
        return "RealStrategy()"


class FractionStrategy:
    """Exact rational arithmetic backed by :class:`fractions.Fraction`.

    Operands are coerced with ``Fraction(x)``, so ints, floats, decimals and
    strings such as ``"1/3"`` are all accepted.
    """

    __slots__ = ()

    def add(self, a: Any, b: Any) -> Fraction:
        return Fraction(a) + Fraction(b)

    def sub(self, a: Any, b: Any) -> Fraction:
        return Fraction(a) - Fraction(b)

    def mul(self, a: Any, b: Any) -> Fraction:
        return Fraction(a) * Fraction(b)

    def div(self, a: Any, b: Any) -> Fraction:
        return Fraction(a) / Fraction(b)

    def pow(self, a: Any, n: int) -> Fraction:
        return Fraction(a) ** _check_magnitude(n)

    def one(self, a: Any) -> Fraction:
        return Fraction(1)

    def reciprocal(self, a: Any) -> Fraction:
        return 1 / Fraction(a)

    def __repr__(self) -> str:
        return "FractionStrategy()"


REAL_STRATEGY: NumericStrategy[Number] = RealStrategy()
FRACTION_STRATEGY: NumericStrategy[Fraction] = FractionStrategy()


__all__ = [
    "NumericStrategy",
    "RealStrategy",
    "FractionStrategy",
    "REAL_STRATEGY",
    "FRACTION_STRATEGY",
]

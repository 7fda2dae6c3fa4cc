"""
dimensia.core.errors
====================

Exception taxonomy for dimensia.

Every error derives from :class:`DimensiaError` *and* from the closest
built-in exception, so callers can catch either ``ParseError`` or a plain
``ValueError`` depending on how specific they want to be.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from dimensia.core.dimensions import DimensionTriple


class DimensiaError(Exception):
    """Base class for all dimensia errors."""


class ParseError(DimensiaError, ValueError):
    """Malformed unit-expression text."""

    def __init__(self, message: str, text: str, index: int) -> None:
        super().__init__(f"{message} at index {index} in {text!r}")
        self.text = text
        self.index = index


class IncompatibleUnitsError(DimensiaError, TypeError):
    """Addition or subtraction across differing dimension triples."""

    def __init__(self, left: "DimensionTriple", right: "DimensionTriple", op: str = "add") -> None:
        super().__init__(
            f"Incompatible units for {op}: '{left.format() or '1'}' and '{right.format() or '1'}'"
        )
        self.left = left
        self.right = right


class ArgumentError(DimensiaError, ValueError):
    """An argument has the right type but an unusable value (e.g. a non-integer exponent)."""


class NonIntegerPowerError(ArgumentError, ArithmeticError):
    """A numeric strategy was asked for a power it cannot compute exactly."""


class NonFiniteExponentError(DimensiaError, ArithmeticError):
    """Scaling a dimension map produced a non-finite exponent."""


class ConversionNotImplementedError(DimensiaError, NotImplementedError):
    """Conversion between two different (possibly compatible) units was requested."""


class RegistryError(DimensiaError, ValueError):
    """Invalid or conflicting registry definition."""


__all__ = [
    "DimensiaError",
    "ParseError",
    "IncompatibleUnitsError",
    "ArgumentError",
    "NonIntegerPowerError",
    "NonFiniteExponentError",
    "ConversionNotImplementedError",
    "RegistryError",
]

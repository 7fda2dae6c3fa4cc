"""
dimensia.core.quantity
======================

Defines :class:`Quantity`, a value carrying three independent dimension maps.

- *physical* exponents over scientific units (``m``, ``s``, ``kg`` ...),
- *algebraic* exponents over adjoined elements (e.g. ``i``),
- *symbolic* exponents over exact named constants (``pi``, ``e`` ...).

Quantities are immutable. Addition and subtraction require all three maps to
match exactly; multiplication, division and integer powers always succeed on
unit grounds and combine the maps through the dimension-map algebra. The
value is combined by the active numeric strategy, so any payload type with a
:class:`~dimensia.core.numeric.NumericStrategy` can be used.
"""

from __future__ import annotations

from numbers import Number
from typing import Any, Generic, Mapping, Optional, TypeVar, Union

from dimensia.core.context import ArithmeticContext, get_default_context
from dimensia.core.dimensions import (
    DIMENSIONLESS,
    DimensionTriple,
    as_integer_exponent,
)
from dimensia.core.errors import ConversionNotImplementedError, IncompatibleUnitsError
from dimensia.core.utils import format_value
from dimensia.units.parser import parse_unit_string

T = TypeVar("T")

UnitSpec = Union[str, Mapping[str, int], None]


def _spec_to_map(spec: UnitSpec) -> Mapping[str, int]:
    if spec is None or isinstance(spec, str):
        return parse_unit_string(spec)
    return spec


class Quantity(Generic[T]):
    """
    A value with physical, algebraic and symbolic dimensions.

    Parameters
    ----------
    value : T
        The payload, combined by the active numeric strategy.
    physical, algebraic, symbolic : Mapping[str, int], optional
        Dimension maps; each is copied and canonicalised (zero exponents
        dropped), so later changes to the caller's dicts have no effect.

    Most code uses the factories :meth:`from_physical`, :meth:`from_algebraic`
    and :meth:`from_symbolic`, which also accept unit-expression strings.
    """

    __slots__ = ("_value", "_dims")

    def __init__(
        self,
        value: T,
        physical: Optional[Mapping[str, int]] = None,
        algebraic: Optional[Mapping[str, int]] = None,
        symbolic: Optional[Mapping[str, int]] = None,
    ) -> None:
        self._value = value
        self._dims = DimensionTriple(physical or {}, algebraic or {}, symbolic or {})

    @classmethod
    def _from_triple(cls, value: T, dims: DimensionTriple) -> Quantity[T]:
        q = cls.__new__(cls)
        q._value = value
        q._dims = dims
        return q

    # --- Factories ---
    @classmethod
    def from_physical(cls, value: T, spec: UnitSpec = None) -> Quantity[T]:
        """``Quantity.from_physical(9.81, "m/s^2")``"""
        return cls(value, physical=_spec_to_map(spec))

    @classmethod
    def from_algebraic(cls, value: T, spec: UnitSpec = None) -> Quantity[T]:
        """``Quantity.from_algebraic(3, "i")`` is 3i."""
        return cls(value, algebraic=_spec_to_map(spec))

    @classmethod
    def from_symbolic(cls, value: T, spec: UnitSpec = None) -> Quantity[T]:
        """``Quantity.from_symbolic(2, "pi")`` is 2π, kept exact."""
        return cls(value, symbolic=_spec_to_map(spec))

    @classmethod
    def dimensionless(cls, value: T) -> Quantity[T]:
        return cls._from_triple(value, DIMENSIONLESS)

    # --- Read-only access ---
    @property
    def value(self) -> T:
        return self._value

    @property
    def dimensions(self) -> DimensionTriple:
        return self._dims

    @property
    def physical(self) -> Mapping[str, int]:
        return self._dims.physical

    @property
    def algebraic(self) -> Mapping[str, int]:
        return self._dims.algebraic

    @property
    def symbolic(self) -> Mapping[str, int]:
        return self._dims.symbolic

    def is_unitless(self) -> bool:
        return self._dims.is_dimensionless

    # --- Arithmetic ---
    def _check_add_compatible(self, other: Quantity[Any], op: str) -> None:
        if self._dims != other._dims:
            raise IncompatibleUnitsError(self._dims, other._dims, op)

    def add(self, other: Quantity[T], *, context: Optional[ArithmeticContext] = None) -> Quantity[T]:
        self._check_add_compatible(other, "addition")
        strategy = (context or get_default_context()).strategy
        return self._from_triple(strategy.add(self._value, other._value), self._dims)

    def sub(self, other: Quantity[T], *, context: Optional[ArithmeticContext] = None) -> Quantity[T]:
        self._check_add_compatible(other, "subtraction")
        strategy = (context or get_default_context()).strategy
        return self._from_triple(strategy.sub(self._value, other._value), self._dims)

    def mul(self, other: Quantity[T], *, context: Optional[ArithmeticContext] = None) -> Quantity[T]:
        strategy = (context or get_default_context()).strategy
        value = strategy.mul(self._value, other._value)
        return self._from_triple(value, self._dims.multiply(other._dims))

    def div(self, other: Quantity[T], *, context: Optional[ArithmeticContext] = None) -> Quantity[T]:
        strategy = (context or get_default_context()).strategy
        value = strategy.div(self._value, other._value)
        return self._from_triple(value, self._dims.divide(other._dims))

    def pow(self, n: int, *, context: Optional[ArithmeticContext] = None) -> Quantity[T]:
        """
        Raise to an integer power.

        ``n == 0`` gives the strategy's multiplicative identity and an empty
        triple, for every value including zero. Negative ``n`` takes the
        strategy's reciprocal of ``value ** |n|``.

        Raises
        ------
        ArgumentError
            If ``n`` is not integer-valued.
        """
        n = as_integer_exponent(n)
        strategy = (context or get_default_context()).strategy
        if n == 0:
            return self._from_triple(strategy.one(self._value), DIMENSIONLESS)

        value = strategy.pow(self._value, abs(n))
        if n < 0:
            value = strategy.reciprocal(value)
        return self._from_triple(value, self._dims.power(n))

    def convert_to(self, target: UnitSpec) -> Quantity[T]:
        """
        Express this quantity in ``target`` physical units.

        Only the identity conversion is supported: the receiver is returned
        unchanged when ``target`` equals its physical map.

        Raises
        ------
        ConversionNotImplementedError
            For any other target, compatible or not.
        """
        from dimensia.units.registry import can_convert_physical

        target_map = _spec_to_map(target)
        if not can_convert_physical(self.physical, target_map):
            raise ConversionNotImplementedError(
                f"Conversion from '{self.physical_format() or '1'}' to "
                f"'{DimensionTriple(target_map).format() or '1'}' is not implemented; "
                "units must match"
            )
        return self

    # --- Formatting ---
    def physical_format(self) -> str:
        return DimensionTriple(self.physical).format()

    def format(self, *, pretty: bool = False) -> str:
        """``"<value> <units>"``, or just the value when dimensionless."""
        units = self._dims.format(pretty=pretty)
        value = format_value(self._value)
        return f"{value} {units}" if units else value

    def __repr__(self) -> str:
        return self.format()

    def __str__(self) -> str:
        return self.format()

    def __format__(self, spec: str) -> str:
        """
        Supported specifiers
        --------------------
        "" (empty), or "plain"
            Parseable form, e.g. ``'4 m^2*s^-2'``.
        "pretty"
            Unicode superscripts, e.g. ``'4 m²·s⁻²'``.
        """
        spec = (spec or "").strip().lower()
        if spec in ("", "plain"):
            return self.format()
        if spec == "pretty":
            return self.format(pretty=True)
        raise ValueError("Unknown format spec; use '', 'plain', or 'pretty'")

    # --- Comparison ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._dims == other._dims and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._value, self._dims))

    # --- Operator protocol ---
    @staticmethod
    def _coerce(other: object) -> Optional[Quantity[Any]]:
        if isinstance(other, Quantity):
            return other
        if isinstance(other, Number):
            return Quantity.dimensionless(other)
        return None

    def __add__(self, other: object) -> Quantity[T]:
        o = self._coerce(other)
        return NotImplemented if o is None else self.add(o)

    def __radd__(self, other: object) -> Quantity[T]:
        o = self._coerce(other)
        return NotImplemented if o is None else o.add(self)

    def __sub__(self, other: object) -> Quantity[T]:
        o = self._coerce(other)
        return NotImplemented if o is None else self.sub(o)

    def __rsub__(self, other: object) -> Quantity[T]:
        o = self._coerce(other)
        return NotImplemented if o is None else o.sub(self)

    def __mul__(self, other: object) -> Quantity[T]:
        o = self._coerce(other)
        return NotImplemented if o is None else self.mul(o)

    def __rmul__(self, other: object) -> Quantity[T]:
        o = self._coerce(other)
        return NotImplemented if o is None else o.mul(self)

    def __truediv__(self, other: object) -> Quantity[T]:
        o = self._coerce(other)
        return NotImplemented if o is None else self.div(o)

    def __rtruediv__(self, other: object) -> Quantity[T]:
        o = self._coerce(other)
        return NotImplemented if o is None else o.div(self)

    def __pow__(self, n: int, modulo: Any | None = None) -> Quantity[T]:
        # Python may call __pow__ with a third arg (modulo); reject it explicitly
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Quantity.")
        return self.pow(n)


__all__ = ["Quantity", "UnitSpec"]

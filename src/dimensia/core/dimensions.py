# dimensia.core.dimensions

from __future__ import annotations

from dataclasses import dataclass, field
from math import isfinite
from numbers import Integral, Rational
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple, TypeAlias

from dimensia.core.errors import ArgumentError, NonFiniteExponentError

# --- Public typing -----------------------------------------------------------
# A dimension map sends a unit symbol to a nonzero integer exponent.
DimensionMap: TypeAlias = Dict[str, int]
DimensionLike: TypeAlias = Optional[Mapping[str, "int | float"]]


def as_integer_exponent(n: object) -> int:
    """Return ``n`` as a Python ``int`` or raise ``ArgumentError``.

    Accepts integers, integer-valued floats (``2.0``) and rationals with a
    denominator of one. ``bool`` is rejected even though it is ``Integral``.
    """
    if isinstance(n, bool):
        raise ArgumentError("Exponent must be an integer, got bool")
    if isinstance(n, Integral):
        return int(n)
    if isinstance(n, float) and isfinite(n) and n.is_integer():
        return int(n)
    if isinstance(n, Rational) and n.denominator == 1:
        return int(n)
    raise ArgumentError(f"Exponent must be an integer, got {n!r}")


# --- Map algebra -------------------------------------------------------------

def normalize(m: DimensionLike) -> DimensionMap:
    """Return a canonical copy of ``m``: integer exponents, no zero entries."""
    if not m:
        return {}
    out: DimensionMap = {}
    for sym, exp in m.items():
        if not isinstance(sym, str):
            raise TypeError(f"Unit symbols must be str, got {type(sym).__name__}")
        e = as_integer_exponent(exp)
        if e != 0:
            out[sym] = e
    return out


def dim_add(a: Mapping[str, int], b: Mapping[str, int]) -> DimensionMap:
    """Multiply two unit expressions: exponents add, zeros cancel."""
    out: DimensionMap = dict(a)
    for sym, exp in b.items():
        new_exp = out.get(sym, 0) + exp
        if new_exp == 0:
            out.pop(sym, None)
        else:
            out[sym] = new_exp
    return normalize(out)


def dim_scale(a: Mapping[str, int], n: "int | float") -> DimensionMap:
    """Multiply every exponent of ``a`` by ``n``."""
    out: DimensionMap = {}
    for sym, exp in a.items():
        new_exp = exp * n
        if isinstance(new_exp, float) and not isfinite(new_exp):
            raise NonFiniteExponentError(
                f"Non-finite exponent for '{sym}': {exp} * {n!r}"
            )
        new_exp = as_integer_exponent(new_exp)
        if new_exp != 0:
            out[sym] = new_exp
    return out


def dim_equals(a: Mapping[str, int], b: Mapping[str, int]) -> bool:
    """Same symbols with the same exponents; insertion order is irrelevant."""
    if len(a) != len(b):
        return False
    return all(sym in b and b[sym] == exp for sym, exp in a.items())


# --- Triple of independent namespaces ---------------------------------------

@dataclass(frozen=True, slots=True, eq=False)
class DimensionTriple:
    """
    Three independent dimension maps.

    Attributes
    ----------
    physical : Mapping[str, int]
        Exponents over physical base units (``m``, ``s``, ``kg`` ...).
    algebraic : Mapping[str, int]
        Exponents over adjoined algebraic elements (e.g. the imaginary unit).
    symbolic : Mapping[str, int]
        Exponents over named symbolic constants kept exact (``pi``, ``e`` ...).

    The maps are stored as read-only views over private canonical copies, so
    no caller can mutate a triple after construction.
    """

    physical: Mapping[str, int] = field(default_factory=dict)
    algebraic: Mapping[str, int] = field(default_factory=dict)
    symbolic: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("physical", "algebraic", "symbolic"):
            object.__setattr__(self, name, MappingProxyType(normalize(getattr(self, name))))

    def __iter__(self) -> Iterator[Mapping[str, int]]:
        return iter((self.physical, self.algebraic, self.symbolic))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DimensionTriple):
            return NotImplemented
        return all(dim_equals(a, b) for a, b in zip(self, other, strict=True))

    def __hash__(self) -> int:
        return hash(tuple(frozenset(m.items()) for m in self))

    def __repr__(self) -> str:
        return (
            f"DimensionTriple(physical={dict(self.physical)!r}, "
            f"algebraic={dict(self.algebraic)!r}, symbolic={dict(self.symbolic)!r})"
        )

    # --- Algebra ---
    def multiply(self, other: DimensionTriple) -> DimensionTriple:
        return DimensionTriple(*(dim_add(a, b) for a, b in zip(self, other, strict=True)))

    def divide(self, other: DimensionTriple) -> DimensionTriple:
        return DimensionTriple(
            *(dim_add(a, dim_scale(b, -1)) for a, b in zip(self, other, strict=True))
        )

    def power(self, n: int) -> DimensionTriple:
        if n == 0:
            return DIMENSIONLESS
        return DimensionTriple(*(dim_scale(m, n) for m in self))

    # --- Helpers ---
    @property
    def is_dimensionless(self) -> bool:
        return not (self.physical or self.algebraic or self.symbolic)

    def as_tuple(self) -> Tuple[DimensionMap, DimensionMap, DimensionMap]:
        """Plain, mutable copies of the three maps."""
        return dict(self.physical), dict(self.algebraic), dict(self.symbolic)

    def format(self, *, pretty: bool = False) -> str:
        from dimensia.core.utils import format_dimension_maps

        return format_dimension_maps(self, pretty=pretty)


DIMENSIONLESS = DimensionTriple()


__all__ = [
    "DimensionMap",
    "DimensionTriple",
    "DIMENSIONLESS",
    "as_integer_exponent",
    "normalize",
    "dim_add",
    "dim_scale",
    "dim_equals",
]

import math
from fractions import Fraction

import pytest

from dimensia.core.context import ArithmeticContext, set_numeric_strategy
from dimensia.core.errors import IncompatibleUnitsError
from dimensia.core.numeric import FRACTION_STRATEGY
from dimensia.core.quantity import Quantity

P = Quantity.from_physical


# -------------------------------
# add / sub
# -------------------------------

def test_add_same_units():
    c = P(2, "m").add(P(3, "m"))
    assert c.value == 5
    assert c.format() == "5 m"

def test_sub_same_units():
    c = P(2, "m/s").sub(P(3, "m/s"))
    assert c.value == -1
    assert dict(c.physical) == {"m": 1, "s": -1}

def test_add_incompatible_raises():
    with pytest.raises(IncompatibleUnitsError):
        P(2, "m").add(P(3, "s"))

def test_incompatible_units_error_is_a_type_error_with_both_triples():
    with pytest.raises(TypeError) as exc:
        P(2, "m").sub(P(3, "s"))
    assert dict(exc.value.left.physical) == {"m": 1}
    assert dict(exc.value.right.physical) == {"s": 1}
    assert "subtraction" in str(exc.value)

def test_add_requires_matching_algebraic_and_symbolic_maps():
    a = Quantity(1, physical={"m": 1}, algebraic={"i": 1})
    b = Quantity(1, physical={"m": 1})
    with pytest.raises(IncompatibleUnitsError):
        a + b
    c = Quantity(1, physical={"m": 1}, symbolic={"pi": 1})
    with pytest.raises(IncompatibleUnitsError):
        b - c

def test_add_same_symbol_in_different_namespaces_is_incompatible():
    with pytest.raises(IncompatibleUnitsError):
        Quantity.from_algebraic(1, "x") + Quantity.from_symbolic(1, "x")

def test_add_order_independent_maps():
    c = P(1, {"m": 1, "s": -1}) + P(2, {"s": -1, "m": 1})
    assert c.value == 3

def test_add_keeps_left_maps_unchanged():
    a = P(1, "kg*m")
    c = a + P(4, "m*kg")
    assert c.dimensions == a.dimensions


# -------------------------------
# mul / div
# -------------------------------

def test_mul_never_fails_on_units():
    prod = P(2, "m").mul(P(3, "s"))
    assert prod.value == 6
    assert prod.format() == "6 m*s"

def test_div_units():
    q = P(2, "m").div(P(3, "s"))
    assert q.value == pytest.approx(0.6666666666666666)
    assert q.format() == "0.6666666666666666 m*s^-1"

def test_mul_combines_each_namespace_independently():
    a = Quantity(2, physical={"m": 1}, algebraic={"i": 1}, symbolic={"pi": 1})
    b = Quantity(3, physical={"m": 1}, algebraic={"i": 1}, symbolic={"e": 1})
    c = a * b
    assert c.value == 6
    assert dict(c.physical) == {"m": 2}
    assert dict(c.algebraic) == {"i": 2}
    assert dict(c.symbolic) == {"e": 1, "pi": 1}

def test_div_cancels_to_unitless():
    q = P(6, "m/s") / P(2, "m/s")
    assert q.value == 3
    assert q.is_unitless()
    assert q.format() == "3"

def test_div_negates_divisor_exponents():
    q = Quantity.dimensionless(1) / P(1, "kg*m/s^2")
    assert dict(q.physical) == {"kg": -1, "m": -1, "s": 2}

def test_div_by_zero_value_raises_arithmetic_error():
    with pytest.raises(ArithmeticError):
        P(1, "m") / P(0, "s")


# -------------------------------
# Operators with plain numbers
# -------------------------------

def test_scalar_multiplication_and_division():
    q = P(2, "m")
    assert (q * 3).format() == "6 m"
    assert (3 * q).format() == "6 m"
    assert (q / 2).format() == "1 m"
    assert (2 / q).format() == "1 m^-1"

def test_scalar_add_only_to_unitless():
    assert (Quantity.dimensionless(2) + 3).value == 5
    assert (3 - Quantity.dimensionless(2)).value == 1
    with pytest.raises(IncompatibleUnitsError):
        P(2, "m") + 3

def test_non_numeric_operand_is_not_supported():
    with pytest.raises(TypeError):
        P(2, "m") * "m"
    with pytest.raises(TypeError):
        "m" + P(2, "m")


# -------------------------------
# Strategies / contexts
# -------------------------------

def test_explicit_context_overrides_default():
    ctx = ArithmeticContext(strategy=FRACTION_STRATEGY)
    q = P(1, "m").div(P(3, "s"), context=ctx)
    assert q.value == Fraction(1, 3)
    assert q.format() == "1/3 m*s^-1"
    # default untouched
    assert P(1, "m").div(P(4, "s")).value == 0.25

def test_default_strategy_is_used_by_operators():
    set_numeric_strategy(FRACTION_STRATEGY)
    total = P(1, "m") / 3 + P(2, "m") / 3
    assert total.value == 1
    assert isinstance(total.value, Fraction)

def test_custom_strategy_over_tuples():
    class VectorStrategy:
        def add(self, a, b):
            return tuple(x + y for x, y in zip(a, b))

        def sub(self, a, b):
            return tuple(x - y for x, y in zip(a, b))

        def mul(self, a, b):
            return tuple(x * y for x, y in zip(a, b))

        def div(self, a, b):
            return tuple(x / y for x, y in zip(a, b))

        def pow(self, a, n):
            return tuple(x ** n for x in a)

        def one(self, a):
            return tuple(1 for _ in a)

        def reciprocal(self, a):
            return tuple(1 / x for x in a)

    ctx = ArithmeticContext(strategy=VectorStrategy())
    v = Quantity.from_physical((1.0, 2.0), "m")
    t = Quantity.from_physical((2.0, 4.0), "s")
    speed = v.div(t, context=ctx)
    assert speed.value == (0.5, 0.5)
    assert dict(speed.physical) == {"m": 1, "s": -1}
    inv = v.pow(-1, context=ctx)
    assert inv.value == (1.0, 0.5)
    assert math.isclose(v.pow(0, context=ctx).value[1], 1.0)

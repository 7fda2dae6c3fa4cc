# tests/units/test_parser.py
import pytest

from dimensia.core.errors import ParseError
from dimensia.units.parser import _compile_unit_expr, is_unit_name, parse_unit_string


# --------------------------
# Valid expressions
# --------------------------

@pytest.mark.parametrize("expr,expected", [
    ("m^2/s", {"m": 2, "s": -1}),
    ("kg*m/s^2", {"kg": 1, "m": 1, "s": -2}),
    ("m", {"m": 1}),
    ("m*m", {"m": 2}),
    ("m/m", {}),
    ("m^2/m^2", {}),
    ("m^-2", {"m": -2}),
    ("m^0", {}),
    ("s/m^-1", {"s": 1, "m": 1}),
    ("x_1*_y^10", {"x_1": 1, "_y": 10}),
    ("m1", {"m1": 1}),
])
def test_parse_valid(expr, expected):
    assert parse_unit_string(expr) == expected

@pytest.mark.parametrize("expr", ["", None, "   ", "\t\n"])
def test_parse_empty_is_empty_map(expr):
    assert parse_unit_string(expr) == {}

def test_whitespace_is_ignored():
    assert parse_unit_string("  kg *  m  /  s ^ 2 ") == {"kg": 1, "m": 1, "s": -2}

def test_sign_persists_until_next_operator():
    # no precedence: everything after '/' stays in the denominator
    assert parse_unit_string("kg/m/s") == {"kg": 1, "m": -1, "s": -1}
    assert parse_unit_string("kg/m*s") == {"kg": 1, "m": -1, "s": 1}

def test_adjacent_tokens_after_exponent_share_the_sign():
    assert parse_unit_string("m^2s") == {"m": 2, "s": 1}

def test_leading_operators_are_allowed():
    assert parse_unit_string("/s") == {"s": -1}
    assert parse_unit_string("*m") == {"m": 1}

def test_repeated_names_cancel_per_sign():
    assert parse_unit_string("m*s/m") == {"s": 1}
    assert parse_unit_string("m^3/m^2/m") == {}

def test_results_never_contain_zero_exponents():
    for expr in ["m/m", "a^2*b/a^2", "x^0*y", "k^5/k^3/k^2*z"]:
        assert 0 not in parse_unit_string(expr).values()

def test_result_is_a_fresh_dict_each_call():
    a = parse_unit_string("m/s")
    a["m"] = 99
    assert parse_unit_string("m/s") == {"m": 1, "s": -1}

def test_compiled_plan_is_cached():
    assert _compile_unit_expr("kg*m/s^2") is _compile_unit_expr("kg*m/s^2")


# --------------------------
# Errors
# --------------------------

@pytest.mark.parametrize("expr,index", [
    ("m^", 2),
    ("m^-", 2),
    ("m^+3", 2),
    ("m^x", 2),
    ("2m", 0),
    ("m+s", 1),
    ("(m)", 0),
    ("m**2", 3),
    ("kg·m", 2),
])
def test_parse_errors_report_index(expr, index):
    with pytest.raises(ParseError) as exc:
        parse_unit_string(expr)
    assert exc.value.index == index
    assert exc.value.text == expr
    assert repr(expr) in str(exc.value)

def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_unit_string("m/3")

def test_index_refers_to_whitespace_stripped_text():
    with pytest.raises(ParseError) as exc:
        parse_unit_string("m * s ^")
    assert exc.value.index == 4

def test_non_string_raises_type_error():
    with pytest.raises(TypeError):
        parse_unit_string(42)  # type: ignore[arg-type]


# --------------------------
# Names
# --------------------------

@pytest.mark.parametrize("name,ok", [("m", True), ("kg_2", True), ("_x", True), ("2x", False), ("m*s", False), ("", False)])
def test_is_unit_name(name, ok):
    assert is_unit_name(name) is ok


@pytest.mark.regression(reason="int() digit limit escaped as a bare ValueError")
def test_exponent_beyond_int_digit_limit_is_parse_error():
    expr = "m^" + "1" * 5000
    with pytest.raises(ParseError, match="Exponent too large") as exc:
        parse_unit_string(expr)
    assert exc.value.index == 2

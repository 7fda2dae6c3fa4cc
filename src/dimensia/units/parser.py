"""
dimensia.units.parser
=====================

Single-pass parser for flat unit expressions such as ``kg*m/s^2``.

Grammar (whitespace is removed before parsing)::

    expr       := token*
    token      := '*' | '/' | NAME ['^' signed_int]
    NAME       := [A-Za-z_][A-Za-z0-9_]*
    signed_int := '-'? [0-9]+

``*`` and ``/`` set the sign applied to every following name until the next
operator; there are no parentheses and no precedence. Repeated names are
merged, and an entry whose exponent reaches zero is dropped.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Optional, Tuple

from dimensia.core.dimensions import DimensionMap
from dimensia.core.errors import ParseError

logger = logging.getLogger(__name__)

NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_SIGNED_INT_RE = re.compile(r"-?[0-9]+")
_WS_RE = re.compile(r"\s+")

# Compiled form: (symbol, exponent) pairs in canonical order of first appearance.
Plan = Tuple[Tuple[str, int], ...]


class _UnitExprParser:
    def __init__(self, text: str):
        self.raw = text
        self.s = _WS_RE.sub("", text)
        self.n = len(self.s)
        self.i = 0

    def parse(self) -> DimensionMap:
        out: DimensionMap = {}
        sign = 1
        while self.i < self.n:
            ch = self.s[self.i]
            if ch == "*":
                sign = 1
                self.i += 1
                continue
            if ch == "/":
                sign = -1
                self.i += 1
                continue

            name = self._parse_name()
            exp = 1
            if self.i < self.n and self.s[self.i] == "^":
                self.i += 1
                exp = self._parse_signed_int()

            new_exp = out.get(name, 0) + sign * exp
            if new_exp == 0:
                out.pop(name, None)
            else:
                out[name] = new_exp
        return out

    # ---- token helpers ----
    def _parse_name(self) -> str:
        m = NAME_RE.match(self.s, self.i)
        if not m:
            raise ParseError(f"Invalid unit {self.s[self.i]!r}", self.raw, self.i)
        self.i = m.end()
        return m.group()

    def _parse_signed_int(self) -> int:
        m = _SIGNED_INT_RE.match(self.s, self.i)
        if not m:
            raise ParseError("Invalid exponent after '^'", self.raw, self.i)
        start = self.i
        self.i = m.end()
        try:
            return int(m.group())
        except ValueError:
            # digit count beyond sys.get_int_max_str_digits()
            raise ParseError("Exponent too large", self.raw, start) from None


@lru_cache(maxsize=4096)
def _compile_unit_expr(expr: str) -> Plan:
    # Cache an immutable plan; callers always receive a fresh dict.
    logger.debug("Compiling unit expression %r", expr)
    return tuple(_UnitExprParser(expr).parse().items())


def parse_unit_string(expr: Optional[str]) -> DimensionMap:
    """
    Parse a unit expression into a dimension map.

    >>> parse_unit_string("kg*m/s^2")
    {'kg': 1, 'm': 1, 's': -2}
    >>> parse_unit_string("m/m")
    {}

    ``None`` and the empty string yield ``{}``. Indices reported by
    :class:`~dimensia.core.errors.ParseError` refer to the expression with
    whitespace removed.
    """
    if not expr:
        return {}
    if not isinstance(expr, str):
        raise TypeError(f"Unit expression must be str, got {type(expr).__name__}")
    return dict(_compile_unit_expr(expr))


def is_unit_name(name: str) -> bool:
    """True if ``name`` is a single NAME token of the grammar."""
    return isinstance(name, str) and NAME_RE.fullmatch(name) is not None


__all__ = ["parse_unit_string", "is_unit_name"]

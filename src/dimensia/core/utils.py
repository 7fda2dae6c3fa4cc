"""
dimensia.core.utils
===================

Rendering helpers for values and dimension maps.

The plain form (``m^2*s^-1``) is the canonical wire format and parses back
with :func:`dimensia.units.parser.parse_unit_string`. The pretty form
(``m²·s⁻¹``) is for display only.
"""

from __future__ import annotations

from math import isfinite
from typing import TYPE_CHECKING, Any, Iterable, List, Mapping

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from dimensia.core.dimensions import DimensionTriple

_SUPERSCRIPTS = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")

# Beyond this magnitude ``str(int(x))`` stops being a faithful rendering of ``x``.
_INTEGRAL_RENDER_LIMIT = 1e21


def _sup(n: int) -> str:
    return "" if n == 1 else str(n).translate(_SUPERSCRIPTS)


def format_value(value: Any) -> str:
    """Render a payload value.

    Integral floats drop their trailing ``.0`` so that ``5.0`` and ``5``
    render the same way; everything else uses ``str``.
    """
    if isinstance(value, float) and isfinite(value) and value.is_integer():
        if abs(value) < _INTEGRAL_RENDER_LIMIT:
            return str(int(value))
    return str(value)


def format_map_entries(m: Mapping[str, int], *, pretty: bool = False) -> List[str]:
    """Entries of one map, sorted by symbol: ``name`` or ``name^exp``."""
    parts: List[str] = []
    for sym in sorted(m):
        exp = m[sym]
        if pretty:
            parts.append(f"{sym}{_sup(exp)}")
        else:
            parts.append(sym if exp == 1 else f"{sym}^{exp}")
    return parts


def format_dimension_maps(maps: "DimensionTriple | Iterable[Mapping[str, int]]", *, pretty: bool = False) -> str:
    """
    Join the entries of each map in the given (fixed) group order.

    Returns an empty string when every map is empty.
    """
    units: List[str] = []
    for m in maps:
        units.extend(format_map_entries(m, pretty=pretty))
    return ("·" if pretty else "*").join(units)

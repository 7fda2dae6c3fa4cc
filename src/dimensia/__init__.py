"""
dimensia: dimensional bookkeeping for generic values.

A :class:`Quantity` couples a value with three independent dimension maps
(physical, algebraic, symbolic) and refuses to add or subtract quantities
whose maps differ. The value itself is combined by a pluggable numeric
strategy, so plain floats, exact fractions or any custom payload type work
the same way. The definition registries are imported lazily.
"""

import logging
from importlib import metadata as _metadata
from pathlib import Path as _Path


__author__ = "Dimensia Developers"
__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("dimensia")
except _metadata.PackageNotFoundError:
    import tomllib
    try:
        with open(_Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    except FileNotFoundError:
        __version__ = "0.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from dimensia.core.context import (  # noqa: E402
    ArithmeticContext,
    SimplifyMode,
    get_default_context,
    get_numeric_strategy,
    get_simplify_mode,
    local_context,
    set_default_context,
    set_numeric_strategy,
    set_simplify_mode,
)
from dimensia.core.dimensions import (  # noqa: E402
    DimensionMap,
    DimensionTriple,
    dim_add,
    dim_equals,
    dim_scale,
    normalize,
)
from dimensia.core.errors import (  # noqa: E402
    ArgumentError,
    ConversionNotImplementedError,
    DimensiaError,
    IncompatibleUnitsError,
    NonFiniteExponentError,
    NonIntegerPowerError,
    ParseError,
    RegistryError,
)
from dimensia.core.numeric import (  # noqa: E402
    FRACTION_STRATEGY,
    REAL_STRATEGY,
    FractionStrategy,
    NumericStrategy,
    RealStrategy,
)
from dimensia.core.quantity import Quantity  # noqa: E402
from dimensia.units.parser import parse_unit_string  # noqa: E402

# Public names exposed by the package. Keep this minimal and stable.
__all__ = [
    "__version__", "__author__", "__license__",
    "Quantity",
    "parse_unit_string",
    "DimensionMap", "DimensionTriple", "normalize", "dim_add", "dim_scale", "dim_equals",
    "NumericStrategy", "RealStrategy", "FractionStrategy", "REAL_STRATEGY", "FRACTION_STRATEGY",
    "ArithmeticContext", "SimplifyMode",
    "get_default_context", "set_default_context", "local_context",
    "set_numeric_strategy", "get_numeric_strategy",
    "set_simplify_mode", "get_simplify_mode",
    "DimensiaError", "ParseError", "IncompatibleUnitsError", "ArgumentError",
    "NonIntegerPowerError", "NonFiniteExponentError", "ConversionNotImplementedError",
    "RegistryError",
]

from typing import TYPE_CHECKING, Any  # noqa: E402

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from dimensia.units.registry import DefinitionRegistry

_LAZY_REGISTRIES = ("PHYSICAL_UNITS", "ALGEBRAIC_UNITS", "SYMBOLIC_NUMBERS")


# Lazy access helpers -------------------------------------------------------

def _get_registry(name: str) -> "DefinitionRegistry[Any]":
    # Import here to keep registry bootstrap out of the import path of the core.
    from dimensia.units import registry  # local import
    return getattr(registry, name)

def __getattr__(name: str) -> Any:
    """
    Lazy attribute access for the default definition registries
    (``PHYSICAL_UNITS``, ``ALGEBRAIC_UNITS``, ``SYMBOLIC_NUMBERS``).
    """
    if name in _LAZY_REGISTRIES:
        return _get_registry(name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + list(_LAZY_REGISTRIES))

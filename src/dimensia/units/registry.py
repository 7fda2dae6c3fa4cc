"""
dimensia.units.registry
=======================

Registries of named definitions for the three dimension namespaces.

- physical units: dimension basis, scale factor and aliases;
- algebraic units: minimal-polynomial definitions (e.g. ``i`` ↔ ``x^2+1``);
- symbolic numbers: LaTeX rendering and an approximate value.

The arithmetic core never consults these registries. They are the stable
surface a conversion layer builds on; today only identity conversions are
supported (see :func:`can_convert_physical`).

Registries are populated at start-up and read afterwards. Writes and reads
are serialised with a re-entrant lock so late registration from another
thread is still safe.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from math import isfinite
from types import MappingProxyType
from typing import Dict, Generic, Iterable, List, Mapping, Optional, Tuple, TypeVar

from dimensia.core.dimensions import dim_equals, normalize
from dimensia.core.errors import RegistryError
from dimensia.units.parser import is_unit_name

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class PhysicalUnitDef:
    """A physical unit: ``factor`` base units of dimension ``dims``."""

    dims: Mapping[str, int]
    factor: float = 1.0
    aliases: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not (self.factor > 0 and isfinite(self.factor)):
            raise RegistryError("factor must be a positive, finite number")
        object.__setattr__(self, "dims", MappingProxyType(normalize(self.dims)))
        object.__setattr__(self, "aliases", tuple(self.aliases))


@dataclass(frozen=True, slots=True)
class AlgebraicUnitDef:
    """An adjoined algebraic element, defined by its minimal polynomial."""

    minimal_polynomial: str


@dataclass(frozen=True, slots=True)
class SymbolicNumberDef:
    """A named constant kept exact; ``approx`` is for display/estimation only."""

    latex: Optional[str] = None
    approx: Optional[float] = None


D = TypeVar("D")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
class DefinitionRegistry(Generic[D]):
    """Thread-safe name → definition map with alias support.

    Aliases resolve to the canonical definition; ``get`` on an alias returns
    the same object as ``get`` on the canonical name.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._lock = threading.RLock()
        self._defs: Dict[str, D] = {}
        self._aliases: Dict[str, str] = {}

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._defs)

    def _check_name(self, name: str) -> None:
        if not is_unit_name(name):
            raise RegistryError(
                f"Cannot register {self.kind} '{name}': "
                "names must match [A-Za-z_][A-Za-z0-9_]*"
            )

    # -------------------------- public API ---------------------------------
    def register(self, name: str, definition: D, replace: bool = False) -> None:
        """Register (or overwrite if ``replace`` is True) ``definition`` under ``name``.

        Aliases carried by the definition (``PhysicalUnitDef.aliases``) are
        registered alongside it.
        """
        aliases = tuple(getattr(definition, "aliases", ()))
        for n in (name, *aliases):
            self._check_name(n)

        with self._lock:
            if not replace:
                for n in (name, *aliases):
                    if n in self._defs or n in self._aliases:
                        raise RegistryError(
                            f"Cannot register {self.kind} '{n}': "
                            "a definition or alias with this name already exists."
                        )
            self._aliases.pop(name, None)
            self._defs[name] = definition
            for alias in aliases:
                self._defs.pop(alias, None)
                self._aliases[alias] = name
        logger.debug("Registered %s %r (aliases=%r)", self.kind, name, aliases)

    def register_alias(self, alias: str, canonical: str, replace: bool = False) -> None:
        self._check_name(alias)
        with self._lock:
            if canonical not in self._defs:
                raise RegistryError(f"Unknown {self.kind} '{canonical}'")
            if not replace and (alias in self._defs or alias in self._aliases):
                raise RegistryError(
                    f"Cannot register alias '{alias}': name already in use."
                )
            self._defs.pop(alias, None)
            self._aliases[alias] = canonical
        logger.debug("Registered %s alias %r -> %r", self.kind, alias, canonical)

    def get(self, name: str) -> Optional[D]:
        """Definition for ``name`` (or one of its aliases), or ``None``."""
        with self._lock:
            return self._defs.get(self._aliases.get(name, name))

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def canonical_name(self, name: str) -> Optional[str]:
        with self._lock:
            target = self._aliases.get(name, name)
            return target if target in self._defs else None

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._defs)

    def all(self) -> Mapping[str, D]:
        with self._lock:
            return dict(self._defs)


# ---------------------------------------------------------------------------
# Identity-only conversion check
# ---------------------------------------------------------------------------
def can_convert_physical(source: Mapping[str, int], target: Mapping[str, int]) -> bool:
    """True if a physical map can be converted to ``target``.

    Scale-factor conversion between different compatible units is not
    implemented, so only structurally identical maps qualify.
    """
    return dim_equals(normalize(source), normalize(target))


# ---------------------------------------------------------------------------
# Bootstrap default registries
# ---------------------------------------------------------------------------
def _bootstrap_physical() -> DefinitionRegistry[PhysicalUnitDef]:
    reg: DefinitionRegistry[PhysicalUnitDef] = DefinitionRegistry("physical unit")
    base_units: Iterable[Tuple[str, Tuple[str, ...]]] = (
        ("m",   ("meter", "metre")),   # length
        ("kg",  ("kilogram",)),        # mass
        ("s",   ("second",)),          # time
        ("A",   ("ampere",)),          # electric current
        ("K",   ("kelvin",)),          # temperature
        ("mol", ("mole",)),            # amount of substance
        ("cd",  ("candela",)),         # luminous intensity
    )
    for sym, aliases in base_units:
        reg.register(sym, PhysicalUnitDef({sym: 1}, 1.0, aliases))
    return reg


def _bootstrap_algebraic() -> DefinitionRegistry[AlgebraicUnitDef]:
    reg: DefinitionRegistry[AlgebraicUnitDef] = DefinitionRegistry("algebraic unit")
    reg.register("i", AlgebraicUnitDef("x^2+1"))
    return reg


def _bootstrap_symbolic() -> DefinitionRegistry[SymbolicNumberDef]:
    reg: DefinitionRegistry[SymbolicNumberDef] = DefinitionRegistry("symbolic number")
    reg.register("pi", SymbolicNumberDef(latex=r"\pi", approx=3.141592653589793))
    reg.register("e", SymbolicNumberDef(latex="e", approx=2.718281828459045))
    return reg


PHYSICAL_UNITS = _bootstrap_physical()
ALGEBRAIC_UNITS = _bootstrap_algebraic()
SYMBOLIC_NUMBERS = _bootstrap_symbolic()


# Convenience functions delegating to the default registries.
# These overwrite an existing name by default; pass replace=False to refuse.
def register_physical_unit(name: str, definition: PhysicalUnitDef, replace: bool = True) -> None:
    PHYSICAL_UNITS.register(name, definition, replace)


def get_physical_unit(name: str) -> Optional[PhysicalUnitDef]:
    return PHYSICAL_UNITS.get(name)


def register_algebraic_unit(name: str, definition: AlgebraicUnitDef, replace: bool = True) -> None:
    ALGEBRAIC_UNITS.register(name, definition, replace)


def get_algebraic_unit(name: str) -> Optional[AlgebraicUnitDef]:
    return ALGEBRAIC_UNITS.get(name)


def register_symbolic_number(name: str, definition: SymbolicNumberDef, replace: bool = True) -> None:
    SYMBOLIC_NUMBERS.register(name, definition, replace)


def get_symbolic_number(name: str) -> Optional[SymbolicNumberDef]:
    return SYMBOLIC_NUMBERS.get(name)


__all__ = [
    "PhysicalUnitDef",
    "AlgebraicUnitDef",
    "SymbolicNumberDef",
    "DefinitionRegistry",
    "PHYSICAL_UNITS",
    "ALGEBRAIC_UNITS",
    "SYMBOLIC_NUMBERS",
    "register_physical_unit",
    "get_physical_unit",
    "register_algebraic_unit",
    "get_algebraic_unit",
    "register_symbolic_number",
    "get_symbolic_number",
    "can_convert_physical",
]

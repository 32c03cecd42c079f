"""
ucumium.units.symbols
=====================

Bidirectional symbol tables used by the UCUM formatter and parser.

A ``SymbolMap`` pairs units and prefixes with their textual symbols for one
UCUM variant. It is built once from rows and is read-only afterwards.

Rules
-----
- The first row registering a unit gives its formatted symbol; later rows for
  the same unit are parse-only aliases (``10*`` and ``10^``).
- A symbol may only ever name one unit (or one prefix). Registering it for a
  different value raises ``ValueError``.
- Prefix lookups by converter compare by value, so ``Multiply(1000)`` finds
  kilo just like ``PowerOfTen(3)``.
"""
from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from ucumium.core.converter import Converter
from ucumium.core.unit import Unit
from ucumium.units.prefixes import Prefix

logger = logging.getLogger(__name__)


class Variant(Enum):
    """The three textual styles of UCUM."""

    CASE_SENSITIVE = "case_sensitive"
    CASE_INSENSITIVE = "case_insensitive"
    PRINT = "print"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def coerce(cls, value: Union["Variant", str]) -> "Variant":
        """Accept a ``Variant`` or its name/value (``"cs"``/``"ci"`` too)."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise TypeError(f"Expected a Variant or str, got {type(value).__name__}")
        key = value.strip().lower()
        short = {"cs": cls.CASE_SENSITIVE, "ci": cls.CASE_INSENSITIVE}
        if key in short:
            return short[key]
        for v in cls:
            if key in (v.value, v.name.lower()):
                return v
        raise ValueError(f"Unknown UCUM variant: {value!r}")


class SymbolMap:
    """Read-only unit/prefix symbol table for one variant."""

    def __init__(
        self,
        units: Iterable[Tuple[Unit, str]] = (),
        prefixes: Iterable[Tuple[Prefix, str]] = (),
    ) -> None:
        unit_to_symbol: Dict[Unit, str] = {}
        symbol_to_unit: Dict[str, Unit] = {}
        prefix_to_symbol: Dict[Prefix, str] = {}
        symbol_to_prefix: Dict[str, Prefix] = {}
        converter_to_prefix: Dict[Converter, Prefix] = {}

        for unit, symbol in units:
            if not isinstance(unit, Unit):
                raise TypeError(f"Expected a Unit, got {type(unit).__name__}")
            _check_symbol(symbol)
            known = symbol_to_unit.get(symbol)
            if known is not None and known != unit:
                raise ValueError(
                    f"Cannot map symbol {symbol!r} to {unit!r}: already mapped to {known!r}"
                )
            symbol_to_unit[symbol] = unit
            unit_to_symbol.setdefault(unit, symbol)

        for prefix, symbol in prefixes:
            if not isinstance(prefix, Prefix):
                raise TypeError(f"Expected a Prefix, got {type(prefix).__name__}")
            _check_symbol(symbol)
            known_prefix = symbol_to_prefix.get(symbol)
            if known_prefix is not None and known_prefix != prefix:
                raise ValueError(
                    f"Cannot map prefix symbol {symbol!r} to {prefix.name}: "
                    f"already mapped to {known_prefix.name}"
                )
            symbol_to_prefix[symbol] = prefix
            prefix_to_symbol.setdefault(prefix, symbol)
            converter_to_prefix.setdefault(prefix.converter, prefix)

        self._unit_to_symbol: Mapping[Unit, str] = MappingProxyType(unit_to_symbol)
        self._symbol_to_unit: Mapping[str, Unit] = MappingProxyType(symbol_to_unit)
        self._prefix_to_symbol: Mapping[Prefix, str] = MappingProxyType(prefix_to_symbol)
        self._symbol_to_prefix: Mapping[str, Prefix] = MappingProxyType(symbol_to_prefix)
        self._converter_to_prefix: Mapping[Converter, Prefix] = MappingProxyType(converter_to_prefix)
        # Longest first so that "da" is tried before "d"
        self._prefix_symbols_desc: Tuple[str, ...] = tuple(
            sorted(symbol_to_prefix, key=len, reverse=True)
        )

    @classmethod
    def from_rows(
        cls,
        units: Iterable[Tuple[Unit, str]],
        prefixes: Iterable[Tuple[Prefix, str]] = (),
    ) -> "SymbolMap":
        """Build a table from caller-supplied ``(unit, symbol)`` and ``(prefix, symbol)`` rows."""
        return cls(units, prefixes)

    @classmethod
    def for_variant(cls, variant: Union[Variant, str]) -> "SymbolMap":
        """The shared default table of ``variant``, built on first use."""
        return _default_symbol_map(Variant.coerce(variant))

    # -------------------------- formatting direction -----------------------
    def symbol_for(self, unit: Unit) -> Optional[str]:
        return self._unit_to_symbol.get(unit)

    def prefix_for(self, converter: Converter) -> Optional[Prefix]:
        """Prefix whose converter equals ``converter``, if any."""
        try:
            return self._converter_to_prefix.get(converter)
        except TypeError:  # unhashable converter
            return None

    def symbol_for_prefix(self, prefix: Prefix) -> Optional[str]:
        return self._prefix_to_symbol.get(prefix)

    # -------------------------- parsing direction --------------------------
    def unit_for_symbol(self, symbol: str) -> Optional[Unit]:
        return self._symbol_to_unit.get(symbol)

    def prefix_for_symbol(self, symbol: str) -> Optional[Prefix]:
        return self._symbol_to_prefix.get(symbol)

    def prefixes_for(self, text: str) -> Tuple[Tuple[str, Prefix], ...]:
        """All ``(symbol, prefix)`` pairs whose symbol starts ``text``, longest first."""
        return tuple(
            (sym, self._symbol_to_prefix[sym])
            for sym in self._prefix_symbols_desc
            if text.startswith(sym)
        )

    # -------------------------- introspection ------------------------------
    @property
    def units(self) -> Mapping[str, Unit]:
        return self._symbol_to_unit

    @property
    def prefixes(self) -> Mapping[str, Prefix]:
        return self._symbol_to_prefix

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._symbol_to_unit

    def __len__(self) -> int:
        return len(self._symbol_to_unit)

    def __repr__(self) -> str:
        return (
            f"SymbolMap(units={len(self._symbol_to_unit)}, "
            f"prefixes={len(self._symbol_to_prefix)})"
        )


def _check_symbol(symbol: str) -> None:
    if not isinstance(symbol, str):
        raise TypeError(f"Symbol must be a str, got {type(symbol).__name__}")
    if not symbol or symbol != symbol.strip():
        raise ValueError(f"Invalid symbol {symbol!r}: empty or padded with whitespace")


# ---------------------------------------------------------------------------
# Default tables
# ---------------------------------------------------------------------------
_COLUMN = {
    Variant.CASE_SENSITIVE: 1,
    Variant.CASE_INSENSITIVE: 2,
    Variant.PRINT: 3,
}


def _bootstrap_symbol_map(variant: Variant) -> SymbolMap:
    # Import here to keep the catalogue out of the import path of the model.
    from ucumium.units.catalog import PREFIX_SYMBOLS, UNIT_SYMBOLS

    col = _COLUMN[variant]
    units = [(row[0], row[col]) for row in UNIT_SYMBOLS if row[col] is not None]
    prefixes = [(row[0], row[col]) for row in PREFIX_SYMBOLS if row[col] is not None]
    table = SymbolMap(units, prefixes)
    logger.debug("Built %s symbol map: %r", variant.label, table)
    return table


@lru_cache(maxsize=None)
def _default_symbol_map(variant: Variant) -> SymbolMap:
    return _bootstrap_symbol_map(variant)


def get_symbol_map(variant: Union[Variant, str]) -> SymbolMap:
    return SymbolMap.for_variant(variant)


__all__ = [
    "Variant",
    "SymbolMap",
    "get_symbol_map",
]

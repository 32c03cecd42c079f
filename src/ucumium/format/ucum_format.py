"""
ucumium.format.ucum_format
==========================

Formatting and parsing of units in the three UCUM variants.

    >>> from ucumium.format.ucum_format import UCUMFormat, Variant
    >>> cs = UCUMFormat.get_instance(Variant.CASE_SENSITIVE)
    >>> cs.format(cs.parse("J/(K.mol)"))
    'J/(K.mol)'

Formatting runs an ordered chain of strategies; the first one producing a
symbol wins:

1. direct lookup in the symbol map,
2. transformed unit (parent symbol plus converter),
3. kilogram (gram plus a kilo converter),
4. product unit (numerator and denominator groups),
5. non-system unit (system unit symbol plus converter),
6. the unit's own ``symbol`` field.

When none applies a ``FormatError`` is raised; formatting never drops
information silently.

The PRINT variant is for display only and refuses to parse.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Generic, Optional, TextIO, Tuple, TypeVar, Union

from ucumium.core.classifier import DEFAULT_CLASSIFIER, PrefixClassifier
from ucumium.core.converter import Converter, PowerOfTen
from ucumium.core.unit import ONE, AnnotatedUnit, ProductUnit, TransformedUnit, Unit
from ucumium.errors import FormatError, LexError, ParseError, UCUMError, UnsupportedOperation
from ucumium.format.converter_formatter import format_converter
from ucumium.format.parser import parse_unit
from ucumium.units.catalog import GRAM, KILOGRAM
from ucumium.units.symbols import SymbolMap, Variant

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ParsePosition:
    """Cursor into a parsed text; ``error_index`` is -1 until a parse fails."""

    index: int = 0
    error_index: int = -1


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of ``try_parse``/``try_format``: a value or the error that prevented it."""

    value: Optional[T] = None
    error: Optional[UCUMError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class UCUMFormat:
    """Formatter (and, except for PRINT, parser) bound to one variant and symbol map."""

    def __init__(
        self,
        symbol_map: SymbolMap,
        variant: Variant,
        classifier: PrefixClassifier = DEFAULT_CLASSIFIER,
    ) -> None:
        if not isinstance(symbol_map, SymbolMap):
            raise TypeError(f"Expected a SymbolMap, got {type(symbol_map).__name__}")
        self._symbols = symbol_map
        self._variant = Variant.coerce(variant)
        self._classifier = classifier
        # processed in order, the first to return a non-empty string wins
        self._strategies: Tuple[Callable[[Unit], Optional[str]], ...] = (
            self._symbol_from_lookup,
            self._symbol_for_transformed_unit,
            self._symbol_for_kilogram,
            self._symbol_for_product_unit,
            self._symbol_for_non_system_unit,
            self._symbol_from_field,
        )

    @classmethod
    def get_instance(
        cls,
        variant: Union[Variant, str] = Variant.CASE_SENSITIVE,
        symbol_map: Optional[SymbolMap] = None,
    ) -> "UCUMFormat":
        """Format for ``variant``; the default symbol map gives a shared instance."""
        variant = Variant.coerce(variant)
        if symbol_map is None:
            return _default_format(variant)
        return _new_format(variant, symbol_map)

    @property
    def variant(self) -> Variant:
        return self._variant

    @property
    def symbol_map(self) -> SymbolMap:
        return self._symbols

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------
    def format(self, unit: Unit) -> str:
        if not isinstance(unit, Unit):
            raise TypeError(f"Expected a Unit, got {type(unit).__name__}")
        try:
            return self._format(unit)
        except FormatError as e:
            logger.debug("Cannot format %r as %s: %s", unit, self, e)
            raise

    def format_to(self, unit: Unit, out: TextIO) -> TextIO:
        """Write the formatted ``unit`` to the text stream ``out`` and return it."""
        out.write(self.format(unit))
        return out

    def try_format(self, unit: Unit) -> Result[str]:
        try:
            return Result(value=self.format(unit))
        except UCUMError as e:
            return Result(error=e)

    def _format(self, unit: Unit) -> str:
        if isinstance(unit, AnnotatedUnit):
            direct = self._symbols.symbol_for(unit)
            if direct is not None:
                return direct
            actual = unit.actual
            symbol = "" if actual == ONE else self._find_symbol(actual)
            if not unit.annotation:
                return symbol
            return self._append_annotation(symbol, unit.annotation)
        return self._find_symbol(unit)

    def _find_symbol(self, unit: Unit) -> str:
        for strategy in self._strategies:
            symbol = strategy(unit)
            if symbol:
                return symbol
        raise FormatError(
            f"Cannot format the given unit as UCUM (unsupported unit {type(unit).__name__})"
        )

    def _append_annotation(self, symbol: str, annotation: str) -> str:
        return f"{symbol}{{{annotation}}}"

    # -- strategies ----------------------------------------------------
    def _symbol_from_lookup(self, unit: Unit) -> Optional[str]:
        return self._symbols.symbol_for(unit)

    def _symbol_for_transformed_unit(self, unit: Unit) -> Optional[str]:
        if not isinstance(unit, TransformedUnit):
            return None
        parent = unit.parent
        # kg/3 and (g.1000)/3 are both written from the gram
        if self._symbols.symbol_for(parent) is None and self._gram_converter(unit) is not None:
            return None
        continued = parent != ONE
        buffer = self._format(parent) if continued else ""
        converter = self._classifier.classify(unit.converter)
        return format_converter(converter, continued, buffer, self._symbols)

    def _symbol_for_kilogram(self, unit: Unit) -> Optional[str]:
        # The kilogram is the base unit but the gram carries the prefixes.
        converter = self._gram_converter(unit)
        if converter is None:
            return None
        gram = self._symbols.symbol_for(GRAM)
        return format_converter(self._classifier.classify(converter), True, gram, self._symbols)

    def _gram_converter(self, unit: Unit) -> Optional[Converter]:
        """Converter from the gram to ``unit``, for linear mass units only."""
        if unit.system_unit != KILOGRAM or self._symbols.symbol_for(GRAM) is None:
            return None
        try:
            to_system = unit.converter_to_system()
        except ValueError:  # non-linear factor in a product, left to the product strategy
            return None
        if not to_system.is_linear:
            return None
        return PowerOfTen(3).concatenate(to_system)

    def _symbol_for_product_unit(self, unit: Unit) -> Optional[str]:
        if not isinstance(unit, ProductUnit):
            return None
        # Plain numbers cannot carry an exponent ("3" squared is not "32"),
        # so they are folded into one factor written after the rest.
        numbers = [(u, e) for u, e in unit.factors if self._is_plain_number(u)]
        others = [(u, e) for u, e in unit.factors if not self._is_plain_number(u)]
        numerator = [(u, e) for u, e in others if e > 0]
        denominator = [(u, -e) for u, e in others if e < 0]

        text = ".".join(self._power(u, e) for u, e in numerator)
        if denominator:
            group = ".".join(self._power(u, e) for u, e in denominator)
            text = (text or "1") + (f"/({group})" if len(denominator) > 1 else f"/{group}")
        if not numbers:
            return text or "1"
        scale = self._classifier.classify(ProductUnit(tuple(numbers)).converter_to_system())
        return format_converter(scale, bool(text), text, self._symbols) or "1"

    def _is_plain_number(self, unit: Unit) -> bool:
        return (
            isinstance(unit, TransformedUnit)
            and unit.parent == ONE
            and unit.converter.is_linear
            and self._symbols.symbol_for(unit) is None
        )

    def _symbol_for_non_system_unit(self, unit: Unit) -> Optional[str]:
        if unit.is_system_unit:
            return None
        system = unit.system_unit
        to_system = self._classifier.classify(unit.converter_to_system())
        continued = system != ONE
        buffer = self._format(system) if continued else ""
        return format_converter(to_system, continued, buffer, self._symbols) or None

    def _symbol_from_field(self, unit: Unit) -> Optional[str]:
        return getattr(unit, "symbol", None)

    def _power(self, unit: Unit, exponent: int) -> str:
        symbol = self._format(unit)
        return f"{symbol}{exponent}" if exponent > 1 else symbol

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------
    def parse(self, text: str, cursor: Optional[ParsePosition] = None) -> Unit:
        raise NotImplementedError

    def try_parse(self, text: str, cursor: Optional[ParsePosition] = None) -> Result[Unit]:
        try:
            return Result(value=self.parse(text, cursor))
        except UCUMError as e:
            return Result(error=e)

    def __repr__(self) -> str:
        return f"UCUM [{self._variant.label}]"


class _PrintFormat(UCUMFormat):
    """Pretty-printing only: print symbols are not unique, so parsing is refused."""

    def parse(self, text: str, cursor: Optional[ParsePosition] = None) -> Unit:
        raise UnsupportedOperation(
            "The print format is for pretty-printing of units only. Parsing is not supported."
        )

    def _append_annotation(self, symbol: str, annotation: str) -> str:
        if symbol:
            return f"{symbol}({annotation})"
        return annotation

    def __repr__(self) -> str:
        return "UCUM Print"


class _ParsingFormat(UCUMFormat):
    """Formats and parses the case-sensitive or case-insensitive codes."""

    @property
    def case_sensitive(self) -> bool:
        return self._variant is Variant.CASE_SENSITIVE

    def parse(self, text: str, cursor: Optional[ParsePosition] = None) -> Unit:
        """
        Parse ``text`` from ``cursor.index`` to its end.

        Surrounding whitespace is ignored; blank input is ``ONE``. On success
        the cursor moves to the end of ``text``; on failure
        ``cursor.error_index`` is set to the absolute offset of the error,
        which is raised.
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected a str, got {type(text).__name__}")
        if cursor is None:
            cursor = ParsePosition(0)
        start, end = cursor.index, len(text)
        if start < 0:
            raise ValueError(f"Parse position must be non-negative, got {start}")
        if start >= end:
            return ONE

        source = text[start:end]
        stripped = source.strip()
        if not stripped:
            cursor.index = end
            return ONE
        lead = len(source) - len(source.lstrip())
        if not self.case_sensitive:
            stripped = _ascii_upper(stripped)

        try:
            unit = parse_unit(stripped, self._symbols, offset=start + lead)
        except (ParseError, LexError) as e:
            cursor.error_index = e.offset
            logger.debug("Cannot parse %r as %s: %s", text, self, e)
            raise
        cursor.index = end
        return unit

    def __repr__(self) -> str:
        return f"UCUM Parsing [{self._variant.label}]"


def _ascii_upper(text: str) -> str:
    return "".join(c.upper() if "a" <= c <= "z" else c for c in text)


def _new_format(variant: Variant, symbol_map: SymbolMap) -> UCUMFormat:
    if variant is Variant.PRINT:
        return _PrintFormat(symbol_map, variant)
    return _ParsingFormat(symbol_map, variant)


@lru_cache(maxsize=None)
def _default_format(variant: Variant) -> UCUMFormat:
    return _new_format(variant, SymbolMap.for_variant(variant))


__all__ = [
    "Variant",
    "UCUMFormat",
    "ParsePosition",
    "Result",
]

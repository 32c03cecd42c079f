# ucumium/format/converter_formatter.py
from __future__ import annotations

from typing import TYPE_CHECKING

from ucumium.core.converter import Converter, Multiply, PowerOfTen, Rational
from ucumium.core.utils import integral_value, rationalize
from ucumium.errors import FormatError

if TYPE_CHECKING:
    from ucumium.units.symbols import SymbolMap


def is_compound(text: str) -> bool:
    return "." in text or "/" in text


def format_converter(converter: Converter, continued: bool, buffer: str, symbols: "SymbolMap") -> str:
    """
    Render ``buffer`` (the formatted unit) modified by ``converter``.

    UCUM has no operator precedence, so a compound ``buffer`` only needs
    parentheses when a numeric factor follows it. ``continued`` is false
    when the modified unit is dimensionless; the factor is then written
    without a leading ``.``.

    A prefix converter is glued in front of ``buffer`` when ``buffer`` is a
    plain symbol of ``symbols`` and the glued text is not itself a symbol
    (``cd`` is the candela, never a centi-day).
    """
    prefix = symbols.prefix_for(converter)
    if prefix is not None:
        prefix_symbol = symbols.symbol_for_prefix(prefix)
        if prefix_symbol is not None and _can_glue(prefix_symbol, buffer, symbols):
            return prefix_symbol + buffer

    if converter.is_identity:
        return buffer

    if isinstance(converter, PowerOfTen):
        converter = converter.as_rational()

    if isinstance(converter, Multiply):
        value = integral_value(rationalize(converter.factor))
        if value is None:
            raise FormatError("Only integer factors are supported in UCUM")
        text = _parenthesize(buffer)
        return f"{text}.{value}" if continued else f"{text}{value}"

    if isinstance(converter, Rational):
        text = _parenthesize(buffer)
        if converter.dividend != 1:
            if continued:
                text += "."
            text += str(converter.dividend)
        if converter.divisor != 1:
            text += f"/{converter.divisor}"
        return text

    # logarithmic, offset and composite converters
    return f"{converter.name}({buffer})"


def _can_glue(prefix_symbol: str, buffer: str, symbols: "SymbolMap") -> bool:
    if not buffer or is_compound(buffer):
        return False
    if symbols.unit_for_symbol(buffer) is None:
        return False
    return symbols.unit_for_symbol(prefix_symbol + buffer) is None


def _parenthesize(buffer: str) -> str:
    return f"({buffer})" if is_compound(buffer) else buffer


__all__ = ["format_converter", "is_compound"]

# ucumium/units/prefixes.py
from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Tuple

from ucumium.core.converter import PowerOfTen


@dataclass(frozen=True, slots=True)
class Prefix:
    """A metric prefix: a named power of ten."""

    name: str
    symbol: str
    exponent: int

    @property
    def factor(self) -> Fraction:
        return Fraction(10) ** self.exponent

    @property
    def converter(self) -> PowerOfTen:
        return PowerOfTen(self.exponent)


QUETTA = Prefix("quetta", "Q", 30)
RONNA = Prefix("ronna", "R", 27)
YOTTA = Prefix("yotta", "Y", 24)
ZETTA = Prefix("zetta", "Z", 21)
EXA = Prefix("exa", "E", 18)
PETA = Prefix("peta", "P", 15)
TERA = Prefix("tera", "T", 12)
GIGA = Prefix("giga", "G", 9)
MEGA = Prefix("mega", "M", 6)
KILO = Prefix("kilo", "k", 3)
HECTO = Prefix("hecto", "h", 2)
DEKA = Prefix("deka", "da", 1)
DECI = Prefix("deci", "d", -1)
CENTI = Prefix("centi", "c", -2)
MILLI = Prefix("milli", "m", -3)
MICRO = Prefix("micro", "u", -6)
NANO = Prefix("nano", "n", -9)
PICO = Prefix("pico", "p", -12)
FEMTO = Prefix("femto", "f", -15)
ATTO = Prefix("atto", "a", -18)
ZEPTO = Prefix("zepto", "z", -21)
YOCTO = Prefix("yocto", "y", -24)
RONTO = Prefix("ronto", "r", -27)
QUECTO = Prefix("quecto", "q", -30)

# Largest to smallest
PREFIXES: Tuple[Prefix, ...] = (
    QUETTA, RONNA, YOTTA, ZETTA, EXA, PETA, TERA, GIGA, MEGA, KILO, HECTO, DEKA,
    DECI, CENTI, MILLI, MICRO, NANO, PICO, FEMTO, ATTO, ZEPTO, YOCTO, RONTO, QUECTO,
)

PREFIX_BY_EXPONENT: Dict[int, Prefix] = {p.exponent: p for p in PREFIXES}


__all__ = ["Prefix", "PREFIXES", "PREFIX_BY_EXPONENT"] + [p.name.upper() for p in PREFIXES]

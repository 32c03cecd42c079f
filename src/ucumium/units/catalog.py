"""
ucumium.units.catalog
=====================

The default catalogue of units understood by the bundled UCUM symbol tables.

This module defines named unit values (e.g. ``METER``, ``HERTZ``) built
with the unit-model API, together with the static rows from which the three
variant symbol tables are populated. It is data, not logic: the codec works
with any catalogue supplied through a custom ``SymbolMap``.
"""

import math
from fractions import Fraction
from typing import Optional, Tuple

from ucumium.core.converter import Add, Logarithmic
from ucumium.core.unit import ONE, AlternateUnit, BaseUnit, Unit
from ucumium.units import prefixes as P
from ucumium.units.prefixes import Prefix

# ---------------------------------------------------------------------------
# Base units
# ---------------------------------------------------------------------------
METER = BaseUnit("m")           # Length
KILOGRAM = BaseUnit("kg")       # Mass
SECOND = BaseUnit("s")          # Time
AMPERE = BaseUnit("A")          # Electric current
KELVIN = BaseUnit("K")          # Thermodynamic temperature
MOLE = BaseUnit("mol")          # Amount of substance
CANDELA = BaseUnit("cd")        # Luminous intensity

# The gram is the prefixable mass unit even though the kilogram is the base.
GRAM = KILOGRAM.divide(1000)

# ---------------------------------------------------------------------------
# Derived SI units
# ---------------------------------------------------------------------------
# Plane angle & solid angle (dimensionless but named)
RADIAN = AlternateUnit(ONE, "rad")
STERADIAN = AlternateUnit(ONE, "sr")

HERTZ = AlternateUnit(ONE / SECOND, "Hz")
NEWTON = AlternateUnit(METER * KILOGRAM / SECOND ** 2, "N")
PASCAL = AlternateUnit(NEWTON / METER ** 2, "Pa")
JOULE = AlternateUnit(NEWTON * METER, "J")
WATT = AlternateUnit(JOULE / SECOND, "W")
COULOMB = AlternateUnit(SECOND * AMPERE, "C")
VOLT = AlternateUnit(WATT / AMPERE, "V")
FARAD = AlternateUnit(COULOMB / VOLT, "F")
OHM = AlternateUnit(VOLT / AMPERE, "Ω")
SIEMENS = AlternateUnit(AMPERE / VOLT, "S")
WEBER = AlternateUnit(VOLT * SECOND, "Wb")
TESLA = AlternateUnit(WEBER / METER ** 2, "T")
HENRY = AlternateUnit(WEBER / AMPERE, "H")
LUMEN = AlternateUnit(CANDELA * STERADIAN, "lm")
LUX = AlternateUnit(LUMEN / METER ** 2, "lx")
BECQUEREL = AlternateUnit(ONE / SECOND, "Bq")
GRAY = AlternateUnit(JOULE / KILOGRAM, "Gy")
SIEVERT = AlternateUnit(JOULE / KILOGRAM, "Sv")
KATAL = AlternateUnit(MOLE / SECOND, "kat")

CELSIUS = KELVIN.transform(Add(Fraction(27315, 100)))

# ---------------------------------------------------------------------------
# Dimensionless
# ---------------------------------------------------------------------------
TEN = ONE.multiply(10)
PERCENT = ONE.divide(100)
PER_THOUSAND = ONE.divide(1000)
PER_MILLION = ONE.divide(1000000)
PI = ONE.multiply(math.pi)
BIT = AlternateUnit(ONE, "bit")
BYTE = BIT.multiply(8)
NEPER = ONE.transform(Logarithmic(math.e))
BEL = ONE.transform(Logarithmic(10))

# ---------------------------------------------------------------------------
# Customary units accepted alongside SI
# ---------------------------------------------------------------------------
LITER = (METER ** 3).divide(1000)
ARE = (METER ** 2).multiply(100)
MINUTE = SECOND.multiply(60)
HOUR = MINUTE.multiply(60)
DAY = HOUR.multiply(24)
WEEK = DAY.multiply(7)
YEAR = DAY.multiply(Fraction(36525, 100))         # Julian year
MONTH = YEAR.divide(12)
TONNE = KILOGRAM.multiply(1000)
BAR = PASCAL.multiply(100000)
ATMOSPHERE = PASCAL.multiply(101325)
ELECTRON_VOLT = JOULE.multiply(1.602176634e-19)
ASTRONOMIC_UNIT = METER.multiply(149597870691)
PARSEC = METER.multiply(30856780000000000)
DEGREE = RADIAN.multiply(math.pi / 180)

INCH = METER.multiply(Fraction(254, 10000))
FOOT = INCH.multiply(12)
POUND = GRAM.multiply(Fraction(45359237, 100000))

# ---------------------------------------------------------------------------
# Symbol rows: (unit, case-sensitive, case-insensitive, print)
# A unit may appear on several rows; the first row gives its formatted symbol.
# None means the unit has no symbol in that variant.
# ---------------------------------------------------------------------------
UnitRow = Tuple[Unit, Optional[str], Optional[str], Optional[str]]
PrefixRow = Tuple[Prefix, Optional[str], Optional[str], Optional[str]]

UNIT_SYMBOLS: Tuple[UnitRow, ...] = (
    # Base
    (METER,            "m",       "M",       "m"),
    (SECOND,           "s",       "S",       "s"),
    (GRAM,             "g",       "G",       "g"),
    (AMPERE,           "A",       "A",       "A"),
    (KELVIN,           "K",       "K",       "K"),
    (MOLE,             "mol",     "MOL",     "mol"),
    (CANDELA,          "cd",      "CD",      "cd"),
    (RADIAN,           "rad",     "RAD",     "rad"),
    # Derived
    (STERADIAN,        "sr",      "SR",      "sr"),
    (HERTZ,            "Hz",      "HZ",      "Hz"),
    (NEWTON,           "N",       "N",       "N"),
    (PASCAL,           "Pa",      "PAL",     "Pa"),
    (JOULE,            "J",       "J",       "J"),
    (WATT,             "W",       "W",       "W"),
    (COULOMB,          "C",       "C",       "C"),
    (VOLT,             "V",       "V",       "V"),
    (FARAD,            "F",       "F",       "F"),
    (OHM,              "Ohm",     "OHM",     "Ω"),
    (SIEMENS,          "S",       "SIE",     "S"),
    (WEBER,            "Wb",      "WB",      "Wb"),
    (TESLA,            "T",       "T",       "T"),
    (HENRY,            "H",       "H",       "H"),
    (LUMEN,            "lm",      "LM",      "lm"),
    (LUX,              "lx",      "LX",      "lx"),
    (BECQUEREL,        "Bq",      "BQ",      "Bq"),
    (GRAY,             "Gy",      "GY",      "Gy"),
    (SIEVERT,          "Sv",      "SV",      "Sv"),
    (KATAL,            "kat",     "KAT",     "kat"),
    (CELSIUS,          "Cel",     "CEL",     "°C"),
    # Dimensionless
    (TEN,              "10*",     "10*",     "10"),
    (TEN,              "10^",     "10^",     None),
    (PERCENT,          "%",       "%",       "%"),
    (PER_THOUSAND,     "[ppth]",  "[PPTH]",  "ppth"),
    (PER_MILLION,      "[ppm]",   "[PPM]",   "ppm"),
    (PI,               "[pi]",    "[PI]",    "π"),
    (BIT,              "bit",     "BIT",     "bit"),
    (BYTE,             "By",      "BY",      "By"),
    (NEPER,            "Np",      "NEP",     "Np"),
    (BEL,              "B",       "B",       "B"),
    # Customary
    (LITER,            "L",       "L",       "L"),
    (LITER,            "l",       None,      None),
    (ARE,              "ar",      "AR",      "ar"),
    (MINUTE,           "min",     "MIN",     "min"),
    (HOUR,             "h",       "HR",      "h"),
    (DAY,              "d",       "D",       "d"),
    (WEEK,             "wk",      "WK",      "wk"),
    (YEAR,             "a",       "ANN",     "a"),
    (MONTH,            "mo",      "MO",      "mo"),
    (TONNE,            "t",       "TNE",     "t"),
    (BAR,              "bar",     "BAR",     "bar"),
    (ATMOSPHERE,       "atm",     "ATM",     "atm"),
    (ELECTRON_VOLT,    "eV",      "EV",      "eV"),
    (ASTRONOMIC_UNIT,  "AU",      "ASU",     "AU"),
    (PARSEC,           "pc",      "PRS",     "pc"),
    (DEGREE,           "deg",     "DEG",     "°"),
    (INCH,             "[in_i]",  "[IN_I]",  "in"),
    (FOOT,             "[ft_i]",  "[FT_I]",  "ft"),
    (POUND,            "[lb_av]", "[LB_AV]", "lb"),
)

PREFIX_SYMBOLS: Tuple[PrefixRow, ...] = (
    (P.QUETTA, "Q",  "QA", "Q"),
    (P.RONNA,  "R",  "RA", "R"),
    (P.YOTTA,  "Y",  "YA", "Y"),
    (P.ZETTA,  "Z",  "ZA", "Z"),
    (P.EXA,    "E",  "EX", "E"),
    (P.PETA,   "P",  "PT", "P"),
    (P.TERA,   "T",  "TR", "T"),
    (P.GIGA,   "G",  "GA", "G"),
    (P.MEGA,   "M",  "MA", "M"),
    (P.KILO,   "k",  "K",  "k"),
    (P.HECTO,  "h",  "H",  "h"),
    (P.DEKA,   "da", "DA", "da"),
    (P.DECI,   "d",  "D",  "d"),
    (P.CENTI,  "c",  "C",  "c"),
    (P.MILLI,  "m",  "M",  "m"),
    (P.MICRO,  "u",  "U",  "μ"),
    (P.NANO,   "n",  "N",  "n"),
    (P.PICO,   "p",  "P",  "p"),
    (P.FEMTO,  "f",  "F",  "f"),
    (P.ATTO,   "a",  "A",  "a"),
    (P.ZEPTO,  "z",  "ZO", "z"),
    (P.YOCTO,  "y",  "YO", "y"),
    (P.RONTO,  "r",  "RO", "r"),
    (P.QUECTO, "q",  "QO", "q"),
)

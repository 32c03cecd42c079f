"""
ucumium.core.converter
======================

Value converters relating a unit to its parent.

A converter is an immutable value. The linear ones (``Identity``,
``Multiply``, ``Rational``, ``PowerOfTen``) are fully described by a single
factor and compare equal whenever their factors are exactly equal, so
``PowerOfTen(3) == Rational(1000, 1) == Multiply(1000)``. The remaining kinds
(``Add``, ``Logarithmic``, ``Exponential``, ``Composite``) compare
structurally field by field.

``a.concatenate(b)`` is the converter that applies ``b`` first and ``a``
second. Linear chains always collapse into a single linear converter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Union

from ucumium.core.utils import Number, is_exact, power_of_ten_exponent


class Converter:
    """Base of the closed converter family."""

    __slots__ = ()

    @property
    def is_linear(self) -> bool:
        return False

    @property
    def is_identity(self) -> bool:
        return False

    @property
    def name(self) -> str:
        raise NotImplementedError

    def convert(self, value: Number) -> Number:
        raise NotImplementedError

    def inverse(self) -> "Converter":
        raise NotImplementedError

    def concatenate(self, other: "Converter") -> "Converter":
        """Return the converter applying ``other`` first, then ``self``."""
        if not isinstance(other, Converter):
            raise TypeError(f"Cannot concatenate {type(other).__name__} to a converter")
        if other.is_identity:
            return self
        if self.is_identity:
            return other
        if self.is_linear and other.is_linear:
            return converter_for_factor(_mul_factors(self.factor, other.factor))  # type: ignore[attr-defined]
        return Composite(inner=other, outer=self)

    def __str__(self) -> str:
        return self.name


class LinearConverter(Converter):
    """A converter of the form ``x -> x * factor``."""

    __slots__ = ()

    @property
    def is_linear(self) -> bool:
        return True

    @property
    def is_identity(self) -> bool:
        return self.factor == 1

    def convert(self, value: Number) -> Number:
        return _mul_factors(value, self.factor)

    def inverse(self) -> Converter:
        f = self.factor
        if is_exact(f):
            return converter_for_factor(1 / Fraction(f))
        return converter_for_factor(1.0 / f)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinearConverter):
            return NotImplemented
        return self.factor == other.factor

    def __hash__(self) -> int:
        # int, float and Fraction share a hash for equal values
        return hash(self.factor)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Identity(LinearConverter):
    @property
    def factor(self) -> int:
        return 1

    @property
    def name(self) -> str:
        return "Identity"

    def inverse(self) -> "Identity":
        return self


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Multiply(LinearConverter):
    """Multiplication by an arbitrary (possibly inexact) factor."""

    factor: Number

    def __post_init__(self) -> None:
        if isinstance(self.factor, bool) or not isinstance(self.factor, (int, float, Fraction)):
            raise TypeError(f"Multiply factor must be a number, got {type(self.factor).__name__}")
        if self.factor == 0 or (isinstance(self.factor, float) and not math.isfinite(self.factor)):
            raise ValueError("Multiply factor must be finite and non-zero")

    @property
    def name(self) -> str:
        return f"x{self.factor}"


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Rational(LinearConverter):
    """Multiplication by ``dividend / divisor``, kept in lowest terms."""

    dividend: int
    divisor: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.dividend, int) or not isinstance(self.divisor, int):
            raise TypeError("Rational converter needs integer dividend and divisor")
        if self.divisor == 0 or self.dividend == 0:
            raise ValueError("Rational converter needs non-zero dividend and divisor")
        frac = Fraction(self.dividend, self.divisor)
        object.__setattr__(self, "dividend", frac.numerator)
        object.__setattr__(self, "divisor", frac.denominator)

    @property
    def factor(self) -> Fraction:
        return Fraction(self.dividend, self.divisor)

    @property
    def name(self) -> str:
        if self.divisor == 1:
            return f"x{self.dividend}"
        return f"x{self.dividend}/{self.divisor}"


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class PowerOfTen(LinearConverter):
    """Multiplication by ``10**exponent``; the shape of every metric prefix."""

    exponent: int

    def __post_init__(self) -> None:
        if not isinstance(self.exponent, int) or isinstance(self.exponent, bool):
            raise TypeError("PowerOfTen exponent must be an int")

    @property
    def factor(self) -> Fraction:
        return Fraction(10) ** self.exponent

    @property
    def name(self) -> str:
        return f"10^{self.exponent}"

    def as_rational(self) -> Rational:
        f = self.factor
        return Rational(f.numerator, f.denominator)


@dataclass(frozen=True, slots=True)
class Add(Converter):
    """Offset converter ``x -> x + offset`` (e.g. degree Celsius)."""

    offset: Number

    @property
    def name(self) -> str:
        return f"+{self.offset}" if self.offset >= 0 else str(self.offset)

    def convert(self, value: Number) -> Number:
        return value + self.offset

    def inverse(self) -> "Add":
        return Add(-self.offset)


@dataclass(frozen=True, slots=True)
class Logarithmic(Converter):
    """``x -> log_base(x)``; used for decibel and neper style units."""

    base: Number = 10

    @property
    def name(self) -> str:
        return _log_name(self.base)

    def convert(self, value: Number) -> float:
        return math.log(value, self.base)

    def inverse(self) -> "Exponential":
        return Exponential(self.base)


@dataclass(frozen=True, slots=True)
class Exponential(Converter):
    """``x -> base ** x``, the inverse of :class:`Logarithmic`."""

    base: Number = 10

    @property
    def name(self) -> str:
        if self.base == math.e:
            return "exp"
        return f"{_number_text(self.base)}^"

    def convert(self, value: Number) -> float:
        return self.base ** value

    def inverse(self) -> Logarithmic:
        return Logarithmic(self.base)


@dataclass(frozen=True, slots=True)
class Composite(Converter):
    """Function composition: ``inner`` is applied first, then ``outer``."""

    inner: Converter
    outer: Converter

    @property
    def name(self) -> str:
        return f"{self.outer.name}.{self.inner.name}"

    def convert(self, value: Number) -> Number:
        return self.outer.convert(self.inner.convert(value))

    def inverse(self) -> "Composite":
        return Composite(inner=self.outer.inverse(), outer=self.inner.inverse())


IDENTITY = Identity()

ConverterLike = Union[Converter, Number]


def converter_for_factor(factor: Number) -> LinearConverter:
    """
    Canonical linear converter for a numeric factor.

    Exact factors become ``Identity``, ``PowerOfTen`` or ``Rational``; floats
    stay as ``Multiply`` (a float of exactly 1.0 is the identity).
    """
    if isinstance(factor, bool) or not isinstance(factor, (int, float, Fraction)):
        raise TypeError(f"Expected a numeric factor, got {type(factor).__name__}")
    if factor == 0:
        raise ValueError("Conversion factor must be non-zero")

    if isinstance(factor, float):
        if factor == 1.0:
            return IDENTITY
        return Multiply(factor)

    frac = Fraction(factor)
    if frac == 1:
        return IDENTITY
    exp = power_of_ten_exponent(frac)
    if exp is not None:
        return PowerOfTen(exp)
    return Rational(frac.numerator, frac.denominator)


def as_converter(value: ConverterLike) -> Converter:
    if isinstance(value, Converter):
        return value
    return converter_for_factor(value)


def _mul_factors(a: Number, b: Number) -> Number:
    if is_exact(a) and is_exact(b):
        return Fraction(a) * Fraction(b)
    return float(a) * float(b)


def _number_text(x: Number) -> str:
    if isinstance(x, float) and x.is_integer():
        return str(int(x))
    return str(x)


def _log_name(base: Number) -> str:
    if base == 10:
        return "lg"
    if base == math.e:
        return "ln"
    if base == 2:
        return "ld"
    return f"log{_number_text(base)}"


__all__ = [
    "Converter",
    "LinearConverter",
    "Identity",
    "Multiply",
    "Rational",
    "PowerOfTen",
    "Add",
    "Logarithmic",
    "Exponential",
    "Composite",
    "IDENTITY",
    "converter_for_factor",
    "as_converter",
]

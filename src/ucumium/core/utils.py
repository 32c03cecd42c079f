"""
ucumium.core.utils
==================

Exact-number helpers shared by the converter algebra and the prefix
classifier.

Factors travel through the library either as exact values (``int`` /
``Fraction``) or as ``float``. These helpers decide when a float can be
treated as the exact decimal it was written as, and recognise powers of ten.
"""

from __future__ import annotations

from fractions import Fraction
from math import isfinite
from typing import Optional, Union

Number = Union[int, float, Fraction]


def is_exact(x: Number) -> bool:
    return isinstance(x, (int, Fraction)) and not isinstance(x, bool)


def rationalize(x: Number, *, as_fraction: bool = True) -> Fraction | int:
    """
    Return ``x`` as an exact rational.

    Floats are narrowed through their shortest ``repr`` so that ``0.001``
    becomes ``Fraction(1, 1000)`` rather than the binary expansion of the
    double. Raises ``ValueError`` for NaN and infinities.
    """
    if isinstance(x, bool):
        raise TypeError("bool is not a numeric factor")
    if isinstance(x, Fraction):
        frac = x
    elif isinstance(x, int):
        frac = Fraction(x)
    elif isinstance(x, float):
        if not isfinite(x):
            raise ValueError(f"Cannot rationalize non-finite value {x!r}")
        frac = Fraction(repr(x))
    else:
        raise TypeError(f"Expected int, float or Fraction, got {type(x).__name__}")

    if not as_fraction and frac.denominator == 1:
        return frac.numerator
    return frac


def power_of_ten_exponent(x: Number) -> Optional[int]:
    """Return ``k`` when ``x == 10**k`` exactly, else ``None``."""
    try:
        frac = Fraction(x) if is_exact(x) else None
    except (TypeError, ValueError):
        return None
    if frac is None or frac <= 0:
        return None

    num, den = frac.numerator, frac.denominator
    if den == 1:
        value, sign = num, 1
    elif num == 1:
        value, sign = den, -1
    else:
        return None

    exp = 0
    while value % 10 == 0:
        value //= 10
        exp += 1
    if value != 1:
        return None
    return sign * exp


def integral_value(x: Number) -> Optional[int]:
    """Return ``x`` as an ``int`` when it has no fractional part."""
    if isinstance(x, bool):
        return None
    if isinstance(x, int):
        return x
    if isinstance(x, Fraction):
        return x.numerator if x.denominator == 1 else None
    if isinstance(x, float) and isfinite(x) and x.is_integer():
        return int(x)
    return None

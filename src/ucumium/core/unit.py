"""
ucumium.core.unit
=================

The unit model: a closed family of immutable unit values.

- ``BaseUnit``       an atomic dimension (metre, second, ...)
- ``AlternateUnit``  dimensionally equal to its parent but carrying its own symbol
- ``ProductUnit``    a product of units raised to integer powers; ``ONE`` is the empty product
- ``TransformedUnit`` a unit derived from a parent through a converter
- ``AnnotatedUnit``  a unit carrying a free-text annotation such as ``{RBC}``

Units combine with ``*``, ``/`` and ``**`` (or the ``multiply``/``divide``/
``pow`` methods). Multiplying or dividing by a number transforms the unit by
the matching linear converter.

Equality (``==``) is structural. ``is_equivalent`` is value equality: same
dimension and the same factor to the system unit, annotations ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from math import isclose
from typing import TYPE_CHECKING, Dict, Iterable, List, Tuple, Union

from ucumium.core.converter import (
    IDENTITY,
    Converter,
    LinearConverter,
    converter_for_factor,
)
from ucumium.core.utils import Number, is_exact

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from ucumium.units.prefixes import Prefix


class Unit:
    """Base of the closed unit family; holds the construction API."""

    __slots__ = ()

    # --- structure -------------------------------------------------------
    @property
    def system_unit(self) -> "Unit":
        raise NotImplementedError

    @property
    def is_system_unit(self) -> bool:
        return self.system_unit == self

    def converter_to_system(self) -> Converter:
        raise NotImplementedError

    def base_exponents(self) -> Dict["BaseUnit", int]:
        """Dimension signature as ``{base unit: exponent}``."""
        raise NotImplementedError

    def converter_to(self, other: "Unit") -> Converter:
        """Converter taking values in ``self`` to values in ``other``."""
        if not isinstance(other, Unit):
            raise TypeError(f"Expected a Unit, got {type(other).__name__}")
        if self.system_unit != other.system_unit:
            raise ValueError(f"Cannot convert from {self!r} to {other!r}: different system units")
        return other.converter_to_system().inverse().concatenate(self.converter_to_system())

    def is_equivalent(self, other: "Unit") -> bool:
        """Value equality: same dimension and the same conversion to the system unit."""
        if not isinstance(other, Unit):
            return False
        if self.base_exponents() != other.base_exponents():
            return False
        return _same_conversion(self.converter_to_system(), other.converter_to_system())

    # --- construction ----------------------------------------------------
    def multiply(self, other: Union["Unit", Number]) -> "Unit":
        if isinstance(other, Unit):
            return product_of(((self, 1), (other, 1)))
        return self.transform(converter_for_factor(other))

    def divide(self, other: Union["Unit", Number]) -> "Unit":
        if isinstance(other, Unit):
            return product_of(((self, 1), (other, -1)))
        return self.transform(converter_for_factor(other).inverse())

    def pow(self, n: int) -> "Unit":
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"Unit exponent must be an int, got {type(n).__name__}")
        return product_of(((self, n),))

    def inverse(self) -> "Unit":
        return self.pow(-1)

    def transform(self, converter: Converter) -> "Unit":
        if not isinstance(converter, Converter):
            raise TypeError(f"Expected a Converter, got {type(converter).__name__}")
        if converter.is_identity:
            return self
        return TransformedUnit(self, converter)

    def prefix(self, prefix: "Prefix") -> "Unit":
        return self.transform(prefix.converter)

    def annotate(self, annotation: str) -> "Unit":
        if isinstance(self, AnnotatedUnit):
            return AnnotatedUnit(self.actual, annotation)
        return AnnotatedUnit(self, annotation)

    # --- operators -------------------------------------------------------
    def __mul__(self, other: Union["Unit", Number]) -> "Unit":
        if not isinstance(other, (Unit, int, float, Fraction)) or isinstance(other, bool):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: Number) -> "Unit":
        if not isinstance(other, (int, float, Fraction)) or isinstance(other, bool):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: Union["Unit", Number]) -> "Unit":
        if not isinstance(other, (Unit, int, float, Fraction)) or isinstance(other, bool):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other: Number) -> "Unit":
        if not isinstance(other, (int, float, Fraction)) or isinstance(other, bool):
            return NotImplemented
        inv = self.inverse()
        return inv if other == 1 else inv.multiply(other)

    def __pow__(self, n: int) -> "Unit":
        return self.pow(n)


@dataclass(frozen=True, slots=True)
class BaseUnit(Unit):
    """An atomic dimension, identified by its symbol."""

    symbol: str

    @property
    def system_unit(self) -> "Unit":
        return self

    def converter_to_system(self) -> Converter:
        return IDENTITY

    def base_exponents(self) -> Dict["BaseUnit", int]:
        return {self: 1}


@dataclass(frozen=True, slots=True)
class AlternateUnit(Unit):
    """
    Same dimension as ``parent`` but displayed under its own symbol (Hz, sr).

    An alternate unit is a system unit in its own right, so it is never
    written as its parent. Dimension and value still come from ``parent``.
    """

    parent: Unit
    symbol: str

    @property
    def system_unit(self) -> "Unit":
        return self

    def converter_to_system(self) -> Converter:
        return self.parent.converter_to_system()

    def base_exponents(self) -> Dict["BaseUnit", int]:
        return self.parent.base_exponents()


@dataclass(frozen=True, slots=True, eq=False)
class ProductUnit(Unit):
    """
    Product of ``(unit, exponent)`` pairs.

    The pairs keep their encounter order (the formatter relies on it) but
    equality and hashing treat them as an unordered mapping.
    """

    factors: Tuple[Tuple[Unit, int], ...] = ()

    def __post_init__(self) -> None:
        for u, e in self.factors:
            if not isinstance(u, Unit):
                raise TypeError(f"ProductUnit factor must be a Unit, got {type(u).__name__}")
            if isinstance(e, bool) or not isinstance(e, int):
                raise TypeError("ProductUnit exponents must be ints")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProductUnit):
            return NotImplemented
        return dict(self.factors) == dict(other.factors)

    def __hash__(self) -> int:
        return hash(frozenset(self.factors))

    @property
    def system_unit(self) -> "Unit":
        return product_of((u.system_unit, e) for u, e in self.factors)

    def converter_to_system(self) -> Converter:
        factor: Number = 1
        for u, e in self.factors:
            cvt = u.converter_to_system()
            if not isinstance(cvt, LinearConverter):
                raise ValueError(
                    f"Cannot take the product of non-linear unit {u!r}; "
                    "only linear converters combine in a product."
                )
            f = cvt.factor
            if is_exact(f) and is_exact(factor):
                factor = Fraction(factor) * Fraction(f) ** e
            else:
                factor = float(factor) * float(f) ** e
        return converter_for_factor(factor)

    def base_exponents(self) -> Dict["BaseUnit", int]:
        out: Dict[BaseUnit, int] = {}
        for u, e in self.factors:
            for b, be in u.base_exponents().items():
                out[b] = out.get(b, 0) + be * e
        return {b: e for b, e in out.items() if e != 0}


@dataclass(frozen=True, slots=True)
class TransformedUnit(Unit):
    """A unit obtained from ``parent`` via ``converter`` (unit value -> parent value)."""

    parent: Unit
    converter: Converter

    @property
    def system_unit(self) -> "Unit":
        return self.parent.system_unit

    def converter_to_system(self) -> Converter:
        return self.parent.converter_to_system().concatenate(self.converter)

    def base_exponents(self) -> Dict["BaseUnit", int]:
        return self.parent.base_exponents()


@dataclass(frozen=True, slots=True)
class AnnotatedUnit(Unit):
    """``actual`` plus a free-text annotation that never affects its value."""

    actual: Unit
    annotation: str

    @property
    def system_unit(self) -> "Unit":
        return self.actual.system_unit

    def converter_to_system(self) -> Converter:
        return self.actual.converter_to_system()

    def base_exponents(self) -> Dict["BaseUnit", int]:
        return self.actual.base_exponents()


ONE = ProductUnit(())


def product_of(pairs: Iterable[Tuple[Unit, int]]) -> Unit:
    """
    Build a normalised product.

    Nested products are flattened, repeated factors merged, zero exponents
    dropped. An empty product is ``ONE``; a single factor with exponent 1 is
    returned as-is.
    """
    merged: Dict[Unit, int] = {}
    order: List[Unit] = []
    for unit, exp in pairs:
        if exp == 0:
            continue
        items = unit.factors if isinstance(unit, ProductUnit) else ((unit, 1),)
        for u, e in items:
            if u not in merged:
                merged[u] = 0
                order.append(u)
            merged[u] += e * exp

    factors = tuple((u, merged[u]) for u in order if merged[u] != 0)
    if not factors:
        return ONE
    if len(factors) == 1 and factors[0][1] == 1:
        return factors[0][0]
    return ProductUnit(factors)


def _same_conversion(a: Converter, b: Converter) -> bool:
    if isinstance(a, LinearConverter) and isinstance(b, LinearConverter):
        fa, fb = a.factor, b.factor
        if is_exact(fa) and is_exact(fb):
            return fa == fb
        return isclose(float(fa), float(fb), rel_tol=1e-12, abs_tol=0.0)
    return a == b


__all__ = [
    "Unit",
    "BaseUnit",
    "AlternateUnit",
    "ProductUnit",
    "TransformedUnit",
    "AnnotatedUnit",
    "ONE",
    "product_of",
]

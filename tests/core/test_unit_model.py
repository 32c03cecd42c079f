from dataclasses import FrozenInstanceError
from fractions import Fraction

import pytest

from ucumium.core.converter import IDENTITY, Add, Multiply, PowerOfTen, Rational
from ucumium.core.unit import (
    ONE,
    AlternateUnit,
    AnnotatedUnit,
    BaseUnit,
    ProductUnit,
    TransformedUnit,
    product_of,
)
from ucumium.units.catalog import CELSIUS, KELVIN, KILOGRAM, METER, NEWTON, SECOND
from ucumium.units.prefixes import KILO, MILLI

m = BaseUnit("m")
s = BaseUnit("s")


# -------------------------------
# Structural equality & immutability
# -------------------------------

def test_base_units_compare_by_symbol():
    assert BaseUnit("m") == m
    assert BaseUnit("m") != BaseUnit("s")
    assert hash(BaseUnit("m")) == hash(m)


def test_units_are_frozen():
    with pytest.raises(FrozenInstanceError):
        m.symbol = "meter"


def test_product_equality_ignores_order():
    assert m * s == s * m
    assert hash(m * s) == hash(s * m)
    assert (m * s).factors == ((m, 1), (s, 1))
    assert (s * m).factors == ((s, 1), (m, 1))


# -------------------------------
# Products
# -------------------------------

def test_powers_and_products():
    assert m * m == ProductUnit(((m, 2),))
    assert m ** 2 == m * m
    assert m ** 0 == ONE
    assert m / m == ONE
    assert (m * s) / s == m


def test_product_of_flattens_and_merges():
    assert product_of([(m * s, 2), (s, -2)]) == ProductUnit(((m, 2),))
    assert product_of([]) is ONE
    assert product_of([(m, 1)]) is m


def test_inverse_and_reciprocal_operator():
    assert m.inverse() == ProductUnit(((m, -1),))
    assert 1 / m == m.inverse()
    assert (1 / (m / s)) == s / m


def test_pow_requires_int():
    with pytest.raises(TypeError):
        m ** 1.5
    with pytest.raises(TypeError):
        m.pow(True)


def test_product_rejects_bad_factors():
    with pytest.raises(TypeError):
        ProductUnit((("m", 1),))
    with pytest.raises(TypeError):
        ProductUnit(((m, 1.0),))


# -------------------------------
# Transforms
# -------------------------------

def test_multiply_by_number_transforms():
    assert m.multiply(1000) == TransformedUnit(m, PowerOfTen(3))
    assert 1000 * m == m * 1000
    assert m.divide(100) == TransformedUnit(m, PowerOfTen(-2))
    assert (m / 3).converter == Rational(1, 3)
    assert isinstance((m * 2.5).converter, Multiply)


def test_transform_with_identity_returns_unit():
    assert m.transform(IDENTITY) is m
    assert m.multiply(1) is m


def test_transform_requires_converter():
    with pytest.raises(TypeError):
        m.transform(1000)


def test_prefix_applies_power_of_ten():
    assert m.prefix(KILO) == TransformedUnit(m, Multiply(1000))
    assert m.prefix(MILLI) == m.divide(1000)


# -------------------------------
# System units & conversion
# -------------------------------

def test_system_unit_follows_parents():
    km = METER.prefix(KILO)
    assert km.system_unit == METER
    assert not km.is_system_unit
    assert METER.is_system_unit
    assert km.prefix(MILLI).system_unit == METER


def test_alternate_unit_is_its_own_system_unit():
    hertz = AlternateUnit(ONE / SECOND, "Hz")
    assert hertz.system_unit is hertz
    assert hertz.is_system_unit
    assert hertz.base_exponents() == {SECOND: -1}
    assert hertz.is_equivalent(SECOND ** -1)
    assert hertz.prefix(KILO).system_unit is hertz
    rad = AlternateUnit(ONE, "rad")
    assert rad.system_unit is rad
    assert rad.base_exponents() == {}


def test_alternate_unit_keeps_the_value_of_its_parent():
    fast = AlternateUnit(METER.prefix(KILO) / SECOND, "fast")
    assert fast.converter_to_system() == PowerOfTen(3)
    assert fast.prefix(KILO).converter_to(fast) == PowerOfTen(3)


def test_converter_to_system():
    km = METER.prefix(KILO)
    assert km.converter_to_system() == PowerOfTen(3)
    assert (km / SECOND).converter_to_system() == PowerOfTen(3)
    assert (km ** 2).converter_to_system() == PowerOfTen(6)
    assert METER.converter_to_system() is IDENTITY


def test_converter_to_other_unit():
    km = METER.prefix(KILO)
    mm = METER.prefix(MILLI)
    assert km.converter_to(METER) == PowerOfTen(3)
    assert mm.converter_to(km) == PowerOfTen(-6)
    with pytest.raises(ValueError):
        km.converter_to(SECOND)
    with pytest.raises(TypeError):
        km.converter_to("m")


def test_product_with_offset_unit_has_no_linear_conversion():
    with pytest.raises(ValueError):
        (CELSIUS * METER).converter_to_system()


def test_base_exponents():
    assert NEWTON.base_exponents() == {METER: 1, KILOGRAM: 1, SECOND: -2}
    assert (METER / METER).base_exponents() == {}


def test_is_equivalent_is_value_equality():
    km = METER.prefix(KILO)
    assert km.is_equivalent(METER.multiply(1000.0))
    assert km.is_equivalent(METER * Fraction(1000))
    assert not km.is_equivalent(METER)
    assert not km.is_equivalent(SECOND.prefix(KILO))
    assert CELSIUS.is_equivalent(KELVIN.transform(Add(Fraction(27315, 100))))
    assert not METER.is_equivalent("m")


# -------------------------------
# Annotations
# -------------------------------

def test_annotate_wraps_and_replaces():
    a = m.annotate("x")
    assert a == AnnotatedUnit(m, "x")
    assert a.annotate("y") == AnnotatedUnit(m, "y")
    assert a.is_equivalent(m)
    assert a != m
    assert a.system_unit == m

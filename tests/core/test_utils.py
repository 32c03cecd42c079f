from fractions import Fraction

import pytest

from ucumium.core.utils import integral_value, is_exact, power_of_ten_exponent, rationalize


def test_is_exact():
    assert is_exact(3)
    assert is_exact(Fraction(1, 3))
    assert not is_exact(0.5)
    assert not is_exact(True)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.001, Fraction(1, 1000)),
        (1e-30, Fraction(1, 10**30)),
        (1e30, Fraction(10**30)),
        (2.5, Fraction(5, 2)),
        (7, Fraction(7)),
        (Fraction(3, 9), Fraction(1, 3)),
    ],
)
def test_rationalize_uses_shortest_decimal(value, expected):
    assert rationalize(value) == expected


def test_rationalize_can_return_int():
    assert rationalize(1000.0, as_fraction=False) == 1000
    assert isinstance(rationalize(1000.0, as_fraction=False), int)
    assert rationalize(0.5, as_fraction=False) == Fraction(1, 2)


@pytest.mark.parametrize("bad", [float("inf"), float("nan")])
def test_rationalize_rejects_non_finite(bad):
    with pytest.raises(ValueError):
        rationalize(bad)


def test_rationalize_rejects_non_numbers():
    with pytest.raises(TypeError):
        rationalize(True)
    with pytest.raises(TypeError):
        rationalize("1")


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, 0),
        (1000, 3),
        (Fraction(1, 100), -2),
        (10**30, 30),
        (Fraction(1, 10**24), -24),
        (20, None),
        (Fraction(3, 1000), None),
        (0, None),
        (-10, None),
        (0.001, None),  # floats are never treated as exact here
    ],
)
def test_power_of_ten_exponent(value, expected):
    assert power_of_ten_exponent(value) == expected


def test_integral_value():
    assert integral_value(12) == 12
    assert integral_value(Fraction(12, 4)) == 3
    assert integral_value(Fraction(1, 4)) is None
    assert integral_value(1e3) == 1000
    assert integral_value(2.5) is None
    assert integral_value(False) is None

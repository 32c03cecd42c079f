# tests/format/test_term_parser.py
from fractions import Fraction

import pytest

from ucumium.core.unit import ONE, AnnotatedUnit, TransformedUnit
from ucumium.core.converter import Multiply, Rational
from ucumium.errors import LexError, ParseError
from ucumium.format.parser import _UnitTermParser, _compile_unit_term, parse_unit
from ucumium.units.catalog import (
    CANDELA,
    DAY,
    GRAM,
    KELVIN,
    KILOGRAM,
    LITER,
    METER,
    PASCAL,
    SECOND,
    TEN,
)
from ucumium.units.prefixes import DEKA, KILO, MILLI


# --------------------------
# Parsing-only unit tests
# --------------------------

def test_parse_simple_atom():
    assert _UnitTermParser("m").parse() == ("atom", "m", 0)


def test_parse_exponent():
    assert _UnitTermParser("m2").parse() == ("pow", ("atom", "m", 0), 2)
    assert _UnitTermParser("s-2").parse() == ("pow", ("atom", "s", 0), -2)
    assert _UnitTermParser("m+3").parse() == ("pow", ("atom", "m", 0), 3)


def test_parse_is_left_associative():
    plan = _UnitTermParser("m/s/K").parse()
    assert plan == ("div", ("div", ("atom", "m", 0), ("atom", "s", 2)), ("atom", "K", 4))


def test_parse_mixed_operators_left_to_right():
    plan = _UnitTermParser("m/s.K").parse()
    assert plan[0] == "mul" and plan[1][0] == "div"


def test_parse_parentheses_group():
    plan = _UnitTermParser("m/(s.K)").parse()
    assert plan == ("div", ("atom", "m", 0), ("mul", ("atom", "s", 3), ("atom", "K", 5)))


def test_parse_leading_solidus():
    assert _UnitTermParser("/s").parse() == ("inverse", ("atom", "s", 1), None)


def test_parse_factor():
    assert _UnitTermParser("1000").parse() == ("factor", 1000, 0)


@pytest.mark.parametrize("text", ["m{x}2", "m2{x}"])
def test_parse_annotation_before_or_after_exponent(text):
    assert _UnitTermParser(text).parse() == ("annotate", ("pow", ("atom", "m", 0), 2), "x")


def test_parse_bare_annotation_is_annotated_one():
    assert _UnitTermParser("{RBC}").parse() == ("annotate", ("factor", 1, 0), "RBC")


def test_parse_annotated_group():
    plan = _UnitTermParser("(m.s){x}").parse()
    assert plan[0] == "annotate" and plan[2] == "x"


@pytest.mark.parametrize(
    "text, offset",
    [
        ("(m", 2),        # unmatched '('
        ("m)", 1),        # unmatched ')'
        ("m.", 2),        # dangling operator
        ("m-", 2),        # sign without digits
        ("m{a}{b}", 4),   # two annotations
        (".m", 0),
        ("m..s", 2),
        ("()", 1),
    ],
)
def test_syntax_errors_carry_offset(text, offset):
    with pytest.raises(ParseError) as excinfo:
        _UnitTermParser(text).parse()
    assert excinfo.value.offset == offset


def test_lex_errors_surface_from_the_parser():
    with pytest.raises(LexError):
        _UnitTermParser("m s").parse()


def test_compiled_plans_are_cached():
    _compile_unit_term.cache_clear()
    _compile_unit_term("kg.m/s2")
    _compile_unit_term("kg.m/s2")
    info = _compile_unit_term.cache_info()
    assert info.hits == 1 and info.misses == 1


# --------------------------
# Evaluation using the case-sensitive symbol map
# --------------------------

def test_eval_prefixed_atom(cs_symbols):
    assert parse_unit("km", cs_symbols) == TransformedUnit(METER, Multiply(1000))


def test_eval_full_symbol_wins_over_prefix(cs_symbols):
    assert parse_unit("cd", cs_symbols) == CANDELA     # not centi-day
    assert parse_unit("Pa", cs_symbols) == PASCAL      # not peta-year


def test_eval_longest_prefix(cs_symbols):
    assert parse_unit("dam", cs_symbols) == METER.prefix(DEKA)


def test_eval_kilogram_is_prefixed_gram(cs_symbols):
    kg = parse_unit("kg", cs_symbols)
    assert kg == GRAM.prefix(KILO)
    assert kg.is_equivalent(KILOGRAM)


def test_eval_product(cs_symbols):
    assert parse_unit("kg.m/s2", cs_symbols) == GRAM.prefix(KILO) * METER / SECOND ** 2
    assert parse_unit("m/s/K", cs_symbols) == METER / SECOND / KELVIN


def test_eval_factor_and_power_of_ten(cs_symbols):
    assert parse_unit("1000", cs_symbols) == ONE.multiply(1000)
    assert parse_unit("10*3", cs_symbols) == TEN ** 3
    assert parse_unit("10*3", cs_symbols).is_equivalent(ONE.multiply(1000))
    assert parse_unit("1", cs_symbols) == ONE


def test_eval_annotations(cs_symbols):
    assert parse_unit("L{RBC}", cs_symbols) == AnnotatedUnit(LITER, "RBC")
    assert parse_unit("{RBC}", cs_symbols) == AnnotatedUnit(ONE, "RBC")


def test_eval_inverse(cs_symbols):
    assert parse_unit("/s", cs_symbols) == SECOND ** -1
    assert parse_unit("1/K", cs_symbols) == KELVIN ** -1


def test_eval_empty_is_one(cs_symbols):
    assert parse_unit("", cs_symbols) is ONE


def test_eval_unknown_symbol_offset(cs_symbols):
    with pytest.raises(ParseError) as excinfo:
        parse_unit("m/foo", cs_symbols)
    assert excinfo.value.offset == 2
    assert "foo" in str(excinfo.value)


def test_eval_offsets_are_shifted(cs_symbols):
    with pytest.raises(ParseError) as excinfo:
        parse_unit("m/foo", cs_symbols, offset=5)
    assert excinfo.value.offset == 7
    with pytest.raises(LexError) as excinfo:
        parse_unit("m s", cs_symbols, offset=10)
    assert excinfo.value.offset == 11


def test_eval_zero_factor_rejected(cs_symbols):
    with pytest.raises(ParseError) as excinfo:
        parse_unit("m.0", cs_symbols)
    assert excinfo.value.offset == 2


@pytest.mark.regression(reason="Numeric operands became product factors: (m/s).7 was read back as m.7/s")
def test_eval_numbers_scale_the_other_operand(cs_symbols):
    assert parse_unit("(m/s).7", cs_symbols) == TransformedUnit(METER / SECOND, Rational(7))
    assert parse_unit("4.m", cs_symbols) == METER.multiply(4)
    assert parse_unit("m/4", cs_symbols) == METER.divide(4)
    assert parse_unit("/7", cs_symbols) == ONE.divide(7)
    assert parse_unit("3.3", cs_symbols) == ONE.multiply(9)
    assert parse_unit("3/3", cs_symbols) is ONE


def test_eval_successive_numbers_fold_into_one_step(cs_symbols):
    assert parse_unit("m/3/3", cs_symbols) == METER.divide(9)
    assert parse_unit("(m/s).3/4", cs_symbols) == TransformedUnit(METER / SECOND, Rational(3, 4))
    assert parse_unit("g.1000/3", cs_symbols) == GRAM.multiply(Fraction(1000, 3))
    assert parse_unit("m.3/3", cs_symbols) == METER


def test_eval_numbers_never_fold_into_a_tabled_unit(cs_symbols):
    # d is itself h.24
    assert parse_unit("d/100", cs_symbols) == DAY.divide(100)


def test_eval_prefix_needs_known_remainder(cs_symbols):
    with pytest.raises(ParseError):
        parse_unit("kfoo", cs_symbols)
    with pytest.raises(ParseError):
        parse_unit("k", cs_symbols)
    assert parse_unit("mm", cs_symbols) == METER.prefix(MILLI)

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Optional, Tuple, Union

from ucumium.core.converter import converter_for_factor
from ucumium.core.unit import ONE, TransformedUnit, Unit
from ucumium.errors import ParseError, _LocatedError
from ucumium.format.lexer import Token, TokenKind, tokenize

if TYPE_CHECKING:
    from ucumium.units.symbols import SymbolMap

# --- Plan node types ------------------------------------------------
# ("atom", <str>, <offset>)
# ("factor", <int>, <offset>)
# ("pow", <plan>, <int>)
# ("mul", <plan>, <plan>)
# ("div", <plan>, <plan>)
# ("inverse", <plan>, None)
# ("annotate", <plan>, <str>)
Plan = Tuple[str, Union[str, int, "Plan"], Union[int, str, "Plan", None]]


# ---------------- Parser that builds a PLAN (no symbol lookups!) ----------------
class _UnitTermParser:
    """
    Grammar (UCUM, evaluated strictly left to right):
      term       := component (('.' | '/') component)*
      component  := '(' term ')' [ANNOTATION]
                  | '/' component
                  | ANNOTATION
                  | FACTOR
                  | ATOM [ANNOTATION] [exponent] [ANNOTATION]   (at most one annotation)
      exponent   := [SIGN] FACTOR
    """

    def __init__(self, text: str):
        self.tokens = tokenize(text)
        self.i = 0

    def parse(self) -> Plan:
        plan = self._parse_term()
        tok = self._peek()
        if tok.kind is TokenKind.RPAREN:
            raise ParseError("Unmatched ')'", tok.start)
        if tok.kind is not TokenKind.EOF:
            raise ParseError(f"Unexpected {tok.describe()}", tok.start)
        return plan

    # term := component (('.' | '/') component)*
    def _parse_term(self) -> Plan:
        left = self._parse_component()
        while True:
            tok = self._peek()
            if tok.kind is TokenKind.DOT:
                self._advance()
                left = ("mul", left, self._parse_component())
            elif tok.kind is TokenKind.SOLIDUS:
                self._advance()
                left = ("div", left, self._parse_component())
            else:
                return left

    def _parse_component(self) -> Plan:
        tok = self._advance()
        kind = tok.kind
        if kind is TokenKind.LPAREN:
            inner = self._parse_term()
            close = self._peek()
            if close.kind is not TokenKind.RPAREN:
                raise ParseError(f"Expected ')' to close '(' at {tok.start}, got {close.describe()}", close.start)
            self._advance()
            return self._annotated(inner)
        if kind is TokenKind.SOLIDUS:
            return ("inverse", self._parse_component(), None)
        if kind is TokenKind.ANNOTATION:
            return ("annotate", ("factor", 1, tok.start), tok.text)
        if kind is TokenKind.FACTOR:
            return ("factor", int(tok.text), tok.start)
        if kind is TokenKind.ATOM:
            return self._parse_annotatable(tok)
        if kind is TokenKind.EOF:
            raise ParseError("Unexpected end of input", tok.start)
        raise ParseError(f"Unexpected {tok.describe()}", tok.start)

    # ATOM [ANNOTATION] [exponent] [ANNOTATION]
    def _parse_annotatable(self, atom: Token) -> Plan:
        plan: Plan = ("atom", atom.text, atom.start)
        annotation = self._annotation()
        exponent = self._exponent()
        if exponent is not None:
            plan = ("pow", plan, exponent)
        if annotation is None:
            annotation = self._annotation()
        if annotation is not None:
            plan = ("annotate", plan, annotation)
        return plan

    def _annotated(self, plan: Plan) -> Plan:
        annotation = self._annotation()
        if annotation is None:
            return plan
        return ("annotate", plan, annotation)

    # ---- token helpers ----
    def _annotation(self) -> Optional[str]:
        if self._peek().kind is TokenKind.ANNOTATION:
            return self._advance().text
        return None

    def _exponent(self) -> Optional[int]:
        tok = self._peek()
        if tok.kind is TokenKind.SIGN:
            self._advance()
            digits = self._peek()
            if digits.kind is not TokenKind.FACTOR:
                raise ParseError(f"Expected exponent digits after {tok.text!r}, got {digits.describe()}", digits.start)
            self._advance()
            return int(tok.text + digits.text)
        if tok.kind is TokenKind.FACTOR:
            self._advance()
            return int(tok.text)
        return None

    def _peek(self) -> Token:
        return self.tokens[self.i]

    def _advance(self) -> Token:
        tok = self.tokens[self.i]
        if tok.kind is not TokenKind.EOF:
            self.i += 1
        return tok


# ---------------- Evaluation of a plan against a given symbol map ----------------
def _eval_plan(plan: Plan, symbols: "SymbolMap") -> Unit:
    kind = plan[0]
    if kind == "atom":
        return _resolve_atom(plan[1], plan[2], symbols)  # type: ignore[arg-type]
    elif kind == "factor":
        return ONE.multiply(_factor_value(plan))
    elif kind == "pow":
        return _eval_plan(plan[1], symbols).pow(plan[2])  # type: ignore[arg-type]
    elif kind in ("mul", "div"):
        return _eval_product(kind, plan[1], plan[2], symbols)  # type: ignore[arg-type]
    elif kind == "inverse":
        operand = plan[1]
        if operand[0] == "factor":  # type: ignore[index]
            return ONE.divide(_factor_value(operand))  # type: ignore[arg-type]
        return _eval_plan(operand, symbols).inverse()  # type: ignore[arg-type]
    elif kind == "annotate":
        return _eval_plan(plan[1], symbols).annotate(plan[2])  # type: ignore[arg-type]
    else:
        raise RuntimeError(f"Invalid plan node: {plan!r}")


def _factor_value(plan: Plan) -> int:
    n = plan[1]
    if n == 0:
        raise ParseError("Factor must be non-zero", plan[2])  # type: ignore[arg-type]
    return n  # type: ignore[return-value]


def _scales(plan: Plan) -> bool:
    # "." or "/" with a number other than 1 on either side
    if plan[0] not in ("mul", "div"):
        return False
    return any(p[0] == "factor" and p[1] != 1 for p in (plan[1], plan[2]))  # type: ignore[index]


def _scale(unit: Unit, n: int, divide: bool, merge: bool = False) -> Unit:
    """
    ``unit`` multiplied (or divided) by ``n``.

    With ``merge`` the scaling already applied to ``unit`` by the previous
    numeric operand is folded into this one, so ``m.3/4`` is a single
    ``3/4`` step on the metre.
    """
    step = converter_for_factor(n)
    if divide:
        step = step.inverse()
    if merge and isinstance(unit, TransformedUnit) and unit.converter.is_linear:
        return unit.parent.transform(step.concatenate(unit.converter))
    return unit.transform(step)


def _eval_product(kind: str, left_plan: Plan, right_plan: Plan, symbols: "SymbolMap") -> Unit:
    """
    Combine two operands of "." or "/".

    A numeric operand scales the other side through a converter, the way
    ``unit.multiply(n)`` does, instead of becoming a factor of a product.
    """
    divide = kind == "div"
    if left_plan[0] == "factor":
        n = _factor_value(left_plan)
        if right_plan[0] == "factor":
            return _scale(ONE.multiply(n), _factor_value(right_plan), divide, merge=True)
        right = _eval_plan(right_plan, symbols)
        if divide:
            right = right.inverse()
        return right if n == 1 else _scale(right, n, False)
    left = _eval_plan(left_plan, symbols)
    if right_plan[0] == "factor":
        return _scale(left, _factor_value(right_plan), divide, merge=_scales(left_plan))
    right = _eval_plan(right_plan, symbols)
    return left.divide(right) if divide else left.multiply(right)


def _resolve_atom(symbol: str, offset: int, symbols: "SymbolMap") -> Unit:
    """Whole-symbol match first, then the longest prefix leaving a known unit."""
    unit = symbols.unit_for_symbol(symbol)
    if unit is not None:
        return unit
    for prefix_symbol, prefix in symbols.prefixes_for(symbol):
        rest = symbol[len(prefix_symbol):]
        if not rest:
            continue
        base = symbols.unit_for_symbol(rest)
        if base is not None:
            return base.prefix(prefix)
    raise ParseError(f"Unknown unit symbol {symbol!r}", offset)


# ---------------- Public API with caching-safe compilation ----------------
# Cache the *compiled plan* only. Safe across symbol maps because there's no bound objects inside.
@lru_cache(maxsize=4096)
def _compile_unit_term(text: str) -> Plan:
    return _UnitTermParser(text).parse()


def parse_unit(text: str, symbols: "SymbolMap", *, offset: int = 0) -> Unit:
    """
    Parse a UCUM term such as ``'kg.m/(s2.K)'`` into a unit.

    Caching-safety:
      * The compiled syntax plan is cached keyed by ``text`` only.
      * Evaluation binds symbols to units from the *provided* ``symbols`` at call time.

    ``offset`` is the position of ``text`` inside a larger input; it is added
    to the offset carried by any ``ParseError``/``LexError`` raised.

    Empty text is the dimensionless unit ``ONE``.
    """
    if not text:
        return ONE
    try:
        plan = _compile_unit_term(text)
        return _eval_plan(plan, symbols)
    except _LocatedError as e:
        if offset:
            raise e.shifted(offset) from None
        raise


__all__ = ["parse_unit"]

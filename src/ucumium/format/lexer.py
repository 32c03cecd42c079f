"""
ucumium.format.lexer
====================

Tokenizer for UCUM unit terms.

Token kinds
-----------
ATOM        unit symbol, possibly prefixed, possibly containing ``[...]`` groups
FACTOR      run of decimal digits (a numeric factor or an exponent)
SIGN        ``+`` or ``-`` in front of an exponent
DOT         ``.`` multiplication
SOLIDUS     ``/`` division
LPAREN      ``(``
RPAREN      ``)``
ANNOTATION  ``{...}``; the token text is the content between the braces
EOF         end of input

An atom never ends in a digit: trailing digits are split off as the exponent
(``m2`` is ``ATOM(m) FACTOR(2)``, ``10*3`` is ``ATOM(10*) FACTOR(3)``). A run
made only of digits is a ``FACTOR``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from ucumium.errors import LexError


class TokenKind(Enum):
    ATOM = "atom"
    FACTOR = "factor"
    SIGN = "sign"
    DOT = "."
    SOLIDUS = "/"
    LPAREN = "("
    RPAREN = ")"
    ANNOTATION = "annotation"
    EOF = "end of input"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    start: int
    end: int

    def describe(self) -> str:
        if self.kind is TokenKind.EOF:
            return "end of input"
        if self.kind is TokenKind.ANNOTATION:
            return f"annotation {{{self.text}}}"
        return repr(self.text)


_DIGITS = frozenset("0123456789")
_SINGLE = {
    ".": TokenKind.DOT,
    "/": TokenKind.SOLIDUS,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "+": TokenKind.SIGN,
    "-": TokenKind.SIGN,
}
# Printable ASCII minus operators, brackets, braces and the double quote
_ATOM_CHARS = frozenset(chr(c) for c in range(0x21, 0x7F)) - frozenset('"()+-./[]{}')
# Anything printable may appear inside [...] and {...} except the delimiters
_GROUP_CHARS = frozenset(chr(c) for c in range(0x20, 0x7F)) - frozenset("[]{}")


def tokenize(text: str) -> Tuple[Token, ...]:
    """Split ``text`` into tokens; the last token is always ``EOF``.

    Raises ``LexError`` at the offset of the first character that cannot be
    tokenized, or of the opening bracket of an unterminated group.
    """
    tokens: List[Token] = []
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        kind = _SINGLE.get(ch)
        if kind is not None:
            tokens.append(Token(kind, ch, i, i + 1))
            i += 1
        elif ch == "{":
            j = _scan_group(text, i, "}")
            tokens.append(Token(TokenKind.ANNOTATION, text[i + 1:j], i, j + 1))
            i = j + 1
        elif ch in _ATOM_CHARS or ch == "[":
            j = _scan_run(text, i)
            tokens.extend(_split_run(text[i:j], i))
            i = j
        else:
            raise LexError(f"Illegal character {ch!r}", i)
    tokens.append(Token(TokenKind.EOF, "", n, n))
    return tuple(tokens)


def _scan_group(text: str, start: int, close: str) -> int:
    """Return the index of the ``close`` delimiter matching ``text[start]``."""
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == close:
            return i
        if ch not in _GROUP_CHARS:
            raise LexError(f"Illegal character {ch!r} inside {text[start]!r} group", i)
        i += 1
    raise LexError(f"Unterminated {text[start]!r}", start)


def _scan_run(text: str, start: int) -> int:
    i = start
    while i < len(text):
        ch = text[i]
        if ch == "[":
            i = _scan_group(text, i, "]") + 1
        elif ch in _ATOM_CHARS:
            i += 1
        elif ch == "]":
            raise LexError("Unmatched ']'", i)
        else:
            break
    return i


def _split_run(run: str, offset: int) -> List[Token]:
    end = offset + len(run)
    k = len(run)
    while k > 0 and run[k - 1] in _DIGITS:
        k -= 1
    if k == 0:
        return [Token(TokenKind.FACTOR, run, offset, end)]
    if k == len(run):
        return [Token(TokenKind.ATOM, run, offset, end)]
    return [
        Token(TokenKind.ATOM, run[:k], offset, offset + k),
        Token(TokenKind.FACTOR, run[k:], offset + k, end),
    ]


__all__ = ["TokenKind", "Token", "tokenize"]

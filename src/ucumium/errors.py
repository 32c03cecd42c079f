"""
ucumium.errors
==============

Error kinds raised by the UCUM codec.

All of them derive from :class:`UCUMError`. Formatting and syntax errors are
also ``ValueError`` subclasses and the print-only parser raises a
``NotImplementedError`` subclass, so callers written against the builtin
exceptions keep working.
"""

from __future__ import annotations

from typing import TypeVar

_E = TypeVar("_E", bound="_LocatedError")


class UCUMError(Exception):
    """Base class of every codec error."""


class FormatError(UCUMError, ValueError):
    """A unit cannot be rendered in the requested UCUM variant."""


class _LocatedError(UCUMError, ValueError):
    """An error tied to an absolute character offset in the parsed text."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"{message} (at offset {offset})")
        self.message = message
        self.offset = offset

    def shifted(self: _E, delta: int) -> _E:
        """Same error with its offset moved by ``delta``."""
        return type(self)(self.message, self.offset + delta)


class ParseError(_LocatedError):
    """The token sequence is not a valid UCUM term (unknown symbol, bad exponent, ...)."""


class LexError(_LocatedError):
    """The text contains a character that cannot start or continue any token."""


class UnsupportedOperation(UCUMError, NotImplementedError):
    """The operation is not available for this variant (parsing PRINT output)."""


__all__ = [
    "UCUMError",
    "FormatError",
    "ParseError",
    "LexError",
    "UnsupportedOperation",
]

"""
Ucumium: a codec between Python unit values and UCUM unit expressions.

Ucumium formats units built with its small algebraic unit model into the
case-sensitive, case-insensitive and print variants of the Unified Code for
Units of Measure, and parses the two code variants back into units.
This module exposes a minimal, stable public API. The default formats (and
the symbol tables behind them) are created lazily on first access.
"""

from importlib import metadata as _metadata
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from ucumium.format.ucum_format import UCUMFormat


__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("ucumium")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

_DEFAULT_FORMATS = {
    "CS": "case_sensitive",
    "CI": "case_insensitive",
    "PRINT": "print",
}


def _get_default_format(variant: str) -> "UCUMFormat":
    # Import here to avoid building symbol tables at import time.
    from ucumium.format.ucum_format import UCUMFormat  # local import
    return UCUMFormat.get_instance(variant)


def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. ``ucumium.CS``, ``ucumium.CI`` and ``ucumium.PRINT``
    are the shared default formats of each UCUM variant.
    """
    if name in _DEFAULT_FORMATS:
        return _get_default_format(_DEFAULT_FORMATS[name])
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_DEFAULT_FORMATS))


# Public names exposed by the package. Keep this minimal and stable.
__all__ = ["__version__", "__license__", "CS", "CI", "PRINT"]

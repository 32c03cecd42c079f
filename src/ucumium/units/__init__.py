from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from ucumium.units.symbols import SymbolMap
# Lazy access helpers -------------------------------------------------------

_DEFAULT_TABLES = {
    "CASE_SENSITIVE_SYMBOLS": "case_sensitive",
    "CASE_INSENSITIVE_SYMBOLS": "case_insensitive",
    "PRINT_SYMBOLS": "print",
}


def _get_default_symbol_map(variant: str) -> "SymbolMap":
    # Import here to avoid import-time side-effects / circular imports.
    from ucumium.units.symbols import SymbolMap  # local import
    return SymbolMap.for_variant(variant)


def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. Accessing e.g. 'CASE_SENSITIVE_SYMBOLS' builds the
    default symbol map of that variant on first use.
    """
    if name in _DEFAULT_TABLES:
        return _get_default_symbol_map(_DEFAULT_TABLES[name])
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + list(_DEFAULT_TABLES))

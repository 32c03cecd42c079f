import pytest

import ucumium.units.symbols as symmod
from ucumium.units.symbols import SymbolMap, Variant, _bootstrap_symbol_map


@pytest.fixture()
def fresh_table():
    return _bootstrap_symbol_map(Variant.CASE_SENSITIVE)


def test__get_default_symbol_map_uses_shared_table(monkeypatch, fresh_table):
    # Patch the cached default and verify the helper returns it
    monkeypatch.setattr(symmod, "_default_symbol_map", lambda variant: fresh_table, raising=True)

    import ucumium.units as units
    get_default = getattr(units, "_get_default_symbol_map")

    assert get_default("cs") is fresh_table


def test_lazy_tables_bind_to_default_maps():
    from ucumium.units import CASE_INSENSITIVE_SYMBOLS, CASE_SENSITIVE_SYMBOLS, PRINT_SYMBOLS

    assert CASE_SENSITIVE_SYMBOLS is SymbolMap.for_variant(Variant.CASE_SENSITIVE)
    assert CASE_INSENSITIVE_SYMBOLS is SymbolMap.for_variant(Variant.CASE_INSENSITIVE)
    assert PRINT_SYMBOLS is SymbolMap.for_variant(Variant.PRINT)


def test_bootstrap_builds_an_independent_table(fresh_table):
    assert fresh_table is not SymbolMap.for_variant(Variant.CASE_SENSITIVE)
    assert dict(fresh_table.units) == dict(SymbolMap.for_variant(Variant.CASE_SENSITIVE).units)


def test_unknown_module_attribute_raises_attributeerror():
    import ucumium.units as units
    with pytest.raises(AttributeError):
        _ = getattr(units, "definitely_not_a_public_attr")


def test_dir_includes_lazy_tables():
    import ucumium.units as units
    names = dir(units)
    assert "CASE_SENSITIVE_SYMBOLS" in names
    # Should be sorted for better discoverability
    assert names == sorted(names)

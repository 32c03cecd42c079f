# tests/conftest.py
import pytest

from ucumium.format.ucum_format import UCUMFormat
from ucumium.units.symbols import SymbolMap, Variant


@pytest.fixture(scope="session")
def cs():
    return UCUMFormat.get_instance(Variant.CASE_SENSITIVE)


@pytest.fixture(scope="session")
def ci():
    return UCUMFormat.get_instance(Variant.CASE_INSENSITIVE)


@pytest.fixture(scope="session")
def pr():
    return UCUMFormat.get_instance(Variant.PRINT)


@pytest.fixture(scope="session")
def cs_symbols():
    return SymbolMap.for_variant(Variant.CASE_SENSITIVE)

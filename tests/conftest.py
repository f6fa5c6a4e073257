# tests/conftest.py
import pytest

from escrituras.aliases import AliasResolver
from escrituras.catalog import load_catalog
from escrituras.passage import PassageExpander
from escrituras.reference_parser import ReferenceParser
from escrituras.service import ScriptureService


@pytest.fixture(scope="session")
def catalog():
    return load_catalog()


@pytest.fixture(scope="session")
def resolver(catalog):
    return AliasResolver(catalog)


@pytest.fixture(scope="session")
def parser(resolver):
    return ReferenceParser(resolver)


@pytest.fixture(scope="session")
def expander(parser):
    return PassageExpander(parser)


@pytest.fixture(scope="session")
def service(catalog):
    return ScriptureService(catalog)

# tests/test_identifiers.py
"""
Tests for identifiers.py - fixed-format vector store keys.
"""

import re

import pytest

from escrituras import identifiers

FORMAT_RE = re.compile(r"^[A-Za-z]+-[a-z0-9-]+-\d{2}-\d{3}$")


@pytest.mark.parametrize("citation, expected", [
    ("Génesis 1:1", "AT-genesis-01-001"),
    ("Génesis 6:10", "AT-genesis-06-010"),
    ("1 Nefi 2:15", "BM-1-nefi-02-015"),
    ("Mosíah 5:7", "BM-mosiah-05-007"),
    ("Juan 3:16", "NT-juan-03-016"),
    ("Moisés 1:39", "PGP-moises-01-039"),
    ("DyC 76:22", "DyC-secciones-76-022"),
    ("Declaración Oficial 1", "DyC-declaraciones-oficiales-01-001"),
    ("Palabras de Mormón 1:7", "BM-palabras-de-mormon-01-007"),
    ("Salmos 23", "AT-salmos-23-001"),
    ("Salmos 119:105", "AT-salmos-119-105"),
])
def test_build(parser, citation, expected):
    assert identifiers.build(parser.parse(citation)) == expected


def test_build_ignores_range_end(parser):
    assert identifiers.build(parser.parse("Génesis 1:1-3")) == "AT-genesis-01-001"


def test_every_book_renders_fixed_format(catalog, parser):
    for entry in catalog:
        ident = identifiers.build(parser.parse(f"{entry.name} 12:34"))
        assert FORMAT_RE.match(ident), ident
        assert identifiers.is_identifier(ident)


def test_build_all(parser):
    assert identifiers.build_all(parser.parse("Alma 32:21-23")) == [
        "BM-alma-32-021",
        "BM-alma-32-022",
        "BM-alma-32-023",
    ]


def test_build_compact_keeps_section_ranges(parser):
    assert identifiers.build_compact(parser.parse("DyC 76:22-24")) == "DyC-secciones-76-022-024"
    assert identifiers.build_compact(parser.parse("DyC 76:22")) == "DyC-secciones-76-022"
    # Only sections carry the suffix
    assert identifiers.build_compact(parser.parse("Juan 1:1-3")) == "NT-juan-01-001"


def test_is_identifier():
    assert identifiers.is_identifier("AT-genesis-01-001")
    assert not identifiers.is_identifier("genesis-01-001")
    assert not identifiers.is_identifier("")

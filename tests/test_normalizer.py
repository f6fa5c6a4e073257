# tests/test_normalizer.py
"""
Tests for normalizer.py - text canonicalization used for book matching.
"""

import pytest

from escrituras.normalizer import compact, fold, normalize, slugify


def test_case_and_accent_insensitive():
    assert normalize("Génesis") == normalize("genesis") == normalize("GÉNESIS") == "genesis"


@pytest.mark.parametrize("text", [
    "Génesis",
    "  José   Smith—Historia ",
    "1ra. de Juan",
    "D&C",
    "Mosíah 5:7",
    "",
    "ÑANDÚ ¿qué?",
    "Straße_ß",
])
def test_normalize_is_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once


def test_punctuation_is_removed_and_spaces_collapse():
    assert normalize("José Smith—Historia") == "jose smithhistoria"
    assert normalize("JS—H") == "jsh"
    assert normalize("D&C") == "dc"
    assert normalize("Gén.") == "gen"
    assert normalize("  1   Nefi  ") == "1 nefi"
    assert normalize("snake_case") == "snakecase"


def test_letters_without_decomposition_are_kept():
    assert normalize("Straße") == "straße"
    assert normalize("Æsir") == "æsir"


def test_fold_keeps_punctuation():
    assert fold("Sección 76:22-24") == "seccion 76:22-24"
    assert fold("") == ""


def test_compact_and_slugify():
    assert compact("1 Nefi") == "1nefi"
    assert slugify("Palabras de Mormón") == "palabras-de-mormon"
    assert slugify("José Smith—Mateo") == "jose-smith-mateo"

# tests/test_passage.py
"""
Tests for passage.py - comma lists, ranges, inheritance and partial failure.
"""

import pytest

from escrituras.errors import InvalidFormatError, InvalidRangeError, UnknownBookError


def test_pure_range_preserves_count_and_order(expander):
    result = expander.expand("Juan 1:1-3")
    assert result.citations == ["Juan 1:1", "Juan 1:2", "Juan 1:3"]
    assert result.ok


def test_bare_verse_inherits_book_and_chapter(expander):
    result = expander.expand("Juan 1:1-3, 14")
    assert result.citations == ["Juan 1:1", "Juan 1:2", "Juan 1:3", "Juan 1:14"]


def test_dedup_and_canonical_order(expander):
    result = expander.expand("Juan 1:1, 3, 5-7, 1")
    assert result.citations == ["Juan 1:1", "Juan 1:3", "Juan 1:5", "Juan 1:6", "Juan 1:7"]


def test_output_sorted_regardless_of_input_order(expander):
    result = expander.expand("Juan 3:16; Alma 32:21, 22, Juan 1:14")
    assert result.citations == ["Alma 32:21", "Alma 32:22", "Juan 1:14", "Juan 3:16"]


def test_numeric_sort_within_book(expander):
    result = expander.expand("Salmos 119:105, 23:1, Salmos 2:1")
    assert result.citations == ["Salmos 2:1", "Salmos 23:1", "Salmos 119:105"]


def test_inheritance_follows_last_verse_produced(expander):
    # "9" inherits Alma 32 from the range, not Juan 3 from the first segment
    result = expander.expand("Juan 3:16, Alma 32:21-23, 9")
    assert "Alma 32:9" in result.citations
    assert "Juan 3:9" not in result.citations


def test_spellings_collapse_to_canonical_names(expander):
    result = expander.expand("Gén 1:1, GENESIS 1:1, génesis 1:2")
    assert result.citations == ["Génesis 1:1", "Génesis 1:2"]


def test_chapter_only_and_units(expander):
    result = expander.expand("Salmos 23, DyC 76:22-23, DO 1")
    assert result.citations == [
        "Declaraciones Oficiales 1:1",
        "Doctrina y Convenios 76:22",
        "Doctrina y Convenios 76:23",
        "Salmos 23:1",
    ]


def test_chapter_verse_segment_inherits_book(expander):
    result = expander.expand("Juan 1:1, 3:16-17")
    assert result.citations == ["Juan 1:1", "Juan 3:16", "Juan 3:17"]


def test_bare_range_without_prior_citation(expander):
    result = expander.expand("5-7, Juan 3:16")
    assert result.citations == ["Juan 3:16"]
    assert len(result.errors) == 1
    segment, error = result.errors[0]
    assert segment == "5-7"
    assert isinstance(error, InvalidRangeError)
    assert not result.ok


def test_bare_verse_without_prior_citation(expander):
    result = expander.expand("14, Juan 3:16")
    assert result.citations == ["Juan 3:16"]
    segment, error = result.errors[0]
    assert segment == "14"
    assert isinstance(error, InvalidFormatError)


def test_failures_are_collected_not_dropped(expander):
    result = expander.expand("Xyzzy 1:1, Juan 1:1, ???, Juan 1:9-2, 4")
    assert result.citations == ["Juan 1:1", "Juan 1:4"]
    assert [segment for segment, _ in result.errors] == ["Xyzzy 1:1", "???", "Juan 1:9-2"]
    kinds = [type(error) for _, error in result.errors]
    assert kinds == [UnknownBookError, InvalidFormatError, InvalidRangeError]


def test_failed_segment_does_not_become_inheritance_source(expander):
    result = expander.expand("Juan 1:1, Xyzzy 2:2, 5")
    assert result.citations == ["Juan 1:1", "Juan 1:5"]


def test_reversed_bare_range(expander):
    result = expander.expand("Juan 1:1, 7-5")
    assert result.citations == ["Juan 1:1"]
    assert isinstance(result.errors[0][1], InvalidRangeError)


def test_raise_for_errors(expander):
    expander.expand("Juan 1:1-3").raise_for_errors()
    with pytest.raises(InvalidRangeError):
        expander.expand("1-2").raise_for_errors()


def test_empty_segments_are_ignored(expander):
    result = expander.expand("Juan 1:1, , Juan 1:2,")
    assert result.citations == ["Juan 1:1", "Juan 1:2"]
    assert result.ok
    assert expander.expand("").citations == []


def test_to_dict(expander):
    data = expander.expand("Juan 1:1-2, 0-1").to_dict()
    assert data["citations"] == ["Juan 1:1", "Juan 1:2"]
    assert data["verse_count"] == 2
    assert data["errors"][0]["segment"] == "0-1"
    assert data["errors"][0]["error"] == "invalid_format"


def test_expand_reference(expander):
    assert expander.expand_reference("Génesis 1:1-3") == [
        "Génesis 1:1", "Génesis 1:2", "Génesis 1:3",
    ]
    assert expander.expand_reference("Juan 3:16") == ["Juan 3:16"]
    with pytest.raises(UnknownBookError):
        expander.expand_reference("Xyzzy 1:1")


@pytest.mark.parametrize("segment", ["Salmos 23-25", "Juan 3 16"])
def test_segment_outside_grammar_is_invalid_format(expander, segment):
    result = expander.expand(f"Juan 1:1, {segment}")
    assert result.citations == ["Juan 1:1"]
    (failed, error), = result.errors
    assert failed == segment
    assert type(error) is InvalidFormatError


def test_oversized_range_is_reported(expander):
    result = expander.expand("Juan 1:1, 2-100000000, Juan 1:1-100000000")
    assert result.citations == ["Juan 1:1"]
    assert [type(error) for _, error in result.errors] == [InvalidRangeError, InvalidRangeError]

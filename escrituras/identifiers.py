# escrituras/identifiers.py
"""
Canonical verse identifiers.

Format (primary key in the vector store):

    {VOLUME}-{slug}-{chapter:02d}-{verse:03d}

    AT-genesis-01-001
    BM-1-nefi-02-015
    DyC-secciones-76-022
    DyC-declaraciones-oficiales-01-001
"""

import re
from typing import List

from .catalog import Unit
from .config import CHAPTER_WIDTH, ID_SEPARATOR, VERSE_WIDTH
from .reference_parser import Reference

IDENTIFIER_RE = re.compile(r"^[A-Za-z]+-[a-z0-9-]+-\d{2,}-\d{3,}$")


def build(reference: Reference) -> str:
    """Render the identifier of the first verse of a reference."""
    return ID_SEPARATOR.join((
        reference.book.volume.prefix,
        reference.book.slug,
        str(reference.chapter).zfill(CHAPTER_WIDTH),
        str(reference.verse).zfill(VERSE_WIDTH),
    ))


def build_compact(reference: Reference) -> str:
    """
    Render a section range as one identifier with a verse-end suffix.

    "DyC 76:22-24" -> "DyC-secciones-76-022-024". Every other
    reference renders exactly as build() does.
    """
    ident = build(reference)
    if reference.book.unit is Unit.SECTION and reference.is_range:
        ident += ID_SEPARATOR + str(reference.verse_end).zfill(VERSE_WIDTH)
    return ident


def build_all(reference: Reference) -> List[str]:
    """One identifier per verse covered by the reference."""
    return [build(verse) for verse in reference.verses()]


def is_identifier(value: str) -> bool:
    """Check that a string has the identifier shape."""
    return bool(IDENTIFIER_RE.match(value or ""))

# escrituras/reference_parser.py
"""
Scripture citation parser.

Grammar for ordinary books:
    <book> <chapter>[:<verse>[-<verse_end>]]

    "Génesis 1:1", "Gén. 1:1", "1 Nefi 2:15", "1ra de Juan 1:9",
    "III Juan 1:2", "Alma 32:21-23", "Salmos 23" (verse defaults to 1)

The Doctrine and Covenants sections and the Official Declarations are
numbered units, not books with chapters:
    <unit-keyword> <number>[:<verse>[-<verse_end>]]

    "DyC 76:22", "D&C 76:22-24", "Sección 4", "Declaración Oficial 2"

The unit number takes the chapter position of the Reference.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional

from .aliases import AliasResolver, get_resolver
from .catalog import BookEntry, Unit
from .config import MAX_RANGE_VERSES
from .errors import CitationError, InvalidFormatError, InvalidRangeError
from .normalizer import fold

logger = logging.getLogger(__name__)

_VERSES = r"(?:\s*:\s*(?P<verse>\d+)(?:\s*-\s*(?P<verse_end>\d+))?)?"

# Book fragment: optional leading number ("1 Nefi", "1ra de Juan"), then a
# letter, then no digits or ':'. A trailing "." is dropped.
CITATION_RE = re.compile(
    r"^(?P<book>(?:\d+\s*)?[^\W\d_][^\d:]*?)\.?\s*(?P<chapter>\d+)" + _VERSES + r"$"
)

# Matched against folded (lowercase, accent-free) text
SECTION_RE = re.compile(
    r"^(?:d\s*(?:y|&)\s*c|dc|doctrina\s+y\s+convenios|secciones|seccion|secc|sec)"
    r"\.?\s*(?P<chapter>\d+)" + _VERSES + r"$"
)
DECLARATION_RE = re.compile(
    r"^(?:declaraciones\s+oficiales|declaracion\s+oficial|d\.?\s*o)"
    r"\.?\s*(?P<chapter>\d+)" + _VERSES + r"$"
)

UNIT_PATTERNS = (
    (Unit.SECTION, SECTION_RE),
    (Unit.DECLARATION, DECLARATION_RE),
)

_DASHES_RE = re.compile(r"[\u2010-\u2015\u2212]")


@dataclass(frozen=True)
class Reference:
    """
    A resolved scripture reference.

    Attributes:
        book: Catalog entry (for units, the sections/declarations entry)
        chapter: Chapter, or unit number for sections and declarations
        verse: First verse (1 when the citation omits it)
        verse_end: Last verse; equals verse for single-verse references
    """
    book: BookEntry
    chapter: int
    verse: int = 1
    verse_end: Optional[int] = None

    def __post_init__(self):
        if self.verse_end is None:
            object.__setattr__(self, "verse_end", self.verse)
        if self.chapter < 1 or self.verse < 1:
            raise InvalidFormatError(
                f"Chapter and verse must be positive: {self.book.name} "
                f"{self.chapter}:{self.verse}"
            )
        if self.verse_end < self.verse:
            raise InvalidRangeError(
                f"Range end precedes start: {self.book.name} "
                f"{self.chapter}:{self.verse}-{self.verse_end}"
            )
        if self.verse_count > MAX_RANGE_VERSES:
            raise InvalidRangeError(
                f"Range covers {self.verse_count} verses, more than "
                f"{MAX_RANGE_VERSES}: {self.book.name} "
                f"{self.chapter}:{self.verse}-{self.verse_end}"
            )

    @property
    def is_range(self) -> bool:
        return self.verse_end != self.verse

    @property
    def verse_count(self) -> int:
        """Number of verses covered."""
        return self.verse_end - self.verse + 1

    @property
    def citation(self) -> str:
        """Normalized citation string (e.g., "Juan 3:16", "Juan 1:1-3")."""
        if self.is_range:
            return f"{self.book.name} {self.chapter}:{self.verse}-{self.verse_end}"
        return f"{self.book.name} {self.chapter}:{self.verse}"

    def verses(self) -> Iterator["Reference"]:
        """Yield one single-verse Reference per verse in the range."""
        for v in range(self.verse, self.verse_end + 1):
            yield Reference(self.book, self.chapter, v)

    def __str__(self) -> str:
        return self.citation


def clean_citation(text: str) -> str:
    """Collapse whitespace and unify dashes and separator spacing."""
    text = _DASHES_RE.sub("-", text or "")
    text = re.sub(r"\s+", " ", text).strip()
    text = re.sub(r"\s*:\s*", ":", text)
    return text


class ReferenceParser:
    """
    Parses single citations into References.

    Usage:
        parser = ReferenceParser(get_resolver())
        ref = parser.parse("Mosíah 5:7")
        ref.book.slug, ref.chapter, ref.verse    # ("mosiah", 5, 7)
    """

    def __init__(self, resolver: AliasResolver):
        self.resolver = resolver

    def _parse_unit(self, text: str) -> Optional[Reference]:
        """Try the section and declaration recognizers."""
        folded = fold(text)
        for unit, pattern in UNIT_PATTERNS:
            m = pattern.match(folded)
            if m:
                entry = self.resolver.catalog.unit_entry(unit)
                return self._build(entry, m, text)
        return None

    def _build(self, entry: BookEntry, m: re.Match, text: str) -> Reference:
        chapter = int(m.group("chapter"))
        verse = int(m.group("verse")) if m.group("verse") else 1
        verse_end = int(m.group("verse_end")) if m.group("verse_end") else verse

        if chapter < 1 or verse < 1:
            raise InvalidFormatError(
                f"Chapter and verse must be positive: {text}", text
            )
        if verse_end < verse:
            raise InvalidRangeError(f"Range end precedes start: {text}", text)

        return Reference(entry, chapter, verse, verse_end)

    def parse(self, citation: str) -> Reference:
        """
        Parse one citation.

        Args:
            citation: e.g. "Génesis 1:1", "1 Nefi 2:15-17", "DyC 76:22"

        Returns:
            Reference

        Raises:
            InvalidFormatError: no grammar matched (includes missing chapter)
            InvalidRangeError: verse_end precedes verse
            UnknownBookError: book fragment did not resolve
        """
        text = clean_citation(citation)
        if not text:
            raise InvalidFormatError("Empty citation", citation)

        ref = self._parse_unit(text)
        if ref:
            return ref

        m = CITATION_RE.match(text)
        if not m:
            raise InvalidFormatError(
                f"Invalid reference format: {citation}. "
                f"Expected '<libro> <capítulo>[:<versículo>[-<versículo>]]'",
                citation,
            )

        entry = self.resolver.resolve(m.group("book"))
        return self._build(entry, m, citation)


_parser: Optional[ReferenceParser] = None


def get_parser() -> ReferenceParser:
    """Get or create the process-wide parser."""
    global _parser
    if _parser is None:
        _parser = ReferenceParser(get_resolver())
    return _parser


def parse_reference(citation: str) -> Reference:
    """Parse a citation with the process-wide parser."""
    return get_parser().parse(citation)


def is_valid_reference(citation: str) -> bool:
    """
    Check if a string is a resolvable citation.

    Args:
        citation: String to check

    Returns:
        True if valid reference, False otherwise
    """
    try:
        parse_reference(citation)
    except CitationError:
        return False
    return True

# escrituras/passage.py
"""
Passage expansion.

Turns a passage such as "Juan 1:1-3, 14; Alma 32:21" into the ordered,
de-duplicated list of single-verse citations it denotes:

    ["Alma 32:21", "Juan 1:1", "Juan 1:2", "Juan 1:3", "Juan 1:14"]

Segments are separated by "," or ";" and classified in order:

1. Full reference with a range       "Juan 1:1-3"
2. Bare verse range                  "5-7"      (inherits book and chapter)
3. Full single reference             "Juan 1:9", "Salmos 23", "DyC 76:22"
4. Bare verse                        "14"       (inherits book and chapter)
5. Chapter and verse                 "2:3"      (inherits book)

Inheritance always refers to the last verse produced earlier in the same
passage. Each segment fails on its own: errors are collected next to the
successes and never abort the rest of the passage.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .errors import CitationError, InvalidFormatError, InvalidRangeError
from .reference_parser import Reference, ReferenceParser, clean_citation, get_parser

logger = logging.getLogger(__name__)

SEGMENT_SPLIT_RE = re.compile(r"[,;]")

_HAS_LETTER = r"(?=.*[^\W\d_])"
FULL_RANGE_RE = re.compile(_HAS_LETTER + r".*\d+:\d+\s*-\s*\d+$")
BARE_RANGE_RE = re.compile(r"^(?P<start>\d+)\s*-\s*(?P<end>\d+)$")
FULL_RE = re.compile(_HAS_LETTER + r".*\d+(?::\d+)?$")
BARE_VERSE_RE = re.compile(r"^(?P<verse>\d+)$")
CHAPTER_VERSE_RE = re.compile(
    r"^(?P<chapter>\d+):(?P<start>\d+)(?:\s*-\s*(?P<end>\d+))?$"
)


def sort_key(ref: Reference) -> Tuple[str, int, int]:
    """Canonical passage order: book name, then chapter, then verse."""
    return (ref.book.name, ref.chapter, ref.verse)


@dataclass
class PassageExpansion:
    """
    Result of expanding a passage.

    Attributes:
        passage: Original passage string
        references: Single-verse references, de-duplicated and sorted
        errors: (segment, error) pairs for segments that failed
    """
    passage: str
    references: List[Reference] = field(default_factory=list)
    errors: List[Tuple[str, CitationError]] = field(default_factory=list)

    @property
    def citations(self) -> List[str]:
        """Citation strings in canonical order (e.g., "Juan 1:1")."""
        return [ref.citation for ref in self.references]

    @property
    def ok(self) -> bool:
        """True when every segment resolved."""
        return not self.errors

    def raise_for_errors(self):
        """Raise the first segment error, if any."""
        if self.errors:
            raise self.errors[0][1]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "passage": self.passage,
            "citations": self.citations,
            "verse_count": len(self.references),
            "errors": [
                {"segment": segment, **error.to_dict()}
                for segment, error in self.errors
            ],
        }


class PassageExpander:
    """
    Expands passages into single-verse references.

    Usage:
        expander = PassageExpander(get_parser())
        result = expander.expand("Juan 1:1-3, 14")
        result.citations
        # ["Juan 1:1", "Juan 1:2", "Juan 1:3", "Juan 1:14"]
    """

    def __init__(self, parser: ReferenceParser):
        self.parser = parser
        self._handlers: List[Tuple[re.Pattern, Callable]] = [
            (FULL_RANGE_RE, self._full),
            (BARE_RANGE_RE, self._bare_range),
            (FULL_RE, self._full),
            (BARE_VERSE_RE, self._bare_verse),
            (CHAPTER_VERSE_RE, self._chapter_verse),
        ]

    def _full(self, m: re.Match, last: Optional[Reference]) -> Reference:
        return self.parser.parse(m.string)

    def _bare_range(self, m: re.Match, last: Optional[Reference]) -> Reference:
        if last is None:
            raise InvalidRangeError(
                f"Verse range '{m.string}' has no earlier citation to follow",
                m.string,
            )
        start, end = int(m.group("start")), int(m.group("end"))
        if end < start:
            raise InvalidRangeError(f"Range end precedes start: {m.string}", m.string)
        return Reference(last.book, last.chapter, start, end)

    def _bare_verse(self, m: re.Match, last: Optional[Reference]) -> Reference:
        if last is None:
            raise InvalidFormatError(
                f"Verse '{m.string}' has no earlier citation to follow", m.string
            )
        return Reference(last.book, last.chapter, int(m.group("verse")))

    def _chapter_verse(self, m: re.Match, last: Optional[Reference]) -> Reference:
        if last is None:
            raise InvalidFormatError(
                f"'{m.string}' has no earlier citation to take the book from",
                m.string,
            )
        start = int(m.group("start"))
        end = int(m.group("end")) if m.group("end") else start
        if end < start:
            raise InvalidRangeError(f"Range end precedes start: {m.string}", m.string)
        return Reference(last.book, int(m.group("chapter")), start, end)

    def classify(self, segment: str, last: Optional[Reference]) -> Reference:
        """
        Resolve one segment, possibly inheriting from the previous verse.

        Raises:
            CitationError: segment could not be resolved
        """
        for pattern, handler in self._handlers:
            m = pattern.match(segment)
            if m:
                return handler(m, last)
        raise InvalidFormatError(f"Unrecognized passage segment: {segment}", segment)

    def expand(self, passage: str) -> PassageExpansion:
        """
        Expand a passage into single-verse references.

        Args:
            passage: Comma/semicolon separated citations, ranges and verses

        Returns:
            PassageExpansion with sorted unique references and any errors
        """
        result = PassageExpansion(passage=passage)
        seen: Dict[Tuple[str, int, int], Reference] = {}
        last: Optional[Reference] = None

        for raw in SEGMENT_SPLIT_RE.split(passage or ""):
            segment = clean_citation(raw)
            if not segment:
                continue

            try:
                ref = self.classify(segment, last)
            except CitationError as e:
                logger.debug(f"Segment '{segment}' of '{passage}' failed: {e}")
                result.errors.append((segment, e))
                continue

            for verse in ref.verses():
                seen.setdefault(sort_key(verse), verse)
                last = verse

        result.references = [seen[key] for key in sorted(seen)]
        return result

    def expand_reference(self, citation: str) -> List[str]:
        """
        Expand a single citation into one citation per verse.

        "Génesis 1:1-3" -> ["Génesis 1:1", "Génesis 1:2", "Génesis 1:3"]
        """
        ref = self.parser.parse(citation)
        return [verse.citation for verse in ref.verses()]


_expander: Optional[PassageExpander] = None


def get_expander() -> PassageExpander:
    """Get or create the process-wide expander."""
    global _expander
    if _expander is None:
        _expander = PassageExpander(get_parser())
    return _expander


def expand_passage(passage: str) -> PassageExpansion:
    """Expand a passage with the process-wide expander."""
    return get_expander().expand(passage)

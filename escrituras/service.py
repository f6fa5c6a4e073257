# escrituras/service.py
"""
Unified citation service.

Single entry point for callers (HTTP handlers, search layer, scripts)
that need identifiers for citations and passages. Produces lookup keys
only; fetching vectors or text is the caller's job.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from . import config
from . import identifiers
from .aliases import AliasResolver
from .catalog import BookCatalog, get_catalog
from .errors import CitationError
from .passage import PassageExpander, PassageExpansion
from .reference_parser import Reference, ReferenceParser

logger = logging.getLogger(__name__)


class ScriptureService:
    """
    Resolves citations and passages to vector store identifiers.

    Usage:
        service = get_service()

        service.vector_id("Génesis 1:1")          # "AT-genesis-01-001"

        ids, errors = service.passage_vector_ids("Juan 1:1-3, 14")

        # Try the main namespace, then the test one
        for namespace, vector_id in service.lookup_keys("Mosíah 5:7"):
            ...
    """

    def __init__(self, catalog: Optional[BookCatalog] = None):
        self.catalog = catalog or get_catalog()
        self.resolver = AliasResolver(self.catalog)
        self.parser = ReferenceParser(self.resolver)
        self.expander = PassageExpander(self.parser)

    def parse_reference(self, citation: str) -> Reference:
        """Parse one citation. Raises CitationError."""
        return self.parser.parse(citation)

    def vector_id(self, citation: str) -> str:
        """
        Identifier for a single citation.

        A range yields the identifier of its first verse; use
        passage_vector_ids() to get one per verse.
        """
        ref = self.parser.parse(citation)
        vector_id = identifiers.build(ref)
        logger.debug(f"Resolved '{citation}' to {vector_id}")
        return vector_id

    def compact_vector_id(self, citation: str) -> str:
        """Identifier keeping a section range as a suffix (see identifiers.build_compact)."""
        return identifiers.build_compact(self.parser.parse(citation))

    def lookup_keys(
        self,
        citation: str,
        namespaces: Optional[Iterable[str]] = None,
    ) -> List[Tuple[str, str]]:
        """
        Ordered (namespace, identifier) pairs to try against the vector store.

        Args:
            citation: Single citation
            namespaces: Namespaces in fallback order. Defaults to
                        ESCRITURAS_NAMESPACES.
        """
        vector_id = self.vector_id(citation)
        namespaces = tuple(namespaces) if namespaces is not None else config.NAMESPACES
        return [(namespace, vector_id) for namespace in namespaces]

    def expand_reference(self, citation: str) -> List[str]:
        """One citation per verse of a single (possibly ranged) citation."""
        return self.expander.expand_reference(citation)

    def expand_passage(self, passage: str) -> PassageExpansion:
        """Expand a passage, collecting per-segment errors."""
        result = self.expander.expand(passage)
        if result.errors:
            logger.info(
                f"Passage '{passage}' resolved {len(result.references)} verses "
                f"with {len(result.errors)} failed segments"
            )
        return result

    def passage_vector_ids(
        self, passage: str
    ) -> Tuple[List[str], List[Tuple[str, CitationError]]]:
        """
        Identifiers for every verse of a passage.

        Returns:
            (identifiers in canonical order, [(segment, error), ...])
        """
        result = self.expand_passage(passage)
        return [identifiers.build(ref) for ref in result.references], result.errors

    @staticmethod
    def format_reference(metadata: Dict) -> str:
        """
        Render vector metadata as a citation.

        Accepts Spanish or English keys:
            {"libro": "Juan", "capitulo": 3, "versiculo": 16} -> "Juan 3:16"
            {"book": "Salmos", "chapter": 23}                  -> "Salmos 23"
        """
        book = metadata.get("libro") or metadata.get("book") or ""
        chapter = metadata.get("capitulo") or metadata.get("chapter") or ""
        verse = metadata.get("versiculo") or metadata.get("verse") or ""

        reference = str(book)
        reference += f" {chapter}" if chapter else ""
        reference += f":{verse}" if verse else ""
        return reference.strip()


_service: Optional[ScriptureService] = None


def get_service() -> ScriptureService:
    """Get or create ScriptureService instance."""
    global _service
    if _service is None:
        _service = ScriptureService()
    return _service

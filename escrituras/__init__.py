# escrituras/__init__.py
"""
Scripture citation resolution for the five-volume Spanish canon.

This package provides:
- BookCatalog: Static book table loaded once from data/books.yml
- AliasResolver: Book fragments, abbreviations and ordinals to catalog entries
- ReferenceParser / Reference: Single citations ("1 Nefi 2:15", "DyC 76:22")
- PassageExpander / PassageExpansion: Comma lists, ranges and bare verses
- identifiers: Canonical vector store ids ("BM-1-nefi-02-015")
- ScriptureService: Unified interface over all of the above
"""

from .errors import (
    CitationError,
    UnknownBookError,
    InvalidFormatError,
    InvalidRangeError,
    CatalogError,
)
from .normalizer import normalize, fold
from .catalog import (
    BookCatalog,
    BookEntry,
    Unit,
    Volume,
    get_catalog,
    load_catalog,
)
from .aliases import AliasResolver, get_resolver
from .reference_parser import (
    Reference,
    ReferenceParser,
    get_parser,
    parse_reference,
    is_valid_reference,
)
from .passage import PassageExpander, PassageExpansion, expand_passage
from .identifiers import build, build_all, build_compact, is_identifier
from .service import ScriptureService, get_service

__all__ = [
    # Unified service (primary interface)
    "ScriptureService",
    "get_service",
    # Errors
    "CitationError",
    "UnknownBookError",
    "InvalidFormatError",
    "InvalidRangeError",
    "CatalogError",
    # Catalog
    "BookCatalog",
    "BookEntry",
    "Unit",
    "Volume",
    "get_catalog",
    "load_catalog",
    # Text and aliases
    "normalize",
    "fold",
    "AliasResolver",
    "get_resolver",
    # Parsing
    "Reference",
    "ReferenceParser",
    "get_parser",
    "parse_reference",
    "is_valid_reference",
    # Passages
    "PassageExpander",
    "PassageExpansion",
    "expand_passage",
    # Identifiers
    "build",
    "build_all",
    "build_compact",
    "is_identifier",
]

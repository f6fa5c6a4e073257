# escrituras/aliases.py
"""
Book-name alias resolution.

Maps a raw book fragment ("Gén", "1ra de Juan", "III Juan", "mosiah")
to its catalog entry. Resolution order, first match wins:

1. Exact canonical name
2. Case-insensitive canonical name
3. Normalized match against canonical names and registered aliases
4. Ordinal / Roman numeral prefix rewritten to a digit, then 1-3 once more

There is no fuzzy or substring matching: a fragment either resolves
through the table or raises UnknownBookError.
"""

import logging
import re
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .catalog import BookCatalog, BookEntry, get_catalog
from .errors import CatalogError, UnknownBookError
from .normalizer import compact, fold, normalize

logger = logging.getLogger(__name__)

ROMAN_NUMERALS = {"i": "1", "ii": "2", "iii": "3", "iv": "4"}

ORDINAL_WORDS = {
    "primer": "1", "primera": "1", "primero": "1",
    "segunda": "2", "segundo": "2",
    "tercer": "3", "tercera": "3", "tercero": "3",
    "cuarta": "4", "cuarto": "4",
}

# "II Juan", "iii. juan"
_ROMAN_RE = re.compile(r"^(?P<num>iv|iii|ii|i)\.?\s+(?:de\s+)?(?P<rest>[a-z].*)$")

# "1ra de Juan", "2da Pedro", "1er Nefi", "1o. Samuel"
_ORDINAL_RE = re.compile(
    r"^(?P<num>[1-4])\s*(?:era|ra|ro|er|da|do|ta|to|a|o)?\.?\s*(?:de\s+)?(?P<rest>[a-z].*)$"
)

# "Primera de Juan", "segundo Nefi"
_ORDINAL_WORD_RE = re.compile(
    r"^(?P<word>" + "|".join(sorted(ORDINAL_WORDS, key=len, reverse=True)) + r")"
    r"\s+(?:de\s+)?(?P<rest>[a-z].*)$"
)


def rewrite_ordinal(fragment: str) -> Optional[str]:
    """
    Rewrite a leading ordinal or Roman numeral as a digit prefix.

    Returns:
        Rewritten fragment (e.g., "1ra de Juan" -> "1 juan"), or None
        when the fragment has no ordinal prefix.
    """
    text = re.sub(r"\s+", " ", fold(fragment)).strip()

    m = _ROMAN_RE.match(text)
    if m:
        return f"{ROMAN_NUMERALS[m.group('num')]} {m.group('rest')}"

    m = _ORDINAL_WORD_RE.match(text)
    if m:
        return f"{ORDINAL_WORDS[m.group('word')]} {m.group('rest')}"

    m = _ORDINAL_RE.match(text)
    if m:
        return f"{m.group('num')} {m.group('rest')}"

    return None


class AliasResolver:
    """
    Resolves raw book fragments to catalog entries.

    The alias table is built once from the catalog and never mutated,
    so one resolver can be shared by any number of callers.

    Usage:
        resolver = get_resolver()
        resolver.resolve("1ra de Juan").name    # "1 Juan"
        resolver.find("Xyzzy")                  # None
    """

    def __init__(self, catalog: BookCatalog):
        self.catalog = catalog
        self._exact: Dict[str, BookEntry] = {}
        self._casefold: Dict[str, BookEntry] = {}
        aliases: Dict[str, str] = {}

        for entry in catalog:
            self._exact[entry.name] = entry
            self._casefold[entry.name.casefold()] = entry
            for spelling in (entry.name,) + entry.aliases:
                for key in (normalize(spelling), compact(spelling)):
                    if not key:
                        continue
                    owner = aliases.setdefault(key, entry.name)
                    if owner != entry.name:
                        raise CatalogError(
                            f"Alias '{spelling}' of {entry.name} already maps to {owner}"
                        )

        self._aliases: Mapping[str, str] = MappingProxyType(aliases)

    @property
    def aliases(self) -> Mapping[str, str]:
        """Read-only view: normalized alias -> canonical name."""
        return self._aliases

    def _match(self, fragment: str) -> Optional[BookEntry]:
        """Steps 1-3 of the resolution order."""
        stripped = fragment.strip()

        entry = self._exact.get(stripped)
        if entry:
            return entry

        entry = self._casefold.get(stripped.casefold())
        if entry:
            return entry

        for key in (normalize(stripped), compact(stripped)):
            name = self._aliases.get(key)
            if name:
                return self._exact[name]

        return None

    def find(self, fragment: str) -> Optional[BookEntry]:
        """Resolve a fragment, returning None when nothing matches."""
        if not fragment or not fragment.strip():
            return None

        entry = self._match(fragment)
        if entry:
            return entry

        rewritten = rewrite_ordinal(fragment)
        if rewritten and rewritten != fragment:
            logger.debug(f"Retrying '{fragment}' as '{rewritten}'")
            return self._match(rewritten)

        return None

    def resolve(self, fragment: str) -> BookEntry:
        """
        Resolve a fragment to its catalog entry.

        Raises:
            UnknownBookError: no resolution step matched
        """
        entry = self.find(fragment)
        if entry is None:
            raise UnknownBookError(f"Book not found: {fragment}", fragment)
        return entry


_resolver: Optional[AliasResolver] = None


def get_resolver() -> AliasResolver:
    """Get or create the process-wide resolver."""
    global _resolver
    if _resolver is None:
        _resolver = AliasResolver(get_catalog())
    return _resolver

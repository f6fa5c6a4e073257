# escrituras/catalog.py
"""
Static book catalog for the five volumes of the canon.

The catalog is read once from a YAML data file (see data/books.yml) and
is immutable afterwards. Every other component gets book data from here;
nothing rebuilds book tables per call.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

import yaml

from . import config
from .errors import CatalogError, UnknownBookError
from .normalizer import normalize

logger = logging.getLogger(__name__)


class Volume(Enum):
    """Volume subdivisions of the canon, valued by identifier prefix."""
    OT = "AT"          # Antiguo Testamento
    NT = "NT"          # Nuevo Testamento
    BOOK1 = "BM"       # Libro de Mormón
    COVENANTS = "DyC"  # Doctrina y Convenios
    PEARL = "PGP"      # Perla de Gran Precio

    @property
    def prefix(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: str) -> "Volume":
        """Accept either the member name ("OT") or its prefix ("AT")."""
        for volume in cls:
            if code in (volume.name, volume.value):
                return volume
        raise ValueError(f"Unknown volume code: {code}")


class Unit(Enum):
    """Numbered subdivisions addressed by number instead of book + chapter."""
    SECTION = "section"
    DECLARATION = "declaration"


@dataclass(frozen=True)
class BookEntry:
    """
    One book of the canon.

    Attributes:
        name: Canonical Spanish name (e.g., "1 Nefi", "Génesis")
        slug: Identifier segment, unique within the volume (e.g., "1-nefi")
        volume: Volume the book belongs to
        aliases: Extra spellings and abbreviations from the data file
        unit: Set for numbered subdivisions (sections, declarations)
    """
    name: str
    slug: str
    volume: Volume
    aliases: Tuple[str, ...] = ()
    unit: Optional[Unit] = None

    @property
    def is_unit(self) -> bool:
        return self.unit is not None


class BookCatalog:
    """
    Read-only mapping of canonical book names to BookEntry.

    Keys are normalized canonical names, so lookup("GÉNESIS") and
    lookup("genesis") find the same entry.

    Usage:
        catalog = get_catalog()
        entry = catalog.get("Mosíah")
        print(entry.volume.prefix, entry.slug)   # BM mosiah
    """

    def __init__(self, entries: List[BookEntry]):
        self._entries = tuple(entries)
        by_name: Dict[str, BookEntry] = {}
        slugs = set()

        for entry in self._entries:
            key = normalize(entry.name)
            if key in by_name:
                raise CatalogError(f"Duplicate book name: {entry.name}")
            if (entry.volume, entry.slug) in slugs:
                raise CatalogError(
                    f"Duplicate slug '{entry.slug}' in volume {entry.volume.name}"
                )
            by_name[key] = entry
            slugs.add((entry.volume, entry.slug))

        self._by_name: Mapping[str, BookEntry] = MappingProxyType(by_name)
        self._units: Mapping[Unit, BookEntry] = MappingProxyType(
            {entry.unit: entry for entry in self._entries if entry.unit}
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[BookEntry]:
        return iter(self._entries)

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    @property
    def names(self) -> List[str]:
        """Canonical names in catalog order."""
        return [entry.name for entry in self._entries]

    def lookup(self, name: str) -> Optional[BookEntry]:
        """Find an entry by canonical name, or None."""
        return self._by_name.get(normalize(name))

    def get(self, name: str) -> BookEntry:
        """Find an entry by canonical name, raising UnknownBookError."""
        entry = self.lookup(name)
        if entry is None:
            raise UnknownBookError(f"Book not found: {name}", name)
        return entry

    def by_volume(self, volume: Volume) -> List[BookEntry]:
        """Entries of one volume, in catalog order."""
        return [entry for entry in self._entries if entry.volume is volume]

    def unit_entry(self, unit: Unit) -> BookEntry:
        """Entry standing for a numbered subdivision (sections, declarations)."""
        try:
            return self._units[unit]
        except KeyError:
            raise CatalogError(f"Catalog has no entry for unit '{unit.value}'")


def _entry_from_record(record: dict) -> BookEntry:
    """Build a BookEntry from one YAML record, validating its fields."""
    if not isinstance(record, dict):
        raise CatalogError(f"Catalog record must be a mapping, got: {record!r}")

    missing = [f for f in ("name", "slug", "volume") if not record.get(f)]
    if missing:
        raise CatalogError(f"Catalog record {record!r} missing: {', '.join(missing)}")

    try:
        volume = Volume.from_code(str(record["volume"]))
        unit = Unit(record["unit"]) if record.get("unit") else None
    except ValueError as e:
        raise CatalogError(f"Invalid catalog record {record!r}: {e}") from e

    aliases = record.get("aliases") or []
    if not isinstance(aliases, list):
        raise CatalogError(f"Aliases for {record['name']} must be a list")

    return BookEntry(
        name=str(record["name"]).strip(),
        slug=str(record["slug"]).strip(),
        volume=volume,
        aliases=tuple(str(a).strip() for a in aliases if str(a).strip()),
        unit=unit,
    )


def parse_catalog(data: dict) -> BookCatalog:
    """Build a catalog from the parsed YAML document."""
    if not isinstance(data, dict) or not isinstance(data.get("books"), list):
        raise CatalogError("Catalog data must be a mapping with a 'books' list")

    entries = [_entry_from_record(record) for record in data["books"]]
    if not entries:
        raise CatalogError("Catalog contains no books")

    catalog = BookCatalog(entries)
    for unit in Unit:
        catalog.unit_entry(unit)
    return catalog


@lru_cache(maxsize=1)
def load_catalog(path: Optional[str] = None) -> BookCatalog:
    """
    Load the book catalog from YAML.

    Args:
        path: Data file path. Defaults to ESCRITURAS_CATALOG_PATH or the
              packaged data/books.yml.

    Returns:
        BookCatalog (the most recently loaded path stays cached)

    Raises:
        CatalogError: file missing, unreadable or invalid
    """
    path = path or config.CATALOG_PATH
    if not os.path.exists(path):
        raise CatalogError(f"Book catalog not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Could not read book catalog {path}: {e}") from e

    catalog = parse_catalog(data)
    logger.info(f"Loaded {len(catalog)} books from {path}")
    return catalog


_catalog: Optional[BookCatalog] = None


def get_catalog() -> BookCatalog:
    """
    Process-wide catalog, loaded on first use and never replaced.

    The process-wide resolver, parser, expander and service are all built
    from this instance. load_catalog(path) with another file returns an
    independent catalog and leaves this one untouched.
    """
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog

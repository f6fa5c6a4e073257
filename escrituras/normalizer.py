# escrituras/normalizer.py
"""
Text normalization for book-name matching.

Every comparison between user input and catalog names goes through
normalize(), so "Génesis", "GENESIS" and "genesis" all meet at "genesis".
"""

import re
import unicodedata

# Anything that is not a letter, digit or whitespace ("_" counts as \w)
_PUNCT_RE = re.compile(r"[^\w\s]|_")
_SPACES_RE = re.compile(r"\s+")


def fold(text: str) -> str:
    """
    Lowercase and strip diacritics, keeping punctuation.

    Used by the grammar recognizers, which still need ':' and '-'.
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(text: str) -> str:
    """
    Canonicalize text for matching.

    Lowercases, strips accents, removes every character that is not a
    letter, digit or space, collapses whitespace and trims. Letters
    without a decomposition ("ß", "æ") are kept as they are.
    Idempotent: normalize(normalize(x)) == normalize(x).

        normalize("José Smith—Historia")  # "jose smithhistoria"
        normalize("D&C")                  # "dc"
    """
    folded = _PUNCT_RE.sub("", fold(text))
    return _SPACES_RE.sub(" ", folded).strip()


def compact(text: str) -> str:
    """Normalized form with spaces removed ("1 Nefi" -> "1nefi")."""
    return normalize(text).replace(" ", "")


def slugify(text: str) -> str:
    """
    Hyphenated identifier segment.

    Unlike normalize(), punctuation separates words here, so
    "José Smith—Mateo" -> "jose-smith-mateo".
    """
    spaced = _PUNCT_RE.sub(" ", fold(text))
    return normalize(spaced).replace(" ", "-")

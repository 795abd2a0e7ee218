"""Text normalization utilities for artist names, month tokens and slugs.

Artist comparison across the whole application goes through
:func:`normalize_artist_name`: lowercase, Unicode NFD decomposition, removal
of combining diacritical marks (U+0300..U+036F) and surrounding whitespace.
"Björk", "BJORK " and "bjork" therefore all compare equal, while "Bjork
Live" does not; there is no partial or fuzzy matching.
"""

import re
import unicodedata
from collections.abc import Iterable

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def fold_text(text: str) -> str:
    """Lowercase *text*, strip combining accents and surrounding whitespace."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return _COMBINING_MARKS.sub("", decomposed).strip()


def normalize_artist_name(name: str) -> str:
    """Normalize an artist name for equality comparison.

    Args:
        name: Raw display name.

    Returns:
        Lowercased, accent-stripped, trimmed name.
    """
    return fold_text(name)


def normalize_artist_set(names: Iterable[str]) -> set[str]:
    """Return the set of normalized names, dropping entries that normalize to ``""``."""
    return {n for n in (normalize_artist_name(name) for name in names) if n}


def slugify(text: str) -> str:
    """Build a URL-safe id from a display name.

    ``"Primavera Sound"`` -> ``"primavera-sound"``,
    ``"Sónar 2026!"`` -> ``"sonar-2026"``.
    """
    ascii_text = normalize_artist_name(text)
    return _NON_SLUG_CHARS.sub("-", ascii_text).strip("-")

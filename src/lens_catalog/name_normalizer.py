"""Shared manufacturer and series name normalization."""

import re
import unicodedata

_STRIPPED_CHARS = re.compile(r"[ .\-]")
_NOISE_WORDS = re.compile(r"series|edition", re.IGNORECASE)


def fold_diacritics(text: str) -> str:
    """Remove combining accents ("Zeiss Otus Ünique" -> "Zeiss Otus Unique")."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_name(name: str) -> str:
    """Normalize a manufacturer or series name into a grouping key.

    The key is lowercased and has its diacritics folded. Spaces, periods and
    hyphens are removed, as is every occurrence of "series" or "edition",
    including one inside a longer word.
    """
    key = _STRIPPED_CHARS.sub("", fold_diacritics(name).lower())
    # Removing one occurrence can join the remaining letters into a new one.
    while True:
        reduced = _NOISE_WORDS.sub("", key)
        if reduced == key:
            return key
        key = reduced

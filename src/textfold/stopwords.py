"""Stop-word lists used by :func:`textfold.text.urlify`.

Words are stored in their ASCII-folded form because slugs are filtered
*after* transliteration (``"für"`` arrives as ``"fuer"`` under German
rules).  All tables are module-level constants and never mutated.
"""

from __future__ import annotations

from types import MappingProxyType

# Fixed English list used whenever a caller passes any explicit exclusion
# value to ``urlify``.
FALLBACK_STOP_WORDS: tuple[str, ...] = (
    "a", "an", "as", "at", "before", "but", "by", "for", "from", "is", "in",
    "into", "like", "of", "off", "on", "onto", "per", "since", "than", "the",
    "this", "that", "to", "up", "via", "with",
)

_ENGLISH: tuple[str, ...] = FALLBACK_STOP_WORDS + (
    "about", "after", "and", "are", "be", "been", "between", "it", "its",
    "or", "over", "so", "then", "these", "those", "through", "under", "upon",
    "was", "were", "what", "when", "where", "which", "while", "who", "will",
    "within", "without",
)

DEFAULT_STOP_WORDS = MappingProxyType({
    "en": _ENGLISH,
    "de": (
        "der", "die", "das", "den", "dem", "des", "ein", "eine", "einer",
        "eines", "einem", "einen", "und", "oder", "von", "vom", "zu", "zum",
        "zur", "im", "in", "mit", "auf", "fuer", "aus", "bei", "nach",
        "ueber", "unter", "am", "an",
    ),
    "fr": (
        "le", "la", "les", "un", "une", "des", "du", "de", "et", "ou", "a",
        "au", "aux", "en", "pour", "par", "sur", "dans", "avec", "sans",
    ),
    "es": (
        "el", "la", "los", "las", "un", "una", "unos", "unas", "de", "del",
        "y", "o", "en", "con", "por", "para", "sin", "sobre", "al",
    ),
    "it": (
        "il", "lo", "la", "i", "gli", "le", "un", "uno", "una", "di", "del",
        "della", "e", "o", "in", "con", "per", "su", "da", "al", "alla",
    ),
    "nl": (
        "de", "het", "een", "en", "of", "van", "in", "op", "met", "voor",
        "aan", "bij", "uit", "naar", "over",
    ),
    "pt": (
        "o", "a", "os", "as", "um", "uma", "de", "do", "da", "dos", "das",
        "e", "ou", "em", "no", "na", "com", "por", "para", "sem",
    ),
})


def default_stop_words(language: str) -> tuple[str, ...]:
    """Return the default stop words for *language*, falling back to English."""
    return DEFAULT_STOP_WORDS.get(language.lower(), DEFAULT_STOP_WORDS["en"])

"""Text formatting helpers — slugs, ASCII transliteration, truncation, links."""

from textfold.stopwords import DEFAULT_STOP_WORDS, FALLBACK_STOP_WORDS, default_stop_words
from textfold.text import Case, linkify, normalize, shortify, strip_tags, urlify
from textfold.transliterate import CHAR_MAPS, asciify, downcode

__all__ = [
    "CHAR_MAPS",
    "Case",
    "DEFAULT_STOP_WORDS",
    "FALLBACK_STOP_WORDS",
    "asciify",
    "default_stop_words",
    "downcode",
    "linkify",
    "normalize",
    "shortify",
    "strip_tags",
    "urlify",
]

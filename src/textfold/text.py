"""Slugify, shorten, and linkify text.

Pure functions with no shared mutable state — safe to import and call
from any layer or thread.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import StrEnum
from functools import lru_cache

from textfold.stopwords import FALLBACK_STOP_WORDS, default_stop_words
from textfold.transliterate import DEFAULT_LOCALE, asciify, language_of

DEFAULT_MAX_LENGTH = 128
DEFAULT_SHORTIFY_LENGTH = 255
DEFAULT_TAIL = "…"

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

_LINE_BREAKS = re.compile(r"[\r\n\t]")
_NON_SLUG_CHARS = re.compile(r"[^-\w\s]", re.ASCII)
_DASHES_AND_SPACES = re.compile(r"[-\s]+")

_TAGS = re.compile(r"<!--.*?-->|<[^>]*>", re.DOTALL)

# A trailing whitespace run, optionally followed by the partial word the
# cut landed in.
_TRAILING_PARTIAL_WORD = re.compile(r"\s+?(\S+)?\Z")

_URL = re.compile(r"(?:https?://|www\.)[^\s<]{4,80}[^\s<]*")


# ---------------------------------------------------------------------------
# Slugs
# ---------------------------------------------------------------------------


@lru_cache(maxsize=32)
def _stop_word_pattern(words: tuple[str, ...]) -> re.Pattern[str] | None:
    cleaned = [word.strip() for word in words if word.strip()]
    if not cleaned:
        return None
    return re.compile(r"\b(?:" + "|".join(map(re.escape, cleaned)) + r")\b", re.IGNORECASE)


def urlify(
    text: str,
    max_length: int = DEFAULT_MAX_LENGTH,
    locale: str = DEFAULT_LOCALE,
    excluded_words: str | Iterable[str] | None = None,
) -> str:
    """Convert *text* into a lowercase-and-dashed ASCII slug.

    Transliterates via :func:`~textfold.transliterate.asciify`, drops
    punctuation and stop words, collapses whitespace/hyphen runs to a
    single hyphen, and hard-cuts to *max_length* characters (trailing
    hyphens from the cut are removed; partial words are kept).

    Stop words: when *excluded_words* is ``None`` the locale's default
    list is used.  **Any other value**, including an empty string, makes
    the function use the fixed English list in
    :data:`~textfold.stopwords.FALLBACK_STOP_WORDS` — the caller's own
    words are ignored.  This mirrors long-standing behaviour that callers
    depend on; pass ``None`` for locale-aware filtering.

    Punctuation is dropped before stop words are matched, and stop words
    left behind by the cut are removed afterwards, so applying the
    function to its own output changes nothing.  As a result
    ``urlify("what's new")`` is ``'whats-new'`` (not ``'s-new'``) and
    ``urlify("another", max_length=2)`` is ``''``.

    A non-positive *max_length* falls back to ``DEFAULT_MAX_LENGTH``.

    >>> urlify("Hello, World!")
    'hello-world'
    """
    if max_length <= 0:
        max_length = DEFAULT_MAX_LENGTH

    if excluded_words is not None:
        stop_words = FALLBACK_STOP_WORDS
    else:
        stop_words = default_stop_words(language_of(locale))

    slug = _LINE_BREAKS.sub(" ", text.lower())
    slug = asciify(slug, locale).lower()
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = slug.replace("_", " ")

    pattern = _stop_word_pattern(stop_words)
    if pattern is not None:
        slug = pattern.sub("", slug)

    slug = _DASHES_AND_SPACES.sub("-", slug.strip()).lower()[:max_length]

    # The cut can leave a stop word behind ("another" -> "an")
    if pattern is not None:
        slug = _DASHES_AND_SPACES.sub("-", pattern.sub("", slug))
    return slug.strip("-")


# ---------------------------------------------------------------------------
# Truncation
# ---------------------------------------------------------------------------


def strip_tags(text: str) -> str:
    """Remove HTML comments and tags, keeping the text between them."""
    return _TAGS.sub("", text)


def shortify(text: str, length: int = DEFAULT_SHORTIFY_LENGTH, tail: str = DEFAULT_TAIL) -> str:
    """Strip tags and shorten *text*, cutting only at word boundaries.

    Lengths are counted in code points.  Text that already fits is
    returned tag-stripped and without *tail*.  Longer text is cut back to
    the last whitespace within the first ``length + 1`` characters; a
    single word longer than *length* is hard-cut.  The result never
    exceeds ``length + len(tail)``.

    >>> shortify("The quick brown fox jumps", length=10)
    'The quick…'
    """
    if length <= 0:
        length = DEFAULT_SHORTIFY_LENGTH

    text = strip_tags(text)
    if len(text) <= length:
        return text

    cut = _TRAILING_PARTIAL_WORD.sub("", text[: length + 1], count=1)
    return cut[:length] + tail


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------


def linkify(text: str, new_context: bool = False) -> str:
    """Wrap every ``http://``, ``https://`` or ``www.`` token in an anchor.

    Anchors carry ``rel="nofollow"`` and, with *new_context*,
    ``target="_blank"``.  The token is used verbatim for both the href
    and the link text: it is **not** HTML-escaped and ``www.`` tokens get
    no scheme.  Escape untrusted input before calling.

    >>> linkify("Visit http://example.com now")
    'Visit <a href="http://example.com" rel="nofollow">http://example.com</a> now'
    """
    target = ' target="_blank"' if new_context else ""

    def _anchor(match: re.Match[str]) -> str:
        url = match.group(0)
        return f'<a href="{url}"{target} rel="nofollow">{url}</a>'

    return _URL.sub(_anchor, text)


# ---------------------------------------------------------------------------
# Casing
# ---------------------------------------------------------------------------


class Case(StrEnum):
    """Case normalization applied to a finished string."""

    NONE = "none"
    LOWER = "lower"
    UPPER = "upper"


def normalize(text: str, case: Case = Case.NONE) -> str:
    """Return *text* lower-cased, upper-cased, or unchanged for ``Case.NONE``.

    >>> normalize("Hello", Case.UPPER)
    'HELLO'
    """
    if case == Case.LOWER:
        return text.lower()
    if case == Case.UPPER:
        return text.upper()
    return text

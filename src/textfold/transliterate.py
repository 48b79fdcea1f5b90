"""Transliteration of arbitrary text to printable ASCII.

Two passes, cheapest first:

1. :func:`downcode` applies a per-language substitution table
   (``"ü"`` becomes ``"ue"`` under German rules, ``"u"`` otherwise).
2. Whatever is still outside printable ASCII goes through Unidecode's
   best-effort folding, and anything Unidecode cannot map is dropped.

The tables are read-only module constants.  Compiled lookup patterns are
cached per language, so :func:`asciify` is safe to call from any thread.
"""

from __future__ import annotations

import codecs
import re
from functools import lru_cache
from types import MappingProxyType

from unidecode import unidecode

from textfold.logging import logger

# Tab, CR, LF and the printable range 0x20-0x7E are the only characters
# allowed in output.
_NON_PRINTABLE = re.compile(r"[^\t\r\n\x20-\x7e]")

DEFAULT_LOCALE = "en_US"
DEFAULT_CHARSET = "UTF-8"

# ---------------------------------------------------------------------------
# Substitution tables
# ---------------------------------------------------------------------------

_LATIN: dict[str, str] = {
    "À": "A", "Á": "A", "Â": "A", "Ã": "A", "Ä": "A", "Å": "A", "Ā": "A",
    "Ă": "A", "Ą": "A", "Æ": "AE", "Ç": "C", "Ć": "C", "Č": "C", "Ď": "D",
    "Đ": "D", "Ð": "D", "È": "E", "É": "E", "Ê": "E", "Ë": "E", "Ē": "E",
    "Ė": "E", "Ę": "E", "Ě": "E", "Ğ": "G", "Ģ": "G", "Ì": "I", "Í": "I",
    "Î": "I", "Ï": "I", "Ī": "I", "Į": "I", "İ": "I", "Ķ": "K", "Ł": "L",
    "Ĺ": "L", "Ľ": "L", "Ļ": "L", "Ñ": "N", "Ń": "N", "Ň": "N", "Ņ": "N",
    "Ò": "O", "Ó": "O", "Ô": "O", "Õ": "O", "Ö": "O", "Ø": "O", "Ő": "O",
    "Ō": "O", "Œ": "OE", "Ŕ": "R", "Ř": "R", "Ś": "S", "Š": "S", "Ş": "S",
    "Ș": "S", "Ť": "T", "Ţ": "T", "Ț": "T", "Þ": "TH", "Ù": "U", "Ú": "U",
    "Û": "U", "Ü": "U", "Ů": "U", "Ű": "U", "Ū": "U", "Ų": "U", "Ý": "Y",
    "Ÿ": "Y", "Ź": "Z", "Ż": "Z", "Ž": "Z",
    "à": "a", "á": "a", "â": "a", "ã": "a", "ä": "a", "å": "a", "ā": "a",
    "ă": "a", "ą": "a", "æ": "ae", "ç": "c", "ć": "c", "č": "c", "ď": "d",
    "đ": "d", "ð": "d", "è": "e", "é": "e", "ê": "e", "ë": "e", "ē": "e",
    "ė": "e", "ę": "e", "ě": "e", "ğ": "g", "ģ": "g", "ì": "i", "í": "i",
    "î": "i", "ï": "i", "ī": "i", "į": "i", "ı": "i", "ķ": "k", "ł": "l",
    "ĺ": "l", "ľ": "l", "ļ": "l", "ñ": "n", "ń": "n", "ň": "n", "ņ": "n",
    "ò": "o", "ó": "o", "ô": "o", "õ": "o", "ö": "o", "ø": "o", "ő": "o",
    "ō": "o", "œ": "oe", "ŕ": "r", "ř": "r", "ś": "s", "š": "s", "ş": "s",
    "ș": "s", "ß": "ss", "ť": "t", "ţ": "t", "ț": "t", "þ": "th", "ù": "u",
    "ú": "u", "û": "u", "ü": "u", "ů": "u", "ű": "u", "ū": "u", "ų": "u",
    "ý": "y", "ÿ": "y", "ź": "z", "ż": "z", "ž": "z",
}

_GREEK: dict[str, str] = {
    "Α": "A", "Β": "V", "Γ": "G", "Δ": "D", "Ε": "E", "Ζ": "Z", "Η": "I",
    "Θ": "Th", "Ι": "I", "Κ": "K", "Λ": "L", "Μ": "M", "Ν": "N", "Ξ": "X",
    "Ο": "O", "Π": "P", "Ρ": "R", "Σ": "S", "Τ": "T", "Υ": "Y", "Φ": "F",
    "Χ": "Ch", "Ψ": "Ps", "Ω": "O", "Ά": "A", "Έ": "E", "Ή": "I", "Ί": "I",
    "Ό": "O", "Ύ": "Y", "Ώ": "O",
    "α": "a", "β": "v", "γ": "g", "δ": "d", "ε": "e", "ζ": "z", "η": "i",
    "θ": "th", "ι": "i", "κ": "k", "λ": "l", "μ": "m", "ν": "n", "ξ": "x",
    "ο": "o", "π": "p", "ρ": "r", "σ": "s", "ς": "s", "τ": "t", "υ": "y",
    "φ": "f", "χ": "ch", "ψ": "ps", "ω": "o", "ά": "a", "έ": "e", "ή": "i",
    "ί": "i", "ό": "o", "ύ": "y", "ώ": "o", "ϊ": "i", "ϋ": "y", "ΐ": "i",
    "ΰ": "y",
}

# Russian romanization; other Cyrillic languages override it below.
_CYRILLIC: dict[str, str] = {
    "А": "A", "Б": "B", "В": "V", "Г": "G", "Д": "D", "Е": "E", "Ё": "Yo",
    "Ж": "Zh", "З": "Z", "И": "I", "Й": "J", "К": "K", "Л": "L", "М": "M",
    "Н": "N", "О": "O", "П": "P", "Р": "R", "С": "S", "Т": "T", "У": "U",
    "Ф": "F", "Х": "H", "Ц": "C", "Ч": "Ch", "Ш": "Sh", "Щ": "Sh", "Ъ": "",
    "Ы": "Y", "Ь": "", "Э": "E", "Ю": "Yu", "Я": "Ya",
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "yo",
    "ж": "zh", "з": "z", "и": "i", "й": "j", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "h", "ц": "c", "ч": "ch", "ш": "sh", "щ": "sh", "ъ": "",
    "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
}

_SYMBOLS: dict[str, str] = {
    "\u00a0": " ", "–": "-", "—": "-", "‘": "'", "’": "'", "‚": "'",
    "“": '"', "”": '"', "„": '"', "«": '"', "»": '"', "…": "...",
    "•": "*", "©": "(c)", "®": "(r)", "™": "(tm)", "€": "EUR", "£": "GBP",
    "¥": "JPY", "°": "deg", "½": "1/2", "¼": "1/4", "¾": "3/4",
}

_DANISH: dict[str, str] = {
    "Æ": "Ae", "æ": "ae", "Ø": "Oe", "ø": "oe", "Å": "Aa", "å": "aa",
}

_LANGUAGE_OVERRIDES: dict[str, dict[str, str]] = {
    "de": {
        "Ä": "Ae", "Ö": "Oe", "Ü": "Ue", "ä": "ae", "ö": "oe", "ü": "ue",
        "ẞ": "SS",
    },
    "da": _DANISH,
    "nb": _DANISH,
    "no": _DANISH,
    "sv": {"Å": "A", "å": "a", "Æ": "Ae", "æ": "ae"},
    "fi": {"Å": "A", "å": "a"},
    "tr": {"İ": "I", "ı": "i", "Ğ": "G", "ğ": "g", "Ş": "S", "ş": "s"},
    "uk": {
        # "зг" is written "zgh" so it never reads back as "ж" (zh).
        "Зг": "Zgh", "зг": "zgh", "ЗГ": "ZGH",
        "Г": "H", "г": "h", "Ґ": "G", "ґ": "g", "Є": "Ye", "є": "ye",
        "И": "Y", "и": "y", "І": "I", "і": "i", "Ї": "Yi", "ї": "yi",
        "Й": "Y", "й": "y", "Х": "Kh", "х": "kh", "Ц": "Ts", "ц": "ts",
        "Щ": "Shch", "щ": "shch", "Ь": "", "ь": "",
    },
    "bg": {
        "Ж": "Zh", "ж": "zh", "Й": "Y", "й": "y", "Ц": "Ts", "ц": "ts",
        "Щ": "Sht", "щ": "sht", "Ъ": "A", "ъ": "a", "Ь": "Y", "ь": "y",
        "Ю": "Yu", "ю": "yu", "Я": "Ya", "я": "ya",
    },
    "ro": {"Ă": "A", "ă": "a", "Â": "A", "â": "a", "Î": "I", "î": "i"},
    "vi": {"Đ": "D", "đ": "d", "Ơ": "O", "ơ": "o", "Ư": "U", "ư": "u"},
}

CHAR_MAPS = MappingProxyType({
    "default": MappingProxyType({**_LATIN, **_GREEK, **_CYRILLIC, **_SYMBOLS}),
    **{
        language: MappingProxyType(table)
        for language, table in _LANGUAGE_OVERRIDES.items()
    },
})


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------


def language_of(locale: str) -> str:
    """Return the language part of *locale* (``"de_AT"`` -> ``"de"``)."""
    return locale.split("_", 1)[0].lower()


@lru_cache(maxsize=None)
def _compiled_table(language: str) -> tuple[re.Pattern[str], dict[str, str]]:
    table = dict(CHAR_MAPS["default"])
    if language != "default":
        table.update(CHAR_MAPS[language])
    # Longest keys first so grapheme sequences win over their first letter
    keys = sorted(table, key=len, reverse=True)
    return re.compile("|".join(re.escape(key) for key in keys)), table


def downcode(text: str, language: str = "en") -> str:
    """Replace known non-ASCII characters with ASCII using *language* rules.

    Languages without their own table use the generic default table.
    Characters absent from every table are left untouched.
    """
    key = language.lower() if language.lower() in CHAR_MAPS else "default"
    pattern, table = _compiled_table(key)
    return pattern.sub(lambda match: table[match.group(0)], text)


def is_printable_ascii(text: str) -> bool:
    """Return True when *text* holds only tab, CR, LF and 0x20-0x7E."""
    return _NON_PRINTABLE.search(text) is None


def _decode(data: bytes, charset: str) -> str:
    try:
        return data.decode(charset, errors="ignore")
    except LookupError:
        logger.debug("Unknown charset %r, decoding as ASCII", charset)
        return data.decode("ascii", errors="ignore")


def _fold(text: str, charset: str) -> str:
    """Best-effort transliteration; returns *text* unchanged if unavailable."""
    try:
        codecs.lookup(charset)
    except LookupError:
        logger.debug("Unknown charset %r, skipping transliteration pass", charset)
        return text
    try:
        return unidecode(text)
    except (UnicodeError, ValueError) as exc:
        logger.debug("Transliteration pass failed, keeping table output: %s", exc)
        return text


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def asciify(
    text: str | bytes,
    locale: str = DEFAULT_LOCALE,
    charset: str = DEFAULT_CHARSET,
) -> str:
    """Convert *text* into a printable-ASCII-only string.

    The language part of *locale* selects the substitution table.  Text
    still containing non-ASCII after the table pass is folded by Unidecode
    and any leftovers are deleted.  *charset* names the source encoding:
    ``bytes`` input is decoded with it, and an encoding Python does not
    know disables the folding pass (the table output is kept as-is).

    Never raises; the result only contains tab, CR, LF and 0x20-0x7E.

    >>> asciify("Grüße aus Köln", locale="de_DE")
    'Gruesse aus Koeln'
    """
    if isinstance(text, bytes):
        text = _decode(text, charset)

    text = downcode(text, language_of(locale))

    if not is_printable_ascii(text):
        text = _fold(text, charset)
        text = _NON_PRINTABLE.sub("", text)
    return text
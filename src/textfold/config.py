"""Configuration loading and validation.

Loads an optional ``textfold.toml`` holding the defaults the CLI passes
to each text operation, and validates every field up front so a bad
value fails before any input is read.

The validated config is exposed as a :class:`Settings` dataclass with
typed fields for each section: ``urlify``, ``asciify``, ``shortify``,
``linkify``, and ``logging``.  The library functions themselves never
read settings; only the CLI does.
"""

from __future__ import annotations

import codecs
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from textfold.errors import ActionableError
from textfold.text import DEFAULT_MAX_LENGTH, DEFAULT_SHORTIFY_LENGTH, DEFAULT_TAIL
from textfold.transliterate import DEFAULT_CHARSET, DEFAULT_LOCALE

# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass
class UrlifyConfig:
    """Slug defaults from ``[urlify]``."""

    max_length: int = DEFAULT_MAX_LENGTH
    locale: str = DEFAULT_LOCALE


@dataclass
class AsciifyConfig:
    """Transliteration defaults from ``[asciify]``."""

    locale: str = DEFAULT_LOCALE
    charset: str = DEFAULT_CHARSET


@dataclass
class ShortifyConfig:
    """Truncation defaults from ``[shortify]``."""

    length: int = DEFAULT_SHORTIFY_LENGTH
    tail: str = DEFAULT_TAIL


@dataclass
class LinkifyConfig:
    """Anchor defaults from ``[linkify]``."""

    new_context: bool = False


@dataclass
class LoggingConfig:
    """Log settings from ``[logging]``.  ``log_dir`` enables file logging."""

    level: str = "INFO"
    log_dir: str | None = None


@dataclass
class Settings:
    """Top-level validated configuration."""

    urlify: UrlifyConfig = field(default_factory=UrlifyConfig)
    asciify: AsciifyConfig = field(default_factory=AsciifyConfig)
    shortify: ShortifyConfig = field(default_factory=ShortifyConfig)
    linkify: LinkifyConfig = field(default_factory=LinkifyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ---------------------------------------------------------------------------
# Default settings path
# ---------------------------------------------------------------------------

DEFAULT_SETTINGS_PATH = Path("textfold.toml")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------------------------------------------------------------------------
# Loading and validation
# ---------------------------------------------------------------------------


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load and validate settings from a TOML file.

    Raises :class:`~textfold.errors.ActionableError`:
      - CONFIG if the file is missing or a section is not a table
      - PARSE if the TOML is malformed
      - VALIDATION if field values are out of range

    Returns a fully validated :class:`Settings` instance.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise ActionableError.config(
            field_name="settings_path",
            reason=f"Settings file not found: {filepath}",
            suggestion=f"Create {filepath} or omit --config to use built-in defaults",
        )

    raw_text = filepath.read_text(encoding="utf-8")
    try:
        data = tomllib.loads(raw_text)
    except tomllib.TOMLDecodeError as exc:
        raise ActionableError.parse(
            source=str(filepath),
            raw_error=str(exc),
            suggestion=f"Fix TOML syntax in {filepath}",
        ) from None

    return _validate(data, filepath)


def settings_path(path: str | Path | None = None) -> Path | None:
    """Return the settings file the CLI should read, or ``None`` for defaults.

    An explicit *path* is returned as given.  Without one, ``textfold.toml``
    in the working directory is used when present.
    """
    if path is not None:
        return Path(path)
    if DEFAULT_SETTINGS_PATH.exists():
        return DEFAULT_SETTINGS_PATH
    return None


def resolve_settings(path: str | Path | None = None) -> Settings:
    """Return settings for the CLI.

    An explicit *path* must exist.  Without one, ``textfold.toml`` in the
    working directory is used when present, else the built-in defaults.
    """
    filepath = settings_path(path)
    if filepath is None:
        return Settings()
    return load_settings(filepath)


def _validate(data: dict[str, object], filepath: Path) -> Settings:
    """Validate raw TOML data and return a Settings instance."""

    # -- urlify section ------------------------------------------------------
    urlify_data = _optional_section(data, "urlify", filepath)
    urlify = UrlifyConfig(
        max_length=_positive_int(urlify_data, "max_length", "urlify", DEFAULT_MAX_LENGTH),
        locale=_string(urlify_data, "locale", "urlify", DEFAULT_LOCALE),
    )

    # -- asciify section -----------------------------------------------------
    asciify_data = _optional_section(data, "asciify", filepath)
    charset = _string(asciify_data, "charset", "asciify", DEFAULT_CHARSET)
    try:
        codecs.lookup(charset)
    except LookupError:
        raise ActionableError.validation(
            field_name="asciify.charset",
            reason=f"'{charset}' is not a known text encoding",
            suggestion="Set [asciify].charset to an encoding name such as UTF-8 or latin-1",
        ) from None

    asciify = AsciifyConfig(
        locale=_string(asciify_data, "locale", "asciify", DEFAULT_LOCALE),
        charset=charset,
    )

    # -- shortify section ----------------------------------------------------
    shortify_data = _optional_section(data, "shortify", filepath)
    shortify = ShortifyConfig(
        length=_positive_int(shortify_data, "length", "shortify", DEFAULT_SHORTIFY_LENGTH),
        tail=_string(shortify_data, "tail", "shortify", DEFAULT_TAIL),
    )

    # -- linkify section -----------------------------------------------------
    linkify_data = _optional_section(data, "linkify", filepath)
    linkify = LinkifyConfig(new_context=_bool(linkify_data, "new_context", "linkify", False))

    # -- logging section -----------------------------------------------------
    logging_data = _optional_section(data, "logging", filepath)
    level = _string(logging_data, "level", "logging", "INFO").upper()
    if level not in _LOG_LEVELS:
        raise ActionableError.validation(
            field_name="logging.level",
            reason=f"'{level}' is not one of {', '.join(_LOG_LEVELS)}",
            suggestion="Set [logging].level to DEBUG, INFO, WARNING, ERROR or CRITICAL",
        )
    log_dir = _string(logging_data, "log_dir", "logging", "") or None

    return Settings(
        urlify=urlify,
        asciify=asciify,
        shortify=shortify,
        linkify=linkify,
        logging=LoggingConfig(level=level, log_dir=log_dir),
    )


def log_level(settings: Settings) -> int:
    """Return the numeric :mod:`logging` level named in *settings*."""
    return logging.getLevelNamesMapping()[settings.logging.level]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _optional_section(data: dict[str, object], name: str, filepath: Path) -> dict[str, object]:
    """Return a section if present (empty dict if absent), or raise CONFIG error."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ActionableError.config(
            field_name=name,
            reason=f"[{name}] in {filepath} must be a table, not {type(section).__name__}",
            suggestion=f"Define [{name}] as a TOML table",
        )
    return section


def _positive_int(section: dict[str, object], field_name: str, section_name: str, default: int) -> int:
    """Return a positive integer field, or raise VALIDATION error."""
    value = section.get(field_name, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ActionableError.validation(
            field_name=f"{section_name}.{field_name}",
            reason=f"is {value!r} — must be a positive integer",
            suggestion=f"Set [{section_name}].{field_name} to a whole number greater than 0",
        )
    return value


def _string(section: dict[str, object], field_name: str, section_name: str, default: str) -> str:
    """Return a string field, or raise VALIDATION error."""
    value = section.get(field_name, default)
    if not isinstance(value, str):
        raise ActionableError.validation(
            field_name=f"{section_name}.{field_name}",
            reason=f"is {value!r}, must be a string",
            suggestion=f"Quote the value of [{section_name}].{field_name}",
        )
    return value


def _bool(section: dict[str, object], field_name: str, section_name: str, default: bool) -> bool:
    """Return a boolean field, or raise VALIDATION error."""
    value = section.get(field_name, default)
    if not isinstance(value, bool):
        raise ActionableError.validation(
            field_name=f"{section_name}.{field_name}",
            reason=f"is {value!r}, must be true or false",
            suggestion=f"Set [{section_name}].{field_name} to the unquoted TOML value true or false",
        )
    return value

"""CLI command handlers for textfold.

Each ``handle_*`` function corresponds to a CLI subcommand: it takes the
parsed arguments, the validated settings and the input text, and prints
the result to stdout.  Command-line flags win over settings values.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable

from textfold.config import Settings, log_level, resolve_settings, settings_path
from textfold.errors import ActionableError
from textfold.logging import configure_file_logging, logger, set_level
from textfold.text import Case, linkify, normalize, shortify, urlify
from textfold.transliterate import asciify

_CASE_CHOICES = [case.value for case in Case]


def read_input(args: argparse.Namespace) -> str:
    """Return the text to process: positional words, else all of stdin.

    Raises :class:`~textfold.errors.ActionableError` (PARSE) when stdin
    is not valid text in the terminal's encoding.
    """
    if args.text:
        return " ".join(args.text)
    try:
        data = sys.stdin.read()
    except UnicodeDecodeError as exc:
        raise ActionableError.from_exception(
            exc,
            service="stdin",
            operation="read input",
            suggestion="Pass the text as arguments or pipe UTF-8 encoded input",
        ) from None
    return data.removesuffix("\n")


def handle_urlify(args: argparse.Namespace, settings: Settings, text: str) -> None:
    """Print the slug for *text*."""
    max_length = args.max_length or settings.urlify.max_length
    locale = args.locale or settings.urlify.locale
    excluded_words = "" if args.exclude_fallback else None
    slug = urlify(text, max_length=max_length, locale=locale, excluded_words=excluded_words)
    print(normalize(slug, Case(args.case)))


def handle_asciify(args: argparse.Namespace, settings: Settings, text: str) -> None:
    """Print *text* transliterated to printable ASCII."""
    locale = args.locale or settings.asciify.locale
    charset = args.charset or settings.asciify.charset
    print(normalize(asciify(text, locale=locale, charset=charset), Case(args.case)))


def handle_shortify(args: argparse.Namespace, settings: Settings, text: str) -> None:
    """Print *text* shortened at a word boundary."""
    length = args.length or settings.shortify.length
    tail = args.tail if args.tail is not None else settings.shortify.tail
    print(normalize(shortify(text, length=length, tail=tail), Case(args.case)))


def handle_linkify(args: argparse.Namespace, settings: Settings, text: str) -> None:
    """Print *text* with URLs wrapped in anchors."""
    new_context = args.new_context or settings.linkify.new_context
    print(linkify(text, new_context=new_context))


HANDLERS: dict[str, Callable[[argparse.Namespace, Settings, str], None]] = {
    "urlify": handle_urlify,
    "asciify": handle_asciify,
    "shortify": handle_shortify,
    "linkify": handle_linkify,
}


def report_error(exc: ActionableError, *, verbose: bool = False) -> None:
    """Write *exc* to stderr: full JSON when verbose, else message + suggestion."""
    if verbose:
        print(json.dumps(exc.to_dict(), indent=2), file=sys.stderr)
        return
    print(f"Error: {exc.error}", file=sys.stderr)
    if exc.suggestion:
        print(f"Suggestion: {exc.suggestion}", file=sys.stderr)


def configure_logging(args: argparse.Namespace, settings: Settings) -> logging.FileHandler | None:
    """Apply the log level and optional file logging for this run.

    Returns the file handler, if one was added, so the caller can close it.
    """
    set_level(logging.DEBUG if args.verbose else log_level(settings))
    log_dir = args.log_dir or settings.logging.log_dir
    if not log_dir:
        return None
    handler = configure_file_logging(log_dir, level=logger.level)
    logger.debug("Logging to %s", handler.baseFilename)
    return handler


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{number} must be greater than 0")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="textfold",
        description="Slugify, transliterate, shorten and linkify text",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="Settings file (default: ./textfold.toml if present)",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        metavar="DIR",
        help="Also write a timestamped log file to DIR",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging and structured error output",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # -- urlify --------------------------------------------------------------
    urlify_p = sub.add_parser("urlify", help="Convert text to a lowercase-and-dashed slug")
    urlify_p.add_argument("text", nargs="*", help="Text to convert (default: stdin)")
    urlify_p.add_argument(
        "--max-length",
        type=_positive_int,
        default=None,
        metavar="N",
        help="Maximum slug length (default: settings or 128)",
    )
    urlify_p.add_argument("--locale", type=str, default=None, help="Locale, e.g. de_DE")
    urlify_p.add_argument(
        "--exclude-fallback",
        action="store_true",
        help="Remove the fixed English stop-word list instead of the locale list",
    )
    urlify_p.add_argument("--case", choices=_CASE_CHOICES, default=Case.NONE.value)

    # -- asciify -------------------------------------------------------------
    asciify_p = sub.add_parser("asciify", help="Transliterate text to printable ASCII")
    asciify_p.add_argument("text", nargs="*", help="Text to convert (default: stdin)")
    asciify_p.add_argument("--locale", type=str, default=None, help="Locale, e.g. de_DE")
    asciify_p.add_argument("--charset", type=str, default=None, help="Source encoding name")
    asciify_p.add_argument("--case", choices=_CASE_CHOICES, default=Case.NONE.value)

    # -- shortify ------------------------------------------------------------
    shortify_p = sub.add_parser("shortify", help="Strip tags and shorten at a word boundary")
    shortify_p.add_argument("text", nargs="*", help="Text to shorten (default: stdin)")
    shortify_p.add_argument(
        "--length",
        type=_positive_int,
        default=None,
        metavar="N",
        help="Maximum length before the tail (default: settings or 255)",
    )
    shortify_p.add_argument("--tail", type=str, default=None, help="Marker appended when cut")
    shortify_p.add_argument("--case", choices=_CASE_CHOICES, default=Case.NONE.value)

    # -- linkify -------------------------------------------------------------
    linkify_p = sub.add_parser("linkify", help="Wrap URLs in nofollow anchors")
    linkify_p.add_argument("text", nargs="*", help="Text to scan (default: stdin)")
    linkify_p.add_argument(
        "--new-context",
        action="store_true",
        help='Add target="_blank" to every anchor',
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse *argv*, run one subcommand and return the exit status."""
    args = build_parser().parse_args(argv)
    file_handler = None
    try:
        source = settings_path(args.config)
        settings = resolve_settings(source)
        file_handler = configure_logging(args, settings)
        logger.debug("Settings loaded from %s", source or "built-in defaults")
        text = read_input(args)
        logger.debug("Running %s on %d characters", args.command, len(text))
        HANDLERS[args.command](args, settings, text)
    except ActionableError as exc:
        logger.debug("%s failed: %s", args.command, exc.error)
        report_error(exc, verbose=args.verbose)
        return 1
    finally:
        if file_handler is not None:
            logger.removeHandler(file_handler)
            file_handler.close()
    return 0

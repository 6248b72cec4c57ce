"""Command-line interface for repertorio."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from . import __version__
from .settings import default_config_path


def _load_dotenv_files() -> None:
    """Load .env from the working directory; real environment variables win."""
    load_dotenv(Path.cwd() / ".env", override=False)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repertorio",
        description="Resolve song identity and musical key across repertoire sources",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"repertorio {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    normalize_parser = subparsers.add_parser(
        "normalize",
        help="Show the display form and comparison key of a title or name",
    )
    normalize_parser.add_argument("text", help="Title or artist name")
    normalize_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )

    keys_parser = subparsers.add_parser(
        "keys",
        help="Show the canonical spelling and related keys of a musical key",
    )
    keys_parser.add_argument("key", help="Musical key, e.g. C, Am, Gb")
    keys_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )

    match_parser = subparsers.add_parser(
        "match",
        help="Check whether a candidate song matches an (artist, title) query",
    )
    match_parser.add_argument("--artist", required=True, help="Query artist")
    match_parser.add_argument("--title", required=True, help="Query title")
    match_parser.add_argument("--candidate-artist", required=True, help="Candidate artist")
    match_parser.add_argument("--candidate-title", required=True, help="Candidate title")
    match_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )

    search_parser = subparsers.add_parser(
        "search",
        help="Rank songs from JSON catalogs for a query",
    )
    search_parser.add_argument("--text", help="Free-text query, e.g. 'Artist - Title'")
    search_parser.add_argument("--artist", help="Query artist")
    search_parser.add_argument("--title", help="Query title")
    search_parser.add_argument(
        "--local",
        type=Path,
        help="Catalog of the ministry's own songs",
    )
    search_parser.add_argument(
        "--shared",
        type=Path,
        help="Catalog of the shared repository",
    )
    search_parser.add_argument(
        "--external",
        type=Path,
        help="Catalog of external search results",
    )
    search_parser.add_argument(
        "--config",
        type=Path,
        default=default_config_path(),
        help="Settings path (default: ~/.config/repertorio/settings.json)",
    )
    search_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )

    resolve_parser = subparsers.add_parser(
        "resolve-key",
        help="Resolve one key from several sources' key observations",
    )
    resolve_parser.add_argument(
        "observations",
        nargs="?",
        type=Path,
        help="JSON array of {key, confidence, provenance} objects",
    )
    resolve_parser.add_argument(
        "--snippets",
        type=Path,
        help="Text file of search result snippets, one per line",
    )
    resolve_parser.add_argument(
        "--provenance",
        default="search snippets",
        help="Provenance label for keys extracted from --snippets",
    )
    resolve_parser.add_argument(
        "--chord-key",
        help="Key printed on a chord sheet found by the same search, used when snippets name no key",
    )
    resolve_parser.add_argument(
        "--chord-source",
        default="chord sheet",
        help="Provenance label for --chord-key",
    )
    resolve_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )

    return parser


def main() -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    _configure_logging(args.log_level)
    _load_dotenv_files()

    try:
        # Import here to avoid slow startup
        if args.command == "normalize":
            from .commands.normalize import run_normalize
            return run_normalize(args)
        elif args.command == "keys":
            from .commands.keys import run_keys
            return run_keys(args)
        elif args.command == "match":
            from .commands.match import run_match
            return run_match(args)
        elif args.command == "search":
            from .commands.search import run_search
            return run_search(args)
        elif args.command == "resolve-key":
            if not (args.observations or args.snippets or args.chord_key):
                from .errors import ValidationError
                raise ValidationError("resolve-key needs an observations file, --snippets or --chord-key")
            from .commands.resolve_key import run_resolve_key
            return run_resolve_key(args)
        else:
            parser.print_help()
            return 1
    except Exception as exc:  # pragma: no cover - exercised in CLI tests
        from .errors import exit_code_for_exception

        print(str(exc), file=sys.stderr)
        return exit_code_for_exception(exc)


if __name__ == "__main__":
    sys.exit(main())

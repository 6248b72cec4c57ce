"""Search command - rank catalog songs for a query."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from repertorio.app import RepertorioApp
from repertorio.commands.output import emit_output
from repertorio.core.models import RankedResult, SongQuery
from repertorio.core.ranking import rank_sources
from repertorio.errors import ValidationError
from repertorio.settings import Settings, load_settings, settings_hash


def _build_query(args: Namespace) -> SongQuery:
    text = getattr(args, "text", None)
    artist = getattr(args, "artist", None)
    title = getattr(args, "title", None)
    if text and (artist or title):
        raise ValidationError("Use either --text or --artist/--title, not both")
    query = SongQuery.from_text(text) if text else SongQuery.structured(artist or "", title or "")
    if query.is_empty:
        raise ValidationError("A search needs --text or at least one of --artist/--title")
    return query


def _format_results(results: list[RankedResult]) -> list[dict]:
    return [result.to_dict() for result in results]


def _human_lines(results: list[RankedResult]) -> list[str]:
    if not results:
        return ["search: no matching songs"]
    lines = []
    for position, result in enumerate(results, start=1):
        key = f" [{result.candidate.raw_key}]" if result.candidate.raw_key else ""
        lines.append(
            f"{position:>2}. {result.score:5.1f}  {result.candidate.artist} - "
            f"{result.candidate.title}{key} ({result.origin.value})"
        )
    return lines


def run_search(
    args: Namespace,
    *,
    app: RepertorioApp | None = None,
    settings: Settings | None = None,
    output_sink=print,
) -> int:
    """Search the configured catalogs and emit a deterministic result."""
    query = _build_query(args)
    if settings is None:
        config = getattr(args, "config", None)
        settings = load_settings(Path(config) if config else None)
    if app is None:
        app = RepertorioApp.from_catalogs(
            local=getattr(args, "local", None),
            shared=getattr(args, "shared", None),
            external=getattr(args, "external", None),
            settings=settings,
        )

    results = app.find_song(query)
    counts = rank_sources(results)
    emit_output(
        command="search",
        payload={
            "query": {"text": query.free_text, "artist": query.artist, "title": query.title},
            "scoring_version": settings.scoring_version,
            "settings_hash": settings_hash(settings),
            "counts": {origin.value: count for origin, count in counts.items()},
            "results": _format_results(results),
        },
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=_human_lines(results),
    )
    return 0 if results else 1

"""Resolve-key command - pick one key from several sources' observations."""

from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path

from repertorio.app import KeyReport, RepertorioApp
from repertorio.commands.output import emit_output
from repertorio.core.key_extraction import observations_from_search
from repertorio.core.models import KeyObservation
from repertorio.errors import IOFailure, ValidationError


def _read_observations(path: Path) -> list[KeyObservation]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise IOFailure(f"Observations file {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise ValidationError(f"Observations file {path} must contain a JSON array of objects")
    return [KeyObservation.from_dict(item) for item in payload]


def _search_observations(args: Namespace) -> list[KeyObservation]:
    snippets = getattr(args, "snippets", None)
    lines = Path(snippets).read_text(encoding="utf-8").splitlines() if snippets else []
    return observations_from_search(
        lines,
        getattr(args, "provenance", "search snippets"),
        chord_key=getattr(args, "chord_key", None),
        chord_source=getattr(args, "chord_source", "chord sheet"),
    )


def _payload(report: KeyReport | None, observation_count: int) -> dict:
    if report is None:
        return {"observations": observation_count, "resolved": None}
    resolved = report.resolved
    return {
        "observations": observation_count,
        "resolved": {
            "key": resolved.key,
            "confidence": resolved.confidence,
            "provenance": resolved.provenance,
            "supporting": resolved.supporting,
            "band": resolved.band.value,
            "related": list(report.related),
        },
    }


def run_resolve_key(args: Namespace, *, app: RepertorioApp | None = None, output_sink=print) -> int:
    observations: list[KeyObservation] = []
    if getattr(args, "observations", None):
        observations.extend(_read_observations(Path(args.observations)))
    if getattr(args, "snippets", None) or getattr(args, "chord_key", None):
        observations.extend(_search_observations(args))
    if app is None:
        app = RepertorioApp(())

    report = app.resolve_song_key(observations)
    if report is None:
        human = ("resolve-key: no usable key observations",)
    else:
        resolved = report.resolved
        human = (
            f"key: {resolved.key} ({resolved.confidence:g}% via {resolved.provenance})",
            f"band: {resolved.band.description}",
            f"related: {' '.join(report.related)}",
        )
    emit_output(
        command="resolve-key",
        payload=_payload(report, len(observations)),
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=human,
    )
    return 0 if report is not None else 1

"""Normalize command - show display and comparison forms of a string."""

from __future__ import annotations

from argparse import Namespace

from repertorio.commands.output import emit_output
from repertorio.core.identity import normalize


def run_normalize(args: Namespace, *, output_sink=print) -> int:
    normalized = normalize(args.text)
    emit_output(
        command="normalize",
        payload={
            "input": args.text,
            "display": normalized.display,
            "comparison_key": normalized.comparison_key,
            "has_signal": normalized.has_signal,
        },
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=(
            f"display: {normalized.display}",
            f"comparison_key: {normalized.comparison_key}",
        ),
    )
    return 0

"""Match command - check one candidate against an (artist, title) query."""

from __future__ import annotations

from argparse import Namespace

from repertorio.commands.output import emit_output
from repertorio.core.identity import match_strength
from repertorio.core.models import MatchStrength


def run_match(args: Namespace, *, output_sink=print) -> int:
    strength = match_strength(args.artist, args.title, args.candidate_artist, args.candidate_title)
    matched = strength != MatchStrength.NONE
    emit_output(
        command="match",
        payload={
            "query": {"artist": args.artist, "title": args.title},
            "candidate": {"artist": args.candidate_artist, "title": args.candidate_title},
            "match": matched,
            "strength": strength.name,
        },
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=(f"match: {'yes' if matched else 'no'} ({strength.name})",),
    )
    return 0 if matched else 1

"""Keys command - canonical spelling and related keys."""

from __future__ import annotations

from argparse import Namespace

from repertorio.commands.output import emit_output
from repertorio.core.keys import canonicalize, related_keys


def run_keys(args: Namespace, *, output_sink=print) -> int:
    canonical = canonicalize(args.key)
    related = related_keys(args.key)
    if canonical is None:
        human = (f"{args.key}: unknown key",)
    else:
        human = (
            f"key: {canonical}",
            f"related: {' '.join(related)}",
        )
    emit_output(
        command="keys",
        payload={
            "input": args.key,
            "canonical": canonical,
            "related": related,
        },
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=human,
    )
    return 0 if canonical is not None else 1

"""Deterministic CLI output helpers.

Every command (normalize, keys, match, search, resolve-key) reports through
``emit_output``. With ``--json`` the payload goes out as one line:

    {"command": "keys", "data": {...}, "schema_version": "v1"}

Keys are sorted and output is ASCII-only, so the same query against the
same catalogs and settings always prints the same bytes.
"""

from __future__ import annotations

import json
from typing import Iterable

SCHEMA_VERSION = "v1"


def emit_output(
    *,
    command: str,
    payload: dict,
    json_output: bool,
    output_sink=print,
    human_lines: Iterable[str] = (),
) -> None:
    """Emit one command result as a JSON envelope or as human-readable lines.

    Args:
        command: CLI command name, echoed in the envelope
        payload: JSON-serializable command result
        json_output: Emit the envelope instead of ``human_lines``
        output_sink: Callable receiving each output line
        human_lines: Lines the command prepared for terminal output
    """
    if json_output:
        envelope = {
            "schema_version": SCHEMA_VERSION,
            "command": command,
            "data": payload,
        }
        output_sink(
            json.dumps(
                envelope,
                sort_keys=True,
                separators=(",", ":"),
                ensure_ascii=True,
            )
        )
        return
    for line in human_lines:
        output_sink(line)

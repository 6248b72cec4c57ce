"""Error taxonomy and exit code mapping for CLI.

Exit codes:

- 0: the command produced a result (a match, ranked songs, a resolved key)
- 1: the command ran but found nothing, or failed unexpectedly
- 2: bad usage or a record breaking its contract
- 3: a catalog, settings or observations file could not be read
"""

from __future__ import annotations


class RepertorioError(Exception):
    """Base error for deterministic CLI exit codes."""

    exit_code: int = 1


class ValidationError(RepertorioError):
    """Invalid input, raised instead of coercing.

    Covers bad CLI usage (empty search query, ``--text`` mixed with
    ``--artist``/``--title``), invalid settings values, and collaborator
    records breaking their contract: a ``CandidateSong`` with a non-string
    title or artist or an unknown origin, or a ``KeyObservation`` whose
    confidence is outside [0, 100].
    """

    exit_code = 2


class RuntimeFailure(RepertorioError):
    """Unexpected runtime failure."""

    exit_code = 1


class IOFailure(RepertorioError):
    """A catalog, settings or observations file is unreadable or not JSON."""

    exit_code = 3


def exit_code_for_exception(exc: BaseException) -> int:
    """Resolve a deterministic exit code for an exception.

    ``OSError`` (a missing catalog file, say) counts as ``IOFailure``;
    anything outside the taxonomy counts as ``RuntimeFailure``.
    """
    if isinstance(exc, RepertorioError):
        return exc.exit_code
    if isinstance(exc, OSError):
        return IOFailure.exit_code
    return RuntimeFailure.exit_code

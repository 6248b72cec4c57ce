"""Aggregate candidates from every source into one ranked result list.

This module contains deterministic filtering, deduplication and scoring.
Source I/O happens before ``search`` is called; it only sees the candidate
records the adapters produced.

Scoring (v1) adds a match-strength bonus to an origin base. The gap between
strength levels is larger than any origin/agreement/penalty swing, so a
stronger textual match always outranks a weaker one, and among equal
matches the higher-priority origin never scores lower.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from repertorio.core.heuristics import DEFAULT_SEPARATOR, QueryGuess, parse_query
from repertorio.core.identity import (
    comparison_key,
    field_strength,
    has_version_marker,
    keys_overlap,
    match_strength,
)
from repertorio.core.models import CandidateSong, MatchStrength, Origin, RankedResult, SongQuery
from repertorio.errors import ValidationError

logger = logging.getLogger(__name__)


# Scoring constants (versioned)
SCORING_V1 = {
    "strength_bonus": {
        MatchStrength.EXACT: 80,
        MatchStrength.PARTIAL: 60,
        MatchStrength.LOOSE: 40,
    },
    "origin_base": {
        Origin.LOCAL: 12,
        Origin.SHARED_REPOSITORY: 6,
        Origin.EXTERNAL: 0,
    },
    "agreement_bonus": 2,
    "version_penalty": 2,
    "max_score": 100,
}

SCORING_VERSIONS = {
    "v1": SCORING_V1,
}


@dataclass
class _Group:
    """Candidates sharing one comparison-key (artist, title) pair."""

    index: int
    kept: CandidateSong
    strength: MatchStrength
    origins: list[Origin] = field(default_factory=list)


def search(
    query: SongQuery,
    candidates: Iterable[CandidateSong],
    *,
    scoring_version: str = "v1",
    separator: str = DEFAULT_SEPARATOR,
) -> list[RankedResult]:
    """Filter, deduplicate, score and order candidates for a query.

    Args:
        query: What the user asked for
        candidates: Records from every source, in encounter order
        scoring_version: Key into ``SCORING_VERSIONS``
        separator: Free-text artist/title separator

    Returns:
        A fresh list ordered by score, then origin priority, then
        encounter order
    """
    thresholds = SCORING_VERSIONS.get(scoring_version)
    if thresholds is None:
        raise ValidationError(f"Unknown scoring version: {scoring_version!r}")
    if query.is_empty:
        logger.debug("Empty query, nothing to rank")
        return []

    guess = parse_query(query, separator=separator)
    groups: dict[tuple[str, str], _Group] = {}

    for index, candidate in enumerate(candidates):
        strength = _grade(guess, candidate)
        if strength == MatchStrength.NONE:
            logger.debug("Dropping %r by %r: no match", candidate.title, candidate.artist)
            continue

        key = (comparison_key(candidate.artist), comparison_key(candidate.title))
        group = groups.get(key)
        if group is None:
            groups[key] = _Group(index=index, kept=candidate, strength=strength, origins=[candidate.origin])
            continue

        if candidate.origin not in group.origins:
            group.origins.append(candidate.origin)
        if candidate.origin.priority < group.kept.origin.priority:
            logger.debug(
                "Collapsing %s duplicate of %r into %s record",
                group.kept.origin.value,
                candidate.title,
                candidate.origin.value,
            )
            group.index = index
            group.kept = candidate
            group.strength = strength

    results = [
        (group.index, _rank(group, thresholds))
        for group in groups.values()
    ]
    results.sort(key=lambda item: (-item[1].score, item[1].origin.priority, item[0]))
    return [result for _, result in results]


def score_candidate(
    strength: MatchStrength,
    origin: Origin,
    *,
    agreeing: int = 1,
    alternate_version: bool = False,
    thresholds: dict = SCORING_V1,
) -> float:
    """Score one deduplicated candidate (0-100)."""
    if strength == MatchStrength.NONE:
        return 0.0
    score = thresholds["strength_bonus"][strength] + thresholds["origin_base"][origin]
    score += thresholds["agreement_bonus"] * max(0, agreeing - 1)
    if alternate_version:
        score -= thresholds["version_penalty"]
    return float(min(max(score, 0), thresholds["max_score"]))


def _rank(group: _Group, thresholds: dict) -> RankedResult:
    kept = group.kept
    score = score_candidate(
        group.strength,
        kept.origin,
        agreeing=len(group.origins),
        alternate_version=has_version_marker(kept.title),
        thresholds=thresholds,
    )
    agreeing = tuple(sorted(group.origins, key=lambda origin: origin.priority))
    return RankedResult(
        candidate=kept,
        score=score,
        origin=kept.origin,
        strength=group.strength,
        agreeing_origins=agreeing,
    )


def _grade(guess: QueryGuess, candidate: CandidateSong) -> MatchStrength:
    if not guess.is_guess:
        return _grade_structured(guess, candidate)
    return _grade_free_text(guess, candidate)


def _grade_structured(guess: QueryGuess, candidate: CandidateSong) -> MatchStrength:
    if guess.has_both:
        return match_strength(guess.artist, guess.title, candidate.artist, candidate.title)
    # Single-field structured query: the field is known, only compare it
    if guess.title.strip():
        return field_strength(comparison_key(guess.title), comparison_key(candidate.title))
    return field_strength(comparison_key(guess.artist), comparison_key(candidate.artist))


def _grade_free_text(guess: QueryGuess, candidate: CandidateSong) -> MatchStrength:
    if guess.has_both:
        for pair in (guess, guess.swapped()):
            strength = match_strength(pair.artist, pair.title, candidate.artist, candidate.title)
            if strength != MatchStrength.NONE:
                return strength

    # The split was only a guess: fall back to single-field containment
    # against the whole text (both halves, so the separator cuts nothing)
    text_key = comparison_key(guess.artist) + comparison_key(guess.title)
    title_key = comparison_key(candidate.title)
    artist_key = comparison_key(candidate.artist)
    if not text_key:
        return MatchStrength.NONE
    if text_key == title_key or (
        title_key and artist_key and text_key in (artist_key + title_key, title_key + artist_key)
    ):
        return MatchStrength.EXACT
    if text_key == artist_key:
        return MatchStrength.PARTIAL
    if keys_overlap(text_key, title_key) or keys_overlap(text_key, artist_key):
        return MatchStrength.LOOSE
    return MatchStrength.NONE


def rank_sources(results: Sequence[RankedResult]) -> dict[Origin, int]:
    """Count results per origin, for summaries."""
    counts = {origin: 0 for origin in Origin}
    for result in results:
        counts[result.origin] += 1
    return counts

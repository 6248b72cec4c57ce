"""Pick one authoritative key from several sources' key observations.

Resolution is deterministic: observations are canonicalized through the
key table, unknown spellings are discarded, and ties are broken by support
count and then by input order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from repertorio.core.keys import canonicalize
from repertorio.core.models import KeyObservation

logger = logging.getLogger(__name__)


class ConfidenceBand(str, Enum):
    """Advisory confidence levels for displaying a resolved key."""

    HIGH = "HIGH"  # high confidence / single authoritative source
    AGREEMENT = "AGREEMENT"  # cross-source agreement
    ESTIMATE = "ESTIMATE"  # best-effort estimate

    @property
    def description(self) -> str:
        return _BAND_DESCRIPTIONS[self]


_BAND_DESCRIPTIONS = {
    ConfidenceBand.HIGH: "high confidence / single authoritative source",
    ConfidenceBand.AGREEMENT: "cross-source agreement",
    ConfidenceBand.ESTIMATE: "best-effort estimate",
}

BAND_THRESHOLDS = {
    "high_min_confidence": 80,
    "agreement_min_confidence": 60,
}


def confidence_band(confidence: float) -> ConfidenceBand:
    """Map a confidence number to its display band."""
    if confidence >= BAND_THRESHOLDS["high_min_confidence"]:
        return ConfidenceBand.HIGH
    if confidence >= BAND_THRESHOLDS["agreement_min_confidence"]:
        return ConfidenceBand.AGREEMENT
    return ConfidenceBand.ESTIMATE


@dataclass(frozen=True)
class ResolvedKey:
    """The key chosen for a song, with the evidence behind it."""

    key: str
    confidence: float
    provenance: str
    supporting: int = 1

    @property
    def band(self) -> ConfidenceBand:
        return confidence_band(self.confidence)


@dataclass
class _KeyTally:
    first_index: int
    best: KeyObservation
    count: int = 0


def resolve_key(observations: Iterable[KeyObservation]) -> Optional[ResolvedKey]:
    """Resolve a single key from per-source observations.

    Args:
        observations: Key observations in the order the sources reported them

    Returns:
        The resolved key, or None when no observation names a known key

    Examples:
        >>> resolve_key([])
        >>> resolve_key([
        ...     KeyObservation("C", 90, "siteA"),
        ...     KeyObservation("Am", 40, "siteB"),
        ... ]).key
        'C'
    """
    tallies: dict[str, _KeyTally] = {}
    for index, observation in enumerate(observations):
        canonical = canonicalize(observation.key)
        if canonical is None:
            logger.debug(
                "Discarding key observation %r from %s: unknown key",
                observation.key,
                observation.provenance,
            )
            continue
        tally = tallies.get(canonical)
        if tally is None:
            tally = _KeyTally(first_index=index, best=observation)
            tallies[canonical] = tally
        elif observation.confidence > tally.best.confidence:
            tally.best = observation
        tally.count += 1

    if not tallies:
        return None

    def sort_key(item: tuple[str, _KeyTally]) -> tuple[float, int, int]:
        _, tally = item
        return (-tally.best.confidence, -tally.count, tally.first_index)

    key, winner = min(tallies.items(), key=sort_key)
    if len(tallies) > 1:
        logger.debug(
            "Resolved conflicting keys %s to %s (confidence %s)",
            sorted(tallies),
            key,
            winner.best.confidence,
        )
    return ResolvedKey(
        key=key,
        confidence=winner.best.confidence,
        provenance=winner.best.provenance,
        supporting=winner.count,
    )

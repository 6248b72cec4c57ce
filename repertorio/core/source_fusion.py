"""Source fusion utilities for deterministic multi-source candidate collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol

from repertorio.core.models import CandidateSong, Origin, SongQuery

logger = logging.getLogger(__name__)


class CandidateSource(Protocol):
    """Abstract interface for anything that yields candidate songs.

    Local stores, the shared repository and external search all implement
    this independently; the ranker depends only on the records.
    """

    def search(self, query: SongQuery) -> list[CandidateSong]:
        """Return candidates for the query.

        Results must be deterministically ordered by the source.
        """
        ...


@dataclass(frozen=True)
class NamedSource:
    name: str
    origin: Origin
    source: CandidateSource


class CombinedSource:
    """Combine multiple sources with deterministic ordering.

    Sources are queried in origin priority order (stable within an origin).
    A source that raises is logged and skipped; the others still answer.
    Deduplication is left to the ranker so agreement between sources can
    be scored.
    """

    def __init__(self, sources: Iterable[NamedSource]) -> None:
        self._sources = tuple(sorted(sources, key=lambda named: named.origin.priority))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(named.name for named in self._sources)

    def search(self, query: SongQuery) -> list[CandidateSong]:
        candidates: list[CandidateSong] = []
        for named in self._sources:
            try:
                result = named.source.search(query)
            except Exception as exc:
                logger.warning("Source %s failed for %r: %s", named.name, query, exc)
                continue
            candidates.extend(self._ensure_origin(origin=named.origin, candidates=result))
        return candidates

    def _ensure_origin(self, *, origin: Origin, candidates: Iterable[CandidateSong]) -> list[CandidateSong]:
        return [candidate.with_origin(origin) for candidate in candidates]

"""Application bootstrap with dependency injection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .core.heuristics import looks_swapped
from .core.key_resolver import ResolvedKey, resolve_key
from .core.keys import related_keys
from .core.models import KeyObservation, Origin, RankedResult, SongQuery
from .core.ranking import search
from .core.source_fusion import CombinedSource, NamedSource
from .settings import Settings
from .sources.catalog import JsonCatalogSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyReport:
    """A resolved key with its related keys, ready for display."""

    resolved: ResolvedKey
    related: tuple[str, ...]


class RepertorioApp:
    """Main application with dependency injection."""

    def __init__(
        self,
        sources: Iterable[NamedSource],
        settings: Optional[Settings] = None,
    ):
        """Initialize the application.

        Args:
            sources: Named candidate sources (local store, shared repository,
                external search)
            settings: Ranking settings; defaults when omitted
        """
        self.settings = settings or Settings()
        self.sources = CombinedSource(sources)

    def find_song(self, query: SongQuery) -> list[RankedResult]:
        """Collect candidates from every source and rank them."""
        if query.is_empty:
            return []

        if (
            not query.is_free_text
            and self.settings.known_artists
            and looks_swapped(query.artist, query.title, self.settings.known_artists)
        ):
            logger.info("Artist and title look swapped in %r; searching swapped", query)
            query = SongQuery.structured(artist=query.title, title=query.artist)

        candidates = self.sources.search(query)
        results = search(
            query,
            candidates,
            scoring_version=self.settings.scoring_version,
            separator=self.settings.free_text_separator,
        )
        results = [result for result in results if result.score >= self.settings.min_score]
        if self.settings.max_results:
            results = results[: self.settings.max_results]
        logger.debug("find_song %r: %d candidates, %d results", query, len(candidates), len(results))
        return results

    def resolve_song_key(self, observations: Iterable[KeyObservation]) -> Optional[KeyReport]:
        """Resolve a key from observations and attach its related keys."""
        resolved = resolve_key(observations)
        if resolved is None:
            return None
        return KeyReport(resolved=resolved, related=tuple(related_keys(resolved.key)))

    @classmethod
    def from_catalogs(
        cls,
        *,
        local: Optional[Path] = None,
        shared: Optional[Path] = None,
        external: Optional[Path] = None,
        settings: Optional[Settings] = None,
    ) -> RepertorioApp:
        """Create app with JSON catalog sources.

        Args:
            local: Catalog of the ministry's own repertoire
            shared: Catalog of the shared repository
            external: Pre-fetched external search results
            settings: Ranking settings

        Returns:
            RepertorioApp instance
        """
        sources: list[NamedSource] = []
        for name, path, origin in (
            ("local", local, Origin.LOCAL),
            ("shared", shared, Origin.SHARED_REPOSITORY),
            ("external", external, Origin.EXTERNAL),
        ):
            if path is not None:
                catalog = JsonCatalogSource(path, origin=origin)
                # Fail fast on a broken file instead of a skipped source at search time
                catalog.preload()
                sources.append(NamedSource(name, origin, catalog))
        return cls(sources, settings=settings)

"""List-backed candidate source."""

from __future__ import annotations

from typing import Iterable

from repertorio.core.identity import comparison_key, keys_overlap
from repertorio.core.models import CandidateSong, Origin, SongQuery


class InMemorySource:
    """Serve candidates from an in-memory song list.

    Pre-filters loosely (any query field overlapping the title or artist)
    so a large repertoire does not flood the ranker; the ranker applies
    the real match rules.
    """

    def __init__(self, songs: Iterable[CandidateSong], *, origin: Origin) -> None:
        self.origin = origin
        self._songs = tuple(song.with_origin(origin) for song in songs)

    def __len__(self) -> int:
        return len(self._songs)

    def search(self, query: SongQuery) -> list[CandidateSong]:
        terms = _query_terms(query)
        if not terms:
            return []
        matches: list[CandidateSong] = []
        for song in self._songs:
            title_key = comparison_key(song.title)
            artist_key = comparison_key(song.artist)
            if any(keys_overlap(term, title_key) or keys_overlap(term, artist_key) for term in terms):
                matches.append(song)
        return matches


def _query_terms(query: SongQuery) -> list[str]:
    if query.is_free_text:
        # The whole text, plus each side of a separator if there is one
        raw_terms = [query.free_text, *query.free_text.split(" - ")]
    else:
        raw_terms = [query.artist, query.title]
    terms: list[str] = []
    for raw in raw_terms:
        key = comparison_key(raw)
        if key and key not in terms:
            terms.append(key)
    return terms

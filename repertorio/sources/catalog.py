"""JSON-file candidate source.

A catalog file holds a JSON array of song records::

    [{"title": "Oceanos", "artist": "Hillsong", "key": "D", "id": "42"}]

Records may carry their own ``origin``; the catalog's declared origin wins.
Saved web search results may carry only a ``page_title``
(``"Artist - Song (Letra) - Site"``), which is split into artist and title.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from repertorio.core.heuristics import parse_result_title
from repertorio.core.models import CandidateSong, Origin, SongQuery
from repertorio.errors import IOFailure, ValidationError
from repertorio.sources.memory import InMemorySource

logger = logging.getLogger(__name__)


class JsonCatalogSource:
    """Candidate source backed by a JSON catalog file.

    The file is read lazily on first search and kept for the lifetime of
    the source.
    """

    def __init__(self, path: Path, *, origin: Origin) -> None:
        self.path = Path(path)
        self.origin = origin
        self._delegate: InMemorySource | None = None

    def search(self, query: SongQuery) -> list[CandidateSong]:
        return self.preload().search(query)

    def songs(self) -> list[CandidateSong]:
        return load_catalog(self.path, origin=self.origin)

    def preload(self) -> InMemorySource:
        """Read the catalog now, surfacing file errors to the caller."""
        if self._delegate is None:
            self._delegate = InMemorySource(self.songs(), origin=self.origin)
            logger.debug("Loaded %d songs from %s", len(self._delegate), self.path)
        return self._delegate


def load_catalog(path: Path, *, origin: Origin) -> list[CandidateSong]:
    """Read and validate a catalog file.

    Raises:
        IOFailure: file unreadable or not JSON
        ValidationError: records do not follow the candidate contract
    """
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise IOFailure(f"Catalog {path} is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise ValidationError(f"Catalog {path} must contain a JSON array")
    songs: list[CandidateSong] = []
    for position, record in enumerate(payload):
        if not isinstance(record, dict):
            raise ValidationError(f"Catalog {path} entry {position} is not an object")
        songs.append(CandidateSong.from_dict(_split_page_title(record), origin=origin))
    return songs


def _split_page_title(record: dict) -> dict:
    page_title = record.get("page_title")
    if record.get("title") or record.get("artist") or not isinstance(page_title, str):
        return record
    parsed = parse_result_title(page_title)
    if parsed is None:
        logger.debug("Page title %r has no artist separator, using it as the title", page_title)
        return {**record, "artist": "", "title": page_title.strip()}
    artist, title = parsed
    return {**record, "artist": artist, "title": title}

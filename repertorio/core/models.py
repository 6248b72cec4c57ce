"""Record types shared by the song-identity pipeline.

Every record here is immutable and created fresh per call; nothing in this
package persists them. Collaborator-facing records validate their contract
in ``__post_init__`` and raise ``ValidationError`` instead of coercing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Mapping, Optional

from repertorio.errors import ValidationError


class Origin(str, Enum):
    """Where a candidate song record came from."""

    LOCAL = "local"  # the ministry's own repertoire
    SHARED_REPOSITORY = "shared"  # cross-ministry shared catalog
    EXTERNAL = "external"  # third-party search

    @property
    def priority(self) -> int:
        """Rank of this origin; lower wins."""
        return _ORIGIN_PRIORITY[self]

    @classmethod
    def parse(cls, value: Any) -> Origin:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown origin: {value!r}") from None


_ORIGIN_PRIORITY = {
    Origin.LOCAL: 0,
    Origin.SHARED_REPOSITORY: 1,
    Origin.EXTERNAL: 2,
}


class MatchStrength(IntEnum):
    """How strongly a candidate's text matches a query."""

    NONE = 0
    LOOSE = 1  # containment only
    PARTIAL = 2  # one field equal, the other contained
    EXACT = 3  # every compared field equal


@dataclass(frozen=True)
class NormalizedText:
    """A string in display form and in comparison-key form."""

    display: str
    comparison_key: str

    @property
    def has_signal(self) -> bool:
        """False when nothing usable survived normalization."""
        return bool(self.comparison_key)


@dataclass(frozen=True)
class SongQuery:
    """What the user typed: free text, or an (artist, title) pair."""

    free_text: str = ""
    artist: str = ""
    title: str = ""

    @classmethod
    def from_text(cls, text: str) -> SongQuery:
        return cls(free_text=text or "")

    @classmethod
    def structured(cls, artist: str, title: str) -> SongQuery:
        return cls(artist=artist or "", title=title or "")

    @property
    def is_empty(self) -> bool:
        return not (self.free_text.strip() or self.artist.strip() or self.title.strip())

    @property
    def is_free_text(self) -> bool:
        return bool(self.free_text.strip()) and not (self.artist.strip() or self.title.strip())


@dataclass(frozen=True)
class CandidateSong:
    """A song record emitted by a source adapter."""

    title: str
    artist: str
    origin: Origin
    raw_key: Optional[str] = None
    source_confidence: Optional[float] = None
    source_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not isinstance(self.artist, str):
            raise ValidationError("Candidate title and artist must be strings")
        if not isinstance(self.origin, Origin):
            raise ValidationError(f"Unknown origin: {self.origin!r}")
        if self.source_confidence is not None:
            _check_confidence(self.source_confidence, what="source_confidence")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, origin: Optional[Origin] = None) -> CandidateSong:
        """Build a candidate from a collaborator record.

        ``origin`` overrides whatever the record declares; adapters use it to
        stamp their own provenance.
        """
        resolved_origin = origin if origin is not None else Origin.parse(data.get("origin"))
        source_id = data.get("source_id", data.get("id"))
        return cls(
            title=data.get("title", ""),
            artist=data.get("artist", ""),
            origin=resolved_origin,
            raw_key=data.get("key") or data.get("raw_key") or None,
            source_confidence=data.get("source_confidence"),
            source_id=str(source_id) if source_id is not None else None,
        )

    def with_origin(self, origin: Origin) -> CandidateSong:
        if origin == self.origin:
            return self
        return CandidateSong(
            title=self.title,
            artist=self.artist,
            origin=origin,
            raw_key=self.raw_key,
            source_confidence=self.source_confidence,
            source_id=self.source_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "artist": self.artist,
            "origin": self.origin.value,
            "raw_key": self.raw_key,
            "source_confidence": self.source_confidence,
            "source_id": self.source_id,
        }


@dataclass(frozen=True)
class RankedResult:
    """A deduplicated candidate with its relevance score (0-100)."""

    candidate: CandidateSong
    score: float
    origin: Origin
    strength: MatchStrength
    agreeing_origins: tuple[Origin, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.candidate.title,
            "artist": self.candidate.artist,
            "origin": self.origin.value,
            "score": self.score,
            "strength": self.strength.name,
            "agreeing_origins": [origin.value for origin in self.agreeing_origins],
            "raw_key": self.candidate.raw_key,
            "source_id": self.candidate.source_id,
        }


@dataclass(frozen=True)
class KeyObservation:
    """One source's claim about a song's key."""

    key: str
    confidence: float
    provenance: str

    def __post_init__(self) -> None:
        if not isinstance(self.key, str):
            raise ValidationError("Key observation key must be a string")
        _check_confidence(self.confidence, what="confidence")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> KeyObservation:
        return cls(
            key=data.get("key", ""),
            confidence=data.get("confidence", 0),
            provenance=str(data.get("provenance", "")),
        )


def _check_confidence(value: Any, *, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{what} must be a number, got {value!r}")
    if not 0 <= value <= 100:
        raise ValidationError(f"{what} must be within [0, 100], got {value!r}")

"""Song-identity resolution for worship-team repertoires."""

from .core.identity import is_match, normalize
from .core.key_resolver import ConfidenceBand, ResolvedKey, confidence_band, resolve_key
from .core.keys import canonicalize, related_keys
from .core.models import (
    CandidateSong,
    KeyObservation,
    NormalizedText,
    Origin,
    RankedResult,
    SongQuery,
)
from .core.ranking import search

__version__ = "0.1.0"

__all__ = [
    "normalize",
    "related_keys",
    "canonicalize",
    "is_match",
    "search",
    "resolve_key",
    "confidence_band",
    "ConfidenceBand",
    "CandidateSong",
    "KeyObservation",
    "NormalizedText",
    "Origin",
    "RankedResult",
    "ResolvedKey",
    "SongQuery",
]

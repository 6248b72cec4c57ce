"""Turn search-result text into key observations.

Chord and lyric sites usually print the key next to a marker ("Tom: G",
"Tonalidade: Em", "Key: D"). A marked key is strong evidence; failing that,
bare key tokens across all snippets are counted and the most frequent one
becomes a weaker estimate.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Iterable, Optional

from repertorio.core.keys import canonicalize
from repertorio.core.models import KeyObservation

logger = logging.getLogger(__name__)

MARKED_KEY_PATTERN = re.compile(
    r"\b(?:tom|tonalidade|key)\b\s*:?\s*(?P<key>[A-G][#b♯♭]?m?)(?![A-Za-z0-9#])",
    flags=re.IGNORECASE,
)
BARE_KEY_PATTERN = re.compile(r"(?<![A-Za-z0-9#])([A-G][#b]?m?)(?![A-Za-z0-9#])")

EXTRACTION_CONFIDENCE = {
    "marked": 85,
    "chord_sheet": 80,
    "frequency_base": 60,
    "frequency_step": 5,
    "frequency_cap": 90,
}


def extract_marked_key(text: Optional[str]) -> Optional[str]:
    """Return the canonical key following a key marker, if any.

    Examples:
        >>> extract_marked_key("Cifra de Oceanos - Tom: D")
        'D'
        >>> extract_marked_key("Tonalidade: Ebm")
        'D#m'
        >>> extract_marked_key("no key here") is None
        True
    """
    if not text:
        return None
    for match in MARKED_KEY_PATTERN.finditer(text):
        # The tonic letter is case-sensitive even though the marker is not
        raw = match.group("key")
        if not raw[0].isupper():
            continue
        canonical = canonicalize(raw)
        if canonical is not None:
            return canonical
    return None


def observations_from_snippets(snippets: Iterable[str], provenance: str) -> list[KeyObservation]:
    """Build key observations from search result snippets and titles.

    Returns at most one observation: the first marked key at high
    confidence, otherwise the most frequent bare key token with a
    confidence that grows with its count.
    """
    texts = [text for text in snippets if text]
    for text in texts:
        key = extract_marked_key(text)
        if key is not None:
            return [KeyObservation(key=key, confidence=EXTRACTION_CONFIDENCE["marked"], provenance=provenance)]

    counts: Counter[str] = Counter()
    for text in texts:
        for token in BARE_KEY_PATTERN.findall(text):
            canonical = canonicalize(token)
            if canonical is not None:
                counts[canonical] += 1
    if not counts:
        logger.debug("No key tokens found in %d snippets from %s", len(texts), provenance)
        return []

    # most_common keeps first-seen order among equal counts
    key, count = counts.most_common(1)[0]
    confidence = min(
        EXTRACTION_CONFIDENCE["frequency_base"] + EXTRACTION_CONFIDENCE["frequency_step"] * count,
        EXTRACTION_CONFIDENCE["frequency_cap"],
    )
    return [KeyObservation(key=key, confidence=confidence, provenance=f"{provenance} (text analysis)")]


def observation_from_chord_sheet(key: Optional[str], source: str) -> Optional[KeyObservation]:
    """Observation for a key printed on a chord sheet found via search."""
    if not key or canonicalize(key) is None:
        return None
    return KeyObservation(key=key, confidence=EXTRACTION_CONFIDENCE["chord_sheet"], provenance=source)


def observations_from_search(
    snippets: Iterable[str],
    provenance: str,
    *,
    chord_key: Optional[str] = None,
    chord_source: str = "chord sheet",
) -> list[KeyObservation]:
    """Key observations for one web search.

    Snippet text is tried first; a key printed on a chord sheet found by
    the same search is used only when the snippets name no key.
    """
    observations = observations_from_snippets(snippets, provenance)
    if observations:
        return observations
    fallback = observation_from_chord_sheet(chord_key, chord_source)
    if fallback is None:
        return []
    logger.debug("No key in snippets from %s, using %s key %s", provenance, chord_source, chord_key)
    return [fallback]

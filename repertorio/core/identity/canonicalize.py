"""Pure normalization functions for song titles and artist names.

This module provides the authoritative normalization layer with two
distinct forms of the same string:

1. **Display form** (`display_title`):
   - Strips version noise: parenthetical/bracketed remarks, trailing
     " - ..." segments, featured-artist tails, live/acoustic/cover markers
   - Preserves diacritics and casing
   - Example: "Oceanos (Ao Vivo)" → "Oceanos"

2. **Comparison key** (`comparison_key`):
   - Aggressive normalization for matching and deduplication
   - Strips diacritics, removes everything outside [a-z0-9]
   - Example: "Ressuscita-me" → "ressuscitame"

All functions are pure and never raise for string input.
"""

from __future__ import annotations

import re
import unicodedata

from repertorio.core.models import NormalizedText


# Patterns for noise removal (applied in this order)
_PAREN_PATTERN = re.compile(r"\([^)]*\)")
_BRACKET_PATTERN = re.compile(r"\[[^\]]*\]")
_DASH_SUFFIX_PATTERN = re.compile(r"\s[-–—]\s.*$")

_FEAT_TAIL_PATTERN = re.compile(
    r"(?<=\S)\s(?:feat|featuring|ft)\b\.?.*$",
    flags=re.IGNORECASE,
)

_MARKER_PATTERN = re.compile(
    r"\b(?:ao\s+vivo|ac[uú]stico|acoustic|live|cover)\b",
    flags=re.IGNORECASE,
)

# Wider net used only to flag alternate versions, never to edit text
_VERSION_PATTERN = re.compile(
    r"\b(?:ao\s+vivo|ac[uú]stic[oa]?|acoustic|live|cover|remix)\b",
    flags=re.IGNORECASE,
)

_STRAY_BRACKETS = re.compile(r"[()\[\]]")
_WHITESPACE = re.compile(r"\s+")
_EDGE_SEPARATORS = " \t-–—:,;|/"


# ============================================================================
# Display Form (Human-Readable)
# ============================================================================


def display_title(raw: str) -> str:
    """Strip version noise from a title or artist name for display.

    Args:
        raw: Free-text title or artist name as reported by a source

    Returns:
        Noise-free display string (may be empty)

    Examples:
        >>> display_title("Oceanos (Live)")
        'Oceanos'
        >>> display_title("Song - Acoustic Version")
        'Song'
        >>> display_title("Lugar Secreto feat. Gabriela Rocha")
        'Lugar Secreto'
        >>> display_title("(Ao Vivo)")
        ''
    """
    if not raw:
        return ""

    cleaned = unicodedata.normalize("NFKC", raw).strip()

    # Removing a marker can expose a new " - " suffix, so run to a fixed point
    while True:
        stripped = _strip_noise(cleaned)
        if stripped == cleaned:
            return stripped
        cleaned = stripped


def _strip_noise(value: str) -> str:
    # Later patterns expect single spaces between tokens
    cleaned = _WHITESPACE.sub(" ", value)
    cleaned = _PAREN_PATTERN.sub(" ", cleaned)
    cleaned = _BRACKET_PATTERN.sub(" ", cleaned)
    cleaned = _DASH_SUFFIX_PATTERN.sub("", cleaned)
    cleaned = _FEAT_TAIL_PATTERN.sub("", cleaned)
    cleaned = _MARKER_PATTERN.sub(" ", cleaned)
    cleaned = _STRAY_BRACKETS.sub(" ", cleaned)

    cleaned = _WHITESPACE.sub(" ", cleaned)
    return cleaned.strip(_EDGE_SEPARATORS)


# ============================================================================
# Comparison Key (Aggressive Equivalence)
# ============================================================================


def comparison_key(raw: str) -> str:
    """Create the comparison key for a title or artist name.

    The key is computed from the display form, falling back to the raw
    input when nothing survives noise removal. Used for equality and
    containment checks, NOT for display.

    Examples:
        >>> comparison_key("Ressuscita-me")
        'ressuscitame'
        >>> comparison_key("Aline Barros")
        'alinebarros'
        >>> comparison_key("Acústico")
        'acustico'
    """
    if not raw:
        return ""
    display = display_title(raw)
    return _fold(display or raw)


def normalize(raw: str) -> NormalizedText:
    """Normalize a string into its display and comparison forms.

    Always succeeds; empty input yields empty strings in both fields.
    An empty ``comparison_key`` means "no usable signal".
    """
    if not raw:
        return NormalizedText(display="", comparison_key="")
    display = display_title(raw)
    return NormalizedText(display=display, comparison_key=_fold(display or raw))


def has_version_marker(raw: str) -> bool:
    """True when a raw title advertises a live/acoustic/cover/remix version."""
    if not raw:
        return False
    return bool(_VERSION_PATTERN.search(unicodedata.normalize("NFKC", raw)))


def _fold(value: str) -> str:
    # NFKD separates base chars from diacritics, then combining marks are dropped
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]+", "", stripped.lower())

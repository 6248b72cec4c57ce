"""Match validation between a query and a candidate song.

Matching works on comparison keys only. Containment is checked in both
directions so that "Oceans" matches "Oceans Where Feet May Fail" and vice
versa, but an empty key never matches anything: without that guard an
empty artist field would be "contained" in every artist.
"""

from __future__ import annotations

from repertorio.core.identity.canonicalize import comparison_key
from repertorio.core.models import MatchStrength


def keys_overlap(left: str, right: str) -> bool:
    """Bidirectional containment of two comparison keys; empty keys never overlap."""
    if not left or not right:
        return False
    return left in right or right in left


def field_strength(query_key: str, candidate_key: str) -> MatchStrength:
    """Grade a single field pair of comparison keys."""
    if not keys_overlap(query_key, candidate_key):
        return MatchStrength.NONE
    if query_key == candidate_key:
        return MatchStrength.EXACT
    return MatchStrength.LOOSE


def is_match(
    query_artist: str,
    query_song: str,
    candidate_artist: str,
    candidate_song: str,
) -> bool:
    """Check whether a candidate plausibly is the queried song.

    Both the artist pair and the song pair must overlap; a strong title
    match with a different artist is not a match.

    Examples:
        >>> is_match("Aline Barros", "Ressuscita-me", "aline barros", "Ressuscita me (Ao Vivo)")
        True
        >>> is_match("Hillsong", "Oceans", "Fernandinho", "Oceans")
        False
    """
    return match_strength(query_artist, query_song, candidate_artist, candidate_song) != MatchStrength.NONE


def match_strength(
    query_artist: str,
    query_song: str,
    candidate_artist: str,
    candidate_song: str,
) -> MatchStrength:
    """Grade how well a candidate matches an (artist, song) query.

    Returns:
        EXACT when both comparison keys are equal, PARTIAL when exactly one
        is, LOOSE when both only overlap, NONE when either pair fails
    """
    artist = field_strength(comparison_key(query_artist), comparison_key(candidate_artist))
    song = field_strength(comparison_key(query_song), comparison_key(candidate_song))
    return combine_strengths(artist, song)


def combine_strengths(artist: MatchStrength, song: MatchStrength) -> MatchStrength:
    if artist == MatchStrength.NONE or song == MatchStrength.NONE:
        return MatchStrength.NONE
    exact = (artist == MatchStrength.EXACT) + (song == MatchStrength.EXACT)
    if exact == 2:
        return MatchStrength.EXACT
    if exact == 1:
        return MatchStrength.PARTIAL
    return MatchStrength.LOOSE

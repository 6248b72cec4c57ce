"""Heuristics for guessing (artist, title) from free text.

Free-text splitting is a guess: ``parse_query`` uses one unambiguous rule
(a literal " - " separator, artist first) and the ranker compensates with
looser matching when the guess is wrong.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from repertorio.core.identity import comparison_key
from repertorio.core.models import SongQuery

DEFAULT_SEPARATOR = " - "

_DASH_CHARS = "-–—"
RESULT_SPLIT_PATTERN = re.compile(rf"\s[{_DASH_CHARS}]\s")
RESULT_SITE_SUFFIX = re.compile(r"\s?\|.*$")
CHORD_SITE_PATTERN = re.compile(r"\bcifra\b", flags=re.IGNORECASE)


@dataclass(slots=True)
class QueryGuess:
    """Working (artist, title) pair derived from a query."""

    artist: str = ""
    title: str = ""
    is_guess: bool = False

    @property
    def has_both(self) -> bool:
        return bool(self.artist.strip()) and bool(self.title.strip())

    def swapped(self) -> QueryGuess:
        return QueryGuess(artist=self.title, title=self.artist, is_guess=self.is_guess)


def parse_query(query: SongQuery, separator: str = DEFAULT_SEPARATOR) -> QueryGuess:
    """Turn a query into a working (artist, title) pair.

    Structured queries pass through unchanged. Free text is split on the
    first ``separator`` into artist and title; without a separator the
    whole string is the title and the artist is empty.

    Examples:
        >>> parse_query(SongQuery.from_text("Aline Barros - Ressuscita-me"))
        QueryGuess(artist='Aline Barros', title='Ressuscita-me', is_guess=True)
        >>> parse_query(SongQuery.from_text("Oceans"))
        QueryGuess(artist='', title='Oceans', is_guess=True)
    """
    if not query.is_free_text:
        return QueryGuess(artist=query.artist.strip(), title=query.title.strip())

    text = query.free_text.strip()
    if separator and separator in text:
        artist, _, title = text.partition(separator)
        if artist.strip() and title.strip():
            return QueryGuess(artist=artist.strip(), title=title.strip(), is_guess=True)
    return QueryGuess(title=text, is_guess=True)


def parse_result_title(title: str) -> Optional[tuple[str, str]]:
    """Extract (artist, title) from a search result page title.

    Handles lyric-site titles ("Artist - Song (Letra) - Site") and chord-site
    titles ("Song - Artist - CIFRA CLUB"), where the order is reversed.

    Returns:
        (artist, title) or None when the title has no separator
    """
    if not title:
        return None
    cleaned = RESULT_SITE_SUFFIX.sub("", re.sub(r"\s+", " ", title).strip())
    parts = [part.strip() for part in RESULT_SPLIT_PATTERN.split(cleaned) if part.strip()]
    if len(parts) < 2:
        return None

    if len(parts) >= 3 and CHORD_SITE_PATTERN.search(parts[-1]):
        song, artist = parts[0], parts[1]
    else:
        artist, song = parts[0], parts[1]
    song = re.sub(r"\s?\(.*$", "", song).strip()
    if not artist or not song:
        return None
    return artist, song


def looks_swapped(artist: str, title: str, known_artists: Iterable[str]) -> bool:
    """True when the title field holds a known artist and the artist field does not."""
    title_key = comparison_key(title)
    artist_key = comparison_key(artist)
    if not title_key:
        return False
    for name in known_artists:
        name_key = comparison_key(name)
        if not name_key:
            continue
        if name_key in title_key and name_key not in artist_key:
            return True
    return False

"""Musical key relationships: relative keys and circle-of-fifths neighbors.

The table covers the 12 major keys and their relative minors. Position ``i``
of the major list pairs with position ``i`` of the minor list, and both
lists walk the circle of fifths, so neighbors are plain index arithmetic
modulo 12. Flat/sharp spellings outside the table resolve through
``ENHARMONIC_ALIASES``.

The table is built once at import and exposed read-only; it is safe to
share between threads.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Optional

MAJOR_KEYS: tuple[str, ...] = ("C", "G", "D", "A", "E", "B", "F#", "C#", "Ab", "Eb", "Bb", "F")
MINOR_KEYS: tuple[str, ...] = ("Am", "Em", "Bm", "F#m", "C#m", "G#m", "D#m", "A#m", "Fm", "Cm", "Gm", "Dm")

ENHARMONIC_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "Gb": "F#",
        "Db": "C#",
        "G#": "Ab",
        "D#": "Eb",
        "A#": "Bb",
        "Gbm": "F#m",
        "Dbm": "C#m",
        "Abm": "G#m",
        "Ebm": "D#m",
        "Bbm": "A#m",
    }
)

_KEY_PATTERN = re.compile(r"^(?P<tonic>[A-Ga-g])(?P<accidental>[#b]?)\s*(?P<mode>[A-Za-z]*)$")
_MINOR_MODES = {"min", "minor"}
_MAJOR_MODES = {"maj", "major"}


def _build_table() -> Mapping[str, tuple[str, ...]]:
    table: dict[str, tuple[str, ...]] = {}
    size = len(MAJOR_KEYS)
    for index, (major, minor) in enumerate(zip(MAJOR_KEYS, MINOR_KEYS)):
        table[major] = (
            major,
            minor,
            MAJOR_KEYS[(index + 1) % size],
            MAJOR_KEYS[(index + 11) % size],
        )
        table[minor] = (
            minor,
            major,
            MINOR_KEYS[(index + 1) % size],
            MINOR_KEYS[(index + 11) % size],
        )
    return MappingProxyType(table)


KEY_TABLE: Mapping[str, tuple[str, ...]] = _build_table()


def canonicalize(key: str) -> Optional[str]:
    """Resolve a key spelling to its canonical table entry.

    Accepts enharmonic spellings, ``♯``/``♭``, a lowercase tonic and
    spelled-out modes.

    Examples:
        >>> canonicalize("Gb")
        'F#'
        >>> canonicalize("a minor")
        'Am'
        >>> canonicalize("H") is None
        True
    """
    if not isinstance(key, str):
        return None
    spelled = _spell(key)
    if spelled is None:
        return None
    if spelled in KEY_TABLE:
        return spelled
    return ENHARMONIC_ALIASES.get(spelled)


def related_keys(key: str) -> list[str]:
    """Return the key, its relative key and its two circle-of-fifths neighbors.

    Unknown keys come back alone and unchanged.

    Examples:
        >>> related_keys("C")
        ['C', 'Am', 'G', 'F']
        >>> related_keys("Am")
        ['Am', 'C', 'Em', 'Dm']
        >>> related_keys("X")
        ['X']
    """
    canonical = canonicalize(key)
    if canonical is None:
        return [key]
    return list(KEY_TABLE[canonical])


def _spell(key: str) -> Optional[str]:
    text = key.strip().replace("♯", "#").replace("♭", "b")
    match = _KEY_PATTERN.match(text)
    if not match:
        return None
    mode = match.group("mode")
    # "m" is minor and "M" major; spelled-out modes are case-insensitive
    if mode == "m" or mode.lower() in _MINOR_MODES:
        suffix = "m"
    elif mode in ("", "M") or mode.lower() in _MAJOR_MODES:
        suffix = ""
    else:
        return None
    return f"{match.group('tonic').upper()}{match.group('accidental')}{suffix}"

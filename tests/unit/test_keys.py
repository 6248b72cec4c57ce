"""Unit tests for the key relationship table."""

from __future__ import annotations

import pytest

from repertorio.core.keys import (
    ENHARMONIC_ALIASES,
    KEY_TABLE,
    MAJOR_KEYS,
    MINOR_KEYS,
    canonicalize,
    related_keys,
)


class TestRelatedKeys:
    def test_major_key(self):
        assert related_keys("C") == ["C", "Am", "G", "F"]

    def test_minor_key(self):
        assert related_keys("Am") == ["Am", "C", "Em", "Dm"]

    def test_sharp_key(self):
        assert related_keys("F#") == ["F#", "D#m", "C#", "B"]

    def test_wraps_around_circle(self):
        assert related_keys("F") == ["F", "Dm", "C", "Bb"]
        assert related_keys("Dm") == ["Dm", "F", "Am", "Gm"]

    def test_enharmonic_spelling_matches(self):
        assert related_keys("Gb") == related_keys("F#")
        assert related_keys("Db") == related_keys("C#")
        assert related_keys("A#") == related_keys("Bb")
        assert related_keys("Ebm") == related_keys("D#m")

    def test_unknown_key_returns_itself(self):
        assert related_keys("H") == ["H"]
        assert related_keys("") == [""]
        assert related_keys("  nonsense ") == ["  nonsense "]

    def test_returns_fresh_list(self):
        first = related_keys("C")
        first.append("X")
        assert related_keys("C") == ["C", "Am", "G", "F"]

    @pytest.mark.parametrize("key", MAJOR_KEYS + MINOR_KEYS)
    def test_every_entry_has_four_table_keys(self, key):
        related = related_keys(key)
        assert len(related) == 4
        assert related[0] == key
        assert all(item in KEY_TABLE for item in related)

    @pytest.mark.parametrize("key", MAJOR_KEYS)
    def test_neighbors_are_symmetric(self, key):
        _, _, up, down = related_keys(key)
        assert related_keys(up)[3] == key
        assert related_keys(down)[2] == key


class TestCanonicalize:
    def test_table_keys_are_canonical(self):
        for key in KEY_TABLE:
            assert canonicalize(key) == key

    def test_enharmonic_aliases(self):
        assert canonicalize("Gb") == canonicalize("F#") == "F#"
        assert canonicalize("Abm") == "G#m"
        assert canonicalize("G#") == "Ab"

    def test_every_alias_resolves_to_table(self):
        for alias, target in ENHARMONIC_ALIASES.items():
            assert canonicalize(alias) == target
            assert target in KEY_TABLE

    def test_spelled_out_modes(self):
        assert canonicalize("C major") == "C"
        assert canonicalize("A minor") == "Am"
        assert canonicalize("Amin") == "Am"
        assert canonicalize("Ebmaj") == "Eb"

    def test_symbols_and_case(self):
        assert canonicalize(" f♯m ") == "F#m"
        assert canonicalize("B♭") == "Bb"
        assert canonicalize("bb") == "Bb"

    def test_unknown(self):
        assert canonicalize("H") is None
        assert canonicalize("Cb") is None
        assert canonicalize("Am7") is None
        assert canonicalize("") is None
        assert canonicalize(None) is None


class TestKeyTable:
    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            KEY_TABLE["C"] = ("C",)  # type: ignore[index]

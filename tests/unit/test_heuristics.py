"""Unit tests for free-text query heuristics."""

from __future__ import annotations

from repertorio.core.heuristics import (
    QueryGuess,
    looks_swapped,
    parse_query,
    parse_result_title,
)
from repertorio.core.models import SongQuery


class TestParseQuery:
    def test_structured_passes_through(self):
        guess = parse_query(SongQuery.structured(artist=" Hillsong ", title="Oceans"))
        assert guess == QueryGuess(artist="Hillsong", title="Oceans", is_guess=False)

    def test_free_text_with_separator(self):
        guess = parse_query(SongQuery.from_text("Aline Barros - Ressuscita-me"))
        assert guess == QueryGuess(artist="Aline Barros", title="Ressuscita-me", is_guess=True)

    def test_splits_on_first_separator_only(self):
        guess = parse_query(SongQuery.from_text("Hillsong - Oceans - Live"))
        assert guess.artist == "Hillsong"
        assert guess.title == "Oceans - Live"

    def test_free_text_without_separator_is_title(self):
        guess = parse_query(SongQuery.from_text("Oceans"))
        assert guess == QueryGuess(artist="", title="Oceans", is_guess=True)

    def test_hyphenated_word_is_not_a_separator(self):
        guess = parse_query(SongQuery.from_text("Ressuscita-me"))
        assert guess.artist == ""
        assert guess.title == "Ressuscita-me"

    def test_dangling_separator(self):
        guess = parse_query(SongQuery.from_text("Hillsong - "))
        assert guess == QueryGuess(artist="", title="Hillsong -", is_guess=True)

    def test_custom_separator(self):
        guess = parse_query(SongQuery.from_text("Hillsong / Oceans"), separator=" / ")
        assert (guess.artist, guess.title) == ("Hillsong", "Oceans")


class TestQueryGuess:
    def test_swapped(self):
        guess = QueryGuess(artist="A", title="B", is_guess=True)
        assert guess.swapped() == QueryGuess(artist="B", title="A", is_guess=True)


class TestParseResultTitle:
    def test_lyrics_site(self):
        assert parse_result_title("Aline Barros - Ressuscita-me (Letra) - LETRAS.MUS.BR") == (
            "Aline Barros",
            "Ressuscita-me",
        )

    def test_chord_site_reverses_order(self):
        assert parse_result_title("Oceanos - Hillsong - Cifra Club") == ("Hillsong", "Oceanos")

    def test_pipe_suffix(self):
        assert parse_result_title("Hillsong - Oceanos | YouTube") == ("Hillsong", "Oceanos")

    def test_collapses_whitespace(self):
        title = "Hillsong" + " " * 50000 + "-  Oceanos  |  YouTube"
        assert parse_result_title(title) == ("Hillsong", "Oceanos")

    def test_no_separator(self):
        assert parse_result_title("Oceanos | YouTube") is None
        assert parse_result_title("") is None


class TestLooksSwapped:
    def test_known_artist_in_title_field(self):
        assert looks_swapped("Oceanos", "Hillsong", ["Hillsong"])

    def test_correct_order(self):
        assert not looks_swapped("Hillsong", "Oceanos", ["Hillsong"])

    def test_artist_in_both_fields(self):
        assert not looks_swapped("Hillsong", "Hillsong Medley", ["Hillsong"])

    def test_no_known_artists(self):
        assert not looks_swapped("Oceanos", "Hillsong", [])
        assert not looks_swapped("Oceanos", "Hillsong", ["", "!!!"])

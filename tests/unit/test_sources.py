"""Unit tests for the in-memory and JSON catalog sources."""

from __future__ import annotations

import pytest

from repertorio.core.models import CandidateSong, Origin, SongQuery
from repertorio.errors import IOFailure, ValidationError
from repertorio.sources import InMemorySource, JsonCatalogSource, load_catalog


SONGS = [
    CandidateSong(title="Oceanos", artist="Hillsong", origin=Origin.LOCAL),
    CandidateSong(title="Ressuscita-me", artist="Aline Barros", origin=Origin.LOCAL),
    CandidateSong(title="Galileu", artist="Fernandinho", origin=Origin.LOCAL),
]


class TestInMemorySource:
    def test_structured_prefilter(self):
        source = InMemorySource(SONGS, origin=Origin.LOCAL)
        results = source.search(SongQuery.structured(artist="Aline Barros", title="Ressuscita me"))
        assert [song.title for song in results] == ["Ressuscita-me"]

    def test_free_text_uses_each_side(self):
        source = InMemorySource(SONGS, origin=Origin.LOCAL)
        results = source.search(SongQuery.from_text("Fernandinho - Galileu (Ao Vivo)"))
        assert [song.title for song in results] == ["Galileu"]

    def test_prefilter_is_loose(self):
        source = InMemorySource(SONGS, origin=Origin.LOCAL)
        results = source.search(SongQuery.structured(artist="Hillsong", title="Galileu"))
        assert [song.title for song in results] == ["Oceanos", "Galileu"]

    def test_empty_query(self):
        source = InMemorySource(SONGS, origin=Origin.LOCAL)
        assert source.search(SongQuery()) == []

    def test_restamps_origin(self):
        source = InMemorySource(SONGS, origin=Origin.SHARED_REPOSITORY)
        assert len(source) == 3
        assert {song.origin for song in source.search(SongQuery.from_text("Oceanos"))} == {
            Origin.SHARED_REPOSITORY
        }


class TestJsonCatalog:
    def test_load_catalog(self, write_catalog):
        path = write_catalog(
            "local",
            [
                {"title": "Oceanos", "artist": "Hillsong", "key": "D", "id": "42"},
                {"title": "Galileu", "artist": "Fernandinho", "origin": "external"},
            ],
        )
        songs = load_catalog(path, origin=Origin.LOCAL)
        assert songs[0] == CandidateSong(
            title="Oceanos", artist="Hillsong", origin=Origin.LOCAL, raw_key="D", source_id="42"
        )
        assert songs[1].origin == Origin.LOCAL

    def test_page_title_only_records(self, write_catalog):
        path = write_catalog(
            "external",
            [
                {"page_title": "Oceanos - Hillsong - Cifra Club", "key": "D"},
                {"page_title": "Aline Barros - Ressuscita-me (Letra) - LETRAS.MUS.BR"},
                {"page_title": "Galileu | YouTube"},
                {"title": "Way Maker", "artist": "Sinach", "page_title": "Ignored - Title"},
            ],
        )
        songs = load_catalog(path, origin=Origin.EXTERNAL)
        assert [(song.artist, song.title) for song in songs] == [
            ("Hillsong", "Oceanos"),
            ("Aline Barros", "Ressuscita-me"),
            ("", "Galileu | YouTube"),
            ("Sinach", "Way Maker"),
        ]
        assert songs[0].raw_key == "D"

    def test_not_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(IOFailure):
            load_catalog(path, origin=Origin.LOCAL)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_catalog(tmp_path / "missing.json", origin=Origin.LOCAL)

    def test_not_an_array(self, write_catalog):
        with pytest.raises(ValidationError, match="JSON array"):
            load_catalog(write_catalog("bad", {"title": "Oceanos"}), origin=Origin.LOCAL)

    def test_entry_not_an_object(self, write_catalog):
        with pytest.raises(ValidationError, match="entry 1"):
            load_catalog(write_catalog("bad", [{"title": "A", "artist": "B"}, "Oceanos"]), origin=Origin.LOCAL)

    def test_entry_breaking_contract(self, write_catalog):
        with pytest.raises(ValidationError):
            load_catalog(write_catalog("bad", [{"title": None, "artist": "B"}]), origin=Origin.LOCAL)

    def test_catalog_source_reads_once(self, write_catalog):
        path = write_catalog("shared", [{"title": "Oceanos", "artist": "Hillsong"}])
        source = JsonCatalogSource(path, origin=Origin.SHARED_REPOSITORY)
        source.preload()
        path.write_text("[]", encoding="utf-8")

        [song] = source.search(SongQuery.from_text("Hillsong - Oceanos"))

        assert song.origin == Origin.SHARED_REPOSITORY

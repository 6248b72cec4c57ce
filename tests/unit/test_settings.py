"""Unit tests for settings loading and hashing."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from repertorio.errors import IOFailure, ValidationError
from repertorio.settings import Settings, default_config_path, load_settings, settings_hash


def _write(tmp_path: Path, payload) -> Path:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_default_config_path_is_deterministic(monkeypatch) -> None:
    monkeypatch.setenv("HOME", "/tmp/repertorio-home")
    assert default_config_path() == Path("/tmp/repertorio-home/.config/repertorio/settings.json")


def test_load_settings_defaults_without_file(tmp_path: Path) -> None:
    assert load_settings(None) == Settings()
    assert load_settings(tmp_path / "missing.json") == Settings()


def test_load_settings_reads_json(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        {
            "min_score": 50,
            "max_results": 5,
            "free_text_separator": " / ",
            "known_artists": ["Hillsong", "Aline Barros"],
        },
    )
    assert load_settings(path) == Settings(
        scoring_version="v1",
        min_score=50.0,
        max_results=5,
        free_text_separator=" / ",
        known_artists=("Hillsong", "Aline Barros"),
    )


def test_env_overrides_json(tmp_path: Path, monkeypatch) -> None:
    path = _write(tmp_path, {"min_score": 50, "max_results": 5})
    monkeypatch.setenv("REPERTORIO_MIN_SCORE", "70")
    monkeypatch.setenv("REPERTORIO_MAX_RESULTS", "2")
    settings = load_settings(path)
    assert settings.min_score == 70.0
    assert settings.max_results == 2


def test_rejects_unknown_scoring_version(monkeypatch) -> None:
    monkeypatch.setenv("REPERTORIO_SCORING_VERSION", "v9")
    with pytest.raises(ValidationError, match="Unsupported scoring version"):
        load_settings(None)


@pytest.mark.parametrize(
    "payload",
    [
        {"min_score": 101},
        {"min_score": "high"},
        {"min_score": True},
        {"max_results": -1},
        {"max_results": 2.5},
        {"free_text_separator": "  "},
        {"known_artists": "Hillsong"},
        {"known_artists": [1, 2]},
    ],
)
def test_rejects_invalid_values(tmp_path: Path, payload) -> None:
    with pytest.raises(ValidationError):
        load_settings(_write(tmp_path, payload))


def test_rejects_non_object(tmp_path: Path) -> None:
    with pytest.raises(ValidationError):
        load_settings(_write(tmp_path, ["min_score"]))


def test_broken_json_is_io_failure(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(IOFailure):
        load_settings(path)


def test_settings_hash_is_stable() -> None:
    assert settings_hash(Settings()) == settings_hash(Settings())
    assert len(settings_hash(Settings())) == 64


def test_settings_hash_changes_on_ranking_field() -> None:
    assert settings_hash(Settings(min_score=0)) != settings_hash(Settings(min_score=40))
    assert settings_hash(Settings()) != settings_hash(Settings(known_artists=("Hillsong",)))

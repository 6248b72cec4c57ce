"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

_ENV_OVERRIDES = (
    "REPERTORIO_SCORING_VERSION",
    "REPERTORIO_MIN_SCORE",
    "REPERTORIO_MAX_RESULTS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings overrides from the developer's shell out of tests."""
    for name in _ENV_OVERRIDES:
        # setenv first so values a test loads from a .env file are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def write_catalog(tmp_path: Path) -> Callable[..., Path]:
    """Write a JSON catalog file and return its path."""

    def _write(name: str, records: Any) -> Path:
        path = tmp_path / f"{name}.json"
        path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
        return path

    return _write

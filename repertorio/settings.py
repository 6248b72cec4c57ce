"""Application settings."""

from __future__ import annotations

from dataclasses import dataclass
import hashlib
import json
import os
from pathlib import Path
from typing import Optional

from repertorio.errors import IOFailure, ValidationError


_DEFAULT_SCORING_VERSION = "v1"
_ALLOWED_SCORING_VERSIONS = {"v1"}
_DEFAULT_SEPARATOR = " - "


@dataclass(frozen=True)
class Settings:
    scoring_version: str = _DEFAULT_SCORING_VERSION
    min_score: float = 0.0
    max_results: int = 0  # 0 = unlimited
    free_text_separator: str = _DEFAULT_SEPARATOR
    known_artists: tuple[str, ...] = ()


def load_settings(path: Optional[Path]) -> Settings:
    """Load settings from JSON config file, with environment variable overrides.

    Priority order:
    1. Environment variables (for appropriate settings)
    2. JSON config file
    3. Defaults

    Args:
        path: Path to JSON config file, or None to use defaults only

    Returns:
        Settings object with resolved values
    """
    # Load JSON config if available
    json_settings = {}
    if path and path.exists():
        try:
            json_settings = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise IOFailure(f"Settings {path} is not valid JSON: {exc}") from exc
        if not isinstance(json_settings, dict):
            raise ValidationError(f"Settings {path} must contain a JSON object")

    # Resolve each setting with environment variable override
    scoring_version = os.getenv("REPERTORIO_SCORING_VERSION") or json_settings.get(
        "scoring_version", _DEFAULT_SCORING_VERSION
    )
    if scoring_version not in _ALLOWED_SCORING_VERSIONS:
        raise ValidationError(f"Unsupported scoring version: {scoring_version}")

    min_score = _number(
        os.getenv("REPERTORIO_MIN_SCORE") or json_settings.get("min_score", 0),
        name="min_score",
    )
    if not 0 <= min_score <= 100:
        raise ValidationError(f"min_score must be within [0, 100], got {min_score}")

    max_results = _number(
        os.getenv("REPERTORIO_MAX_RESULTS") or json_settings.get("max_results", 0),
        name="max_results",
    )
    if max_results < 0 or not max_results.is_integer():
        raise ValidationError(f"max_results must be a non-negative integer, got {max_results}")

    separator = json_settings.get("free_text_separator", _DEFAULT_SEPARATOR)
    if not isinstance(separator, str) or not separator.strip():
        raise ValidationError("free_text_separator must be a non-blank string")

    known_artists = json_settings.get("known_artists", [])
    if not isinstance(known_artists, list) or not all(isinstance(name, str) for name in known_artists):
        raise ValidationError("known_artists must be a list of strings")

    return Settings(
        scoring_version=scoring_version,
        min_score=min_score,
        max_results=int(max_results),
        free_text_separator=separator,
        known_artists=tuple(known_artists),
    )


def default_config_path() -> Path:
    return Path.home() / ".config" / "repertorio" / "settings.json"


def settings_hash(settings: Settings) -> str:
    """Stable hash of the settings that change ranking output."""
    payload = {key: getattr(settings, key) for key in _RANKING_FIELDS}
    payload["known_artists"] = list(payload["known_artists"])
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=True)
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()


_RANKING_FIELDS = (
    "scoring_version",
    "min_score",
    "max_results",
    "free_text_separator",
    "known_artists",
)


def _number(value, *, name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number, got {value!r}") from None

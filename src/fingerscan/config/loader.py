"""Config loading and normalization for Fingerscan scans."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Any

import yaml

from fingerscan.config.model import FingerscanConfig
from fingerscan.constants.config import ALLOWED_CONFIG_KEYS, CONFIG_FILENAME, DEFAULT_STORE_PATH
from fingerscan.exceptions import ConfigError


def load_config(root: Path, config_path: Path | None = None) -> FingerscanConfig:
    """Load and validate scanner config from ``fingerscan.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return FingerscanConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown_keys = sorted(str(key) for key in raw if key not in ALLOWED_CONFIG_KEYS)
    if unknown_keys:
        messages = [f"Unknown config key '{key}'{_suggest_key(key)}" for key in unknown_keys]
        raise ConfigError(f"{path}: " + "; ".join(messages))

    store_path = raw.get("store_path", DEFAULT_STORE_PATH)
    if not isinstance(store_path, str) or not store_path.strip():
        raise ConfigError("store_path must be a non-empty string")

    return FingerscanConfig(
        exclude=_normalize_patterns(_ensure_string_list(raw.get("exclude", []), "exclude")),
        include_files=_normalize_patterns(_ensure_string_list(raw.get("include_files", []), "include_files")),
        min_file_size=_ensure_size(raw.get("min_file_size"), "min_file_size", allow_zero=True),
        max_file_size=_ensure_size(raw.get("max_file_size"), "max_file_size", allow_zero=False),
        store_path=store_path.strip(),
    )


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _ensure_size(value: Any, key_name: str, *, allow_zero: bool) -> int | None:
    """Validate an optional byte count."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key_name} must be an integer number of bytes")
    if value < 0 or (value == 0 and not allow_zero):
        qualifier = "non-negative" if allow_zero else "positive"
        raise ConfigError(f"{key_name} must be a {qualifier} integer")
    return value


def _normalize_patterns(patterns: list[str]) -> tuple[str, ...]:
    """Lowercase and strip patterns, dropping blanks and duplicates while keeping order."""
    normalized = [pattern.strip().lower() for pattern in patterns if pattern.strip()]
    return tuple(dict.fromkeys(normalized))


def _suggest_key(key: str) -> str:
    """Return a 'did you mean' hint for a misspelled config key."""
    matches = difflib.get_close_matches(key, sorted(ALLOWED_CONFIG_KEYS), n=1)
    return f" (did you mean '{matches[0]}'?)" if matches else ""

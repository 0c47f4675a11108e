"""Configuration defaults and filenames."""

from __future__ import annotations

from fingerscan.constants.store import DEFAULT_STORE_FILENAME

CONFIG_FILENAME: str = "fingerscan.yaml"

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "exclude",
        "include_files",
        "min_file_size",
        "max_file_size",
        "store_path",
    }
)

DEFAULT_STORE_PATH: str = DEFAULT_STORE_FILENAME

"""Constants for the reference fingerprint stores and hashing."""

from __future__ import annotations

STORE_VERSION: int = 1
DEFAULT_STORE_FILENAME: str = ".fingerscan-store.json"
STORE_TEMP_PREFIX: str = ".store-"
STORE_TEMP_SUFFIX: str = ".tmp"
FILE_HASH_CHUNK_SIZE: int = 65536

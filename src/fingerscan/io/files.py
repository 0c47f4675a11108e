"""File-level helpers for content digests."""

from __future__ import annotations

import hashlib
from pathlib import Path

from fingerscan.constants.store import FILE_HASH_CHUNK_SIZE


def file_md5(path: str | Path) -> str:
    """Return the MD5 hex digest of a file's content."""
    digest = hashlib.md5(usedforsecurity=False)
    with Path(path).open("rb") as handle:
        for chunk in iter(lambda: handle.read(FILE_HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()

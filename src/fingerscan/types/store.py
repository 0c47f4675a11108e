"""Typed store payload structures."""

from __future__ import annotations

from typing import Any, TypedDict


class FingerprintChanges(TypedDict, total=False):
    """Partial fingerprint update, applied to the record with the given uuid."""

    mtime: int
    size: int
    md5: str
    vanished_at: Any
    hidden: bool
    owner_id: str


class StoredFingerprint(TypedDict):
    """One fingerprint as persisted by the JSON store."""

    uuid: str
    short_filename: str
    long_filename: str
    mtime: int
    size: int
    md5: str
    vanished_at: str | None
    hidden: bool
    owner_id: str


class StorePayload(TypedDict):
    """Top-level JSON store payload persisted to disk."""

    version: int
    fingerprints: list[StoredFingerprint]

"""Fingerprint store persisted to a single JSON file."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from fingerscan.constants.store import STORE_TEMP_PREFIX, STORE_TEMP_SUFFIX, STORE_VERSION
from fingerscan.exceptions import StoreError
from fingerscan.model import Fingerprint
from fingerscan.store.memory import InMemoryFingerprintStore
from fingerscan.types import StoredFingerprint, StorePayload

logger = logging.getLogger(__name__)

_STRING_FIELDS: tuple[str, ...] = ("uuid", "short_filename", "long_filename", "md5", "owner_id")
_INT_FIELDS: tuple[str, ...] = ("mtime", "size")


class JsonFingerprintStore(InMemoryFingerprintStore):
    """In-memory store loaded from and saved to a JSON file.

    Mutations stay in memory until ``save`` writes the whole payload
    atomically.
    """

    def __init__(self, path: Path, fingerprints: list[Fingerprint] | None = None) -> None:
        super().__init__(fingerprints)
        self.path = path

    @classmethod
    def load(cls, path: Path) -> JsonFingerprintStore:
        """Load a store from *path*; a missing file yields an empty store."""
        if not path.is_file():
            logger.info("Store file %s not found, starting empty", path)
            return cls(path)

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read store file {path}: {exc}") from exc

        fingerprints = _parse_payload(payload, path)
        logger.info("Loaded %d fingerprints from %s", len(fingerprints), path)
        return cls(path, fingerprints)

    def save(self) -> None:
        """Write every fingerprint to ``path``."""
        payload: StorePayload = {
            "version": STORE_VERSION,
            "fingerprints": [_to_stored(fp) for fp in self.snapshot()],
        }
        try:
            self._replace_file(payload)
        except OSError as exc:
            raise StoreError(f"Cannot write store file {self.path}: {exc}") from exc
        logger.info("Saved %d fingerprints to %s", len(payload["fingerprints"]), self.path)

    def _replace_file(self, payload: StorePayload) -> None:
        """Write *payload* to a synced sibling temp file and rename it over ``path``.

        Readers see either the previous store or the new one, never a partial
        write. The temp file is removed if serialization or the rename fails.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(dir=self.path.parent, prefix=STORE_TEMP_PREFIX, suffix=STORE_TEMP_SUFFIX)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
                handle.write("\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, self.path)
        except BaseException:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise


def _to_stored(fingerprint: Fingerprint) -> StoredFingerprint:
    assert fingerprint.uuid is not None
    vanished_at = fingerprint.vanished_at
    return {
        "uuid": fingerprint.uuid,
        "short_filename": fingerprint.short_filename,
        "long_filename": fingerprint.long_filename,
        "mtime": fingerprint.mtime,
        "size": fingerprint.size,
        "md5": fingerprint.md5,
        "vanished_at": None if vanished_at is None else str(vanished_at),
        "hidden": fingerprint.hidden,
        "owner_id": fingerprint.owner_id,
    }


def _parse_payload(payload: object, path: Path) -> list[Fingerprint]:
    if not isinstance(payload, dict):
        raise StoreError(f"Store file {path} must contain a JSON object")
    version = payload.get("version")
    if version != STORE_VERSION:
        raise StoreError(f"Unsupported store version {version!r} in {path}")
    raw_fingerprints = payload.get("fingerprints")
    if not isinstance(raw_fingerprints, list):
        raise StoreError(f"Store file {path} has no fingerprints list")

    fingerprints: list[Fingerprint] = []
    for index, raw in enumerate(raw_fingerprints):
        if not isinstance(raw, dict):
            raise StoreError(f"Fingerprint #{index} in {path} is not an object")
        for key in _STRING_FIELDS:
            if not isinstance(raw.get(key), str):
                raise StoreError(f"Fingerprint #{index} in {path}: {key} must be a string")
        for key in _INT_FIELDS:
            value = raw.get(key)
            if isinstance(value, bool) or not isinstance(value, int):
                raise StoreError(f"Fingerprint #{index} in {path}: {key} must be an integer")
        vanished_at = raw.get("vanished_at")
        if vanished_at is not None and not isinstance(vanished_at, str):
            raise StoreError(f"Fingerprint #{index} in {path}: vanished_at must be a string or null")
        hidden = raw.get("hidden", False)
        if not isinstance(hidden, bool):
            raise StoreError(f"Fingerprint #{index} in {path}: hidden must be a boolean")

        fingerprints.append(
            Fingerprint(
                uuid=raw["uuid"],
                short_filename=raw["short_filename"],
                long_filename=raw["long_filename"],
                mtime=raw["mtime"],
                size=raw["size"],
                md5=raw["md5"],
                vanished_at=vanished_at,
                hidden=hidden,
                owner_id=raw["owner_id"],
            )
        )
    return fingerprints

"""Dictionary-backed fingerprint store."""

from __future__ import annotations

import logging
import os
import uuid as uuid_lib
from dataclasses import replace
from datetime import UTC, datetime

from fingerscan.exceptions import StoreError
from fingerscan.model import Fingerprint
from fingerscan.scanner.metadata import traversal_sort_key
from fingerscan.store.base import FingerprintStore
from fingerscan.types import FingerprintChanges

logger = logging.getLogger(__name__)


def _folder_prefix(folder: str) -> str:
    return folder if folder.endswith(os.sep) else folder + os.sep


class InMemoryFingerprintStore(FingerprintStore):
    """Keeps fingerprints in memory, keyed by long filename.

    Returned fingerprints are copies, so scanners cannot change stored state
    except through ``insert_fingerprint`` and ``update_fingerprint``.
    """

    def __init__(self, fingerprints: list[Fingerprint] | None = None) -> None:
        self._by_filename: dict[str, Fingerprint] = {}
        self._uuid_index: dict[str, str] = {}
        for fingerprint in fingerprints or []:
            if fingerprint.uuid is None:
                raise StoreError(f"Stored fingerprint has no uuid: {fingerprint.long_filename}")
            if fingerprint.long_filename in self._by_filename:
                raise StoreError(f"Duplicate fingerprint for {fingerprint.long_filename}")
            self._put(fingerprint)

    def __len__(self) -> int:
        return len(self._by_filename)

    def _put(self, fingerprint: Fingerprint) -> None:
        assert fingerprint.uuid is not None
        self._by_filename[fingerprint.long_filename] = fingerprint
        self._uuid_index[fingerprint.uuid] = fingerprint.long_filename

    def _sorted(self) -> list[Fingerprint]:
        return sorted(self._by_filename.values(), key=lambda fp: traversal_sort_key(fp.long_filename))

    def _under(self, folder: str) -> list[Fingerprint]:
        prefix = _folder_prefix(folder)
        return [fp for fp in self._sorted() if fp.long_filename.startswith(prefix)]

    async def get_fingerprint(self, long_filename: str) -> Fingerprint | None:
        found = self._by_filename.get(long_filename)
        return replace(found) if found is not None else None

    async def get_fingerprints_page(self, folder: str, offset: int, limit: int) -> list[Fingerprint]:
        return [replace(fp) for fp in self._under(folder)[offset : offset + limit]]

    async def count_fingerprints(self, folder: str) -> int:
        return len(self._under(folder))

    async def insert_fingerprint(self, fingerprint: Fingerprint) -> str:
        if fingerprint.long_filename in self._by_filename:
            raise StoreError(f"Fingerprint already stored: {fingerprint.long_filename}")
        fingerprint.uuid = str(uuid_lib.uuid4())
        self._put(replace(fingerprint))
        return fingerprint.uuid

    async def update_fingerprint(self, uuid: str, changes: FingerprintChanges) -> None:
        long_filename = self._uuid_index.get(uuid)
        if long_filename is None:
            raise StoreError(f"No fingerprint with uuid {uuid}")
        self._by_filename[long_filename] = replace(self._by_filename[long_filename], **changes)

    async def preload_fingerprints(self, long_filename: str, count: int) -> list[Fingerprint]:
        start = traversal_sort_key(long_filename)
        following = [fp for fp in self._sorted() if traversal_sort_key(fp.long_filename) >= start]
        return [replace(fp) for fp in following[: count + 1]]

    def current_vanished_timestamp(self) -> str:
        return datetime.now(UTC).isoformat()

    def get_by_short_filename(self, short_filename: str) -> Fingerprint | None:
        """Return a copy of the fingerprint whose short filename matches, assuming names are unique."""
        for fingerprint in self._by_filename.values():
            if fingerprint.short_filename == short_filename:
                return replace(fingerprint)
        return None

    def insertion_order(self) -> list[str]:
        """Return long filenames in the order they were first inserted."""
        return list(self._by_filename)

    def sorted_keys(self) -> list[str]:
        """Return long filenames in traversal order."""
        return [fp.long_filename for fp in self._sorted()]

    def snapshot(self) -> list[Fingerprint]:
        """Return copies of all fingerprints in traversal order."""
        return [replace(fp) for fp in self._sorted()]

"""Store interface consumed by the forward and reverse scanners."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from fingerscan.model import Fingerprint
from fingerscan.types import FingerprintChanges


class FingerprintStore(ABC):
    """Long-term storage for fingerprints, usually a database.

    Ordering contract: ``get_fingerprints_page`` and ``preload_fingerprints``
    return fingerprints sorted by ``traversal_sort_key`` of their long
    filename, the order in which a directory scope visits files. Pagination
    and read-ahead caching both depend on it.

    Any method may raise; the scanners let the exception abort the scan.
    """

    @abstractmethod
    async def get_fingerprint(self, long_filename: str) -> Fingerprint | None:
        """Return the fingerprint stored for *long_filename*, if any."""

    @abstractmethod
    async def get_fingerprints_page(self, folder: str, offset: int, limit: int) -> list[Fingerprint]:
        """Return up to *limit* fingerprints under *folder*, skipping the first *offset*.

        A page shorter than *limit* tells the caller there are no more
        fingerprints for the folder.
        """

    @abstractmethod
    async def count_fingerprints(self, folder: str) -> int:
        """Return the number of fingerprints under *folder*, used for progress reporting."""

    @abstractmethod
    async def insert_fingerprint(self, fingerprint: Fingerprint) -> str:
        """Store a new fingerprint, assign its ``uuid`` and return it."""

    @abstractmethod
    async def update_fingerprint(self, uuid: str, changes: FingerprintChanges) -> None:
        """Apply a partial update to the fingerprint identified by *uuid*."""

    @abstractmethod
    async def preload_fingerprints(self, long_filename: str, count: int) -> list[Fingerprint]:
        """Return the fingerprint for *long_filename* and up to *count* that follow it.

        The result may be shorter than requested, which only costs extra
        round trips, but it must include the fingerprint for *long_filename*
        whenever one is stored.
        """

    @abstractmethod
    def current_vanished_timestamp(self) -> Any:
        """Return the store's notion of "now" for ``vanished_at``.

        The value belongs to the store's referential (for instance a database
        ``current_timestamp``) and is never interpreted by the scanners.
        """

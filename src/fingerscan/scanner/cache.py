"""Bounded read-ahead cache of fingerprints for the forward scanner."""

from __future__ import annotations

from collections.abc import Iterable

from fingerscan.constants.scanner import CACHE_HIGH_WATER_MARK
from fingerscan.model import Fingerprint


class FingerprintCache:
    """Insertion-ordered map from long filename to fingerprint.

    Whenever the number of entries exceeds ``high_water_mark`` the oldest
    inserted entries are evicted until it no longer does. Reads do not refresh
    an entry; inserting a key that is already present counts as a new insertion.
    """

    def __init__(self, high_water_mark: int = CACHE_HIGH_WATER_MARK) -> None:
        self._entries: dict[str, Fingerprint] = {}
        self._high_water_mark = high_water_mark
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, long_filename: object) -> bool:
        return long_filename in self._entries

    def get(self, long_filename: str) -> Fingerprint | None:
        return self._entries.get(long_filename)

    def add(self, fingerprint: Fingerprint) -> None:
        """Insert *fingerprint* as the newest entry, evicting the oldest when over capacity."""
        self._entries.pop(fingerprint.long_filename, None)
        self._entries[fingerprint.long_filename] = fingerprint
        while len(self._entries) > self._high_water_mark:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            self.evictions += 1

    def add_all(self, fingerprints: Iterable[Fingerprint]) -> None:
        for fingerprint in fingerprints:
            self.add(fingerprint)

    def keys(self) -> list[str]:
        """Return cached long filenames, oldest first."""
        return list(self._entries)

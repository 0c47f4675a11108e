"""Constants used by the forward and reverse scanners."""

from __future__ import annotations

import errno

# Reverse scans page through stored fingerprints in batches of this size.
REVERSE_SCAN_PAGE_SIZE: int = 5000

# Forward-scan read-ahead: fingerprints fetched per cache miss, and the cache
# size above which the oldest entries are evicted. The high-water mark must
# stay above the preload count so a freshly loaded entry survives its own batch.
PRELOAD_COUNT: int = 1000
CACHE_HIGH_WATER_MARK: int = 1100

PROGRESS_LOG_INTERVAL: int = 1000

# Owner assigned to fingerprints created by the scanner ("nobody").
NO_OWNER_ID: str = "ab8f87ea-ad93-4365-bdf5-045fee58ee3b"

# Filesystem errors treated as "entry vanished or inaccessible" and skipped.
TOLERATED_ERRNOS: frozenset[int] = frozenset({errno.ENOENT, errno.EACCES})

FILES_SCOPE_PREFIX: str = "File:"
DIRECTORY_SCOPE_PREFIX: str = "Dir:"

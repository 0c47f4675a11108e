"""Forward scanner: walks the filesystem and creates or updates fingerprints."""

from __future__ import annotations

import logging

from fingerscan.constants.scanner import PRELOAD_COUNT, PROGRESS_LOG_INTERVAL
from fingerscan.model import Fingerprint, PhaseStats, ScanOptions, ScopeFile
from fingerscan.scanner.cache import FingerprintCache
from fingerscan.scanner.metadata import compute_digest
from fingerscan.scanner.progress import ProgressObserver
from fingerscan.scanner.scope import Scope
from fingerscan.store.base import FingerprintStore

logger = logging.getLogger(__name__)


class ForwardScanner:
    """Iterates through a scope and keeps the store's fingerprints current.

    New files get a fingerprint inserted. Files whose modification time moved
    past the stored one, or every file under ``force``, get their digest
    recomputed and the fingerprint updated. Anything else is left alone.
    """

    def __init__(
        self,
        store: FingerprintStore,
        progress: ProgressObserver,
        scope: Scope,
        options: ScanOptions,
        *,
        cache: FingerprintCache | None = None,
        preload_count: int = PRELOAD_COUNT,
    ) -> None:
        self.store = store
        self.progress = progress
        self.scope = scope
        self.options = options
        self.cache = cache if cache is not None else FingerprintCache()
        self.preload_count = preload_count
        self.scanned = 0
        self.processed = 0
        self.errors = 0
        self.inserted = 0
        self.updated = 0

    async def get_fingerprint(self, long_filename: str) -> Fingerprint | None:
        """Return the stored fingerprint for *long_filename*, reading ahead on a cache miss."""
        fingerprint = self.cache.get(long_filename)
        if fingerprint is not None:
            return fingerprint
        self.cache.add_all(await self.store.preload_fingerprints(long_filename, self.preload_count))
        return self.cache.get(long_filename)

    async def scan(self) -> PhaseStats:
        """Run one forward pass over the scope."""
        self.scanned = self.processed = self.errors = self.inserted = self.updated = 0
        self.progress.forward_scan_started()
        logger.info("Scanning for fingerprints in %s", self.scope.name)

        async for entry in self.scope.iter_files():
            await self._process(entry)

        self._log_progress(force=True)
        self.progress.forward_scan_ended()
        return PhaseStats(scanned=self.scanned, processed=self.processed, errors=self.errors)

    async def _process(self, entry: ScopeFile) -> None:
        fingerprint = await self.get_fingerprint(entry.long_filename)
        self.scanned += 1
        self._log_progress()

        if fingerprint is None:
            await self._create(entry)
            self.processed += 1
            self.inserted += 1
            return

        if not self.options.force and entry.metadata.mtime <= fingerprint.mtime:
            return

        await self._update(fingerprint, entry)
        self.processed += 1
        self.updated += 1

    async def _create(self, entry: ScopeFile) -> None:
        md5 = await compute_digest(entry.long_filename)
        fingerprint = Fingerprint(
            short_filename=entry.short_filename,
            long_filename=entry.long_filename,
            mtime=entry.metadata.mtime,
            size=entry.metadata.size,
            md5=md5,
        )
        logger.info("Creating fingerprint for %s", entry.long_filename)
        await self.store.insert_fingerprint(fingerprint)

    async def _update(self, fingerprint: Fingerprint, entry: ScopeFile) -> None:
        assert fingerprint.uuid is not None
        fingerprint.mtime = entry.metadata.mtime
        fingerprint.size = entry.metadata.size
        fingerprint.md5 = await compute_digest(fingerprint.long_filename)
        logger.info("Updating fingerprint %s for %s", fingerprint.uuid, fingerprint.long_filename)
        await self.store.update_fingerprint(
            fingerprint.uuid,
            {"mtime": fingerprint.mtime, "size": fingerprint.size, "md5": fingerprint.md5},
        )

    def _log_progress(self, *, force: bool = False) -> None:
        self.progress.forward_scan_progress(self.scanned, self.processed, self.inserted, self.updated)
        if force or self.scanned % PROGRESS_LOG_INTERVAL == 0:
            logger.info(
                "Forward scan: scanned=%d processed=%d inserted=%d updated=%d",
                self.scanned,
                self.processed,
                self.inserted,
                self.updated,
            )

"""Reverse scanner: walks stored fingerprints through a chain of handlers."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fingerscan.constants.scanner import PROGRESS_LOG_INTERVAL
from fingerscan.model import PhaseStats, ScanOptions, ScopedFingerprint
from fingerscan.scanner.handlers import ReverseScanHandler
from fingerscan.scanner.progress import ProgressObserver
from fingerscan.scanner.scope import Scope
from fingerscan.store.base import FingerprintStore

logger = logging.getLogger(__name__)


class ReverseScanner:
    """Runs every in-scope stored fingerprint through an ordered list of handlers.

    Out-of-scope fingerprints are skipped without being counted. A
    fingerprint counts as an error if any handler raised, otherwise as
    processed if any handler reported a change.
    """

    def __init__(
        self,
        store: FingerprintStore,
        progress: ProgressObserver,
        scope: Scope,
        options: ScanOptions,
    ) -> None:
        self.store = store
        self.progress = progress
        self.scope = scope
        self.options = options
        self.total = 0
        self.scanned = 0
        self.processed = 0
        self.errors = 0
        self.percentage: float | None = None

    @property
    def progress_label(self) -> str:
        """Completion percentage with one decimal, or an empty string when unknown."""
        if self.percentage is None:
            return ""
        return f"{int(self.percentage * 1000) / 10}%"

    async def scan(self, handlers: Sequence[ReverseScanHandler]) -> PhaseStats:
        """Run one reverse pass over the scope."""
        self.total = self.scanned = self.processed = self.errors = 0
        self.percentage = 0.0
        self.progress.reverse_scan_started()
        logger.info("Reverse scanning %s", self.scope.name)

        try:
            self.total = await self.scope.start_reverse_scan(self.store)
            async for entry in self.scope.iter_fingerprints():
                await self._process(entry, handlers)
        finally:
            self._log_progress(force=True)

        self.progress.reverse_scan_ended()
        return PhaseStats(scanned=self.scanned, processed=self.processed, errors=self.errors)

    async def _process(self, entry: ScopedFingerprint, handlers: Sequence[ReverseScanHandler]) -> None:
        if entry.progress is not None:
            self.percentage = entry.progress
        logger.debug("Next fingerprint %s (in scope: %s)", entry.fingerprint.long_filename, entry.in_scope)
        if not entry.in_scope:
            return

        self.scanned += 1
        self._log_progress()

        changed, failed = await self._run_handlers(entry, handlers)
        if failed:
            self.errors += 1
        elif changed:
            self.processed += 1

    async def _run_handlers(
        self,
        entry: ScopedFingerprint,
        handlers: Sequence[ReverseScanHandler],
    ) -> tuple[bool, bool]:
        changed = False
        failed = False
        fingerprint = entry.fingerprint
        for handler in handlers:
            logger.debug("Processing %s with %s", fingerprint.long_filename, handler.name)
            try:
                handler_changed = await handler.process(fingerprint, entry.metadata, entry.in_scope, self.options)
            except Exception:
                logger.exception(
                    "Handler %s failed to process fingerprint %s (%s)",
                    handler.name,
                    fingerprint.uuid,
                    fingerprint.long_filename,
                )
                failed = True
                continue
            changed = changed or bool(handler_changed)
        return changed, failed

    def _log_progress(self, *, force: bool = False) -> None:
        self.progress.reverse_scan_progress(self.total, self.scanned, self.processed, self.errors)
        if force or self.scanned % PROGRESS_LOG_INTERVAL == 0:
            logger.info(
                "Reverse scan: fingerprints=%d scanned=%d processed=%d errors=%d progress=%s",
                self.total,
                self.scanned,
                self.processed,
                self.errors,
                self.progress_label,
            )

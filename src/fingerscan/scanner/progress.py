"""Progress observer notified by the scan orchestrator and scanners."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from fingerscan.model import ScanOptions

if TYPE_CHECKING:
    from fingerscan.scanner.handlers import HandlerFactory
    from fingerscan.scanner.scope import Scope


class ProgressObserver:
    """Receives progress events. Every method is a no-op; override the ones you need."""

    def scan_started(self, scope: Scope, handlers: Sequence[HandlerFactory], options: ScanOptions) -> None:
        """Called once before the forward scan, with the caller-supplied handler factories."""

    def scan_ended(self) -> None:
        """Called once after the reverse scan."""

    def forward_scan_started(self) -> None:
        pass

    def forward_scan_progress(self, scanned: int, processed: int, inserted: int, updated: int) -> None:
        """Called after each file and once more when the forward scan completes."""

    def forward_scan_ended(self) -> None:
        pass

    def reverse_scan_started(self) -> None:
        pass

    def reverse_scan_progress(self, total: int, scanned: int, processed: int, errors: int) -> None:
        """Called after each in-scope fingerprint and once more when the reverse scan completes.

        *total* is the number of fingerprints the scope announced, in scope or not.
        """

    def reverse_scan_ended(self) -> None:
        pass

"""End-to-end scan orchestration: a forward pass followed by a reverse pass."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fingerscan.model import ScanOptions, ScanStats
from fingerscan.scanner.forward import ForwardScanner
from fingerscan.scanner.handlers import HandlerFactory, ReverseScanHandler, VanishedFilesHandler
from fingerscan.scanner.progress import ProgressObserver
from fingerscan.scanner.reverse import ReverseScanner
from fingerscan.scanner.scope import Scope
from fingerscan.store.base import FingerprintStore

logger = logging.getLogger(__name__)


def build_handlers(
    scanner: ReverseScanner,
    factories: Sequence[HandlerFactory],
    options: ScanOptions,
) -> list[ReverseScanHandler]:
    """Instantiate the handler chain for one reverse pass, vanished-files handler first."""
    return [factory(scanner, options) for factory in (VanishedFilesHandler, *factories)]


async def scan(
    store: FingerprintStore,
    progress: ProgressObserver,
    scope: Scope,
    handlers: Sequence[HandlerFactory] = (),
    options: ScanOptions | None = None,
) -> ScanStats:
    """Scan *scope*: insert or update fingerprints, then reconcile stored ones.

    The reverse pass starts only after the forward pass has finished, so it
    sees this run's inserts and updates. Filesystem and store errors
    propagate; handler errors are counted in ``ScanStats.reverse.errors``.
    """
    options = options if options is not None else ScanOptions()
    logger.debug("Scan of %s with options %s", scope.name, options)
    progress.scan_started(scope, handlers, options)

    stats = ScanStats()

    forward = ForwardScanner(store, progress, scope, options)
    stats.add_forward(await forward.scan())

    reverse = ReverseScanner(store, progress, scope, options)
    stats.add_reverse(await reverse.scan(build_handlers(reverse, handlers, options)))

    progress.scan_ended()
    logger.info("Scan of %s finished: %s", scope.name, stats.to_dict())
    return stats

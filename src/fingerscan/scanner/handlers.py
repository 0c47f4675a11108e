"""Reverse-scan handler interface and the built-in vanished-files handler."""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, ClassVar, TypeAlias

from fingerscan.model import FileMetadata, Fingerprint, ScanOptions
from fingerscan.types import FingerprintChanges

if TYPE_CHECKING:
    from fingerscan.scanner.reverse import ReverseScanner

logger = logging.getLogger(__name__)


class ReverseScanHandler(ABC):
    """A unit of reconciliation logic run once per in-scope fingerprint.

    Handlers are created fresh for every scan with the reverse scanner that
    drives them, and may reach the store through ``self.scanner.store``.
    """

    name: ClassVar[str]

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Validate concrete handlers define a non-empty ``name``."""
        super().__init_subclass__(**kwargs)
        if inspect.isabstract(cls):
            return
        name = getattr(cls, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise TypeError(f"{cls.__name__} must define a non-empty class attribute `name`")

    def __init__(self, scanner: ReverseScanner, options: ScanOptions) -> None:
        self.scanner = scanner
        self.options = options

    @abstractmethod
    async def process(
        self,
        fingerprint: Fingerprint,
        metadata: FileMetadata | None,
        in_scope: bool,
        options: ScanOptions,
    ) -> bool:
        """Reconcile *fingerprint* with the filesystem and return True if anything changed.

        *metadata* is None when the file is absent or inaccessible. Raising
        marks the fingerprint as failed without stopping the other handlers.
        """


HandlerFactory: TypeAlias = "Callable[[ReverseScanner, ScanOptions], ReverseScanHandler]"


class VanishedFilesHandler(ReverseScanHandler):
    """Detects files removed from, or restored to, the filesystem.

    A fingerprint counts as vanished when it is out of scope, its file is
    missing, or the file is empty. Transitions set ``vanished_at`` to the
    store's current timestamp, or reset it to None.
    """

    name = "VanishedFilesHandler"

    async def process(
        self,
        fingerprint: Fingerprint,
        metadata: FileMetadata | None,
        in_scope: bool,
        options: ScanOptions,
    ) -> bool:
        vanished = not in_scope or metadata is None or metadata.size == 0
        if vanished == fingerprint.is_vanished:
            return False

        store = self.scanner.store
        if vanished:
            reason = "File newly vanished"
            vanished_at = store.current_vanished_timestamp()
        else:
            reason = "File reappeared"
            vanished_at = None

        assert fingerprint.uuid is not None
        changes: FingerprintChanges = {"vanished_at": vanished_at}
        logger.info("%s: %s (vanished_at=%s)", reason, fingerprint.long_filename, vanished_at)
        await store.update_fingerprint(fingerprint.uuid, changes)
        fingerprint.vanished_at = vanished_at
        return True

"""Tests for reverse-scan handlers."""

from __future__ import annotations

import stat

import pytest

from fingerscan.model import FileMetadata, Fingerprint, ScanOptions
from fingerscan.scanner.handlers import ReverseScanHandler, VanishedFilesHandler
from fingerscan.scanner.reverse import ReverseScanner
from fingerscan.scanner.scope import new_directory_scope
from fingerscan.store import InMemoryFingerprintStore

PRESENT = FileMetadata(size=5, mtime=1, mode=stat.S_IFREG | 0o644)
EMPTY = FileMetadata(size=0, mtime=1, mode=stat.S_IFREG | 0o644)


class _FixedTimestampStore(InMemoryFingerprintStore):
    def current_vanished_timestamp(self) -> str:
        return "2024-01-01T00:00:00+00:00"


def _handler(store: InMemoryFingerprintStore, observer) -> VanishedFilesHandler:
    options = ScanOptions()
    scanner = ReverseScanner(store, observer, new_directory_scope("/data"), options)
    return VanishedFilesHandler(scanner, options)


def _fingerprint(vanished_at: str | None = None) -> Fingerprint:
    return Fingerprint(
        short_filename="a.txt",
        long_filename="/data/a.txt",
        mtime=1,
        size=5,
        md5="0" * 32,
        uuid="uuid-a",
        vanished_at=vanished_at,
    )


@pytest.mark.parametrize(
    ("metadata", "in_scope"),
    [
        (None, True),
        (EMPTY, True),
        (PRESENT, False),
    ],
)
async def test_vanished_handler_marks_missing_files(observer, metadata: FileMetadata | None, in_scope: bool) -> None:
    fingerprint = _fingerprint()
    store = _FixedTimestampStore([fingerprint])
    handler = _handler(store, observer)

    changed = await handler.process(fingerprint, metadata, in_scope, ScanOptions())

    assert changed is True
    assert fingerprint.vanished_at == "2024-01-01T00:00:00+00:00"
    stored = await store.get_fingerprint("/data/a.txt")
    assert stored is not None
    assert stored.vanished_at == "2024-01-01T00:00:00+00:00"


async def test_vanished_handler_restores_reappeared_files(observer) -> None:
    fingerprint = _fingerprint(vanished_at="2024-01-01T00:00:00+00:00")
    store = InMemoryFingerprintStore([fingerprint])
    handler = _handler(store, observer)

    changed = await handler.process(fingerprint, PRESENT, True, ScanOptions())

    assert changed is True
    assert fingerprint.vanished_at is None
    stored = await store.get_fingerprint("/data/a.txt")
    assert stored is not None
    assert stored.vanished_at is None


async def test_vanished_handler_ignores_steady_state(observer) -> None:
    present = _fingerprint()
    vanished = _fingerprint(vanished_at="earlier")
    handler = _handler(InMemoryFingerprintStore([present]), observer)

    assert await handler.process(present, PRESENT, True, ScanOptions()) is False
    assert await handler.process(vanished, None, True, ScanOptions()) is False
    assert vanished.vanished_at == "earlier"


def test_handler_subclass_requires_name() -> None:
    with pytest.raises(TypeError, match="name"):

        class _Nameless(ReverseScanHandler):
            async def process(self, fingerprint, metadata, in_scope, options) -> bool:
                return False


def test_abstract_handler_subclass_may_omit_name() -> None:
    class _Base(ReverseScanHandler):
        pass

    assert not hasattr(_Base, "name")

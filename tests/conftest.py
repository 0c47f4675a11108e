"""Shared pytest fixtures for scanner and store tests."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, TypeAlias

import pytest

from fingerscan.model import ScanOptions
from fingerscan.scanner.progress import ProgressObserver
from fingerscan.store import InMemoryFingerprintStore

FileWriter: TypeAlias = Callable[..., Path]


class RecordingProgressObserver(ProgressObserver):
    """Progress observer that records every event it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[str, tuple[Any, ...]]] = []

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def last(self, name: str) -> tuple[Any, ...]:
        for event_name, args in reversed(self.events):
            if event_name == name:
                return args
        raise AssertionError(f"No {name} event recorded")

    def scan_started(self, scope: Any, handlers: Sequence[Any], options: ScanOptions) -> None:
        self.events.append(("scan_started", (scope, tuple(handlers), options)))

    def scan_ended(self) -> None:
        self.events.append(("scan_ended", ()))

    def forward_scan_started(self) -> None:
        self.events.append(("forward_scan_started", ()))

    def forward_scan_progress(self, scanned: int, processed: int, inserted: int, updated: int) -> None:
        self.events.append(("forward_scan_progress", (scanned, processed, inserted, updated)))

    def forward_scan_ended(self) -> None:
        self.events.append(("forward_scan_ended", ()))

    def reverse_scan_started(self) -> None:
        self.events.append(("reverse_scan_started", ()))

    def reverse_scan_progress(self, total: int, scanned: int, processed: int, errors: int) -> None:
        self.events.append(("reverse_scan_progress", (total, scanned, processed, errors)))

    def reverse_scan_ended(self) -> None:
        self.events.append(("reverse_scan_ended", ()))


@pytest.fixture()
def store() -> InMemoryFingerprintStore:
    """Return an empty in-memory fingerprint store."""
    return InMemoryFingerprintStore()


@pytest.fixture()
def observer() -> RecordingProgressObserver:
    """Return a progress observer that records events."""
    return RecordingProgressObserver()


@pytest.fixture()
def write_file() -> FileWriter:
    """Return a helper creating a file (and its parents) with the given content."""

    def _write(path: Path, content: str = "data") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def touch_later() -> Callable[[Path], None]:
    """Return a helper moving a file's mtime one second past its current value."""

    def _touch(path: Path) -> None:
        current = path.lstat().st_mtime_ns
        os.utime(path, ns=(current + 1_000_000_000, current + 1_000_000_000))

    return _touch

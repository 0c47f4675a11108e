"""Dataclasses shared by scopes, scanners and stores."""

from __future__ import annotations

import os
import stat
from dataclasses import asdict, dataclass, field
from typing import Any

from fingerscan.constants.scanner import NO_OWNER_ID


@dataclass
class Fingerprint:
    """Persisted record for one filesystem entry.

    ``uuid`` is ``None`` until the store assigns it on insert. ``mtime`` is the
    ``lstat`` modification time in nanoseconds. ``vanished_at`` is an opaque,
    store-supplied timestamp and is ``None`` while the file is present.
    """

    short_filename: str
    long_filename: str
    mtime: int
    size: int
    md5: str
    uuid: str | None = None
    vanished_at: Any = None
    hidden: bool = False
    owner_id: str = NO_OWNER_ID

    @property
    def is_vanished(self) -> bool:
        """Whether the entry was last observed as absent or out of scope."""
        return self.vanished_at is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class FileMetadata:
    """The subset of ``lstat`` results the scanners rely on."""

    size: int
    mtime: int
    mode: int

    @classmethod
    def from_stat(cls, result: os.stat_result) -> FileMetadata:
        """Build metadata from an ``os.lstat`` result."""
        return cls(size=result.st_size, mtime=result.st_mtime_ns, mode=result.st_mode)

    @property
    def is_file(self) -> bool:
        return stat.S_ISREG(self.mode)

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)


@dataclass(frozen=True)
class ScopeFile:
    """A regular file yielded by a scope's forward iteration."""

    long_filename: str
    short_filename: str
    metadata: FileMetadata


@dataclass(frozen=True)
class ScopedFingerprint:
    """A stored fingerprint yielded by a scope's reverse iteration.

    ``metadata`` is ``None`` when the file is absent or inaccessible.
    ``progress`` is the completion fraction in ``[0, 1]`` when the scope can
    compute one.
    """

    fingerprint: Fingerprint
    metadata: FileMetadata | None
    in_scope: bool
    progress: float | None = None


@dataclass(frozen=True)
class ScanOptions:
    """Options recognized by a scan."""

    force: bool = False


@dataclass
class PhaseStats:
    """Counters for one scan phase."""

    scanned: int = 0
    processed: int = 0
    errors: int = 0

    def to_dict(self) -> dict[str, int]:
        """Serialize to a plain dictionary."""
        return {"scanned": self.scanned, "processed": self.processed, "errors": self.errors}


@dataclass
class ScanStats:
    """Aggregated statistics of a forward pass followed by a reverse pass."""

    forward: PhaseStats = field(default_factory=PhaseStats)
    reverse: PhaseStats = field(default_factory=PhaseStats)

    def add_forward(self, stats: PhaseStats) -> None:
        """Accumulate forward-phase counters."""
        self.forward.scanned += stats.scanned
        self.forward.processed += stats.processed
        self.forward.errors += stats.errors

    def add_reverse(self, stats: PhaseStats) -> None:
        """Accumulate reverse-phase counters."""
        self.reverse.scanned += stats.scanned
        self.reverse.processed += stats.processed
        self.reverse.errors += stats.errors

    def to_dict(self) -> dict[str, dict[str, int]]:
        """Serialize to ``{"forward": {...}, "reverse": {...}}``."""
        return {"forward": self.forward.to_dict(), "reverse": self.reverse.to_dict()}

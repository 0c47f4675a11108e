"""Scan scopes: the subset of the filesystem a scan looks at.

A scope exposes two independent iteration protocols. Forward iteration
(``iter_files``) walks the filesystem and yields regular files to compare with
the store. Reverse iteration (``start_reverse_scan`` then
``iter_fingerprints``) walks stored fingerprints and pairs each with fresh
filesystem metadata and an in-scope flag.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterable, Sequence

from fingerscan.constants.scanner import DIRECTORY_SCOPE_PREFIX, FILES_SCOPE_PREFIX, REVERSE_SCAN_PAGE_SIZE
from fingerscan.model import ScopedFingerprint, ScopeFile
from fingerscan.scanner.filters import ScopeFilter
from fingerscan.scanner.metadata import join_path, list_directory, lstat_entry, short_filename
from fingerscan.store.base import FingerprintStore

logger = logging.getLogger(__name__)


class Scope(ABC):
    """Abstract base class for scan scopes."""

    def __init__(self) -> None:
        self._store: FingerprintStore | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable scope name used in logs."""

    @abstractmethod
    def iter_files(self) -> AsyncIterator[ScopeFile]:
        """Yield the regular files in scope, in traversal order."""

    async def start_reverse_scan(self, store: FingerprintStore) -> int:
        """Bind *store* for reverse iteration and return the number of fingerprints to visit."""
        self._store = store
        return await self._count_fingerprints(store)

    @abstractmethod
    async def _count_fingerprints(self, store: FingerprintStore) -> int: ...

    @abstractmethod
    def iter_fingerprints(self) -> AsyncIterator[ScopedFingerprint]:
        """Yield stored fingerprints with their current metadata and in-scope flag."""

    def _require_store(self) -> FingerprintStore:
        if self._store is None:
            raise RuntimeError(f"{self.name}: start_reverse_scan() must be called before iter_fingerprints()")
        return self._store

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class FilesScope(Scope):
    """Scope made of an explicit list of files.

    No filter applies: every listed path that is a regular file is scanned and
    every stored fingerprint for a listed path is in scope.
    """

    def __init__(self, long_filenames: Iterable[str | os.PathLike[str]]) -> None:
        super().__init__()
        self.long_filenames: tuple[str, ...] = tuple(os.fspath(path) for path in long_filenames)

    @property
    def name(self) -> str:
        first = self.long_filenames[0] if self.long_filenames else ""
        return f"{FILES_SCOPE_PREFIX}{first}"

    async def iter_files(self) -> AsyncIterator[ScopeFile]:
        for long_filename in self.long_filenames:
            metadata = await lstat_entry(long_filename)
            if metadata is None or not metadata.is_file:
                continue
            yield ScopeFile(long_filename, short_filename(long_filename), metadata)

    async def _count_fingerprints(self, store: FingerprintStore) -> int:
        return len(self.long_filenames)

    async def iter_fingerprints(self) -> AsyncIterator[ScopedFingerprint]:
        store = self._require_store()
        for long_filename in self.long_filenames:
            fingerprint = await store.get_fingerprint(long_filename)
            if fingerprint is None:
                continue
            metadata = await lstat_entry(fingerprint.long_filename)
            yield ScopedFingerprint(fingerprint, metadata, in_scope=True)


class DirectoryScope(Scope):
    """Scope made of a folder hierarchy, narrowed by a ``ScopeFilter``.

    Filters are configured through the chainable ``exclude``,
    ``include_files``, ``exclude_files_smaller_than`` and
    ``exclude_files_larger_than`` builders before a scan starts, and must not
    change while one runs.
    """

    def __init__(self, folder: str | os.PathLike[str], *, page_size: int = REVERSE_SCAN_PAGE_SIZE) -> None:
        super().__init__()
        folder = os.fspath(folder)
        self.folder = folder.rstrip(os.sep) or os.sep
        self.filter = ScopeFilter()
        self.page_size = page_size
        self._total = 0

    @property
    def name(self) -> str:
        return f"{DIRECTORY_SCOPE_PREFIX}{self.folder}"

    def exclude(self, filenames: Sequence[str] | None) -> DirectoryScope:
        """Exclude files and folders by short name, ``*suffix`` pattern or path element."""
        if filenames is not None:
            self.filter.exclusions.extend(name.lower() for name in filenames)
        return self

    def include_files(self, filenames: Sequence[str] | None) -> DirectoryScope:
        """Restrict files (not folders) to those matching a short name or ``*suffix`` pattern."""
        if filenames is not None:
            self.filter.file_inclusions.extend(name.lower() for name in filenames)
        return self

    def exclude_files_smaller_than(self, min_file_size: int | None) -> DirectoryScope:
        """Exclude files strictly smaller than *min_file_size* bytes."""
        if min_file_size is not None:
            self.filter.min_file_size = min_file_size
        return self

    def exclude_files_larger_than(self, max_file_size: int | None) -> DirectoryScope:
        """Exclude files strictly larger than *max_file_size* bytes."""
        if max_file_size is not None:
            self.filter.max_file_size = max_file_size
        return self

    async def iter_files(self) -> AsyncIterator[ScopeFile]:
        """Walk the hierarchy depth-first, visiting children in sorted order."""
        stack = [self.folder]
        while stack:
            long_filename = stack.pop()
            metadata = await lstat_entry(long_filename)
            if metadata is None:
                continue
            name = short_filename(long_filename)

            if metadata.is_file:
                if self.filter.is_excluded(long_filename, name, metadata):
                    logger.debug("Excluded file %s", long_filename)
                    continue
                yield ScopeFile(long_filename, name, metadata)
                continue

            if metadata.is_dir:
                if self.filter.is_excluded(long_filename, name, metadata):
                    logger.debug("Excluded folder %s", long_filename)
                    continue
                children = await list_directory(long_filename)
                if children is None:
                    continue
                # Reversed so the smallest name is popped first.
                stack.extend(join_path(long_filename, child) for child in reversed(children))

    async def _count_fingerprints(self, store: FingerprintStore) -> int:
        self._total = await store.count_fingerprints(self.folder)
        return self._total

    async def iter_fingerprints(self) -> AsyncIterator[ScopedFingerprint]:
        """Page through stored fingerprints under the folder and check each against the filesystem."""
        store = self._require_store()
        offset = 0
        visited = 0
        while True:
            page = await store.get_fingerprints_page(self.folder, offset, self.page_size)
            offset += len(page)
            logger.debug("Loaded %d fingerprints (offset %d)", len(page), offset)

            for fingerprint in page:
                metadata = await lstat_entry(fingerprint.long_filename)
                in_scope = not self.filter.is_excluded(fingerprint.long_filename, fingerprint.short_filename, metadata)
                visited += 1
                progress = min(1.0, visited / self._total) if self._total else None
                yield ScopedFingerprint(fingerprint, metadata, in_scope, progress)

            if len(page) < self.page_size:
                return


def new_files_scope(long_filenames: Iterable[str | os.PathLike[str]]) -> FilesScope:
    """Create a scope for an explicit list of files."""
    return FilesScope(long_filenames)


def new_directory_scope(folder: str | os.PathLike[str]) -> DirectoryScope:
    """Create a scope for a folder hierarchy."""
    return DirectoryScope(folder)

"""Awaitable filesystem primitives used by scopes and scanners.

Each call runs in a worker thread through ``asyncio.to_thread`` and is awaited
before the next one starts, so a scan never has two filesystem operations in
flight. Errors whose ``errno`` is in ``TOLERATED_ERRNOS`` mean the entry
vanished or became inaccessible and are reported as ``None``; every other
``OSError`` propagates.
"""

from __future__ import annotations

import asyncio
import logging
import os

from fingerscan.constants.scanner import TOLERATED_ERRNOS
from fingerscan.io import file_md5
from fingerscan.model import FileMetadata

logger = logging.getLogger(__name__)


def is_tolerated_error(exc: OSError) -> bool:
    """Return True for errors caused by an entry vanishing or being unreadable."""
    return exc.errno in TOLERATED_ERRNOS


async def lstat_entry(path: str) -> FileMetadata | None:
    """Return ``lstat`` metadata for *path*, or None when it is absent or inaccessible."""
    try:
        result = await asyncio.to_thread(os.lstat, path)
    except OSError as exc:
        if is_tolerated_error(exc):
            logger.debug("Skipping %s: %s", path, exc.strerror)
            return None
        raise
    return FileMetadata.from_stat(result)


async def list_directory(path: str) -> list[str] | None:
    """Return the sorted child names of *path*, or None when it is absent or inaccessible."""
    try:
        names = await asyncio.to_thread(os.listdir, path)
    except OSError as exc:
        if is_tolerated_error(exc):
            logger.debug("Skipping directory %s: %s", path, exc.strerror)
            return None
        raise
    return sorted(names)


async def compute_digest(path: str) -> str:
    """Compute the content digest of *path*."""
    return await asyncio.to_thread(file_md5, path)


def short_filename(path: str) -> str:
    """Return the last path element of *path*."""
    return os.path.basename(path.rstrip(os.sep)) or path


def join_path(folder: str, name: str) -> str:
    """Join a child name onto a folder path with a single separator."""
    if folder.endswith(os.sep):
        return folder + name
    return folder + os.sep + name


def traversal_sort_key(path: str) -> tuple[str, ...]:
    """Ordering key matching the directory scope's depth-first visiting order.

    Comparing component tuples places ``a/b/c`` before ``a/b.txt`` exactly as
    the traversal does (children of ``b`` are visited before the sibling
    ``b.txt``), which plain string comparison does not.
    """
    return tuple(path.split(os.sep))

"""Inclusion and exclusion rules for directory scopes."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from fingerscan.model import FileMetadata

_WILDCARD: str = "*"


def file_extension(short_filename: str) -> str:
    """Return the text after the last dot of *short_filename*, or an empty string."""
    _, dot, extension = short_filename.rpartition(".")
    return extension if dot else ""


def matches_name_pattern(short_filename: str, pattern: str) -> bool:
    """Match a lowercase short name against an exact or ``*suffix`` pattern."""
    if pattern.startswith(_WILDCARD):
        return short_filename.endswith(pattern[1:])
    return short_filename == pattern


@dataclass
class ScopeFilter:
    """Filter state of a directory scope.

    Patterns are stored lowercase. Sizes are in bytes and compare strictly:
    a file exactly ``min_file_size`` bytes long is kept.
    """

    exclusions: list[str] = field(default_factory=list)
    file_inclusions: list[str] = field(default_factory=list)
    min_file_size: int | None = None
    max_file_size: int | None = None

    def is_excluded(self, long_filename: str, short_filename: str, metadata: FileMetadata | None) -> bool:
        """Return True when the entry falls outside the scope.

        Unconditional rules apply first and only when *metadata* is known: size
        bounds, missing extension, symbolic links and empty entries. The
        exclusion list comes next, then the file inclusion allowlist.
        """
        short_filename = short_filename.lower()
        is_file = metadata is not None and metadata.is_file

        if metadata is not None:
            if is_file and self.min_file_size is not None and metadata.size < self.min_file_size:
                return True
            if is_file and self.max_file_size is not None and metadata.size > self.max_file_size:
                return True
            # Files without an extension are never part of a directory scope.
            if is_file and not file_extension(short_filename):
                return True
            if metadata.is_symlink:
                return True
            if metadata.size == 0:
                return True

        if self.is_path_element_excluded(long_filename, short_filename):
            return True

        if self.file_inclusions and is_file:
            return not any(matches_name_pattern(short_filename, pattern) for pattern in self.file_inclusions)
        return False

    def is_path_element_excluded(self, long_filename: str, short_filename: str) -> bool:
        """Return True when the short name or any path element matches an exclusion."""
        lowered = long_filename.lower()
        for pattern in self.exclusions:
            if pattern.startswith(_WILDCARD):
                if short_filename.endswith(pattern[1:]):
                    return True
                continue
            if short_filename == pattern:
                return True
            if f"{os.sep}{pattern}{os.sep}" in lowered:
                return True
        return False

"""Shared file I/O helpers."""

from .files import file_md5

__all__ = ["file_md5"]

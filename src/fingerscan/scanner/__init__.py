"""Scanner engine package."""

from __future__ import annotations

from typing import Any

__all__ = [
    "DirectoryScope",
    "FilesScope",
    "ProgressObserver",
    "ReverseScanHandler",
    "VanishedFilesHandler",
    "new_directory_scope",
    "new_files_scope",
    "scan",
]

_LAZY_EXPORTS: dict[str, str] = {
    "scan": "orchestrator",
    "DirectoryScope": "scope",
    "FilesScope": "scope",
    "new_directory_scope": "scope",
    "new_files_scope": "scope",
    "ProgressObserver": "progress",
    "ReverseScanHandler": "handlers",
    "VanishedFilesHandler": "handlers",
}


def __getattr__(name: str) -> Any:
    """Lazily expose scanner APIs to avoid import cycles at package import time."""
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module

    return getattr(import_module(f"{__name__}.{module_name}"), name)

"""Core data models for Fingerscan."""

from .entities import (
    FileMetadata,
    Fingerprint,
    PhaseStats,
    ScanOptions,
    ScanStats,
    ScopedFingerprint,
    ScopeFile,
)

__all__ = [
    "FileMetadata",
    "Fingerprint",
    "PhaseStats",
    "ScanOptions",
    "ScanStats",
    "ScopeFile",
    "ScopedFingerprint",
]

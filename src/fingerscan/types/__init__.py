"""Shared typed payloads for Fingerscan."""

from .store import FingerprintChanges, StoredFingerprint, StorePayload

__all__ = [
    "FingerprintChanges",
    "StorePayload",
    "StoredFingerprint",
]

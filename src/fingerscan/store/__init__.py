"""Fingerprint store interface and reference implementations."""

from .base import FingerprintStore
from .json_store import JsonFingerprintStore
from .memory import InMemoryFingerprintStore

__all__ = ["FingerprintStore", "InMemoryFingerprintStore", "JsonFingerprintStore"]

"""Shared exception hierarchy for Fingerscan."""

from __future__ import annotations

from .base import FingerscanError
from .config import ConfigError
from .store import StoreError

__all__ = ["ConfigError", "FingerscanError", "StoreError"]

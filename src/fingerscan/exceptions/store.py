"""Store-related exceptions."""

from __future__ import annotations

from fingerscan.exceptions.base import FingerscanError


class StoreError(FingerscanError):
    """Raised when a fingerprint store cannot read, write or locate a record."""

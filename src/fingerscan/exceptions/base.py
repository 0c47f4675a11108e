"""Root exception type."""

from __future__ import annotations


class FingerscanError(Exception):
    """Base class for errors raised by Fingerscan."""

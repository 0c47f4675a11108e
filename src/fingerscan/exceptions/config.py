"""Configuration-related exceptions."""

from __future__ import annotations

from fingerscan.exceptions.base import FingerscanError


class ConfigError(FingerscanError, ValueError):
    """Raised when scanner configuration is invalid."""

"""Configuration loading and normalization for Fingerscan scans."""

from __future__ import annotations

from fingerscan.config.loader import load_config
from fingerscan.config.model import FingerscanConfig

__all__ = ["FingerscanConfig", "load_config"]

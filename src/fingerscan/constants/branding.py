"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "FINGERSCAN"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ FINGERSCAN",
    "     // incremental file fingerprints",
)
SCAN_SUMMARY_TITLE: str = "Scan summary"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} filesystem scanner"))

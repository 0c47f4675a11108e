"""Scan progress and summary reporting."""

from .stdout import StdoutProgressReporter, format_summary

__all__ = ["StdoutProgressReporter", "format_summary"]

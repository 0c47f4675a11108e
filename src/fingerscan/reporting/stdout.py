"""Human-readable stdout reporting of scan progress and results."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TYPE_CHECKING, TextIO

from fingerscan.constants.branding import ASCII_LOGO_LINES, SCAN_SUMMARY_TITLE
from fingerscan.constants.reporting import (
    ANSI_BOLD,
    ANSI_GREEN,
    ANSI_RED,
    ANSI_RESET,
    ANSI_YELLOW,
    PHASE_FORWARD,
    PHASE_REVERSE,
)
from fingerscan.model import PhaseStats, ScanOptions, ScanStats
from fingerscan.scanner.progress import ProgressObserver

if TYPE_CHECKING:
    from fingerscan.scanner.handlers import HandlerFactory
    from fingerscan.scanner.scope import Scope


def _colorize(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{ANSI_RESET}" if enabled else text


def _format_phase(label: str, stats: PhaseStats, *, color: bool) -> str:
    errors = str(stats.errors)
    if stats.errors:
        errors = _colorize(errors, ANSI_RED, color)
    processed = _colorize(str(stats.processed), ANSI_YELLOW, color) if stats.processed else str(stats.processed)
    return f"  {label:<8} scanned={stats.scanned}  processed={processed}  errors={errors}"


def format_summary(
    stats: ScanStats,
    *,
    inserted: int = 0,
    updated: int = 0,
    color: bool = False,
) -> str:
    """Render the end-of-scan summary block."""
    title = _colorize(SCAN_SUMMARY_TITLE, ANSI_BOLD, color)
    status = "OK" if stats.reverse.errors == 0 else "WITH ERRORS"
    status = _colorize(status, ANSI_GREEN if stats.reverse.errors == 0 else ANSI_RED, color)
    lines = [
        f"{title}: {status}",
        _format_phase(PHASE_FORWARD, stats.forward, color=color),
        f"  {'':<8} inserted={inserted}  updated={updated}",
        _format_phase(PHASE_REVERSE, stats.reverse, color=color),
    ]
    return "\n".join(lines)


class StdoutProgressReporter(ProgressObserver):
    """Progress observer that prints phase banners and remembers the latest counters."""

    def __init__(self, *, stream: TextIO | None = None, color: bool = True, quiet: bool = False) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.color = color
        self.quiet = quiet
        self.inserted = 0
        self.updated = 0
        self.reverse_total = 0

    def _write(self, line: str) -> None:
        if not self.quiet:
            print(line, file=self.stream)

    def scan_started(self, scope: Scope, handlers: Sequence[HandlerFactory], options: ScanOptions) -> None:
        for logo_line in ASCII_LOGO_LINES:
            self._write(logo_line)
        mode = " (force)" if options.force else ""
        self._write(f"Scanning {scope.name}{mode}")

    def forward_scan_started(self) -> None:
        self._write(f"[{PHASE_FORWARD}] started")

    def forward_scan_progress(self, scanned: int, processed: int, inserted: int, updated: int) -> None:
        self.inserted = inserted
        self.updated = updated

    def forward_scan_ended(self) -> None:
        self._write(f"[{PHASE_FORWARD}] done: inserted={self.inserted} updated={self.updated}")

    def reverse_scan_started(self) -> None:
        self._write(f"[{PHASE_REVERSE}] started")

    def reverse_scan_progress(self, total: int, scanned: int, processed: int, errors: int) -> None:
        self.reverse_total = total

    def reverse_scan_ended(self) -> None:
        self._write(f"[{PHASE_REVERSE}] done: {self.reverse_total} stored fingerprints checked")

    def report(self, stats: ScanStats) -> None:
        """Print the summary for a completed scan."""
        self._write(format_summary(stats, inserted=self.inserted, updated=self.updated, color=self.color))

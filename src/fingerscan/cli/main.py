"""CLI entrypoint for the Fingerscan scanner."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from fingerscan import __version__
from fingerscan.config import FingerscanConfig, load_config
from fingerscan.constants.branding import CLI_DESCRIPTION
from fingerscan.exceptions import ConfigError, FingerscanError, StoreError
from fingerscan.model import ScanOptions, ScanStats
from fingerscan.reporting import StdoutProgressReporter
from fingerscan.scanner.orchestrator import scan
from fingerscan.scanner.scope import Scope, new_directory_scope, new_files_scope
from fingerscan.store import JsonFingerprintStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="fingerscan",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser("scan", help="Fingerprint new or changed files and reconcile the store")
    target = scan_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("-r", "--root", type=Path, help="Directory to scan recursively")
    target.add_argument(
        "-f",
        "--file",
        type=Path,
        action="append",
        default=None,
        help="Explicit file to scan (repeat flag for multiple files)",
    )
    scan_parser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    scan_parser.add_argument("-s", "--store", type=Path, default=None, help="Fingerprint store JSON file")
    scan_parser.add_argument(
        "--force",
        action="store_true",
        help="Recompute digests of every file in scope, even if unchanged",
    )
    scan_parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        help="File or folder name, '*suffix' pattern or path element to exclude (repeatable)",
    )
    scan_parser.add_argument(
        "-i",
        "--include",
        action="append",
        default=[],
        help="Only scan files matching this name or '*suffix' pattern (repeatable)",
    )
    scan_parser.add_argument("--min-size", type=int, default=None, help="Skip files smaller than this many bytes")
    scan_parser.add_argument("--max-size", type=int, default=None, help="Skip files larger than this many bytes")
    scan_parser.add_argument("--no-stdout", action="store_true", help="Silence stdout output")
    scan_parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    scan_parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    if args.command != "scan":
        parser.error(f"Unsupported command: {args.command}")

    try:
        return _handle_scan(args)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except StoreError as exc:
        print(f"Store error: {exc}", file=sys.stderr)
        return 2
    except (FingerscanError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


def _handle_scan(args: argparse.Namespace) -> int:
    """Resolve config, build scope and store, run the scan and report."""
    for flag, value in (("--min-size", args.min_size), ("--max-size", args.max_size)):
        if value is not None and value < 0:
            raise ConfigError(f"{flag} must be a non-negative integer")

    base_dir = args.root.resolve() if args.root is not None else Path.cwd()
    if args.root is not None and not base_dir.is_dir():
        raise ConfigError(f"Scan root does not exist or is not a directory: {base_dir}")

    config = load_config(base_dir, args.config).with_overrides(
        exclude=tuple(pattern.lower() for pattern in args.exclude),
        include_files=tuple(pattern.lower() for pattern in args.include),
        min_file_size=args.min_size,
        max_file_size=args.max_size,
        store_path=str(args.store) if args.store is not None else None,
    )
    scope = _build_scope(args, base_dir, config)
    store_path = config.resolve_store_path(base_dir)
    store = JsonFingerprintStore.load(store_path)

    reporter = StdoutProgressReporter(color=not args.no_color, quiet=args.no_stdout)
    options = ScanOptions(force=args.force)
    try:
        stats: ScanStats = asyncio.run(scan(store, reporter, scope, (), options))
    finally:
        # Every insert and update has already been applied to the store.
        store.save()

    reporter.report(stats)
    return 1 if stats.reverse.errors else 0


def _build_scope(args: argparse.Namespace, base_dir: Path, config: FingerscanConfig) -> Scope:
    if args.file:
        return new_files_scope(str(path.resolve()) for path in args.file)

    store_path = config.resolve_store_path(base_dir)
    excluded = (*config.exclude, store_path.name.lower()) if store_path.is_relative_to(base_dir) else config.exclude
    return (
        new_directory_scope(base_dir)
        .exclude(list(excluded))
        .include_files(list(config.include_files))
        .exclude_files_smaller_than(config.min_file_size)
        .exclude_files_larger_than(config.max_file_size)
    )

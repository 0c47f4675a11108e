"""Tests for the forward scanner's read-ahead cache."""

from __future__ import annotations

from fingerscan.model import Fingerprint
from fingerscan.scanner.cache import FingerprintCache


def _fingerprint(name: str) -> Fingerprint:
    return Fingerprint(short_filename=name, long_filename=f"/r/{name}", mtime=1, size=1, md5="0" * 32, uuid=name)


def test_cache_evicts_oldest_inserted_entries() -> None:
    cache = FingerprintCache(high_water_mark=3)

    cache.add_all(_fingerprint(name) for name in ("a", "b", "c", "d", "e"))

    assert len(cache) == 3
    assert cache.keys() == ["/r/c", "/r/d", "/r/e"]
    assert cache.evictions == 2
    assert "/r/a" not in cache
    assert cache.get("/r/a") is None


def test_cache_reads_do_not_refresh_entries() -> None:
    cache = FingerprintCache(high_water_mark=2)
    cache.add(_fingerprint("a"))
    cache.add(_fingerprint("b"))

    assert cache.get("/r/a") is not None
    cache.add(_fingerprint("c"))

    assert cache.keys() == ["/r/b", "/r/c"]


def test_cache_reinsertion_counts_as_newest() -> None:
    cache = FingerprintCache(high_water_mark=2)
    cache.add(_fingerprint("a"))
    cache.add(_fingerprint("b"))
    replacement = _fingerprint("a")
    cache.add(replacement)
    cache.add(_fingerprint("c"))

    assert cache.keys() == ["/r/a", "/r/c"]
    assert cache.get("/r/a") is replacement

"""Tests for files and directory scopes."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from fingerscan.model import Fingerprint
from fingerscan.scanner.scope import DirectoryScope, FilesScope, new_directory_scope, new_files_scope
from fingerscan.store import InMemoryFingerprintStore


def _stored(path: Path, *, uuid: str) -> Fingerprint:
    return Fingerprint(
        short_filename=path.name,
        long_filename=str(path),
        mtime=1,
        size=4,
        md5="0" * 32,
        uuid=uuid,
    )


async def _forward(scope: DirectoryScope | FilesScope) -> list[str]:
    return [entry.long_filename async for entry in scope.iter_files()]


def test_scope_names() -> None:
    assert new_directory_scope("/data/photos/").name == "Dir:/data/photos"
    assert new_files_scope(["/data/a.txt", "/data/b.txt"]).name == "File:/data/a.txt"
    assert new_files_scope([]).name == "File:"
    assert repr(DirectoryScope("/data")) == "<DirectoryScope Dir:/data>"


def test_directory_scope_builders_chain_and_lowercase() -> None:
    scope = (
        new_directory_scope("/data")
        .exclude(["*.LOG", "Cache"])
        .exclude(None)
        .include_files(["*.PDF"])
        .exclude_files_smaller_than(10)
        .exclude_files_larger_than(None)
    )

    assert scope.filter.exclusions == ["*.log", "cache"]
    assert scope.filter.file_inclusions == ["*.pdf"]
    assert scope.filter.min_file_size == 10
    assert scope.filter.max_file_size is None


async def test_directory_scope_walks_depth_first_in_sorted_order(tmp_path: Path, write_file) -> None:
    write_file(tmp_path / "b.txt")
    write_file(tmp_path / "a.txt")
    write_file(tmp_path / "a" / "z.txt")
    write_file(tmp_path / "a" / "c" / "d.txt")

    found = await _forward(new_directory_scope(tmp_path))

    assert found == [
        str(tmp_path / "a" / "c" / "d.txt"),
        str(tmp_path / "a" / "z.txt"),
        str(tmp_path / "a.txt"),
        str(tmp_path / "b.txt"),
    ]


async def test_directory_scope_skips_excluded_folders_and_special_files(tmp_path: Path, write_file) -> None:
    write_file(tmp_path / "keep.txt")
    write_file(tmp_path / "node_modules" / "pkg.js")
    write_file(tmp_path / "Makefile")
    write_file(tmp_path / "empty.txt", "")
    os.symlink(tmp_path / "keep.txt", tmp_path / "link.txt")

    found = await _forward(new_directory_scope(tmp_path).exclude(["node_modules"]))

    assert found == [str(tmp_path / "keep.txt")]


async def test_directory_scope_applies_inclusions_to_files(tmp_path: Path, write_file) -> None:
    write_file(tmp_path / "docs" / "guide.pdf")
    write_file(tmp_path / "docs" / "guide.txt")
    write_file(tmp_path / "cover.PDF")

    found = await _forward(new_directory_scope(tmp_path).include_files(["*.pdf"]))

    assert found == [str(tmp_path / "cover.PDF"), str(tmp_path / "docs" / "guide.pdf")]


async def test_directory_scope_on_missing_folder_yields_nothing(tmp_path: Path) -> None:
    assert await _forward(new_directory_scope(tmp_path / "missing")) == []


async def test_files_scope_yields_only_existing_regular_files(tmp_path: Path, write_file) -> None:
    present = write_file(tmp_path / "present.txt")
    (tmp_path / "folder").mkdir()
    scope = new_files_scope([present, tmp_path / "missing.txt", tmp_path / "folder"])

    assert await _forward(scope) == [str(present)]


async def test_files_scope_keeps_extensionless_files(tmp_path: Path, write_file) -> None:
    makefile = write_file(tmp_path / "Makefile")

    assert await _forward(new_files_scope([makefile])) == [str(makefile)]


async def test_iter_fingerprints_requires_start(tmp_path: Path) -> None:
    scope = new_directory_scope(tmp_path)

    with pytest.raises(RuntimeError, match="start_reverse_scan"):
        async for _ in scope.iter_fingerprints():
            pass


async def test_directory_scope_reverse_iteration_pages_and_flags_scope(tmp_path: Path, write_file) -> None:
    paths = [write_file(tmp_path / f"file{index}.txt") for index in range(4)]
    write_file(tmp_path / "skip.log")
    outside = tmp_path.parent / "outside.txt"
    store = InMemoryFingerprintStore(
        [_stored(path, uuid=f"u{index}") for index, path in enumerate(paths)]
        + [_stored(tmp_path / "skip.log", uuid="log"), _stored(tmp_path / "gone.txt", uuid="gone")]
        + [_stored(outside, uuid="outside")]
    )
    scope = DirectoryScope(tmp_path, page_size=2).exclude(["*.log"])

    total = await scope.start_reverse_scan(store)
    entries = [entry async for entry in scope.iter_fingerprints()]

    assert total == 6
    assert [entry.fingerprint.long_filename for entry in entries] == [
        str(path) for path in [*paths, tmp_path / "gone.txt", tmp_path / "skip.log"]
    ]
    by_name = {entry.fingerprint.short_filename: entry for entry in entries}
    assert by_name["skip.log"].in_scope is False
    assert by_name["gone.txt"].in_scope is True
    assert by_name["gone.txt"].metadata is None
    assert by_name["file0.txt"].metadata is not None
    assert entries[-1].progress == 1.0
    assert entries[0].progress == pytest.approx(1 / 6)


async def test_directory_scope_reverse_iteration_on_empty_store(tmp_path: Path) -> None:
    scope = new_directory_scope(tmp_path)

    assert await scope.start_reverse_scan(InMemoryFingerprintStore()) == 0
    assert [entry async for entry in scope.iter_fingerprints()] == []


async def test_files_scope_reverse_iteration_reports_listed_fingerprints(tmp_path: Path, write_file) -> None:
    present = write_file(tmp_path / "present.txt")
    removed = tmp_path / "removed.txt"
    store = InMemoryFingerprintStore([_stored(present, uuid="p"), _stored(removed, uuid="r")])
    scope = new_files_scope([present, removed, tmp_path / "unknown.txt"])

    assert await scope.start_reverse_scan(store) == 3
    entries = [entry async for entry in scope.iter_fingerprints()]

    assert [entry.fingerprint.uuid for entry in entries] == ["p", "r"]
    assert all(entry.in_scope for entry in entries)
    assert entries[0].metadata is not None
    assert entries[1].metadata is None

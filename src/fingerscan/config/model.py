"""Config data model for Fingerscan scans."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fingerscan.constants.config import DEFAULT_STORE_PATH


def _merge_patterns(*pattern_sets: tuple[str, ...]) -> tuple[str, ...]:
    """Concatenate pattern tuples, keeping the first occurrence of each pattern."""
    merged: dict[str, None] = {}
    for patterns in pattern_sets:
        merged.update(dict.fromkeys(patterns))
    return tuple(merged)


@dataclass(frozen=True)
class FingerscanConfig:
    """Resolved scanner config."""

    exclude: tuple[str, ...] = ()
    include_files: tuple[str, ...] = ()
    min_file_size: int | None = None
    max_file_size: int | None = None
    store_path: str = DEFAULT_STORE_PATH

    def resolve_store_path(self, root: Path) -> Path:
        """Return the store path, relative paths being anchored at *root*."""
        path = Path(self.store_path).expanduser()
        return path if path.is_absolute() else root / path

    def with_overrides(
        self,
        *,
        exclude: tuple[str, ...] = (),
        include_files: tuple[str, ...] = (),
        min_file_size: int | None = None,
        max_file_size: int | None = None,
        store_path: str | None = None,
    ) -> FingerscanConfig:
        """Return a copy with command-line values applied: lists merge, scalars replace."""
        return FingerscanConfig(
            exclude=_merge_patterns(self.exclude, exclude),
            include_files=_merge_patterns(self.include_files, include_files),
            min_file_size=min_file_size if min_file_size is not None else self.min_file_size,
            max_file_size=max_file_size if max_file_size is not None else self.max_file_size,
            store_path=store_path if store_path is not None else self.store_path,
        )

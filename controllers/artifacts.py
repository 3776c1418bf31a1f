"""Helpers to resolve grid files from loose identifiers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from models.utils.naming import canonical_sample_name, prefixed_name, stage_spec


def resolve_grid_path(
    identifier: str | Path,
    directories: Iterable[Path | str | None],
    *,
    default_suffix: str = ".txt",
) -> Path | None:
    """Return the first grid file that matches ``identifier`` within ``directories``.

    ``identifier`` may be an absolute path, a filename, or a bare sample name
    such as ``square`` which also matches ``grid_square.txt``.
    """

    candidate = Path(identifier).expanduser()
    if candidate.is_absolute():
        return candidate if candidate.exists() else None

    names = _candidate_names(candidate, default_suffix)
    for directory in _dedupe_paths(directories):
        if not directory.exists():
            continue
        for name in names:
            resolved = directory / name
            if resolved.is_file():
                return resolved
    return None


def list_grid_files(directory: Path) -> list[str]:
    """Return sorted grid filenames stored under ``directory``."""

    if not directory.exists():
        return []
    return sorted(path.name for path in directory.glob(stage_spec("grid").glob) if path.is_file())


def _candidate_names(candidate: Path, default_suffix: str) -> list[str]:
    names: list[str] = []
    seen: set[str] = set()

    def push(name: str) -> None:
        if name and name not in seen:
            names.append(name)
            seen.add(name)

    push(candidate.as_posix())
    push(candidate.name)

    suffix = candidate.suffix or default_suffix
    sample_base = canonical_sample_name(candidate)
    if sample_base:
        push(f"{sample_base}{suffix}")
        push(prefixed_name("grid", sample_base, suffix))
    return names


def _dedupe_paths(paths: Iterable[Path | str | None]) -> list[Path]:
    seen: set[Path] = set()
    results: list[Path] = []
    for item in paths:
        if not item:
            continue
        path = Path(item).expanduser()
        if path in seen:
            continue
        seen.add(path)
        results.append(path)
    return results


__all__ = ["resolve_grid_path", "list_grid_files"]

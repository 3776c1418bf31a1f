from __future__ import annotations

from pathlib import Path

from controllers.artifacts import list_grid_files
from controllers.data_paths import DataPaths


def build_data_paths(data_dir: Path | None = None) -> DataPaths:
    return DataPaths.from_data_dir(data_dir)


def list_grids(paths: DataPaths | None = None) -> list[str]:
    """Return sorted grid filenames under the configured data dir."""

    return list_grid_files((paths or build_data_paths()).grids_dir)


__all__ = [
    "build_data_paths",
    "list_grids",
]

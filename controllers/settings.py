"""Load shared settings (data directory, render cell size) from config.toml."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import tomllib

CONFIG_FILENAME = "config.toml"
CONFIG_SECTION = "pipeloop"
DATA_DIR_KEY = "data_dir"
CELL_SIZE_KEY = "cell_size"
DEFAULT_DATA_DIR = "data"
DEFAULT_CELL_SIZE = 12


def load_data_dir(config_path: Path | None = None) -> Path:
    """Return the canonical data directory resolved from config.toml."""

    section = _read_config_section(config_path or _default_config_path())
    candidate = section.get(DATA_DIR_KEY)
    if isinstance(candidate, str) and candidate.strip():
        return _resolve_path(candidate)
    return _resolve_path(DEFAULT_DATA_DIR)


def load_cell_size(config_path: Path | None = None) -> int:
    """Return the render cell size in pixels (falls back to the default)."""

    section = _read_config_section(config_path or _default_config_path())
    candidate = section.get(CELL_SIZE_KEY)
    if isinstance(candidate, int) and not isinstance(candidate, bool) and candidate >= 3:
        return candidate
    return DEFAULT_CELL_SIZE


@lru_cache(maxsize=8)
def _read_config_section(config_path: Path) -> dict[str, object]:
    if not config_path.is_file():
        return {}

    with config_path.open("rb") as handle:
        config = tomllib.load(handle)

    section = config.get(CONFIG_SECTION)
    if isinstance(section, dict):
        return section
    return {}


def _resolve_path(raw_path: str) -> Path:
    path = Path(raw_path).expanduser()
    if path.is_absolute():
        return path.resolve()
    return (_project_root() / path).resolve()


def _default_config_path() -> Path:
    return _project_root() / CONFIG_FILENAME


def _project_root() -> Path:
    return Path(__file__).resolve().parents[1]


__all__ = ["load_data_dir", "load_cell_size"]

"""Shared filesystem layout helpers for the CLI and the Gradio UI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .settings import load_data_dir

DATA_DIR_ENV = "PIPELOOP_DATA_DIR"


def default_data_dir() -> Path:
    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    return load_data_dir()


@dataclass(slots=True)
class DataPaths:
    """Canonical directories for grid inputs, graph dumps, renders, and reports."""

    grids_dir: Path = Path("data/grids")
    graph_dir: Path = Path("data/graphs")
    render_dir: Path = Path("data/renders")
    reports_dir: Path = Path("data/reports")

    def ensure_directories(self) -> None:
        self.grids_dir.mkdir(parents=True, exist_ok=True)
        self.graph_dir.mkdir(parents=True, exist_ok=True)
        self.render_dir.mkdir(parents=True, exist_ok=True)
        self.reports_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_data_dir(cls, data_dir: Path | None = None) -> DataPaths:
        base = data_dir or default_data_dir()
        base = base.expanduser().resolve()
        return cls(
            grids_dir=base / "grids",
            graph_dir=base / "graphs",
            render_dir=base / "renders",
            reports_dir=base / "reports",
        )


__all__ = ["DATA_DIR_ENV", "DataPaths", "default_data_dir"]

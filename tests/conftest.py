from __future__ import annotations

from pathlib import Path

import pytest

from controllers.loop_report import LoopReportConfig

from .samples import SQUARE, WINDING


@pytest.fixture
def report_config(tmp_path: Path) -> LoopReportConfig:
    return LoopReportConfig(
        graph_dir=tmp_path / "graphs",
        render_dir=tmp_path / "renders",
        reports_dir=tmp_path / "reports",
        report_csv=tmp_path / "reports" / "loop_reports.csv",
        cell_size=8,
    )


@pytest.fixture
def grids_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "grids"
    directory.mkdir()
    (directory / "square.txt").write_text(SQUARE + "\n")
    (directory / "winding.txt").write_text(WINDING + "\n")
    return directory

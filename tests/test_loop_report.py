from __future__ import annotations

import csv
import io
import json

import pytest
from PIL import Image

from controllers.data_paths import DataPaths
from controllers.loop_report import (
    LoopReportConfig,
    _cli,
    process_grid_file,
    process_grid_text,
    run_trace_for_ui,
)
from models.errors import AmbiguousStart
from models.report import CSV_HEADER, default_report_csv_path

from .samples import SQUARE, TINY


def test_process_grid_file_writes_artifacts(grids_dir, report_config):
    report = process_grid_file(grids_dir / "square.txt", config=report_config)

    assert report.answer == "4"
    assert report.sample_name == "square"
    assert report.graph_path == report_config.graph_dir / "graph_square.json"
    assert report.render_path == report_config.render_dir / "render_square.png"
    assert json.loads(report.graph_path.read_text())["width"] == 5
    with Image.open(report.render_path) as rendered:
        assert rendered.size == (5 * report_config.cell_size, 5 * report_config.cell_size)


def test_report_csv_rows_accumulate(grids_dir, report_config):
    process_grid_file(grids_dir / "square.txt", config=report_config)
    process_grid_file(grids_dir / "winding.txt", config=report_config)

    with report_config.report_csv.open(newline="") as handle:
        rows = list(csv.reader(handle))

    assert rows[0] == CSV_HEADER
    assert [row[0] for row in rows[1:]] == ["square", "winding"]
    record = dict(zip(CSV_HEADER, rows[2]))
    assert record["loop_length"] == "16"
    assert record["farthest_distance"] == "8"
    assert record["start_tile"] == "F"
    assert record["pipe_regions"] == "1"


def test_structural_errors_write_nothing(report_config):
    with pytest.raises(AmbiguousStart):
        process_grid_text("S-7\n|.|\nL-S", sample_name="twins", config=report_config)

    assert not report_config.report_csv.exists()
    assert not (report_config.graph_dir / "graph_twins.json").exists()


def test_render_failure_writes_nothing(report_config):
    report_config.cell_size = 2

    with pytest.raises(ValueError, match="cell_size"):
        process_grid_text(TINY, sample_name="tiny", config=report_config)

    assert not (report_config.graph_dir / "graph_tiny.json").exists()
    assert not report_config.report_csv.exists()


def test_toggles_skip_optional_artifacts(report_config):
    report_config.save_graph = False
    report_config.render = False
    report_config.report_csv = None

    report = process_grid_text(TINY, sample_name="tiny", config=report_config)

    assert report.answer == "2"
    assert report.graph_path is None
    assert report.render_path is None
    assert "graph_json" not in report.summary()


def test_summary_includes_trace_and_paths(grids_dir, report_config):
    summary = process_grid_file(grids_dir / "square.txt", config=report_config).summary()

    assert summary["sample"] == "square"
    assert summary["farthest_distance"] == 4
    assert summary["farthest"] == [3, 3]
    assert summary["render_png"].endswith("render_square.png")


def test_default_report_csv_path_is_timestamped(tmp_path):
    from datetime import datetime

    path = default_report_csv_path(tmp_path, timestamp=datetime(2024, 1, 2, 3, 4, 5))

    assert path == tmp_path / "loop_reports_20240102T030405.csv"


def test_run_trace_for_ui_prefers_pasted_text(tmp_path, grids_dir):
    paths = DataPaths.from_data_dir(tmp_path)

    result = run_trace_for_ui(SQUARE, "winding.txt", cell_size=6, paths=paths)

    assert result.answer == "4"
    assert result.render_image.size == (30, 30)
    assert "farthest tile (3, 3)" in result.status_message


def test_run_trace_for_ui_resolves_stored_grid(tmp_path, grids_dir):
    paths = DataPaths.from_data_dir(tmp_path)

    result = run_trace_for_ui("", "winding", paths=paths)

    assert result.answer == "8"
    assert result.summary["sample"] == "winding"


@pytest.mark.parametrize(
    ("text", "selected", "message"),
    [
        ("", None, "Paste a grid"),
        ("   ", "missing.txt", "was not found"),
    ],
)
def test_run_trace_for_ui_input_errors(tmp_path, grids_dir, text, selected, message):
    paths = DataPaths.from_data_dir(tmp_path)

    with pytest.raises(ValueError, match=message):
        run_trace_for_ui(text, selected, paths=paths)


def test_cli_prints_answers_for_paths(grids_dir, tmp_path, capsys):
    exit_code = _cli(
        [str(grids_dir / "square.txt"), "winding", "--data-dir", str(tmp_path), "--no-summary"]
    )

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "[ok] square.txt -> 4" in out
    assert "[ok] winding.txt -> 8" in out


def test_cli_scans_grid_directory_and_writes_csv(grids_dir, tmp_path, capsys):
    exit_code = _cli(["--data-dir", str(tmp_path), "--render", "--save-graph"])

    assert exit_code == 0
    assert "Appended 2 row(s)" in capsys.readouterr().out
    assert len(list((tmp_path / "reports").glob("loop_reports_*.csv"))) == 1
    assert (tmp_path / "renders" / "render_winding.png").exists()
    assert (tmp_path / "graphs" / "graph_square.json").exists()


def test_cli_reports_error_kind_and_fails(tmp_path, capsys):
    bad = tmp_path / "twins.txt"
    bad.write_text("S-7\n|.|\nL-S\n")

    exit_code = _cli([str(bad), "--data-dir", str(tmp_path), "--no-summary"])

    assert exit_code == 1
    assert "AmbiguousStart" in capsys.readouterr().err


def test_cli_missing_path_fails(tmp_path, capsys):
    exit_code = _cli(["nope.txt", "--data-dir", str(tmp_path)])

    assert exit_code == 1
    assert "[missing] nope.txt" in capsys.readouterr().err


def test_cli_reads_stdin(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(SQUARE + "\n"))

    exit_code = _cli(["-", "--data-dir", str(tmp_path), "--no-summary"])

    assert exit_code == 0
    assert "[ok] stdin -> 4" in capsys.readouterr().out


def test_config_from_data_paths_applies_overrides(tmp_path):
    paths = DataPaths.from_data_dir(tmp_path)

    config = LoopReportConfig.from_data_paths(paths, render=False, cell_size=5)

    assert config.render is False
    assert config.cell_size == 5
    assert config.graph_dir == tmp_path.resolve() / "graphs"
    assert config.report_csv.parent == tmp_path.resolve() / "reports"

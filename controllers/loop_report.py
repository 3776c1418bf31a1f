"""Grid -> graph -> loop trace orchestration helpers.

This module implements the end-to-end flow for stored or pasted pipe maps:
parse the grid, build the tile graph, trace the loop through the start, and
persist the graph JSON, overlay PNG, and a CSV summary row.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Sequence

from PIL import Image

from .artifacts import resolve_grid_path
from .data_paths import DataPaths, default_data_dir
from .settings import load_cell_size
from models.graph_render import render_loop_overlay
from models.loop_trace import trace_loop
from models.pipe_graph import build_pipe_graph
from models.pipe_grid import PipeGrid, count_pipe_regions, load_grid, parse_grid
from models.report import LoopReport, append_loop_report_csv, default_report_csv_path
from models.utils import canonical_sample_name, prefixed_name, save_png


@dataclass(slots=True)
class LoopReportConfig:
    """Output destinations and toggles for a report run."""

    graph_dir: Path = Path("data/graphs")
    render_dir: Path = Path("data/renders")
    reports_dir: Path = Path("data/reports")
    report_csv: Path | None = field(default_factory=default_report_csv_path)
    save_graph: bool = True
    render: bool = True
    cell_size: int = field(default_factory=load_cell_size)

    def ensure_directories(self) -> None:
        """Create output folders so downstream saves never fail."""

        if self.save_graph:
            self.graph_dir.mkdir(parents=True, exist_ok=True)
        if self.render:
            self.render_dir.mkdir(parents=True, exist_ok=True)
        if self.report_csv is not None:
            self.report_csv.parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_data_paths(cls, paths: DataPaths, **overrides: object) -> LoopReportConfig:
        config = cls(
            graph_dir=paths.graph_dir,
            render_dir=paths.render_dir,
            reports_dir=paths.reports_dir,
            report_csv=default_report_csv_path(paths.reports_dir),
        )
        for key, value in overrides.items():
            setattr(config, key, value)
        return config


@dataclass(slots=True)
class LoopUIResult:
    """UI-friendly result format for the Gradio tab."""

    answer: str
    render_image: Image.Image
    summary: dict[str, object]
    status_message: str


def analyze_grid(
    grid: PipeGrid,
    *,
    sample_name: str,
    config: LoopReportConfig | None = None,
    grid_path: Path | None = None,
) -> LoopReport:
    """Trace ``grid`` and write whichever artifacts ``config`` enables.

    Raises:
        PipeLoopError subclasses when the grid has no well-formed loop. Nothing
        is written in that case.
    """

    cfg = config or LoopReportConfig()
    graph = build_pipe_graph(grid)
    trace = trace_loop(graph)
    report = LoopReport(
        sample_name=sample_name,
        grid=grid,
        trace=trace,
        pipe_regions=count_pipe_regions(grid),
        grid_path=grid_path,
    )

    overlay = render_loop_overlay(grid, trace, cell_size=cfg.cell_size) if cfg.render else None

    cfg.ensure_directories()
    if cfg.save_graph:
        report.graph_path = graph.save(cfg.graph_dir / prefixed_name("graph", sample_name, ".json"))
    if overlay is not None:
        report.render_path = save_png(
            overlay,
            cfg.render_dir / prefixed_name("render", sample_name, ".png"),
        )
    if cfg.report_csv is not None:
        append_loop_report_csv(report, cfg.report_csv)
    return report


def process_grid_file(path: Path, *, config: LoopReportConfig | None = None) -> LoopReport:
    grid = load_grid(path)
    return analyze_grid(
        grid,
        sample_name=canonical_sample_name(path),
        config=config,
        grid_path=Path(path),
    )


def process_grid_text(
    text: str,
    *,
    sample_name: str | None = None,
    config: LoopReportConfig | None = None,
) -> LoopReport:
    grid = parse_grid(text)
    return analyze_grid(grid, sample_name=_derive_sample_name(sample_name), config=config)


def run_trace_for_ui(
    grid_text: str | None,
    selected_filename: str | None,
    *,
    cell_size: float | int | None = None,
    paths: DataPaths | None = None,
) -> LoopUIResult:
    """Trace pasted text (preferred) or a stored grid and format the outputs.

    Raises:
        ValueError: if no input is given, the stored grid cannot be found, or
            the grid is structurally invalid.
    """

    data_paths = paths or DataPaths.from_data_dir()
    data_paths.ensure_directories()
    config = LoopReportConfig.from_data_paths(data_paths)
    if cell_size is not None:
        try:
            config.cell_size = int(cell_size)
        except (TypeError, ValueError) as exc:
            raise ValueError("Cell size must be an integer.") from exc

    if grid_text and grid_text.strip():
        report = process_grid_text(grid_text, config=config)
    elif selected_filename:
        grid_path = resolve_grid_path(selected_filename, [data_paths.grids_dir])
        if grid_path is None:
            raise ValueError(f"Grid {selected_filename} was not found in {data_paths.grids_dir}.")
        report = process_grid_file(grid_path, config=config)
    else:
        raise ValueError("Paste a grid or choose a stored grid file first.")

    if report.render_path is not None:
        with Image.open(report.render_path) as rendered:
            render_image = rendered.copy()
    else:
        render_image = render_loop_overlay(report.grid, report.trace, cell_size=config.cell_size)

    trace = report.trace
    status = (
        f"Loop through {trace.start} (start acts as `{trace.start_tile}`) is "
        f"{trace.length} tiles long; farthest tile {trace.farthest} is "
        f"{trace.farthest_distance} steps away."
    )
    return LoopUIResult(
        answer=report.answer,
        render_image=render_image,
        summary=report.summary(),
        status_message=status,
    )


def _derive_sample_name(override: str | None) -> str:
    if override:
        cleaned = Path(str(override)).stem.strip()
        if cleaned:
            return canonical_sample_name(cleaned)
        raise ValueError("sample_name must contain at least one visible character")
    return datetime.now().strftime("%Y%m%d-%H%M%S")


def _cli(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Trace the pipe loop of each grid and print the farthest distance."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Grid files or sample names ('-' reads stdin). If omitted, scans <data-dir>/grids/*.txt.",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=default_data_dir(),
        help="Root folder containing grids/, graphs/, renders/, reports/ (default: config.toml or $PIPELOOP_DATA_DIR).",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Save a PNG overlay of each traced loop under renders/.",
    )
    parser.add_argument(
        "--save-graph",
        action="store_true",
        help="Save the tile graph of each grid as JSON under graphs/.",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=load_cell_size(),
        help="Pixels per tile in rendered overlays.",
    )
    parser.add_argument(
        "--no-summary",
        action="store_true",
        help="Skip appending rows to the reports/ CSV.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Optionally cap how many grids to process.",
    )
    args = parser.parse_args(argv)

    paths = DataPaths.from_data_dir(args.data_dir)
    config = LoopReportConfig.from_data_paths(
        paths,
        save_graph=args.save_graph,
        render=args.render,
        cell_size=args.cell_size,
    )
    if args.no_summary:
        config.report_csv = None

    sources: list[Path | str] = []
    if args.paths:
        for raw in args.paths:
            if raw == "-":
                sources.append(raw)
                continue
            resolved = resolve_grid_path(raw, [Path.cwd(), paths.grids_dir])
            if resolved is None:
                print(f"[missing] {raw} – not found", file=sys.stderr)
                return 1
            sources.append(resolved)
    else:
        if not paths.grids_dir.exists():
            parser.error(f"{paths.grids_dir} does not exist.")
        sources.extend(sorted(paths.grids_dir.glob("*.txt")))

    if args.limit is not None:
        sources = sources[: args.limit]
    if not sources:
        print(f"No grid files found under {paths.grids_dir}", file=sys.stderr)
        return 0

    total = len(sources)
    for idx, source in enumerate(sources, start=1):
        name = "stdin" if source == "-" else Path(source).name
        try:
            if source == "-":
                report = process_grid_text(sys.stdin.read(), sample_name="stdin", config=config)
            else:
                report = process_grid_file(Path(source), config=config)
        except ValueError as exc:
            kind = getattr(exc, "kind", type(exc).__name__)
            print(f"[{idx}/{total}] [error] {name}: {kind}: {exc}", file=sys.stderr)
            return 1
        print(f"[{idx}/{total}] [ok] {name} -> {report.answer}")

    if config.report_csv is not None:
        print(f"Appended {total} row(s) to {config.report_csv}")
    return 0


__all__ = [
    "LoopReportConfig",
    "LoopUIResult",
    "analyze_grid",
    "process_grid_file",
    "process_grid_text",
    "run_trace_for_ui",
]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(_cli())

"""Per-grid loop summaries and their CSV persistence."""

from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .loop_trace import LoopTrace
from .pipe_grid import PipeGrid

CSV_HEADER = [
    "sample",
    "grid_path",
    "width",
    "height",
    "start",
    "start_tile",
    "loop_length",
    "farthest_distance",
    "farthest",
    "pipe_regions",
]


def default_report_csv_path(
    output_dir: Path | str = Path("data/reports"),
    *,
    timestamp: datetime | None = None,
) -> Path:
    """Return a timestamped CSV path inside ``output_dir``.

    Each call emits a new ``loop_reports_<timestamp>.csv`` name so separate runs
    do not interleave rows unless the caller passes a specific file.
    """

    stamp = (timestamp or datetime.now()).strftime("%Y%m%dT%H%M%S")
    return Path(output_dir) / f"loop_reports_{stamp}.csv"


@dataclass(slots=True)
class LoopReport:
    """Traced loop plus the artifacts written for one grid."""

    sample_name: str
    grid: PipeGrid
    trace: LoopTrace
    pipe_regions: int
    grid_path: Path | None = None
    graph_path: Path | None = None
    render_path: Path | None = None

    @property
    def answer(self) -> str:
        return str(self.trace.farthest_distance)

    def summary(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "sample": self.sample_name,
            "width": self.grid.width,
            "height": self.grid.height,
            "pipe_regions": self.pipe_regions,
            **self.trace.to_dict(),
        }
        for key, value in (
            ("grid_path", self.grid_path),
            ("graph_json", self.graph_path),
            ("render_png", self.render_path),
        ):
            if value is not None:
                payload[key] = str(value)
        return payload


def append_loop_report_csv(report: LoopReport, csv_path: Path) -> Path:
    """Append a summary row for ``report`` to ``csv_path``."""

    csv_path.parent.mkdir(parents=True, exist_ok=True)
    needs_header = not csv_path.exists()
    trace = report.trace
    with csv_path.open("a", newline="") as handle:
        writer = csv.writer(handle)
        if needs_header:
            writer.writerow(CSV_HEADER)
        writer.writerow(
            [
                report.sample_name,
                str(report.grid_path) if report.grid_path else "",
                report.grid.width,
                report.grid.height,
                str(trace.start),
                trace.start_tile,
                trace.length,
                trace.farthest_distance,
                str(trace.farthest),
                report.pipe_regions,
            ]
        )
    return csv_path


__all__ = [
    "CSV_HEADER",
    "LoopReport",
    "append_loop_report_csv",
    "default_report_csv_path",
]

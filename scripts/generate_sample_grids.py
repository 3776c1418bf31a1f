"""Seed data/grids/ with the reference pipe maps used throughout the docs."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Mapping, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]

SAMPLE_GRIDS: dict[str, str] = {
    "square": ".....\n.S-7.\n.|.|.\n.L-J.\n.....\n",
    "square_cluttered": "-L|F7\n7S-7|\nL|7||\n-L-J|\nL|-JF\n",
    "winding": "..F7.\n.FJ|.\nSJ.L7\n|F--J\nLJ...\n",
    "winding_cluttered": "7-F7-\n.FJ|7\nSJLL7\n|F--J\nLJ.LJ\n",
    "tiny": "S7\nLJ\n",
}


def write_sample_grids(
    destination: Path,
    grids: Mapping[str, str] = SAMPLE_GRIDS,
    *,
    overwrite: bool = False,
) -> list[Path]:
    """Write each grid as ``<name>.txt`` and return the paths that were written."""

    destination = destination.expanduser()
    destination.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, text in grids.items():
        path = destination / f"{name}.txt"
        if path.exists() and not overwrite:
            print(f"[skipping] {path.name} already exists")
            continue
        path.write_text(text)
        written.append(path)
    return written


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write the reference pipe maps to a grid folder.")
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=REPO_ROOT / "data" / "grids",
        help="Destination folder (default: data/grids).",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace grids that already exist.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    written = write_sample_grids(args.output_dir, overwrite=args.overwrite)
    print(f"Wrote {len(written)} grid(s) into {args.output_dir}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""
Parsing helpers that turn a block of pipe-map text into a validated grid.

Each cell holds one tile character. Pipes connect two of the four orthogonal
neighbours, ground connects nothing, and ``S`` marks the start tile whose real
shape is hidden and has to be inferred from the tiles around it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

import numpy as np
from skimage.measure import label

from .errors import MalformedGrid

GROUND = "."
START = "S"

NORTH: tuple[int, int] = (0, -1)
SOUTH: tuple[int, int] = (0, 1)
WEST: tuple[int, int] = (-1, 0)
EAST: tuple[int, int] = (1, 0)

# (dx, dy) pairs each pipe shape connects to.
PIPE_OFFSETS: dict[str, tuple[tuple[int, int], tuple[int, int]]] = {
    "|": (NORTH, SOUTH),
    "-": (WEST, EAST),
    "L": (NORTH, EAST),
    "J": (NORTH, WEST),
    "7": (WEST, SOUTH),
    "F": (EAST, SOUTH),
}

# Clockwise from north: the start tile fans out to every neighbour.
EIGHT_NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, -1),
    (1, -1),
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
)

TILE_ALPHABET: frozenset[str] = frozenset(PIPE_OFFSETS) | {GROUND, START}


@dataclass(frozen=True, slots=True, order=True)
class Coordinate:
    """Grid position as (column, row); row grows downwards."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Coordinate:
        return Coordinate(self.x + dx, self.y + dy)

    def to_list(self) -> list[int]:
        return [self.x, self.y]

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True, slots=True, eq=False)
class PipeGrid:
    """Rectangular tile map backed by a 2D array of single characters."""

    tiles: np.ndarray

    @property
    def height(self) -> int:
        return int(self.tiles.shape[0])

    @property
    def width(self) -> int:
        return int(self.tiles.shape[1])

    def contains(self, coord: Coordinate) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def tile_at(self, coord: Coordinate) -> str:
        """Return the tile at ``coord``; positions off the map read as ground."""

        if not self.contains(coord):
            return GROUND
        return str(self.tiles[coord.y, coord.x])

    def pipe_mask(self) -> np.ndarray:
        return self.tiles != GROUND

    def rows(self) -> list[str]:
        return ["".join(row) for row in self.tiles.tolist()]

    def start_coordinates(self) -> list[Coordinate]:
        return [Coordinate(int(col), int(row)) for row, col in np.argwhere(self.tiles == START)]

    def iter_pipes(self) -> Iterator[tuple[Coordinate, str]]:
        """Yield ``(coordinate, tile)`` for every non-ground cell in row-major order."""

        for row, col in np.argwhere(self.pipe_mask()):
            yield Coordinate(int(col), int(row)), str(self.tiles[row, col])

    def to_text(self) -> str:
        return "\n".join(self.rows())


def parse_grid(source: str | Sequence[str]) -> PipeGrid:
    """Validate grid text (or pre-split rows) and return a :class:`PipeGrid`."""

    if isinstance(source, str):
        lines = source.split("\n")
    else:
        lines = list(source)
    rows = [line.rstrip("\r") for line in lines]
    while rows and not rows[-1]:
        rows.pop()

    if not rows:
        raise MalformedGrid("Grid is empty.")

    width = len(rows[0])
    if width == 0:
        raise MalformedGrid("Grid rows must not be empty.", row=0)

    for row_idx, row in enumerate(rows):
        if len(row) != width:
            raise MalformedGrid(
                f"Row {row_idx} has {len(row)} tiles; expected {width}.",
                row=row_idx,
            )
        for col_idx, char in enumerate(row):
            if char not in TILE_ALPHABET:
                raise MalformedGrid(
                    f"Unknown tile {char!r} at ({col_idx}, {row_idx}).",
                    row=row_idx,
                    column=col_idx,
                )

    tiles = np.array([list(row) for row in rows], dtype="<U1")
    return PipeGrid(tiles=tiles)


def load_grid(path: Path | str) -> PipeGrid:
    """Read a grid text file from disk."""

    return parse_grid(Path(path).read_text())


def count_pipe_regions(grid: PipeGrid) -> int:
    """Number of 4-connected clusters of non-ground tiles."""

    mask = grid.pipe_mask()
    if not mask.any():
        return 0
    labeled = label(mask, connectivity=1)
    return int(labeled.max())


__all__ = [
    "GROUND",
    "START",
    "PIPE_OFFSETS",
    "EIGHT_NEIGHBOR_OFFSETS",
    "TILE_ALPHABET",
    "Coordinate",
    "PipeGrid",
    "parse_grid",
    "load_grid",
    "count_pipe_regions",
]

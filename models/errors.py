"""Structural errors raised while parsing a pipe grid or tracing its loop."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .pipe_grid import Coordinate


class PipeLoopError(ValueError):
    """Base class for malformed-input errors; never transient."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class MalformedGrid(PipeLoopError):
    """Empty input, ragged rows, or a character outside the tile alphabet."""

    def __init__(self, message: str, *, row: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.row = row
        self.column = column


class NoStartFound(PipeLoopError):
    def __init__(self) -> None:
        super().__init__("No tile has the start fan-out; the grid needs exactly one 'S'.")


class AmbiguousStart(PipeLoopError):
    def __init__(self, candidates: Sequence[Coordinate]) -> None:
        self.candidates = tuple(sorted(candidates))
        listed = ", ".join(str(coord) for coord in self.candidates)
        super().__init__(f"Found {len(self.candidates)} start candidates: {listed}.")


class DegenerateLoop(PipeLoopError):
    def __init__(self, start: Coordinate, neighbors: Sequence[Coordinate], message: str | None = None) -> None:
        self.start = start
        self.neighbors = tuple(neighbors)
        if message is None:
            message = (
                f"Start {start} has {len(self.neighbors)} connecting pipe(s); "
                "a closed loop needs exactly 2."
            )
        super().__init__(message)


class BranchingPath(PipeLoopError):
    def __init__(
        self,
        at: Coordinate,
        previous: Coordinate,
        candidates: Sequence[Coordinate],
        message: str | None = None,
    ) -> None:
        self.at = at
        self.previous = previous
        self.candidates = tuple(candidates)
        if message is None:
            message = (
                f"Tile {at} (entered from {previous}) has {len(self.candidates)} "
                "exit(s) instead of 1."
            )
        super().__init__(message)


__all__ = [
    "PipeLoopError",
    "MalformedGrid",
    "NoStartFound",
    "AmbiguousStart",
    "DegenerateLoop",
    "BranchingPath",
]

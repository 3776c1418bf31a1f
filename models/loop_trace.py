"""
Trace the closed pipe loop that runs through the start tile.

The walk is a plain (previous, current) state machine: since every pipe on the
loop names both of its neighbours, excluding the tile we just came from leaves
exactly one way forward until the walk re-enters the start.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .errors import AmbiguousStart, BranchingPath, DegenerateLoop, NoStartFound
from .pipe_graph import START_FANOUT, GridSource, PipeGraph, build_pipe_graph
from .pipe_grid import PIPE_OFFSETS, Coordinate

StartLocator = Callable[[PipeGraph], Coordinate]


@dataclass(slots=True)
class LoopTrace:
    """Walk order and derived metrics of the loop through the start tile."""

    start: Coordinate
    path: list[Coordinate]
    start_tile: str

    @property
    def length(self) -> int:
        return len(self.path)

    @property
    def farthest_distance(self) -> int:
        return self.length // 2

    @property
    def farthest(self) -> Coordinate:
        return self.path[self.farthest_distance]

    def to_dict(self) -> dict[str, object]:
        return {
            "start": self.start.to_list(),
            "start_tile": self.start_tile,
            "loop_length": self.length,
            "farthest_distance": self.farthest_distance,
            "farthest": self.farthest.to_list(),
        }


def locate_start_by_fanout(graph: PipeGraph) -> Coordinate:
    """Return the single node whose out-degree equals the start fan-out."""

    candidates = [node for node in graph.nodes() if graph.out_degree(node) == START_FANOUT]
    if not candidates:
        raise NoStartFound()
    if len(candidates) > 1:
        raise AmbiguousStart(candidates)
    return candidates[0]


def resolve_start_neighbors(graph: PipeGraph, start: Coordinate) -> tuple[Coordinate, Coordinate]:
    """Return the two out-neighbours of ``start`` that connect back to it."""

    reciprocating = [
        neighbor for neighbor in graph.neighbors(start) if graph.has_edge(neighbor, start)
    ]
    if len(reciprocating) != 2:
        raise DegenerateLoop(start, reciprocating)
    return reciprocating[0], reciprocating[1]


def walk_loop(graph: PipeGraph, start: Coordinate, first: Coordinate) -> list[Coordinate]:
    """Follow the loop from ``start`` through ``first`` until it closes.

    Returns the visited coordinates in walk order, beginning with ``start``
    and excluding the final return to it.
    """

    path = [start]
    previous = start
    current = first
    max_steps = len(graph) + 1
    while current != start:
        path.append(current)
        candidates = [node for node in graph.neighbors(current) if node != previous]
        if len(candidates) != 1:
            raise BranchingPath(current, previous, candidates)
        previous, current = current, candidates[0]
        if len(path) > max_steps:
            raise BranchingPath(
                current,
                previous,
                [],
                message=f"Walk from {start} did not close after {max_steps} steps.",
            )
    return path


def infer_start_tile(start: Coordinate, neighbors: tuple[Coordinate, Coordinate]) -> str:
    """Return the pipe shape whose two connections are ``neighbors``."""

    offsets = {(node.x - start.x, node.y - start.y) for node in neighbors}
    for tile, pair in PIPE_OFFSETS.items():
        if set(pair) == offsets:
            return tile
    raise DegenerateLoop(
        start,
        neighbors,
        message=f"No pipe shape connects {start} to {neighbors[0]} and {neighbors[1]}.",
    )


def trace_loop(
    graph: PipeGraph,
    *,
    locate_start: StartLocator = locate_start_by_fanout,
    via: Coordinate | None = None,
) -> LoopTrace:
    """Locate the start, resolve its true neighbours, and walk the loop once.

    Args:
        graph: Graph produced by :func:`models.pipe_graph.build_pipe_graph`.
        locate_start: Strategy returning the start coordinate. Defaults to the
            out-degree lookup.
        via: Optional true neighbour to leave the start through. Defaults to
            the first one in the start's adjacency order.

    Raises:
        NoStartFound, AmbiguousStart: from the default locator.
        DegenerateLoop: the start does not have exactly two connecting pipes,
            or ``via`` is not one of them.
        BranchingPath: a tile on the way offers no or several exits.
    """

    start = locate_start(graph)
    neighbors = resolve_start_neighbors(graph, start)
    if via is None:
        first = neighbors[0]
    elif via in neighbors:
        first = via
    else:
        raise DegenerateLoop(
            start,
            neighbors,
            message=f"{via} is not connected to the start tile {start}.",
        )
    path = walk_loop(graph, start, first)
    return LoopTrace(start=start, path=path, start_tile=infer_start_tile(start, neighbors))


def farthest_loop_distance(source: PipeGraph | GridSource) -> int:
    """Steps from the start to the farthest tile along the loop."""

    graph = source if isinstance(source, PipeGraph) else build_pipe_graph(source)
    return trace_loop(graph).farthest_distance


def process(source: PipeGraph | GridSource) -> str:
    """Grid text in, decimal answer out."""

    return str(farthest_loop_distance(source))


__all__ = [
    "StartLocator",
    "LoopTrace",
    "locate_start_by_fanout",
    "resolve_start_neighbors",
    "walk_loop",
    "infer_start_tile",
    "trace_loop",
    "farthest_loop_distance",
    "process",
]

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Sequence

from .errors import MalformedGrid
from .pipe_grid import (
    EIGHT_NEIGHBOR_OFFSETS,
    PIPE_OFFSETS,
    START,
    TILE_ALPHABET,
    Coordinate,
    PipeGrid,
    load_grid,
    parse_grid,
)

GridSource = PipeGrid | Path | str | Sequence[str]

START_FANOUT = len(EIGHT_NEIGHBOR_OFFSETS)


@dataclass(slots=True)
class PipeGraph:
    """Directed tile graph keyed by coordinate.

    ``adjacency`` maps every referenced coordinate to its ordered, duplicate-free
    list of out-neighbours. Ground cells and positions off the map only show up
    as edge targets, so their lists stay empty.
    """

    adjacency: dict[Coordinate, list[Coordinate]] = field(default_factory=dict)
    width: int = 0
    height: int = 0

    def add_node(self, node: Coordinate) -> None:
        self.adjacency.setdefault(node, [])

    def add_edge(self, source: Coordinate, target: Coordinate) -> None:
        self.add_node(source)
        self.add_node(target)
        targets = self.adjacency[source]
        if target not in targets:
            targets.append(target)

    def nodes(self) -> list[Coordinate]:
        return list(self.adjacency)

    def neighbors(self, node: Coordinate) -> list[Coordinate]:
        return list(self.adjacency.get(node, ()))

    def out_degree(self, node: Coordinate) -> int:
        return len(self.adjacency.get(node, ()))

    def has_edge(self, source: Coordinate, target: Coordinate) -> bool:
        return target in self.adjacency.get(source, ())

    def edges(self) -> Iterator[tuple[Coordinate, Coordinate]]:
        for source, targets in self.adjacency.items():
            for target in targets:
                yield source, target

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.adjacency.values())

    def __contains__(self, node: object) -> bool:
        return node in self.adjacency

    def __len__(self) -> int:
        return len(self.adjacency)

    def to_payload(self) -> dict[str, object]:
        node_items = [
            {"x": node.x, "y": node.y, "out_degree": self.out_degree(node)}
            for node in sorted(self.adjacency)
        ]
        edge_items = [
            {"source": source.to_list(), "target": target.to_list()}
            for source, target in sorted(self.edges())
        ]
        return {
            "width": self.width,
            "height": self.height,
            "nodes": node_items,
            "edges": edge_items,
        }

    def to_json(self, *, indent: int = 2) -> str:
        return json.dumps(self.to_payload(), indent=indent)

    def save(self, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.to_json())
        return output_path

    def to_dot(self) -> str:
        """Graphviz rendering for eyeballing small grids."""

        lines = ["digraph pipes {"]
        for source, target in self.edges():
            lines.append(f'    "{source.x},{source.y}" -> "{target.x},{target.y}";')
        lines.append("}")
        return "\n".join(lines)


def build_pipe_graph(source: GridSource) -> PipeGraph:
    """Build the directed connectivity graph of a pipe map.

    Every pipe tile names its two neighbours; the start tile names all eight so
    it is the only node whose out-degree reaches :data:`START_FANOUT`. Edges
    are recorded per tile without checking that the target points back.
    """

    grid = _coerce_grid(source)
    graph = PipeGraph(width=grid.width, height=grid.height)
    for coord, tile in grid.iter_pipes():
        for target in tile_targets(coord, tile):
            graph.add_edge(coord, target)
    return graph


def tile_targets(coord: Coordinate, tile: str) -> list[Coordinate]:
    """Coordinates a tile at ``coord`` connects to (empty for ground)."""

    if tile not in TILE_ALPHABET:
        raise MalformedGrid(f"Unknown tile {tile!r} at {coord}.", row=coord.y, column=coord.x)
    if tile == START:
        offsets = EIGHT_NEIGHBOR_OFFSETS
    else:
        offsets = PIPE_OFFSETS.get(tile, ())
    return [coord.offset(dx, dy) for dx, dy in offsets]


def _coerce_grid(source: GridSource) -> PipeGrid:
    if isinstance(source, PipeGrid):
        return source
    if isinstance(source, Path):
        return load_grid(source)
    return parse_grid(source)


__all__ = [
    "GridSource",
    "START_FANOUT",
    "PipeGraph",
    "build_pipe_graph",
    "tile_targets",
]

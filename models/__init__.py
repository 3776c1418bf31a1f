"""Model utilities for the pipe-loop analyser."""

from .errors import (
    AmbiguousStart,
    BranchingPath,
    DegenerateLoop,
    MalformedGrid,
    NoStartFound,
    PipeLoopError,
)
from .graph_render import render_loop_overlay
from .loop_trace import (
    LoopTrace,
    farthest_loop_distance,
    infer_start_tile,
    locate_start_by_fanout,
    process,
    resolve_start_neighbors,
    trace_loop,
    walk_loop,
)
from .pipe_graph import PipeGraph, build_pipe_graph
from .pipe_grid import Coordinate, PipeGrid, count_pipe_regions, load_grid, parse_grid

__all__ = [
    "Coordinate",
    "PipeGrid",
    "parse_grid",
    "load_grid",
    "count_pipe_regions",
    "PipeGraph",
    "build_pipe_graph",
    "LoopTrace",
    "locate_start_by_fanout",
    "resolve_start_neighbors",
    "walk_loop",
    "infer_start_tile",
    "trace_loop",
    "farthest_loop_distance",
    "process",
    "render_loop_overlay",
    "PipeLoopError",
    "MalformedGrid",
    "NoStartFound",
    "AmbiguousStart",
    "DegenerateLoop",
    "BranchingPath",
]

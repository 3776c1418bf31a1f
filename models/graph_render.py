from __future__ import annotations

import colorsys

from PIL import Image, ImageDraw

from .loop_trace import LoopTrace
from .pipe_grid import PIPE_OFFSETS, START, Coordinate, PipeGrid

DEFAULT_CELL_SIZE = 12
BACKGROUND = (0, 0, 0)
PIPE_COLOR = (90, 90, 90)
START_COLOR = (255, 255, 255)
FARTHEST_COLOR = (255, 0, 255)


def render_loop_overlay(
    grid: PipeGrid,
    trace: LoopTrace | None = None,
    *,
    cell_size: int = DEFAULT_CELL_SIZE,
    pipe_color: tuple[int, int, int] = PIPE_COLOR,
    pipe_width: int | None = None,
    loop_width: int | None = None,
    mark_endpoints: bool = True,
) -> Image.Image:
    """Draw every pipe tile, then repaint the traced loop with a rainbow gradient.

    The gradient runs blue -> red along walk order, so the farthest tile sits
    in the middle of the spectrum.
    """

    if cell_size < 3:
        raise ValueError("cell_size must be at least 3 pixels.")
    pipe_width = pipe_width or max(1, cell_size // 6)
    loop_width = loop_width or max(2, cell_size // 3)

    image = Image.new("RGB", (grid.width * cell_size, grid.height * cell_size), BACKGROUND)
    draw = ImageDraw.Draw(image)

    start_tile = trace.start_tile if trace is not None else None
    for coord, tile in grid.iter_pipes():
        shape = start_tile if tile == START and start_tile else tile
        _draw_tile(draw, coord, shape, cell_size, pipe_color, pipe_width)

    if trace is None:
        if mark_endpoints:
            for start in grid.start_coordinates():
                _mark_cell(draw, start, cell_size, START_COLOR)
        return image

    total = trace.length
    for idx, coord in enumerate(trace.path):
        tile = grid.tile_at(coord)
        shape = trace.start_tile if tile == START else tile
        color = _rainbow_color(idx / max(1, total - 1))
        _draw_tile(draw, coord, shape, cell_size, color, loop_width)

    if mark_endpoints:
        _mark_cell(draw, trace.start, cell_size, START_COLOR)
        _mark_cell(draw, trace.farthest, cell_size, FARTHEST_COLOR)
    return image


def _draw_tile(
    draw: ImageDraw.ImageDraw,
    coord: Coordinate,
    tile: str,
    cell_size: int,
    color: tuple[int, int, int],
    width: int,
) -> None:
    offsets = PIPE_OFFSETS.get(tile)
    if offsets is None:
        # Unresolved start: just a dot.
        _mark_cell(draw, coord, cell_size, color)
        return
    cx, cy = _cell_center(coord, cell_size)
    half = cell_size / 2
    for dx, dy in offsets:
        draw.line([(cx, cy), (cx + dx * half, cy + dy * half)], fill=color, width=width)


def _mark_cell(
    draw: ImageDraw.ImageDraw,
    coord: Coordinate,
    cell_size: int,
    color: tuple[int, int, int],
) -> None:
    cx, cy = _cell_center(coord, cell_size)
    radius = max(1, cell_size // 4)
    draw.ellipse([(cx - radius, cy - radius), (cx + radius, cy + radius)], fill=color)


def _cell_center(coord: Coordinate, cell_size: int) -> tuple[float, float]:
    return coord.x * cell_size + cell_size / 2, coord.y * cell_size + cell_size / 2


def _rainbow_color(t: float) -> tuple[int, int, int]:
    hue = (1.0 - t) * 2 / 3  # map 0..1 to blue->red
    r, g, b = colorsys.hsv_to_rgb(hue, 1.0, 1.0)
    return int(r * 255), int(g * 255), int(b * 255)


__all__ = [
    "DEFAULT_CELL_SIZE",
    "render_loop_overlay",
]

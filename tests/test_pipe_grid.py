from __future__ import annotations

import numpy as np
import pytest

from models.errors import MalformedGrid
from models.pipe_grid import Coordinate, count_pipe_regions, load_grid, parse_grid

from .samples import SQUARE, SQUARE_CLUTTERED, WINDING


def test_parse_grid_shape_and_tiles():
    grid = parse_grid(SQUARE)

    assert (grid.width, grid.height) == (5, 5)
    assert grid.tile_at(Coordinate(1, 1)) == "S"
    assert grid.tile_at(Coordinate(3, 1)) == "7"
    assert grid.rows()[2] == ".|.|."
    assert grid.to_text() == SQUARE


def test_tiles_off_the_map_read_as_ground():
    grid = parse_grid(SQUARE)

    assert not grid.contains(Coordinate(-1, 0))
    assert grid.tile_at(Coordinate(-1, 0)) == "."
    assert grid.tile_at(Coordinate(5, 5)) == "."


def test_parse_grid_accepts_crlf_and_trailing_blank_lines():
    grid = parse_grid("S7\r\nLJ\r\n\r\n")

    assert grid.rows() == ["S7", "LJ"]


def test_parse_grid_accepts_row_sequence():
    assert parse_grid(["S7", "LJ"]).rows() == ["S7", "LJ"]


def test_start_coordinates_are_column_row():
    assert parse_grid(WINDING).start_coordinates() == [Coordinate(0, 2)]


def test_pipe_mask_excludes_ground():
    mask = parse_grid(SQUARE).pipe_mask()

    assert mask.dtype == np.bool_
    assert int(mask.sum()) == 8


def test_iter_pipes_is_row_major():
    coords = [coord for coord, _ in parse_grid("S7\nLJ").iter_pipes()]

    assert coords == [Coordinate(0, 0), Coordinate(1, 0), Coordinate(0, 1), Coordinate(1, 1)]


@pytest.mark.parametrize("text", ["", "\n\n", "   \n"])
def test_empty_grid_is_malformed(text):
    with pytest.raises(MalformedGrid):
        parse_grid(text)


def test_ragged_rows_are_malformed():
    with pytest.raises(MalformedGrid) as excinfo:
        parse_grid("S7\nL")

    assert excinfo.value.row == 1
    assert excinfo.value.kind == "MalformedGrid"


def test_unknown_tile_is_rejected_with_position():
    with pytest.raises(MalformedGrid) as excinfo:
        parse_grid("S7\nLX")

    assert (excinfo.value.column, excinfo.value.row) == (1, 1)
    assert "'X'" in str(excinfo.value)


@pytest.mark.parametrize("separator", ["\x0b", "\x0c", "\x1c", "\x1d", "\x1e", "\x85", "\u2028"])
def test_only_newlines_separate_rows(separator):
    with pytest.raises(MalformedGrid) as excinfo:
        parse_grid("S7" + separator + "LJ")

    assert (excinfo.value.column, excinfo.value.row) == (2, 0)


def test_whitespace_trailing_line_is_not_blank():
    with pytest.raises(MalformedGrid) as excinfo:
        parse_grid("S7\nLJ\n  ")

    assert excinfo.value.row == 2


def test_malformed_grid_is_a_value_error():
    with pytest.raises(ValueError):
        parse_grid("S?")


def test_load_grid_reads_file(tmp_path):
    path = tmp_path / "square.txt"
    path.write_text(SQUARE + "\n")

    assert load_grid(path).rows() == SQUARE.split("\n")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (SQUARE, 1),
        (SQUARE_CLUTTERED, 1),
        (WINDING, 1),
        ("S7.F7\nLJ.LJ", 2),
        ("...\n...", 0),
    ],
)
def test_count_pipe_regions(text, expected):
    assert count_pipe_regions(parse_grid(text)) == expected


def test_coordinates_order_and_offset():
    origin = Coordinate(2, 3)

    assert origin.offset(-1, 1) == Coordinate(1, 4)
    assert sorted([Coordinate(1, 0), Coordinate(0, 5)]) == [Coordinate(0, 5), Coordinate(1, 0)]
    assert str(origin) == "(2, 3)"
    assert {origin, Coordinate(2, 3)} == {origin}

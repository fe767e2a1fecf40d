"""Assembler integration tests."""

from __future__ import annotations

import numpy as np
import pytest

from tilegrid.adjacency import AdjacencyIndex
from tilegrid.assembler import AssembledGrid, AssemblyConfig, GridAssembler
from tilegrid.classifier import corner_product
from tilegrid.errors import (
    AssemblyError,
    MalformedAdjacencyError,
    NoUniqueTopLeftError,
    RaggedGridError,
    SeamMismatchError,
)
from tilegrid.evaluator import SeamEvaluator
from tilegrid.orientation import Orientation
from tilegrid.parser import parse_tiles
from tilegrid.tile import Side, Tile
from tilegrid.utils import compose_image, make_puzzle

# 3x3 grid of 8x8 tiles, listed out of order. Laid out it reads
#   11  2 13
#    3  5  7
#   17 23 19
# and every border is distinct, so each tile keeps its parsed orientation.
GRID_3X3 = """Tile 7:
.##.#...
#.......
#......#
........
#.......
........
#.......
.#...#..

Tile 19:
.#...#..
#.......
#......#
#......#
#.......
........
#.......
.###.#..

Tile 2:
.##.....
#......#
#......#
#......#
#.......
#.......
.......#
.#..#...

Tile 11:
.#......
#......#
.......#
.......#
#......#
#......#
........
.###....

Tile 23:
.####...
#......#
.......#
#......#
.......#
........
#......#
.#.#.#..

Tile 3:
.###....
#......#
#......#
........
#.......
#.......
.......#
.#.##...

Tile 13:
.#.#....
#......#
#......#
#......#
........
.......#
#......#
.##.#...

Tile 5:
.#..#...
#......#
#......#
........
.......#
........
#......#
.####...

Tile 17:
.#.##...
#......#
........
#......#
#.......
#.......
.......#
.##..#..
"""

CYCLE = """Tile 1:
#####
#...#
#...#
#....
#.#..

Tile 2:
#....
#....
#...#
.....
.##.#
"""


def _matches_some_orientation(actual: np.ndarray, expected: np.ndarray) -> bool:
    return any(np.array_equal(actual, o.apply(expected)) for o in Orientation)


def _assert_seams_exact(grid: AssembledGrid) -> None:
    rows, cols = grid.shape
    for r in range(rows):
        for c in range(cols):
            tile = grid.tile_at(r, c)
            if c + 1 < cols:
                np.testing.assert_array_equal(tile.border(Side.EAST), grid.tile_at(r, c + 1).border(Side.WEST))
            if r + 1 < rows:
                np.testing.assert_array_equal(tile.border(Side.SOUTH), grid.tile_at(r + 1, c).border(Side.NORTH))


@pytest.mark.parametrize("rows,cols,seed", [(2, 2, 1), (3, 3, 2), (4, 6, 3), (5, 3, 4)])
def test_assembly_recovers_layout(rows: int, cols: int, seed: int) -> None:
    """Shuffled, re-oriented tiles come back as an orientation of the source grid."""
    puzzle = make_puzzle(rows, cols, tile_size=10, seed=seed)
    grid = GridAssembler().assemble(puzzle.tiles)

    assert sorted(grid.shape) == sorted((rows, cols))
    assert _matches_some_orientation(grid.tile_ids, puzzle.layout_ids)
    assert _matches_some_orientation(grid.compose(trim_borders=True), puzzle.trimmed_image())
    _assert_seams_exact(grid)


def test_rows_are_equal_length() -> None:
    """The assembled grid is rectangular and uses every tile once."""
    puzzle = make_puzzle(4, 5, tile_size=10, seed=11)
    grid = GridAssembler().assemble(puzzle.tiles)
    assert len({len(row) for row in grid.rows}) == 1
    assert sorted(grid.tile_ids.ravel().tolist()) == sorted(t.tile_id for t in puzzle.tiles)


def _text(pixels: np.ndarray) -> str:
    return "".join("#" if p else "." for p in pixels)


def test_literal_three_by_three_grid() -> None:
    """A hand-written 3x3 grid of 8x8 tiles is laid out exactly."""
    grid = GridAssembler().assemble(parse_tiles(GRID_3X3))

    np.testing.assert_array_equal(grid.tile_ids, [[11, 2, 13], [3, 5, 7], [17, 23, 19]])
    assert sorted(t.tile_id for t in grid.corners) == [11, 13, 17, 19]
    assert corner_product(grid.corners) == 46189

    image = grid.compose()
    assert image.shape == (24, 24)
    assert _text(image[0, :]) == ".#.......##......#.#...."
    assert _text(image[-1, :]) == ".##..#...#.#.#...###.#.."
    assert _text(image[:, 0]) == ".#..##...##.##...#.###.."
    assert _text(image[:, -1]) == ".###.##...#.......##...."

    trimmed = grid.compose(trim_borders=True)
    assert trimmed.shape == (18, 18)
    assert not trimmed.any()


def test_compose_keeps_borders_by_default() -> None:
    """Grid composition and compose_image agree on the default."""
    grid = GridAssembler().assemble(parse_tiles(GRID_3X3))
    np.testing.assert_array_equal(grid.compose(), compose_image(grid.pixel_blocks()))


def test_grid_reports_the_corners_it_found() -> None:
    """The assembled grid carries the four corner tiles of the input."""
    puzzle = make_puzzle(3, 4, tile_size=10, seed=13)
    grid = GridAssembler().assemble(puzzle.tiles)
    ids = puzzle.layout_ids
    expected = {int(ids[0, 0]), int(ids[0, -1]), int(ids[-1, 0]), int(ids[-1, -1])}
    assert {t.tile_id for t in grid.corners} == expected
    assert set(grid.corner_ids()) == expected


def test_unrotated_puzzle_is_rebuilt_exactly() -> None:
    """Tiles given in their true orientation keep it and land at their own positions."""
    puzzle = make_puzzle(3, 4, tile_size=10, seed=6, reorient=False)
    grid = GridAssembler(AssemblyConfig(try_orientations=False)).assemble(puzzle.tiles)
    np.testing.assert_array_equal(grid.tile_ids, puzzle.layout_ids)
    np.testing.assert_array_equal(grid.compose(trim_borders=False), puzzle.untrimmed_image())
    ids = puzzle.layout_ids
    assert grid.corner_ids() == [int(ids[0, 0]), int(ids[0, -1]), int(ids[-1, 0]), int(ids[-1, -1])]


def test_mirror_only_assembly() -> None:
    """Puzzles scrambled by mirrors alone assemble without quarter turns."""
    puzzle = make_puzzle(3, 3, tile_size=10, seed=8, mirror_only=True)
    grid = GridAssembler(AssemblyConfig(mirror_only=True)).assemble(puzzle.tiles)
    report = SeamEvaluator().evaluate(grid.rows)
    assert report.is_consistent
    assert _matches_some_orientation(grid.tile_ids, puzzle.layout_ids)


def test_strict_top_left_fails_on_rotated_corner() -> None:
    """Without orientation search, a rotated top-left tile stops assembly."""
    puzzle = make_puzzle(3, 3, tile_size=10, seed=6, reorient=False)
    start = int(puzzle.layout_ids[0, 0])
    tiles = [t.oriented(Orientation.ROTATE_90) if t.tile_id == start else t for t in puzzle.tiles]

    with pytest.raises(NoUniqueTopLeftError):
        GridAssembler(AssemblyConfig(try_orientations=False)).assemble(tiles)

    grid = GridAssembler().assemble(tiles)
    assert SeamEvaluator().evaluate(grid.rows).is_consistent


def test_malformed_adjacency_is_rejected() -> None:
    """Borders exposed by three tiles stop assembly before it starts."""
    pixels = np.eye(5, dtype=bool)
    tiles = [Tile.from_pixels(i, pixels) for i in (1, 2, 3, 4)]
    with pytest.raises(MalformedAdjacencyError):
        GridAssembler().assemble(tiles)


def test_empty_input_is_rejected() -> None:
    """There is nothing to assemble from no tiles."""
    with pytest.raises(ValueError, match="No tiles"):
        GridAssembler().assemble([])


def test_ragged_grid_is_rejected() -> None:
    """AssembledGrid refuses rows of different lengths."""
    tile_a = Tile.from_pixels(1, np.eye(3, dtype=bool))
    tile_b = Tile.from_pixels(2, np.eye(3, dtype=bool))
    with pytest.raises(RaggedGridError):
        AssembledGrid(((tile_a, tile_b), (tile_a,)))


def test_grid_accessors() -> None:
    """Grid exposes shape, tiles and pixel blocks in row-major order."""
    puzzle = make_puzzle(2, 3, tile_size=10, seed=12)
    grid = GridAssembler().assemble(puzzle.tiles)
    rows, cols = grid.shape
    blocks = grid.pixel_blocks()
    assert len(blocks) == rows and all(len(row) == cols for row in blocks)
    np.testing.assert_array_equal(blocks[rows - 1][cols - 1], grid.tile_at(rows - 1, cols - 1).pixels)
    assert grid.tile_ids.shape == (rows, cols)


def test_unmatched_seam_is_rejected() -> None:
    """A neighbor that only fits after a quarter turn fails under mirror-only fixes."""
    puzzle = make_puzzle(3, 3, tile_size=10, seed=6, reorient=False)
    turned = int(puzzle.layout_ids[0, 1])
    tiles = [t.oriented(Orientation.ROTATE_90) if t.tile_id == turned else t for t in puzzle.tiles]

    with pytest.raises(SeamMismatchError, match=f"Tile {turned}: no orientation matches its west"):
        GridAssembler(AssemblyConfig(mirror_only=True)).assemble(tiles)

    grid = GridAssembler().assemble(tiles)
    np.testing.assert_array_equal(grid.tile_ids, puzzle.layout_ids)


def test_unreachable_tile_is_reported() -> None:
    """A tile that shares no border with the grid is never placed."""
    puzzle = make_puzzle(2, 2, tile_size=10, seed=1)
    stray = Tile.from_pixels(1, np.ones((12, 12), dtype=bool))
    with pytest.raises(AssemblyError, match=r"1 tiles were never placed: \[1\]"):
        GridAssembler().assemble(list(puzzle.tiles) + [stray])


def test_cyclic_neighbors_are_not_placed_twice() -> None:
    """Two tiles that are each other's east neighbor stop the walk."""
    tiles = parse_tiles(CYCLE)
    index = AdjacencyIndex.build(tiles)
    assert index.neighbor(tiles[0], Side.EAST) == 2
    assert index.neighbor(tiles[1], Side.EAST) == 1

    with pytest.raises(AssemblyError, match="Tile 1 would be placed twice"):
        GridAssembler().assemble(tiles)


def test_row_longer_than_the_row_above_is_rejected() -> None:
    """Walking east past the end of the row above raises RaggedGridError."""
    puzzle = make_puzzle(3, 3, tile_size=10, seed=6, reorient=False)
    by_id = {t.tile_id: t for t in puzzle.tiles}
    ids = puzzle.layout_ids
    index = AdjacencyIndex.build(puzzle.tiles)
    row_start = by_id[int(ids[1, 0])]

    with pytest.raises(RaggedGridError, match="extends past column 0"):
        GridAssembler()._walk_east(row_start, [by_id[int(ids[0, 0])]], by_id, index, {row_start.tile_id})

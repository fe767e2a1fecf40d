"""Tests for the tile text format."""

from __future__ import annotations

import numpy as np
import pytest

from tilegrid.errors import TileParseError
from tilegrid.parser import format_tiles, load_tiles, parse_tiles
from tilegrid.tile import Side
from tilegrid.utils import make_puzzle

SAMPLE = """Tile 2311:
#.#
..#
##.

Tile 1951:
...
.##
#.#
"""


def test_parse_sample() -> None:
    """Blocks become tiles in file order with fingerprinted borders."""
    tiles = parse_tiles(SAMPLE)
    assert [t.tile_id for t in tiles] == [2311, 1951]
    np.testing.assert_array_equal(tiles[0].border(Side.NORTH), [True, False, True])
    np.testing.assert_array_equal(tiles[0].border(Side.EAST), [True, True, False])
    np.testing.assert_array_equal(tiles[1].border(Side.WEST), [False, False, True])


def test_parse_tolerates_extra_blank_lines_and_trailing_spaces() -> None:
    """Surrounding whitespace does not change the result."""
    text = "\n\nTile 1:  \n#.\n.#   \n\n\n\nTile 2:\n..\n##\n\n"
    tiles = parse_tiles(text)
    assert [t.tile_id for t in tiles] == [1, 2]


def test_format_and_load_round_trip(tmp_path) -> None:
    """Written puzzles load back with identical pixels."""
    puzzle = make_puzzle(2, 2, tile_size=8, seed=3)
    path = tmp_path / "tiles.txt"
    path.write_text(format_tiles(puzzle.tiles))
    loaded = load_tiles(path)
    assert [t.tile_id for t in loaded] == [t.tile_id for t in puzzle.tiles]
    for original, read in zip(puzzle.tiles, loaded):
        np.testing.assert_array_equal(original.pixels, read.pixels)


@pytest.mark.parametrize(
    "text,message",
    [
        ("Piece 1:\n#.\n.#\n", "header"),
        ("Tile x:\n#.\n.#\n", "header"),
        ("Tile 1:\n", "no pixel rows"),
        ("Tile 1:\n#.\n.\n", "expected 2 pixels"),
        ("Tile 1:\n#.#\n.#.\n", "expected a square"),
        ("Tile 1:\n#o\n.#\n", "unknown pixel characters"),
        ("Tile 1:\n#.\n.#\n\nTile 1:\n..\n..\n", "duplicate tile id 1"),
        ("\n\n", "no tiles found"),
    ],
)
def test_parse_errors(text: str, message: str) -> None:
    """Malformed input raises TileParseError with a useful message."""
    with pytest.raises(TileParseError, match=message):
        parse_tiles(text)


def test_parse_error_reports_line_number() -> None:
    """The offending line is attached to the error."""
    with pytest.raises(TileParseError) as excinfo:
        parse_tiles("Tile 1:\n#.\n.#\n\nTile 2:\n#.\n#?\n")
    assert excinfo.value.line == 7
    assert str(excinfo.value).startswith("line 7:")

"""Read and write tiles in the ``Tile <id>:`` text format.

A file holds blocks separated by blank lines. Each block starts with a
header such as ``Tile 2311:`` followed by N rows of N characters, ``#`` for a
filled pixel and ``.`` for an empty one.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Set, Tuple

import numpy as np

from .errors import TileParseError
from .tile import EMPTY, FILLED, Tile

_HEADER = re.compile(r"^Tile\s+(\d+):$")


def _blocks(text: str) -> Iterator[Tuple[int, List[str]]]:
    """Yield (first line number, lines) for each run of non-blank lines."""
    block: List[str] = []
    start = 0
    for number, line in enumerate(text.splitlines(), start=1):
        line = line.rstrip()
        if not line:
            if block:
                yield start, block
                block = []
            continue
        if not block:
            start = number
        block.append(line)
    if block:
        yield start, block


def parse_pixel_rows(lines: Sequence[str], first_line: int = 1) -> np.ndarray:
    """Convert rows of ``#``/``.`` characters into a boolean array."""
    if not lines:
        raise TileParseError("tile has no pixel rows", first_line)
    width = len(lines[0])
    for offset, line in enumerate(lines):
        if len(line) != width:
            raise TileParseError(f"expected {width} pixels, got {len(line)}", first_line + offset)
        unknown = set(line) - {FILLED, EMPTY}
        if unknown:
            raise TileParseError(f"unknown pixel characters {sorted(unknown)}", first_line + offset)
    return np.array([[ch == FILLED for ch in line] for line in lines], dtype=bool)


def parse_tiles(text: str) -> List[Tile]:
    """Parse every tile block in ``text``, keeping file order."""
    tiles: List[Tile] = []
    seen: Set[int] = set()
    for start, block in _blocks(text):
        match = _HEADER.match(block[0].strip())
        if match is None:
            raise TileParseError(f"expected a 'Tile <id>:' header, got {block[0]!r}", start)
        tile_id = int(match.group(1))
        if tile_id in seen:
            raise TileParseError(f"duplicate tile id {tile_id}", start)
        seen.add(tile_id)

        pixels = parse_pixel_rows(block[1:], first_line=start + 1)
        if pixels.shape[0] != pixels.shape[1]:
            raise TileParseError(
                f"tile {tile_id} is {pixels.shape[0]}x{pixels.shape[1]}, expected a square", start
            )
        tiles.append(Tile.from_pixels(tile_id, pixels))
    if not tiles:
        raise TileParseError("no tiles found")
    return tiles


def load_tiles(path: Path) -> List[Tile]:
    return parse_tiles(Path(path).read_text())


def format_tiles(tiles: Iterable[Tile]) -> str:
    return "\n\n".join(f"Tile {t.tile_id}:\n{t.render()}" for t in tiles) + "\n"

"""Tile records and border fingerprints."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, Tuple

import numpy as np

from .orientation import Orientation

FILLED = "#"
EMPTY = "."


class Side(IntEnum):
    """Index of a border in a tile's fingerprint list."""

    NORTH = 0
    WEST = 1
    SOUTH = 2
    EAST = 3


def _bit(pixel: object) -> int:
    if isinstance(pixel, str):
        if pixel == FILLED:
            return 1
        if pixel == EMPTY:
            return 0
        raise ValueError(f"Unknown pixel character: {pixel!r}")
    return 1 if pixel else 0


def border_fingerprint(border: Iterable[object]) -> int:
    """Return a key that is identical for a border and its reverse.

    The border is read as a binary number (filled=1) in both directions and
    the smaller value wins.
    """
    bits = [_bit(p) for p in border]
    forward = 0
    for bit in bits:
        forward = forward * 2 + bit
    backward = 0
    for bit in reversed(bits):
        backward = backward * 2 + bit
    return min(forward, backward)


def extract_borders(pixels: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Return the [north, west, south, east] borders of a square block.

    Rows are read left to right, columns top to bottom.
    """
    return pixels[0, :], pixels[:, 0], pixels[-1, :], pixels[:, -1]


@dataclass(frozen=True, eq=False)
class Tile:
    """A square tile with its pixel block and border fingerprints."""

    tile_id: int
    pixels: np.ndarray
    fingerprints: Tuple[int, int, int, int]

    @classmethod
    def from_pixels(cls, tile_id: int, pixels: object) -> "Tile":
        """Create a tile and fingerprint its four borders."""
        block = np.array(pixels, dtype=bool)
        if block.ndim != 2 or block.shape[0] != block.shape[1] or block.shape[0] == 0:
            raise ValueError(f"Tile {tile_id}: pixel block must be a non-empty square, got shape {block.shape}")
        block.setflags(write=False)
        fingerprints = tuple(border_fingerprint(b) for b in extract_borders(block))
        return cls(tile_id=int(tile_id), pixels=block, fingerprints=fingerprints)

    def border(self, side: Side) -> np.ndarray:
        return extract_borders(self.pixels)[side]

    def fingerprint(self, side: Side) -> int:
        return self.fingerprints[side]

    def oriented(self, orientation: Orientation) -> "Tile":
        """Return this tile laid down in another orientation."""
        if orientation is Orientation.IDENTITY:
            return self
        return Tile.from_pixels(self.tile_id, orientation.apply(self.pixels))

    def flipped_horizontal(self) -> "Tile":
        """Mirror left/right, exchanging the west and east borders."""
        return self.oriented(Orientation.MIRROR_LR)

    def flipped_vertical(self) -> "Tile":
        """Mirror top/bottom, exchanging the north and south borders."""
        return self.oriented(Orientation.MIRROR_UD)

    def orientations(self) -> Iterator[Tuple[Orientation, "Tile"]]:
        for orientation in Orientation:
            yield orientation, self.oriented(orientation)

    def render(self) -> str:
        return "\n".join("".join(FILLED if p else EMPTY for p in row) for row in self.pixels)

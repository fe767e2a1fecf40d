"""Classify tiles as corners, edges, or interior pieces."""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, List

from .adjacency import AdjacencyIndex
from .errors import MalformedAdjacencyError
from .tile import Tile


class TileKind(Enum):
    CORNER = "corner"
    EDGE = "edge"
    INTERIOR = "interior"


def count_outer_borders(index: AdjacencyIndex, tile: Tile) -> int:
    """Number of borders no other tile shares."""
    return sum(1 for fp in tile.fingerprints if index.is_outer(fp))


def classify(index: AdjacencyIndex, tile: Tile) -> TileKind:
    outer = count_outer_borders(index, tile)
    if outer == 2:
        return TileKind.CORNER
    if outer == 1:
        return TileKind.EDGE
    if outer == 0:
        return TileKind.INTERIOR
    raise MalformedAdjacencyError(f"Tile {tile.tile_id} has {outer} unshared borders")


def find_corners(index: AdjacencyIndex, tiles: Iterable[Tile]) -> List[Tile]:
    """Return the corner tiles, sorted by id."""
    corners = [t for t in tiles if count_outer_borders(index, t) == 2]
    return sorted(corners, key=lambda t: t.tile_id)


def corner_product(corners: Iterable[Tile]) -> int:
    return math.prod(t.tile_id for t in corners)

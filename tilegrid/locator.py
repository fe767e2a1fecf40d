"""Locate the tile that starts the assembly."""

from __future__ import annotations

import logging
from typing import Sequence

from .adjacency import AdjacencyIndex
from .errors import NoUniqueTopLeftError
from .tile import Side, Tile

logger = logging.getLogger(__name__)


def is_top_left(index: AdjacencyIndex, tile: Tile) -> bool:
    """North and west face outward; south and east each meet one neighbor."""
    return (
        index.is_outer(tile.fingerprint(Side.NORTH))
        and index.is_outer(tile.fingerprint(Side.WEST))
        and index.share_count(tile.fingerprint(Side.SOUTH)) == 2
        and index.share_count(tile.fingerprint(Side.EAST)) == 2
    )


def find_top_left(
    index: AdjacencyIndex, corners: Sequence[Tile], try_orientations: bool = True
) -> Tile:
    """Return the corner that starts the grid, oriented as it will be placed.

    Corners are first checked as parsed. If exactly one qualifies it is used
    unchanged. Otherwise, with ``try_orientations``, the lowest-id corner that
    qualifies in its original orientation is used, and failing that the first
    qualifying orientation of the lowest-id corner.
    """
    matches = [c for c in corners if is_top_left(index, c)]
    if len(matches) == 1:
        return matches[0]
    if not try_orientations:
        ids = sorted(c.tile_id for c in matches)
        raise NoUniqueTopLeftError(
            f"Expected exactly one top-left corner in parsed orientation, found {len(matches)}: {ids}"
        )
    if matches:
        chosen = min(matches, key=lambda c: c.tile_id)
        logger.info("Several corners can start the grid; using tile %d", chosen.tile_id)
        return chosen

    for corner in sorted(corners, key=lambda c: c.tile_id):
        for orientation, candidate in corner.orientations():
            if is_top_left(index, candidate):
                logger.info("Starting from tile %d in orientation %s", corner.tile_id, orientation.name)
                return candidate
    raise NoUniqueTopLeftError(
        f"None of the {len(corners)} corner tiles can be oriented as the top-left tile"
    )

"""Greedy row-by-row assembly of border-matched tiles."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np

from .adjacency import AdjacencyIndex
from .classifier import find_corners
from .errors import AssemblyError, RaggedGridError, SeamMismatchError
from .locator import find_top_left
from .orientation import MIRROR_ORIENTATIONS, Orientation
from .tile import Side, Tile
from .utils import compose_image

logger = logging.getLogger(__name__)


@dataclass
class AssemblyConfig:
    """Configuration for the grid assembler."""

    try_orientations: bool = True
    validate_index: bool = True
    mirror_only: bool = False


@dataclass(frozen=True)
class AssembledGrid:
    """Oriented tiles in row-major order, with the corner tiles as they were parsed."""

    rows: Tuple[Tuple[Tile, ...], ...]
    corners: Tuple[Tile, ...] = ()

    def __post_init__(self) -> None:
        if not self.rows or not self.rows[0]:
            raise AssemblyError("Assembled grid is empty")
        lengths = {len(row) for row in self.rows}
        if len(lengths) != 1:
            raise RaggedGridError(f"Assembled rows have different lengths: {sorted(lengths)}")

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.rows), len(self.rows[0])

    @property
    def tile_ids(self) -> np.ndarray:
        return np.array([[t.tile_id for t in row] for row in self.rows], dtype=np.int64)

    def tile_at(self, row: int, col: int) -> Tile:
        return self.rows[row][col]

    def corner_ids(self) -> List[int]:
        first, last = self.rows[0], self.rows[-1]
        return [first[0].tile_id, first[-1].tile_id, last[0].tile_id, last[-1].tile_id]

    def pixel_blocks(self) -> List[List[np.ndarray]]:
        return [[t.pixels for t in row] for row in self.rows]

    def compose(self, trim_borders: bool = False) -> np.ndarray:
        """Return the whole image, optionally without the tile border rings."""
        return compose_image(self.pixel_blocks(), trim_borders=trim_borders)


class GridAssembler:
    """Assemble tiles into a grid using border fingerprints alone."""

    def __init__(self, config: Optional[AssemblyConfig] = None) -> None:
        self.config = config if config is not None else AssemblyConfig()
        self._orientations: Sequence[Orientation] = (
            MIRROR_ORIENTATIONS if self.config.mirror_only else tuple(Orientation)
        )

    def assemble(self, tiles: Sequence[Tile]) -> AssembledGrid:
        """Return the grid walked from the top-left corner, east then south."""
        if not tiles:
            raise ValueError("No tiles to assemble")
        index = AdjacencyIndex.build(tiles)
        if self.config.validate_index:
            index.validate()
        by_id: Dict[int, Tile] = {t.tile_id: t for t in tiles}

        corners = find_corners(index, tiles)
        logger.info("Found %d corner tiles among %d", len(corners), len(tiles))
        origin = find_top_left(index, corners, try_orientations=self.config.try_orientations)

        placed: Set[int] = {origin.tile_id}
        rows: List[List[Tile]] = []
        row_start = origin
        above: Optional[List[Tile]] = None
        while True:
            row = self._walk_east(row_start, above, by_id, index, placed)
            if above is not None and len(row) != len(above):
                raise RaggedGridError(
                    f"Row {len(rows)} has {len(row)} tiles, previous row has {len(above)}"
                )
            rows.append(row)
            logger.debug("Row %d: %s", len(rows) - 1, [t.tile_id for t in row])

            south_id = index.neighbor(row_start, Side.SOUTH)
            if south_id is None:
                break
            self._claim(south_id, placed)
            row_start = self._fit(
                by_id[south_id],
                index,
                matches=[(Side.NORTH, row_start.border(Side.SOUTH))],
                outer=[Side.WEST],
            )
            above = row

        if len(placed) != len(tiles):
            missing = sorted(set(by_id) - placed)
            raise AssemblyError(f"{len(missing)} tiles were never placed: {missing}")
        grid = AssembledGrid(tuple(tuple(row) for row in rows), corners=tuple(corners))
        logger.info("Assembled a %dx%d grid", *grid.shape)
        return grid

    def _walk_east(
        self,
        row_start: Tile,
        above: Optional[List[Tile]],
        by_id: Dict[int, Tile],
        index: AdjacencyIndex,
        placed: Set[int],
    ) -> List[Tile]:
        row = [row_start]
        current = row_start
        while True:
            east_id = index.neighbor(current, Side.EAST)
            if east_id is None:
                return row
            col = len(row)
            if above is not None and col >= len(above):
                raise RaggedGridError(f"Row extends past column {len(above) - 1} of the row above")
            self._claim(east_id, placed)

            matches = [(Side.WEST, current.border(Side.EAST))]
            outer: List[Side] = []
            if above is None:
                outer.append(Side.NORTH)
            else:
                matches.append((Side.NORTH, above[col].border(Side.SOUTH)))
            current = self._fit(by_id[east_id], index, matches=matches, outer=outer)
            row.append(current)

    @staticmethod
    def _claim(tile_id: int, placed: Set[int]) -> None:
        if tile_id in placed:
            raise AssemblyError(f"Tile {tile_id} would be placed twice")
        placed.add(tile_id)

    def _fit(
        self,
        tile: Tile,
        index: AdjacencyIndex,
        matches: Sequence[Tuple[Side, np.ndarray]],
        outer: Sequence[Side],
    ) -> Tile:
        """Orient ``tile`` so its borders equal ``matches`` pixel for pixel."""
        for orientation in self._orientations:
            candidate = tile.oriented(orientation)
            if not all(np.array_equal(candidate.border(side), border) for side, border in matches):
                continue
            if not all(index.is_outer(candidate.fingerprint(side)) for side in outer):
                continue
            if orientation is not Orientation.IDENTITY:
                logger.debug("Tile %d placed as %s", tile.tile_id, orientation.name)
            return candidate
        sides = ", ".join(side.name.lower() for side, _ in matches)
        raise SeamMismatchError(f"Tile {tile.tile_id}: no orientation matches its {sides} border(s)")

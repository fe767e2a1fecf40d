"""Border adjacency index shared by the classifier and the assembler."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

from .errors import AmbiguousNeighborError, MalformedAdjacencyError
from .tile import Side, Tile

logger = logging.getLogger(__name__)


class AdjacencyIndex:
    """Map each border fingerprint to the ids of the tiles exposing it.

    Built once from the parsed tiles. Re-orienting a tile moves its
    fingerprints between sides but never changes the set, so the index stays
    valid for the whole assembly.
    """

    def __init__(self, buckets: Mapping[int, FrozenSet[int]]) -> None:
        self._buckets: Dict[int, FrozenSet[int]] = dict(buckets)

    @classmethod
    def build(cls, tiles: Iterable[Tile]) -> "AdjacencyIndex":
        """Insert every tile id into the bucket of each of its fingerprints."""
        buckets: Dict[int, Set[int]] = {}
        seen: Set[int] = set()
        for tile in tiles:
            if tile.tile_id in seen:
                raise ValueError(f"Duplicate tile id: {tile.tile_id}")
            seen.add(tile.tile_id)
            for fingerprint in tile.fingerprints:
                buckets.setdefault(fingerprint, set()).add(tile.tile_id)

        index = cls({fp: frozenset(ids) for fp, ids in buckets.items()})
        sizes = Counter(len(ids) for ids in buckets.values())
        logger.debug(
            "Indexed %d tiles: %d fingerprints, bucket sizes %s",
            len(seen),
            len(buckets),
            dict(sorted(sizes.items())),
        )
        return index

    def __len__(self) -> int:
        return len(self._buckets)

    def items(self) -> Iterator[Tuple[int, FrozenSet[int]]]:
        return iter(self._buckets.items())

    def sharers(self, fingerprint: int) -> FrozenSet[int]:
        return self._buckets.get(fingerprint, frozenset())

    def share_count(self, fingerprint: int) -> int:
        return len(self.sharers(fingerprint))

    def is_outer(self, fingerprint: int) -> bool:
        """True when exactly one tile exposes the border."""
        return self.share_count(fingerprint) == 1

    def outer_sides(self, tile: Tile) -> List[Side]:
        return [side for side in Side if self.is_outer(tile.fingerprint(side))]

    def neighbor(self, tile: Tile, side: Side) -> Optional[int]:
        """Return the id of the tile sharing ``side``, or None on an outer edge.

        Raises AmbiguousNeighborError when the border is not indexed for this
        tile or is shared with more than one other tile.
        """
        fingerprint = tile.fingerprint(side)
        ids = self.sharers(fingerprint)
        if tile.tile_id not in ids:
            raise AmbiguousNeighborError(
                f"Tile {tile.tile_id}: {side.name.lower()} border {fingerprint} is not in the index"
            )
        others = sorted(ids - {tile.tile_id})
        if not others:
            return None
        if len(others) > 1:
            raise AmbiguousNeighborError(
                f"Tile {tile.tile_id}: {side.name.lower()} border {fingerprint} "
                f"is shared with several tiles {others}"
            )
        return others[0]

    def validate(self) -> None:
        """Raise MalformedAdjacencyError if any border is exposed by more than two tiles."""
        for fingerprint, ids in self._buckets.items():
            if len(ids) > 2:
                raise MalformedAdjacencyError(
                    f"Border {fingerprint} is exposed by {len(ids)} tiles: {sorted(ids)}"
                )

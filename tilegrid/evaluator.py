"""Seam checks for assembled grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .tile import Side, Tile


@dataclass
class SeamReport:
    """Container for seam consistency metrics."""

    horizontal_matches: int
    horizontal_total: int
    vertical_matches: int
    vertical_total: int
    is_rectangular: bool

    @property
    def seam_accuracy(self) -> float:
        total = self.horizontal_total + self.vertical_total
        matches = self.horizontal_matches + self.vertical_matches
        return matches / total if total else 1.0

    @property
    def is_consistent(self) -> bool:
        return self.is_rectangular and self.seam_accuracy == 1.0


class SeamEvaluator:
    """Compare the borders of every pair of neighboring tiles."""

    def count_horizontal(self, rows: Sequence[Sequence[Tile]]) -> Tuple[int, int]:
        """Matches and total for left/right neighbors (east border vs west border)."""
        matches = total = 0
        for row in rows:
            for left, right in zip(row, row[1:]):
                total += 1
                if np.array_equal(left.border(Side.EAST), right.border(Side.WEST)):
                    matches += 1
        return matches, total

    def count_vertical(self, rows: Sequence[Sequence[Tile]]) -> Tuple[int, int]:
        """Matches and total for top/bottom neighbors (south border vs north border)."""
        matches = total = 0
        for upper, lower in zip(rows, rows[1:]):
            for top, bottom in zip(upper, lower):
                total += 1
                if np.array_equal(top.border(Side.SOUTH), bottom.border(Side.NORTH)):
                    matches += 1
        return matches, total

    def evaluate(self, rows: Sequence[Sequence[Tile]]) -> SeamReport:
        h_matches, h_total = self.count_horizontal(rows)
        v_matches, v_total = self.count_vertical(rows)
        return SeamReport(
            horizontal_matches=h_matches,
            horizontal_total=h_total,
            vertical_matches=v_matches,
            vertical_total=v_total,
            is_rectangular=len({len(row) for row in rows}) <= 1,
        )

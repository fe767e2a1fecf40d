"""Dihedral transforms of square pixel blocks."""

from __future__ import annotations

from enum import Enum

import numpy as np


class Orientation(Enum):
    """One of the eight ways to lay a square tile down.

    Each value is ``(quarter_turns, mirrored)``: the block is first rotated
    clockwise by ``quarter_turns`` and then, if ``mirrored``, its columns are
    reversed. Members are declared in the order the assembler tries them, so
    the mirror-only transforms come first.
    """

    IDENTITY = (0, False)
    MIRROR_LR = (0, True)
    MIRROR_UD = (2, True)
    ROTATE_180 = (2, False)
    ROTATE_90 = (1, False)
    ROTATE_270 = (3, False)
    TRANSPOSE = (1, True)
    ANTI_TRANSPOSE = (3, True)

    @property
    def quarter_turns(self) -> int:
        return self.value[0]

    @property
    def mirrored(self) -> bool:
        return self.value[1]

    @property
    def is_mirror_only(self) -> bool:
        """True for transforms built from horizontal/vertical mirrors alone."""
        return self.quarter_turns % 2 == 0

    def apply(self, pixels: np.ndarray) -> np.ndarray:
        """Return a transformed copy of a 2-D array."""
        out = np.rot90(pixels, k=-self.quarter_turns)
        if self.mirrored:
            out = out[:, ::-1]
        return np.array(out)


MIRROR_ORIENTATIONS = tuple(o for o in Orientation if o.is_mirror_only)

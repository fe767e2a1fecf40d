"""Utility helpers for composing images and generating test puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

import numpy as np

from .orientation import Orientation
from .tile import Tile

try:
    import cv2  # type: ignore
except ImportError:  # pragma: no cover
    cv2 = None


def set_random_seed(seed: int = 42) -> np.random.Generator:
    """Create a deterministic numpy random generator."""
    return np.random.default_rng(seed)


def compose_image(blocks: Sequence[Sequence[np.ndarray]], trim_borders: bool = False) -> np.ndarray:
    """Lay a grid of equal-size pixel blocks out as one image.

    With ``trim_borders`` each block loses its outer ring of pixels first.
    """
    rows = len(blocks)
    cols = len(blocks[0]) if rows else 0
    if rows == 0 or cols == 0:
        raise ValueError("Cannot compose an empty grid")
    first = blocks[0][0]
    size = first.shape[0] - 2 if trim_borders else first.shape[0]
    if size <= 0:
        raise ValueError("Tiles are too small to trim their borders")

    canvas = np.zeros((rows * size, cols * size), dtype=first.dtype)
    for r in range(rows):
        if len(blocks[r]) != cols:
            raise ValueError("All grid rows must have the same length")
        for c in range(cols):
            block = blocks[r][c][1:-1, 1:-1] if trim_borders else blocks[r][c]
            y0 = r * size
            x0 = c * size
            canvas[y0 : y0 + size, x0 : x0 + size] = block
    return canvas


def cut_tiles(image: np.ndarray, rows: int, cols: int, tile_size: int) -> List[List[np.ndarray]]:
    """Cut overlapping blocks so neighbors share their border pixels."""
    stride = tile_size - 1
    expected = (rows * stride + 1, cols * stride + 1)
    if image.shape != expected:
        raise ValueError(f"Image shape {image.shape} does not fit {rows}x{cols} tiles of size {tile_size}")
    return [
        [image[r * stride : r * stride + tile_size, c * stride : c * stride + tile_size].copy() for c in range(cols)]
        for r in range(rows)
    ]


def strip_seams(image: np.ndarray, tile_size: int) -> np.ndarray:
    """Drop the shared seam rows/columns of an image cut by ``cut_tiles``."""
    stride = tile_size - 1
    keep_rows = [i for i in range(image.shape[0]) if i % stride != 0]
    keep_cols = [i for i in range(image.shape[1]) if i % stride != 0]
    return image[np.ix_(keep_rows, keep_cols)]


def _has_distinct_borders(blocks: List[List[np.ndarray]]) -> bool:
    rows, cols = len(blocks), len(blocks[0])
    fingerprints = set()
    for row in blocks:
        for block in row:
            fingerprints.update(Tile.from_pixels(0, block).fingerprints)
    physical = rows * (cols - 1) + cols * (rows - 1) + 2 * (rows + cols)
    return len(fingerprints) == physical


@dataclass
class SyntheticPuzzle:
    """Shuffled tiles together with the layout they were cut from."""

    tiles: List[Tile]
    layout_ids: np.ndarray
    image: np.ndarray
    tile_size: int

    def untrimmed_image(self) -> np.ndarray:
        """Source tiles composed side by side, seams duplicated."""
        rows, cols = self.layout_ids.shape
        return compose_image(cut_tiles(self.image, rows, cols, self.tile_size))

    def trimmed_image(self) -> np.ndarray:
        return strip_seams(self.image, self.tile_size)


def make_puzzle(
    rows: int,
    cols: int,
    tile_size: int = 10,
    seed: int = 42,
    reorient: bool = True,
    mirror_only: bool = False,
    max_attempts: int = 1000,
) -> SyntheticPuzzle:
    """Cut a random bitmap into a shuffled, re-oriented tile set.

    Bitmaps are redrawn until every physical border has its own fingerprint,
    which makes the puzzle uniquely solvable by border matching.
    """
    if rows < 2 or cols < 2:
        raise ValueError("rows and cols must be at least 2")
    if tile_size < 3:
        raise ValueError("tile_size must be at least 3")

    rng = set_random_seed(seed)
    stride = tile_size - 1
    choices = [o for o in Orientation if o.is_mirror_only or not mirror_only]
    for _ in range(max_attempts):
        image = rng.random((rows * stride + 1, cols * stride + 1)) < 0.5
        blocks = cut_tiles(image, rows, cols, tile_size)
        if not _has_distinct_borders(blocks):
            continue

        layout_ids = rng.choice(np.arange(1000, 10000), size=(rows, cols), replace=False)
        tiles: List[Tile] = []
        for r in range(rows):
            for c in range(cols):
                orientation = choices[int(rng.integers(len(choices)))] if reorient else Orientation.IDENTITY
                tiles.append(Tile.from_pixels(int(layout_ids[r, c]), orientation.apply(blocks[r][c])))
        order = rng.permutation(len(tiles))
        return SyntheticPuzzle(
            tiles=[tiles[i] for i in order],
            layout_ids=layout_ids,
            image=image,
            tile_size=tile_size,
        )
    raise RuntimeError(f"Could not generate a uniquely solvable puzzle in {max_attempts} attempts")


def to_rgb(pixels: np.ndarray) -> np.ndarray:
    """Render filled pixels black on white as an RGB uint8 image."""
    gray = np.where(pixels, 0, 255).astype(np.uint8)
    return np.repeat(gray[:, :, None], 3, axis=2)


def save_image(path: Path, pixels: np.ndarray) -> None:
    """Save a boolean image to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    image = to_rgb(pixels)
    if cv2 is not None:
        bgr = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)
        ok = cv2.imwrite(str(path), bgr)
        if not ok:
            raise ValueError(f"failed to write image to path: {path}")
        return

    import matplotlib.pyplot as plt

    plt.imsave(path, image)

"""Assemble a tile file into a single image by matching tile borders."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tilegrid.assembler import AssemblyConfig, GridAssembler
from tilegrid.classifier import corner_product
from tilegrid.evaluator import SeamEvaluator
from tilegrid.parser import load_tiles
from tilegrid.utils import save_image, to_rgb


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Assemble square tiles by matching their borders.")
    parser.add_argument("--input", required=True, help="Path to a file of 'Tile <id>:' blocks")
    parser.add_argument(
        "--output",
        default=None,
        help="Optional output path for the assembled image (default: do not save)",
    )
    parser.add_argument(
        "--keep-borders",
        action="store_true",
        help="Keep each tile's border ring in the composed image",
    )
    parser.add_argument(
        "--original-orientation-only",
        action="store_true",
        help="Only accept a top-left corner in its parsed orientation",
    )
    parser.add_argument(
        "--mirror-only",
        action="store_true",
        help="Orient neighbors with horizontal/vertical mirrors only, never quarter turns",
    )
    parser.add_argument("--show", action="store_true", help="Display the assembled image")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log assembly steps")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run assembly from a tile file to printed results and an optional image."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else None
    config = AssemblyConfig(
        try_orientations=not args.original_orientation_only,
        mirror_only=args.mirror_only,
    )

    try:
        tiles = load_tiles(input_path)
        grid = GridAssembler(config).assemble(tiles)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    image = grid.compose(trim_borders=not args.keep_borders)
    if output_path is not None:
        save_image(output_path, image)

    rows, cols = grid.shape
    print(f"Input tiles: {input_path} ({len(tiles)} tiles)")
    print(f"Corner product: {corner_product(grid.corners)}")
    print(f"Grid: {rows}x{cols}")
    print(f"Image size: {image.shape[0]}x{image.shape[1]}")
    report = SeamEvaluator().evaluate(grid.rows)
    print(f"Seam accuracy: {report.seam_accuracy:.4f}")
    if rows > 1:
        below = grid.tile_at(1, 0)
        print(f"Tile south of the top-left corner: {below.tile_id}")
        print(below.render())
    if output_path is not None:
        print(f"Output image: {output_path.resolve()}")
    print("Assembled grid ids:")
    print(grid.tile_ids)

    if args.show:
        import matplotlib.pyplot as plt

        plt.imshow(to_rgb(image))
        plt.title("Assembled")
        plt.axis("off")
        plt.tight_layout()
        plt.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())

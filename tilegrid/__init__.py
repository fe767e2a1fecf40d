"""Border-matched square tile assembly package."""

from .adjacency import AdjacencyIndex
from .assembler import AssembledGrid, AssemblyConfig, GridAssembler
from .classifier import TileKind, classify, corner_product, find_corners
from .errors import (
    AmbiguousNeighborError,
    AssemblyError,
    MalformedAdjacencyError,
    NoUniqueTopLeftError,
    RaggedGridError,
    SeamMismatchError,
    TileParseError,
)
from .evaluator import SeamEvaluator, SeamReport
from .locator import find_top_left, is_top_left
from .orientation import Orientation
from .parser import format_tiles, load_tiles, parse_tiles
from .tile import Side, Tile, border_fingerprint

__all__ = [
    "Orientation",
    "Side",
    "Tile",
    "border_fingerprint",
    "AdjacencyIndex",
    "TileKind",
    "classify",
    "find_corners",
    "corner_product",
    "is_top_left",
    "find_top_left",
    "AssemblyConfig",
    "AssembledGrid",
    "GridAssembler",
    "SeamEvaluator",
    "SeamReport",
    "parse_tiles",
    "load_tiles",
    "format_tiles",
    "AssemblyError",
    "MalformedAdjacencyError",
    "AmbiguousNeighborError",
    "NoUniqueTopLeftError",
    "SeamMismatchError",
    "RaggedGridError",
    "TileParseError",
]

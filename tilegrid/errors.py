"""Exceptions raised while parsing and assembling tiles."""

from __future__ import annotations

from typing import Optional


class AssemblyError(ValueError):
    """The tile set does not form a single consistent grid."""


class MalformedAdjacencyError(AssemblyError):
    """A border fingerprint is exposed by more than two tiles."""


class AmbiguousNeighborError(AssemblyError):
    """A border that should lead to exactly one neighbor does not."""


class NoUniqueTopLeftError(AssemblyError):
    """No corner (or more than one) can start the assembly."""


class SeamMismatchError(AssemblyError):
    """No orientation of a neighbor lines up with the tiles already placed."""


class RaggedGridError(AssemblyError):
    """Assembled rows have different lengths."""


class TileParseError(ValueError):
    """Tile text is not in the ``Tile <id>:`` block format."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)

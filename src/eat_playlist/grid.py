"""Grid configuration and torus index arithmetic."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from eat_playlist.geometry import cell_origin
from eat_playlist.snake import Direction, Point


@dataclass(frozen=True)
class GridConfig:
    """Immutable ``rows × columns`` grid with a square cell edge length.

    Cells are addressed by a row-major flat index,
    ``index = row * columns + col``. Edges wrap around to the opposite
    side, so every move stays on the grid.
    """

    rows: int
    columns: int
    cell_size: float

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.columns <= 0:
            raise ValueError("Grid rows and columns must be positive.")
        if not math.isfinite(self.cell_size) or self.cell_size <= 0:
            raise ValueError("Grid cell_size must be positive.")

    @classmethod
    def from_viewport(
        cls, width: float, height: float, cell_size: float,
    ) -> GridConfig:
        """Fit as many whole cells as possible into a viewport."""
        if cell_size <= 0:
            raise ValueError("Grid cell_size must be positive.")
        return cls(
            rows=math.floor(height / cell_size),
            columns=math.floor(width / cell_size),
            cell_size=cell_size,
        )

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.rows * self.columns

    def contains(self, index: int) -> bool:
        """Check whether a flat index addresses a cell of this grid."""
        return 0 <= index < self.size

    def coords(self, index: int) -> tuple[int, int]:
        """Return the ``(row, col)`` of a flat index."""
        return divmod(index, self.columns)

    def index_of(self, row: int, col: int) -> int:
        """Return the flat index of a coordinate, wrapping out-of-range values."""
        return (row % self.rows) * self.columns + col % self.columns

    def move(self, index: int, direction: Direction) -> int:
        """Step one cell along *direction*, re-entering on the opposite edge."""
        dr, dc = direction.value
        row, col = self.coords(index)
        return self.index_of(row + dr, col + dc)

    def cell_origin(self, index: int) -> Point:
        """Top-left canvas coordinate of a cell."""
        return cell_origin(index, self.columns, self.cell_size)

    def free_indices(self, occupied: Iterable[int]) -> np.ndarray:
        """Return the sorted indices of cells not listed in *occupied*."""
        mask = np.ones(self.size, dtype=bool)
        taken = np.fromiter(occupied, dtype=np.int64)
        if taken.size:
            mask[taken] = False
        return np.flatnonzero(mask)

    def to_dict(self) -> dict:
        """Serialize grid configuration to a dictionary."""
        return {
            "rows": self.rows,
            "columns": self.columns,
            "cell_size": self.cell_size,
        }

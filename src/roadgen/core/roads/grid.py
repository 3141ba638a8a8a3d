"""
Terrain grids consumed by road generation.

Road generation reads terrain through the narrow ``TerrainOracle`` protocol:
grid dimensions plus per-cell passability and movement cost. ``TerrainGrid``
is a numpy-backed implementation; any object with the same surface works.
"""

import logging
from typing import Any, Iterable, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from roadgen.core.errors import TerrainGridError
from roadgen.models.terrain import TerrainType

logger = logging.getLogger(__name__)

GridPoint = Tuple[int, int]

# Cardinal step order: east, west, south, north
DIRECTIONS: Tuple[GridPoint, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


@runtime_checkable
class TerrainOracle(Protocol):
    """Read-only terrain view used by the road pipeline."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def is_passable(self, x: int, y: int) -> bool: ...

    def movement_cost(self, x: int, y: int) -> float: ...


def in_bounds(grid: TerrainOracle, x: int, y: int, margin: int = 0) -> bool:
    """
    Check whether a cell lies inside the grid, excluding a border ring.

    Args:
        grid: Terrain to test against
        x: Column
        y: Row
        margin: Width of the excluded border ring

    Returns:
        True if margin <= x < width - margin and margin <= y < height - margin
    """
    return margin <= x < grid.width - margin and margin <= y < grid.height - margin


def clamp_point(grid: TerrainOracle, x: int, y: int, margin: int = 1) -> GridPoint:
    """Clamp a point into the grid, keeping ``margin`` cells from each edge."""
    x = max(margin, min(grid.width - 1 - margin, x))
    y = max(margin, min(grid.height - 1 - margin, y))
    return (x, y)


class TerrainGrid:
    """
    Numpy-backed terrain oracle.

    Arrays have shape (height, width) and are indexed [y, x]. The grid is
    never written to after construction, so one instance can be shared by
    concurrent road builds.
    """

    def __init__(
        self,
        passable: NDArray[np.bool_],
        movement_cost: NDArray[np.floating[Any]],
    ):
        """
        Initialize the terrain grid.

        Args:
            passable: Boolean mask of cells a road may cross
            movement_cost: Non-negative cost multiplier per cell

        Raises:
            TerrainGridError: If the arrays are not usable
        """
        passable = np.asarray(passable, dtype=bool)
        movement_cost = np.asarray(movement_cost, dtype=np.float64)

        if passable.ndim != 2 or passable.size == 0:
            raise TerrainGridError(
                "Passability mask must be a non-empty 2D array", shape=passable.shape
            )
        if movement_cost.shape != passable.shape:
            raise TerrainGridError(
                f"Cost array shape {movement_cost.shape} does not match "
                f"passability shape {passable.shape}",
                shape=movement_cost.shape,
            )
        if not np.all(np.isfinite(movement_cost)) or np.any(movement_cost < 0):
            raise TerrainGridError("Movement costs must be finite and non-negative")

        self._passable = passable.copy()
        self._passable.setflags(write=False)
        self._cost = movement_cost.copy()
        self._cost.setflags(write=False)

    @classmethod
    def uniform(cls, width: int, height: int, cost: float = 1.0) -> "TerrainGrid":
        """
        Create an all-passable grid with a single movement cost.

        Args:
            width: Number of columns
            height: Number of rows
            cost: Movement cost of every cell

        Returns:
            TerrainGrid instance
        """
        if width <= 0 or height <= 0:
            raise TerrainGridError(
                f"Grid dimensions must be positive, got {width}x{height}"
            )
        return cls(
            np.ones((height, width), dtype=bool),
            np.full((height, width), cost, dtype=np.float64),
        )

    @classmethod
    def from_arrays(
        cls,
        passable: NDArray[np.bool_],
        movement_cost: NDArray[np.floating[Any]],
    ) -> "TerrainGrid":
        """Create a grid from a passability mask and a cost array."""
        return cls(passable, movement_cost)

    @classmethod
    def from_terrain_types(cls, rows: Sequence[Sequence[TerrainType]]) -> "TerrainGrid":
        """
        Create a grid from terrain classes.

        Args:
            rows: Terrain types indexed [y][x]

        Returns:
            TerrainGrid instance
        """
        height = len(rows)
        width = len(rows[0]) if height else 0
        if height == 0 or width == 0:
            raise TerrainGridError("Terrain map must not be empty")
        if any(len(row) != width for row in rows):
            raise TerrainGridError("Terrain map rows must all have the same length")

        passable = np.array([[t.is_passable for t in row] for row in rows], dtype=bool)
        cost = np.array([[t.movement_cost for t in row] for row in rows], dtype=np.float64)

        logger.debug(
            f"Built terrain grid {width}x{height} from terrain types, "
            f"{int(passable.sum())} passable cells"
        )
        return cls(passable, cost)

    @property
    def width(self) -> int:
        return int(self._passable.shape[1])

    @property
    def height(self) -> int:
        return int(self._passable.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        """Array shape as (height, width)."""
        return (self.height, self.width)

    @property
    def passable_mask(self) -> NDArray[np.bool_]:
        """Read-only passability mask."""
        return self._passable

    def is_passable(self, x: int, y: int) -> bool:
        """Whether a road may cross cell (x, y). Out-of-grid cells are not passable."""
        if not in_bounds(self, x, y):
            return False
        return bool(self._passable[y, x])

    def movement_cost(self, x: int, y: int) -> float:
        """Movement cost multiplier of cell (x, y)."""
        return float(self._cost[y, x])

    def with_blocked(self, cells: Iterable[GridPoint]) -> "TerrainGrid":
        """
        Return a copy with additional impassable cells.

        Args:
            cells: (x, y) coordinates to block; out-of-grid cells are ignored

        Returns:
            New TerrainGrid instance
        """
        passable = self._passable.copy()
        for x, y in cells:
            if in_bounds(self, x, y):
                passable[y, x] = False
        return TerrainGrid(passable, self._cost)

    def __repr__(self) -> str:
        return f"TerrainGrid(width={self.width}, height={self.height})"

"""
A* pathfinding on the 4-connected terrain grid.

This module implements the search used for every road segment, including:
- Terrain-weighted step costs
- Turn penalties that favor long straight runs
- An expansion cap that bounds the search on disconnected grids

Unreachable goals are not errors: the search reports an empty path.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from roadgen.core.config import Settings, settings as default_settings
from roadgen.core.errors import ConfigurationError
from roadgen.core.roads.grid import DIRECTIONS, GridPoint, TerrainOracle, in_bounds

logger = logging.getLogger(__name__)


@dataclass
class PathfinderConfig:
    """
    Configuration for grid A* search.

    Attributes:
        base_step_cost: Cost of moving one cell (default: 10)
        turn_penalty: Extra cost for changing direction (default: 3)
        terrain_cost_scale: Multiplier on a cell's movement cost, floored
            to an integer (default: 4.0)
        edge_margin: Border ring the search never enters (default: 1)
        max_expansions: Expansion cap per search; None uses 4 * width * height
    """

    base_step_cost: int = 10
    turn_penalty: int = 3
    terrain_cost_scale: float = 4.0
    edge_margin: int = 1
    max_expansions: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.base_step_cost <= 0:
            raise ValueError("base_step_cost must be positive")
        if self.turn_penalty < 0:
            raise ValueError("turn_penalty must be non-negative")
        if self.terrain_cost_scale < 0:
            raise ValueError("terrain_cost_scale must be non-negative")
        if self.edge_margin < 0:
            raise ValueError("edge_margin must be non-negative")
        if self.max_expansions is not None and self.max_expansions <= 0:
            raise ValueError("max_expansions must be positive")

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "PathfinderConfig":
        """
        Build a pathfinder configuration from application settings.

        Args:
            config: Settings instance (uses the global settings if not provided)

        Returns:
            PathfinderConfig instance

        Raises:
            ConfigurationError: If the settings describe an invalid search
        """
        config = config or default_settings
        try:
            return cls(
                base_step_cost=config.base_step_cost,
                turn_penalty=config.turn_penalty,
                terrain_cost_scale=config.terrain_cost_scale,
                edge_margin=config.edge_margin,
                max_expansions=config.max_expansions,
            )
        except ValueError as e:
            raise ConfigurationError(str(e), details={"source": "settings"}) from e

    def expansion_cap(self, grid: TerrainOracle) -> int:
        """Expansion cap for a search on ``grid``."""
        if self.max_expansions is not None:
            return self.max_expansions
        return 4 * grid.width * grid.height


@dataclass
class PathResult:
    """
    Result of a successful search.

    Attributes:
        points: Ordered grid cells from start to goal, both included
        total_cost: Accumulated cost recorded for the goal
        expansions: Number of nodes expanded
        metadata: Additional search metadata
    """

    points: List[GridPoint]
    total_cost: int
    expansions: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "num_points": len(self.points),
            "total_cost": int(self.total_cost),
            "expansions": int(self.expansions),
            "points": [list(p) for p in self.points],
            "metadata": self.metadata,
        }


class GridPathfinder:
    """
    A* search over a terrain grid for road segments.

    Every step costs ``base_step_cost`` plus the floored scaled movement cost
    of the entered cell, plus ``turn_penalty`` when the direction changes.
    The Manhattan heuristic scaled by ``base_step_cost`` is consistent, since
    no step is cheaper than the base cost. Equal priorities are resolved in
    insertion order.

    Instances hold no per-search state and may be shared between threads.
    """

    def __init__(self, grid: TerrainOracle, config: Optional[PathfinderConfig] = None):
        """
        Initialize the pathfinder.

        Args:
            grid: Terrain to search
            config: Pathfinder configuration (uses defaults if not provided)
        """
        self.grid = grid
        self.config = config or PathfinderConfig()

    def find_path(self, start: GridPoint, goal: GridPoint) -> List[GridPoint]:
        """
        Find the cheapest 4-connected route between two cells.

        Args:
            start: Starting cell (x, y)
            goal: Goal cell (x, y)

        Returns:
            Cells from start to goal inclusive, or an empty list if unreachable
        """
        result = self.search(start, goal)
        return result.points if result else []

    def search(self, start: GridPoint, goal: GridPoint) -> Optional[PathResult]:
        """
        Run A* between two cells.

        Args:
            start: Starting cell (x, y)
            goal: Goal cell (x, y)

        Returns:
            PathResult if the goal was reached, None otherwise
        """
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))
        margin = self.config.edge_margin
        cap = self.config.expansion_cap(self.grid)

        counter = itertools.count()
        # (f, insertion sequence, g at push time, cell)
        open_heap: List[Tuple[int, int, int, GridPoint]] = []
        heapq.heappush(open_heap, (self.heuristic(start, goal), next(counter), 0, start))

        g_score: Dict[GridPoint, int] = {start: 0}
        came_from: Dict[GridPoint, GridPoint] = {}
        incoming: Dict[GridPoint, Optional[int]] = {start: None}
        expansions = 0

        while open_heap:
            _, _, pushed_g, current = heapq.heappop(open_heap)

            # Superseded by a cheaper entry
            if pushed_g > g_score[current]:
                continue

            if current == goal:
                points = self._reconstruct(came_from, current)
                logger.debug(
                    f"Path {start} -> {goal}: {len(points)} cells, "
                    f"cost {g_score[current]}, {expansions} expansions"
                )
                return PathResult(
                    points=points, total_cost=g_score[current], expansions=expansions
                )

            expansions += 1
            if expansions > cap:
                logger.warning(
                    f"Search {start} -> {goal} abandoned after {cap} expansions"
                )
                return None

            current_g = g_score[current]
            current_dir = incoming[current]

            for direction, (dx, dy) in enumerate(DIRECTIONS):
                nxt = (current[0] + dx, current[1] + dy)
                if not in_bounds(self.grid, nxt[0], nxt[1], margin):
                    continue
                if not self.grid.is_passable(nxt[0], nxt[1]):
                    continue

                tentative_g = current_g + self.step_cost(current_dir, direction, nxt)
                if nxt not in g_score or tentative_g < g_score[nxt]:
                    g_score[nxt] = tentative_g
                    came_from[nxt] = current
                    incoming[nxt] = direction
                    f = tentative_g + self.heuristic(nxt, goal)
                    heapq.heappush(open_heap, (f, next(counter), tentative_g, nxt))

        logger.debug(f"No path {start} -> {goal} after {expansions} expansions")
        return None

    def heuristic(self, point: GridPoint, goal: GridPoint) -> int:
        """Manhattan distance to the goal scaled by the base step cost."""
        return (abs(point[0] - goal[0]) + abs(point[1] - goal[1])) * self.config.base_step_cost

    def terrain_cost(self, cell: GridPoint) -> int:
        """Terrain surcharge for entering a cell."""
        return int(self.grid.movement_cost(cell[0], cell[1]) * self.config.terrain_cost_scale)

    def step_cost(self, previous_dir: Optional[int], direction: int, cell: GridPoint) -> int:
        """
        Cost of stepping into ``cell`` in ``direction``.

        Args:
            previous_dir: Direction index used to reach the current cell, or
                None at the start of a search
            direction: Direction index of this step
            cell: Cell being entered

        Returns:
            Integer step cost
        """
        turn = 0 if previous_dir is None or previous_dir == direction else self.config.turn_penalty
        return self.config.base_step_cost + turn + self.terrain_cost(cell)

    def path_cost(self, points: Sequence[GridPoint]) -> int:
        """
        Price a route with the same rules the search uses.

        Args:
            points: 4-connected cells, start first

        Returns:
            Total cost of walking the route

        Raises:
            ValueError: If two consecutive cells are not 4-neighbors
        """
        total = 0
        previous_dir: Optional[int] = None
        for a, b in zip(points, points[1:]):
            step = (b[0] - a[0], b[1] - a[1])
            if step not in DIRECTIONS:
                raise ValueError(f"Cells {a} and {b} are not 4-connected")
            direction = DIRECTIONS.index(step)
            total += self.step_cost(previous_dir, direction, b)
            previous_dir = direction
        return total

    @staticmethod
    def _reconstruct(came_from: Dict[GridPoint, GridPoint], current: GridPoint) -> List[GridPoint]:
        """Walk back-pointers from the goal and reverse."""
        points = [current]
        while current in came_from:
            current = came_from[current]
            points.append(current)
        points.reverse()
        return points

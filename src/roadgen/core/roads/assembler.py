"""
Road assembly from per-segment searches.

A road is built as entry point -> bend -> entry point, one A* search per
leg. A leg that cannot be connected ends the road early: a short road is
preferred over no road, so nothing here raises for unreachable targets.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from roadgen.core.logging_config import add_log_context
from roadgen.core.roads.grid import GridPoint, TerrainOracle
from roadgen.core.roads.pathfinding import GridPathfinder, PathfinderConfig
from roadgen.core.roads.planning import pick_entry_point, plan_waypoints
from roadgen.models.road import Road, RoadQuality
from roadgen.models.structure import StructureAnchor

logger = logging.getLogger(__name__)


class RoadAssembler:
    """
    Builds roads between structures on a terrain grid.

    The assembler never writes to the grid. Each call to ``build_road``
    uses only the generator it is given, so separate roads can be built
    concurrently as long as each has its own generator.
    """

    def __init__(self, grid: TerrainOracle, config: Optional[PathfinderConfig] = None):
        """
        Initialize the assembler.

        Args:
            grid: Terrain roads are built on
            config: Pathfinder configuration (uses defaults if not provided)
        """
        self.grid = grid
        self.pathfinder = GridPathfinder(grid, config)

    def assemble(self, entry_start: GridPoint, waypoints: Sequence[GridPoint]) -> List[GridPoint]:
        """
        Stitch searches through ``waypoints`` into one path.

        Args:
            entry_start: First point of the road
            waypoints: Targets to visit in order

        Returns:
            Duplicate-free 4-connected path, truncated at the first
            unreachable waypoint
        """
        path, _ = self.assemble_segments(entry_start, waypoints)
        return path

    def assemble_segments(
        self, entry_start: GridPoint, waypoints: Sequence[GridPoint]
    ) -> Tuple[List[GridPoint], int]:
        """
        Stitch searches through ``waypoints`` and count connected legs.

        Args:
            entry_start: First point of the road
            waypoints: Targets to visit in order

        Returns:
            Tuple of (path, number of legs connected)
        """
        current = (int(entry_start[0]), int(entry_start[1]))
        path: List[GridPoint] = [current]
        connected = 0

        for target in waypoints:
            segment = self.pathfinder.find_path(current, target)
            if not segment:
                logger.warning(
                    f"Road truncated: no route from {current} to {target} "
                    f"({connected}/{len(waypoints)} legs connected)"
                )
                break

            # The first cell is the join point already on the path
            path.extend(segment[1:])
            current = segment[-1]
            connected += 1

        return path, connected

    def build_road(
        self,
        name: str,
        start: StructureAnchor,
        end: StructureAnchor,
        rng: np.random.Generator,
        quality: Optional[RoadQuality] = None,
    ) -> Road:
        """
        Generate a road between two structures.

        Args:
            name: Road name
            start: Structure the road starts at
            end: Structure the road ends at
            rng: Seeded jitter source for entry points
            quality: Optional surface class

        Returns:
            Road instance (possibly truncated, never raises for bad terrain)
        """
        with add_log_context(road_name=name):
            entry_start = pick_entry_point(self.grid, start, end, rng)
            entry_end = pick_entry_point(self.grid, end, start, rng)
            logger.debug(f"Road '{name}': entry points {entry_start} and {entry_end}")

            waypoints = plan_waypoints(self.grid, entry_start, entry_end)
            path, connected = self.assemble_segments(entry_start, waypoints)

            logger.debug(
                f"Road '{name}': {len(path)} cells, {connected}/{len(waypoints)} legs"
            )

        return Road(
            name=name,
            start=start,
            end=end,
            path=path,
            quality=quality,
            complete=connected == len(waypoints),
        )

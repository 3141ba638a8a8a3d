"""
Road generation between map structures.

This module provides terrain-aware road generation, including:
- Snapping anchors onto passable terrain
- Entry point and bend waypoint planning
- A* pathfinding with turn penalties and terrain costs
- Road assembly and the road network registry
"""

from roadgen.core.roads.assembler import RoadAssembler
from roadgen.core.roads.grid import TerrainGrid, TerrainOracle
from roadgen.core.roads.network import RoadNetwork, RoadRequest, derive_road_seed
from roadgen.core.roads.passability import nudge_to_passable
from roadgen.core.roads.pathfinding import GridPathfinder, PathfinderConfig, PathResult
from roadgen.core.roads.planning import pick_entry_point, plan_waypoints

__all__ = [
    "GridPathfinder",
    "PathResult",
    "PathfinderConfig",
    "RoadAssembler",
    "RoadNetwork",
    "RoadRequest",
    "TerrainGrid",
    "TerrainOracle",
    "derive_road_seed",
    "nudge_to_passable",
    "pick_entry_point",
    "plan_waypoints",
]

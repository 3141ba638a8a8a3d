"""
Anchor and waypoint planning for roads.

Roads leave a structure from the side facing the other structure and always
pass through at least one bend waypoint, so no road is a dead-straight run
even when both structures share a row or column.
"""

import logging
from typing import List

import numpy as np

from roadgen.core.roads.grid import GridPoint, TerrainOracle, clamp_point
from roadgen.core.roads.passability import nudge_to_passable
from roadgen.models.structure import StructureAnchor

logger = logging.getLogger(__name__)

# Minimum bend offsets along and across the dominant axis
MIN_PRIMARY_OFFSET = 4
MIN_SECONDARY_OFFSET = 2


def is_horizontal(dx: int, dy: int) -> bool:
    """Whether the x axis dominates a displacement (ties go horizontal)."""
    return abs(dx) >= abs(dy)


def _sign(value: int) -> int:
    return -1 if value < 0 else 1


def pick_entry_point(
    grid: TerrainOracle,
    origin: StructureAnchor,
    target: StructureAnchor,
    rng: np.random.Generator,
) -> GridPoint:
    """
    Pick the cell where a road leaves ``origin`` heading for ``target``.

    The point sits on the footprint boundary along the dominant axis, on the
    side facing the target, with the perpendicular coordinate jittered
    within the footprint. It is clamped one cell inside the grid and snapped
    to passable terrain.

    Args:
        grid: Terrain the road is built on
        origin: Structure the road leaves
        target: Structure the road heads for
        rng: Seeded jitter source

    Returns:
        Entry point (x, y)
    """
    half = origin.half_size
    dx = target.grid_x - origin.grid_x
    dy = target.grid_y - origin.grid_y

    jitter = int(rng.integers(0, half * 2 + 1)) - half
    jitter = max(-half + 1, min(half - 1, jitter))

    x, y = origin.grid_x, origin.grid_y
    if is_horizontal(dx, dy):
        x += half if dx >= 0 else -half
        y += jitter
    else:
        y += half if dy >= 0 else -half
        x += jitter

    candidate = clamp_point(grid, x, y)
    return nudge_to_passable(grid, candidate)


def plan_waypoints(grid: TerrainOracle, start: GridPoint, end: GridPoint) -> List[GridPoint]:
    """
    Plan the targets a road visits after leaving ``start``.

    A bend is placed away from ``start``: along the dominant axis by a third
    of the distance (at least 4 cells) and across it by a fifth of the
    perpendicular distance (at least 2 cells). Zero deltas count as positive.

    Args:
        grid: Terrain the road is built on
        start: Entry point at the first structure
        end: Entry point at the second structure

    Returns:
        [bend, end], both clamped and snapped to passable terrain
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]

    if is_horizontal(dx, dy):
        primary, secondary = dx, dy
    else:
        primary, secondary = dy, dx

    offset_primary = max(MIN_PRIMARY_OFFSET, abs(primary) // 3)
    offset_secondary = max(MIN_SECONDARY_OFFSET, abs(secondary) // 5)

    bend_x, bend_y = start
    if is_horizontal(dx, dy):
        bend_x += _sign(dx) * offset_primary
        bend_y += _sign(dy) * offset_secondary
    else:
        bend_y += _sign(dy) * offset_primary
        bend_x += _sign(dx) * offset_secondary

    bend = nudge_to_passable(grid, clamp_point(grid, bend_x, bend_y))
    final = nudge_to_passable(grid, end)

    logger.debug(f"Planned waypoints {start} -> {bend} -> {final}")
    return [bend, final]

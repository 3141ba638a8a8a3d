"""
Snapping points onto passable terrain.
"""

import logging
from collections import deque
from typing import Deque, Optional, Set, Tuple

from roadgen.core.roads.grid import DIRECTIONS, GridPoint, TerrainOracle, in_bounds

logger = logging.getLogger(__name__)


def nudge_to_passable(
    grid: TerrainOracle,
    point: GridPoint,
    margin: int = 1,
    max_radius: Optional[int] = None,
) -> GridPoint:
    """
    Snap a point to the nearest passable cell.

    A passable point inside the margin is returned unchanged. Otherwise a
    breadth-first search over 4-connected neighbors returns the first usable
    cell found, which has the minimum hop count; ties follow the fixed
    direction order. The search never leaves the grid. When nothing usable
    is reachable the original point is returned, so callers must tolerate an
    impassable anchor on degenerate grids.

    Args:
        grid: Terrain to search
        point: (x, y) starting point, possibly off-grid
        margin: Border ring excluded from the usable area
        max_radius: Maximum hop count to search (None for the whole grid)

    Returns:
        The resolved (x, y) point
    """
    x, y = int(point[0]), int(point[1])
    if _usable(grid, x, y, margin):
        return (x, y)

    # Off-grid points start from the nearest grid cell
    sx = min(max(x, 0), grid.width - 1)
    sy = min(max(y, 0), grid.height - 1)
    queue: Deque[Tuple[int, int, int]] = deque([(sx, sy, 0)])
    visited: Set[GridPoint] = {(sx, sy)}

    while queue:
        cx, cy, hops = queue.popleft()
        if _usable(grid, cx, cy, margin):
            logger.debug(f"Nudged {(x, y)} to {(cx, cy)} in {hops} hops")
            return (cx, cy)

        if max_radius is not None and hops >= max_radius:
            continue

        for dx, dy in DIRECTIONS:
            nxt = (cx + dx, cy + dy)
            if nxt in visited or not in_bounds(grid, nxt[0], nxt[1]):
                continue
            visited.add(nxt)
            queue.append((nxt[0], nxt[1], hops + 1))

    logger.debug(f"No passable cell reachable from {(x, y)}, keeping original point")
    return (x, y)


def _usable(grid: TerrainOracle, x: int, y: int, margin: int) -> bool:
    return in_bounds(grid, x, y, margin) and grid.is_passable(x, y)

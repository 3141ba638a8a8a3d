"""
Road network registry.

Builds roads between structures during world generation and answers the
questions the rest of the game asks about them: which road joins two
structures, which roads leave a structure, and whether a tile is road.
"""

import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, NamedTuple, Optional, Set

import networkx as nx
import numpy as np

from roadgen.core.config import settings
from roadgen.core.errors import ValidationError
from roadgen.core.roads.assembler import RoadAssembler
from roadgen.core.roads.grid import GridPoint, TerrainOracle
from roadgen.core.roads.pathfinding import PathfinderConfig
from roadgen.models.road import Road, RoadQuality
from roadgen.models.structure import StructureAnchor
from roadgen.utils.logging import PerformanceTimer

logger = logging.getLogger(__name__)


def derive_road_seed(base_seed: int, start: StructureAnchor, end: StructureAnchor) -> int:
    """
    Derive a per-road seed from the world seed and the two endpoints.

    The result depends only on its arguments, so a road's shape does not
    depend on the order roads are built in or on the platform.

    Args:
        base_seed: World generation seed
        start: Structure the road starts at
        end: Structure the road ends at

    Returns:
        Unsigned 64-bit seed
    """
    key = (
        f"{base_seed}|{start.grid_x},{start.grid_y},{start.size}"
        f"|{end.grid_x},{end.grid_y},{end.size}"
    )
    digest = hashlib.blake2b(key.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


class RoadRequest(NamedTuple):
    """A road to build: name, endpoints and optional surface class."""

    name: str
    start: StructureAnchor
    end: StructureAnchor
    quality: Optional[RoadQuality] = None


class RoadNetwork:
    """
    Generates and manages the roads connecting map structures.

    Structures are graph nodes and roads are edges weighted by road length,
    which is what logistics code walks when routing trade.
    """

    def __init__(
        self,
        grid: TerrainOracle,
        seed: Optional[int] = None,
        pathfinder_config: Optional[PathfinderConfig] = None,
    ):
        """
        Initialize road network generator.

        Args:
            grid: Terrain roads are built on
            seed: World generation seed (settings default if not provided)
            pathfinder_config: Pathfinder configuration (built from settings if
                not provided)
        """
        self.grid = grid
        self.seed = settings.default_seed if seed is None else seed
        self.pathfinder_config = pathfinder_config or PathfinderConfig.from_settings()
        self.assembler = RoadAssembler(grid, self.pathfinder_config)

        self._roads: List[Road] = []
        self._structures: List[StructureAnchor] = []
        self._tiles: Dict[GridPoint, Road] = {}
        self.graph: nx.Graph = nx.Graph()

    @property
    def roads(self) -> List[Road]:
        return list(self._roads)

    @property
    def structures(self) -> List[StructureAnchor]:
        return list(self._structures)

    def add_structure(self, structure: StructureAnchor) -> None:
        """Register a structure as a network node (idempotent)."""
        if structure in self.graph:
            return
        self._structures.append(structure)
        self.graph.add_node(structure)

    def add_road(self, road: Road) -> None:
        """
        Register an already built road.

        Args:
            road: Road to add; its endpoints are registered as nodes
        """
        self.add_structure(road.start_point)
        self.add_structure(road.end_point)
        self._roads.append(road)

        # First road registered on a tile owns it
        for point in road.path:
            self._tiles.setdefault(point, road)

        self.graph.add_edge(road.start_point, road.end_point, weight=road.length, road=road)

    def build_road(
        self,
        name: str,
        start: StructureAnchor,
        end: StructureAnchor,
        quality: Optional[RoadQuality] = None,
    ) -> Road:
        """
        Build a road without registering it.

        Args:
            name: Road name
            start: Structure the road starts at
            end: Structure the road ends at
            quality: Optional surface class

        Returns:
            Road instance

        Raises:
            ValidationError: If both ends are the same structure
        """
        if start == end:
            raise ValidationError(
                f"Road '{name}' must join two different structures",
                field="end",
                details={"structure": start.id},
            )

        rng = np.random.default_rng(derive_road_seed(self.seed, start, end))
        road = self.assembler.build_road(name, start, end, rng, quality=quality)
        if not road.is_complete:
            logger.warning(f"Road '{name}' between {start.id} and {end.id} is truncated")
        return road

    def connect_structures(
        self,
        name: str,
        start: StructureAnchor,
        end: StructureAnchor,
        quality: Optional[RoadQuality] = None,
    ) -> Road:
        """
        Build a road between two structures and register it.

        Args:
            name: Road name
            start: Structure the road starts at
            end: Structure the road ends at
            quality: Optional surface class

        Returns:
            The new Road
        """
        road = self.build_road(name, start, end, quality=quality)
        self.add_road(road)
        return road

    def connect_many(
        self,
        requests: List[RoadRequest],
        max_workers: Optional[int] = None,
    ) -> List[Road]:
        """
        Build several roads concurrently and register them in request order.

        Args:
            requests: Roads to build
            max_workers: Worker thread count (settings, then executor default)

        Returns:
            Roads in the same order as ``requests``
        """
        if not requests:
            return []

        with PerformanceTimer(f"Building {len(requests)} roads", logger_instance=logger):
            workers = max_workers or settings.max_workers
            with ThreadPoolExecutor(max_workers=workers) as executor:
                roads = list(
                    executor.map(
                        lambda req: self.build_road(req.name, req.start, req.end, req.quality),
                        requests,
                    )
                )

        for road in roads:
            self.add_road(road)
        return roads

    def get_road_between(
        self, a: StructureAnchor, b: StructureAnchor
    ) -> Optional[Road]:
        """Get the first road joining two structures, in either direction."""
        for road in self._roads:
            if road.connects(a, b):
                return road
        return None

    def get_roads_from(self, structure: StructureAnchor) -> List[Road]:
        """Get all roads that start or end at a structure."""
        return [road for road in self._roads if road.touches(structure)]

    def road_at(self, x: int, y: int) -> Optional[Road]:
        """Get the road occupying a tile, if any."""
        return self._tiles.get((x, y))

    def road_quality_at(self, x: int, y: int) -> Optional[RoadQuality]:
        """Get the surface class of the road on a tile, if any."""
        road = self.road_at(x, y)
        return road.quality if road else None

    def is_road_tile(self, x: int, y: int) -> bool:
        """Whether any road passes over a tile."""
        return (x, y) in self._tiles

    def is_connected(self) -> bool:
        """Whether every registered structure is reachable by road."""
        if self.graph.number_of_nodes() == 0:
            return True
        return nx.is_connected(self.graph)

    def connected_groups(self) -> List[Set[StructureAnchor]]:
        """Groups of structures linked by roads, largest first."""
        return sorted(nx.connected_components(self.graph), key=len, reverse=True)

    def get_network_stats(self) -> Dict[str, Any]:
        """
        Get network statistics.

        Returns:
            Dictionary with network statistics
        """
        lengths = [road.length for road in self._roads]
        by_quality: Dict[str, int] = {}
        for road in self._roads:
            key = road.quality.value if road.quality else "unclassified"
            by_quality[key] = by_quality.get(key, 0) + 1

        return {
            "total_roads": len(self._roads),
            "total_structures": len(self._structures),
            "total_length": int(sum(lengths)),
            "avg_length": float(np.mean(lengths)) if lengths else 0.0,
            "road_tiles": len(self._tiles),
            "truncated_roads": sum(1 for road in self._roads if not road.is_complete),
            "connected_groups": nx.number_connected_components(self.graph)
            if self._structures
            else 0,
            "roads_by_quality": by_quality,
        }

    def export_to_geojson(self) -> Dict[str, Any]:
        """
        Export roads to GeoJSON in grid coordinates.

        Returns:
            GeoJSON FeatureCollection
        """
        features = []

        for road in self._roads:
            geometry = road.get_geometry()
            if geometry.is_empty:
                continue

            properties = road.to_dict()
            properties.pop("path")
            features.append(
                {
                    "type": "Feature",
                    "geometry": {
                        "type": geometry.geom_type,
                        "coordinates": [list(c) for c in geometry.coords]
                        if geometry.geom_type == "LineString"
                        else list(geometry.coords[0]),
                    },
                    "properties": {**properties, "feature_type": "road"},
                }
            )

        return {"type": "FeatureCollection", "features": features}

"""
Demo script for road network generation.

This example demonstrates the road generation pipeline on a small world:
1. Build a terrain grid with a river, a forest and a mountain range
2. Place settlements and connect them with roads
3. Inspect road statistics and export to GeoJSON
"""

import numpy as np

from roadgen.core.logging_config import setup_logging
from roadgen.core.roads.grid import TerrainGrid
from roadgen.core.roads.network import RoadNetwork, RoadRequest
from roadgen.models.road import RoadQuality
from roadgen.models.structure import StructureAnchor, StructureKind
from roadgen.models.terrain import TerrainType


def build_terrain(size: int) -> TerrainGrid:
    """Build a grassland map with a river, a forest and mountains."""
    rows = [[TerrainType.GRASS for _ in range(size)] for _ in range(size)]

    # River running north to south with a ford at row 30
    for y in range(size):
        if y != 30:
            rows[y][25] = TerrainType.SHALLOW_WATER

    # Forest in the north-east
    for y in range(5, 20):
        for x in range(32, 45):
            rows[y][x] = TerrainType.FOREST

    # Mountain range in the south-west
    for y in range(38, 44):
        for x in range(5, 20):
            rows[y][x] = TerrainType.MOUNTAIN

    return TerrainGrid.from_terrain_types(rows)


def render(grid: TerrainGrid, network: RoadNetwork) -> str:
    """Render the map as ASCII art."""
    lines = []
    for y in range(grid.height):
        line = []
        for x in range(grid.width):
            if network.is_road_tile(x, y):
                line.append("#")
            elif not grid.is_passable(x, y):
                line.append("~")
            elif grid.movement_cost(x, y) > 1.0:
                line.append("^")
            else:
                line.append(".")
        lines.append("".join(line))
    return "\n".join(lines)


def main():
    """Run road network generation demo."""
    setup_logging(log_level="INFO")

    print("=" * 60)
    print("Road Network Generation Demo")
    print("=" * 60)

    # 1. Terrain
    print("\n1. Creating terrain (50 x 50 cells)...")
    size = 50
    grid = build_terrain(size)
    print(f"   - Passable cells: {int(np.sum(grid.passable_mask))}")

    # 2. Settlements
    print("\n2. Placing settlements...")
    towns = [
        StructureAnchor(id="ashford", name="Ashford", kind=StructureKind.TOWN,
                        grid_x=8, grid_y=8, size=4),
        StructureAnchor(id="brook", name="Brookhollow", grid_x=40, grid_y=10, size=2),
        StructureAnchor(id="cairn", name="Cairnmoor", grid_x=10, grid_y=30, size=2),
        StructureAnchor(id="dunmore", name="Dunmore Quarry", kind=StructureKind.MINING_QUARRY,
                        grid_x=40, grid_y=40, size=2),
    ]
    for town in towns:
        print(f"   - {town.name} at {town.position} (size {town.size})")

    # 3. Roads
    print("\n3. Generating roads...")
    network = RoadNetwork(grid, seed=2024)
    requests = [
        RoadRequest("King's Way", towns[0], towns[1], RoadQuality.PAVED),
        RoadRequest("Old Mill Road", towns[0], towns[2], RoadQuality.GRAVEL),
        RoadRequest("Ford Road", towns[2], towns[3], RoadQuality.DIRT),
    ]
    roads = network.connect_many(requests)

    for road in roads:
        status = "complete" if road.is_complete else "TRUNCATED"
        print(f"   - {road.name}: {road.length} cells ({status})")

    # 4. Statistics
    print("\n4. Road Network Statistics:")
    print("-" * 60)
    stats = network.get_network_stats()
    print(f"   Total roads: {stats['total_roads']}")
    print(f"   Total length: {stats['total_length']} cells")
    print(f"   Road tiles: {stats['road_tiles']}")
    print(f"   Connected groups: {stats['connected_groups']}")

    # 5. Map
    print("\n5. Map (# road, ~ impassable, ^ rough):")
    print(render(grid, network))

    # 6. Export
    print("\n6. Exporting to GeoJSON...")
    geojson = network.export_to_geojson()
    print(f"   - Features: {len(geojson['features'])}")

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()

"""
Tests for the road network registry.

Tests road registration, structure queries, seeding, and batch builds.
"""

import pytest

from roadgen.core.errors import ValidationError
from roadgen.core.roads.grid import TerrainGrid
from roadgen.core.roads.network import RoadNetwork, RoadRequest, derive_road_seed
from roadgen.models.road import RoadQuality
from roadgen.models.structure import StructureAnchor, StructureKind


@pytest.fixture
def grid():
    """Create a 40x40 grid with uniform movement cost."""
    return TerrainGrid.uniform(40, 40, cost=1.0)


@pytest.fixture
def towns():
    """Create four settlements."""
    return {
        "ashford": StructureAnchor(
            id="ashford", name="Ashford", kind=StructureKind.TOWN, grid_x=5, grid_y=5, size=3
        ),
        "brook": StructureAnchor(id="brook", name="Brookhollow", grid_x=30, grid_y=8, size=2),
        "cairn": StructureAnchor(id="cairn", name="Cairnmoor", grid_x=12, grid_y=32),
        "dunmore": StructureAnchor(
            id="dunmore", name="Dunmore Quarry", kind=StructureKind.MINING_QUARRY,
            grid_x=33, grid_y=30, size=2,
        ),
    }


@pytest.fixture
def network(grid):
    """Create an empty road network."""
    return RoadNetwork(grid, seed=1234)


class TestDeriveRoadSeed:
    """Tests for per-road seed derivation."""

    def test_deterministic(self, towns):
        """Test identical inputs give identical seeds."""
        a, b = towns["ashford"], towns["brook"]

        assert derive_road_seed(7, a, b) == derive_road_seed(7, a, b)

    def test_depends_on_inputs(self, towns):
        """Test the base seed and endpoint order change the seed."""
        a, b = towns["ashford"], towns["brook"]

        assert derive_road_seed(7, a, b) != derive_road_seed(8, a, b)
        assert derive_road_seed(7, a, b) != derive_road_seed(7, b, a)

    def test_fits_in_64_bits(self, towns):
        """Test seeds are unsigned 64-bit integers."""
        seed = derive_road_seed(2**40, towns["cairn"], towns["dunmore"])

        assert 0 <= seed < 2**64


class TestRoadNetwork:
    """Tests for RoadNetwork registration and queries."""

    def test_connect_structures(self, network, towns):
        """Test connecting two structures registers road and nodes."""
        road = network.connect_structures("North Road", towns["ashford"], towns["brook"])

        assert road.length > 0
        assert network.roads == [road]
        assert set(network.structures) == {towns["ashford"], towns["brook"]}
        assert network.graph.has_edge(towns["ashford"], towns["brook"])
        assert network.graph[towns["ashford"]][towns["brook"]]["weight"] == road.length

    def test_same_seed_same_network(self, grid, towns):
        """Test two networks with one seed build identical roads."""
        first = RoadNetwork(grid, seed=9).connect_structures("r", towns["ashford"], towns["cairn"])
        second = RoadNetwork(grid, seed=9).connect_structures("r", towns["ashford"], towns["cairn"])

        assert first.path == second.path

    def test_road_independent_of_build_order(self, grid, towns):
        """Test a road's shape does not depend on roads built before it."""
        solo = RoadNetwork(grid, seed=5)
        busy = RoadNetwork(grid, seed=5)
        busy.connect_structures("other", towns["brook"], towns["dunmore"])

        a = solo.connect_structures("r", towns["ashford"], towns["cairn"])
        b = busy.connect_structures("r", towns["ashford"], towns["cairn"])

        assert a.path == b.path

    def test_add_structure_idempotent(self, network, towns):
        """Test registering a structure twice keeps one node."""
        network.add_structure(towns["cairn"])
        network.add_structure(towns["cairn"])

        assert network.structures == [towns["cairn"]]

    def test_get_road_between_either_direction(self, network, towns):
        """Test lookup ignores endpoint order."""
        road = network.connect_structures("r", towns["ashford"], towns["brook"])

        assert network.get_road_between(towns["ashford"], towns["brook"]) is road
        assert network.get_road_between(towns["brook"], towns["ashford"]) is road
        assert network.get_road_between(towns["ashford"], towns["cairn"]) is None

    def test_get_roads_from(self, network, towns):
        """Test listing roads touching a structure."""
        r1 = network.connect_structures("r1", towns["ashford"], towns["brook"])
        r2 = network.connect_structures("r2", towns["cairn"], towns["ashford"])
        network.connect_structures("r3", towns["brook"], towns["dunmore"])

        assert network.get_roads_from(towns["ashford"]) == [r1, r2]

    def test_road_tiles_and_quality(self, network, towns):
        """Test tile lookups report the road's surface class."""
        road = network.connect_structures(
            "r", towns["ashford"], towns["brook"], quality=RoadQuality.PAVED
        )
        x, y = road.path[len(road.path) // 2]

        assert network.is_road_tile(x, y)
        assert network.road_at(x, y) is road
        assert network.road_quality_at(x, y) is RoadQuality.PAVED
        assert not network.is_road_tile(0, 0)
        assert network.road_quality_at(0, 0) is None

    def test_quality_reassigned_later(self, network, towns):
        """Test a surface class set after construction is visible on tiles."""
        road = network.connect_structures("r", towns["ashford"], towns["brook"])
        x, y = road.path[0]

        assert network.road_quality_at(x, y) is None
        road.set_quality(RoadQuality.DIRT)
        assert network.road_quality_at(x, y) is RoadQuality.DIRT

    def test_connectivity(self, network, towns):
        """Test connectivity and grouping of structures."""
        assert network.is_connected()

        network.connect_structures("r1", towns["ashford"], towns["brook"])
        network.connect_structures("r2", towns["cairn"], towns["dunmore"])

        assert not network.is_connected()
        groups = network.connected_groups()
        assert len(groups) == 2

        network.connect_structures("r3", towns["brook"], towns["dunmore"])
        assert network.is_connected()

    def test_same_structure_rejected(self, network, towns):
        """Test a road from a structure to itself is a validation error."""
        with pytest.raises(ValidationError, match="two different structures"):
            network.connect_structures("loop", towns["cairn"], towns["cairn"])

        assert network.roads == []

    def test_defaults_from_settings(self, grid):
        """Test seed and search configuration fall back to settings."""
        network = RoadNetwork(grid)

        assert network.seed == 0
        assert network.pathfinder_config.turn_penalty == 3

    def test_truncated_road_is_registered(self, grid, towns):
        """Test a road that cannot reach its target is kept, not dropped."""
        walled = grid.with_blocked([(20, y) for y in range(40)])
        network = RoadNetwork(walled, seed=3)

        road = network.connect_structures("r", towns["ashford"], towns["brook"])

        assert not road.is_complete
        assert network.roads == [road]
        assert network.get_network_stats()["truncated_roads"] == 1


class TestConnectMany:
    """Tests for concurrent road construction."""

    def test_matches_sequential_build(self, grid, towns):
        """Test concurrent builds produce the same roads as sequential ones."""
        requests = [
            RoadRequest("r1", towns["ashford"], towns["brook"]),
            RoadRequest("r2", towns["brook"], towns["dunmore"], RoadQuality.GRAVEL),
            RoadRequest("r3", towns["dunmore"], towns["cairn"]),
            RoadRequest("r4", towns["cairn"], towns["ashford"]),
        ]

        sequential = RoadNetwork(grid, seed=77)
        expected = [
            sequential.connect_structures(r.name, r.start, r.end, r.quality) for r in requests
        ]

        concurrent = RoadNetwork(grid, seed=77)
        roads = concurrent.connect_many(requests, max_workers=4)

        assert [r.name for r in roads] == ["r1", "r2", "r3", "r4"]
        assert [r.path for r in roads] == [r.path for r in expected]
        assert roads[1].quality is RoadQuality.GRAVEL
        assert concurrent.roads == roads
        assert concurrent.is_connected()

    def test_empty_request_list(self, network):
        """Test no requests builds nothing."""
        assert network.connect_many([]) == []
        assert network.roads == []


class TestNetworkExport:
    """Tests for statistics and GeoJSON export."""

    def test_network_stats(self, network, towns):
        """Test statistics summarize the registered roads."""
        r1 = network.connect_structures(
            "r1", towns["ashford"], towns["brook"], quality=RoadQuality.ASPHALT
        )
        r2 = network.connect_structures("r2", towns["brook"], towns["dunmore"])

        stats = network.get_network_stats()

        assert stats["total_roads"] == 2
        assert stats["total_structures"] == 3
        assert stats["total_length"] == r1.length + r2.length
        assert stats["connected_groups"] == 1
        assert stats["roads_by_quality"] == {"asphalt": 1, "unclassified": 1}
        assert stats["truncated_roads"] == 0

    def test_empty_network_stats(self, network):
        """Test statistics of an empty network."""
        stats = network.get_network_stats()

        assert stats["total_roads"] == 0
        assert stats["avg_length"] == 0.0
        assert stats["connected_groups"] == 0

    def test_export_to_geojson(self, network, towns):
        """Test roads export as LineString features."""
        road = network.connect_structures("r1", towns["ashford"], towns["brook"])

        geojson = network.export_to_geojson()

        assert geojson["type"] == "FeatureCollection"
        assert len(geojson["features"]) == 1
        feature = geojson["features"][0]
        assert feature["geometry"]["type"] == "LineString"
        assert len(feature["geometry"]["coordinates"]) == road.length
        assert feature["properties"]["name"] == "r1"
        assert feature["properties"]["feature_type"] == "road"
        assert "path" not in feature["properties"]

"""
Tests for terrain grids.
"""

import numpy as np
import pytest

from roadgen.core.errors import TerrainGridError
from roadgen.core.roads.grid import TerrainGrid, TerrainOracle, clamp_point, in_bounds
from roadgen.models.terrain import TerrainType


class TestTerrainGrid:
    """Tests for TerrainGrid construction and queries."""

    def test_uniform_grid(self):
        """Test creating an all-passable grid."""
        grid = TerrainGrid.uniform(20, 10, cost=1.5)

        assert grid.width == 20
        assert grid.height == 10
        assert grid.shape == (10, 20)
        assert grid.is_passable(19, 9)
        assert grid.movement_cost(3, 4) == 1.5

    def test_arrays_indexed_y_then_x(self):
        """Test arrays are (height, width) and indexed [y, x]."""
        passable = np.ones((5, 8), dtype=bool)
        passable[1, 6] = False
        cost = np.ones((5, 8))
        cost[2, 3] = 2.5

        grid = TerrainGrid.from_arrays(passable, cost)

        assert grid.width == 8
        assert grid.height == 5
        assert not grid.is_passable(6, 1)
        assert grid.is_passable(1, 6) is False  # y=6 is off-grid
        assert grid.movement_cost(3, 2) == 2.5

    def test_off_grid_cells_not_passable(self):
        """Test off-grid queries report impassable."""
        grid = TerrainGrid.uniform(5, 5)

        assert not grid.is_passable(-1, 0)
        assert not grid.is_passable(0, 5)
        assert not grid.is_passable(5, 0)

    def test_from_terrain_types(self):
        """Test building a grid from terrain classes."""
        rows = [
            [TerrainType.GRASS, TerrainType.OCEAN, TerrainType.FOREST],
            [TerrainType.BEACH, TerrainType.MOUNTAIN, TerrainType.HILLS],
        ]

        grid = TerrainGrid.from_terrain_types(rows)

        assert grid.width == 3
        assert grid.height == 2
        assert grid.is_passable(0, 0)
        assert not grid.is_passable(1, 0)
        assert grid.is_passable(2, 0)
        assert not grid.is_passable(0, 1)
        assert not grid.is_passable(1, 1)
        assert grid.movement_cost(2, 0) == 1.5
        assert grid.movement_cost(2, 1) == 1.4

    def test_with_blocked_returns_copy(self):
        """Test blocking cells leaves the original grid untouched."""
        grid = TerrainGrid.uniform(6, 6)

        blocked = grid.with_blocked([(2, 3), (4, 4), (99, 99)])

        assert not blocked.is_passable(2, 3)
        assert not blocked.is_passable(4, 4)
        assert grid.is_passable(2, 3)

    def test_arrays_are_read_only(self):
        """Test the grid cannot be modified through its mask."""
        grid = TerrainGrid.uniform(4, 4)

        with pytest.raises(ValueError):
            grid.passable_mask[0, 0] = False

    def test_grid_satisfies_oracle_protocol(self):
        """Test TerrainGrid is a TerrainOracle."""
        assert isinstance(TerrainGrid.uniform(3, 3), TerrainOracle)


class TestTerrainGridValidation:
    """Tests for grid validation errors."""

    def test_non_positive_dimensions(self):
        """Test uniform grid rejects empty dimensions."""
        with pytest.raises(TerrainGridError, match="dimensions must be positive"):
            TerrainGrid.uniform(0, 10)

    def test_not_two_dimensional(self):
        """Test 1D masks are rejected."""
        with pytest.raises(TerrainGridError):
            TerrainGrid(np.ones(10, dtype=bool), np.ones(10))

    def test_shape_mismatch(self):
        """Test mismatched mask and cost arrays are rejected."""
        with pytest.raises(TerrainGridError, match="does not match"):
            TerrainGrid(np.ones((4, 4), dtype=bool), np.ones((4, 5)))

    def test_negative_cost(self):
        """Test negative movement costs are rejected."""
        cost = np.ones((3, 3))
        cost[1, 1] = -0.5

        with pytest.raises(TerrainGridError, match="non-negative"):
            TerrainGrid(np.ones((3, 3), dtype=bool), cost)

    def test_ragged_terrain_rows(self):
        """Test terrain rows of different lengths are rejected."""
        rows = [[TerrainType.GRASS, TerrainType.GRASS], [TerrainType.GRASS]]

        with pytest.raises(TerrainGridError, match="same length"):
            TerrainGrid.from_terrain_types(rows)

    def test_error_details_include_shape(self):
        """Test grid errors carry the offending shape."""
        with pytest.raises(TerrainGridError) as exc_info:
            TerrainGrid(np.ones((2, 2), dtype=bool), np.ones((3, 3)))

        assert exc_info.value.details["shape"] == [3, 3]
        assert exc_info.value.error_code == "TERRAIN_GRID_ERROR"


class TestBoundsHelpers:
    """Tests for bounds and clamping helpers."""

    def test_in_bounds_with_margin(self):
        """Test the margin ring is excluded."""
        grid = TerrainGrid.uniform(10, 10)

        assert in_bounds(grid, 0, 0)
        assert not in_bounds(grid, 0, 0, margin=1)
        assert in_bounds(grid, 1, 8, margin=1)
        assert not in_bounds(grid, 9, 5, margin=1)

    def test_clamp_point(self):
        """Test clamping keeps a one-cell margin."""
        grid = TerrainGrid.uniform(10, 8)

        assert clamp_point(grid, -5, 20) == (1, 6)
        assert clamp_point(grid, 4, 3) == (4, 3)
        assert clamp_point(grid, 12, 0) == (8, 1)

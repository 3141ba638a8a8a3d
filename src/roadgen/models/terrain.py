"""
Terrain classes of the world map.

Each terrain type carries a display name, a movement cost multiplier and a
buildable flag. Road generation only reads the two derived properties
``is_passable`` and ``movement_cost``.
"""

from enum import Enum
from typing import Any, Dict


class TerrainType(str, Enum):
    """Terrain classification with traversal properties."""

    # Water bodies
    DEEP_OCEAN = "deep_ocean"
    OCEAN = "ocean"
    SHALLOW_WATER = "shallow_water"

    # Coastal
    BEACH = "beach"
    REEF = "reef"

    # Lowlands
    GRASS = "grass"
    PLAINS = "plains"
    MEADOW = "meadow"

    # Forests
    FOREST = "forest"
    DENSE_FOREST = "dense_forest"
    TAIGA = "taiga"
    JUNGLE = "jungle"

    # Wetlands
    SWAMP = "swamp"
    MARSH = "marsh"

    # Arid
    DESERT = "desert"
    DUNES = "dunes"
    SAVANNA = "savanna"
    SCRUBLAND = "scrubland"

    # Highlands
    HILLS = "hills"
    ROCKY_HILLS = "rocky_hills"
    MOUNTAIN = "mountain"
    MOUNTAIN_PEAK = "mountain_peak"
    VOLCANO = "volcano"

    # Cold
    TUNDRA = "tundra"
    SNOW = "snow"
    ICE = "ice"
    GLACIER = "glacier"

    # Special
    CLIFF = "cliff"
    CANYON = "canyon"
    LAVA = "lava"

    @property
    def display_name(self) -> str:
        """Human-readable terrain name."""
        return _PROPERTIES[self][0]

    @property
    def movement_cost(self) -> float:
        """Traversal cost multiplier (0.0 for untraversable terrain)."""
        return _PROPERTIES[self][1]

    @property
    def buildable(self) -> bool:
        """Whether structures and roads may be built on this terrain."""
        return _PROPERTIES[self][2]

    @property
    def is_water(self) -> bool:
        """Whether the terrain is open water or reef."""
        return self in _WATER

    @property
    def is_passable(self) -> bool:
        """Whether a road may cross this terrain."""
        return not self.is_water and self is not TerrainType.BEACH and self.buildable

    def to_dict(self) -> Dict[str, Any]:
        """Convert terrain type to dictionary."""
        return {
            "type": self.value,
            "display_name": self.display_name,
            "movement_cost": self.movement_cost,
            "buildable": self.buildable,
            "passable": self.is_passable,
        }


# (display name, movement cost, buildable)
_PROPERTIES = {
    TerrainType.DEEP_OCEAN: ("Deep Ocean", 0.0, False),
    TerrainType.OCEAN: ("Ocean", 0.0, False),
    TerrainType.SHALLOW_WATER: ("Shallow Water", 0.0, False),
    TerrainType.BEACH: ("Beach", 1.2, True),
    TerrainType.REEF: ("Coral Reef", 0.0, False),
    TerrainType.GRASS: ("Grassland", 1.0, True),
    TerrainType.PLAINS: ("Plains", 1.0, True),
    TerrainType.MEADOW: ("Meadow", 1.0, True),
    TerrainType.FOREST: ("Forest", 1.5, True),
    TerrainType.DENSE_FOREST: ("Dense Forest", 2.0, True),
    TerrainType.TAIGA: ("Taiga", 1.8, True),
    TerrainType.JUNGLE: ("Jungle", 2.5, True),
    TerrainType.SWAMP: ("Swamp", 2.2, False),
    TerrainType.MARSH: ("Marsh", 2.0, False),
    TerrainType.DESERT: ("Desert", 1.3, True),
    TerrainType.DUNES: ("Sand Dunes", 1.5, True),
    TerrainType.SAVANNA: ("Savanna", 1.1, True),
    TerrainType.SCRUBLAND: ("Scrubland", 1.2, True),
    TerrainType.HILLS: ("Hills", 1.4, True),
    TerrainType.ROCKY_HILLS: ("Rocky Hills", 1.6, True),
    TerrainType.MOUNTAIN: ("Mountain", 3.0, False),
    TerrainType.MOUNTAIN_PEAK: ("Mountain Peak", 0.0, False),
    TerrainType.VOLCANO: ("Volcano", 0.0, False),
    TerrainType.TUNDRA: ("Tundra", 1.4, True),
    TerrainType.SNOW: ("Snow", 1.8, True),
    TerrainType.ICE: ("Ice", 2.5, False),
    TerrainType.GLACIER: ("Glacier", 0.0, False),
    TerrainType.CLIFF: ("Cliff", 0.0, False),
    TerrainType.CANYON: ("Canyon", 0.0, False),
    TerrainType.LAVA: ("Lava", 0.0, False),
}

_WATER = frozenset(
    {
        TerrainType.DEEP_OCEAN,
        TerrainType.OCEAN,
        TerrainType.SHALLOW_WATER,
        TerrainType.REEF,
    }
)

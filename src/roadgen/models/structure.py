"""
Structure anchors that roads connect.

Settlements and work sites are placed by world generation; road generation
only reads their grid position and footprint size.
"""

from enum import Enum
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field


class StructureKind(str, Enum):
    """Kinds of map structures a road can end at."""

    TOWN = "town"
    VILLAGE = "village"
    LUMBER_CAMP = "lumber_camp"
    MINING_QUARRY = "mining_quarry"
    MILLWORKS = "millworks"
    POINT_OF_INTEREST = "point_of_interest"


class StructureAnchor(BaseModel):
    """
    A structure's footprint on the grid.

    Attributes:
        id: Unique structure identifier
        name: Human-readable name
        kind: Kind of structure
        grid_x: Center column
        grid_y: Center row
        size: Footprint width in cells
    """

    id: str = Field(..., description="Unique structure identifier", min_length=1)
    name: str = Field(default="", description="Structure name")
    kind: StructureKind = Field(default=StructureKind.VILLAGE, description="Kind of structure")
    grid_x: int = Field(..., description="Center column", ge=0)
    grid_y: int = Field(..., description="Center row", ge=0)
    size: int = Field(default=1, description="Footprint width in cells", ge=1)

    model_config = ConfigDict(frozen=True)

    @property
    def position(self) -> Tuple[int, int]:
        """Center coordinate as (x, y)."""
        return (self.grid_x, self.grid_y)

    @property
    def half_size(self) -> int:
        """Footprint half-size, never less than one cell."""
        return max(1, self.size // 2)

    def to_dict(self) -> Dict[str, Any]:
        """Convert structure to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "position": list(self.position),
            "size": self.size,
        }

"""
Data models for road generation.
"""

from roadgen.models.road import Road, RoadQuality
from roadgen.models.structure import StructureAnchor, StructureKind
from roadgen.models.terrain import TerrainType

__all__ = [
    "Road",
    "RoadQuality",
    "StructureAnchor",
    "StructureKind",
    "TerrainType",
]

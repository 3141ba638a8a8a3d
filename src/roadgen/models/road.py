"""
Road model produced by road generation.
"""

from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from shapely.geometry import LineString, Point as ShapelyPoint
from shapely.geometry.base import BaseGeometry

from roadgen.models.structure import StructureAnchor

GridPoint = Tuple[int, int]


class RoadQuality(str, Enum):
    """Road surface classes, assigned outside of road generation."""

    ASPHALT = "asphalt"
    PAVED = "paved"
    GRAVEL = "gravel"
    DIRT = "dirt"

    @property
    def display_name(self) -> str:
        """Human-readable surface name."""
        return _QUALITY_PROPERTIES[self][0]

    @property
    def width(self) -> float:
        """Rendered road width in cells."""
        return _QUALITY_PROPERTIES[self][1]


_QUALITY_PROPERTIES = {
    RoadQuality.ASPHALT: ("Asphalt Road", 2.0),
    RoadQuality.PAVED: ("Paved Road", 2.5),
    RoadQuality.GRAVEL: ("Gravel Road", 3.0),
    RoadQuality.DIRT: ("Dirt Road", 3.5),
}


class Road:
    """
    A generated road between two structures.

    The path is fixed at construction; only the quality label may be
    reassigned afterwards.

    Attributes:
        name: Human-readable road name
        start_point: Structure the road starts at
        end_point: Structure the road ends at
        path: Ordered, 4-connected grid coordinates
        quality: Surface class (None until classified)
        is_complete: Whether every planned segment was connected
    """

    __slots__ = ("_name", "_start", "_end", "_path", "_complete", "quality")

    def __init__(
        self,
        name: str,
        start: StructureAnchor,
        end: StructureAnchor,
        path: Iterable[GridPoint],
        quality: Optional[RoadQuality] = None,
        complete: bool = True,
    ):
        self._name = name
        self._start = start
        self._end = end
        self._path: Tuple[GridPoint, ...] = tuple((int(x), int(y)) for x, y in path)
        self._complete = complete
        self.quality = quality

    @property
    def name(self) -> str:
        return self._name

    @property
    def start_point(self) -> StructureAnchor:
        return self._start

    @property
    def end_point(self) -> StructureAnchor:
        return self._end

    @property
    def path(self) -> Tuple[GridPoint, ...]:
        return self._path

    @property
    def length(self) -> int:
        """Number of grid cells the road occupies."""
        return len(self._path)

    @property
    def is_complete(self) -> bool:
        return self._complete

    def set_quality(self, quality: Optional[RoadQuality]) -> None:
        """Assign the surface class."""
        self.quality = quality

    def connects(self, a: StructureAnchor, b: StructureAnchor) -> bool:
        """Whether the road joins ``a`` and ``b`` in either direction."""
        return (self._start == a and self._end == b) or (self._start == b and self._end == a)

    def touches(self, structure: StructureAnchor) -> bool:
        """Whether ``structure`` is one of the road's endpoints."""
        return self._start == structure or self._end == structure

    def get_geometry(self) -> BaseGeometry:
        """
        Get road centerline as a Shapely geometry.

        Returns:
            LineString, a Point for single-cell roads, or an empty LineString
        """
        if not self._path:
            return LineString()
        if len(self._path) == 1:
            return ShapelyPoint(self._path[0])
        return LineString(self._path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert road to dictionary."""
        return {
            "name": self._name,
            "start": self._start.id,
            "end": self._end.id,
            "length": self.length,
            "quality": self.quality.value if self.quality else None,
            "complete": self._complete,
            "path": [list(point) for point in self._path],
        }

    def __repr__(self) -> str:
        return (
            f"Road(name={self._name!r}, start={self._start.id!r}, "
            f"end={self._end.id!r}, length={self.length})"
        )

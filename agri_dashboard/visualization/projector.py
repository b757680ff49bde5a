"""
Geo projector
Equirectangular mapping from a fixed bounding box onto the SVG canvas
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from ..config import settings

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

@dataclass(frozen=True)
class BoundingBox:
    """Geographic extent of the covered territory"""
    min_lng: float
    max_lng: float
    min_lat: float
    max_lat: float

    def __post_init__(self):
        if not (self.min_lng < self.max_lng and self.min_lat < self.max_lat):
            raise ValueError(f"Invalid bounding box: {self}")

class GeoProjector:
    """Stateless lng/lat to pixel projection"""

    def __init__(self, bounds: Optional[BoundingBox] = None,
                 canvas_width: Optional[int] = None, canvas_height: Optional[int] = None):
        config = settings.map_config
        self.bounds = bounds or BoundingBox(
            config["min_lng"], config["max_lng"], config["min_lat"], config["max_lat"]
        )
        self.canvas_width = canvas_width or config["canvas_width"]
        self.canvas_height = canvas_height or config["canvas_height"]

    def project_point(self, lng: float, lat: float) -> Point:
        """Project a coordinate; points outside the box land outside the canvas"""
        b = self.bounds
        x = (lng - b.min_lng) / (b.max_lng - b.min_lng) * self.canvas_width
        # Latitude grows northward, canvas y grows downward
        y = self.canvas_height - (lat - b.min_lat) / (b.max_lat - b.min_lat) * self.canvas_height
        return x, y

    def _ring_to_path(self, ring: Sequence[Sequence[float]]) -> str:
        points = []
        for coord in ring:
            x, y = self.project_point(float(coord[0]), float(coord[1]))
            points.append(f"{x:g},{y:g}")
        if not points:
            raise ValueError("empty ring")
        return f"M {' '.join(points)} Z"

    def geometry_to_path(self, geometry: Any) -> str:
        """
        Convert a Polygon or MultiPolygon to an SVG path descriptor.
        Only exterior rings are drawn. Returns "" when there is nothing to draw.
        """
        if not isinstance(geometry, dict) or not geometry.get("coordinates"):
            return ""

        geometry_type = geometry.get("type")
        coordinates = geometry["coordinates"]

        try:
            if geometry_type == "Polygon":
                return self._ring_to_path(coordinates[0])
            if geometry_type == "MultiPolygon":
                return " ".join(self._ring_to_path(polygon[0]) for polygon in coordinates)
        except (TypeError, ValueError, IndexError, KeyError) as e:
            logger.debug(f"Skipping malformed {geometry_type} geometry: {e}")

        return ""

    def exterior_ring(self, geometry: Any) -> Optional[List[Sequence[float]]]:
        """First exterior ring of a Polygon/MultiPolygon, if any"""
        if not isinstance(geometry, dict):
            return None
        try:
            if geometry.get("type") == "Polygon":
                return list(geometry["coordinates"][0])
            if geometry.get("type") == "MultiPolygon":
                return list(geometry["coordinates"][0][0])
        except (TypeError, IndexError, KeyError):
            return None
        return None

    def ring_centroid(self, geometry: Any) -> Optional[Point]:
        """Projected vertex average of the first exterior ring"""
        ring = self.exterior_ring(geometry)
        if not ring:
            return None
        try:
            lng = sum(float(c[0]) for c in ring) / len(ring)
            lat = sum(float(c[1]) for c in ring) / len(ring)
        except (TypeError, ValueError, IndexError):
            return None
        return self.project_point(lng, lat)

    def project_geometry_point(self, geometry: Any) -> Optional[Point]:
        """Project a GeoJSON Point (stations, land markers)"""
        if not isinstance(geometry, dict) or geometry.get("type") != "Point":
            return None
        try:
            lng, lat = geometry["coordinates"][:2]
            return self.project_point(float(lng), float(lat))
        except (TypeError, ValueError, KeyError):
            return None

"""
Map control capability handed to the area selection form.
The form never reaches for a global map handle; it only talks to the
object it was constructed with.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple


@dataclass
class DrawnShape:
    kind: str
    coordinates: List[Tuple[float, float]]  # (lat, lon)
    geojson: Dict[str, Any] = field(default_factory=dict)

    @property
    def geometry(self) -> Dict[str, Any]:
        return self.geojson.get("geometry") or {}


def _point_pair(p: Any) -> Tuple[float, float]:
    if isinstance(p, dict):
        return float(p["lat"]), float(p.get("lng", p.get("lon")))
    return float(p[0]), float(p[1])


def shape_from_points(points: Sequence[Tuple[float, float]], kind: str) -> DrawnShape:
    if kind == "marker":
        lat, lon = points[0]
        geometry = {"type": "Point", "coordinates": [lon, lat]}
    else:
        ring = [[lon, lat] for lat, lon in points]
        ring.append(ring[0])
        geometry = {"type": "Polygon", "coordinates": [ring]}
    return DrawnShape(
        kind=kind,
        coordinates=list(points),
        geojson={"type": "Feature", "properties": {}, "geometry": geometry},
    )


class MapControl:
    def add_marker(self, lat: float, lon: float) -> DrawnShape:
        raise NotImplementedError

    def add_shape_from_coords(self, points: Sequence[Any], kind: str) -> DrawnShape:
        raise NotImplementedError


class GeoJSONMapControl(MapControl):
    """Records every placed shape as a GeoJSON Feature instead of drawing it."""

    def __init__(self):
        self.shapes: List[DrawnShape] = []

    @property
    def last_shape(self):
        return self.shapes[-1] if self.shapes else None

    def add_marker(self, lat: float, lon: float) -> DrawnShape:
        shape = shape_from_points([(float(lat), float(lon))], "marker")
        self.shapes.append(shape)
        return shape

    def add_shape_from_coords(self, points: Sequence[Any], kind: str) -> DrawnShape:
        if kind not in ("polygon", "rectangle"):
            raise ValueError(f"Unsupported shape kind: {kind}")
        shape = shape_from_points([_point_pair(p) for p in points], kind)
        self.shapes.append(shape)
        return shape

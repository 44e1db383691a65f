# backend/env_indicators/geo_bounds.py
from dataclasses import dataclass
from typing import Dict, Iterable, Sequence, Tuple

from .errors import ValidationError


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon

    def as_dict(self) -> Dict[str, float]:
        return {
            "minLat": self.min_lat,
            "maxLat": self.max_lat,
            "minLon": self.min_lon,
            "maxLon": self.max_lon,
        }


PAKISTAN_BOUNDS = BoundingBox(min_lat=23.5, max_lat=37.1, min_lon=60.9, max_lon=77.5)


def is_inside_pakistan(lat: float, lon: float) -> bool:
    return PAKISTAN_BOUNDS.contains(lat, lon)


def vertex_centroid(points: Sequence[Tuple[float, float]]) -> Tuple[float, float]:
    """
    Reduce a drawn shape to its analysis target.

    The target of a polygon or rectangle is the plain average of its
    vertices, never an area-weighted centroid. A closed ring (last vertex
    repeating the first) is counted once per distinct vertex.
    """
    pts = list(points)
    if len(pts) > 1 and tuple(pts[0]) == tuple(pts[-1]):
        pts = pts[:-1]
    if not pts:
        raise ValidationError("Shape has no vertices.")

    lat = sum(p[0] for p in pts) / len(pts)
    lon = sum(p[1] for p in pts) / len(pts)
    return lat, lon


def ring_to_latlon(ring: Iterable[Sequence[float]]) -> list:
    """GeoJSON rings are [lon, lat]; the analysis side works in (lat, lon)."""
    return [(float(c[1]), float(c[0])) for c in ring]

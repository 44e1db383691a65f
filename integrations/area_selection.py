"""
Area selection form.

Turns one of the dashboard's three input modes into a DrawnShape and the
single point the analysis runs on:

- draw:         a GeoJSON geometry already drawn on the map
- coordinates:  a typed lat/lng pair, placed as a marker
- bbox:         typed north/south/east/west edges, placed as a rectangle

A polygon or rectangle is always analysed at its vertex average.
"""

import logging
from typing import Any, Dict, Tuple

from env_indicators.errors import ValidationError
from env_indicators.geo_bounds import ring_to_latlon, vertex_centroid

from .map_control import DrawnShape, MapControl

logger = logging.getLogger(__name__)

NO_AREA_MESSAGE = "No area selected. Please draw a shape on the map or enter coordinates."
POLYGON_KINDS = ("polygon", "rectangle")


def _to_float(val: Any, name: str) -> float:
    if val is None or val == "" or isinstance(val, bool):
        raise ValidationError(NO_AREA_MESSAGE)
    try:
        return float(val)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid value for {name}: {val!r}")


class AreaSelectionForm:
    def __init__(self, map_control: MapControl):
        self.map_control = map_control

    def resolve(self, selection: Dict[str, Any]) -> DrawnShape:
        if not isinstance(selection, dict):
            raise ValidationError(NO_AREA_MESSAGE)

        mode = selection.get("mode", "draw")
        if mode == "draw":
            return self._from_drawn(selection.get("shape") or selection.get("geometry"))
        if mode == "coordinates":
            lat = _to_float(selection.get("lat"), "lat")
            lng = _to_float(selection.get("lng", selection.get("lon")), "lng")
            return self.map_control.add_marker(lat, lng)
        if mode == "bbox":
            north = _to_float(selection.get("north"), "north")
            south = _to_float(selection.get("south"), "south")
            east = _to_float(selection.get("east"), "east")
            west = _to_float(selection.get("west"), "west")
            corners = [
                {"lat": north, "lng": west},
                {"lat": north, "lng": east},
                {"lat": south, "lng": east},
                {"lat": south, "lng": west},
            ]
            return self.map_control.add_shape_from_coords(corners, "rectangle")

        raise ValidationError(f"Unknown selection mode: {mode}")

    @staticmethod
    def _from_drawn(shape: Any) -> DrawnShape:
        if not isinstance(shape, dict):
            raise ValidationError(NO_AREA_MESSAGE)

        # Accept a Feature or a bare geometry
        geometry = shape.get("geometry") if shape.get("type") == "Feature" else shape
        gtype = (geometry or {}).get("type")
        coords = (geometry or {}).get("coordinates")

        try:
            if gtype == "Point":
                points = [(float(coords[1]), float(coords[0]))]
                kind = "marker"
            elif gtype == "Polygon":
                points = ring_to_latlon(coords[0])
                kind = shape.get("kind") if shape.get("kind") in POLYGON_KINDS else "polygon"
            else:
                raise ValidationError(f"Unsupported geometry type: {gtype}")
        except (TypeError, IndexError, KeyError, ValueError, AttributeError):
            raise ValidationError("Malformed shape coordinates.")

        if not points:
            raise ValidationError("Malformed shape coordinates.")

        feature = {"type": "Feature", "properties": {}, "geometry": geometry}
        return DrawnShape(kind=kind, coordinates=points, geojson=feature)

    @staticmethod
    def analysis_target(shape: DrawnShape) -> Tuple[float, float]:
        if shape.kind == "marker":
            return shape.coordinates[0]
        lat, lon = vertex_centroid(shape.coordinates)
        logger.info(f"{shape.kind} reduced to vertex average {lat:.4f},{lon:.4f}")
        return lat, lon

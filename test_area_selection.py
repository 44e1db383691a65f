#!/usr/bin/env python3
"""
Test script for the area selection form and the GeoJSON map control
"""

import sys
import os

import pytest

# Add the backend directory to the path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from env_indicators.errors import ValidationError
from integrations import AreaSelectionForm, GeoJSONMapControl
from integrations.area_selection import NO_AREA_MESSAGE


@pytest.fixture
def form():
    return AreaSelectionForm(GeoJSONMapControl())


def test_coordinates_place_a_marker(form):
    shape = form.resolve({"mode": "coordinates", "lat": 31.5, "lng": 74.3})
    assert shape.kind == "marker"
    assert shape.geometry == {"type": "Point", "coordinates": [74.3, 31.5]}
    assert form.map_control.last_shape is shape
    assert form.analysis_target(shape) == (31.5, 74.3)


def test_coordinates_accept_lon_and_numeric_strings(form):
    shape = form.resolve({"mode": "coordinates", "lat": "30.2", "lon": "66.9"})
    assert form.analysis_target(shape) == (30.2, 66.9)


def test_bbox_becomes_rectangle(form):
    shape = form.resolve({"mode": "bbox", "north": 32, "south": 30, "east": 74, "west": 72})
    assert shape.kind == "rectangle"
    assert len(shape.coordinates) == 4
    ring = shape.geometry["coordinates"][0]
    assert len(ring) == 5
    assert ring[0] == ring[-1]
    assert form.analysis_target(shape) == (31.0, 73.0)


def test_drawn_polygon_feature(form):
    feature = {
        "type": "Feature",
        "properties": {},
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[72, 30], [74, 30], [74, 32], [72, 32], [72, 30]]],
        },
    }
    shape = form.resolve({"mode": "draw", "shape": feature})
    assert shape.kind == "polygon"
    assert shape.geometry["type"] == "Polygon"
    assert form.analysis_target(shape) == (31.0, 73.0)


def test_drawn_bare_point(form):
    shape = form.resolve({"geometry": {"type": "Point", "coordinates": [74.3, 31.5]}})
    assert shape.kind == "marker"
    assert form.analysis_target(shape) == (31.5, 74.3)


def test_missing_selection(form):
    with pytest.raises(ValidationError) as exc:
        form.resolve(None)
    assert exc.value.message == NO_AREA_MESSAGE

    with pytest.raises(ValidationError):
        form.resolve({"mode": "draw"})


def test_blank_coordinate_field(form):
    with pytest.raises(ValidationError) as exc:
        form.resolve({"mode": "coordinates", "lat": "", "lng": 74.3})
    assert exc.value.message == NO_AREA_MESSAGE


def test_non_numeric_coordinate(form):
    with pytest.raises(ValidationError):
        form.resolve({"mode": "bbox", "north": "abc", "south": 30, "east": 74, "west": 72})


def test_unsupported_geometry_and_mode(form):
    with pytest.raises(ValidationError):
        form.resolve({"mode": "draw", "shape": {"type": "LineString", "coordinates": [[70, 30], [71, 31]]}})
    with pytest.raises(ValidationError):
        form.resolve({"mode": "draw", "shape": {"type": "Polygon", "coordinates": []}})
    with pytest.raises(ValidationError):
        form.resolve({"mode": "circle"})


def test_malformed_polygon_coordinates(form):
    with pytest.raises(ValidationError) as exc:
        form.resolve({"mode": "draw", "shape": {"type": "Polygon", "coordinates": {"a": 1}}})
    assert exc.value.message == "Malformed shape coordinates."

    with pytest.raises(ValidationError) as exc:
        form.resolve({"mode": "draw", "shape": {"type": "Polygon", "coordinates": [[{"lat": 30, "lng": 70}]]}})
    assert exc.value.message == "Malformed shape coordinates."


def test_drawn_polygon_kind_is_restricted(form):
    ring = [[72, 30], [74, 30], [74, 32], [72, 32], [72, 30]]
    rect = form.resolve({"mode": "draw", "shape": {"type": "Polygon", "coordinates": [ring], "kind": "rectangle"}})
    assert rect.kind == "rectangle"
    odd = form.resolve({"mode": "draw", "shape": {"type": "Polygon", "coordinates": [ring], "kind": "<script>"}})
    assert odd.kind == "polygon"
    marker = form.resolve({"mode": "draw", "shape": {"type": "Polygon", "coordinates": [ring], "kind": "marker"}})
    assert marker.kind == "polygon"


def test_map_control_rejects_unknown_kind():
    with pytest.raises(ValueError):
        GeoJSONMapControl().add_shape_from_coords([(30, 70), (31, 71), (30, 71)], "circle")


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))

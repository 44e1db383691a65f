#!/usr/bin/env python3
"""
Test script for CSV / GeoJSON / PDF exports
"""

import sys
import os
import json

import pytest

# Add the backend directory to the path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from env_indicators import IndicatorService
from env_indicators.errors import InternalError, UnsupportedExportError, ValidationError
from env_indicators.parameters import NDVI
from reports.exporters import export_analysis, export_filename, to_csv

SERIES = [
    {"date": "2019-01-01", "value": 0.5, "min": 0.47, "max": 0.53},
    {"date": "2019-02-01", "value": 0.6, "min": 0.57, "max": 0.63},
]


def test_csv_layout():
    assert to_csv(SERIES) == "Date,Value\n2019-01-01,0.5\n2019-02-01,0.6"


def test_filename_from_dates_or_series():
    assert export_filename("ndvi", SERIES, "2019-01-01", "2025-12-31", "csv") == "ndvi_20190101_20251231.csv"
    assert export_filename("no2", SERIES, ext="geojson") == "no2_20190101_20190201.geojson"


def test_csv_export():
    buffer, filename, mimetype = export_analysis("csv", {"parameter": "ndvi", "timeSeries": SERIES})
    assert mimetype == "text/csv"
    assert filename == "ndvi_20190101_20190201.csv"
    assert buffer.getvalue().decode("utf-8").startswith("Date,Value\n")


def test_geojson_export_defaults_geometry():
    data = {"parameter": "ndvi", "timeSeries": SERIES, "stats": {"mean": 0.55}}
    buffer, filename, _ = export_analysis("GeoJSON", data)
    doc = json.loads(buffer.getvalue())
    assert filename.endswith(".geojson")
    assert doc["type"] == "FeatureCollection"
    feature = doc["features"][0]
    assert feature["geometry"] == {"type": "Point", "coordinates": [0, 0]}
    assert feature["properties"]["parameter"] == "ndvi"
    assert feature["properties"]["stats"] == {"mean": 0.55}
    assert len(feature["properties"]["timeSeries"]) == 2


def test_geojson_export_unwraps_feature():
    polygon = {"type": "Polygon", "coordinates": [[[72, 30], [74, 30], [74, 32], [72, 30]]]}
    data = {"parameter": "ndvi", "timeSeries": SERIES, "geometry": {"type": "Feature", "geometry": polygon}}
    buffer, _, _ = export_analysis("geojson", data)
    assert json.loads(buffer.getvalue())["features"][0]["geometry"] == polygon


def test_shapefile_not_supported():
    with pytest.raises(UnsupportedExportError) as exc:
        export_analysis("shapefile", {"parameter": "ndvi", "timeSeries": SERIES})
    assert exc.value.status_code == 501


def test_rejects_unknown_format_and_empty_analysis():
    with pytest.raises(ValidationError):
        export_analysis("xlsx", {"parameter": "ndvi", "timeSeries": SERIES})
    with pytest.raises(ValidationError):
        export_analysis("csv", {"parameter": "ndvi"})
    with pytest.raises(ValidationError):
        export_analysis("csv", {"timeSeries": SERIES})


def test_rejects_malformed_series_points():
    for bad in ([{"value": 1}], [{"date": "2019-01-01"}], ["x"], [None]):
        with pytest.raises(ValidationError) as exc:
            export_analysis("csv", {"parameter": "ndvi", "timeSeries": bad})
        assert exc.value.message == "Malformed timeSeries."


def test_pdf_report():
    result = IndicatorService.analyze_location(NDVI, 31.5204, 74.3587, 2019, 2020)
    result["parameter"] = "ndvi"
    buffer, filename, mimetype = export_analysis("pdf", result)
    assert mimetype == "application/pdf"
    assert filename == "ndvi_20190101_20201201.pdf"
    assert buffer.getvalue().startswith(b"%PDF")


def test_pdf_failure_is_internal_error(monkeypatch):
    import reports.pdf_generator as pdf_generator

    def broken(data):
        raise RuntimeError("no fonts")

    monkeypatch.setattr(pdf_generator, "generate_analysis_report", broken)
    with pytest.raises(InternalError) as exc:
        export_analysis("pdf", {"parameter": "ndvi", "timeSeries": SERIES})
    assert exc.value.status_code == 500
    assert "no fonts" in exc.value.message


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))

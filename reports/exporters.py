import csv
import io
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from env_indicators.errors import InternalError, UnsupportedExportError, ValidationError

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "geojson", "pdf", "shapefile")

DEFAULT_GEOMETRY = {"type": "Point", "coordinates": [0, 0]}


def _compact_date(value: Optional[str], fallback: Optional[str]) -> str:
    for candidate in (value, fallback):
        if not candidate:
            continue
        try:
            return datetime.strptime(str(candidate)[:10], "%Y-%m-%d").strftime("%Y%m%d")
        except ValueError:
            continue
    return "undated"


def export_filename(parameter_id: str, time_series: List[Dict], start_date=None, end_date=None, ext="csv") -> str:
    first = time_series[0]["date"] if time_series else None
    last = time_series[-1]["date"] if time_series else None
    return f"{parameter_id}_{_compact_date(start_date, first)}_{_compact_date(end_date, last)}.{ext}"


def to_csv(time_series: List[Dict]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["Date", "Value"])
    for point in time_series:
        writer.writerow([point["date"], point["value"]])
    return buffer.getvalue().rstrip("\n")


def to_geojson(parameter_id: str, stats: Dict, time_series: List[Dict], geometry: Optional[Dict] = None) -> Dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {
                    "parameter": parameter_id,
                    "stats": stats,
                    "timeSeries": time_series,
                },
                "geometry": geometry or DEFAULT_GEOMETRY,
            }
        ],
    }


def export_analysis(format_id: str, data: Dict[str, Any]) -> Tuple[io.BytesIO, str, str]:
    """
    Render a computed analysis for download.
    Returns (buffer, filename, mimetype).
    """
    format_id = (format_id or "").lower()
    if format_id not in EXPORT_FORMATS:
        raise ValidationError(f"Unknown export format: {format_id}")
    if format_id == "shapefile":
        raise UnsupportedExportError("Shapefile export requires server-side processing. Coming soon!")

    parameter_id = data.get("parameter")
    time_series = data.get("timeSeries")
    if not parameter_id or not isinstance(time_series, list):
        raise ValidationError("Nothing to export. Run an analysis first.")
    if not all(isinstance(p, dict) and "date" in p and "value" in p for p in time_series):
        raise ValidationError("Malformed timeSeries.")

    geometry = data.get("geometry")
    if isinstance(geometry, dict) and geometry.get("type") == "Feature":
        geometry = geometry.get("geometry")

    name_args = (parameter_id, time_series, data.get("startDate"), data.get("endDate"))

    if format_id == "csv":
        content = to_csv(time_series).encode("utf-8")
        return io.BytesIO(content), export_filename(*name_args, ext="csv"), "text/csv"

    if format_id == "geojson":
        doc = to_geojson(parameter_id, data.get("stats") or {}, time_series, geometry)
        content = json.dumps(doc, indent=2, ensure_ascii=False).encode("utf-8")
        return io.BytesIO(content), export_filename(*name_args, ext="geojson"), "application/geo+json"

    # pdf
    from reports.pdf_generator import generate_analysis_report
    try:
        buffer = generate_analysis_report(data)
    except Exception as e:
        logger.exception("PDF report generation failed")
        raise InternalError(f"Report generation failed: {e}")
    return buffer, export_filename(*name_args, ext="pdf"), "application/pdf"

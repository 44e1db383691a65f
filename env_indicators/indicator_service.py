# backend/env_indicators/indicator_service.py
import logging
import math
from typing import Any, Dict, Optional, Tuple

import envirosense_config as config

from .errors import OutOfBoundsError, ValidationError
from .geo_bounds import PAKISTAN_BOUNDS, is_inside_pakistan
from .insights import generate_insights, national_insights
from .parameters import ParameterSpec, get_parameter
from .synthesizer import synthesize, yearly_averages
from .trend_stats import compute_stats, format_stats

logger = logging.getLogger(__name__)

# dates are rendered as four-digit YYYY-MM-01
MIN_YEAR = 1
MAX_YEAR = 9999


def _is_number(val: Any) -> bool:
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        return False
    try:
        return math.isfinite(val)
    except OverflowError:
        # JSON integers can exceed the float range
        return False


def resolve_parameter(key: Any) -> ParameterSpec:
    spec = get_parameter(key) if key is not None else None
    if spec is None:
        raise ValidationError("Please select a valid environmental parameter.")
    return spec


def parse_coordinates(payload: Dict[str, Any]) -> Tuple[float, float]:
    lat = payload.get("lat")
    lon = payload.get("lon")
    if not _is_number(lat) or not _is_number(lon):
        raise ValidationError("Invalid coordinates.")
    lat, lon = float(lat), float(lon)
    ensure_inside_pakistan(lat, lon)
    return lat, lon


def ensure_inside_pakistan(lat: float, lon: float) -> None:
    if not is_inside_pakistan(lat, lon):
        raise OutOfBoundsError("Location outside Pakistan", PAKISTAN_BOUNDS.as_dict())


def _parse_year(val: Any, default: int, name: str) -> int:
    if val is None:
        return default
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise ValidationError(f"{name} must be a whole year.")
    if isinstance(val, float) and not (math.isfinite(val) and val.is_integer()):
        raise ValidationError(f"{name} must be a whole year.")
    year = int(val)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"{name} must be between {MIN_YEAR} and {MAX_YEAR}.")
    return year


def parse_date_range(payload: Optional[Dict[str, Any]]) -> Tuple[int, int]:
    payload = payload or {}
    start = _parse_year(payload.get("startYear"), config.DEFAULT_START_YEAR, "startYear")
    end = _parse_year(payload.get("endYear"), config.DEFAULT_END_YEAR, "endYear")
    if start > end:
        raise ValidationError("startYear must not be after endYear.")
    if end - start + 1 > config.MAX_YEAR_SPAN:
        raise ValidationError(f"Date range may span at most {config.MAX_YEAR_SPAN} years.")
    return start, end


class IndicatorService:
    @staticmethod
    def analyze_location(spec: ParameterSpec, lat: float, lon: float, start_year: int, end_year: int) -> Dict[str, Any]:
        """
        Full single-location analysis: series, statistics, insights and provenance.
        Coordinates must already be validated.
        """
        time_series = synthesize(spec, lat, lon, start_year, end_year)
        stats = compute_stats(time_series)

        logger.info(f"{spec.label} series for {lat:.4f},{lon:.4f} ({start_year}-{end_year}): trend {stats['trend']}")

        return {
            "success": True,
            "location": {"lat": lat, "lon": lon},
            "dateRange": {"startYear": start_year, "endYear": end_year},
            "timeSeries": time_series,
            "stats": format_stats(stats, spec),
            "insights": generate_insights(spec, stats),
            "source": spec.source,
            "satellite": spec.satellite,
        }

    @staticmethod
    def analyze_national(spec: ParameterSpec, start_year: int, end_year: int) -> Dict[str, Any]:
        time_series = synthesize(spec, start_year=start_year, end_year=end_year)
        stats = format_stats(compute_stats(time_series), spec, keys=("mean", "min", "max", "stdDev"))
        stats["peakMonth"] = spec.peak_month
        stats["lowMonth"] = spec.low_month

        return {
            "success": True,
            "country": "Pakistan",
            "dateRange": {"startYear": start_year, "endYear": end_year},
            "nationalTimeSeries": time_series,
            "yearlyAverages": yearly_averages(spec, time_series),
            "stats": stats,
            "insights": national_insights(spec),
            "source": spec.national_source,
            "satellite": spec.satellite,
        }

    @classmethod
    def handle_point_request(cls, spec: ParameterSpec, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise ValidationError("Invalid coordinates.")
        lat, lon = parse_coordinates(payload)
        start_year, end_year = parse_date_range(payload)
        return cls.analyze_location(spec, lat, lon, start_year, end_year)

    @classmethod
    def handle_national_request(cls, spec: ParameterSpec, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        start_year, end_year = parse_date_range(payload if isinstance(payload, dict) else None)
        return cls.analyze_national(spec, start_year, end_year)

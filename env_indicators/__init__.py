"""
EnviroSense indicator engine.
Deterministic synthetic monthly series for NDVI, Aerosol Index, NO₂, SO₂
and CO over Pakistan, plus statistics and insights.
"""

from .errors import (
    EnviroSenseError,
    ValidationError,
    OutOfBoundsError,
    UnsupportedExportError,
    NotFoundError,
    UpstreamError,
    InternalError,
)
from .geo_bounds import PAKISTAN_BOUNDS, is_inside_pakistan, vertex_centroid
from .noise import seeded_random, location_seed
from .regions import RegionCategory, classify_region
from .parameters import PARAMETERS, ParameterSpec, get_parameter
from .synthesizer import synthesize
from .trend_stats import compute_stats
from .insights import generate_insights
from .indicator_service import IndicatorService

__all__ = [
    "EnviroSenseError",
    "ValidationError",
    "OutOfBoundsError",
    "UnsupportedExportError",
    "NotFoundError",
    "UpstreamError",
    "InternalError",
    "PAKISTAN_BOUNDS",
    "is_inside_pakistan",
    "vertex_centroid",
    "seeded_random",
    "location_seed",
    "RegionCategory",
    "classify_region",
    "PARAMETERS",
    "ParameterSpec",
    "get_parameter",
    "synthesize",
    "compute_stats",
    "generate_insights",
    "IndicatorService",
]

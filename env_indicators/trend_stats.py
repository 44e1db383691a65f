"""
Statistics & Trend Engine
Descriptive statistics plus an OLS trend over a monthly series.
"""

from typing import Dict, Iterable, Optional

import numpy as np

STABLE_TREND_THRESHOLD = 2.0  # percent over the whole series


def classify_trend(trend_percent: float, threshold: float = STABLE_TREND_THRESHOLD) -> str:
    if abs(trend_percent) < threshold:
        return "stable"
    return "increasing" if trend_percent > 0 else "decreasing"


def _linear_slope(values: np.ndarray, mean: float) -> float:
    n = values.size
    if n < 2:
        return 0.0
    x = np.arange(n, dtype=float) - (n - 1) / 2
    den = float(np.sum(x ** 2))
    if den == 0:
        return 0.0
    return float(np.sum(x * (values - mean))) / den


def compute_stats(series: Iterable[Dict]) -> Dict:
    """
    Population mean/min/max/stdDev over point values and the trend.

    trendPercent is the fitted change across the series relative to its
    mean. Empty and single-point series report a stable 0% trend.
    """
    values = np.array([float(p["value"]) for p in series], dtype=float)
    n = values.size
    if n == 0:
        return {"mean": 0.0, "min": 0.0, "max": 0.0, "stdDev": 0.0, "trend": "stable", "trendPercent": 0.0}

    mean = float(np.mean(values))
    slope = _linear_slope(values, mean)
    trend_percent = (slope * n / mean) * 100 if mean != 0 else 0.0

    return {
        "mean": mean,
        "min": float(np.min(values)),
        "max": float(np.max(values)),
        "stdDev": float(np.std(values)),
        "trend": classify_trend(trend_percent),
        "trendPercent": trend_percent,
    }


def format_stats(stats: Dict, spec, keys: Optional[Iterable[str]] = None) -> Dict:
    """Round the raw statistics the way responses carry them."""
    keys = keys or ("mean", "min", "max", "stdDev", "trend", "trendPercent")
    out = {}
    for key in keys:
        val = stats[key]
        if key == "trend":
            out[key] = val
        elif key == "trendPercent":
            out[key] = round(val, 1)
        else:
            out[key] = spec.format_value(val)
    return out

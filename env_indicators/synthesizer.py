"""
Time-Series Synthesizer
One generic engine for all five indicators and both query modes.

value = base + seasonal + events + trend * (year - start) + noise,
clamped to the profile's valid range, one point per calendar month.
"""

import math
from typing import Dict, List, Optional, Tuple

from .noise import draw_seed, location_seed, seeded_random
from .parameters import ParameterSpec, RegimeProfile, SynthesisProfile
from .regions import classify_region


def month_angle(month: int) -> float:
    return ((month - 1) / 12) * 2 * math.pi


def seasonal_component(profile: SynthesisProfile, amplitude: float, month: int) -> float:
    theta = month_angle(month)
    return sum(
        amplitude * term.weight * math.sin(term.harmonic * theta + term.phase)
        for term in profile.seasonal_terms
    )


def event_adjustment(profile: SynthesisProfile, base: float, year: int, month: int) -> float:
    return sum(rule.adjustment(base) for rule in profile.events if rule.applies(year, month))


def _uncertainty_width(profile: SynthesisProfile, value: float, seed: int) -> float:
    band = profile.uncertainty
    width = band.width
    if band.jitter:
        width += seeded_random(seed + 1) * band.jitter
    if band.relative:
        width *= value
    return width


def _compose(
    spec: ParameterSpec,
    profile: SynthesisProfile,
    regime: RegimeProfile,
    base_seed: int,
    start_year: int,
    end_year: int,
    with_uncertainty: bool,
) -> List[Dict]:
    series = []
    for year in range(start_year, end_year + 1):
        for month in range(1, 13):
            seed = draw_seed(base_seed, year, month)

            value = (
                regime.base
                + seasonal_component(profile, regime.seasonal_amplitude, month)
                + event_adjustment(profile, regime.base, year, month)
                + regime.trend * (year - start_year)
                + (seeded_random(seed) - 0.5) * regime.noise_span
            )
            value = profile.clamp(value)

            point = {"date": f"{year:04d}-{month:02d}-01", "value": spec.format_value(value)}
            if with_uncertainty and profile.uncertainty is not None:
                width = _uncertainty_width(profile, value, seed)
                point["min"] = spec.format_value(value - width)
                point["max"] = spec.format_value(value + width)
            series.append(point)
    return series


def synthesize(
    spec: ParameterSpec,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    start_year: int = 2019,
    end_year: int = 2025,
) -> List[Dict]:
    """
    Monthly series for one indicator.

    With a coordinate the series is keyed to that location (regional regime,
    location seed, uncertainty band). Without one it is the nation-wide
    aggregate: fixed regime, fixed seed, no per-point bounds.
    """
    if lat is None or lon is None:
        return _compose(
            spec, spec.national, spec.national_regime, spec.national_seed,
            start_year, end_year, with_uncertainty=False,
        )

    regime = spec.regime_for(classify_region(lat, lon, spec.zones))
    return _compose(
        spec, spec.point, regime, location_seed(lat, lon),
        start_year, end_year, with_uncertainty=True,
    )


def yearly_averages(spec: ParameterSpec, series: List[Dict]) -> Dict[str, float]:
    buckets: Dict[str, Tuple[float, int]] = {}
    for point in series:
        year = point["date"][:4]
        total, count = buckets.get(year, (0.0, 0))
        buckets[year] = (total + point["value"], count + 1)
    return {year: spec.format_value(total / count) for year, (total, count) in buckets.items()}

"""
Static descriptors for the five environmental indicators.

Each ParameterSpec carries everything the synthesizer, the statistics
formatting and the parameter catalogue need: base/seasonal/trend tables per
region, event rules, clamp ranges, uncertainty bands and display metadata.
Defined once at import and never mutated.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .regions import (
    AEROSOL_ZONES,
    EMISSION_ZONES,
    NO2_ZONES,
    VEGETATION_ZONES,
    RegionCategory,
    Zone,
)

PI = math.pi


@dataclass(frozen=True)
class SeasonalTerm:
    weight: float
    harmonic: int
    phase: float


@dataclass(frozen=True)
class EventRule:
    """Scripted adjustment for a named historical event."""
    name: str
    years: Tuple[int, ...]
    months: Tuple[int, ...]
    delta: float
    relative: bool = False  # delta is a fraction of the base level

    def applies(self, year: int, month: int) -> bool:
        return year in self.years and month in self.months

    def adjustment(self, base: float) -> float:
        return self.delta * base if self.relative else self.delta


@dataclass(frozen=True)
class UncertaintyBand:
    width: float
    jitter: float = 0.0
    relative: bool = False  # width is a fraction of the value


@dataclass(frozen=True)
class RegimeProfile:
    base: float
    seasonal_amplitude: float
    trend: float = 0.0
    noise_span: float = 0.0


@dataclass(frozen=True)
class SynthesisProfile:
    seasonal_terms: Tuple[SeasonalTerm, ...]
    valid_range: Tuple[Optional[float], Optional[float]]
    events: Tuple[EventRule, ...] = ()
    uncertainty: Optional[UncertaintyBand] = None

    def clamp(self, value: float) -> float:
        lo, hi = self.valid_range
        if lo is not None:
            value = max(lo, value)
        if hi is not None:
            value = min(hi, value)
        return value


@dataclass(frozen=True)
class ParameterSpec:
    id: str
    label: str
    name: str
    unit: str
    description: str
    display_range: Tuple[float, float]
    palette: Tuple[str, ...]
    satellite: str
    source: str
    national_source: str
    endpoint: str
    national_endpoint: str
    value_format: str
    zones: Tuple[Zone, ...]
    regimes: Dict[RegionCategory, RegimeProfile]
    point: SynthesisProfile
    national_regime: RegimeProfile
    national: SynthesisProfile
    national_seed: int
    peak_month: str
    low_month: str
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    def regime_for(self, category: RegionCategory) -> RegimeProfile:
        return self.regimes.get(category, self.regimes[RegionCategory.CENTRAL])

    def format_value(self, value: float) -> float:
        if self.value_format == "exponential":
            return float(f"{value:.4e}")
        return float(f"{value:.4f}")

    def describe(self) -> Dict:
        lo, hi = self.point.valid_range
        return {
            "id": self.id,
            "label": self.label,
            "name": self.name,
            "unit": self.unit,
            "description": self.description,
            "min": self.display_range[0],
            "max": self.display_range[1],
            "validRange": {"min": lo, "max": hi},
            "palette": list(self.palette),
            "satellite": self.satellite,
            "endpoint": self.endpoint,
            "nationalEndpoint": self.national_endpoint,
        }


# --------------------------------------------------
# NDVI: monsoon peak plus post-Rabi harvest shoulder
# --------------------------------------------------
NDVI = ParameterSpec(
    id="ndvi",
    label="NDVI",
    name="Normalized Difference Vegetation Index",
    unit="Index (-1 to 1)",
    description="Measures vegetation health and density using satellite imagery",
    display_range=(-0.2, 0.9),
    palette=("#d73027", "#fc8d59", "#fee08b", "#d9ef8b", "#91cf60", "#1a9850"),
    satellite="MODIS",
    source="MODIS MOD13Q1 (250m resolution)",
    national_source="MODIS MOD13Q1 Aggregated Data",
    endpoint="get-ndvi",
    national_endpoint="get-ndvi-pakistan-range",
    value_format="fixed",
    zones=VEGETATION_ZONES,
    regimes={
        RegionCategory.INDUS_PLAIN: RegimeProfile(0.45, 0.25, 0.005, 0.06),
        RegionCategory.NORTHERN_MOUNTAINS: RegimeProfile(0.55, 0.30, -0.003, 0.06),
        RegionCategory.ARID_WEST: RegimeProfile(0.15, 0.08, -0.002, 0.06),
        RegionCategory.SOUTHERN_MIXED: RegimeProfile(0.30, 0.15, 0.002, 0.06),
        RegionCategory.CENTRAL: RegimeProfile(0.40, 0.20, 0.003, 0.06),
    },
    point=SynthesisProfile(
        seasonal_terms=(SeasonalTerm(0.6, 1, -PI / 2), SeasonalTerm(0.4, 2, PI / 4)),
        valid_range=(-0.1, 0.9),
        uncertainty=UncertaintyBand(width=0.03, jitter=0.02),
    ),
    national_regime=RegimeProfile(0.32, 0.12, 0.002, 0.025),
    national=SynthesisProfile(
        seasonal_terms=(SeasonalTerm(0.7, 1, -PI / 2), SeasonalTerm(0.3, 2, PI / 4)),
        valid_range=(0.1, 0.6),
        events=(
            EventRule("drought", (2019,), tuple(range(1, 13)), -0.04),
            EventRule("drought_monsoon_failure", (2019,), (6, 7, 8, 9), -0.03),
            EventRule("flood_inundation", (2022,), (7, 8, 9, 10), -0.08),
            EventRule("flood_recovery", (2022,), (1, 2, 11, 12), 0.02),
        ),
    ),
    national_seed=42,
    peak_month="August-September (Monsoon)",
    low_month="May-June (Pre-Monsoon)",
    aliases=("NDVI",),
)

# --------------------------------------------------
# AEROSOL INDEX: pre-monsoon dust season
# --------------------------------------------------
AEROSOL = ParameterSpec(
    id="aerosol",
    label="Aerosol Index",
    name="Aerosol Index",
    unit="AI",
    description="Indicates presence of absorbing aerosols like dust and smoke",
    display_range=(-1.0, 5.0),
    palette=("#313695", "#4575b4", "#74add1", "#abd9e9", "#fee090", "#f46d43", "#d73027"),
    satellite="Sentinel-5P",
    source="Sentinel-5P TROPOMI Absorbing Aerosol Index",
    national_source="Sentinel-5P TROPOMI Absorbing Aerosol Index",
    endpoint="get-aerosol-index",
    national_endpoint="get-aerosol-pakistan-range",
    value_format="fixed",
    zones=AEROSOL_ZONES,
    regimes={
        RegionCategory.URBAN_INDUSTRIAL: RegimeProfile(1.8, 0.6, 0.0, 0.4),
        RegionCategory.ARID_WEST: RegimeProfile(2.2, 1.2, 0.0, 0.4),
        RegionCategory.CENTRAL: RegimeProfile(1.0, 0.6, 0.0, 0.4),
    },
    point=SynthesisProfile(
        seasonal_terms=(SeasonalTerm(1.0, 1, -PI / 6),),
        valid_range=(0.0, 5.0),
        uncertainty=UncertaintyBand(width=0.1, jitter=0.1),
    ),
    national_regime=RegimeProfile(1.4, 0.8, 0.0, 0.2),
    national=SynthesisProfile(
        seasonal_terms=(SeasonalTerm(1.0, 1, -PI / 6),),
        valid_range=(0.2, 4.0),
    ),
    national_seed=33,
    peak_month="May-June (Dust Season)",
    low_month="January-February",
    aliases=("Aerosol Index", "aerosol-index", "aerosol_index", "ai"),
)

# --------------------------------------------------
# NO2: winter inversion peak, molecules/cm²
# --------------------------------------------------
NO2_URBAN = 8.5e15
NO2_BACKGROUND = 2.5e15
NO2_NATIONAL = 4.5e15

NO2 = ParameterSpec(
    id="no2",
    label="NO₂",
    name="Nitrogen Dioxide",
    unit="mol/m²",
    description="Air pollutant from combustion, indicates traffic and industrial activity",
    display_range=(0.0, 0.0003),
    palette=("#4575b4", "#91bfdb", "#e0f3f8", "#fee090", "#fc8d59", "#d73027"),
    satellite="Sentinel-5P",
    source="Sentinel-5P TROPOMI NO₂ Column",
    national_source="Sentinel-5P TROPOMI NO₂ Column",
    endpoint="get-no2",
    national_endpoint="get-no2-pakistan-range",
    value_format="exponential",
    zones=NO2_ZONES,
    regimes={
        RegionCategory.URBAN_INDUSTRIAL: RegimeProfile(NO2_URBAN, NO2_URBAN * 0.25, 0.0, NO2_URBAN * 0.15),
        RegionCategory.CENTRAL: RegimeProfile(NO2_BACKGROUND, NO2_BACKGROUND * 0.25, 0.0, NO2_BACKGROUND * 0.15),
    },
    point=SynthesisProfile(
        seasonal_terms=(SeasonalTerm(1.0, 1, PI),),
        valid_range=(1e14, None),
        events=(EventRule("covid_lockdown", (2020,), (3, 4, 5, 6), -0.3, relative=True),),
        uncertainty=UncertaintyBand(width=0.08, relative=True),
    ),
    national_regime=RegimeProfile(NO2_NATIONAL, NO2_NATIONAL * 0.2, 0.0, NO2_NATIONAL * 0.1),
    national=SynthesisProfile(
        seasonal_terms=(SeasonalTerm(1.0, 1, PI),),
        valid_range=(1e14, None),
        events=(EventRule("covid_lockdown", (2020,), (3, 4, 5, 6), -0.25, relative=True),),
    ),
    national_seed=55,
    peak_month="December-January (Winter)",
    low_month="July-August (Monsoon)",
    aliases=("NO2",),
)

# --------------------------------------------------
# SO2: winter fossil-fuel combustion peak
# --------------------------------------------------
SO2 = ParameterSpec(
    id="so2",
    label="SO₂",
    name="Sulfur Dioxide",
    unit="mol/m²",
    description="Gas produced by volcanic activity and industrial processes",
    display_range=(0.0, 0.001),
    palette=("#762a83", "#9970ab", "#c2a5cf", "#e7d4e8", "#d9f0d3", "#a6dba0", "#5aae61"),
    satellite="Sentinel-5P",
    source="Sentinel-5P TROPOMI SO₂ Column",
    national_source="Sentinel-5P TROPOMI SO₂ Column",
    endpoint="get-so2",
    national_endpoint="get-so2-pakistan-range",
    value_format="fixed",
    zones=EMISSION_ZONES,
    regimes={
        RegionCategory.URBAN_INDUSTRIAL: RegimeProfile(0.35, 0.08, 0.0, 0.06),
        RegionCategory.CENTRAL: RegimeProfile(0.12, 0.08, 0.0, 0.06),
    },
    point=SynthesisProfile(
        seasonal_terms=(SeasonalTerm(1.0, 1, PI),),
        valid_range=(0.01, 1.5),
        uncertainty=UncertaintyBand(width=0.02),
    ),
    national_regime=RegimeProfile(0.18, 0.06, 0.0, 0.04),
    national=SynthesisProfile(
        seasonal_terms=(SeasonalTerm(1.0, 1, PI),),
        valid_range=(0.02, 0.8),
    ),
    national_seed=77,
    peak_month="December-January (Winter)",
    low_month="July-August (Monsoon)",
    aliases=("SO2",),
)

# --------------------------------------------------
# CO: winter heating plus Oct-Nov crop burning
# --------------------------------------------------
CO = ParameterSpec(
    id="co",
    label="CO",
    name="Carbon Monoxide",
    unit="mol/m²",
    description="Colorless gas from incomplete combustion",
    display_range=(0.0, 0.05),
    palette=("#2166ac", "#67a9cf", "#d1e5f0", "#fddbc7", "#ef8a62", "#b2182b"),
    satellite="Sentinel-5P",
    source="Sentinel-5P TROPOMI CO Total Column",
    national_source="Sentinel-5P TROPOMI CO Total Column",
    endpoint="get-co",
    national_endpoint="get-co-pakistan-range",
    value_format="fixed",
    zones=EMISSION_ZONES,
    regimes={
        RegionCategory.URBAN_INDUSTRIAL: RegimeProfile(0.042, 0.008, 0.0, 0.005),
        RegionCategory.CENTRAL: RegimeProfile(0.028, 0.008, 0.0, 0.005),
    },
    point=SynthesisProfile(
        seasonal_terms=(SeasonalTerm(1.0, 1, PI), SeasonalTerm(0.5, 2, -PI / 3)),
        valid_range=(0.015, 0.08),
        uncertainty=UncertaintyBand(width=0.002),
    ),
    national_regime=RegimeProfile(0.032, 0.006, 0.0, 0.003),
    national=SynthesisProfile(
        seasonal_terms=(SeasonalTerm(1.0, 1, PI), SeasonalTerm(0.5, 2, -PI / 3)),
        valid_range=(0.018, 0.06),
    ),
    national_seed=99,
    peak_month="November-December (Winter/Crop Burning)",
    low_month="July-August (Monsoon)",
    aliases=("CO",),
)


PARAMETERS: Dict[str, ParameterSpec] = {p.id: p for p in (NDVI, AEROSOL, NO2, SO2, CO)}

_LOOKUP = {}
for _spec in PARAMETERS.values():
    for _key in (_spec.id, _spec.label, _spec.endpoint) + _spec.aliases:
        _LOOKUP[_key.lower()] = _spec


def get_parameter(key: str) -> Optional[ParameterSpec]:
    """Resolve a parameter by id, display label, endpoint name or alias."""
    if not isinstance(key, str):
        return None
    return _LOOKUP.get(key.strip().lower())

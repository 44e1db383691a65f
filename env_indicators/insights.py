from typing import Dict, List

from .parameters import ParameterSpec
from .trend_stats import STABLE_TREND_THRESHOLD

# (mean above, sentence), checked top-down; the fallback covers everything below.
LEVEL_RULES = {
    "ndvi": (
        [
            (0.5, "Healthy vegetation cover detected."),
            (0.3, "Moderate vegetation cover detected."),
            (0.15, "Sparse vegetation, semi-arid conditions."),
        ],
        "Very low vegetation cover, arid region.",
    ),
    "aerosol": (
        [
            (2.0, "High aerosol loading from dust or industrial pollution."),
            (1.0, "Moderate aerosol levels, typical for semi-arid regions."),
        ],
        "Low aerosol index, clean atmospheric conditions.",
    ),
    "no2": (
        [(5e15, "Elevated NO₂ from heavy traffic and industrial activity.")],
        "NO₂ within normal background levels.",
    ),
    "so2": (
        [(0.3, "Elevated SO₂ levels, industrial emissions or power plants nearby.")],
        "SO₂ within normal background levels.",
    ),
    "co": (
        [(0.04, "Elevated CO levels, likely urban/industrial emissions or biomass burning.")],
        "CO levels within normal background range.",
    ),
}

SEASONAL_NOTES = {
    "ndvi": ["Peak vegetation during monsoon (Jul-Sep) and post-Rabi harvest (Mar-Apr)."],
    "aerosol": ["Aerosol peaks during May-June dust season and post-harvest crop burning (Oct-Nov)."],
    "no2": [
        "NO₂ peaks in winter due to atmospheric inversion.",
        "COVID-19 lockdowns (Mar-Jun 2020) caused a notable drop.",
    ],
    "so2": ["SO₂ peaks during winter due to increased fossil fuel combustion."],
    "co": ["CO peaks during winter months and post-harvest crop burning season (Oct-Nov)."],
}

NATIONAL_INSIGHTS = {
    "ndvi": [
        "Pakistan's NDVI shows strong seasonal patterns driven by the monsoon.",
        "The Indus Plain shows highest NDVI due to irrigated agriculture.",
        "2022 floods caused significant vegetation disruption.",
        "Long-term trend shows slight improvement.",
    ],
    "aerosol": [
        "Aerosol index peaks during May-June dust storms from Thar/Cholistan deserts.",
        "Post-harvest crop burning in Oct-Nov causes secondary aerosol spike.",
        "Winter months show lowest aerosol due to reduced dust activity.",
    ],
    "no2": [
        "NO₂ is primarily from vehicular emissions and power generation.",
        "COVID-19 lockdowns in 2020 caused ~25% reduction.",
        "Winter inversions trap NO₂ near the surface.",
    ],
    "so2": [
        "SO₂ peaks in winter due to fossil fuel combustion and low atmospheric dispersion.",
        "Industrial hubs (Karachi, Lahore, Faisalabad) are primary SO₂ sources.",
        "Monsoon season dilutes SO₂ through atmospheric washout.",
    ],
    "co": [
        "CO peaks during winter and post-harvest crop burning in Punjab/Sindh.",
        "Vehicular emissions and brick kilns are major CO contributors.",
        "Monsoon rainfall helps reduce atmospheric CO concentrations.",
    ],
}


def _trend_sentence(spec: ParameterSpec, trend_percent: float) -> str:
    if abs(trend_percent) >= STABLE_TREND_THRESHOLD:
        direction = "an upward" if trend_percent > 0 else "a downward"
        return f"{spec.label} shows {direction} trend of {abs(trend_percent):.1f}%."
    return f"{spec.label} remains relatively stable throughout the analysis period."


def _level_sentence(spec: ParameterSpec, mean: float) -> str:
    rules, fallback = LEVEL_RULES[spec.id]
    for threshold, sentence in rules:
        if mean > threshold:
            return sentence
    return fallback


def generate_insights(spec: ParameterSpec, stats: Dict) -> List[str]:
    insights = [
        _trend_sentence(spec, float(stats.get("trendPercent") or 0.0)),
        _level_sentence(spec, float(stats.get("mean") or 0.0)),
    ]
    insights.extend(SEASONAL_NOTES.get(spec.id, []))
    return insights


def national_insights(spec: ParameterSpec) -> List[str]:
    return list(NATIONAL_INSIGHTS.get(spec.id) or [f"{spec.label} nation-wide aggregate for Pakistan."])

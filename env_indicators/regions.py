"""
Region Classification Module
Maps a coordinate to a coarse land-cover / emission regime inside Pakistan.

Zone boxes are hand-tuned illustrative constants. Changing any of them
changes every synthesized series that falls inside, so treat edits here as
behaviour changes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from .geo_bounds import BoundingBox


class RegionCategory(str, Enum):
    INDUS_PLAIN = "agricultural_plain"
    NORTHERN_MOUNTAINS = "northern_mountains"
    ARID_WEST = "arid_west"
    SOUTHERN_MIXED = "southern_mixed"
    URBAN_INDUSTRIAL = "urban_industrial"
    CENTRAL = "central"


# 📂 URBAN / INDUSTRIAL CLUSTERS
URBAN_CLUSTERS = {
    "lahore": BoundingBox(min_lat=31.0, max_lat=32.0, min_lon=74.0, max_lon=75.0),
    "karachi": BoundingBox(min_lat=24.8, max_lat=25.1, min_lon=67.0, max_lon=67.3),
    "islamabad": BoundingBox(min_lat=33.5, max_lat=34.0, min_lon=73.0, max_lon=73.3),
}

# 📂 AGRO-CLIMATIC
INDUS_PLAIN_BOX = BoundingBox(min_lat=25.0, max_lat=32.0, min_lon=68.0, max_lon=75.0)


@dataclass(frozen=True)
class Zone:
    name: str
    category: RegionCategory
    test: Callable[[float, float], bool]

    def contains(self, lat: float, lon: float) -> bool:
        return self.test(lat, lon)


def _in_clusters(*names: str) -> Callable[[float, float], bool]:
    boxes = tuple(URBAN_CLUSTERS[n] for n in names)
    return lambda lat, lon: any(b.contains(lat, lon) for b in boxes)


INDUS_PLAIN = Zone("indus_plain", RegionCategory.INDUS_PLAIN, INDUS_PLAIN_BOX.contains)
NORTHERN_MOUNTAINS = Zone("northern_mountains", RegionCategory.NORTHERN_MOUNTAINS, lambda lat, lon: lat > 33)
BALOCHISTAN_ARID = Zone("balochistan", RegionCategory.ARID_WEST, lambda lat, lon: lon < 67)
SINDH_SOUTH = Zone("sindh", RegionCategory.SOUTHERN_MIXED, lambda lat, lon: lat < 27)

# Thar/Cholistan plus the Balochistan plateau
DUST_BELT = Zone(
    "dust_belt",
    RegionCategory.ARID_WEST,
    lambda lat, lon: lon < 67 or (lat < 27 and lon > 69),
)

URBAN_CORE = Zone("urban_core", RegionCategory.URBAN_INDUSTRIAL, _in_clusters("lahore", "karachi"))
URBAN_CORE_WITH_CAPITAL = Zone(
    "urban_core_with_capital",
    RegionCategory.URBAN_INDUSTRIAL,
    _in_clusters("lahore", "islamabad", "karachi"),
)

# Priority-ordered zone lists; the first match wins.
VEGETATION_ZONES = (INDUS_PLAIN, NORTHERN_MOUNTAINS, BALOCHISTAN_ARID, SINDH_SOUTH)
AEROSOL_ZONES = (URBAN_CORE, DUST_BELT)
NO2_ZONES = (URBAN_CORE_WITH_CAPITAL,)
EMISSION_ZONES = (URBAN_CORE,)


def classify_region(lat: float, lon: float, zones: Sequence[Zone] = VEGETATION_ZONES) -> RegionCategory:
    for zone in zones:
        if zone.contains(lat, lon):
            return zone.category
    return RegionCategory.CENTRAL

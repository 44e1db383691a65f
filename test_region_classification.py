#!/usr/bin/env python3
"""
Test script to verify region classification per indicator zone table
"""

import sys
import os

# Add the backend directory to the path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from env_indicators.regions import (
    AEROSOL_ZONES,
    EMISSION_ZONES,
    NO2_ZONES,
    VEGETATION_ZONES,
    RegionCategory,
    classify_region,
)

LAHORE = (31.5, 74.3)
KARACHI = (24.9, 67.1)
ISLAMABAD = (33.7, 73.1)
QUETTA = (30.2, 66.9)
THAR = (24.5, 70.5)


def test_vegetation_zones():
    assert classify_region(*LAHORE) == RegionCategory.INDUS_PLAIN
    assert classify_region(*ISLAMABAD) == RegionCategory.NORTHERN_MOUNTAINS
    assert classify_region(*QUETTA) == RegionCategory.ARID_WEST
    assert classify_region(*THAR) == RegionCategory.SOUTHERN_MIXED
    assert classify_region(32.5, 72.0) == RegionCategory.CENTRAL


def test_urban_clusters_win_for_emissions():
    assert classify_region(*LAHORE, zones=EMISSION_ZONES) == RegionCategory.URBAN_INDUSTRIAL
    assert classify_region(*KARACHI, zones=EMISSION_ZONES) == RegionCategory.URBAN_INDUSTRIAL
    assert classify_region(*QUETTA, zones=EMISSION_ZONES) == RegionCategory.CENTRAL


def test_capital_counts_as_urban_only_for_no2():
    assert classify_region(*ISLAMABAD, zones=NO2_ZONES) == RegionCategory.URBAN_INDUSTRIAL
    assert classify_region(*ISLAMABAD, zones=EMISSION_ZONES) == RegionCategory.CENTRAL
    assert classify_region(*ISLAMABAD, zones=AEROSOL_ZONES) == RegionCategory.CENTRAL


def test_dust_belt_for_aerosol():
    assert classify_region(*QUETTA, zones=AEROSOL_ZONES) == RegionCategory.ARID_WEST
    assert classify_region(*THAR, zones=AEROSOL_ZONES) == RegionCategory.ARID_WEST
    # urban check comes before the dust belt
    assert classify_region(*KARACHI, zones=AEROSOL_ZONES) == RegionCategory.URBAN_INDUSTRIAL


def test_category_values_are_stable_strings():
    assert RegionCategory.INDUS_PLAIN.value == "agricultural_plain"
    assert RegionCategory.ARID_WEST.value == "arid_west"
    assert VEGETATION_ZONES[0].category == RegionCategory.INDUS_PLAIN


if __name__ == "__main__":
    for name, fn in list(globals().items()):
        if name.startswith("test_"):
            fn()
            print(f"✅ {name}")
    print("\n✅ Region Classification Test Complete!")

#!/usr/bin/env python3
"""
Test script for the monthly series synthesizer (point and nation-wide modes)
"""

import sys
import os

import pytest

# Add the backend directory to the path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from env_indicators.parameters import AEROSOL, CO, NDVI, NO2, PARAMETERS, SO2, get_parameter
from env_indicators.synthesizer import event_adjustment, synthesize, yearly_averages

LAHORE = (31.5204, 74.3587)
SAMPLE_POINTS = [LAHORE, (24.9, 67.1), (33.7, 73.1), (30.2, 66.9), (24.5, 70.5), (35.9, 74.3)]


def _by_date(series):
    return {p["date"]: p for p in series}


def test_one_point_per_month_in_order():
    series = synthesize(NDVI, *LAHORE, start_year=2019, end_year=2020)
    assert len(series) == 24
    assert series[0]["date"] == "2019-01-01"
    assert series[-1]["date"] == "2020-12-01"
    dates = [p["date"] for p in series]
    assert dates == sorted(dates)


def test_default_range_is_seven_years():
    assert len(synthesize(SO2, *LAHORE)) == 84
    assert len(synthesize(SO2)) == 84


def test_series_is_reproducible():
    for spec in PARAMETERS.values():
        assert synthesize(spec, *LAHORE) == synthesize(spec, *LAHORE)
        assert synthesize(spec) == synthesize(spec)


def test_nearby_locations_get_different_noise():
    a = synthesize(NDVI, 31.5204, 74.3587)
    b = synthesize(NDVI, 31.5205, 74.3587)
    assert [p["value"] for p in a] != [p["value"] for p in b]


@pytest.mark.parametrize("spec", list(PARAMETERS.values()), ids=list(PARAMETERS))
def test_point_values_stay_in_valid_range(spec):
    lo, hi = spec.point.valid_range
    for lat, lon in SAMPLE_POINTS:
        for p in synthesize(spec, lat, lon):
            if lo is not None:
                assert p["value"] >= lo
            if hi is not None:
                assert p["value"] <= hi
            assert p["min"] <= p["value"] <= p["max"]


@pytest.mark.parametrize("spec", list(PARAMETERS.values()), ids=list(PARAMETERS))
def test_national_series_has_no_bounds(spec):
    lo, hi = spec.national.valid_range
    for p in synthesize(spec):
        assert set(p) == {"date", "value"}
        if lo is not None:
            assert p["value"] >= lo
        if hi is not None:
            assert p["value"] <= hi


def test_no2_lockdown_dip():
    point = _by_date(synthesize(NO2, *LAHORE))
    national = _by_date(synthesize(NO2))
    for month in ("03", "04", "05", "06"):
        assert point[f"2020-{month}-01"]["value"] < point[f"2019-{month}-01"]["value"]
        assert national[f"2020-{month}-01"]["value"] < national[f"2019-{month}-01"]["value"]


def test_no2_uses_column_magnitudes():
    for p in synthesize(NO2, *LAHORE):
        assert 1e15 < p["value"] < 2e16


def test_ndvi_flood_year_dip():
    national = _by_date(synthesize(NDVI))
    assert national["2022-08-01"]["value"] < national["2021-08-01"]["value"]


def test_ndvi_monsoon_above_pre_monsoon():
    national = _by_date(synthesize(NDVI))
    assert national["2021-08-01"]["value"] > national["2021-05-01"]["value"]


def test_ndvi_drought_rules():
    base = NDVI.national_regime.base
    for month in (1, 2, 3, 4, 5, 10, 11, 12):
        assert event_adjustment(NDVI.national, base, 2019, month) == pytest.approx(-0.04)
    for month in (6, 7, 8, 9):
        assert event_adjustment(NDVI.national, base, 2019, month) == pytest.approx(-0.07)


def test_ndvi_flood_and_recovery_rules():
    base = NDVI.national_regime.base
    for month in (7, 8, 9, 10):
        assert event_adjustment(NDVI.national, base, 2022, month) == pytest.approx(-0.08)
    for month in (1, 2, 11, 12):
        assert event_adjustment(NDVI.national, base, 2022, month) == pytest.approx(0.02)
    for month in (3, 4, 5, 6):
        assert event_adjustment(NDVI.national, base, 2022, month) == 0


def test_events_only_in_their_years():
    base = NDVI.national_regime.base
    for year in (2018, 2020, 2021, 2023):
        for month in range(1, 13):
            assert event_adjustment(NDVI.national, base, year, month) == 0
    # point mode carries no NDVI events
    assert event_adjustment(NDVI.point, 0.45, 2022, 8) == 0


def test_no2_lockdown_rule_is_relative():
    assert event_adjustment(NO2.point, 1e16, 2020, 4) == pytest.approx(-0.3e16)
    assert event_adjustment(NO2.national, 1e16, 2020, 4) == pytest.approx(-0.25e16)
    assert event_adjustment(NO2.point, 1e16, 2020, 7) == 0


def test_dates_are_four_digit_years():
    series = synthesize(SO2, start_year=999, end_year=999)
    assert series[0]["date"] == "0999-01-01"
    assert series[-1]["date"] == "0999-12-01"


def test_yearly_averages():
    series = synthesize(CO)
    averages = yearly_averages(CO, series)
    assert list(averages) == [str(y) for y in range(2019, 2026)]
    first_year = [p["value"] for p in series[:12]]
    assert averages["2019"] == pytest.approx(sum(first_year) / 12, abs=1e-4)


def test_parameter_lookup():
    assert get_parameter("ndvi") is NDVI
    assert get_parameter("Aerosol Index") is AEROSOL
    assert get_parameter("get-no2") is NO2
    assert get_parameter("NO₂") is NO2
    assert get_parameter(" CO ") is CO
    assert get_parameter("ozone") is None
    assert get_parameter(None) is None


def test_describe_catalogue_entry():
    entry = NDVI.describe()
    assert entry["id"] == "ndvi"
    assert entry["endpoint"] == "get-ndvi"
    assert entry["validRange"] == {"min": -0.1, "max": 0.9}
    assert entry["palette"][0] == "#d73027"


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))

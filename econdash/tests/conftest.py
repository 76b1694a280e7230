"""
Shared pytest fixtures for econdash tests.

Raw payload fixtures mirror the shapes the data-fetch layer hands over:
World Bank indicator records, REST Countries v3 records and the
Open-Meteo archive response.
"""
from __future__ import annotations

import os
from typing import Any, Dict, List

import pytest

from econdash.config import get_settings
from econdash.models import TimeSeries, TimeSeriesPoint


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def test_environment():
    """Isolate settings between tests."""
    old_env = os.environ.copy()
    get_settings.cache_clear()
    yield
    os.environ.clear()
    os.environ.update(old_env)
    get_settings.cache_clear()


# ============================================================================
# Data Fixtures
# ============================================================================

def wb_record(
    iso3: str,
    iso2: str,
    name: str,
    date: Any,
    value: Any,
    indicator: str = "NY.GDP.PCAP.CD",
) -> Dict[str, Any]:
    return {
        "indicator": {"id": indicator, "value": "GDP per capita (current US$)"},
        "country": {"id": iso2, "value": name},
        "countryiso3code": iso3,
        "date": date,
        "value": value,
        "unit": "",
        "obs_status": "",
        "decimal": 1,
    }


@pytest.fixture
def make_record():
    return wb_record


@pytest.fixture
def germany_gdp_records() -> List[Dict[str, Any]]:
    """World Bank returns newest year first."""
    return [
        wb_record("DEU", "DE", "Germany", "2021", 51203.6),
        wb_record("DEU", "DE", "Germany", "2020", 46772.8),
        wb_record("DEU", "DE", "Germany", "2019", None),
        wb_record("DEU", "DE", "Germany", "2018", 47939.3),
    ]


@pytest.fixture
def germany_renewable_records() -> List[Dict[str, Any]]:
    return [
        wb_record("DEU", "DE", "Germany", "2020", 19.1, indicator="EG.FEC.RNEW.ZS"),
        wb_record("DEU", "DE", "Germany", "2017", 15.5, indicator="EG.FEC.RNEW.ZS"),
    ]


def make_series(label: str, readings: Dict[int, Any], color: str = "#000000") -> TimeSeries:
    return TimeSeries(
        indicator=label,
        label=label,
        color=color,
        data=[
            TimeSeriesPoint(year=year, value=value, originalValue=value)
            for year, value in sorted(readings.items())
        ],
    )


@pytest.fixture
def series_factory():
    return make_series


@pytest.fixture
def series_a() -> TimeSeries:
    return make_series("A", {2018: 10.0, 2019: None, 2020: 30.0})


@pytest.fixture
def series_b() -> TimeSeries:
    return make_series("B", {2019: 5.0, 2020: 15.0, 2021: 25.0})


@pytest.fixture
def restcountries_records() -> List[Dict[str, Any]]:
    return [
        {"name": {"common": "Germany"}, "cca2": "DE", "cca3": "DEU", "region": "Europe", "population": 83240525},
        {"name": {"common": "Brazil"}, "cca2": "BR", "cca3": "BRA", "region": "Americas", "population": 212559409},
        {"name": {"common": "Kenya"}, "cca2": "KE", "cca3": "KEN", "region": "Africa", "population": 53771300},
        {"name": {"common": "Antarctica"}, "cca2": "AQ", "cca3": "ATA", "region": "Antarctic", "population": 1000},
    ]


@pytest.fixture
def open_meteo_payload() -> Dict[str, Any]:
    return {
        "latitude": 52.52,
        "longitude": 13.42,
        "timezone": "Europe/Berlin",
        "daily": {
            "time": ["2024-01-06", "2024-01-07", "2024-01-08", "2024-02-01"],
            "temperature_2m_max": [3.0, 5.0, None, 8.0],
            "temperature_2m_min": [-2.0, 1.0, 0.0, 2.0],
            "precipitation_sum": [0.0, 4.5, None, 12.0],
        },
    }

"""
Country comparison (bubble chart) data join.

Joins REST Countries metadata with two World Bank indicators for a single
year: GDP per capita on the x axis, CO2 per capita on the y axis and
population as the bubble size.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..models import BubbleDataPoint, CountryMetadata, IndicatorObservation

logger = logging.getLogger(__name__)

CountryInput = Union[CountryMetadata, Mapping[str, Any]]
ObservationInput = Union[IndicatorObservation, Mapping[str, Any]]


def _index_by_country(observations: Optional[Iterable[ObservationInput]]) -> Dict[str, Optional[float]]:
    # World Bank ``country.id`` is the ISO2 code; later records overwrite earlier ones
    indexed: Dict[str, Optional[float]] = {}
    for item in observations or []:
        observation = IndicatorObservation.from_worldbank(item)
        if observation.countryId:
            indexed[observation.countryId.upper()] = observation.value
    return indexed


def _as_country(item: CountryInput) -> CountryMetadata:
    if isinstance(item, CountryMetadata):
        return item
    return CountryMetadata.from_restcountries(item)


def join_bubble_data(
    countries: Optional[Iterable[CountryInput]],
    gdp_observations: Optional[Iterable[ObservationInput]],
    co2_observations: Optional[Iterable[ObservationInput]],
) -> List[BubbleDataPoint]:
    """
    Build one bubble per country that has a GDP per capita reading.

    Countries whose GDP reading is missing, null or zero are left out;
    a missing CO2 reading is kept as None.
    """
    if countries is None or gdp_observations is None or co2_observations is None:
        return []

    gdp_by_country = _index_by_country(gdp_observations)
    co2_by_country = _index_by_country(co2_observations)

    points = []
    for item in countries:
        country = _as_country(item)
        gdp = gdp_by_country.get(country.cca2.upper())
        if not gdp:
            continue

        points.append(
            BubbleDataPoint(
                code=country.code,
                cca2=country.cca2,
                name=country.name,
                gdpPerCapita=gdp,
                co2PerCapita=co2_by_country.get(country.cca2.upper()),
                population=country.population,
                region=country.region,
            )
        )

    logger.debug(f"Bubble join produced {len(points)} points")
    return points


def available_regions(points: Iterable[BubbleDataPoint]) -> List[str]:
    return sorted({p.region for p in points})


def filter_points(
    points: Sequence[BubbleDataPoint],
    regions: Optional[Iterable[str]] = None,
    countries: Optional[Iterable[str]] = None,
) -> List[BubbleDataPoint]:
    """Keep points in any of ``regions`` and, when given, whose ISO3 code is in ``countries``."""
    selected = list(points)
    region_set = set(regions or [])
    country_set = set(countries or [])
    if region_set:
        selected = [p for p in selected if p.region in region_set]
    if country_set:
        selected = [p for p in selected if p.code in country_set]
    return selected


def comparison_stats(
    points: Sequence[BubbleDataPoint],
    regions: Optional[Iterable[str]] = None,
    countries: Optional[Iterable[str]] = None,
) -> Dict[str, int]:
    return {
        "total": len(points),
        "displayed": len(filter_points(points, regions, countries)),
    }


def search_points(points: Iterable[BubbleDataPoint], term: str) -> List[BubbleDataPoint]:
    """Case-insensitive substring search on country name, sorted by name."""
    needle = (term or "").lower()
    matches = [p for p in points if needle in p.name.lower()]
    return sorted(matches, key=lambda p: p.name)

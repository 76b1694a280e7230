"""
Choropleth map data preparation.

Turns World Bank indicator records into an ISO2-keyed value dictionary and
joins it onto the world TopoJSON shapes, which are keyed by UN numeric code.
"""
from __future__ import annotations

import logging
from bisect import bisect_right
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..models import IndicatorObservation, LegendItem, MapValueDictionary
from ..utils.country_codes import iso3_to_iso2, numeric_to_iso2

logger = logging.getLogger(__name__)

ObservationInput = Union[IndicatorObservation, Mapping[str, Any]]

# Sequential greens, lightest bucket first (0-10% ... 70%+ for renewable share)
MAP_PALETTE: Tuple[str, ...] = (
    "#f7fcf5",
    "#e5f5e0",
    "#c7e9c0",
    "#a1d99b",
    "#74c476",
    "#41ab5d",
    "#238b45",
    "#005a32",
)

NO_DATA_COLOR = "#e0e0e0"


def to_map_dictionary(observations: Optional[Iterable[ObservationInput]]) -> MapValueDictionary:
    """
    Convert indicator observations to a ``{ISO2: value}`` dictionary.

    Observations with a null value or a country code that has no ISO2
    mapping are skipped. When two observations resolve to the same ISO2 code
    the later one wins. Key order carries no meaning.
    """
    if not observations:
        return {}

    result: MapValueDictionary = {}
    skipped = 0

    for item in observations:
        observation = IndicatorObservation.from_worldbank(item)
        if observation.value is None or not observation.countryIso3:
            skipped += 1
            continue

        iso2 = iso3_to_iso2(observation.countryIso3)
        if not iso2:
            skipped += 1
            continue

        if iso2 in result:
            logger.debug(f"Duplicate map entry for {iso2}; keeping the later value")
        result[iso2] = observation.value

    if skipped:
        logger.debug(f"Map transform kept {len(result)} countries, skipped {skipped} records")
    return result


def value_domain(values: Mapping[str, float]) -> Optional[Tuple[float, float]]:
    """Return ``(min, max)`` over the dictionary values, or None when it is empty."""
    if not values:
        return None
    numbers = list(values.values())
    return (min(numbers), max(numbers))


class QuantizeScale:
    """
    Maps a continuous domain onto a discrete color range in equal-width buckets.

    Values below the domain fall into the first bucket and values above it
    into the last one. With a zero-width domain every value lands in the
    last bucket.
    """

    def __init__(self, domain: Tuple[float, float], colors: Sequence[str] = MAP_PALETTE) -> None:
        if not colors:
            raise ValueError("QuantizeScale needs at least one color")
        self.domain = (float(domain[0]), float(domain[1]))
        self.colors = tuple(colors)
        low, high = self.domain
        n = len(self.colors)
        self.thresholds = [low + (high - low) * (i + 1) / n for i in range(n - 1)]

    def __call__(self, value: Optional[float]) -> str:
        if value is None or value != value:
            return NO_DATA_COLOR
        return self.colors[bisect_right(self.thresholds, value)]

    def bucket_bounds(self) -> List[Tuple[float, float]]:
        """Lower and upper edge of every color bucket."""
        edges = [self.domain[0], *self.thresholds, self.domain[1]]
        return list(zip(edges[:-1], edges[1:]))


def create_color_scale(domain: Tuple[float, float]) -> QuantizeScale:
    return QuantizeScale(domain, MAP_PALETTE)


def legend_items(min_value: float, max_value: float, steps: int = 7) -> List[LegendItem]:
    """Evenly spaced legend entries from ``min_value`` to ``max_value`` inclusive."""
    scale = create_color_scale((min_value, max_value))
    if steps <= 1:
        return [LegendItem(value=f"{min_value:.1f}", color=scale(min_value))]

    items = []
    for i in range(steps):
        value = min_value + (max_value - min_value) * (i / (steps - 1))
        items.append(LegendItem(value=f"{value:.1f}", color=scale(value)))
    return items


def join_features(
    features: Iterable[Mapping[str, Any]],
    values: Mapping[str, float],
    scale: Optional[QuantizeScale] = None,
) -> List[Dict[str, Any]]:
    """
    Attach map values to GeoJSON features keyed by UN numeric id.

    Each returned feature gets ``countryCode`` (ISO2 or None) and ``value``
    (float or None) in its properties, plus ``fill`` when a scale is given.
    The input features are left untouched.
    """
    joined = []
    for feature in features:
        properties = dict(feature.get("properties") or {})
        country_code = numeric_to_iso2(feature.get("id"))
        value = values.get(country_code) if country_code else None

        properties["countryCode"] = country_code
        properties["value"] = value
        if scale is not None:
            properties["fill"] = scale(value) if value is not None else NO_DATA_COLOR

        joined.append({**feature, "properties": properties})
    return joined


def format_value(value: Optional[float], decimals: int = 1) -> str:
    if value is None:
        return "N/A"
    return f"{value:.{decimals}f}"

"""
Time-series construction and alignment for the indicator line charts.

Observations are turned into year-indexed series, padded with explicit null
points so that several indicators share one contiguous year axis, and
aligned on the widest year range any of them covers.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..models import (
    CompositionPoint,
    IndicatorObservation,
    SeriesInsights,
    TimeSeries,
    TimeSeriesPoint,
)

logger = logging.getLogger(__name__)

ObservationInput = Union[IndicatorObservation, Mapping[str, Any]]

# Axis shown when none of the series has a single point
DEFAULT_YEAR_RANGE: Tuple[int, int] = (1990, 2020)


def build_series(
    observations: Optional[Iterable[ObservationInput]],
    label: str,
    color: str,
) -> TimeSeries:
    """
    Convert indicator observations into an ascending, year-indexed series.

    - Observations without a usable date are dropped.
    - Observations with a null value are kept as points with ``value=None``.
    - When a year appears more than once, the last occurrence wins.
    - ``indicator`` comes from the first observation, or "" for empty input.
    """
    if observations is None:
        return TimeSeries(indicator="", label=label, color=color, data=[])

    parsed = [IndicatorObservation.from_worldbank(item) for item in observations]
    indicator = parsed[0].indicatorId if parsed else ""

    by_year: Dict[int, TimeSeriesPoint] = {}
    dropped = 0
    for observation in parsed:
        year = observation.year
        if year is None:
            dropped += 1
            continue
        by_year[year] = TimeSeriesPoint(
            year=year,
            value=observation.value,
            originalValue=observation.value,
        )

    if dropped:
        logger.debug(f"{label}: dropped {dropped} observations without a usable date")

    points = [by_year[year] for year in sorted(by_year)]
    return TimeSeries(indicator=indicator, label=label, color=color, data=points)


def fill_gaps(series: Sequence[TimeSeries], start_year: int, end_year: int) -> List[TimeSeries]:
    """
    Give every series exactly one point per year in ``[start_year, end_year]``.

    Existing points are reused, missing years become null points and points
    outside the range are left out. An inverted range produces empty series.
    """
    if start_year > end_year:
        logger.debug(f"Inverted year range {start_year}-{end_year}; returning empty series")

    filled = []
    for s in series:
        points_by_year = {point.year: point for point in s.data}
        data = [
            points_by_year.get(year) or TimeSeriesPoint.gap(year)
            for year in range(start_year, end_year + 1)
        ]
        filled.append(s.model_copy(update={"data": data}))
    return filled


def common_year_range(series: Sequence[TimeSeries]) -> Tuple[int, int]:
    """
    Return the smallest and largest year found in any point of any series.

    Null-valued points count. With no points at all the fallback
    ``DEFAULT_YEAR_RANGE`` (1990, 2020) is returned.
    """
    years = [point.year for s in series for point in s.data]
    if not years:
        return DEFAULT_YEAR_RANGE
    return (min(years), max(years))


def summarize_series(series: TimeSeries) -> SeriesInsights:
    """Latest, earliest, change and mean over the non-null original readings."""
    values = [p.originalValue for p in series.data if p.originalValue is not None]
    if not values:
        return SeriesInsights()

    latest = values[-1]
    earliest = values[0]
    return SeriesInsights(
        latest=latest,
        earliest=earliest,
        change=latest - earliest,
        average=sum(values) / len(values),
    )


def to_composition(series: TimeSeries) -> List[CompositionPoint]:
    """Split a percentage series into its share and the remainder to 100 for stacked areas."""
    return [
        CompositionPoint(year=p.year, renewable=p.value, nonRenewable=100 - p.value)
        for p in series.data
        if p.value is not None
    ]

"""
Historical weather preparation for the country weather view.

Consumes the Open-Meteo archive ``daily`` block (max/min temperature and
precipitation for the last twelve months) and derives the calendar heatmap
cells, axis domains and a monthly summary table.
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from ..config import get_settings
from ..exceptions import DataNotAvailableError
from ..models import CalendarCell, WeatherData, WeatherDataPoint, WeatherLocation

logger = logging.getLogger(__name__)

_DAILY_FIELDS = {
    "maxTemp": "temperature_2m_max",
    "minTemp": "temperature_2m_min",
    "precipitation": "precipitation_sum",
}


def parse_open_meteo(payload: Mapping[str, Any]) -> WeatherData:
    """
    Zip the column-oriented ``daily`` arrays into one point per day.

    Raises:
        DataNotAvailableError: If the payload has no ``daily.time`` array
    """
    daily = payload.get("daily") or {}
    times = daily.get("time")
    if not times:
        raise DataNotAvailableError(
            "Weather payload has no daily time axis",
            source="open-meteo",
        )

    columns = {field: daily.get(key) or [] for field, key in _DAILY_FIELDS.items()}
    points = []
    for i, day in enumerate(times):
        readings = {
            field: values[i] if i < len(values) else None
            for field, values in columns.items()
        }
        points.append(WeatherDataPoint(date=day, **readings))

    location = WeatherLocation(
        latitude=payload.get("latitude") or 0.0,
        longitude=payload.get("longitude") or 0.0,
        timezone=payload.get("timezone") or "",
    )
    return WeatherData(daily=points, location=location)


def _to_frame(daily: Sequence[WeatherDataPoint]) -> pd.DataFrame:
    frame = pd.DataFrame(
        [point.model_dump() for point in daily],
        columns=["date", "maxTemp", "minTemp", "precipitation"],
    )
    frame["date"] = pd.to_datetime(frame["date"], format="%Y-%m-%d", errors="coerce")
    for column in ("maxTemp", "minTemp", "precipitation"):
        frame[column] = pd.to_numeric(frame[column], errors="coerce")
    return frame


def calendar_cells(daily: Sequence[WeatherDataPoint]) -> List[CalendarCell]:
    """
    Lay out precipitation days on a week-by-weekday grid.

    ``week`` is the Sunday-based week of the year (``%U``) and ``weekday``
    runs from 0 (Sunday) to 6. Days without a precipitation reading or with
    an unparsable date are skipped.
    """
    frame = _to_frame(daily).dropna(subset=["date", "precipitation"])
    if frame.empty:
        return []

    weeks = frame["date"].dt.strftime("%U").astype(int)
    weekdays = frame["date"].dt.strftime("%w").astype(int)
    months = frame["date"].dt.strftime("%b")

    return [
        CalendarCell(
            date=day.strftime("%Y-%m-%d"),
            week=int(week),
            weekday=int(weekday),
            month=month,
            precipitation=float(precipitation),
        )
        for day, week, weekday, month, precipitation in zip(
            frame["date"], weeks, weekdays, months, frame["precipitation"]
        )
    ]


def precipitation_domain(
    daily: Sequence[WeatherDataPoint],
    fallback_max: Optional[float] = None,
) -> Tuple[float, float]:
    """Color domain for the heatmap: zero to the wettest day, or the fallback when dry."""
    if fallback_max is None:
        fallback_max = get_settings().precipitation_fallback_max

    frame = _to_frame(daily)
    wettest = frame["precipitation"].max()
    if pd.isna(wettest) or wettest == 0:
        return (0.0, float(fallback_max))
    return (0.0, float(wettest))


def temperature_domain(
    daily: Sequence[WeatherDataPoint],
    padding: Optional[float] = None,
) -> Optional[Tuple[float, float]]:
    """Y-axis domain over days with both readings, widened by ``padding`` degrees each side."""
    if padding is None:
        padding = get_settings().temperature_padding

    frame = _to_frame(daily).dropna(subset=["maxTemp", "minTemp"])
    if frame.empty:
        return None

    low = min(frame["maxTemp"].min(), frame["minTemp"].min())
    high = max(frame["maxTemp"].max(), frame["minTemp"].max())
    return (float(low) - padding, float(high) + padding)


def monthly_summary(daily: Sequence[WeatherDataPoint]) -> pd.DataFrame:
    """
    Aggregate daily readings per calendar month.

    Returns a frame with columns ``month`` ("YYYY-MM"), ``maxTemp`` and
    ``minTemp`` (monthly means) and ``precipitation`` (monthly total, NaN
    when the month has no precipitation reading at all).
    """
    frame = _to_frame(daily).dropna(subset=["date"])
    if frame.empty:
        return pd.DataFrame(columns=["month", "maxTemp", "minTemp", "precipitation"])

    grouped = frame.groupby(frame["date"].dt.to_period("M"))
    summary = pd.DataFrame(
        {
            "maxTemp": grouped["maxTemp"].mean(),
            "minTemp": grouped["minTemp"].mean(),
            "precipitation": grouped["precipitation"].sum(min_count=1),
        }
    )
    summary.index = summary.index.astype(str)
    summary = summary.rename_axis("month").reset_index()
    logger.debug(f"Monthly weather summary covers {len(summary)} months")
    return summary

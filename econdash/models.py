"""
Data models shared by the econdash transformation pipeline.

Field names follow the camelCase keys the chart layer reads
(``originalValue``, ``gdpPerCapita``...), the same convention the
World Bank and REST Countries payloads use.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Readings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Present:
    """A numeric reading that was actually observed."""
    value: float


class Absent:
    """No reading: either the year is missing or the provider reported null."""

    _instance: Optional["Absent"] = None

    def __new__(cls) -> "Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent()

Reading = Union[Present, Absent]


def coerce_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None when it is not a usable number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def reading_of(value: Any) -> Reading:
    number = coerce_number(value)
    return ABSENT if number is None else Present(number)


def value_of(reading: Reading) -> Optional[float]:
    return reading.value if isinstance(reading, Present) else None


# ---------------------------------------------------------------------------
# Indicator observations
# ---------------------------------------------------------------------------

class IndicatorObservation(BaseModel):
    """One (country, indicator, year) reading delivered by the data-fetch layer."""

    model_config = ConfigDict(frozen=True)

    countryId: str = ""
    countryName: str = ""
    countryIso3: str = ""
    indicatorId: str = ""
    indicatorName: str = ""
    date: Optional[str] = None
    value: Optional[float] = None

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, v):
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, v):
        return coerce_number(v)

    @property
    def year(self) -> Optional[int]:
        """Calendar year of the observation, or None when the date is unusable."""
        if not self.date:
            return None
        head = self.date[:4]
        if not head.isdigit():
            return None
        return int(head)

    @property
    def reading(self) -> Reading:
        return reading_of(self.value)

    @classmethod
    def from_worldbank(cls, record: Mapping[str, Any]) -> "IndicatorObservation":
        """Build an observation from a World Bank ``/indicator`` record.

        Accepts the nested ``country``/``indicator`` objects the API returns as
        well as records that already use the flat field names.
        """
        if isinstance(record, IndicatorObservation):
            return record

        country = record.get("country") or {}
        indicator = record.get("indicator") or {}
        if not isinstance(country, Mapping):
            country = {"id": str(country), "value": ""}
        if not isinstance(indicator, Mapping):
            indicator = {"id": str(indicator), "value": ""}

        return cls(
            countryId=country.get("id") or record.get("countryId") or "",
            countryName=country.get("value") or record.get("countryName") or "",
            countryIso3=record.get("countryiso3code") or record.get("countryIso3") or "",
            indicatorId=indicator.get("id") or record.get("indicatorId") or "",
            indicatorName=indicator.get("value") or record.get("indicatorName") or "",
            date=record.get("date"),
            value=record.get("value"),
        )


# ---------------------------------------------------------------------------
# Time series
# ---------------------------------------------------------------------------

class TimeSeriesPoint(BaseModel):
    """A single year on a chart axis.

    ``value`` is what gets plotted and may be rescaled by normalization;
    ``originalValue`` always holds the reading as delivered.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    value: Optional[float] = None
    originalValue: Optional[float] = None

    @property
    def reading(self) -> Reading:
        return reading_of(self.value)

    @property
    def original_reading(self) -> Reading:
        return reading_of(self.originalValue)

    @classmethod
    def gap(cls, year: int) -> "TimeSeriesPoint":
        return cls(year=year, value=None, originalValue=None)


class TimeSeries(BaseModel):
    indicator: str = ""
    label: str
    color: str
    data: List[TimeSeriesPoint] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.data

    def years(self) -> List[int]:
        return [point.year for point in self.data]

    def values(self) -> List[float]:
        """Non-null plotted values in year order."""
        return [point.value for point in self.data if point.value is not None]


MapValueDictionary = Dict[str, float]


# ---------------------------------------------------------------------------
# Country comparison
# ---------------------------------------------------------------------------

class CountryMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    cca2: str
    name: str
    region: str = ""
    population: int = 0

    @classmethod
    def from_restcountries(cls, record: Mapping[str, Any]) -> "CountryMetadata":
        """Build metadata from a REST Countries v3 record (``fields=name,cca2,cca3,region,population``)."""
        name = record.get("name") or {}
        if isinstance(name, Mapping):
            name = name.get("common") or ""
        return cls(
            code=record.get("cca3") or record.get("code") or "",
            cca2=record.get("cca2") or "",
            name=name,
            region=record.get("region") or "",
            population=int(record.get("population") or 0),
        )


class BubbleDataPoint(BaseModel):
    code: str
    cca2: str
    name: str
    gdpPerCapita: float
    co2PerCapita: Optional[float] = None
    population: int
    region: str


class CompositionPoint(BaseModel):
    """Renewable vs non-renewable share of final energy consumption for one year."""
    year: int
    renewable: float
    nonRenewable: float


class SeriesInsights(BaseModel):
    latest: float = 0.0
    earliest: float = 0.0
    change: float = 0.0
    average: float = 0.0


class LegendItem(BaseModel):
    value: str
    color: str


# ---------------------------------------------------------------------------
# Weather
# ---------------------------------------------------------------------------

class WeatherDataPoint(BaseModel):
    date: str
    maxTemp: Optional[float] = None
    minTemp: Optional[float] = None
    precipitation: Optional[float] = None

    @field_validator("maxTemp", "minTemp", "precipitation", mode="before")
    @classmethod
    def _coerce_reading(cls, v):
        return coerce_number(v)


class WeatherLocation(BaseModel):
    latitude: float
    longitude: float
    timezone: str = ""


class WeatherData(BaseModel):
    daily: List[WeatherDataPoint] = Field(default_factory=list)
    location: WeatherLocation


class CalendarCell(BaseModel):
    date: str
    week: int
    weekday: int
    month: str
    precipitation: float

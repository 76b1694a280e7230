"""
Country detail pipeline.

Runs the chart preparation stages for one country in order:
series construction -> common year range -> gap filling -> normalization.
Every stage is a pure function; the pipeline only wires them together and
resolves the display name.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..config import Settings, get_settings
from ..models import IndicatorObservation, SeriesInsights, TimeSeries
from ..utils.country_codes import iso_to_iso3
from .normalization import NormalizationMethod, normalize
from .timeseries import build_series, common_year_range, fill_gaps, summarize_series

logger = logging.getLogger(__name__)

ObservationInput = Union[IndicatorObservation, Mapping[str, Any]]


@dataclass(frozen=True)
class IndicatorSpec:
    """One line on the country detail chart."""
    code: str
    label: str
    color: str


@dataclass
class CountryView:
    """Everything the country detail charts need for one render."""
    country_code: str
    iso3_code: Optional[str]
    country_name: str
    method: NormalizationMethod
    year_range: Tuple[int, int]
    series: List[TimeSeries] = field(default_factory=list)
    filled: List[TimeSeries] = field(default_factory=list)
    normalized: List[TimeSeries] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return any(s.values() for s in self.series)

    def insights(self, label: str) -> SeriesInsights:
        for s in self.series:
            if s.label == label:
                return summarize_series(s)
        return SeriesInsights()


def default_indicator_specs(settings: Optional[Settings] = None) -> List[IndicatorSpec]:
    settings = settings or get_settings()
    palette = list(settings.series_palette) or ["#3b82f6", "#10b981", "#ef4444"]
    entries = [
        (settings.gdp_per_capita_indicator, "GDP per Capita"),
        (settings.renewable_energy_indicator, "Renewable Energy %"),
        (settings.co2_per_capita_indicator, "CO₂ Emissions per Capita"),
    ]
    return [
        IndicatorSpec(code=code, label=label, color=palette[i % len(palette)])
        for i, (code, label) in enumerate(entries)
    ]


class CountryViewPipeline:
    """Builds aligned and normalized indicator series for the country detail view."""

    def __init__(
        self,
        specs: Optional[Sequence[IndicatorSpec]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.specs = list(specs) if specs is not None else default_indicator_specs(self.settings)

    def run(
        self,
        country_code: str,
        batches: Sequence[Optional[Iterable[ObservationInput]]],
        method: Union[str, NormalizationMethod, None] = None,
    ) -> CountryView:
        """
        Turn one observation batch per indicator spec into chart-ready series.

        ``batches`` is matched to the specs by position; a missing or None
        batch yields an empty series for that spec. A batch whose indicator
        id differs from its spec's code is still used, with a warning.
        """
        resolved_method = NormalizationMethod.parse(method or self.settings.default_normalization)
        code = (country_code or "").strip().upper()

        materialized: List[List[IndicatorObservation]] = []
        for i, spec in enumerate(self.specs):
            batch = batches[i] if i < len(batches) else None
            observations = [IndicatorObservation.from_worldbank(item) for item in batch or []]
            mismatched = {o.indicatorId for o in observations if o.indicatorId and o.indicatorId != spec.code}
            if mismatched:
                logger.warning(
                    f"Batch {i} for '{spec.label}' carries {', '.join(sorted(mismatched))}, "
                    f"expected {spec.code}"
                )
            materialized.append(observations)

        series = [
            build_series(batch, spec.label, spec.color)
            for spec, batch in zip(self.specs, materialized)
        ]
        year_range = common_year_range(series)
        filled = fill_gaps(series, *year_range)
        normalized = normalize(filled, resolved_method)

        logger.debug(
            f"Country view {code}: {len(series)} series, years {year_range[0]}-{year_range[1]}, "
            f"method {resolved_method.value}"
        )

        return CountryView(
            country_code=code,
            iso3_code=iso_to_iso3(code),
            country_name=self._country_name(materialized, code),
            method=resolved_method,
            year_range=year_range,
            series=series,
            filled=filled,
            normalized=normalized,
        )

    @staticmethod
    def _country_name(batches: Sequence[Sequence[IndicatorObservation]], fallback: str) -> str:
        # First observation of the first non-empty batch names the country
        for batch in batches:
            if batch and batch[0].countryName:
                return batch[0].countryName
        return fallback

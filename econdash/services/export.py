from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import pandas as pd

from ..models import TimeSeries
from ..utils.serialization import json_serialize


class ExportService:
    """Chart data downloads for the country detail view."""

    def to_frame(self, data: Sequence[TimeSeries], original: bool = True) -> pd.DataFrame:
        """Wide frame indexed by year with one column per series label."""
        columns = {}
        for series in data:
            columns[series.label] = pd.Series(
                {
                    point.year: point.originalValue if original else point.value
                    for point in series.data
                },
                dtype="float64",
            )
        frame = pd.DataFrame(columns)
        frame.index.name = "year"
        return frame.sort_index()

    def generate_csv(self, data: Sequence[TimeSeries], original: bool = True) -> str:
        if not data:
            return ""

        buffer = io.StringIO()

        buffer.write("# Source: World Bank World Development Indicators\n")
        buffer.write(f"# Retrieved: {datetime.now(timezone.utc).isoformat()}\n")
        buffer.write(f"# Indicators: {', '.join(s.indicator for s in data if s.indicator)}\n")
        buffer.write(f"# Values: {'original' if original else 'normalized'}\n")
        buffer.write("#\n")

        all_years = sorted({point.year for series in data for point in series.data})
        column_names = [self._slug(s.label) or self._slug(s.indicator) or "series" for s in data]
        series_maps = [
            {p.year: (p.originalValue if original else p.value) for p in series.data}
            for series in data
        ]

        writer = csv.DictWriter(
            buffer,
            fieldnames=["year", *column_names],
            quoting=csv.QUOTE_ALL,
        )
        writer.writeheader()
        for year in all_years:
            row = {"year": year}
            for name, mapping in zip(column_names, series_maps):
                value = mapping.get(year)
                row[name] = "" if value is None else value
            writer.writerow(row)

        return buffer.getvalue()

    def generate_json(self, data: Sequence[TimeSeries]) -> str:
        payload = {
            "metadata": {
                "exportDate": datetime.now(timezone.utc).isoformat(),
                "seriesCount": len(data),
            },
            "series": [item.model_dump() for item in data],
        }
        return json_serialize(payload, indent=2)

    def generate_filename(self, data: Sequence[TimeSeries], file_format: str, country: Optional[str] = None) -> str:
        if not data:
            return f"export_{int(datetime.now(timezone.utc).timestamp())}.{file_format}"

        indicators: List[str] = [self._slug(s.indicator, limit=30) for s in data if s.indicator]
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d")

        parts = indicators[:1]
        if len(indicators) > 1:
            parts.append(f"and_{len(indicators) - 1}_more")
        if country:
            parts.append(self._slug(country, limit=20))
        parts.append(timestamp)
        if not any(parts[:-1]):
            parts.insert(0, "export")
        return f"{'_'.join(parts)}.{file_format}"

    @staticmethod
    def _slug(value: Optional[str], limit: Optional[int] = None) -> str:
        if not value:
            return ""
        slug = "".join(ch if ch.isalnum() else "_" for ch in value).strip("_")
        if limit:
            return slug[:limit]
        return slug


export_service = ExportService()

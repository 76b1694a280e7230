from __future__ import annotations

import json
import math
import unittest

from econdash.models import TimeSeries, TimeSeriesPoint
from econdash.services.export import export_service


def build_series() -> list[TimeSeries]:
    return [
        TimeSeries.model_validate(
            {
                "indicator": "NY.GDP.PCAP.CD",
                "label": "GDP per Capita",
                "color": "#3b82f6",
                "data": [
                    {"year": 2019, "value": 0.0, "originalValue": 46000.0},
                    {"year": 2020, "value": None, "originalValue": None},
                    {"year": 2021, "value": 1.0, "originalValue": 51203.6},
                ],
            }
        ),
        TimeSeries(
            indicator="EG.FEC.RNEW.ZS",
            label="Renewable Energy %",
            color="#10b981",
            data=[TimeSeriesPoint(year=2020, value=0.5, originalValue=19.1)],
        ),
    ]


class ExportServiceTests(unittest.TestCase):
    def test_generate_csv_includes_metadata(self) -> None:
        csv_output = export_service.generate_csv(build_series())
        self.assertIn("# Source: World Bank World Development Indicators", csv_output)
        self.assertIn("# Indicators: NY.GDP.PCAP.CD, EG.FEC.RNEW.ZS", csv_output)
        self.assertIn("# Values: original", csv_output)

    def test_generate_csv_rows_cover_all_years(self) -> None:
        lines = export_service.generate_csv(build_series()).splitlines()
        rows = [line for line in lines if not line.startswith("#")]
        self.assertEqual(rows[0], '"year","GDP_per_Capita","Renewable_Energy"')
        self.assertEqual(rows[1], '"2019","46000.0",""')
        self.assertEqual(rows[2], '"2020","","19.1"')
        self.assertEqual(rows[3], '"2021","51203.6",""')

    def test_generate_csv_normalized_values(self) -> None:
        csv_output = export_service.generate_csv(build_series(), original=False)
        self.assertIn("# Values: normalized", csv_output)
        self.assertIn('"2021","1.0",""', csv_output)

    def test_generate_csv_empty(self) -> None:
        self.assertEqual(export_service.generate_csv([]), "")

    def test_generate_json_round_trips_series(self) -> None:
        payload = json.loads(export_service.generate_json(build_series()))
        self.assertEqual(payload["metadata"]["seriesCount"], 2)
        self.assertEqual(payload["series"][0]["label"], "GDP per Capita")
        self.assertIsNone(payload["series"][0]["data"][1]["originalValue"])

    def test_to_frame_is_indexed_by_year(self) -> None:
        frame = export_service.to_frame(build_series())
        self.assertEqual(frame.index.name, "year")
        self.assertEqual(list(frame.index), [2019, 2020, 2021])
        self.assertEqual(frame.loc[2021, "GDP per Capita"], 51203.6)
        self.assertTrue(math.isnan(frame.loc[2019, "Renewable Energy %"]))

    def test_generate_filename_uses_indicator(self) -> None:
        filename = export_service.generate_filename(build_series(), "csv", country="Germany")
        self.assertTrue(filename.startswith("NY_GDP_PCAP_CD_and_1_more_Germany_"))
        self.assertTrue(filename.endswith(".csv"))

    def test_generate_filename_without_data(self) -> None:
        filename = export_service.generate_filename([], "json")
        self.assertTrue(filename.startswith("export_"))
        self.assertTrue(filename.endswith(".json"))


if __name__ == "__main__":
    unittest.main()

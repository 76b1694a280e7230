import json
import math

import numpy as np
import pandas as pd
import pytest

from econdash.exceptions import (
    DataNotAvailableError,
    EconDashError,
    InvalidNormalizationMethodError,
    get_error_response,
)
from econdash.models import (
    ABSENT,
    Absent,
    CountryMetadata,
    IndicatorObservation,
    Present,
    TimeSeriesPoint,
    coerce_number,
    reading_of,
    value_of,
)
from econdash.utils.serialization import json_serialize


class TestReadings:
    @pytest.mark.parametrize("raw", [None, True, float("nan"), float("inf"), "abc", "", object()])
    def test_unusable_values_are_absent(self, raw):
        assert coerce_number(raw) is None
        assert reading_of(raw) is ABSENT

    def test_numbers_and_numeric_strings(self):
        assert reading_of(3) == Present(3.0)
        assert reading_of(" 4.5 ") == Present(4.5)
        assert reading_of(np.float64(2.0)) == Present(2.0)

    def test_absent_is_a_falsy_singleton(self):
        assert Absent() is ABSENT
        assert not ABSENT
        assert repr(ABSENT) == "ABSENT"
        assert value_of(ABSENT) is None
        assert value_of(Present(1.5)) == 1.5


class TestIndicatorObservation:
    def test_from_worldbank_record(self, make_record):
        observation = IndicatorObservation.from_worldbank(
            make_record("DEU", "DE", "Germany", "2020", "46772.8")
        )
        assert observation.countryId == "DE"
        assert observation.countryName == "Germany"
        assert observation.countryIso3 == "DEU"
        assert observation.indicatorId == "NY.GDP.PCAP.CD"
        assert observation.year == 2020
        assert observation.reading == Present(46772.8)

    def test_flat_record_and_unusable_date(self):
        observation = IndicatorObservation.from_worldbank(
            {"countryIso3": "FRA", "date": "  ", "value": None}
        )
        assert observation.countryIso3 == "FRA"
        assert observation.date is None
        assert observation.year is None
        assert observation.reading is ABSENT

    def test_models_pass_through(self):
        observation = IndicatorObservation(countryIso3="BRA")
        assert IndicatorObservation.from_worldbank(observation) is observation


def test_gap_point():
    point = TimeSeriesPoint.gap(2001)
    assert (point.year, point.value, point.originalValue) == (2001, None, None)
    assert point.reading is ABSENT
    assert point.original_reading is ABSENT


def test_country_metadata_from_restcountries(restcountries_records):
    country = CountryMetadata.from_restcountries(restcountries_records[0])
    assert (country.code, country.cca2, country.name) == ("DEU", "DE", "Germany")
    assert country.population == 83240525


class TestErrors:
    def test_error_payload(self):
        error = InvalidNormalizationMethodError("log")
        payload = get_error_response(error)
        assert payload["error"] == "InvalidNormalizationMethodError"
        assert payload["details"] == {"method": "log", "field": "method"}

    def test_source_is_recorded(self):
        error = DataNotAvailableError("no daily block", source="open-meteo")
        assert isinstance(error, EconDashError)
        assert error.to_dict()["details"] == {"source": "open-meteo"}

    def test_unexpected_errors(self):
        payload = get_error_response(RuntimeError("boom"))
        assert payload == {"error": "InternalError", "message": "boom", "details": {}}


def test_json_serialize_handles_numpy_and_pandas():
    payload = {
        "point": TimeSeriesPoint(year=2020, value=0.5, originalValue=19.1),
        "count": np.int64(3),
        "ratio": np.float32(math.nan),
        "flags": np.array([True, False]),
        "when": pd.Timestamp("2024-01-06"),
    }
    decoded = json.loads(json_serialize(payload))
    assert decoded["point"] == {"year": 2020, "value": 0.5, "originalValue": 19.1}
    assert decoded["count"] == 3
    assert decoded["ratio"] is None
    assert decoded["flags"] == [True, False]
    assert decoded["when"].startswith("2024-01-06")

import math

from econdash.models import IndicatorObservation
from econdash.services.map_data import (
    MAP_PALETTE,
    NO_DATA_COLOR,
    create_color_scale,
    format_value,
    join_features,
    legend_items,
    to_map_dictionary,
    value_domain,
)


def test_unmapped_codes_are_dropped(make_record):
    records = [
        make_record("USA", "US", "United States", "2020", 42),
        make_record("ZZZ", "ZZ", "Nowhere", "2020", 10),
    ]
    assert to_map_dictionary(records) == {"US": 42}


def test_null_and_nan_values_are_dropped(make_record):
    records = [
        make_record("FRA", "FR", "France", "2020", None),
        make_record("DEU", "DE", "Germany", "2020", float("nan")),
        make_record("ITA", "IT", "Italy", "2020", 18.2),
        make_record("", "1W", "World", "2020", 19.0),
    ]
    assert to_map_dictionary(records) == {"IT": 18.2}


def test_duplicate_codes_keep_last_value(make_record):
    records = [
        make_record("usa", "US", "United States", "2020", 1.0),
        make_record("USA", "US", "United States", "2020", 2.0),
    ]
    assert to_map_dictionary(records) == {"US": 2.0}


def test_accepts_observation_models():
    observations = [IndicatorObservation(countryIso3="BRA", value=45.0)]
    assert to_map_dictionary(observations) == {"BR": 45.0}


def test_empty_inputs():
    assert to_map_dictionary(None) == {}
    assert to_map_dictionary([]) == {}
    assert value_domain({}) is None


def test_value_domain():
    assert value_domain({"US": 10.0, "BR": 45.0, "DE": 19.0}) == (10.0, 45.0)


class TestColorScale:
    def test_buckets_span_domain(self):
        scale = create_color_scale((0.0, 80.0))
        assert scale(0.0) == MAP_PALETTE[0]
        assert scale(9.9) == MAP_PALETTE[0]
        assert scale(10.0) == MAP_PALETTE[1]
        assert scale(75.0) == MAP_PALETTE[-1]

    def test_values_outside_domain_are_clamped(self):
        scale = create_color_scale((0.0, 80.0))
        assert scale(-5.0) == MAP_PALETTE[0]
        assert scale(500.0) == MAP_PALETTE[-1]

    def test_missing_value_uses_no_data_color(self):
        scale = create_color_scale((0.0, 1.0))
        assert scale(None) == NO_DATA_COLOR
        assert scale(math.nan) == NO_DATA_COLOR

    def test_bucket_bounds_cover_domain(self):
        bounds = create_color_scale((0.0, 80.0)).bucket_bounds()
        assert len(bounds) == len(MAP_PALETTE)
        assert bounds[0] == (0.0, 10.0)
        assert bounds[-1] == (70.0, 80.0)


def test_legend_items_are_evenly_spaced():
    items = legend_items(0.0, 60.0, steps=7)
    assert [item.value for item in items] == ["0.0", "10.0", "20.0", "30.0", "40.0", "50.0", "60.0"]
    assert items[0].color == MAP_PALETTE[0]
    assert items[-1].color == MAP_PALETTE[-1]


def test_join_features_attaches_values_without_mutating_input():
    features = [
        {"type": "Feature", "id": "840", "properties": {"name": "United States"}},
        {"type": "Feature", "id": "004", "properties": {"name": "Afghanistan"}},
        {"type": "Feature", "id": None, "properties": {"name": "N. Cyprus"}},
    ]
    scale = create_color_scale((0.0, 80.0))

    joined = join_features(features, {"US": 12.0}, scale)

    assert joined[0]["properties"]["countryCode"] == "US"
    assert joined[0]["properties"]["value"] == 12.0
    assert joined[0]["properties"]["fill"] == MAP_PALETTE[1]
    assert joined[1]["properties"]["countryCode"] == "AF"
    assert joined[1]["properties"]["value"] is None
    assert joined[1]["properties"]["fill"] == NO_DATA_COLOR
    assert joined[2]["properties"]["countryCode"] is None
    assert "countryCode" not in features[0]["properties"]


def test_format_value():
    assert format_value(None) == "N/A"
    assert format_value(12.345) == "12.3"
    assert format_value(3.14159, decimals=3) == "3.142"

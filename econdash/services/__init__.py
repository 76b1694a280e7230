"""Chart data preparation services."""
from .map_data import to_map_dictionary
from .normalization import NormalizationMethod, normalize, normalize_min_max, normalize_z_score
from .timeseries import DEFAULT_YEAR_RANGE, build_series, common_year_range, fill_gaps

__all__ = [
    "to_map_dictionary",
    "NormalizationMethod",
    "normalize",
    "normalize_min_max",
    "normalize_z_score",
    "DEFAULT_YEAR_RANGE",
    "build_series",
    "common_year_range",
    "fill_gaps",
]

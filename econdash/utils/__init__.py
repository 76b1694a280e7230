"""Utility functions for econdash."""
from .country_codes import (
    CountryCodeResolver,
    iso_to_iso3,
    iso3_to_iso2,
    numeric_to_iso2,
)
from .serialization import (
    NumpyPandasEncoder,
    json_serialize,
)

__all__ = [
    # Country code translation
    'CountryCodeResolver',
    'iso_to_iso3',
    'iso3_to_iso2',
    'numeric_to_iso2',
    # Serialization utilities
    'NumpyPandasEncoder',
    'json_serialize',
]

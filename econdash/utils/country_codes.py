"""
Country code translation between the schemes used by the dashboard's sources.

- World Bank indicator records carry ISO Alpha-3 codes (``countryiso3code``)
- REST Countries and the compare view key countries by ISO Alpha-2 (``cca2``)
- The world TopoJSON identifies shapes by UN M49 numeric code ("004", "840")

The tables are hand-maintained and deliberately partial. A code missing from
a table is a normal outcome (aggregates, territories, regions) and resolves
to None instead of raising.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional, Union

logger = logging.getLogger(__name__)


# ISO Alpha-2 -> ISO Alpha-3
_ISO2_TO_ISO3 = {
    # North America
    "US": "USA", "CA": "CAN", "MX": "MEX",
    # South America
    "BR": "BRA", "AR": "ARG", "CL": "CHL", "CO": "COL", "PE": "PER",
    "VE": "VEN", "EC": "ECU", "BO": "BOL", "PY": "PRY", "UY": "URY",
    # Western Europe
    "GB": "GBR", "FR": "FRA", "DE": "DEU", "IT": "ITA", "ES": "ESP",
    "PT": "PRT", "NL": "NLD", "BE": "BEL", "AT": "AUT", "CH": "CHE",
    # Nordic
    "SE": "SWE", "NO": "NOR", "DK": "DNK", "FI": "FIN", "IS": "ISL", "IE": "IRL",
    # Central & Eastern Europe
    "PL": "POL", "CZ": "CZE", "HU": "HUN", "RO": "ROU", "BG": "BGR",
    "HR": "HRV", "SI": "SVN", "SK": "SVK", "LT": "LTU", "LV": "LVA", "EE": "EST",
    # Former Soviet states
    "RU": "RUS", "UA": "UKR", "BY": "BLR", "MD": "MDA", "GE": "GEO",
    "AM": "ARM", "AZ": "AZE",
    # Asia
    "CN": "CHN", "JP": "JPN", "KR": "KOR", "IN": "IND", "ID": "IDN",
    "TH": "THA", "MY": "MYS", "SG": "SGP", "PH": "PHL", "VN": "VNM",
    "PK": "PAK", "BD": "BGD",
    # Middle East
    "IR": "IRN", "IQ": "IRQ", "SA": "SAU", "AE": "ARE", "IL": "ISR", "TR": "TUR",
    # Africa
    "EG": "EGY", "ZA": "ZAF", "NG": "NGA", "KE": "KEN", "ET": "ETH",
    "GH": "GHA", "TZ": "TZA", "UG": "UGA", "MA": "MAR", "DZ": "DZA",
    "TN": "TUN", "LY": "LBY", "SD": "SDN",
    # Oceania
    "AU": "AUS", "NZ": "NZL",
}

# UN M49 numeric (zero-padded) -> ISO Alpha-2, keyed the way the world TopoJSON ids are
_NUMERIC_TO_ISO2 = {
    "004": "AF", "008": "AL", "010": "AQ", "012": "DZ", "016": "AS", "020": "AD",
    "024": "AO", "031": "AZ", "032": "AR", "036": "AU", "040": "AT", "044": "BS",
    "050": "BD", "051": "AM", "056": "BE", "064": "BT", "068": "BO", "070": "BA",
    "072": "BW", "076": "BR", "084": "BZ", "090": "SB", "096": "BN", "100": "BG",
    "104": "MM", "108": "BI", "112": "BY", "116": "KH", "120": "CM", "124": "CA",
    "140": "CF", "144": "LK", "148": "TD", "152": "CL", "156": "CN", "158": "TW",
    "170": "CO", "178": "CG", "180": "CD", "188": "CR", "191": "HR", "192": "CU",
    "196": "CY", "203": "CZ", "204": "BJ", "208": "DK", "214": "DO", "218": "EC",
    "222": "SV", "226": "GQ", "231": "ET", "232": "ER", "233": "EE", "238": "FK",
    "242": "FJ", "246": "FI", "250": "FR", "260": "TF", "262": "DJ", "266": "GA",
    "268": "GE", "270": "GM", "276": "DE", "288": "GH", "300": "GR", "304": "GL",
    "320": "GT", "324": "GN", "328": "GY", "332": "HT", "340": "HN", "348": "HU",
    "352": "IS", "356": "IN", "360": "ID", "364": "IR", "368": "IQ", "372": "IE",
    "376": "IL", "380": "IT", "384": "CI", "388": "JM", "392": "JP", "398": "KZ",
    "400": "JO", "404": "KE", "408": "KP", "410": "KR", "414": "KW", "417": "KG",
    "418": "LA", "422": "LB", "426": "LS", "428": "LV", "430": "LR", "434": "LY",
    "440": "LT", "442": "LU", "450": "MG", "454": "MW", "458": "MY", "466": "ML",
    "470": "MT", "478": "MR", "484": "MX", "496": "MN", "498": "MD", "499": "ME",
    "504": "MA", "508": "MZ", "512": "OM", "516": "NA", "524": "NP", "528": "NL",
    "540": "NC", "548": "VU", "554": "NZ", "558": "NI", "562": "NE", "566": "NG",
    "578": "NO", "586": "PK", "591": "PA", "598": "PG", "600": "PY", "604": "PE",
    "608": "PH", "616": "PL", "620": "PT", "624": "GW", "626": "TL", "630": "PR",
    "634": "QA", "642": "RO", "643": "RU", "646": "RW", "682": "SA", "686": "SN",
    "688": "RS", "694": "SL", "702": "SG", "703": "SK", "704": "VN", "705": "SI",
    "706": "SO", "710": "ZA", "716": "ZW", "724": "ES", "728": "SS", "729": "SD",
    "732": "EH", "740": "SR", "748": "SZ", "752": "SE", "756": "CH", "760": "SY",
    "762": "TJ", "764": "TH", "768": "TG", "780": "TT", "784": "AE", "788": "TN",
    "792": "TR", "795": "TM", "800": "UG", "804": "UA", "807": "MK", "818": "EG",
    "826": "GB", "834": "TZ", "840": "US", "854": "BF", "858": "UY", "860": "UZ",
    "862": "VE", "887": "YE", "894": "ZM",
    # Not ISO 3166-1 members; the map layer still needs a key for these shapes
    "383": "XK",     # Kosovo, user-assigned code used by the EU, IMF and World Bank
    "999": "SO-SL",  # Somaliland, placeholder id in the world TopoJSON
}

ISO2_TO_ISO3: Mapping[str, str] = MappingProxyType(_ISO2_TO_ISO3)
ISO3_TO_ISO2: Mapping[str, str] = MappingProxyType({v: k for k, v in _ISO2_TO_ISO3.items()})
NUMERIC_TO_ISO2: Mapping[str, str] = MappingProxyType(_NUMERIC_TO_ISO2)


def _alpha_key(code: Optional[str]) -> Optional[str]:
    if not code or not isinstance(code, str):
        return None
    key = code.strip().upper()
    return key or None


def _numeric_key(code: Union[str, int, None]) -> Optional[str]:
    if code is None or isinstance(code, bool):
        return None
    text = str(code).strip()
    if not text.isdigit():
        return None
    return text.zfill(3)


class CountryCodeResolver:
    """
    Lookups between ISO Alpha-2, ISO Alpha-3 and UN M49 numeric codes.

    Every lookup is a pure read over the module tables and returns None for
    codes the tables do not cover.
    """

    ISO2_TO_ISO3 = ISO2_TO_ISO3
    ISO3_TO_ISO2 = ISO3_TO_ISO2
    NUMERIC_TO_ISO2 = NUMERIC_TO_ISO2

    @classmethod
    def to_iso3(cls, iso2_code: Optional[str]) -> Optional[str]:
        """
        Convert ISO Alpha-2 code to ISO Alpha-3 code.

        Args:
            iso2_code: ISO Alpha-2 country code (e.g., "US", "de")

        Returns:
            ISO Alpha-3 code (e.g., "USA", "DEU") or None if not found
        """
        key = _alpha_key(iso2_code)
        if key is None:
            return None
        iso3 = cls.ISO2_TO_ISO3.get(key)
        if iso3 is None:
            logger.debug(f"No ISO3 mapping for '{iso2_code}'")
        return iso3

    @classmethod
    def iso3_to_iso2(cls, iso3_code: Optional[str]) -> Optional[str]:
        """
        Convert ISO Alpha-3 code to ISO Alpha-2 code.

        Args:
            iso3_code: ISO Alpha-3 country code (e.g., "USA", "deu")

        Returns:
            ISO Alpha-2 code (e.g., "US", "DE") or None if not found
        """
        key = _alpha_key(iso3_code)
        if key is None:
            return None
        iso2 = cls.ISO3_TO_ISO2.get(key)
        if iso2 is None:
            logger.debug(f"No ISO2 mapping for '{iso3_code}'")
        return iso2

    @classmethod
    def numeric_to_iso2(cls, numeric_code: Union[str, int, None]) -> Optional[str]:
        """
        Convert a UN M49 numeric code to ISO Alpha-2.

        Accepts "004", "4" or 4. Placeholder entries ("XK", "SO-SL") are
        returned as stored.
        """
        key = _numeric_key(numeric_code)
        if key is None:
            return None
        iso2 = cls.NUMERIC_TO_ISO2.get(key)
        if iso2 is None:
            logger.debug(f"No ISO2 mapping for numeric code '{numeric_code}'")
        return iso2

    @classmethod
    def to_iso2(cls, code: Union[str, int, None]) -> Optional[str]:
        """Resolve an ISO2, ISO3 or numeric code to ISO Alpha-2."""
        if _numeric_key(code) is not None:
            return cls.numeric_to_iso2(code)
        key = _alpha_key(code)
        if key is None:
            return None
        if len(key) == 2:
            known = key in cls.ISO2_TO_ISO3 or key in cls.NUMERIC_TO_ISO2.values()
            return key if known else None
        if len(key) == 3:
            return cls.iso3_to_iso2(key)
        return None


def iso_to_iso3(code: Optional[str]) -> Optional[str]:
    return CountryCodeResolver.to_iso3(code)


def iso3_to_iso2(code: Optional[str]) -> Optional[str]:
    return CountryCodeResolver.iso3_to_iso2(code)


def numeric_to_iso2(code: Union[str, int, None]) -> Optional[str]:
    return CountryCodeResolver.numeric_to_iso2(code)

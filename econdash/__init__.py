"""
econdash: data preparation for the world indicators dashboard.

Turns World Bank indicator records, REST Countries metadata and Open-Meteo
weather archives into the structures the charts draw: ISO2-keyed map values,
aligned and normalized yearly series, bubble rows and calendar cells.
"""

__version__ = "0.1.0"

"""Weather package - holds API client, models, and report normalization."""

from pwsreport.errors import (
    DecodeError,
    EmptyObservationError,
    FetchTimeoutError,
    NetworkError,
    WeatherAPIError,
)

from .api import WeatherAPI
from .models import CurrentConditions, ImperialUnits, Observation
from .report import NormalizedReport, ReportNormalizer, TemperaturePair
from .utils import UnitConverter

__all__ = [
    "CurrentConditions",
    "DecodeError",
    "EmptyObservationError",
    "FetchTimeoutError",
    "ImperialUnits",
    "NetworkError",
    "NormalizedReport",
    "Observation",
    "ReportNormalizer",
    "TemperaturePair",
    "UnitConverter",
    "WeatherAPI",
    "WeatherAPIError",
]

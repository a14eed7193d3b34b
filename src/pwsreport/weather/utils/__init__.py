"""Weather utility classes."""

from pwsreport.weather.utils.units import UnitConverter

__all__ = ["UnitConverter"]

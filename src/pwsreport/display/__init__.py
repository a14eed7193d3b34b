"""Display package for rendering current-conditions reports."""

from .render import ReportRenderer, format_temperature_pair, format_wind

__all__ = ["ReportRenderer", "format_temperature_pair", "format_wind"]

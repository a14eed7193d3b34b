"""Report rendering components."""

from __future__ import annotations

from typing import Any, ClassVar, Final, Literal

from jinja2 import DictLoader, Environment, Template, select_autoescape

from pwsreport.utils.formatting import MISSING, format_optional
from pwsreport.weather.report import NormalizedReport, TemperaturePair

ReportFormat = Literal["text", "html"]

TEXT_CONTENT_TYPE: Final = "text/plain; charset=utf-8"
HTML_CONTENT_TYPE: Final = "text/html; charset=utf-8"


def format_temperature_pair(pair: TemperaturePair | None) -> str:
    """Render a temperature pair as ``75°F (23°C)``."""
    if pair is None:
        return MISSING
    return f"{pair.fahrenheit}°F ({pair.celsius}°C)"


def format_wind(report: NormalizedReport) -> str:
    """Render wind as ``E(90°) @ 5-10 mph``."""
    direction = (
        f"{report.wind_compass}({report.wind_direction}°)"
        if report.wind_direction is not None
        else MISSING
    )
    speed = format_optional(report.wind_speed)
    # A gust is only shown next to a known speed
    if report.wind_speed is not None and report.wind_gust is not None:
        speed = f"{speed}-{report.wind_gust}"
    return f"{direction} @ {speed} mph"


class ReportRenderer:
    """Renders a NormalizedReport as plain text or HTML.

    Templates are kept inline and compiled once per renderer. Both forms
    carry the same lines; HTML output is autoescaped.
    """

    TEXT_TEMPLATE: ClassVar[str] = """\
Current Conditions for {{ report.station_id }} at {{ report.observed_time }} are:
Current: {{ report.temperature | temperature }}
Feels Like: {{ report.feels_like | temperature }}
Dew Point: {{ report.dew_point | temperature }}
Humidity: {{ report.humidity | optional("%") }}
Wind: {{ report | wind }}
"""

    HTML_TEMPLATE: ClassVar[str] = """\
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>Current Conditions - {{ report.station_id }}</title>
    <style>
        body { font-family: sans-serif; margin: 40px; }
        dt { font-weight: bold; }
        dd { margin: 0 0 12px 0; }
    </style>
</head>
<body>
    <h1>Current Conditions for {{ report.station_id }}</h1>
    <p class="observed">Observed at {{ report.observed_time }} ({{ report.timezone_name }})</p>
    <dl>
        <dt>Current</dt><dd>{{ report.temperature | temperature }}</dd>
        <dt>Feels Like</dt><dd>{{ report.feels_like | temperature }}</dd>
        <dt>Dew Point</dt><dd>{{ report.dew_point | temperature }}</dd>
        <dt>Humidity</dt><dd>{{ report.humidity | optional("%") }}</dd>
        <dt>Wind</dt><dd>{{ report | wind }}</dd>
    </dl>
</body>
</html>
"""

    def __init__(self) -> None:
        self.env = Environment(
            loader=DictLoader(
                {
                    "report.txt.j2": self.TEXT_TEMPLATE,
                    "report.html.j2": self.HTML_TEMPLATE,
                }
            ),
            autoescape=select_autoescape(["html", "html.j2"]),
            keep_trailing_newline=True,
        )
        self._register_filters()
        self.text_template: Template = self.env.get_template("report.txt.j2")
        self.html_template: Template = self.env.get_template("report.html.j2")

    def _register_filters(self) -> None:
        """Register custom filters with the Jinja environment."""
        self.env.filters.update(
            {
                "temperature": format_temperature_pair,
                "wind": format_wind,
                "optional": format_optional,
            }
        )

    def render(self, report: NormalizedReport, fmt: ReportFormat = "text") -> str:
        """Render the report in the requested format.

        Args:
            report: Normalized report
            fmt: ``"text"`` or ``"html"``

        Returns:
            Rendered document
        """
        template = self.html_template if fmt == "html" else self.text_template
        context: dict[str, Any] = {"report": report}
        return template.render(**context)

    @staticmethod
    def content_type(fmt: ReportFormat) -> str:
        """HTTP content type for a rendered format."""
        return HTML_CONTENT_TYPE if fmt == "html" else TEXT_CONTENT_TYPE

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from pwsreport.display.render import ReportRenderer, format_temperature_pair, format_wind
from pwsreport.weather.report import NormalizedReport, TemperaturePair


@pytest.fixture
def report() -> NormalizedReport:
    return NormalizedReport(
        station_id="KDEN1",
        observed_at=datetime(2024, 5, 3, 17, 45, 12, tzinfo=timezone.utc),
        observed_time="11:45:12",
        timezone_name="America/Denver",
        temperature=TemperaturePair(fahrenheit=75, celsius=23),
        feels_like=TemperaturePair(fahrenheit=77, celsius=25),
        feels_like_source="heatIndex",
        dew_point=TemperaturePair(fahrenheit=48, celsius=8),
        humidity=40,
        wind_direction=90,
        wind_compass="E",
        wind_speed=5,
        wind_gust=10,
    )


@pytest.fixture
def renderer() -> ReportRenderer:
    return ReportRenderer()


def test_text_report_lines(renderer: ReportRenderer, report: NormalizedReport) -> None:
    text = renderer.render(report)
    assert text.splitlines() == [
        "Current Conditions for KDEN1 at 11:45:12 are:",
        "Current: 75°F (23°C)",
        "Feels Like: 77°F (25°C)",
        "Dew Point: 48°F (8°C)",
        "Humidity: 40%",
        "Wind: E(90°) @ 5-10 mph",
    ]
    assert text.endswith("\n")


def test_html_report(renderer: ReportRenderer, report: NormalizedReport) -> None:
    html = renderer.render(report, "html")
    assert "<html" in html.lower()
    assert "KDEN1" in html
    assert "75°F (23°C)" in html
    assert "E(90°) @ 5-10 mph" in html


def test_html_output_is_escaped(renderer: ReportRenderer, report: NormalizedReport) -> None:
    hostile = replace(report, station_id="<script>x</script>")
    html = renderer.render(hostile, "html")
    assert "<script>x</script>" not in html
    assert "&lt;script&gt;" in html


def test_missing_values_render_placeholder(report: NormalizedReport) -> None:
    partial = replace(report, wind_direction=None, wind_compass=None, wind_gust=None)
    assert format_wind(partial) == "-- @ 5 mph"
    assert format_temperature_pair(None) == "--"


def test_missing_speed_hides_gust(report: NormalizedReport) -> None:
    assert format_wind(replace(report, wind_speed=None)) == "E(90°) @ -- mph"


def test_content_types() -> None:
    assert ReportRenderer.content_type("text").startswith("text/plain")
    assert ReportRenderer.content_type("html").startswith("text/html")

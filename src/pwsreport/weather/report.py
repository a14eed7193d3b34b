"""Normalization of a raw observation into report fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Final, Literal

from pwsreport.utils.time import REPORT_TIME_FORMAT, TimeUtils
from pwsreport.vault.models import StationConfig
from pwsreport.weather.models import Observation
from pwsreport.weather.utils.units import UnitConverter

logger: Final = logging.getLogger(__name__)

FeelsLikeSource = Literal["heatIndex", "windChill"]


@dataclass(frozen=True)
class TemperaturePair:
    """A temperature in whole °F with its truncated °C equivalent."""

    fahrenheit: int
    celsius: int

    @classmethod
    def from_fahrenheit(cls, fahrenheit: int) -> TemperaturePair:
        return cls(fahrenheit=fahrenheit, celsius=UnitConverter.to_celsius(fahrenheit))


@dataclass(frozen=True)
class NormalizedReport:
    """Read-only view of one observation, ready for rendering.

    Built once per request and discarded with the response.
    """

    station_id: str
    observed_at: datetime
    observed_time: str
    timezone_name: str
    temperature: TemperaturePair
    feels_like: TemperaturePair
    feels_like_source: FeelsLikeSource
    dew_point: TemperaturePair | None
    humidity: int | None
    wind_direction: int | None
    wind_compass: str | None
    wind_speed: int | None
    wind_gust: int | None
    pressure: float | None = None
    precip_rate: float | None = None
    precip_total: float | None = None
    uv: float | None = None
    solar_radiation: float | None = None
    neighborhood: str | None = None
    elevation: int | None = None


class ReportNormalizer:
    """Derives report fields from a raw observation.

    - °F/°C pairs for temperature, feels-like and dew point
    - Heat index above the threshold, wind chill at or below it
    - Compass label for the wind bearing
    - Observation time in the station's timezone
    """

    # Feels-like uses heat index strictly above this temperature (°F)
    HEAT_INDEX_THRESHOLD: ClassVar[int] = 70

    @classmethod
    def select_feels_like(cls, obs: Observation) -> tuple[int, FeelsLikeSource]:
        """Pick heat index or wind chill for the observed temperature.

        Falls back to the air temperature when the chosen reading is absent.
        """
        imperial = obs.imperial
        if imperial.temp > cls.HEAT_INDEX_THRESHOLD:
            value, source = imperial.heat_index, "heatIndex"
        else:
            value, source = imperial.wind_chill, "windChill"

        if value is None:
            logger.debug("%s missing for %s, using air temperature", source, obs.station_id)
            value = imperial.temp
        return value, source

    def normalize(self, obs: Observation, config: StationConfig) -> NormalizedReport:
        """Build the normalized report.

        Args:
            obs: Observation returned by the weather API
            config: Station configuration (supplies the timezone)

        Returns:
            NormalizedReport for rendering

        Raises:
            ConfigError: If the configured timezone is unknown
        """
        observed_at = TimeUtils.to_local_datetime(obs.obs_time_utc, config.timezone_name)
        feels_like, source = self.select_feels_like(obs)
        imperial = obs.imperial

        return NormalizedReport(
            station_id=obs.station_id,
            observed_at=observed_at,
            observed_time=TimeUtils.format_datetime(observed_at, REPORT_TIME_FORMAT),
            timezone_name=config.timezone_name,
            temperature=TemperaturePair.from_fahrenheit(imperial.temp),
            feels_like=TemperaturePair.from_fahrenheit(feels_like),
            feels_like_source=source,
            dew_point=(
                TemperaturePair.from_fahrenheit(imperial.dewpt)
                if imperial.dewpt is not None
                else None
            ),
            humidity=obs.humidity,
            wind_direction=obs.winddir,
            wind_compass=(
                UnitConverter.deg_to_compass(obs.winddir) if obs.winddir is not None else None
            ),
            wind_speed=imperial.wind_speed,
            wind_gust=imperial.wind_gust,
            pressure=imperial.pressure,
            precip_rate=imperial.precip_rate,
            precip_total=imperial.precip_total,
            uv=obs.uv,
            solar_radiation=obs.solar_radiation,
            neighborhood=obs.neighborhood,
            elevation=imperial.elev,
        )

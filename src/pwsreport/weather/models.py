"""Typed models for PWS current-observation responses.

Only the fields used by the report, plus the station metadata the provider
always sends, are modelled. ``realtimeFrequency`` carries no usable value and
is intentionally ignored.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pwsreport.errors import EmptyObservationError
from pwsreport.utils.time import TimeUtils

# ─────────────────────────── primitives ──────────────────────────────────────


class ImperialUnits(BaseModel):
    """Readings reported in imperial units (``units=e``)."""

    temp: int
    heat_index: int | None = Field(None, alias="heatIndex")
    dewpt: int | None = None
    wind_chill: int | None = Field(None, alias="windChill")
    wind_speed: int | None = Field(None, alias="windSpeed")
    wind_gust: int | None = Field(None, alias="windGust")
    pressure: float | None = None
    precip_rate: float | None = Field(None, alias="precipRate")
    precip_total: float | None = Field(None, alias="precipTotal")
    elev: int | None = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)


# ─────────────────────────── observation ─────────────────────────────────────


class Observation(BaseModel):
    """A single current observation from a personal weather station."""

    station_id: str = Field(..., alias="stationID")
    obs_time_utc: datetime = Field(..., alias="obsTimeUtc")
    obs_time_local: str | None = Field(None, alias="obsTimeLocal")
    neighborhood: str | None = None
    software_type: str | None = Field(None, alias="softwareType")
    country: str | None = None
    solar_radiation: float | None = Field(None, alias="solarRadiation")
    lon: float | None = None
    lat: float | None = None
    epoch: int | None = None
    uv: float | None = None
    winddir: int | None = None
    humidity: int | None = None
    qc_status: int | None = Field(None, alias="qcStatus")
    imperial: ImperialUnits

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @field_validator("obs_time_utc")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        return TimeUtils.ensure_utc(v)

    @property
    def is_quality_checked(self) -> bool:
        """True when the provider's QC status marks the reading as passed."""
        return self.qc_status == 1


# ─────────────────────────── top-level response ──────────────────────────────


class CurrentConditions(BaseModel):
    """Body of the ``observations/current`` endpoint."""

    observations: list[Observation]

    def latest(self, station_id: str = "") -> Observation:
        """Get the first (most recent) observation.

        Args:
            station_id: Station requested, used in the error message

        Returns:
            First observation in the response

        Raises:
            EmptyObservationError: If the response holds no observations
        """
        if not self.observations:
            raise EmptyObservationError(station_id or "unknown")
        return self.observations[0]

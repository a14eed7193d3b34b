"""Typed models for the Vault login exchange and the station secret."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pwsreport.errors import ConfigError
from pwsreport.utils.formatting import mask_secret
from pwsreport.utils.time import TimeUtils


@dataclass(frozen=True)
class IdentityAssertion:
    """Signed proof that this instance holds its platform identity.

    One instance is built per login attempt and discarded afterwards.
    """

    signing_time: datetime
    role: str
    certificate_pem: str
    signature: bytes = field(repr=False)

    @property
    def signing_time_str(self) -> str:
        """Signing time exactly as it appears in the signed payload."""
        return TimeUtils.format_signing_time(self.signing_time)

    @property
    def encoded_signature(self) -> str:
        """URL-safe base64 signature as sent to the broker."""
        return base64.urlsafe_b64encode(self.signature).decode("ascii")


@dataclass(frozen=True)
class AccessToken:
    """Vault client token obtained at startup.

    Only ``token`` is used; lease details are kept for diagnostics.
    """

    token: str = field(repr=False)
    accessor: str | None = None
    lease_duration: int = 0
    renewable: bool = False
    policies: tuple[str, ...] = ()

    @classmethod
    def from_auth(cls, auth: Mapping[str, Any]) -> AccessToken:
        """Build a token from the ``auth`` block of a login response."""
        return cls(
            token=auth["client_token"],
            accessor=auth.get("accessor"),
            lease_duration=int(auth.get("lease_duration") or 0),
            renewable=bool(auth.get("renewable", False)),
            policies=tuple(auth.get("policies") or ()),
        )


class StationConfig(BaseModel):
    """Weather station settings stored in Vault.

    All five fields are required and must be non-empty; the model is
    immutable for the lifetime of the process.
    """

    REQUIRED_KEYS: ClassVar[tuple[str, ...]] = ("api", "sid", "units", "key", "tz")

    api_base_url: str = Field(..., alias="api", min_length=1, description="Observation endpoint")
    station_id: str = Field(..., alias="sid", min_length=1, description="PWS station id")
    units: str = Field(..., min_length=1, description="Provider units code, e.g. 'e'")
    api_key: str = Field(..., alias="key", min_length=1, repr=False, description="Provider API key")
    timezone_name: str = Field(..., alias="tz", min_length=1, description="IANA timezone")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @classmethod
    def from_secret(cls, data: Mapping[str, Any] | None) -> StationConfig:
        """Validate a secret payload into a station config.

        Args:
            data: The ``data`` mapping read from Vault

        Returns:
            Validated StationConfig

        Raises:
            ConfigError: If the payload is empty, a field is missing or blank,
                or the timezone is unknown
        """
        if not data:
            raise ConfigError("Station secret contains no data")

        missing = [k for k in cls.REQUIRED_KEYS if not data.get(k)]
        if missing:
            raise ConfigError(f"Station secret is missing required fields: {', '.join(missing)}")

        try:
            config = cls.model_validate({k: str(data[k]) for k in cls.REQUIRED_KEYS})
        except ValidationError as err:
            raise ConfigError(f"Invalid station secret:\n{err}", err) from err

        TimeUtils.get_timezone(config.timezone_name)
        return config

    def masked(self) -> dict[str, str]:
        """Config as a dict with the API key masked, for display."""
        return {
            "api": self.api_base_url,
            "sid": self.station_id,
            "units": self.units,
            "key": mask_secret(self.api_key),
            "tz": self.timezone_name,
        }

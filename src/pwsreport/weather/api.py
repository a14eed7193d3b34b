"""Weather API client for PWS current observations."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Final

import requests
from pydantic import ValidationError
from urllib3.exceptions import ReadTimeoutError

from pwsreport.errors import (
    DecodeError,
    EmptyObservationError,
    FetchTimeoutError,
    NetworkError,
    WeatherAPIError,
)
from pwsreport.vault.models import StationConfig

from .models import CurrentConditions, Observation

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: Final = 10.0
BODY_CHUNK_SIZE: Final = 1

JSON_HEADERS: Final = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

# Human‑readable explanations for common HTTP errors
HTTP_ERROR_MAP: Final = {
    400: "Bad request - check station id or units",
    401: "Invalid or missing API key",
    403: "API key not authorized for this station",
    404: "Station returned no data",
    429: "Rate limit exceeded",
    500: "Weather provider internal error",
    502: "Bad gateway at weather provider",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}


class WeatherAPI:
    """Client for the PWS ``observations/current`` endpoint.

    Handles the request, network error handling and decoding of the raw
    JSON into a strongly-typed Observation. ``timeout`` bounds the whole
    exchange, from connect to the last body byte.

    Without an injected session each fetch opens its own, so one client
    can be shared by the server's worker threads.
    """

    def __init__(
        self, session: requests.Session | None = None, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        """Initialize the weather API client.

        Args:
            session: HTTP session to use (a fresh one per fetch if None)
            timeout: Deadline for a whole request in seconds
        """
        self.session = session
        self.timeout = timeout

    @staticmethod
    def build_params(config: StationConfig) -> dict[str, str]:
        """Query parameters for a current-conditions request."""
        return {
            "stationId": config.station_id,
            "format": "json",
            "units": config.units,
            "apiKey": config.api_key,
        }

    def fetch_current(self, config: StationConfig) -> Observation:
        """Retrieve the current observation for the configured station.

        Args:
            config: Station configuration read from Vault

        Returns:
            Most recent observation

        Raises:
            FetchTimeoutError: When the provider does not answer in time
            NetworkError: When network connectivity issues occur
            EmptyObservationError: When the station has no current observation
            DecodeError: When the body is not JSON of the expected shape
            WeatherAPIError: For other API-related errors
        """
        if self.session is not None:
            status, body = self._get(self.session, config)
        else:
            with requests.Session() as session:
                status, body = self._get(session, config)

        # The provider answers 204 when the station has not reported recently
        if status == 204:
            raise EmptyObservationError(config.station_id, code=204)

        if status != 200:
            raise self._error_from_response(status, body)

        try:
            raw: Any = json.loads(body)
        except ValueError as exc:
            raise DecodeError("Weather provider returned invalid JSON", exc) from exc

        try:
            conditions = CurrentConditions.model_validate(raw)
        except ValidationError as exc:
            raise DecodeError(
                f"Unexpected weather response shape: {exc.error_count()} error(s)", exc
            ) from exc

        observation = conditions.latest(config.station_id)
        if not observation.is_quality_checked:
            logger.warning(
                "Observation for %s has not passed QC (status %s)",
                observation.station_id,
                observation.qc_status,
            )
        logger.debug(
            "Fetched observation for %s at %s", observation.station_id, observation.obs_time_utc
        )
        return observation

    def _get(self, session: requests.Session, config: StationConfig) -> tuple[int, bytes]:
        """Send the request and read the body before the deadline.

        Returns:
            HTTP status code and raw body
        """
        deadline = time.monotonic() + self.timeout
        try:
            resp = session.get(
                config.api_base_url,
                params=self.build_params(config),
                headers=JSON_HEADERS,
                timeout=self.timeout,
                stream=True,
            )
            try:
                chunks: list[bytes] = []
                # Read byte by byte so the deadline is checked as data arrives
                for chunk in resp.iter_content(chunk_size=BODY_CHUNK_SIZE):
                    if time.monotonic() > deadline:
                        raise self._timed_out()
                    chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise self._timed_out()
            finally:
                resp.close()
        except requests.RequestException as exc:
            if _is_timeout(exc):
                raise self._timed_out(exc) from exc
            logger.warning("Weather API network error: %s", exc)
            raise NetworkError(f"Network error: {exc}", exc) from exc

        return resp.status_code, b"".join(chunks)

    def _timed_out(self, exc: Exception | None = None) -> FetchTimeoutError:
        logger.warning("Weather API timed out after %ss", self.timeout)
        return FetchTimeoutError(
            f"Weather provider did not respond within {self.timeout:g}s", exc
        )

    @staticmethod
    def _error_from_response(status: int, body: bytes) -> WeatherAPIError:
        text = body.decode("utf-8", errors="replace")
        default = HTTP_ERROR_MAP.get(status, text or "Unknown error")
        try:
            decoded = json.loads(text)
        except ValueError:
            decoded = None

        payload: dict[str, Any] = {"message": default}
        if isinstance(decoded, dict):
            # Provider errors look like {"errors": [{"error": {"message": ...}}]}
            errors = decoded.get("errors") or []
            if errors and isinstance(errors[0], dict):
                detail = errors[0].get("error", {}).get("message")
                if detail:
                    payload["message"] = detail
            elif decoded.get("message"):
                payload["message"] = decoded["message"]

        err = WeatherAPIError.from_response(payload, status)
        # Client errors point at our station config; server errors are the provider's
        level = logging.ERROR if err.is_client_error else logging.WARNING
        logger.log(level, "Weather API error: %s - %s", status, err.message)
        return err


def _is_timeout(exc: requests.RequestException) -> bool:
    """True for connect/read timeouts, including ones raised while streaming the body."""
    if isinstance(exc, requests.Timeout):
        return True
    # requests re-raises a body read timeout as a plain ConnectionError
    return bool(exc.args) and isinstance(exc.args[0], ReadTimeoutError)

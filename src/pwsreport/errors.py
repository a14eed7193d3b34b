"""Exception classes for the weather report service.

This module defines a hierarchy of exception classes covering the two
phases of the application: startup (identity signing, Vault login and
secret reads) and per-request work (fetching and normalizing observations).
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class PwsReportError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            original_error: The underlying exception, if any
        """
        super().__init__(message)
        self.message: str = message
        self.original_error = original_error


# ─────────────────────────── startup errors ──────────────────────────────────


class StartupError(PwsReportError):
    """Raised while acquiring credentials or configuration.

    Startup errors are fatal: the process must not serve traffic without
    a valid token and station configuration.
    """


class ConfigError(StartupError):
    """Missing or invalid configuration or secrets."""


class IdentityFileError(StartupError):
    """The instance certificate or private key could not be read or parsed."""


class AuthError(StartupError):
    """The secret broker rejected the login or returned no credentials."""


# ─────────────────────────── request errors ──────────────────────────────────


class WeatherAPIError(PwsReportError):
    """Error during a weather provider request or response parsing.

    Raised when the API request fails due to network issues, an invalid
    API key, rate limiting, or malformed response data.
    """

    def __init__(
        self, code: int, message: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code or 0 when no response was received
            message: Human-readable error message
            response: Optional raw API response for debugging
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message = message
        self.response: Optional[Dict[str, Any]] = response

    @property
    def is_client_error(self) -> bool:
        """True for 400-499 status codes."""
        return 400 <= self.code < 500

    @classmethod
    def from_response(
        cls, response: Dict[str, Any], status_code: int = 0
    ) -> WeatherAPIError:
        """Create an error from a provider response.

        Args:
            response: Decoded response body (may be empty)
            status_code: HTTP status code

        Returns:
            Appropriate WeatherAPIError subclass
        """
        if 400 <= status_code < 500:
            if status_code == 401 or status_code == 403:
                return AuthenticationError(
                    status_code, response.get("message", "Authentication failed")
                )
            elif status_code == 404:
                return NotFoundError(
                    status_code, response.get("message", "Resource not found")
                )
            elif status_code == 429:
                return RateLimitError(
                    status_code, response.get("message", "Rate limit exceeded")
                )
            return ClientError(
                status_code, response.get("message", "Client error"), response
            )
        elif status_code >= 500:
            return ServerError(
                status_code, response.get("message", "Server error"), response
            )

        return cls(status_code, response.get("message", "Unknown error"), response)


class NetworkError(WeatherAPIError):
    """Raised when a network issue prevents API communication."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with network error details.

        Args:
            message: Description of the network error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error


class FetchTimeoutError(NetworkError):
    """Raised when the provider does not answer within the client timeout."""


class AuthenticationError(WeatherAPIError):
    """Raised when the provider rejects the API key."""

    pass


class NotFoundError(WeatherAPIError):
    """Raised when the provider does not know the requested station."""

    pass


class RateLimitError(WeatherAPIError):
    """Raised when rate limits are exceeded."""

    pass


class ClientError(WeatherAPIError):
    """Raised for general 4xx client errors."""

    pass


class ServerError(WeatherAPIError):
    """Raised for 5xx server errors."""

    pass


class DecodeError(WeatherAPIError):
    """Raised when the response body is not JSON or has an unexpected shape."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with parsing error details.

        Args:
            message: Description of the parsing error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error


class EmptyObservationError(WeatherAPIError):
    """Raised when the provider returns no observations for the station."""

    def __init__(self, station_id: str, code: int = 0) -> None:
        super().__init__(code, f"No current observations for station {station_id}")
        self.station_id = station_id

# src/pwsreport/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pwsreport.errors import ConfigError

# Layout of the signing time inside the identity assertion; the broker
# rebuilds the signed payload with the same layout.
SIGNING_TIME_FORMAT: Final = "%Y-%m-%dT%H:%M:%SZ"

# Zero-padded 24-hour clock used in the report header
REPORT_TIME_FORMAT: Final = "%H:%M:%S"


class TimeUtils:
    """Time-related utility functions.

    Centralized utilities for working with dates and times:
    - UTC normalization of timestamps
    - IANA timezone lookups and conversions
    - Datetime formatting
    """

    @staticmethod
    def now_utc() -> datetime:
        """Get the current time as an aware UTC datetime."""
        return datetime.now(UTC)

    @staticmethod
    def ensure_utc(dt: datetime) -> datetime:
        """Convert a datetime to UTC.

        Args:
            dt: Datetime object (assumed UTC if naive)

        Returns:
            Timezone-aware datetime in UTC
        """
        if dt.tzinfo is None:
            return dt.replace(tzinfo=UTC)
        return dt.astimezone(UTC)

    @staticmethod
    def format_signing_time(dt: datetime) -> str:
        """Format a datetime for the identity signing payload.

        Args:
            dt: Datetime to format (converted to UTC first)

        Returns:
            Second-precision UTC timestamp such as ``2024-05-03T17:45:12Z``
        """
        return TimeUtils.ensure_utc(dt).strftime(SIGNING_TIME_FORMAT)

    @staticmethod
    def get_timezone(timezone_name: str) -> ZoneInfo:
        """Look up an IANA timezone.

        Args:
            timezone_name: Timezone name, e.g. ``America/Denver``

        Returns:
            ZoneInfo object for the timezone

        Raises:
            ConfigError: If the name is empty or unknown
        """
        try:
            return ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigError(f"Unknown timezone: {timezone_name!r}", exc) from exc

    @staticmethod
    def to_local_datetime(dt: datetime, timezone_name: str) -> datetime:
        """Convert a UTC datetime into the named timezone.

        Args:
            dt: Datetime to convert (assumed UTC if naive)
            timezone_name: IANA timezone name

        Returns:
            Localized datetime object
        """
        return TimeUtils.ensure_utc(dt).astimezone(TimeUtils.get_timezone(timezone_name))

    @staticmethod
    def format_datetime(dt: datetime, format_string: str) -> str:
        """Format datetime with specified format string.

        Args:
            dt: Datetime to format
            format_string: strftime format string

        Returns:
            Formatted datetime string
        """
        return dt.strftime(format_string)

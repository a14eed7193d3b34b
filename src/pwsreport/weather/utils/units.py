"""Weather unit conversion utilities."""

from __future__ import annotations

from typing import ClassVar


class UnitConverter:
    """Weather unit conversion utilities.

    Provides the integer temperature conversion and the compass lookup used
    by the current-conditions report.
    """

    # 16 compass points; "N" appears twice so that the top bucket
    # (352°-359°) resolves without wrapping.
    DIRECTIONS: ClassVar[list[str]] = [
        "N",
        "NNE",
        "NE",
        "ENE",
        "E",
        "ESE",
        "SE",
        "SSE",
        "S",
        "SSW",
        "SW",
        "WSW",
        "W",
        "WNW",
        "NW",
        "NNW",
        "N",
    ]

    # Width of a compass bucket in whole degrees
    DIRECTION_STEP: ClassVar[int] = 22

    @staticmethod
    def to_celsius(fahrenheit: int) -> int:
        """Convert whole °F to whole °C, truncating toward zero.

        ``((f - 32) * 5) / 9`` in integer arithmetic, so ``0°F`` is ``-17°C``
        rather than the rounded ``-18°C``.
        """
        scaled = (fahrenheit - 32) * 5
        quotient = abs(scaled) // 9
        return quotient if scaled >= 0 else -quotient

    @classmethod
    def deg_to_compass(cls, deg: int) -> str:
        """Convert a wind bearing in whole degrees to a compass label."""
        return cls.DIRECTIONS[(deg % 360) // cls.DIRECTION_STEP]

"""Text and number formatting utilities."""

from __future__ import annotations

from typing import Any

MISSING = "--"


def format_optional(value: Any, suffix: str = "") -> str:
    """Format a possibly-missing reading with an optional unit suffix.

    Args:
        value: Reading to format (None renders as ``--``)
        suffix: Unit appended to present values

    Returns:
        Formatted string
    """
    if value is None:
        return MISSING
    return f"{value}{suffix}"


def mask_secret(secret: str, visible: int = 4) -> str:
    """Mask all but the last few characters of a secret.

    Args:
        secret: Secret value
        visible: Number of trailing characters left readable

    Returns:
        Masked string safe for logs and terminal output
    """
    if len(secret) <= visible:
        return "*" * len(secret)
    return "*" * (len(secret) - visible) + secret[-visible:]

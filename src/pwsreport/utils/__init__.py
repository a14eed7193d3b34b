"""Common utility functions and helpers for the pwsreport package."""

from pwsreport.utils.formatting import format_optional, mask_secret
from pwsreport.utils.time import TimeUtils

__all__ = [
    "TimeUtils",
    "format_optional",
    "mask_secret",
]

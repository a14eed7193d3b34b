"""Application settings management.

This package provides:
- EnvironmentSettings: Startup settings read from environment variables
"""

from pwsreport.settings.environment import EnvironmentSettings

__all__ = ["EnvironmentSettings"]

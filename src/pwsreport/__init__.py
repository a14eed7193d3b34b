"""Current-conditions report for a personal weather station, with Vault-held secrets."""

__version__ = "0.1.0"

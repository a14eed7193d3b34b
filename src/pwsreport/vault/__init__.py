"""Vault package - identity signing, login exchange and secret reads."""

from .client import CredentialExchangeClient, SecretReader
from .models import AccessToken, IdentityAssertion, StationConfig
from .signatures import IdentityProofSigner, verify_assertion

__all__ = [
    "AccessToken",
    "CredentialExchangeClient",
    "IdentityAssertion",
    "IdentityProofSigner",
    "SecretReader",
    "StationConfig",
    "verify_assertion",
]

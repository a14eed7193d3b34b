"""Signing of Cloud Foundry instance-identity assertions.

The broker verifies a login by rebuilding the payload

    signing_time + certificate_pem + role

and checking an RSA-PSS/SHA-256 signature over it against the public key of
the presented instance certificate. The signing time layout is therefore part
of the signed bytes and must match the broker's to the character.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Final

from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.serialization import load_pem_private_key

from pwsreport.errors import ConfigError, IdentityFileError
from pwsreport.utils.time import TimeUtils
from pwsreport.vault.models import IdentityAssertion

logger: Final = logging.getLogger(__name__)

# Environment variables set by the platform on every container
CERT_PATH_ENV: Final = "CF_INSTANCE_CERT"
KEY_PATH_ENV: Final = "CF_INSTANCE_KEY"


def _pss() -> padding.PSS:
    return padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=padding.PSS.MAX_LENGTH)


def signing_payload(signing_time: datetime, certificate_pem: str, role: str) -> bytes:
    """Build the canonical bytes covered by the signature.

    Args:
        signing_time: Time of signing (converted to UTC)
        certificate_pem: Instance certificate contents
        role: Vault role being logged into

    Returns:
        UTF-8 encoded payload
    """
    return (TimeUtils.format_signing_time(signing_time) + certificate_pem + role).encode("utf-8")


def _resolve_path(explicit: str | os.PathLike[str] | None, env_var: str, field: str) -> Path:
    value = os.fspath(explicit) if explicit else os.environ.get(env_var, "")
    if not value:
        raise ConfigError(f'"{field}" is required (pass it explicitly or set {env_var})')
    return Path(value)


def _read_text(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IdentityFileError(f"Unable to read instance {what} {path}: {exc}", exc) from exc


def _load_rsa_key(path: Path) -> rsa.RSAPrivateKey:
    try:
        key = load_pem_private_key(path.read_bytes(), password=None)
    except OSError as exc:
        raise IdentityFileError(f"Unable to read instance key {path}: {exc}", exc) from exc
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise IdentityFileError(f"Unable to parse instance key {path}: {exc}", exc) from exc

    if not isinstance(key, rsa.RSAPrivateKey):
        raise IdentityFileError(f"Instance key {path} is not an RSA private key")
    return key


class IdentityProofSigner:
    """Builds signed identity assertions for the Vault ``cf`` auth method.

    The signer performs file reads only; it never touches the network.
    Certificate and key paths fall back to ``CF_INSTANCE_CERT`` and
    ``CF_INSTANCE_KEY`` when not given.
    """

    def sign(
        self,
        role: str,
        cert_path: str | os.PathLike[str] | None = None,
        key_path: str | os.PathLike[str] | None = None,
        now: datetime | None = None,
    ) -> IdentityAssertion:
        """Sign an identity assertion for ``role``.

        Args:
            role: Vault role name
            cert_path: Path to the PEM instance certificate
            key_path: Path to the PEM RSA private key
            now: Signing time (default: current time)

        Returns:
            Immutable IdentityAssertion

        Raises:
            ConfigError: If the role or a path is missing
            IdentityFileError: If a file cannot be read or the key is unusable
        """
        if not role:
            raise ConfigError('"role" is required')

        cert_file = _resolve_path(cert_path, CERT_PATH_ENV, "cf_instance_cert")
        key_file = _resolve_path(key_path, KEY_PATH_ENV, "cf_instance_key")

        certificate_pem = _read_text(cert_file, "certificate")
        signing_time = TimeUtils.ensure_utc(now or TimeUtils.now_utc())

        key = _load_rsa_key(key_file)
        signature = key.sign(
            signing_payload(signing_time, certificate_pem, role), _pss(), hashes.SHA256()
        )

        logger.debug("Signed identity assertion for role %s at %s", role, signing_time)
        return IdentityAssertion(
            signing_time=signing_time,
            role=role,
            certificate_pem=certificate_pem,
            signature=signature,
        )


def verify_assertion(
    assertion: IdentityAssertion, public_key: rsa.RSAPublicKey | None = None
) -> bool:
    """Check an assertion's signature the way the broker does.

    Args:
        assertion: Assertion to verify
        public_key: Key to verify with (default: key of the embedded certificate)

    Returns:
        True if the signature matches the payload
    """
    if public_key is None:
        cert = x509.load_pem_x509_certificate(assertion.certificate_pem.encode("utf-8"))
        cert_key = cert.public_key()
        if not isinstance(cert_key, rsa.RSAPublicKey):
            return False
        public_key = cert_key

    payload = signing_payload(assertion.signing_time, assertion.certificate_pem, assertion.role)
    try:
        public_key.verify(assertion.signature, payload, _pss(), hashes.SHA256())
    except InvalidSignature:
        return False
    return True

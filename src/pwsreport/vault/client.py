"""Vault HTTP clients for the instance-identity login and the station secret."""

from __future__ import annotations

import logging
from typing import Any, Final

import requests
from typing_extensions import TypedDict

from pwsreport.errors import AuthError, ConfigError
from pwsreport.vault.models import AccessToken, IdentityAssertion, StationConfig

logger: Final = logging.getLogger(__name__)

DEFAULT_MOUNT: Final = "cf"
DEFAULT_SECRET_PATH: Final = "kv/pws"
DEFAULT_TIMEOUT: Final = 10.0
TOKEN_HEADER: Final = "X-Vault-Token"


class LoginRequest(TypedDict):
    """Body of ``POST auth/<mount>/login``."""

    role: str
    cf_instance_cert: str
    signing_time: str
    signature: str


class _VaultEndpoint:
    """Shared transport plumbing for requests against one Vault server."""

    def __init__(
        self,
        address: str,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the endpoint.

        Args:
            address: Vault base address, e.g. ``https://vault.example.com:8200``
            session: HTTP session to use (one is created if None)
            timeout: Timeout for each request in seconds
        """
        self.address = address.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.address}/v1/{path.strip('/')}"

    @staticmethod
    def _errors(resp: requests.Response) -> str:
        """Extract Vault's ``errors`` list from a failed response."""
        try:
            body = resp.json()
        except ValueError:
            return resp.text.strip() or resp.reason or "no response body"
        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            return "; ".join(str(e) for e in errors)
        return resp.reason or "no error details"


class CredentialExchangeClient(_VaultEndpoint):
    """Exchanges a signed identity assertion for a Vault token."""

    @staticmethod
    def build_login_request(assertion: IdentityAssertion) -> LoginRequest:
        """Build the login body for an assertion."""
        return {
            "role": assertion.role,
            "cf_instance_cert": assertion.certificate_pem,
            "signing_time": assertion.signing_time_str,
            "signature": assertion.encoded_signature,
        }

    def login(self, assertion: IdentityAssertion, mount: str = DEFAULT_MOUNT) -> AccessToken:
        """Log in with a signed assertion.

        A single request is made; nothing is retried.

        Args:
            assertion: Signed identity assertion
            mount: Mount path of the auth method

        Returns:
            Access token for subsequent reads

        Raises:
            AuthError: If the request fails or no token is returned
        """
        url = self._url(f"auth/{mount or DEFAULT_MOUNT}/login")
        try:
            resp = self.session.post(
                url, json=self.build_login_request(assertion), timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.warning("Vault login network error: %s", exc)
            raise AuthError(f"Vault login request failed: {exc}", exc) from exc

        if not resp.ok:
            raise AuthError(f"Vault login failed ({resp.status_code}): {self._errors(resp)}")

        try:
            secret: Any = resp.json() if resp.content else None
        except ValueError as exc:
            raise AuthError("Vault login returned a malformed response", exc) from exc

        if not secret:
            raise AuthError("empty response from credential provider")

        auth = secret.get("auth") if isinstance(secret, dict) else None
        if not auth or not auth.get("client_token"):
            raise AuthError("Vault login response did not include a client token")

        token = AccessToken.from_auth(auth)
        logger.info(
            "Logged in to Vault as role %s (policies: %s, lease %ss, renewable: %s)",
            assertion.role,
            ", ".join(token.policies) or "none",
            token.lease_duration,
            token.renewable,
        )
        logger.debug("Vault token accessor %s", token.accessor)
        return token


class SecretReader(_VaultEndpoint):
    """Reads the station configuration secret with an access token."""

    def read_config(self, token: AccessToken, path: str = DEFAULT_SECRET_PATH) -> StationConfig:
        """Read and validate the station configuration.

        KV version 2 responses (``data.data``) are unwrapped.

        Args:
            token: Token obtained from the login exchange
            path: Secret path, e.g. ``kv/pws``

        Returns:
            Validated StationConfig

        Raises:
            ConfigError: If the read fails, yields no data, or a field is missing
        """
        url = self._url(path)
        try:
            resp = self.session.get(
                url, headers={TOKEN_HEADER: token.token}, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.warning("Vault read network error: %s", exc)
            raise ConfigError(f"Unable to read secret {path}: {exc}", exc) from exc

        if resp.status_code == 404:
            raise ConfigError(f"No secret found at {path}")
        if not resp.ok:
            raise ConfigError(
                f"Unable to read secret {path} ({resp.status_code}): {self._errors(resp)}"
            )

        try:
            body: Any = resp.json() if resp.content else None
        except ValueError as exc:
            raise ConfigError(f"Secret {path} returned a malformed response", exc) from exc

        data = body.get("data") if isinstance(body, dict) else None
        if isinstance(data, dict) and isinstance(data.get("data"), dict) and "metadata" in data:
            data = data["data"]

        config = StationConfig.from_secret(data)
        logger.info("Loaded station config for %s from %s", config.station_id, path)
        return config

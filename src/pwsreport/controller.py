# filepath: src/pwsreport/controller.py
"""Core controller for the weather report service."""

from __future__ import annotations

import logging
from typing import Final

import requests

from pwsreport.display.render import ReportFormat, ReportRenderer
from pwsreport.settings import EnvironmentSettings
from pwsreport.vault.client import CredentialExchangeClient, SecretReader
from pwsreport.vault.models import AccessToken, StationConfig
from pwsreport.vault.signatures import IdentityProofSigner
from pwsreport.weather.api import WeatherAPI
from pwsreport.weather.report import NormalizedReport, ReportNormalizer

logger: Final = logging.getLogger(__name__)


class ReportService:
    """Main controller for the weather report service.

    This class orchestrates the two phases of the application:
    - Startup: sign the instance identity, log in to Vault and read the
      station configuration (see ``bootstrap``)
    - Per request: fetch the current observation, normalize it and
      render the report

    The station config and access token are never mutated after startup,
    so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        config: StationConfig,
        token: AccessToken | None = None,
        weather_api: WeatherAPI | None = None,
        normalizer: ReportNormalizer | None = None,
        renderer: ReportRenderer | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Station configuration read at startup
            token: Vault token obtained at startup
            weather_api: Optional custom weather API client
            normalizer: Optional custom report normalizer
            renderer: Optional custom report renderer
        """
        self.config = config
        self.token = token
        self.weather_api = weather_api or WeatherAPI()
        self.normalizer = normalizer or ReportNormalizer()
        self.renderer = renderer or ReportRenderer()

    @classmethod
    def bootstrap(
        cls,
        settings: EnvironmentSettings,
        vault_session: requests.Session | None = None,
        weather_session: requests.Session | None = None,
        signer: IdentityProofSigner | None = None,
    ) -> ReportService:
        """Run the startup sequence and build a ready service.

        Signing, login and the secret read run once, in order. Any failure
        propagates as a StartupError and the service is not created.

        Args:
            settings: Process settings
            vault_session: HTTP session for Vault requests
            weather_session: HTTP session for weather provider requests; when
                None each fetch opens its own, which keeps worker threads apart
            signer: Optional custom identity signer

        Returns:
            ReportService holding the station config and token
        """
        signer = signer or IdentityProofSigner()
        assertion = signer.sign(
            settings.role,
            cert_path=settings.cf_instance_cert,
            key_path=settings.cf_instance_key,
        )

        vault_session = vault_session or requests.Session()
        token = CredentialExchangeClient(
            settings.vault_addr, vault_session, settings.timeout
        ).login(assertion, mount=settings.auth_mount)

        config = SecretReader(settings.vault_addr, vault_session, settings.timeout).read_config(
            token, settings.secret_path
        )

        logger.info("Startup complete for station %s", config.station_id)
        return cls(
            config,
            token=token,
            weather_api=WeatherAPI(weather_session, timeout=settings.timeout),
        )

    def build_report(self) -> NormalizedReport:
        """Fetch and normalize the current observation."""
        observation = self.weather_api.fetch_current(self.config)
        return self.normalizer.normalize(observation, self.config)

    def render_report(self, fmt: ReportFormat = "text") -> str:
        """Fetch, normalize and render the current-conditions report.

        Raises:
            WeatherAPIError: When fetching or decoding the observation fails
            ConfigError: When the station timezone is unknown
        """
        return self.renderer.render(self.build_report(), fmt)

"""Process settings loaded from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import ClassVar

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from pwsreport.errors import ConfigError

# Load environment variables from .env file(s)
load_dotenv()


class EnvironmentSettings(BaseModel):
    """Startup settings for the report service.

    Values come from environment variables (see ``ENV_VARS``); a ``.env``
    file in the working directory is loaded first. Station settings are not
    configured here: they are read from Vault at startup.
    """

    # Field name -> environment variable
    ENV_VARS: ClassVar[dict[str, str]] = {
        "vault_addr": "VAULT_ADDR",
        "role": "ROLE",
        "cf_instance_cert": "CF_INSTANCE_CERT",
        "cf_instance_key": "CF_INSTANCE_KEY",
        "auth_mount": "VAULT_AUTH_MOUNT",
        "secret_path": "PWS_SECRET_PATH",
        "port": "PORT",
        "timeout": "PWS_TIMEOUT",
    }

    vault_addr: str = Field("https://127.0.0.1:8200", min_length=1, description="Vault address")
    role: str = Field("", description="Vault role for the cf auth method")
    cf_instance_cert: str | None = Field(None, description="Path to the instance certificate")
    cf_instance_key: str | None = Field(None, description="Path to the instance private key")
    auth_mount: str = Field("cf", min_length=1, description="Mount path of the cf auth method")
    secret_path: str = Field("kv/pws", min_length=1, description="Path of the station secret")
    port: int = Field(8080, gt=0, le=65535, description="HTTP listen port")
    timeout: float = Field(10.0, gt=0, description="Outbound request timeout (seconds)")

    @classmethod
    def load(cls, environ: Mapping[str, str] | None = None) -> EnvironmentSettings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read (default: ``os.environ``)

        Returns:
            Validated EnvironmentSettings

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        data = {
            field: env[var] for field, var in cls.ENV_VARS.items() if env.get(var, "") != ""
        }
        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise ConfigError(f"Invalid environment configuration:\n{err}", err) from err

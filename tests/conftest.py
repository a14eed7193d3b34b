import copy
import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from pwsreport.vault.models import StationConfig

DATA_DIR = Path(__file__).parent / "data"


def make_response(
    status_code: int = 200, payload: Any = None, text: str | None = None
) -> Mock:
    """Build a stand-in for requests.Response."""
    resp = Mock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    resp.reason = "OK" if resp.ok else "Error"
    if payload is not None:
        resp.text = json.dumps(payload)
        resp.json.return_value = payload
    else:
        resp.text = text or ""
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    resp.content = resp.text.encode("utf-8")
    resp.iter_content.side_effect = lambda chunk_size=1, decode_unicode=False: iter(
        [resp.content] if resp.content else []
    )
    return resp


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def instance_cert_pem(rsa_key: rsa.RSAPrivateKey) -> str:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "app-instance")])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(rsa_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=5))
        .not_valid_after(now + timedelta(days=1))
        .sign(rsa_key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM).decode("utf-8")


@pytest.fixture
def identity_files(
    tmp_path: Path, rsa_key: rsa.RSAPrivateKey, instance_cert_pem: str
) -> tuple[Path, Path]:
    """Write the instance certificate and PKCS#1 key; return their paths."""
    cert_path = tmp_path / "instance.crt"
    key_path = tmp_path / "instance.key"
    cert_path.write_text(instance_cert_pem, encoding="utf-8")
    key_path.write_bytes(
        rsa_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return cert_path, key_path


@pytest.fixture
def station_secret() -> dict[str, str]:
    return {
        "api": "https://x/v2/pws/observations/current",
        "sid": "KDEN1",
        "units": "e",
        "key": "abc",
        "tz": "America/Denver",
    }


@pytest.fixture
def station_config(station_secret: dict[str, str]) -> StationConfig:
    return StationConfig.from_secret(station_secret)


@pytest.fixture
def current_payload() -> dict[str, Any]:
    return json.loads((DATA_DIR / "current_sample.json").read_text(encoding="utf-8"))


@pytest.fixture
def observation_payload(current_payload: dict[str, Any]) -> dict[str, Any]:
    """A deep copy of the first observation, safe to modify."""
    return copy.deepcopy(current_payload["observations"][0])


@pytest.fixture
def response_factory():
    """Factory for fake requests.Response objects."""
    return make_response

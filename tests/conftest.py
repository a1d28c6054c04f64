import base64
import json
import time
from unittest.mock import MagicMock

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa


def _b64_segment(data: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()


def _private_pem(private_key, private_format=serialization.PrivateFormat.PKCS8) -> bytes:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=private_format,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_pem(rsa_key) -> bytes:
    return _private_pem(rsa_key)


@pytest.fixture(scope="session")
def rsa_pkcs1_pem(rsa_key) -> bytes:
    return _private_pem(rsa_key, serialization.PrivateFormat.TraditionalOpenSSL)


@pytest.fixture(scope="session")
def ec_pem() -> bytes:
    return _private_pem(ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture
def make_token():
    """Factory building JWT shaped tokens, expiring `expires_in` seconds from now."""

    def _make(expires_in=3600, issued_ago=60, **claims):
        now = int(time.time())
        payload = {
            "iss": "api.transip.nl",
            "aud": "api.transip.nl",
            "jti": "wSeHvHPGtrH2zM5V",
            "iat": now - issued_ago,
            "nbf": now - issued_ago,
            "exp": now + expires_in,
            "cid": "600000",
            "ro": False,
            "gk": True,
            "kv": True,
        }
        payload.update(claims)
        header = {"typ": "JWT", "alg": "RS512", "jti": "wSeHvHPGtrH2zM5V"}
        return f"{_b64_segment(header)}.{_b64_segment(payload)}.c2lnbmF0dXJl"

    return _make


@pytest.fixture
def make_response():
    """Factory building real `requests.Response` objects with a canned, already read body."""

    def _make(status_code=200, body=b"", headers=None):
        response = requests.Response()
        response.status_code = status_code
        response._content = body.encode() if isinstance(body, str) else body
        response._content_consumed = True
        response.headers.update(headers or {})
        return response

    return _make


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)

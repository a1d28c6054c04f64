import io
from unittest.mock import patch

import pytest

from transip_client.authenticator import (
    KeyManager,
    KeyManagerCredential,
    PrivateKeyCredential,
    StaticTokenCredential,
    make_credential,
    read_private_key,
)
from transip_client.authenticator import _credentials
from transip_client.entities import ConfigurationError, MalformedTokenError, TokenExpiredError


class NullKeyManager(KeyManager):
    def sign(self, body: bytes) -> str:
        return ""


class TestReadPrivateKey:

    def test_bytes(self, rsa_pem):
        assert read_private_key(rsa_pem) == rsa_pem

    def test_pem_string(self, rsa_pem):
        assert read_private_key(rsa_pem.decode()) == rsa_pem

    def test_binary_stream(self, rsa_pem):
        assert read_private_key(io.BytesIO(rsa_pem)) == rsa_pem

    def test_text_stream(self, rsa_pem):
        assert read_private_key(io.StringIO(rsa_pem.decode())) == rsa_pem

    def test_path(self, tmp_path, rsa_pem):
        key_path = tmp_path / "transip.key"
        key_path.write_bytes(rsa_pem)

        assert read_private_key(str(key_path)) == rsa_pem
        assert read_private_key(key_path) == rsa_pem

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            read_private_key(str(tmp_path / "missing.key"))


class TestMakeCredential:

    def test_static_token(self, make_token):
        raw = make_token()

        credential = make_credential(token=raw)

        assert isinstance(credential, StaticTokenCredential)
        assert credential.token.raw == raw

    def test_static_token_cannot_sign(self, make_token):
        with pytest.raises(TokenExpiredError):
            make_credential(token=make_token()).sign(b"body")

    def test_malformed_static_token(self):
        with pytest.raises(MalformedTokenError):
            make_credential(token="not-a-token")

    def test_private_key(self, rsa_pem):
        credential = make_credential(private_key=rsa_pem)

        assert credential == PrivateKeyCredential(rsa_pem)
        assert rsa_pem.decode() not in repr(credential)

    def test_private_key_path(self, tmp_path, rsa_pem):
        key_path = tmp_path / "transip.key"
        key_path.write_bytes(rsa_pem)

        assert make_credential(private_key_path=str(key_path)) == PrivateKeyCredential(rsa_pem)

    def test_key_manager(self):
        key_manager = NullKeyManager()

        assert make_credential(key_manager=key_manager) == KeyManagerCredential(key_manager)

    def test_no_source(self):
        with pytest.raises(ConfigurationError):
            make_credential()

    def test_token_takes_precedence(self, make_token, rsa_pem):
        with patch.object(_credentials, "logger") as logger:
            credential = make_credential(token=make_token(), private_key=rsa_pem, key_manager=NullKeyManager())

        assert isinstance(credential, StaticTokenCredential)
        logger.warning.assert_called_once()

    def test_private_key_takes_precedence_over_key_manager(self, rsa_pem):
        with patch.object(_credentials, "logger") as logger:
            credential = make_credential(private_key=rsa_pem, key_manager=NullKeyManager())

        assert isinstance(credential, PrivateKeyCredential)
        logger.warning.assert_called_once()

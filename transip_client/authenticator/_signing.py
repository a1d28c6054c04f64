"""
Signatures over token request bodies.

A request is signed either with the account's RSA private key (PKCS8 PEM,
PKCS#1 v1.5 padding over a SHA-512 digest) or by handing the body to a
KeyManager, for setups where the key lives in a vault or HSM.
"""

from __future__ import annotations

import abc
import base64
import binascii
import re

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.serialization import load_der_private_key

from ..entities import DecodeError, NoSignerAvailableError, ParseError, SigningError, UnsupportedKeyTypeError

PKCS8_PEM_TYPE = "PRIVATE KEY"

# The armor is unwrapped here rather than by load_pem_private_key so that a
# missing or corrupt PEM block (DecodeError) stays distinct from DER that is
# not a PKCS8 key (ParseError).
_PEM_BLOCK = re.compile(
    rb"-----BEGIN (?P<type>[A-Z0-9 ]+)-----\s*(?P<body>.*?)\s*-----END (?P=type)-----",
    re.DOTALL,
)


class KeyManager(abc.ABC):
    """
    Offloads the signing of token requests to a third party.
    """

    @abc.abstractmethod
    def sign(self, body: bytes) -> str:
        """
        Return the base64 encoded signature of `body`.
        """
        pass


def decode_pem(key: bytes) -> tuple[str, bytes]:
    match = _PEM_BLOCK.search(key)
    if match is None:
        raise DecodeError("could not decode private key")

    body = b"".join(match.group("body").split())
    try:
        der = base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise DecodeError("could not decode private key") from e

    return match.group("type").decode(), der


def load_rsa_private_key(key: bytes) -> rsa.RSAPrivateKey:
    block_type, der = decode_pem(key)
    if block_type != PKCS8_PEM_TYPE:
        raise ParseError(f"could not parse private key: expected a PKCS8 '{PKCS8_PEM_TYPE}' block, got '{block_type}'")

    try:
        parsed = load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise ParseError(f"could not parse private key: {e}") from e

    if not isinstance(parsed, rsa.RSAPrivateKey):
        raise UnsupportedKeyTypeError(type(parsed).__name__)

    return parsed


def sign_with_key(body: bytes, key: bytes) -> str:
    private_key = load_rsa_private_key(key)

    try:
        signature = private_key.sign(body, padding.PKCS1v15(), hashes.SHA512())
    except ValueError as e:
        raise SigningError(f"could not sign data: {e}") from e

    return base64.b64encode(signature).decode()


def sign_externally(body: bytes, key_manager: KeyManager | None) -> str:
    if key_manager is None:
        raise NoSignerAvailableError()

    try:
        return key_manager.sign(body)
    except Exception as e:
        raise SigningError(f"key manager could not sign data: {e}") from e

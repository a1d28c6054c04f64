from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import IO, Union

from ..entities import ConfigurationError, Token, TokenExpiredError
from ..utils.logging_utils import get_logger
from ._signing import KeyManager, sign_externally, sign_with_key

logger = get_logger()

PrivateKeySource = Union[bytes, str, "os.PathLike[str]", IO[bytes], IO[str]]


@dataclass(frozen=True)
class StaticTokenCredential:
    token: Token

    def sign(self, body: bytes) -> str:
        raise TokenExpiredError()


@dataclass(frozen=True)
class PrivateKeyCredential:
    pem: bytes = field(repr=False)

    def sign(self, body: bytes) -> str:
        return sign_with_key(body, self.pem)


@dataclass(frozen=True)
class KeyManagerCredential:
    key_manager: KeyManager

    def sign(self, body: bytes) -> str:
        return sign_externally(body, self.key_manager)


Credential = Union[StaticTokenCredential, PrivateKeyCredential, KeyManagerCredential]


def read_private_key(source: PrivateKeySource) -> bytes:
    """
    Accepts the PEM itself (bytes, or a str holding a PEM block), a readable
    stream, or a path to the key file.
    """

    if isinstance(source, bytes):
        return source

    if isinstance(source, str) and "-----BEGIN" in source:
        return source.encode()

    if isinstance(source, (str, os.PathLike)):
        try:
            with open(source, "rb") as fd:
                return fd.read()
        except OSError as e:
            raise ConfigurationError(f"error while opening private key file: {e}") from e

    try:
        content = source.read()
    except OSError as e:
        raise ConfigurationError(f"error while reading private key: {e}") from e

    return content.encode() if isinstance(content, str) else content


def make_credential(
    *,
    token: str | None = None,
    private_key: PrivateKeySource | None = None,
    private_key_path: str | None = None,
    key_manager: KeyManager | None = None,
) -> Credential:
    """
    Picks the credential source by precedence:
    static token > private key (given directly, then by path) > key manager.
    """

    sources = [
        name
        for name, value in (
            ("token", token),
            ("private key", private_key),
            ("private key path", private_key_path),
            ("key manager", key_manager),
        )
        if value
    ]

    if not sources:
        raise ConfigurationError("a private key, private key path, token or key manager is required")

    if len(sources) > 1:
        logger.warning("Multiple credential sources configured (%s), only `%s` will be used", ", ".join(sources), sources[0])

    if token:
        return StaticTokenCredential(Token.parse(token))

    if private_key:
        return PrivateKeyCredential(read_private_key(private_key))

    if private_key_path:
        return PrivateKeyCredential(read_private_key(os.path.expanduser(private_key_path)))

    return KeyManagerCredential(key_manager)

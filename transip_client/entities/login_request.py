import json
import secrets
import time
from dataclasses import asdict, dataclass
from datetime import timedelta

NONCE_BYTES = 16


def format_expiration(expiration: timedelta) -> str:
    return f"{int(expiration.total_seconds())} seconds"


@dataclass(frozen=True)
class LoginRequest:
    """
    Body of the token request. Field order is the canonical order, the
    serialized bytes are exactly what gets signed and sent.
    """

    login: str
    nonce: str
    read_only: bool
    expiration_time: str
    label: str
    global_key: bool

    @classmethod
    def create(
        cls,
        login: str,
        *,
        read_only: bool = False,
        expiration: timedelta = timedelta(days=1),
        whitelisted: bool = False,
        label_prefix: str = "transip-client",
    ) -> "LoginRequest":
        return cls(
            login=login,
            nonce=secrets.token_hex(NONCE_BYTES),
            read_only=read_only,
            expiration_time=format_expiration(expiration),
            label=f"{label_prefix}-{int(time.time())}",
            global_key=not whitelisted,
        )

    @property
    def whitelisted(self) -> bool:
        return not self.global_key

    def to_json_bytes(self) -> bytes:
        return json.dumps(asdict(self), separators=(",", ":")).encode()

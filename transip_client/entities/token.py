import base64
import binascii
import json
from dataclasses import dataclass
from datetime import datetime, timezone

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, ValidationError

from .exceptions import MalformedTokenError


class TokenClaims(BaseModel):
    """Claims carried in the payload segment of an issued token."""

    model_config = ConfigDict(extra="ignore")

    issued_at: AwareDatetime = Field(..., alias="iat")
    expires_at: AwareDatetime = Field(..., alias="exp")
    read_only: bool = Field(False, alias="ro")
    global_key: bool = Field(True, alias="gk")


def _decode_segment(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded.encode())


@dataclass(frozen=True)
class Token:
    raw: str
    issued_at: datetime
    expires_at: datetime
    read_only: bool = False
    whitelisted: bool = False

    @classmethod
    def parse(cls, raw: str) -> "Token":
        """
        Reads the claims out of a JWT shaped bearer string.

        Only the payload is inspected, the signature is left for the API to
        verify.
        """

        if not isinstance(raw, str):
            raise MalformedTokenError(f"token should be a string, got {type(raw).__name__}")

        parts = raw.strip().split(".") if raw else []
        if len(parts) != 3:
            raise MalformedTokenError(f"token should consist of 3 parts, got {len(parts)}")

        try:
            payload = json.loads(_decode_segment(parts[1]))
        except (binascii.Error, UnicodeDecodeError, ValueError) as e:
            raise MalformedTokenError(f"could not decode token payload: {e}") from e

        if not isinstance(payload, dict):
            raise MalformedTokenError("token payload is not a JSON object")

        try:
            claims = TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise MalformedTokenError(f"token payload has missing or invalid claims: {e}") from e

        return cls(
            raw=raw.strip(),
            issued_at=claims.issued_at,
            expires_at=claims.expires_at,
            read_only=claims.read_only,
            whitelisted=not claims.global_key,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        if now is None:
            now = datetime.now(timezone.utc)

        return now >= self.expires_at

    def authorization_header_value(self) -> str:
        return f"Bearer {self.raw}"

    def __repr__(self):
        # never leak the bearer value into logs
        return f"Token(expires_at={self.expires_at.isoformat()}, read_only={self.read_only}, whitelisted={self.whitelisted})"

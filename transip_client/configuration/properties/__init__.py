import os
from datetime import timedelta
from typing import Annotated, Optional

from pydantic import Field, ValidationError, field_validator

from ._base import BaseConfig as _BaseConfig
from ._logging import FileLoggingConfig as FileLoggingConfig
from ._logging import LoggingConfig
from ._token_cache import FileTokenCacheConfig as FileTokenCacheConfig
from ._token_cache import MemoryTokenCacheConfig as MemoryTokenCacheConfig
from ._token_cache import TokenCacheConfig

DEFAULT_BASE_URL = "https://api.transip.nl/v6"
DEFAULT_LABEL_PREFIX = "transip-client"
DEFAULT_USER_AGENT = "transip-client/0.1.0"


class ClientConfig(_BaseConfig):
    account_name: str = Field("", description="Login name of the account the token is requested for")
    token: Optional[str] = Field(None, description="Pre-issued bearer token, takes precedence over any private key")
    private_key_path: Optional[str] = Field(None, description="Path to the PEM (PKCS8) RSA private key used to sign login requests")
    url: str = Field(DEFAULT_BASE_URL, description="Base URL of the API")
    read_only: bool = Field(False, description="Request read-only tokens")
    token_expiration: timedelta = Field(timedelta(days=1), description="Requested validity of freshly issued tokens")
    token_whitelisted: bool = Field(False, description="Restrict issued tokens to the requesting IP address")
    test_mode: bool = Field(False, description="Add test=1 to every API call so no changes are executed")
    request_timeout: float = Field(30, description="HTTP request timeout in seconds")
    label_prefix: str = Field(DEFAULT_LABEL_PREFIX, description="Prefix of the label attached to every issued token")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header sent with every request")
    token_cache: Optional[Annotated[TokenCacheConfig, Field(discriminator="type")]] = Field(None, description="Where issued tokens are persisted between runs")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("token", "private_key_path", mode="before")
    def empty_str_is_none(cls, v):
        if v in ("", "null", "None"):
            return None
        return v

    @field_validator("url")
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @field_validator("token_expiration")
    def positive_expiration(cls, v):
        if v.total_seconds() <= 0:
            raise ValueError("token-expiration must be positive")
        return v

    @staticmethod
    def from_yaml(yaml_content: str, *, exit_on_failure=True) -> 'ClientConfig':
        import yaml
        expanded = os.path.expandvars(yaml_content)
        data = yaml.safe_load(expanded) or {}

        try:
            return ClientConfig(**data)
        except ValidationError as validation_error:
            if not exit_on_failure:
                raise

            for error in validation_error.errors():
                print(error["type"], error["loc"], error["msg"])

            exit(1)

    @staticmethod
    def from_file(file_path: str, *, exit_on_failure=True) -> 'ClientConfig':
        with open(file_path, 'r') as f:
            return ClientConfig.from_yaml(f.read(), exit_on_failure=exit_on_failure)

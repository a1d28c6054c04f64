from __future__ import annotations

import dataclasses
from typing import Any

import requests

from .authenticator import Authenticator, KeyManager, make_credential
from .authenticator._credentials import PrivateKeySource
from .configuration import ClientConfig
from .entities import ConfigurationError, TransipError, TransportError
from .infrastructure.http import Method, RestRequest, RestResponse, api_error_from_body
from .infrastructure.token_cache import create_token_cache
from .repositories.token_cache import TokenCache
from .utils.logging_utils import get_logger, init_logger

logger = get_logger()


class Client:
    """
    Authenticated access to the API.

    Every call first asks the authenticator for a valid token, which is
    either the configured static token or one requested (and cached) on
    demand with the account's private key or key manager.

    The private key may come from `config.private_key_path` or be passed as
    `private_key` (PEM bytes, a readable stream or a path). Objects that
    cannot live in a configuration file (a key manager, a custom token cache,
    a prepared `requests.Session`) are injected here as well.

    A `logging` section given in the configuration is applied to the
    library's logger on construction.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        private_key: PrivateKeySource | None = None,
        key_manager: KeyManager | None = None,
        token_cache: TokenCache | None = None,
        session: requests.Session | None = None,
    ):
        # an application that configures logging itself keeps its setup
        if "logging" in config.model_fields_set:
            init_logger(config.logging)

        if not config.account_name and not config.token:
            raise ConfigurationError("account name is required")

        credential = make_credential(
            token=config.token,
            private_key=private_key,
            private_key_path=config.private_key_path,
            key_manager=key_manager,
        )

        if token_cache is None and config.token_cache is not None:
            token_cache = create_token_cache(config.token_cache)

        self._config = config
        self._session = session or requests.Session()
        self._authenticator = Authenticator(
            login=config.account_name,
            credential=credential,
            session=self._session,
            base_url=config.url,
            read_only=config.read_only,
            token_expiration=config.token_expiration,
            whitelisted=config.token_whitelisted,
            token_cache=token_cache,
            timeout=config.request_timeout,
            label_prefix=config.label_prefix,
            user_agent=config.user_agent,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def authenticator(self) -> Authenticator:
        return self._authenticator

    def change_base_url(self, url: str):
        """Point the client (and its token requests) at another API, e.g. a mock server."""
        url = url.rstrip("/")
        self._config = self._config.model_copy(update={"url": url})
        self._authenticator.base_url = url

    def call(self, method: Method, request: RestRequest) -> RestResponse:
        try:
            token = self._authenticator.get_token()
        except TransipError as e:
            logger.error("Could not get token from authenticator: %s", e)
            raise

        if self._config.test_mode:
            request = dataclasses.replace(request, test_mode=True)

        prepared = request.to_prepared_request(
            self._config.url,
            method,
            headers={
                "Authorization": token.authorization_header_value(),
                "User-Agent": self._config.user_agent,
            },
        )

        logger.trace("%s %s", method.value, prepared.url)

        try:
            response = self._session.send(prepared, timeout=self._config.request_timeout, stream=True)
            rest_response = RestResponse.from_response(response, method)
        except requests.RequestException as e:
            raise TransportError(f"request error: {e}") from e

        if not rest_response.is_success:
            raise api_error_from_body(rest_response.body, rest_response.status_code)

        return rest_response

    def get(self, request: RestRequest) -> Any:
        return self.call(Method.GET, request).parse_response()

    def post(self, request: RestRequest) -> None:
        self.call(Method.POST, request)

    def post_with_response(self, request: RestRequest) -> RestResponse:
        return self.call(Method.POST, request)

    def put(self, request: RestRequest) -> None:
        self.call(Method.PUT, request)

    def put_with_response(self, request: RestRequest) -> RestResponse:
        return self.call(Method.PUT, request)

    def patch(self, request: RestRequest) -> None:
        self.call(Method.PATCH, request)

    def patch_with_response(self, request: RestRequest) -> RestResponse:
        return self.call(Method.PATCH, request)

    def delete(self, request: RestRequest) -> None:
        self.call(Method.DELETE, request)

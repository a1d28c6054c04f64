"""
Token lifecycle: hands out a valid bearer token, requesting a new one when
the current token has expired.

A token comes from, in order:
  1. the token already held (a static token configured by the user, or the
     last one requested),
  2. the token cache, when one is configured,
  3. a fresh login: a LoginRequest signed with the account's private key (or
     by a key manager) and exchanged at the `/auth` endpoint.

Nothing is retried here, a failed refresh leaves the held token untouched
and the next call runs the whole flow again.
"""

from __future__ import annotations

import threading
from datetime import timedelta

import requests

from ..configuration.properties import DEFAULT_BASE_URL, DEFAULT_LABEL_PREFIX, DEFAULT_USER_AGENT
from ..entities import LoginRequest, MalformedTokenError, Token, TokenExpiredError, TransportError
from ..infrastructure.http import Method, RestRequest, RestResponse
from ..repositories.token_cache import TokenCache
from ..utils.logging_utils import get_logger
from ._credentials import Credential, StaticTokenCredential

logger = get_logger()

AUTH_ENDPOINT = "/auth"
SIGNATURE_HEADER = "Signature"
TOKEN_CACHE_KEY_FORMAT = "transip-client-{login}-token"


class Authenticator:

    def __init__(
        self,
        login: str,
        credential: Credential,
        *,
        session: requests.Session | None = None,
        base_url: str = DEFAULT_BASE_URL,
        read_only: bool = False,
        token_expiration: timedelta = timedelta(days=1),
        whitelisted: bool = False,
        token_cache: TokenCache | None = None,
        timeout: float = 30,
        label_prefix: str = DEFAULT_LABEL_PREFIX,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.login = login
        self.credential = credential
        self.session = session or requests.Session()
        self.base_url = base_url
        self.read_only = read_only
        self.token_expiration = token_expiration
        self.whitelisted = whitelisted
        self.token_cache = token_cache
        self.timeout = timeout
        self.label_prefix = label_prefix
        self.user_agent = user_agent

        self._token: Token | None = credential.token if isinstance(credential, StaticTokenCredential) else None
        self._token_lock = threading.Lock()
        self._login_lock = threading.Lock()

    @property
    def token_cache_key(self) -> str:
        return TOKEN_CACHE_KEY_FORMAT.format(login=self.login)

    @property
    def current_token(self) -> Token | None:
        with self._token_lock:
            return self._token

    def get_token(self) -> Token:
        token = self._valid_current_token()
        if token is not None:
            return token

        if isinstance(self.credential, StaticTokenCredential):
            raise TokenExpiredError()

        # one login at a time, whoever waited re-checks what the previous holder obtained
        with self._login_lock:
            token = self._valid_current_token()
            if token is not None:
                return token

            token = self._load_cached_token()
            if token is None:
                token = self._request_token()

                if self.token_cache is not None:
                    self.token_cache.set(self.token_cache_key, token.raw)

            with self._token_lock:
                self._token = token

            return token

    def _valid_current_token(self) -> Token | None:
        with self._token_lock:
            token = self._token

        if token is not None and not token.is_expired():
            return token

        return None

    def _load_cached_token(self) -> Token | None:
        if self.token_cache is None:
            return None

        raw = self.token_cache.get(self.token_cache_key)
        if not raw:
            logger.debug("No cached token for `%s`", self.login)
            return None

        try:
            token = Token.parse(raw)
        except MalformedTokenError as e:
            logger.warning("Ignoring malformed cached token for `%s`: %s", self.login, e)
            return None

        if token.is_expired():
            logger.debug("Cached token for `%s` expired at %s", self.login, token.expires_at.isoformat())
            return None

        logger.debug("Using cached token for `%s`, expiring at %s", self.login, token.expires_at.isoformat())
        return token

    def _request_token(self) -> Token:
        login_request = LoginRequest.create(
            self.login,
            read_only=self.read_only,
            expiration=self.token_expiration,
            whitelisted=self.whitelisted,
            label_prefix=self.label_prefix,
        )
        body = login_request.to_json_bytes()
        signature = self.credential.sign(body)

        prepared = RestRequest(endpoint=AUTH_ENDPOINT, body=body).to_prepared_request(
            self.base_url,
            Method.POST,
            headers={SIGNATURE_HEADER: signature, "User-Agent": self.user_agent},
        )

        logger.debug("Requesting a new token for `%s` (label: %s)", self.login, login_request.label)
        logger.trace("POST %s", prepared.url)

        try:
            response = self.session.send(prepared, timeout=self.timeout, stream=True)
            rest_response = RestResponse.from_response(response, Method.POST)
        except requests.RequestException as e:
            raise TransportError(f"could not request a new token: {e}") from e

        try:
            payload = rest_response.parse_response()
        except ValueError as e:
            raise MalformedTokenError(f"could not decode token response: {e}") from e

        raw = payload.get("token") if isinstance(payload, dict) else None
        if not raw:
            raise MalformedTokenError("token response did not contain a token")
        if not isinstance(raw, str):
            raise MalformedTokenError(f"token in response should be a string, got {type(raw).__name__}")

        token = Token.parse(raw)
        logger.info("Obtained a new token for `%s`, expiring at %s", self.login, token.expires_at.isoformat())

        return token

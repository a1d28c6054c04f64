"""
Request/response glue between the typed client calls and `requests`.

A RestRequest describes an API call independently of the base URL; it is
turned into a `requests.PreparedRequest` right before sending. A
RestResponse wraps the raw body and decides whether the call succeeded,
turning the API's `{"error": "..."}` envelope into an APIError.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import requests
from pydantic import BaseModel

from ...entities import APIError

JSON_CONTENT_TYPE = "application/json"

# responses are read up to this size, anything past it is dropped
HTTP_BODY_LIMIT = 4 * 1024 * 1024
READ_CHUNK_SIZE = 64 * 1024


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def encode_json(body: Any) -> bytes:
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", by_alias=True, exclude_none=True)

    return json.dumps(body, separators=(",", ":")).encode()


def api_error_from_body(body: bytes, status_code: int) -> APIError:
    """
    Reads the message out of an error envelope, falling back to the raw body
    when the API (or a proxy in front of it) did not answer with JSON.
    """

    message = body.decode(errors="replace").strip()
    try:
        envelope = json.loads(body)
    except ValueError:
        envelope = None

    if isinstance(envelope, dict) and envelope.get("error"):
        message = str(envelope["error"])

    return APIError(message or f"HTTP {status_code}", status_code)


def read_body(response: requests.Response, limit: int = HTTP_BODY_LIMIT) -> bytes:
    """
    Reads at most `limit` bytes of a response sent with `stream=True` and
    releases its connection.
    """

    body = bytearray()
    try:
        for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
            body += chunk[:limit - len(body)]
            if len(body) >= limit:
                break
    finally:
        response.close()

    return bytes(body)


@dataclass
class RestRequest:
    endpoint: str
    parameters: dict[str, Any] | None = None
    body: Any = None
    test_mode: bool = False

    def json_body(self) -> bytes:
        # pre-serialized bodies go out untouched, a signature may cover them
        if isinstance(self.body, bytes):
            return self.body

        return encode_json(self.body)

    def url(self, base_url: str) -> str:
        return base_url.rstrip("/") + "/" + self.endpoint.lstrip("/")

    def to_prepared_request(self, base_url: str, method: Method, headers: dict[str, str] | None = None) -> requests.PreparedRequest:
        params = dict(self.parameters or {})
        if self.test_mode:
            params["test"] = "1"

        return requests.Request(
            method=method.value,
            url=self.url(base_url),
            params=params,
            data=self.json_body() if self.body is not None else None,
            headers={
                "Content-Type": JSON_CONTENT_TYPE,
                "Accept": JSON_CONTENT_TYPE,
                **(headers or {}),
            },
        ).prepare()


@dataclass
class RestResponse:
    body: bytes
    status_code: int
    method: Method
    content_location: str | None = field(default=None)

    @classmethod
    def from_response(cls, response: requests.Response, method: Method, limit: int = HTTP_BODY_LIMIT) -> RestResponse:
        return cls(
            body=read_body(response, limit),
            status_code=response.status_code,
            method=method,
            content_location=response.headers.get("Content-Location"),
        )

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def parse_response(self) -> Any:
        """
        Decoded JSON body of a successful call, None when there is no body.
        Raises APIError for any non-2xx status.
        """

        if not self.is_success:
            raise api_error_from_body(self.body, self.status_code)

        if not self.body or not self.body.strip():
            return None

        return json.loads(self.body)

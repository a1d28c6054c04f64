import io

import pytest
import requests
from pydantic import BaseModel, Field

from transip_client.entities import APIError
from transip_client.infrastructure.http import HTTP_BODY_LIMIT, Method, RestRequest, RestResponse, read_body

ORDER_JSON = b'{"availabilityZone":"ams","operatingSystem":"ubuntu-18.04","productName":"vps-bladevps-x1"}'


def make_order():
    return {"availabilityZone": "ams", "operatingSystem": "ubuntu-18.04", "productName": "vps-bladevps-x1"}


class VpsOrder(BaseModel):
    availability_zone: str = Field(alias="availabilityZone")
    operating_system: str = Field(alias="operatingSystem")
    product_name: str = Field(alias="productName")
    description: str | None = None


class TestRestRequest:

    def test_empty_body_is_json_null(self):
        assert RestRequest(endpoint="/domains").json_body() == b"null"

    def test_post_request(self):
        request = RestRequest(endpoint="/vps", parameters={"test": "1"}, body=make_order())

        prepared = request.to_prepared_request("https://example.com", Method.POST)

        assert prepared.method == "POST"
        assert prepared.url == "https://example.com/vps?test=1"
        assert prepared.headers["Content-Type"] == "application/json"
        assert prepared.headers["Accept"] == "application/json"
        assert prepared.headers["Content-Length"] == "91"
        assert prepared.body == ORDER_JSON

    def test_pydantic_body_is_dumped_by_alias(self):
        order = VpsOrder(availabilityZone="ams", operatingSystem="ubuntu-18.04", productName="vps-bladevps-x1")

        assert RestRequest(endpoint="/vps", body=order).json_body() == ORDER_JSON

    def test_bytes_body_is_sent_untouched(self):
        prepared = RestRequest(endpoint="/auth", body=b'{"b":1, "a":2}').to_prepared_request("https://example.com", Method.POST)

        assert prepared.body == b'{"b":1, "a":2}'

    def test_empty_get_request(self):
        prepared = RestRequest(endpoint="/domains").to_prepared_request("https://example.com", Method.GET)

        assert prepared.method == "GET"
        assert prepared.url == "https://example.com/domains"
        assert prepared.headers["Content-Type"] == "application/json"
        assert prepared.headers["Accept"] == "application/json"
        assert prepared.body is None

    def test_test_mode(self):
        prepared = RestRequest(endpoint="/domains", test_mode=True).to_prepared_request("https://example.com", Method.GET)

        assert prepared.url == "https://example.com/domains?test=1"
        assert prepared.body is None

    def test_extra_headers(self):
        prepared = RestRequest(endpoint="/domains").to_prepared_request(
            "https://example.com/", Method.GET, headers={"Authorization": "Bearer abc"}
        )

        assert prepared.url == "https://example.com/domains"
        assert prepared.headers["Authorization"] == "Bearer abc"


class TestRestResponse:

    def test_decodes_json(self):
        response = RestResponse(body=b'{ "ping":"pong" }', status_code=200, method=Method.GET)

        assert response.parse_response() == {"ping": "pong"}

    @pytest.mark.parametrize("body", [b"", b"  \n"])
    def test_empty_body(self, body):
        assert RestResponse(body=body, status_code=204, method=Method.DELETE).parse_response() is None

    def test_error_envelope(self):
        response = RestResponse(body=b'{ "error": "errortest" }', status_code=406, method=Method.GET)

        with pytest.raises(APIError) as exc_info:
            response.parse_response()

        assert exc_info.value == APIError("errortest", 406)

    def test_error_without_envelope(self):
        response = RestResponse(body=b"Bad Gateway", status_code=502, method=Method.GET)

        with pytest.raises(APIError) as exc_info:
            response.parse_response()

        assert exc_info.value == APIError("Bad Gateway", 502)

    def test_error_without_body(self):
        response = RestResponse(body=b"", status_code=503, method=Method.GET)

        with pytest.raises(APIError) as exc_info:
            response.parse_response()

        assert exc_info.value == APIError("HTTP 503", 503)

    def test_from_response(self, make_response):
        response = make_response(201, b"", headers={"Content-Location": "/vps/example-vps"})

        rest_response = RestResponse.from_response(response, Method.POST)

        assert rest_response == RestResponse(body=b"", status_code=201, method=Method.POST, content_location="/vps/example-vps")


class TestReadBody:

    def test_whole_body_below_the_limit(self, make_response):
        assert read_body(make_response(200, b'{"ping":"pong"}')) == b'{"ping":"pong"}'

    def test_body_is_truncated_at_the_limit(self, make_response):
        assert read_body(make_response(200, b"x" * 100), limit=10) == b"x" * 10

    def test_streamed_body_stops_at_the_limit_and_is_closed(self):
        raw = io.BytesIO(b"y" * (HTTP_BODY_LIMIT + 1024))
        response = requests.Response()
        response.status_code = 200
        response.raw = raw

        body = read_body(response)

        assert len(body) == HTTP_BODY_LIMIT
        assert raw.closed

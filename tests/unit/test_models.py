"""Unit tests for Request, Response and Headers."""

import datetime
import math
from dataclasses import dataclass
from typing import List

import httpx
import pytest
from pydantic import BaseModel, Field

from hc import Headers, JSONDecodeError, JSONEncodeError, Request, Response


class Payload(BaseModel):
    data1: str = Field(alias="d1")
    data2: str = Field(alias="d2")


@dataclass
class Item:
    name: str
    tags: List[str]


def _response(body: bytes, status: int = 200) -> Response:
    response = Response()
    response.update_from(httpx.Response(status, content=body))
    return response


class TestHeaders:
    @pytest.mark.unit
    def test_add_sets_and_overwrites(self):
        headers = Headers()
        headers.add("X-One", "1")
        headers.add("X-One", "2")
        headers.add("X-Two", "3")
        assert headers == {"X-One": "2", "X-Two": "3"}


class TestRequest:
    @pytest.mark.unit
    def test_defaults(self):
        request = Request()
        assert request.method == "GET"
        assert request.uri == ""
        assert request.body == b""
        assert len(request.headers) == 0

    @pytest.mark.unit
    def test_setters(self):
        request = Request()
        request.set_method("PUT")
        request.set_request_uri("http://test.local/a")
        request.set_body("text")
        request.set_headers({"A": "1"})
        request.set_headers(None)

        assert request.method == "PUT"
        assert request.uri == "http://test.local/a"
        assert request.body == b"text"
        assert request.headers["a"] == "1"

    @pytest.mark.unit
    def test_body_writer_appends(self):
        request = Request(body=b"ab")
        writer = request.body_writer()
        assert writer.write(b"cd") == 2
        writer.write("e")
        assert request.body == b"abcde"

    @pytest.mark.unit
    def test_write_json_appends_to_body(self):
        request = Request()
        request.write_json({"data": "good data", "n": [1, 2]})

        assert request.body == b'{"data": "good data", "n": [1, 2]}'
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.unit
    def test_write_json_keeps_existing_content_type(self):
        request = Request(headers={"Content-Type": "application/vnd.api+json"})
        request.write_json([1])
        assert request.headers["content-type"] == "application/vnd.api+json"

    @pytest.mark.unit
    def test_write_json_models_and_dates(self):
        request = Request()
        request.write_json(
            {
                "item": Item(name="n", tags=["t"]),
                "payload": Payload(d1="a", d2="b"),
                "when": datetime.date(2024, 1, 2),
            }
        )
        assert request.body == (
            b'{"item": {"name": "n", "tags": ["t"]}, '
            b'"payload": {"data1": "a", "data2": "b"}, '
            b'"when": "2024-01-02"}'
        )

    @pytest.mark.unit
    def test_write_json_cyclic_value(self):
        cyclic: list = []
        cyclic.append(cyclic)

        with pytest.raises(JSONEncodeError) as exc_info:
            Request().write_json(cyclic)
        assert exc_info.value.code == "SERIALIZATION_ERROR"

    @pytest.mark.unit
    def test_write_json_unsupported_type(self):
        request = Request()
        with pytest.raises(JSONEncodeError):
            request.write_json({"obj": object()})
        assert request.body == b""

    @pytest.mark.unit
    @pytest.mark.parametrize("number", [float("nan"), math.inf, -math.inf])
    def test_write_json_non_finite_float(self, number):
        request = Request()
        with pytest.raises(JSONEncodeError):
            request.write_json({"x": number})
        assert request.body == b""
        assert "content-type" not in request.headers

    @pytest.mark.unit
    def test_build_attaches_timeout(self):
        request = Request("POST", "http://test.local/x", b"body", {"K": "v"})
        built = request.build(httpx.Timeout(None, read=3.0))

        assert built.method == "POST"
        assert built.content == b"body"
        assert built.headers["k"] == "v"
        assert built.extensions["timeout"]["read"] == 3.0

    @pytest.mark.unit
    def test_reset(self):
        request = Request("DELETE", "http://test.local/", b"x", {"K": "v"})
        request.reset()
        assert request.method == "GET"
        assert request.uri == ""
        assert request.body == b""
        assert "k" not in request.headers


class TestResponse:
    @pytest.mark.unit
    def test_fresh_response_is_empty(self):
        response = Response()
        assert response.status_code == 0
        assert response.body == b""
        assert not response.is_success()

    @pytest.mark.unit
    def test_read_json_into_model(self):
        response = _response(b'{"d1":"data1","d2":"data2"}')
        payload = response.read_json(Payload)
        assert payload.data1 == "data1"
        assert payload.data2 == "data2"

    @pytest.mark.unit
    def test_read_json_ignores_extra_fields(self):
        response = _response(b'{"name": "n", "tags": ["a"], "extra": true}')
        assert response.read_json(Item) == Item(name="n", tags=["a"])

    @pytest.mark.unit
    def test_read_json_without_target(self):
        assert _response(b'{"a": [1, null]}').read_json() == {"a": [1, None]}

    @pytest.mark.unit
    def test_read_json_invalid_body(self):
        with pytest.raises(JSONDecodeError):
            _response(b"not json").read_json()

    @pytest.mark.unit
    def test_read_json_empty_body(self):
        with pytest.raises(JSONDecodeError):
            Response().read_json()

    @pytest.mark.unit
    def test_read_json_shape_mismatch(self):
        with pytest.raises(JSONDecodeError) as exc_info:
            _response(b'{"d1": "only one"}').read_json(Payload)
        assert "Payload" in exc_info.value.message

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "status, success, client_error, server_error",
        [
            (204, True, False, False),
            (404, False, True, False),
            (503, False, False, True),
        ],
    )
    def test_status_helpers(self, status, success, client_error, server_error):
        response = _response(b"", status)
        assert response.is_success() is success
        assert response.is_client_error() is client_error
        assert response.is_server_error() is server_error

    @pytest.mark.unit
    def test_text_and_reset(self):
        response = _response("héllo".encode("utf-8"))
        assert response.text == "héllo"
        response.reset()
        assert response.status_code == 0
        assert response.body == b""

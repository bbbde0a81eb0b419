"""Request, response and header objects used by the hc client.

``Request`` and ``Response`` are mutable containers that a caller owns
between acquiring them and handing them to a send call. They are kept
independent of ``httpx`` objects so that they can be reset and reused by
the pools in ``hc.pool``; ``Request.build`` produces the ``httpx.Request``
that is actually sent.
"""

import json
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .exceptions import JSONDecodeError, JSONEncodeError

METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_PUT = "PUT"
METHOD_DELETE = "DELETE"

JSON_CONTENT_TYPE = "application/json"

T = TypeVar("T")

BodyLike = Union[bytes, bytearray, memoryview, str, None]


def _to_bytes(data: BodyLike) -> bytes:
    if data is None:
        return b""
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


@lru_cache(maxsize=128)
def _type_adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


class Headers(dict):
    """Header name to header value mapping passed into request builders."""

    def add(self, key: str, value: str) -> None:
        """Set ``key`` to ``value``, replacing any previous value.

        :param key: Header name
        :type key: str
        :param value: Header value
        :type value: str
        """
        self[key] = value


class BodyWriter:
    """File-like writer that appends to a request body."""

    def __init__(self, request: "Request"):
        self._request = request

    def write(self, data: BodyLike) -> int:
        return self._request.append_body(data)

    def flush(self) -> None:
        pass


class Request:
    """Mutable outgoing HTTP request.

    :param method: HTTP method, GET by default
    :type method: str
    :param uri: Absolute request URI
    :type uri: str
    :param body: Request body; ``str`` is encoded as UTF-8
    :type body: BodyLike
    :param headers: Optional initial headers
    :type headers: Optional[Mapping[str, str]]
    """

    def __init__(
        self,
        method: str = METHOD_GET,
        uri: str = "",
        body: BodyLike = None,
        headers: Optional[Mapping[str, str]] = None,
    ):
        self._method = method
        self._uri = uri
        self._body = bytearray(_to_bytes(body))
        self.headers = httpx.Headers()
        if headers:
            self.set_headers(headers)

    @property
    def method(self) -> str:
        return self._method

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def set_method(self, method: str) -> None:
        self._method = method

    def set_request_uri(self, uri: str) -> None:
        self._uri = uri

    def set_body(self, body: BodyLike) -> None:
        """Replace the request body."""
        self._body = bytearray(_to_bytes(body))

    def append_body(self, data: BodyLike) -> int:
        """Append ``data`` to the request body and return its length."""
        chunk = _to_bytes(data)
        self._body.extend(chunk)
        return len(chunk)

    def body_writer(self) -> BodyWriter:
        """Return a writer whose ``write`` calls append to the body."""
        return BodyWriter(self)

    def set_headers(self, headers: Optional[Mapping[str, str]]) -> None:
        """Merge ``headers`` into the request headers.

        Each key replaces any existing value of the same name. Header names
        are case-insensitive, so of two keys differing only in case the one
        iterated last wins.

        :param headers: Headers to merge; None or empty is a no-op
        :type headers: Optional[Mapping[str, str]]
        """
        if not headers:
            return
        for key, value in headers.items():
            self.headers[key] = value

    def write_json(self, value: Any) -> None:
        """Serialize ``value`` to JSON and append it to the body.

        pydantic models, dataclasses, datetimes, UUIDs and similar values
        are converted with pydantic's JSON-able conversion. A JSON
        ``Content-Type`` is set unless one is already present.

        :param value: Value to serialize
        :type value: Any
        :raises JSONEncodeError: If the value is cyclic, not serializable,
                                 or holds NaN or an infinity
        """
        try:
            payload = json.dumps(
                value,
                default=to_jsonable_python,
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError, PydanticSerializationError) as e:
            raise JSONEncodeError(
                f"Cannot encode {type(value).__name__} as JSON: {e}",
                original_error=e,
            ) from e
        self.append_body(payload)
        self.headers.setdefault("Content-Type", JSON_CONTENT_TYPE)

    def build(self, timeout: Optional[httpx.Timeout] = None) -> httpx.Request:
        """Build the ``httpx.Request`` that is sent on the wire.

        :param timeout: Timeout attached to the request extensions
        :type timeout: Optional[httpx.Timeout]
        :return: The request as understood by httpx
        :rtype: httpx.Request
        :raises httpx.InvalidURL: If the URI cannot be parsed
        """
        extensions: Dict[str, Any] = {}
        if timeout is not None:
            extensions["timeout"] = timeout.as_dict()
        return httpx.Request(
            self._method,
            self._uri,
            headers=self.headers,
            content=bytes(self._body),
            extensions=extensions,
        )

    def reset(self) -> None:
        """Clear every field so the object can be reused."""
        self._method = METHOD_GET
        self._uri = ""
        self._body = bytearray()
        self.headers = httpx.Headers()

    def __repr__(self) -> str:
        return f"<Request [{self._method} {self._uri!r}]>"


class Response:
    """Mutable HTTP response filled in by a send call.

    A fresh response has status code 0 and an empty body.
    """

    def __init__(self):
        self.status_code = 0
        self._body = b""
        self.headers = httpx.Headers()

    @property
    def body(self) -> bytes:
        return self._body

    @property
    def text(self) -> str:
        """Response body decoded as UTF-8."""
        return self._body.decode("utf-8", errors="replace")

    def update_from(self, response: httpx.Response) -> None:
        """Copy status, headers and body from a completed httpx response.

        :param response: A response whose body has been read
        :type response: httpx.Response
        """
        self.status_code = response.status_code
        self.headers = httpx.Headers(response.headers)
        self._body = response.content

    def read_json(self, into: Optional[Type[T]] = None) -> Any:
        """Decode the response body as JSON.

        Without ``into`` the decoded value is returned as-is. With ``into``
        the body is validated into that type by pydantic: model fields are
        matched by name or alias and unknown fields are ignored.

        :param into: Optional target type (model class, dataclass, ...)
        :type into: Optional[Type[T]]
        :return: The decoded value, an instance of ``into`` when given
        :rtype: Any
        :raises JSONDecodeError: If the body is invalid or does not match
        """
        try:
            if into is None:
                return json.loads(self._body)
            return _type_adapter(into).validate_json(self._body)
        except (ValueError, ValidationError) as e:
            target = getattr(into, "__name__", "JSON") if into is not None else "JSON"
            raise JSONDecodeError(
                f"Cannot decode response body as {target}: {e}", original_error=e
            ) from e

    def is_success(self) -> bool:
        """Check if the response indicates success (2xx status code)."""
        return 200 <= self.status_code < 300

    def is_client_error(self) -> bool:
        """Check if the response indicates a client error (4xx status code)."""
        return 400 <= self.status_code < 500

    def is_server_error(self) -> bool:
        """Check if the response indicates a server error (5xx status code)."""
        return 500 <= self.status_code < 600

    def reset(self) -> None:
        """Clear every field so the object can be reused."""
        self.status_code = 0
        self._body = b""
        self.headers = httpx.Headers()

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"

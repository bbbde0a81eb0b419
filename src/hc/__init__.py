"""hc: shortcut functions over an httpx client.

This package provides one-call helpers for GET/POST/PUT/DELETE, pooled
request and response objects with JSON helpers, and read/write timeout
setters. All names are re-exported here.

Recommended import pattern for consumers:
    import hc
    status, body = hc.get("https://example.com/")

    with hc.HTTPClient() as client:
        response = client.make_request("POST", url, body, {"X-Id": "1"})

:var __version__: Current package version
:type __version__: str
"""

from .client import (
    HTTPClient,
    acquire_request,
    acquire_response,
    delete,
    get,
    get_default_client,
    make_raw_request,
    make_request,
    post,
    put,
    release_request,
    release_response,
    request_scope,
    response_scope,
    set_default_client,
    set_read_timeout,
    set_write_timeout,
)
from .config.settings import (
    DEFAULT_READ_TIMEOUT,
    DEFAULT_WRITE_TIMEOUT,
    ClientConfig,
    Settings,
)
from .exceptions import (
    ConfigurationError,
    HCError,
    JSONDecodeError,
    JSONEncodeError,
    SerializationError,
    TimeoutError,
    TransportError,
)
from .log import setup_logging
from .models import (
    METHOD_DELETE,
    METHOD_GET,
    METHOD_POST,
    METHOD_PUT,
    Headers,
    Request,
    Response,
)
from .pool import ObjectPool

__version__ = "0.1.0"

__all__ = [
    "HTTPClient",
    "get_default_client",
    "set_default_client",
    "get",
    "post",
    "put",
    "delete",
    "make_request",
    "make_raw_request",
    "acquire_request",
    "acquire_response",
    "release_request",
    "release_response",
    "request_scope",
    "response_scope",
    "set_read_timeout",
    "set_write_timeout",
    "ClientConfig",
    "Settings",
    "DEFAULT_READ_TIMEOUT",
    "DEFAULT_WRITE_TIMEOUT",
    "HCError",
    "TransportError",
    "TimeoutError",
    "SerializationError",
    "JSONEncodeError",
    "JSONDecodeError",
    "ConfigurationError",
    "setup_logging",
    "Headers",
    "Request",
    "Response",
    "ObjectPool",
    "METHOD_GET",
    "METHOD_POST",
    "METHOD_PUT",
    "METHOD_DELETE",
]

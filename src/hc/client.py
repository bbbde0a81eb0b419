"""HTTP shortcut client.

This module provides ``HTTPClient``, a thin synchronous layer over
``httpx.Client`` that owns the read/write timeout configuration and
sends pooled ``Request``/``Response`` objects, plus module-level
shortcut functions bound to a lazily created process default client.

Each call is a single request/response round trip: redirects are not
followed and nothing is retried. HTTP error statuses are returned as
status codes; only transport failures raise.

Examples:
    >>> status, body = get("https://example.com/")
    >>> with HTTPClient() as client:
    ...     client.set_read_timeout(30)
    ...     response = client.make_request("POST", url, b"{}", {"X-Id": "1"})
"""

import logging
import threading
from datetime import timedelta
from typing import Any, ContextManager, Mapping, Optional, Tuple, Union

import httpx
from pydantic import ValidationError

from .config.settings import ClientConfig, Settings
from .exceptions import ConfigurationError, TransportError
from .exceptions import TimeoutError as RequestTimeoutError
from .log import sanitize_headers, sanitize_url, setup_logging
from .models import (
    METHOD_DELETE,
    METHOD_GET,
    METHOD_POST,
    METHOD_PUT,
    BodyLike,
    Request,
    Response,
)
from .pool import ObjectPool, request_pool, response_pool

logger = logging.getLogger(__name__)

Duration = Union[timedelta, int, float]
HeaderMap = Optional[Mapping[str, str]]


class HTTPClient:
    """Synchronous HTTP client with shared timeout configuration.

    The configuration is read at the start of every send, so a timeout
    change affects requests started after the setter returns and leaves
    in-flight requests alone. Instances are safe to share between threads;
    pooled objects are not.

    :param config: Initial timeouts; zero read/write timeouts if omitted
    :type config: Optional[ClientConfig]
    :param transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
    :type transport: Optional[httpx.BaseTransport]
    :param requests: Pool used for request objects
    :type requests: Optional[ObjectPool[Request]]
    :param responses: Pool used for response objects
    :type responses: Optional[ObjectPool[Response]]
    :param **kwargs: Additional ``httpx.Client`` options
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
        requests: Optional[ObjectPool[Request]] = None,
        responses: Optional[ObjectPool[Response]] = None,
        **kwargs: Any,
    ):
        self.config = config or ClientConfig()
        self._requests = requests if requests is not None else request_pool
        self._responses = responses if responses is not None else response_pool
        kwargs.setdefault("follow_redirects", False)
        self._client = httpx.Client(transport=transport, timeout=None, **kwargs)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        configure_logging: bool = False,
        **kwargs: Any,
    ) -> "HTTPClient":
        """Create a client from ``HC_*`` environment settings.

        :param settings: Settings to use; loaded from the environment if None
        :type settings: Optional[Settings]
        :param configure_logging: Also call ``setup_logging`` with the
                                  configured level
        :type configure_logging: bool
        :param **kwargs: Passed to the ``HTTPClient`` constructor
        :return: New client
        :rtype: HTTPClient
        """
        settings = settings or Settings()
        if configure_logging:
            setup_logging(settings.log_level)
        return cls(config=settings.to_client_config(), **kwargs)

    # Timeouts

    @property
    def read_timeout(self) -> timedelta:
        return self.config.read_timeout

    @property
    def write_timeout(self) -> timedelta:
        return self.config.write_timeout

    def set_read_timeout(self, timeout: Duration) -> None:
        """Set the read timeout for subsequent requests.

        :param timeout: Duration, or seconds as a number; 0 disables it
        :type timeout: Duration
        :raises ConfigurationError: If the value is negative or invalid
        """
        self._set_timeout("read_timeout", timeout)

    def set_write_timeout(self, timeout: Duration) -> None:
        """Set the write timeout for subsequent requests.

        :param timeout: Duration, or seconds as a number; 0 disables it
        :type timeout: Duration
        :raises ConfigurationError: If the value is negative or invalid
        """
        self._set_timeout("write_timeout", timeout)

    def _set_timeout(self, name: str, timeout: Duration) -> None:
        try:
            setattr(self.config, name, timeout)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid {name.replace('_', ' ')}: {timeout!r}", setting=name
            ) from e
        logger.debug("Set %s to %s", name, getattr(self.config, name))

    def _current_timeout(self) -> httpx.Timeout:
        config = self.config
        return httpx.Timeout(
            None,
            read=config.as_seconds(config.read_timeout),
            write=config.as_seconds(config.write_timeout),
        )

    # Pooled objects

    def acquire_request(self) -> Request:
        return self._requests.acquire()

    def acquire_response(self) -> Response:
        return self._responses.acquire()

    def release_request(self, request: Request) -> None:
        self._requests.release(request)

    def release_response(self, response: Response) -> None:
        self._responses.release(response)

    def request_scope(self) -> ContextManager[Request]:
        """Acquire a request that is released when the block exits."""
        return self._requests.scope()

    def response_scope(self) -> ContextManager[Response]:
        """Acquire a response that is released when the block exits."""
        return self._responses.scope()

    # Sending

    def make_raw_request(self, request: Request, response: Response) -> None:
        """Send a caller-configured request and fill ``response``.

        The request is not modified. On failure ``response`` keeps whatever
        it held before the call.

        :param request: Fully configured request
        :type request: Request
        :param response: Response to fill in
        :type response: Response
        :raises TransportError: If the request cannot be sent or received
        """
        method, url = request.method, request.uri
        logger.debug(
            "Sending %s %s headers=%s",
            method,
            sanitize_url(url),
            sanitize_headers(request.headers),
        )
        try:
            http_response = self._client.send(request.build(self._current_timeout()))
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out: %s", method, sanitize_url(url), e)
            raise RequestTimeoutError(
                f"{method} {url} timed out", method=method, url=url, original_error=e
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("%s %s failed: %s", method, sanitize_url(url), e)
            raise TransportError(
                f"{method} {url} failed: {e}", method=method, url=url, original_error=e
            ) from e

        response.update_from(http_response)
        logger.debug(
            "%s %s -> %d (%d bytes)",
            method,
            sanitize_url(url),
            response.status_code,
            len(response.body),
        )

    def make_request(
        self,
        method: str,
        url: str,
        body: BodyLike = None,
        headers: HeaderMap = None,
    ) -> Response:
        """Build, send and return a response for a one-off request.

        :param method: HTTP method
        :type method: str
        :param url: Absolute URL
        :type url: str
        :param body: Request body; None or empty sends no body
        :type body: BodyLike
        :param headers: Headers merged onto the request; None means none
        :type headers: HeaderMap
        :return: Response owned by the caller
        :rtype: Response
        :raises TransportError: If the request cannot be sent or received
        """
        with self._requests.scope() as request:
            request.set_method(method)
            request.set_request_uri(url)
            request.set_body(body)
            request.set_headers(headers)

            response = self._responses.acquire()
            try:
                self.make_raw_request(request, response)
            except TransportError:
                self._responses.release(response)
                raise
        return response

    def _shortcut(
        self, method: str, url: str, body: BodyLike, headers: HeaderMap
    ) -> Tuple[int, bytes]:
        response = self.make_request(method, url, body, headers)
        try:
            return response.status_code, response.body
        finally:
            self._responses.release(response)

    def get(self, url: str) -> Tuple[int, bytes]:
        """Send a GET with no body and return ``(status_code, body)``."""
        return self._shortcut(METHOD_GET, url, None, None)

    def post(
        self, url: str, body: BodyLike = None, headers: HeaderMap = None
    ) -> Tuple[int, bytes]:
        """Send a POST and return ``(status_code, body)``."""
        return self._shortcut(METHOD_POST, url, body, headers)

    def put(
        self, url: str, body: BodyLike = None, headers: HeaderMap = None
    ) -> Tuple[int, bytes]:
        """Send a PUT and return ``(status_code, body)``."""
        return self._shortcut(METHOD_PUT, url, body, headers)

    def delete(
        self, url: str, body: BodyLike = None, headers: HeaderMap = None
    ) -> Tuple[int, bytes]:
        """Send a DELETE and return ``(status_code, body)``."""
        return self._shortcut(METHOD_DELETE, url, body, headers)

    # Lifecycle

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


_default_client: Optional[HTTPClient] = None
_default_lock = threading.Lock()


def get_default_client() -> HTTPClient:
    """Return the process default client, creating it on first use.

    The default client starts with zero (disabled) read and write
    timeouts and never reads the environment.
    """
    global _default_client
    if _default_client is None:
        with _default_lock:
            if _default_client is None:
                _default_client = HTTPClient()
                logger.debug("Created default HTTP client")
    return _default_client


def set_default_client(client: Optional[HTTPClient]) -> Optional[HTTPClient]:
    """Replace the process default client and return the previous one.

    The previous client is not closed. Passing None makes the next
    shortcut call create a fresh default client.
    """
    global _default_client
    with _default_lock:
        previous, _default_client = _default_client, client
    return previous


def get(url: str) -> Tuple[int, bytes]:
    """Send a GET with the default client and return ``(status_code, body)``.

    :raises TransportError: If the URL is empty, malformed or unreachable
    """
    return get_default_client().get(url)


def post(url: str, body: BodyLike = None, headers: HeaderMap = None) -> Tuple[int, bytes]:
    """Send a POST with the default client and return ``(status_code, body)``."""
    return get_default_client().post(url, body, headers)


def put(url: str, body: BodyLike = None, headers: HeaderMap = None) -> Tuple[int, bytes]:
    """Send a PUT with the default client and return ``(status_code, body)``."""
    return get_default_client().put(url, body, headers)


def delete(
    url: str, body: BodyLike = None, headers: HeaderMap = None
) -> Tuple[int, bytes]:
    """Send a DELETE with the default client and return ``(status_code, body)``."""
    return get_default_client().delete(url, body, headers)


def make_request(
    method: str, url: str, body: BodyLike = None, headers: HeaderMap = None
) -> Response:
    """Send a request with the default client and return its response."""
    return get_default_client().make_request(method, url, body, headers)


def make_raw_request(request: Request, response: Response) -> None:
    """Send a caller-configured request with the default client."""
    get_default_client().make_raw_request(request, response)


def acquire_request() -> Request:
    return get_default_client().acquire_request()


def acquire_response() -> Response:
    return get_default_client().acquire_response()


def release_request(request: Request) -> None:
    get_default_client().release_request(request)


def release_response(response: Response) -> None:
    get_default_client().release_response(response)


def request_scope() -> ContextManager[Request]:
    """Acquire a pooled request for the duration of a ``with`` block."""
    return get_default_client().request_scope()


def response_scope() -> ContextManager[Response]:
    """Acquire a pooled response for the duration of a ``with`` block."""
    return get_default_client().response_scope()


def set_read_timeout(timeout: Duration) -> None:
    """Set the read timeout of the default client."""
    get_default_client().set_read_timeout(timeout)


def set_write_timeout(timeout: Duration) -> None:
    """Set the write timeout of the default client."""
    get_default_client().set_write_timeout(timeout)

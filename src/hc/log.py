"""Log sanitization and logging setup for hc.

Request headers and URLs are logged at DEBUG level by the client. The
helpers here redact credentials before they reach a log handler.
"""

import logging
import re
import sys
from typing import Any, Mapping, Dict

SENSITIVE_PATTERNS = {
    "jwt_token": re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"),
    "bearer_token": re.compile(r"Bearer\s+[A-Za-z0-9._~+/=-]+", re.IGNORECASE),
    "basic_auth": re.compile(r"Basic\s+[A-Za-z0-9+/=]+", re.IGNORECASE),
}

# Headers whose values are never logged
SENSITIVE_HEADERS = {
    "authorization",
    "proxy-authorization",
    "x-api-key",
    "x-auth-token",
    "cookie",
    "set-cookie",
    "x-csrf-token",
    "x-access-token",
    "x-refresh-token",
}

SENSITIVE_QUERY_PARAMS = (
    "token",
    "key",
    "secret",
    "password",
    "auth",
    "access_token",
    "api_key",
    "client_secret",
)


def sanitize_string(value: str) -> str:
    """Redact tokens and credentials embedded in a string.

    :param value: String to sanitize
    :type value: str
    :return: String with each sensitive match replaced
    :rtype: str
    """
    if not value:
        return value
    for pattern_name, pattern in SENSITIVE_PATTERNS.items():
        value = pattern.sub(f"<{pattern_name}:REDACTED>", value)
    return value


def sanitize_headers(headers: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of headers that is safe to log.

    :param headers: Header mapping (``dict``, ``Headers`` or ``httpx.Headers``)
    :type headers: Mapping[str, Any]
    :return: Plain dictionary with sensitive values redacted
    :rtype: Dict[str, Any]
    """
    sanitized: Dict[str, Any] = {}
    for key, value in (headers or {}).items():
        if key.lower() in SENSITIVE_HEADERS:
            if isinstance(value, str) and value:
                sanitized[key] = f"<REDACTED:length={len(value)}>"
            else:
                sanitized[key] = "<REDACTED>"
        elif isinstance(value, str):
            sanitized[key] = sanitize_string(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitize_url(url: str) -> str:
    """Redact credential-like query parameters from a URL.

    :param url: URL to sanitize
    :type url: str
    :return: URL with sensitive parameter values replaced
    :rtype: str
    """
    if not url:
        return url
    for param in SENSITIVE_QUERY_PARAMS:
        url = re.sub(
            rf"([?&]{param}=)[^&#\s]+", r"\1<REDACTED>", url, flags=re.IGNORECASE
        )
    return url


class SanitizingFormatter(logging.Formatter):
    """Formatter that redacts sensitive data from every record."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record after sanitizing its rendered message.

        :param record: Log record to format
        :type record: logging.LogRecord
        :return: Sanitized log line
        :rtype: str
        """
        record.msg = sanitize_string(record.getMessage())
        record.args = None
        return super().format(record)


_LOGGING_CONFIGURED = False


def setup_logging(level: str = "INFO") -> None:
    """Attach a sanitizing stdout handler to the ``hc`` logger.

    Only the package logger is configured; the root logger of the host
    application is left alone. Repeated calls only update the level.

    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :type level: str
    """
    global _LOGGING_CONFIGURED

    package_logger = logging.getLogger("hc")
    package_logger.setLevel(getattr(logging, level.upper()))

    if _LOGGING_CONFIGURED:
        package_logger.debug("Logging already configured, skipping duplicate setup")
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        SanitizingFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    package_logger.addHandler(handler)
    _LOGGING_CONFIGURED = True

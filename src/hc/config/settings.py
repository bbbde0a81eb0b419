"""Client configuration and environment-backed settings.

``ClientConfig`` is the live configuration an ``HTTPClient`` reads on
every send. ``Settings`` is only consulted when a caller builds a client
with ``HTTPClient.from_settings``; the process default client never reads
the environment.
"""

from datetime import timedelta
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_READ_TIMEOUT = timedelta(0)
DEFAULT_WRITE_TIMEOUT = timedelta(0)


class ClientConfig(BaseModel):
    """Read and write timeouts shared by every request of a client.

    A zero duration means "no timeout". Plain numbers are taken as
    seconds. Assignment is validated, so ``config.read_timeout = -1``
    fails the same way the constructor does.

    :param read_timeout: Maximum time to wait for response data
    :type read_timeout: timedelta
    :param write_timeout: Maximum time to wait while sending request data
    :type write_timeout: timedelta
    """

    model_config = ConfigDict(validate_assignment=True)

    read_timeout: timedelta = Field(
        DEFAULT_READ_TIMEOUT, description="Response read timeout (0 = none)"
    )
    write_timeout: timedelta = Field(
        DEFAULT_WRITE_TIMEOUT, description="Request write timeout (0 = none)"
    )

    @field_validator("read_timeout", "write_timeout")
    @classmethod
    def validate_non_negative(cls, v: timedelta) -> timedelta:
        """Reject negative durations.

        :param v: The parsed duration
        :type v: timedelta
        :return: The unchanged duration
        :rtype: timedelta
        :raises ValueError: If the duration is negative
        """
        if v < timedelta(0):
            raise ValueError("timeout must be a non-negative duration")
        return v

    def as_seconds(self, value: timedelta) -> Optional[float]:
        """Convert a configured duration to httpx seconds.

        :param value: One of the configured durations
        :type value: timedelta
        :return: Seconds, or None when the duration is zero
        :rtype: Optional[float]
        """
        seconds = value.total_seconds()
        return seconds or None


class Settings(BaseSettings):
    """Client settings loaded from ``HC_*`` environment variables.

    :param read_timeout: Read timeout in seconds (``HC_READ_TIMEOUT``)
    :type read_timeout: float
    :param write_timeout: Write timeout in seconds (``HC_WRITE_TIMEOUT``)
    :type write_timeout: float
    :param log_level: Logging level used by ``setup_logging``
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    """

    model_config = SettingsConfigDict(
        env_prefix="HC_",
        case_sensitive=False,
        extra="ignore",
    )

    read_timeout: float = Field(0.0, ge=0, description="Read timeout in seconds")
    write_timeout: float = Field(0.0, ge=0, description="Write timeout in seconds")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )

    def to_client_config(self) -> ClientConfig:
        """Build the live client configuration from these settings.

        :return: Client configuration with the same timeouts
        :rtype: ClientConfig
        """
        return ClientConfig(
            read_timeout=timedelta(seconds=self.read_timeout),
            write_timeout=timedelta(seconds=self.write_timeout),
        )

"""Configuration for hc clients."""

from .settings import ClientConfig, Settings

__all__ = ["ClientConfig", "Settings"]

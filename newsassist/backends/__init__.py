"""Backends: base interface, HTTP client, mock client for testing and offline use."""

from .base import BaseBackend
from .http_client import HttpBackendClient
from .mock_client import MockBackendClient

__all__ = ["BaseBackend", "HttpBackendClient", "MockBackendClient"]

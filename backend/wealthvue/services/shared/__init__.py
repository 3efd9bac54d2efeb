"""Shared utilities and base classes for services layer.

- HTTPClient: Base class for all external API clients with retry logic
- HTTPClientError: Exception for HTTP client failures
"""

from .http_client import HTTPClient, HTTPClientError, parse_retry_after

__all__ = ["HTTPClient", "HTTPClientError", "parse_retry_after"]

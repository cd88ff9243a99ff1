"""
Custom exceptions for the strapigraph system.
"""

from __future__ import annotations

from typing import Any, Optional


class StrapiGraphError(Exception):
    """Base exception for all strapigraph errors."""
    pass


class SchemaError(StrapiGraphError):
    """Raised when an introspection type descriptor is malformed."""

    def __init__(self, message: str, descriptor: Any = None):
        self.descriptor = descriptor
        super().__init__(f"Invalid type descriptor: {message}")


class ConfigError(StrapiGraphError):
    """Raised when source configuration is invalid."""
    pass


class OperationError(StrapiGraphError):
    """
    Raised when a GraphQL operation against the CMS fails.

    Carries either the protocol-level error list returned in the response
    body, or the transport failure with its decoded result.
    """

    def __init__(
        self,
        message: str,
        graphql_errors: Optional[list[Any]] = None,
        network_error: Any = None,
    ):
        self.graphql_errors = graphql_errors
        self.network_error = network_error
        super().__init__(message)


class NetworkError(StrapiGraphError):
    """Transport failure; `result` holds the decoded response body, if any."""

    def __init__(self, message: str, status_code: int = 0, result: Optional[dict] = None):
        self.status_code = status_code
        self.result = result or {}
        super().__init__(message)


class FileAcquisitionError(StrapiGraphError):
    """Raised when a remote file cannot be stored locally."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Could not acquire '{url}': {message}")

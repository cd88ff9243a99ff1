"""
Operation error reporting.

Formats failed CMS queries (query text, variables, error) and forwards each
underlying error to a diagnostics sink exposing `error(message, cause)`.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any, Optional, Protocol

from graphql import DocumentNode, print_ast

logger = logging.getLogger(__name__)


class DiagnosticsSink(Protocol):
    def error(self, message: str, cause: Any = None) -> Any: ...


class LoggingReporter:
    """Diagnostics sink backed by a logger."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def error(self, message: str, cause: Any = None) -> None:
        exc_info = cause if isinstance(cause, BaseException) else None
        self.log.error(message, exc_info=exc_info)


@dataclasses.dataclass
class Operation:
    """A GraphQL operation sent to the CMS."""
    operation_name: str
    query: Any
    field: Optional[str] = None
    collection_type: Optional[str] = None
    variables: dict[str, Any] = dataclasses.field(default_factory=dict)


def print_query(query: Any) -> str:
    """Render a query document (or pass a query string through)."""
    if isinstance(query, DocumentNode):
        return print_ast(query)
    return str(query) if query is not None else ""


def error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message", error))
    return str(getattr(error, "message", None) or error)


def report_operation_error(reporter: DiagnosticsSink, operation: Operation, error: Any) -> None:
    """Report a single error of a failed operation with its query and variables."""
    variables = json.dumps(
        {
            "operationName": operation.operation_name,
            "field": operation.field,
            "collectionType": operation.collection_type,
            "variables": operation.variables,
        },
        indent=2,
        default=str,
    )
    extra = (
        "\n===== QUERY =====\n"
        f"{print_query(operation.query)}\n"
        "===== VARIABLES =====\n"
        f"{variables}\n"
        "===== ERROR =====\n"
    )
    reporter.error(f"{operation.operation_name} failed – {error_message(error)}\n{extra}", error)


def underlying_errors(err: Any) -> list[Any]:
    """
    Split a failure into its individual errors.

    Order of precedence:
    1. Transport failure whose decoded body carries an `errors` list
    2. Protocol-level `graphql_errors` list
    3. The failure itself
    """
    network_error = getattr(err, "network_error", None)
    result = getattr(network_error, "result", None)
    if isinstance(result, dict) and result.get("errors"):
        return list(result["errors"])

    graphql_errors = getattr(err, "graphql_errors", None)
    if graphql_errors:
        return list(graphql_errors)

    return [err]


def catch_errors(err: Any, operation: Operation, reporter: DiagnosticsSink) -> None:
    """Report every underlying error of `err`. Never raises."""
    for error in underlying_errors(err):
        try:
            report_operation_error(reporter, operation, error)
        except Exception as e:
            logger.error(f"Failed to report error for {operation.operation_name}: {e}", exc_info=True)

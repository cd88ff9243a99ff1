"""
Runtime module - response walking, file acquisition and error reporting.
"""

from __future__ import annotations

from .files import FileAcquirer, NodeActions, RemoteFileAcquirer, file_node_id
from .markdown import MarkdownImageExtractor, extract_files
from .node_ids import IdGenerator, assign_node_ids, create_node_id, relation_node_key
from .nodes import build_entity_node
from .processor import FieldDataProcessor, process_field_data
from .reporter import (
    DiagnosticsSink,
    LoggingReporter,
    Operation,
    catch_errors,
    report_operation_error,
    underlying_errors,
)

__all__ = [
    "FileAcquirer",
    "NodeActions",
    "RemoteFileAcquirer",
    "file_node_id",
    "MarkdownImageExtractor",
    "extract_files",
    "IdGenerator",
    "assign_node_ids",
    "create_node_id",
    "relation_node_key",
    "build_entity_node",
    "FieldDataProcessor",
    "process_field_data",
    "DiagnosticsSink",
    "LoggingReporter",
    "Operation",
    "catch_errors",
    "report_operation_error",
    "underlying_errors",
]

"""
strapigraph - Strapi GraphQL responses to static-site nodes.

Reshapes introspection types and query responses from a Strapi CMS into
host nodes, downloading referenced uploads and markdown-embedded images.

Usage:
    from strapigraph import (
        FieldDataProcessor, NodeActions, RemoteFileAcquirer, SourceConfig,
        assign_node_ids,
    )

    config = SourceConfig.from_dict({"apiURL": "https://cms.example.com"})
    acquirer = RemoteFileAcquirer(cache_dir=config.cache_dir)
    processor = FieldDataProcessor(config, acquirer, NodeActions(create_node=create_node))

    entity = assign_node_ids(entity, processor.actions.create_node_id)
    node = await processor.process(entity, node_id=parent_id)
"""

from __future__ import annotations

from .core import (
    EXCLUDED_TYPES,
    FILE_TYPENAME,
    NODE_TYPE_PREFIX,
    ConfigError,
    FileAcquisitionError,
    FileNode,
    MarkdownImagesConfig,
    NetworkError,
    OperationError,
    SchemaError,
    SourceConfig,
    StrapiGraphError,
    TypeDescriptor,
    TypeKind,
    WrapperKind,
    classify,
    filter_excluded_types,
    format_collection_name,
    generate_declarations_for,
    generate_type_declarations,
    get_collection_type,
    get_collection_type_map,
    get_collection_types,
    get_entity_response,
    get_entity_response_collection,
    get_field_type,
    get_type_name,
    load_config,
)
from .runtime import (
    FieldDataProcessor,
    LoggingReporter,
    MarkdownImageExtractor,
    NodeActions,
    Operation,
    RemoteFileAcquirer,
    assign_node_ids,
    build_entity_node,
    catch_errors,
    create_node_id,
    extract_files,
    process_field_data,
    report_operation_error,
)

__version__ = "0.1.0"

__all__ = [
    # Config
    "SourceConfig",
    "MarkdownImagesConfig",
    "load_config",
    # Errors
    "StrapiGraphError",
    "SchemaError",
    "ConfigError",
    "OperationError",
    "NetworkError",
    "FileAcquisitionError",
    # Types
    "TypeDescriptor",
    "TypeKind",
    "WrapperKind",
    "FileNode",
    "classify",
    "FILE_TYPENAME",
    # Naming
    "EXCLUDED_TYPES",
    "NODE_TYPE_PREFIX",
    "get_type_name",
    "get_field_type",
    "filter_excluded_types",
    "format_collection_name",
    "get_collection_types",
    "get_collection_type_map",
    "get_entity_response",
    "get_entity_response_collection",
    "get_collection_type",
    # Declarations
    "generate_type_declarations",
    "generate_declarations_for",
    # Runtime
    "MarkdownImageExtractor",
    "extract_files",
    "assign_node_ids",
    "create_node_id",
    "NodeActions",
    "RemoteFileAcquirer",
    "FieldDataProcessor",
    "process_field_data",
    "build_entity_node",
    # Reporting
    "Operation",
    "LoggingReporter",
    "report_operation_error",
    "catch_errors",
]

"""
Core module - type descriptors, naming, declarations and configuration.
"""

from __future__ import annotations

from .config import MarkdownImagesConfig, SourceConfig, load_config
from .declarations import (
    generate_declarations_for,
    generate_object_declaration,
    generate_type_declarations,
    generate_union_declaration,
)
from .errors import (
    ConfigError,
    FileAcquisitionError,
    NetworkError,
    OperationError,
    SchemaError,
    StrapiGraphError,
)
from .naming import (
    EXCLUDED_TYPES,
    NODE_TYPE_PREFIX,
    collection_node_type,
    collection_type_name,
    filter_excluded_types,
    format_collection_name,
    get_collection_type,
    get_collection_type_map,
    get_collection_types,
    get_entity_response,
    get_entity_response_collection,
    get_field_type,
    get_type_name,
    node_type_name,
)
from .types import (
    FILE_TYPENAME,
    FileNode,
    TypeDescriptor,
    TypeKind,
    WrapperKind,
    classify,
    remote_id,
)

__all__ = [
    # Config
    "SourceConfig",
    "MarkdownImagesConfig",
    "load_config",
    # Declarations
    "generate_type_declarations",
    "generate_declarations_for",
    "generate_object_declaration",
    "generate_union_declaration",
    # Errors
    "StrapiGraphError",
    "SchemaError",
    "ConfigError",
    "OperationError",
    "NetworkError",
    "FileAcquisitionError",
    # Naming
    "EXCLUDED_TYPES",
    "NODE_TYPE_PREFIX",
    "collection_node_type",
    "collection_type_name",
    "get_type_name",
    "get_field_type",
    "filter_excluded_types",
    "format_collection_name",
    "get_collection_types",
    "get_collection_type_map",
    "get_entity_response",
    "get_entity_response_collection",
    "get_collection_type",
    "node_type_name",
    # Types
    "FILE_TYPENAME",
    "FileNode",
    "TypeDescriptor",
    "TypeKind",
    "WrapperKind",
    "classify",
    "remote_id",
]

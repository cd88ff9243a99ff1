"""
Naming utilities for Strapi GraphQL schemas.

Includes:
- Type name / field type resolution from introspection descriptors
- Collection name formatting
- Relation wrapper name parsing (<X>EntityResponse, <X>RelationResponseCollection, ...)
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from .types import FILE_TYPENAME, TypeDescriptor, TypeKind

if TYPE_CHECKING:
    from .config import SourceConfig


NODE_TYPE_PREFIX = "Strapi"

# Types Strapi generates for polymorphic relations; they have no node counterpart.
EXCLUDED_TYPES = ("GenericMorph",)

TypeRef = Union[TypeDescriptor, dict]


# =============================================================================
# Type resolution
# =============================================================================


def get_type_name(type_ref: TypeRef) -> str:
    """
    Resolve the innermost type name, dropping LIST / NON_NULL wrappers.

    Examples:
        NON_NULL(LIST(SCALAR String)) -> String
        ENUM ENUM_ARTICLE_STATUS -> String
        SCALAR DateTime -> String
    """
    t = TypeDescriptor.from_introspection(type_ref)
    if t.name == "DateTime":
        return "String"
    if t.kind == TypeKind.ENUM:
        return "String"
    if t.kind in (TypeKind.LIST, TypeKind.NON_NULL):
        return get_type_name(t.of_type)
    return t.name


def get_field_type(type_ref: TypeRef, prefix: str = NODE_TYPE_PREFIX) -> str:
    """
    Resolve a field type declaration, keeping LIST / NON_NULL markers.

    Examples:
        NON_NULL(LIST(NON_NULL(OBJECT Article))) -> [StrapiArticle!]!
        UNION ArticleBlocksDynamicZone -> StrapiArticleBlocksDynamicZone
    """
    t = TypeDescriptor.from_introspection(type_ref)
    if t.name == "DateTime":
        return "String"
    if t.kind == TypeKind.ENUM:
        return "String"
    if t.kind == TypeKind.LIST:
        return f"[{get_field_type(t.of_type, prefix)}]"
    if t.kind == TypeKind.NON_NULL:
        return f"{get_field_type(t.of_type, prefix)}!"
    if t.kind in (TypeKind.OBJECT, TypeKind.UNION):
        return f"{prefix}{t.name}"
    return t.name


def filter_excluded_types(field: dict[str, Any]) -> bool:
    """Return False for introspection fields whose type has no node counterpart."""
    return get_type_name(field["type"]) not in EXCLUDED_TYPES


# =============================================================================
# Collection names
# =============================================================================

# Only the first lower/upper boundary is split.
_CASE_BOUNDARY_PATTERN = re.compile(r"([a-z])([A-Z])")
_WORD_PATTERN = re.compile(r"[A-Za-z0-9]+")
_STRIP_PATTERN = re.compile(r"[^A-Za-z0-9\s]+")


def format_collection_name(name: str) -> str:
    """
    Normalize a collection name into its display form.

    Examples:
        helloWorld -> Hello World
        FAQ_page -> FAQPage
        about-us -> AboutUs
    """
    result = _CASE_BOUNDARY_PATTERN.sub(r"\1 \2", name, count=1)
    result = _WORD_PATTERN.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:], result)
    return _STRIP_PATTERN.sub("", result)


def collection_type_name(name: str) -> str:
    """Formatted collection name without whitespace, usable as a type name."""
    return "".join(format_collection_name(name).split())


def get_collection_types(config: SourceConfig) -> list[str]:
    """Type names of every collection exposed as nodes, files included."""
    return [collection_type_name(name) for name in (FILE_TYPENAME, *config.collection_types)]


def get_collection_type_map(collection_types: Optional[Iterable[str]]) -> dict[str, bool]:
    """Lookup table of collection names."""
    return {name: True for name in (collection_types or [])}


# =============================================================================
# Relation wrapper names
# =============================================================================

_ENTITY_RESPONSE_PATTERN = re.compile(r"(.*)(?:EntityResponse)$")
_ENTITY_RESPONSE_COLLECTION_PATTERN = re.compile(r"(.*)(?:EntityResponseCollection)$")
_COLLECTION_TYPE_PATTERN = re.compile(r"(.*)(?:EntityResponse|RelationResponseCollection)$")


def _match_prefix(pattern: re.Pattern, name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    match = pattern.match(name)
    return match.group(1) if match else None


def get_entity_response(name: Optional[str]) -> Optional[str]:
    """ArticleEntityResponse -> Article"""
    return _match_prefix(_ENTITY_RESPONSE_PATTERN, name)


def get_entity_response_collection(name: Optional[str]) -> Optional[str]:
    """ArticleEntityResponseCollection -> Article"""
    return _match_prefix(_ENTITY_RESPONSE_COLLECTION_PATTERN, name)


def get_collection_type(name: Optional[str]) -> Optional[str]:
    """TagRelationResponseCollection -> Tag, TagEntityResponse -> Tag"""
    return _match_prefix(_COLLECTION_TYPE_PATTERN, name)


def node_type_name(entity: str, prefix: str = NODE_TYPE_PREFIX) -> str:
    """Article -> StrapiArticle"""
    return f"{prefix}{entity}"


def collection_node_type(collection_type: str, prefix: str = NODE_TYPE_PREFIX) -> str:
    """blogPost -> StrapiBlogPost"""
    return node_type_name(collection_type_name(collection_type), prefix)

"""
Typed shapes for introspection descriptors and CMS response values.

TypeDescriptor mirrors the recursive `{kind, name, ofType}` tree returned by
GraphQL introspection. WrapperKind discriminates the response values the
walkers know how to handle.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import SchemaError


FILE_TYPENAME = "UploadFile"

_ENTITY_RESPONSE_SUFFIX = "EntityResponse"
_COLLECTION_SUFFIXES = ("EntityResponseCollection", "RelationResponseCollection")


class TypeKind(str, Enum):
    """Introspection `__TypeKind` values."""
    SCALAR = "SCALAR"
    ENUM = "ENUM"
    LIST = "LIST"
    NON_NULL = "NON_NULL"
    OBJECT = "OBJECT"
    UNION = "UNION"
    INTERFACE = "INTERFACE"
    INPUT_OBJECT = "INPUT_OBJECT"


WRAPPING_KINDS = (TypeKind.LIST, TypeKind.NON_NULL)


class TypeDescriptor(BaseModel):
    """
    Introspection type reference.

    Input: {"kind": "NON_NULL", "name": None, "ofType": {"kind": "SCALAR", "name": "ID"}}
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: TypeKind
    name: Optional[str] = None
    of_type: Optional[TypeDescriptor] = Field(default=None, alias="ofType")

    @model_validator(mode="after")
    def _check_shape(self) -> "TypeDescriptor":
        if self.kind in WRAPPING_KINDS:
            if self.of_type is None:
                raise ValueError(f"{self.kind.value} type reference without ofType")
        elif not self.name:
            raise ValueError(f"{self.kind.value} type reference without name")
        return self

    @classmethod
    def from_introspection(cls, data: Any) -> "TypeDescriptor":
        """Build a descriptor from a raw introspection dict (or pass one through)."""
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            raise SchemaError(f"expected a mapping, got {type(data).__name__}", data)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise SchemaError(str(e), data) from e


class WrapperKind(Enum):
    """Known shapes of a value inside a CMS response payload."""
    SINGLE_ENTITY = "single_entity"
    COLLECTION = "collection"
    FILE = "file"
    OBJECT = "object"
    LIST = "list"
    SCALAR = "scalar"


def remote_id(value: dict) -> Any:
    """Return `data.id` of a relation wrapper, or None."""
    data = value.get("data")
    if isinstance(data, dict):
        return data.get("id")
    return None


def classify(value: Any) -> WrapperKind:
    """
    Discriminate a response value.

    A mapping is only a relation wrapper when it carries `__typename`;
    untyped mappings are SCALAR (passed through untouched by the walkers).
    """
    if isinstance(value, list):
        return WrapperKind.LIST
    if not isinstance(value, dict) or not value.get("__typename"):
        return WrapperKind.SCALAR

    typename = value["__typename"]
    if typename == FILE_TYPENAME and value.get("url"):
        return WrapperKind.FILE
    if typename.endswith(_COLLECTION_SUFFIXES):
        return WrapperKind.COLLECTION
    if typename.endswith(_ENTITY_RESPONSE_SUFFIX) and remote_id(value):
        return WrapperKind.SINGLE_ENTITY
    return WrapperKind.OBJECT


@dataclass
class FileNode:
    """A downloaded file materialized as a host node."""
    id: str
    url: str
    parent_node_id: Optional[str] = None
    path: Optional[str] = None
    content_digest: Optional[str] = None
    media_type: Optional[str] = None


TypeDescriptor.model_rebuild()

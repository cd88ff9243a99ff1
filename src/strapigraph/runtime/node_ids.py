"""
Node id assignment for singular relations in CMS responses.
"""

from __future__ import annotations

import uuid
from typing import Any, Callable

from ..core.naming import get_entity_response, node_type_name
from ..core.types import WrapperKind, classify, remote_id

IdGenerator = Callable[[str], str]

# Fixed namespace so ids are stable across builds.
NODE_ID_NAMESPACE = uuid.UUID("1b671a64-40d5-491e-99b0-da01ff1f3341")


def create_node_id(seed: str, namespace: str = "strapigraph") -> str:
    """
    Deterministic node id for a seed string.

    Same seed and namespace always yield the same id.
    """
    return str(uuid.uuid5(NODE_ID_NAMESPACE, f"{namespace}{seed}"))


def relation_node_key(value: dict[str, Any]) -> str | None:
    """
    Un-hashed node key of a singular relation wrapper.

    {"__typename": "AuthorEntityResponse", "data": {"id": "7"}} -> StrapiAuthor-7
    """
    entity = get_entity_response(value.get("__typename"))
    rid = remote_id(value)
    if not entity or not rid:
        return None
    return f"{node_type_name(entity)}-{rid}"


def assign_node_ids(obj: Any, create_node_id: IdGenerator) -> Any:
    """
    Recursively attach node ids to singular relation wrappers.

    For each key holding a `<X>EntityResponse` wrapper with `data.id`, the
    wrapper is copied with `id` (generated) and `nodeId` (un-hashed key).
    Other typed mappings and lists are walked. Collections are walked but
    never rewritten themselves.

    Returns the input object itself when nothing was rewritten.
    """
    if not isinstance(obj, dict):
        return obj

    fields: dict[str, Any] = {}
    for key, value in obj.items():
        kind = classify(value)
        if kind == WrapperKind.SINGLE_ENTITY:
            node_key = relation_node_key(value)
            fields[key] = {**value, "id": create_node_id(node_key), "nodeId": node_key}
        elif kind in (WrapperKind.COLLECTION, WrapperKind.FILE, WrapperKind.OBJECT):
            assigned = assign_node_ids(value, create_node_id)
            if assigned is not value:
                fields[key] = assigned
        elif kind == WrapperKind.LIST:
            items = [assign_node_ids(item, create_node_id) for item in value]
            if any(new is not old for new, old in zip(items, value)):
                fields[key] = items

    if fields:
        return {**obj, **fields}
    return obj

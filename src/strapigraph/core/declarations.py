"""
Schema declaration generator from Strapi introspection.

Generates:
- One `type Strapi<Name> implements Node` block per OBJECT type
- One `union Strapi<Name>` line per UNION type (dynamic zones)
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .naming import (
    EXCLUDED_TYPES,
    NODE_TYPE_PREFIX,
    collection_node_type,
    filter_excluded_types,
    get_field_type,
)
from .types import FILE_TYPENAME, TypeDescriptor


def _is_introspection_type(name: str) -> bool:
    return name.startswith("__")


def generate_object_declaration(
    type_def: dict[str, Any],
    prefix: str = NODE_TYPE_PREFIX,
    as_node: bool = False,
) -> list[str]:
    """Generate SDL lines for an OBJECT introspection type."""
    implements = " implements Node" if as_node else ""
    lines = [f"type {prefix}{type_def['name']}{implements} {{"]

    for field in filter(filter_excluded_types, type_def.get("fields") or []):
        lines.append(f"  {field['name']}: {get_field_type(field['type'], prefix)}")

    lines.append("}")
    return lines


def generate_union_declaration(type_def: dict[str, Any], prefix: str = NODE_TYPE_PREFIX) -> str:
    """Generate the SDL line for a UNION introspection type."""
    members = [
        get_field_type(TypeDescriptor.from_introspection(member), prefix)
        for member in type_def.get("possibleTypes") or []
        if member.get("name") not in EXCLUDED_TYPES
    ]
    return f"union {prefix}{type_def['name']} = {' | '.join(members)}"


def generate_type_declarations(
    types: Iterable[dict[str, Any]],
    node_types: Optional[Iterable[str]] = None,
    prefix: str = NODE_TYPE_PREFIX,
) -> str:
    """
    Generate SDL for every object and union type of a schema.

    Args:
        types: `__schema.types` list from an introspection result
        node_types: Type names materialized as host nodes (declared `implements Node`)
        prefix: Namespace tag prepended to object/union names

    Returns:
        SDL string, blocks separated by blank lines
    """
    nodes = set(node_types or [])
    blocks: list[str] = []

    for type_def in sorted(types, key=lambda t: t.get("name") or ""):
        name = type_def.get("name")
        if not name or _is_introspection_type(name) or name in EXCLUDED_TYPES:
            continue
        if type_def.get("kind") == "OBJECT":
            blocks.append("\n".join(generate_object_declaration(type_def, prefix, as_node=name in nodes)))
        elif type_def.get("kind") == "UNION":
            blocks.append(generate_union_declaration(type_def, prefix))

    return "\n\n".join(blocks) + ("\n" if blocks else "")


def generate_declarations_for(
    types: Iterable[dict[str, Any]],
    collection_types: Iterable[str],
    single_types: Iterable[str] = (),
    prefix: str = NODE_TYPE_PREFIX,
) -> str:
    """Generate SDL where configured collection and single types become nodes."""
    node_types = {
        collection_node_type(name, prefix="")
        for name in (FILE_TYPENAME, *collection_types, *single_types)
    }
    return generate_type_declarations(types, node_types=node_types, prefix=prefix)

"""
Entity to node pipeline.

Per entity: assign relation node ids, process field data (files, markdown
images, relation links), then hand the node to the host.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

from ..core.naming import collection_node_type
from .node_ids import assign_node_ids
from .processor import FieldDataProcessor

logger = logging.getLogger(__name__)


async def build_entity_node(
    entity: dict[str, Any],
    collection_type: str,
    processor: FieldDataProcessor,
) -> dict[str, Any]:
    """
    Build (and create, when the host exposes create_node) the node for one entity.

    Args:
        entity: CMS entity, `{"id": ..., "attributes": {...}}` or flattened
        collection_type: Collection the entity belongs to (e.g. "article")
        processor: Field data processor bound to the host handles

    Returns:
        The node dict: processed attributes plus `id`, `strapiId` and `internal`
    """
    actions = processor.actions
    type_name = collection_node_type(collection_type)
    node_id = actions.create_node_id(f"{type_name}-{entity['id']}")

    attributes = (entity.get("attributes") or {}) if "attributes" in entity else entity
    attributes = assign_node_ids(attributes, actions.create_node_id)
    data = await processor.process(attributes, node_id=node_id)

    node = {
        **data,
        "id": node_id,
        "strapiId": entity["id"],
        "internal": {"type": type_name},
    }

    if actions.create_node is not None:
        created = actions.create_node(node)
        if inspect.isawaitable(created):
            await created
    logger.debug(f"Built node {type_name} {entity['id']}")
    return node

"""
Field data processor - downloads referenced files and links relations.

Handles:
- UploadFile entries (downloaded, id attached under `file`)
- Images embedded in configured markdown fields (ids under `<field>_images`)
- Singular relation wrappers (id replaced by the generated node id)
"""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Awaitable, Optional

from ..core.config import SourceConfig
from ..core.types import WrapperKind, classify
from .files import FileAcquirer, NodeActions, file_node_id
from .markdown import MarkdownImageExtractor
from .node_ids import relation_node_key

logger = logging.getLogger(__name__)

_ABSOLUTE_PREFIXES = ("http://", "https://")


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """
    Run awaitables concurrently and return their results in order.

    On the first failure (or cancellation of the caller) the remaining tasks
    are cancelled and awaited before the error propagates, so no child
    outlives the call.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        errors = [task.exception() for task in tasks if task in done and not task.cancelled()]
        for error in errors:
            if error is not None:
                raise error
        return [task.result() for task in tasks]
    finally:
        unfinished = [task for task in tasks if not task.done()]
        for task in unfinished:
            task.cancel()
        if unfinished:
            await asyncio.gather(*unfinished, return_exceptions=True)


class FieldDataProcessor:
    """
    Walks an entity response and materializes its files.

    Usage:
        processor = FieldDataProcessor(config, acquirer, NodeActions(create_node_id=...))
        output = await processor.process(entity, node_id=parent_node_id)
    """

    def __init__(
        self,
        config: SourceConfig,
        acquirer: FileAcquirer,
        actions: Optional[NodeActions] = None,
        extractor: Optional[MarkdownImageExtractor] = None,
    ):
        """
        Initialize processor.

        Args:
            config: Source configuration (api URL, markdown fields, download limit)
            acquirer: Async file acquirer, called with url / parent_node_id / host handles
            actions: Host handles; create_node_id is used for relation ids
            extractor: Markdown image extractor
        """
        self.config = config
        self.acquirer = acquirer
        self.actions = actions or NodeActions()
        self.extractor = extractor or MarkdownImageExtractor()
        limit = config.max_concurrent_downloads
        self._downloads = asyncio.Semaphore(limit) if limit else None

    def resolve_url(self, url: str) -> str:
        """Prefix relative upload paths with the API URL."""
        if url.startswith(_ABSOLUTE_PREFIXES):
            return url
        return f"{self.config.api_url}{url}"

    async def acquire(self, url: str, node_id: Optional[str]) -> Any:
        """Acquire one file; returns the acquirer's result (falsy when nothing was acquired)."""
        request = self.acquirer(
            url=self.resolve_url(url),
            parent_node_id=node_id,
            create_node=self.actions.create_node,
            create_node_id=self.actions.create_node_id,
            get_cache=self.actions.get_cache,
        )
        if self._downloads is None:
            return await request
        async with self._downloads:
            return await request

    async def process(self, data: Any, node_id: Optional[str] = None) -> Any:
        """
        Process a response value.

        Args:
            data: Entity (or nested value) from a CMS response
            node_id: Host node id downloaded files are attached to

        Returns:
            A deep copy of `data` with file ids and relation node ids set
        """
        if isinstance(data, list):
            return await gather_or_cancel(*(self.process(item, node_id) for item in data))

        output = copy.deepcopy(data)
        if not isinstance(data, dict):
            return output

        if classify(data) == WrapperKind.FILE:
            file_id = file_node_id(await self.acquire(data["url"], node_id))
            if file_id:
                output["file"] = file_id

        markdown_fields = self.config.markdown_images.fields_for(data.get("__typename"))
        if markdown_fields:
            await gather_or_cancel(*(
                self._process_markdown_field(data, output, field, node_id)
                for field in markdown_fields
            ))

        pending: list[Awaitable[None]] = []
        for key, value in data.items():
            kind = classify(value)
            if kind == WrapperKind.SINGLE_ENTITY:
                output[key]["id"] = self.actions.create_node_id(relation_node_key(value))
            elif kind in (WrapperKind.COLLECTION, WrapperKind.FILE, WrapperKind.OBJECT, WrapperKind.LIST):
                pending.append(self._process_key(output, key, value, node_id))
        await gather_or_cancel(*pending)

        return output

    async def _acquire_image(self, url: str, node_id: Optional[str]) -> Any:
        # Images without a destination keep their position but fetch nothing.
        if not url:
            return None
        return await self.acquire(url, node_id)

    async def _process_key(self, output: dict, key: str, value: Any, node_id: Optional[str]) -> None:
        output[key] = await self.process(value, node_id)

    async def _process_markdown_field(
        self,
        data: dict,
        output: dict,
        field: str,
        node_id: Optional[str],
    ) -> None:
        """
        Download images embedded in a markdown field.

        `<field>_images[i]` holds the file id of the i-th image; positions whose
        download failed (or whose destination is empty) stay None.
        """
        files = self.extractor.extract(data.get(field))
        if not files:
            return

        results = await gather_or_cancel(*(self._acquire_image(url, node_id) for url in files))
        images: list[Any] = []
        for index, result in enumerate(results):
            file_id = file_node_id(result)
            if file_id:
                images.extend([None] * (index - len(images)))
                images.append(file_id)

        if images:
            output[f"{field}_images"] = images
        else:
            logger.debug(f"No images acquired for {data.get('__typename')}.{field}")


async def process_field_data(
    data: Any,
    config: SourceConfig,
    acquirer: FileAcquirer,
    node_id: Optional[str] = None,
    actions: Optional[NodeActions] = None,
    extractor: Optional[MarkdownImageExtractor] = None,
) -> Any:
    """One-shot helper around FieldDataProcessor.process."""
    processor = FieldDataProcessor(config, acquirer, actions=actions, extractor=extractor)
    return await processor.process(data, node_id=node_id)

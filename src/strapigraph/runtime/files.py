"""
Remote file acquisition.

Downloads files referenced by CMS responses into a local cache directory
and registers them as host nodes.
"""

from __future__ import annotations

import hashlib
import inspect
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import urlparse

import httpx

from ..core.errors import FileAcquisitionError
from ..core.types import FileNode
from .node_ids import IdGenerator, create_node_id as default_create_node_id

logger = logging.getLogger(__name__)

FileAcquirer = Callable[..., Awaitable[Any]]


@dataclass
class NodeActions:
    """
    Host handles passed through to the file acquirer.

    `create_node` and `get_cache` are opaque to the walkers; only
    `create_node_id` is called directly (to build relation node ids).
    """
    create_node_id: IdGenerator = default_create_node_id
    create_node: Optional[Callable[[Any], Any]] = None
    get_cache: Any = None


def file_node_id(result: Any) -> Any:
    """Id of an acquirer result, or None when nothing was acquired."""
    if not result:
        return None
    if isinstance(result, dict):
        return result.get("id")
    return getattr(result, "id", None)


class RemoteFileAcquirer:
    """
    HTTP file downloader.

    Usage:
        acquirer = RemoteFileAcquirer(cache_dir=".cache/strapigraph")
        file_node = await acquirer(
            url="https://cms.example.com/uploads/cover.png",
            parent_node_id="...",
            create_node=create_node,
            create_node_id=create_node_id,
        )
        await acquirer.close()
    """

    def __init__(self, cache_dir: Path | str = ".cache/strapigraph", timeout: float = 30.0):
        """
        Initialize file acquirer.

        Args:
            cache_dir: Directory downloaded files are written to
            timeout: HTTP request timeout in seconds
        """
        self.cache_dir = Path(cache_dir)
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _target_path(self, url: str, digest: str) -> Path:
        suffix = Path(urlparse(url).path).suffix
        return self.cache_dir / f"{digest}{suffix}"

    async def __call__(
        self,
        *,
        url: str,
        parent_node_id: Optional[str] = None,
        create_node: Optional[Callable[[Any], Any]] = None,
        create_node_id: Optional[IdGenerator] = None,
        get_cache: Any = None,
    ) -> Optional[FileNode]:
        """
        Download `url` and register it as a file node.

        Returns:
            The created FileNode, or None when the download failed

        Raises:
            FileAcquisitionError: If the downloaded file cannot be written
        """
        client = await self._get_client()

        try:
            response = await client.get(url)
        except httpx.RequestError as e:
            logger.warning(f"Failed to download {url}: {e}")
            return None

        if response.status_code != 200:
            logger.warning(f"Failed to download {url}: HTTP {response.status_code}")
            return None

        content = response.content
        digest = hashlib.sha256(content).hexdigest()
        path = self._target_path(url, digest)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            raise FileAcquisitionError(url, str(e)) from e

        make_id = create_node_id or default_create_node_id
        file_node = FileNode(
            id=make_id(f"{url} >>> File"),
            url=url,
            parent_node_id=parent_node_id,
            path=str(path),
            content_digest=digest,
            media_type=response.headers.get("content-type"),
        )

        if create_node is not None:
            created = create_node(file_node)
            if inspect.isawaitable(created):
                await created

        logger.debug(f"Downloaded {url} -> {path}")
        return file_node

"""
Configuration loading and validation for a Strapi source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigError


@dataclass
class MarkdownImagesConfig:
    """Which fields of which types hold markdown that may embed images."""
    types_to_parse: dict[str, list[str]] = field(default_factory=dict)

    def fields_for(self, typename: Optional[str]) -> list[str]:
        if not typename:
            return []
        return self.types_to_parse.get(typename) or []


@dataclass
class SourceConfig:
    """Main source configuration."""
    api_url: str
    collection_types: list[str] = field(default_factory=list)
    single_types: list[str] = field(default_factory=list)
    markdown_images: MarkdownImagesConfig = field(default_factory=MarkdownImagesConfig)
    max_concurrent_downloads: Optional[int] = None
    cache_dir: str = ".cache/strapigraph"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceConfig":
        """Create config from dictionary (camelCase keys, as in the plugin options)."""
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping, got {type(data).__name__}")

        api_url = data.get("apiURL")
        if not api_url:
            raise ConfigError("apiURL is required")

        markdown_data = data.get("markdownImages") or {}
        types_to_parse = markdown_data.get("typesToParse") or {}
        if not isinstance(types_to_parse, dict):
            raise ConfigError("markdownImages.typesToParse must map type names to field lists")

        max_downloads = data.get("maxConcurrentDownloads")
        if max_downloads is not None and (not isinstance(max_downloads, int) or max_downloads < 1):
            raise ConfigError("maxConcurrentDownloads must be a positive integer")

        return cls(
            api_url=api_url.rstrip("/"),
            collection_types=list(data.get("collectionTypes") or []),
            single_types=list(data.get("singleTypes") or []),
            markdown_images=MarkdownImagesConfig(
                types_to_parse={name: list(fields or []) for name, fields in types_to_parse.items()},
            ),
            max_concurrent_downloads=max_downloads,
            cache_dir=data.get("cacheDir", ".cache/strapigraph"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for YAML serialization."""
        data: dict[str, Any] = {
            "apiURL": self.api_url,
            "collectionTypes": self.collection_types,
            "singleTypes": self.single_types,
            "markdownImages": {
                "typesToParse": self.markdown_images.types_to_parse,
            },
            "cacheDir": self.cache_dir,
        }
        if self.max_concurrent_downloads is not None:
            data["maxConcurrentDownloads"] = self.max_concurrent_downloads
        return data

    def save(self, path: Path | str = "strapigraph.yaml") -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        content = yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        path.write_text(content)


def load_config(path: Path | str = "strapigraph.yaml") -> SourceConfig | None:
    """Load configuration from YAML file."""
    path = Path(path)
    if not path.exists():
        return None

    data = yaml.safe_load(path.read_text())
    return SourceConfig.from_dict(data)

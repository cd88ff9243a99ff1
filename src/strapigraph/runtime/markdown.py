"""
Image extraction from markdown fields.
"""

from __future__ import annotations

from typing import Optional

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode


class MarkdownImageExtractor:
    """
    Collects image destinations from markdown text in document order.

    Usage:
        extractor = MarkdownImageExtractor()
        extractor.extract("![a](/uploads/a.png) and ![b](/uploads/b.png)")
        # ["/uploads/a.png", "/uploads/b.png"]
    """

    def __init__(self, parser: Optional[MarkdownIt] = None):
        """
        Args:
            parser: Markdown parser; defaults to a CommonMark parser
        """
        self.parser = parser or MarkdownIt("commonmark")

    def extract(self, text: Optional[str]) -> list[str]:
        if not text:
            return []

        tree = SyntaxTreeNode(self.parser.parse(text))
        files: list[str] = []
        for node in tree.walk():
            if node.type == "image":
                files.append(str(node.attrs.get("src", "")))
        return files


def extract_files(text: Optional[str], extractor: Optional[MarkdownImageExtractor] = None) -> list[str]:
    """Extract image destinations with the given (or a fresh) extractor."""
    return (extractor or MarkdownImageExtractor()).extract(text)

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Handler interface and the structural handlers shared by many tags."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from bs4 import Tag

if TYPE_CHECKING:
    from htmlremark.converter import DocumentConverter


class NodeHandler(ABC):
    """Render one HTML element into the converter's current output."""

    @abstractmethod
    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        """Render ``node``.

        Parameters
        ----------
        node : Tag
            Element being converted
        converter : DocumentConverter
            Converter holding the output sink and per-conversion state

        """


class Ignore(NodeHandler):
    """Drop the element and everything inside it."""

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        return None


class BlockContainer(NodeHandler):
    """Transparent container whose children are walked as blocks."""

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        converter.walk_nodes(node, converter.block_nodes)


class Paragraph(NodeHandler):
    """Render inline content as a block of its own; empty paragraphs vanish."""

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        content = converter.get_inline_content(node)
        if content:
            converter.output.write_block(content)

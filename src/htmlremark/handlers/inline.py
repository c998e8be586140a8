#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Inline code, line breaks, abbreviations and raw HTML passthrough."""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from bs4 import Tag

from htmlremark.constants import VOID_ELEMENTS
from htmlremark.handlers.base import NodeHandler
from htmlremark.utils.text import encode_entities

if TYPE_CHECKING:
    from htmlremark.converter import DocumentConverter
    from htmlremark.options import IgnoredHtmlElement


class InlineCode(NodeHandler):
    """Render ``<code>`` / ``<tt>`` as a backtick code span."""

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        text = node.get_text()
        if text:
            code = converter.cleaner.clean_inline_code(encode_entities(text))
            if converter.in_table_cell:
                # a bare pipe ends the cell, even inside a code span
                code = code.replace("|", "\\|")
            converter.output.write(code)


class LineBreak(NodeHandler):
    """Render ``<br>`` as a hard line break."""

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        converter.output.write("\n" if converter.options.hardwraps else "  \n")


class Abbreviation(NodeHandler):
    """Record ``<abbr title>`` definitions and render the abbreviation as text."""

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        title = node.get("title")
        abbr = node.get_text().strip()
        if title and abbr and abbr not in converter.abbreviations:
            converter.abbreviations[abbr] = " ".join(str(title).split())
        converter.walk_nodes(node, converter.inline_nodes)


class IgnoredHtml(NodeHandler):
    """Copy an element through as raw HTML, keeping only the configured attributes.

    Parameters
    ----------
    element : IgnoredHtmlElement
        Tag name and the attributes to keep

    """

    def __init__(self, element: IgnoredHtmlElement):
        self.element = element

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        attrs = []
        for name in self.element.attributes:
            value = node.get(name)
            if value is None:
                continue
            if isinstance(value, list):
                value = " ".join(value)
            attrs.append(f' {name}="{html.escape(value)}"')
        converter.output.write(f"<{node.name}{''.join(attrs)}>")
        if node.name in VOID_ELEMENTS:
            return
        converter.walk_nodes(node, converter.inline_nodes)
        converter.output.write(f"</{node.name}>")

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Ordered and unordered lists."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bs4 import NavigableString, Tag

from htmlremark.constants import LIST_INDENT, LOOSE_ITEM_TAGS, UNORDERED_LIST_MARKER
from htmlremark.handlers.base import NodeHandler
from htmlremark.utils.text import indent_continuation_lines

if TYPE_CHECKING:
    from htmlremark.converter import DocumentConverter

logger = logging.getLogger(__name__)

_NESTED_LIST_TAGS = ("ul", "ol")


class ListHandler(NodeHandler):
    """Render ``<ul>`` and ``<ol>``.

    Items are separated by blank lines as soon as one of them holds block
    content (paragraphs, code, tables). Continuation lines are indented by
    four spaces so nested blocks stay inside their item. A nested list that
    sits directly inside the list, instead of inside an ``<li>``, is attached
    to the preceding item.
    """

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        ordered = node.name == "ol"
        number = _start_number(node) if ordered else 1
        items: list[str] = []
        loose = False

        for child in node.children:
            if not isinstance(child, Tag):
                if isinstance(child, NavigableString) and child.strip():
                    logger.debug("Ignoring stray text inside <%s>", node.name)
                continue
            if child.name == "li":
                content, item_loose = _render_item(child, converter)
                loose = loose or item_loose
                marker = _ordered_marker(number) if ordered else UNORDERED_LIST_MARKER
                number += 1
                items.append((marker + indent_continuation_lines(content, LIST_INDENT)).rstrip())
            elif child.name in _NESTED_LIST_TAGS and items:
                nested = converter.render_node(child)
                if nested:
                    items[-1] += "\n" + LIST_INDENT + indent_continuation_lines(nested, LIST_INDENT)
            else:
                # anything else becomes an item of its own
                content = converter.render_node(child)
                if content:
                    marker = _ordered_marker(number) if ordered else UNORDERED_LIST_MARKER
                    number += 1
                    items.append(marker + indent_continuation_lines(content, LIST_INDENT))

        if items:
            converter.output.write_block(("\n\n" if loose else "\n").join(items))


def _render_item(item: Tag, converter: DocumentConverter) -> tuple[str, bool]:
    """Return the Markdown for one ``<li>`` and whether it makes the list loose."""
    if any(isinstance(child, Tag) and child.name in LOOSE_ITEM_TAGS for child in item.children):
        return converter.get_block_content(item), True

    parts: list[str] = []
    run: list = []
    for child in item.children:
        if isinstance(child, Tag) and child.name in _NESTED_LIST_TAGS:
            text = converter.render_inline(run)
            if text:
                parts.append(text)
            run = []
            nested = converter.render_node(child)
            if nested:
                parts.append(nested)
        else:
            run.append(child)
    text = converter.render_inline(run)
    if text:
        parts.append(text)
    return "\n".join(parts), False


def _start_number(node: Tag) -> int:
    try:
        return int(str(node.get("start", "1")).strip())
    except ValueError:
        logger.debug("Invalid list start %r, using 1", node.get("start"))
        return 1


def _ordered_marker(number: int) -> str:
    marker = f"{number}."
    return marker.ljust(len(LIST_INDENT)) if len(marker) < len(LIST_INDENT) else marker + " "

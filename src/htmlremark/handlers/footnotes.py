#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Collect footnote definitions from a ``footnotes`` container."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from bs4 import Tag

from htmlremark.constants import FOOTNOTE_BACKREF_CLASSES
from htmlremark.handlers.base import NodeHandler
from htmlremark.handlers.links import footnote_id

if TYPE_CHECKING:
    from htmlremark.converter import DocumentConverter

logger = logging.getLogger(__name__)

_BACKREF_MARKERS = ("↩", "↩︎")


class FootnoteContainer(NodeHandler):
    """Record every ``<li id="fn:…">`` as a footnote; the container itself renders nothing.

    The definitions are written at the end of the document. Back-reference
    links inside a definition are left out.
    """

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        for item in node.find_all("li"):
            item_id = item.get("id")
            if not item_id:
                continue
            definition = copy.copy(item)
            for anchor in definition.find_all("a"):
                if _is_backref(anchor):
                    anchor.decompose()
            content = converter.get_block_content(definition)
            if content:
                converter.footnotes[footnote_id(str(item_id))] = content
        logger.debug("Collected %d footnotes", len(converter.footnotes))


def _is_backref(anchor: Tag) -> bool:
    rev = anchor.get("rev") or []
    if isinstance(rev, str):
        rev = rev.split()
    if "footnote" in rev:
        return True
    classes = anchor.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    if FOOTNOTE_BACKREF_CLASSES.intersection(classes):
        return True
    href = str(anchor.get("href") or "")
    return href.startswith("#fnref") or anchor.get_text().strip() in _BACKREF_MARKERS

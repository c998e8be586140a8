#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Convert ``<table>`` elements through the :class:`~htmlremark.table.MarkdownTable` model."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from bs4 import Tag

from htmlremark.constants import STYLE_ALIGNMENT_PATTERN
from htmlremark.handlers.base import NodeHandler
from htmlremark.table import Alignment, MarkdownTable, MarkdownTableCell

if TYPE_CHECKING:
    from htmlremark.converter import DocumentConverter

logger = logging.getLogger(__name__)

_STYLE_ALIGNMENT = re.compile(STYLE_ALIGNMENT_PATTERN, re.IGNORECASE)
_NEWLINES = re.compile(r"\s*\n\s*")


class Table(NodeHandler):
    """Render a table according to the configured table mode.

    Rows come from ``<thead>``, ``<tbody>``, ``<tfoot>`` or directly from the
    table. Rows in ``<thead>`` are header rows. Outside ``<thead>``, a row
    whose first cell is a ``<th>`` becomes a header row as long as no header
    row has been seen yet. Rows without cells are skipped.
    """

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        options = converter.options
        if options.tables_left_as_html:
            converter.output.write_block(str(node))
            return

        table = MarkdownTable()
        state = {"has_header": False, "caption": ""}
        self._process_table(node, table, converter, state)

        if state["caption"]:
            converter.output.write_block(f"*{state['caption']}*")
        text = table.render(
            colspan_enabled=options.tables_colspan_enabled,
            rendered_as_code=options.tables_rendered_as_code,
        )
        if text:
            converter.output.write_block(text)
        else:
            logger.debug("Skipping table without cells")

    def _process_table(self, node: Tag, table: MarkdownTable, converter: DocumentConverter, state: dict) -> None:
        for child in node.children:
            if not isinstance(child, Tag):
                continue
            if child.name == "thead":
                state["has_header"] = True
                for row in child.find_all("tr", recursive=False):
                    if _cells(row):
                        self._process_row(row, table.add_header_row(), converter)
            elif child.name in ("tbody", "tfoot"):
                self._process_table(child, table, converter, state)
            elif child.name == "tr":
                cells = _cells(child)
                if not cells:
                    logger.debug("Skipping table row without cells")
                    continue
                if cells[0].name == "th" and not state["has_header"]:
                    state["has_header"] = True
                    self._process_row(child, table.add_header_row(), converter)
                else:
                    self._process_row(child, table.add_body_row(), converter)
            elif child.name == "caption":
                state["caption"] = converter.get_inline_content(child, undo_leading_escapes=True)

    def _process_row(self, row: Tag, cells: list[MarkdownTableCell], converter: DocumentConverter) -> None:
        for cell in _cells(row):
            if converter.options.tables_rendered_as_code:
                text = " ".join(cell.get_text().split())
            else:
                converter.in_table_cell = True
                try:
                    text = _NEWLINES.sub(" ", converter.get_inline_content(cell, undo_leading_escapes=True))
                finally:
                    converter.in_table_cell = False
            cells.append(MarkdownTableCell(text, _cell_alignment(cell), _colspan(cell)))


def _cells(row: Tag) -> list[Tag]:
    return row.find_all(["td", "th"], recursive=False)


def _cell_alignment(cell: Tag) -> Alignment:
    align = cell.get("align")
    if align:
        return Alignment.from_name(str(align))
    style = cell.get("style")
    if style:
        match = _STYLE_ALIGNMENT.search(str(style))
        if match:
            return Alignment.from_name(match.group(1))
    return Alignment.LEFT


def _colspan(cell: Tag) -> int:
    value = cell.get("colspan")
    if value is None:
        return 1
    try:
        span = int(str(value).strip())
    except ValueError:
        logger.debug("Invalid colspan %r, using 1", value)
        return 1
    return max(span, 1)

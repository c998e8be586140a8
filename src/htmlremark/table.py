#  Copyright (c) 2025 Tom Villani, Ph.D.
"""In-memory Markdown table model and renderer.

A :class:`MarkdownTable` is filled row by row while a ``<table>`` element is
walked, then rendered in one go, either as a pipe table or as a plain
space-aligned table inside an indented code block.

Column spans follow the MultiMarkdown convention: a cell that spans ``n``
columns is padded to the combined width of those columns and closed with
``n`` pipes, so every consumed column shows up as an empty ``|`` marker::

    | Name  | Value |
    | ----- | ----- |
    | wide          ||

When column spans are disabled, the spanning cell keeps its first column and
the other columns it covers are rendered as empty cells.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from htmlremark.constants import (
    MIN_TABLE_COLUMN_WIDTH,
    TABLE_CODE_COLUMN_SEPARATOR,
    TABLE_CODE_INDENT,
)
from htmlremark.utils.text import align

logger = logging.getLogger(__name__)


class Alignment(Enum):
    """Horizontal alignment of a table cell or column."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @classmethod
    def from_name(cls, name: str | None) -> "Alignment":
        """Map an HTML ``align`` / ``text-align`` value to an alignment, defaulting to left."""
        if name:
            name = name.strip().lower()
            if name == "center":
                return cls.CENTER
            if name == "right":
                return cls.RIGHT
        return cls.LEFT

    def marker(self, width: int) -> str:
        """Return the alignment row marker for a column of ``width`` characters."""
        width = max(width, MIN_TABLE_COLUMN_WIDTH)
        if self is Alignment.CENTER:
            return ":" + "-" * (width - 2) + ":"
        if self is Alignment.RIGHT:
            return "-" * (width - 1) + ":"
        return "-" * width


@dataclass
class MarkdownTableCell:
    """A single table cell."""

    text: str
    alignment: Alignment = Alignment.LEFT
    colspan: int = 1

    def __post_init__(self) -> None:
        if self.colspan < 1:
            self.colspan = 1


@dataclass
class MarkdownTable:
    """Header and body rows of a table, in document order."""

    header_rows: list[list[MarkdownTableCell]] = field(default_factory=list)
    body_rows: list[list[MarkdownTableCell]] = field(default_factory=list)

    def add_header_row(self) -> list[MarkdownTableCell]:
        """Append an empty header row and return it for filling."""
        row: list[MarkdownTableCell] = []
        self.header_rows.append(row)
        return row

    def add_body_row(self) -> list[MarkdownTableCell]:
        """Append an empty body row and return it for filling."""
        row: list[MarkdownTableCell] = []
        self.body_rows.append(row)
        return row

    @property
    def column_count(self) -> int:
        """The largest sum of colspans over all rows."""
        return max((_row_span(row) for row in self.header_rows + self.body_rows), default=0)

    def render(self, colspan_enabled: bool = False, rendered_as_code: bool = False) -> str:
        """Render the table.

        Parameters
        ----------
        colspan_enabled : bool, default False
            Emit MultiMarkdown column spans instead of padding with empty cells.
        rendered_as_code : bool, default False
            Render space-aligned columns in an indented code block instead of
            a pipe table.

        Returns
        -------
        str
            The rendered table without a trailing newline, or an empty
            string when the table has no columns.

        """
        num_cols = self.column_count
        if num_cols == 0:
            return ""

        header_rows = self.header_rows
        if not header_rows and not rendered_as_code:
            # pipe tables need a header row even when the source has none
            header_rows = [[MarkdownTableCell("") for _ in range(num_cols)]]
        header_rows = [_normalize_row(row, num_cols, colspan_enabled) for row in header_rows]
        body_rows = [_normalize_row(row, num_cols, colspan_enabled) for row in self.body_rows]

        widths = _column_widths(header_rows + body_rows, num_cols)
        alignments = _column_alignments(header_rows + body_rows, num_cols)

        if rendered_as_code:
            return self._render_as_code(header_rows, body_rows, widths, alignments)

        lines = [_render_row(row, widths, alignments) for row in header_rows]
        lines.append("| " + " | ".join(a.marker(w) for a, w in zip(alignments, widths)) + " |")
        lines.extend(_render_row(row, widths, alignments) for row in body_rows)
        return "\n".join(lines)

    def _render_as_code(
        self,
        header_rows: list[list[MarkdownTableCell]],
        body_rows: list[list[MarkdownTableCell]],
        widths: list[int],
        alignments: list[Alignment],
    ) -> str:
        lines = [_render_code_row(row, widths, alignments) for row in header_rows]
        if header_rows:
            lines.append(TABLE_CODE_COLUMN_SEPARATOR.join("-" * w for w in widths))
        lines.extend(_render_code_row(row, widths, alignments) for row in body_rows)
        return "\n".join(f"{TABLE_CODE_INDENT}{line}".rstrip() for line in lines)


def _row_span(row: list[MarkdownTableCell]) -> int:
    return sum(cell.colspan for cell in row)


def _normalize_row(row: list[MarkdownTableCell], num_cols: int, colspan_enabled: bool) -> list[MarkdownTableCell]:
    """Pad or truncate a row to exactly ``num_cols`` columns."""
    result: list[MarkdownTableCell] = []
    used = 0
    for cell in row:
        if used >= num_cols:
            logger.debug("Dropping table cell beyond column %d", num_cols)
            break
        span = min(cell.colspan, num_cols - used)
        if colspan_enabled:
            result.append(MarkdownTableCell(cell.text, cell.alignment, span))
        else:
            result.append(MarkdownTableCell(cell.text, cell.alignment, 1))
            result.extend(MarkdownTableCell("", cell.alignment) for _ in range(span - 1))
        used += span
    result.extend(MarkdownTableCell("") for _ in range(num_cols - used))
    return result


def _column_widths(rows: list[list[MarkdownTableCell]], num_cols: int) -> list[int]:
    widths = [MIN_TABLE_COLUMN_WIDTH] * num_cols
    for row in rows:
        col = 0
        for cell in row:
            if cell.colspan == 1:
                widths[col] = max(widths[col], len(cell.text))
            col += cell.colspan
    # spanning cells widen their last column if they do not fit
    for row in rows:
        col = 0
        for cell in row:
            if cell.colspan > 1:
                available = _span_width(widths, col, cell.colspan)
                if len(cell.text) > available:
                    widths[col + cell.colspan - 1] += len(cell.text) - available
            col += cell.colspan
    return widths


def _column_alignments(rows: list[list[MarkdownTableCell]], num_cols: int) -> list[Alignment]:
    alignments: list[Alignment | None] = [None] * num_cols
    for row in rows:
        col = 0
        for cell in row:
            if cell.colspan == 1 and alignments[col] is None and cell.alignment is not Alignment.LEFT:
                alignments[col] = cell.alignment
            col += cell.colspan
    return [a or Alignment.LEFT for a in alignments]


def _span_width(widths: list[int], start: int, span: int) -> int:
    """Width available to a cell spanning ``span`` columns in a pipe table."""
    return sum(widths[start : start + span]) + 2 * (span - 1)


def _render_row(row: list[MarkdownTableCell], widths: list[int], alignments: list[Alignment]) -> str:
    parts = ["|"]
    col = 0
    for cell in row:
        width = _span_width(widths, col, cell.colspan)
        alignment = alignments[col] if cell.colspan == 1 else cell.alignment
        parts.append(f" {align(cell.text, width, alignment.value)} " + "|" * cell.colspan)
        col += cell.colspan
    return "".join(parts)


def _render_code_row(row: list[MarkdownTableCell], widths: list[int], alignments: list[Alignment]) -> str:
    parts = []
    col = 0
    for cell in row:
        width = sum(widths[col : col + cell.colspan]) + len(TABLE_CODE_COLUMN_SEPARATOR) * (cell.colspan - 1)
        alignment = alignments[col] if cell.colspan == 1 else cell.alignment
        parts.append(align(cell.text, width, alignment.value))
        col += cell.colspan
    return TABLE_CODE_COLUMN_SEPARATOR.join(parts)

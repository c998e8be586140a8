#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Italic and bold rendering with nesting and in-word emphasis handling."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from htmlremark.constants import BOLD_WRAPPER, ITALIC_WRAPPER, STYLE_BOLD_PATTERN, STYLE_ITALIC_PATTERN
from htmlremark.handlers.base import NodeHandler

if TYPE_CHECKING:
    from htmlremark.converter import DocumentConverter
    from htmlremark.options import InWordEmphasis

logger = logging.getLogger(__name__)

_ITALIC_TAGS = frozenset({"i", "em"})
_BOLD_TAGS = frozenset({"b", "strong"})
_ITALIC_STYLE = re.compile(STYLE_ITALIC_PATTERN, re.IGNORECASE)
_BOLD_STYLE = re.compile(STYLE_BOLD_PATTERN, re.IGNORECASE)
_WORD_CHAR = re.compile(r"\w")


@dataclass
class InlineStyleState:
    """Depth counters for the emphasis runs currently open in a conversion."""

    italic_depth: int = 0
    bold_depth: int = 0

    def reset(self) -> None:
        self.italic_depth = 0
        self.bold_depth = 0


class InlineStyle(NodeHandler):
    """Render ``<i>``, ``<em>``, ``<b>``, ``<strong>`` and styled spans.

    Markers are only emitted by the outermost element of each kind, so
    ``<em>outer <em>inner</em></em>`` becomes ``*outer inner*``. Whitespace at
    the edges of the content is moved outside the markers, since emphasis
    that starts or ends with a space does not parse as emphasis.
    """

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        state = converter.style_state
        suppress, spacing = _in_word_effects(node, converter.options.in_word_emphasis)

        if suppress:
            state.italic_depth += 1
            state.bold_depth += 1
            try:
                self._write_spaced(node, converter, "", "", spacing)
            finally:
                state.italic_depth -= 1
                state.bold_depth -= 1
            return

        italic, bold = _contributed_styles(node)
        italic = italic and state.italic_depth == 0
        bold = bold and state.bold_depth == 0
        if not (italic or bold):
            converter.walk_nodes(node, converter.inline_nodes)
            return

        opening = (ITALIC_WRAPPER if italic else "") + (BOLD_WRAPPER if bold else "")
        closing = (BOLD_WRAPPER if bold else "") + (ITALIC_WRAPPER if italic else "")
        state.italic_depth += italic
        state.bold_depth += bold
        try:
            self._write_spaced(node, converter, opening, closing, spacing)
        finally:
            state.italic_depth -= italic
            state.bold_depth -= bold

    @staticmethod
    def _write_spaced(node: Tag, converter: DocumentConverter, opening: str, closing: str, spacing: bool) -> None:
        with converter.capture() as buffer:
            converter.walk_nodes(node, converter.inline_nodes)
        content = buffer.getvalue()
        stripped = content.strip()
        if not stripped:
            # nothing to emphasize
            converter.output.write(content)
            return

        leading = content[: len(content) - len(content.lstrip())]
        trailing = content[len(content.rstrip()) :]
        if spacing:
            leading = leading or " "
            trailing = trailing or " "
        converter.output.write(f"{leading}{opening}{stripped}{closing}{trailing}")


def _contributed_styles(node: Tag) -> tuple[bool, bool]:
    """Return whether ``node`` makes its content italic and bold."""
    style = node.get("style") or ""
    if isinstance(style, list):
        style = " ".join(style)
    italic = node.name in _ITALIC_TAGS or bool(_ITALIC_STYLE.search(style))
    bold = node.name in _BOLD_TAGS or bool(_BOLD_STYLE.search(style))
    return italic, bold


def _in_word_effects(node: Tag, policy: InWordEmphasis) -> tuple[bool, bool]:
    """Return ``(suppress, add_spacing)`` for an element that may sit inside a word."""
    if not policy.needs_check or not _is_in_word(node):
        return False, False
    logger.debug("In-word emphasis on <%s>", node.name)
    return not policy.preserve, policy.add_spacing


def _is_in_word(node: Tag) -> bool:
    previous = node.previous_sibling
    if _is_text(previous) and previous and _WORD_CHAR.match(previous[-1]):
        return True
    following = node.next_sibling
    return _is_text(following) and bool(following) and bool(_WORD_CHAR.match(following[0]))


def _is_text(node: object) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)

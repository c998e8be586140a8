#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Document converter: walks a BeautifulSoup tree and dispatches nodes to handlers.

The converter owns all state of one conversion: the output sink, the text
cleaner, the inline-style depth counters and the reference registries
(links, abbreviations, footnotes) that are flushed once the walk completes.
A converter instance must not be shared between concurrent conversions;
separate instances never share mutable state.

Two dispatch tables map tag names to handlers. The inline table is used for
content that lives inside a block (paragraph text, link text, table cells).
The block table contains every inline handler plus the block-level ones.
Tags without a handler are transparent: their children are walked with the
table that was active for the tag itself.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Iterable, Iterator
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from htmlremark.constants import (
    BLOCK_CONTAINER_TAGS,
    BLOCK_LEVEL_TAGS,
    FOOTNOTE_CONTAINER_CLASS,
    HEADING_TAGS,
    IGNORED_TAGS,
    INLINE_STYLE_TAGS,
)
from htmlremark.handlers.base import BlockContainer, Ignore, NodeHandler, Paragraph
from htmlremark.handlers.blocks import BlockQuote, Codeblock, DefinitionList, Heading, HorizontalRule
from htmlremark.handlers.footnotes import FootnoteContainer
from htmlremark.handlers.inline import Abbreviation, IgnoredHtml, InlineCode, LineBreak
from htmlremark.handlers.inline_style import InlineStyle, InlineStyleState
from htmlremark.handlers.links import Anchor, Image, LinkRegistry
from htmlremark.handlers.lists import ListHandler
from htmlremark.handlers.table import Table
from htmlremark.options import RemarkOptions
from htmlremark.text_cleaner import TextCleaner
from htmlremark.utils.block_writer import BlockWriter
from htmlremark.utils.text import encode_entities, indent_continuation_lines

logger = logging.getLogger(__name__)

NodeMap = dict[str, NodeHandler]

_HTML_WHITESPACE = re.compile(r"[ \t\r\n\f]+")


class DocumentConverter:
    """Convert a parsed HTML tree to Markdown.

    Parameters
    ----------
    options : RemarkOptions or None, default None
        Conversion options; defaults to plain Markdown.
    base_uri : str or None, default None
        Base URI that relative links and image sources are resolved against.

    Examples
    --------
        >>> from bs4 import BeautifulSoup
        >>> soup = BeautifulSoup("<p>Hello <em>world</em></p>", "html.parser")
        >>> DocumentConverter().convert(soup)
        'Hello *world*'

    """

    def __init__(self, options: RemarkOptions | None = None, base_uri: str | None = None):
        self.options = options or RemarkOptions()
        self.base_uri = base_uri
        self.cleaner = TextCleaner(self.options)
        self.output = BlockWriter()
        self.style_state = InlineStyleState()
        self.links = LinkRegistry(simple_ids=self.options.simple_link_ids)
        self.abbreviations: dict[str, str] = {}
        self.footnotes: dict[str, str] = {}
        self.inline_nodes: NodeMap = {}
        self.block_nodes: NodeMap = {}
        self.in_table_cell = False
        self._footnote_container = FootnoteContainer()
        self._build_node_maps()

    def _build_node_maps(self) -> None:
        options = self.options
        inline: NodeMap = {}
        style = InlineStyle()
        for tag in INLINE_STYLE_TAGS:
            inline[tag] = style
        inline["a"] = Anchor()
        inline["img"] = Image()
        inline["code"] = inline["tt"] = InlineCode()
        inline["br"] = LineBreak()
        if options.abbreviations:
            inline["abbr"] = inline["acronym"] = Abbreviation()
        ignore = Ignore()
        for tag in IGNORED_TAGS:
            inline[tag] = ignore

        block: NodeMap = dict(inline)
        container = BlockContainer()
        for tag in BLOCK_CONTAINER_TAGS:
            block[tag] = container
        block["p"] = Paragraph()
        heading = Heading()
        for tag in HEADING_TAGS:
            block[tag] = heading
        block["blockquote"] = BlockQuote()
        block["hr"] = HorizontalRule()
        block["pre"] = Codeblock()
        block["ul"] = block["ol"] = ListHandler()
        block["table"] = ignore if options.tables_removed else Table()
        if options.definition_lists:
            block["dl"] = DefinitionList()
        else:
            block["dl"] = block["dd"] = container
            block["dt"] = block["p"]

        # raw HTML passthrough wins over every other handler
        for element in options.ignored_html_elements:
            inline[element.tag] = block[element.tag] = IgnoredHtml(element)

        self.inline_nodes = inline
        self.block_nodes = block

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def convert(self, root: Tag) -> str:
        """Convert ``root`` and return the Markdown text."""
        writer = BlockWriter()
        self.convert_to(root, writer)
        return writer.getvalue()

    def convert_to(self, root: Tag, writer: BlockWriter) -> None:
        """Convert ``root`` into ``writer`` and flush it.

        Raises
        ------
        OutputWriteError
            If the writer's backing stream fails.

        """
        self._reset()
        self.output = writer
        logger.debug("Converting <%s> with tables=%s", root.name, self.options.tables)
        self.handle_node(root, self.block_nodes)
        self._write_references()
        if self.style_state.italic_depth or self.style_state.bold_depth:
            logger.warning(
                "Unbalanced inline style depth after conversion (italic=%d, bold=%d)",
                self.style_state.italic_depth,
                self.style_state.bold_depth,
            )
        self.style_state.reset()
        writer.flush()

    def _reset(self) -> None:
        self.style_state.reset()
        self.links.clear()
        self.abbreviations.clear()
        self.footnotes.clear()

    # ------------------------------------------------------------------
    # Walking
    # ------------------------------------------------------------------

    def handle_node(self, node: Tag, node_map: NodeMap) -> None:
        """Dispatch a single element to its handler."""
        handler = self._find_handler(node, node_map)
        if handler is None:
            self.walk_nodes(node, node_map)
        else:
            handler.handle(node, self)

    def _find_handler(self, node: Tag, node_map: NodeMap) -> NodeHandler | None:
        if isinstance(node, BeautifulSoup):
            return None
        if self.options.footnotes and node_map is self.block_nodes and _is_footnote_container(node):
            return self._footnote_container
        return node_map.get(node.name)

    def walk_nodes(self, node: Tag, node_map: NodeMap) -> None:
        """Walk the children of ``node`` using ``node_map``."""
        self.walk_sequence(node.children, node_map)

    def walk_sequence(self, children: Iterable, node_map: NodeMap) -> None:
        """Walk a sequence of sibling nodes using ``node_map``."""
        block_context = node_map is self.block_nodes
        for child in list(children):
            if isinstance(child, PreformattedString):
                # comments, doctypes, CDATA and processing instructions
                continue
            if isinstance(child, NavigableString):
                self.write_text(child, block_context)
            elif isinstance(child, Tag):
                self.handle_node(child, node_map)

    def write_text(self, node: NavigableString, block_context: bool = False) -> None:
        """Clean a text node and write it to the output.

        In a block context, whitespace around block boundaries is dropped:
        whitespace-only text is skipped when no inline run is open or the
        next sibling is a block, leading whitespace is trimmed when the text
        opens a new block and trailing whitespace is trimmed before a block.
        Runs of HTML whitespace collapse to one space, as browsers render them.
        """
        text = _HTML_WHITESPACE.sub(" ", str(node))
        if block_context:
            before_block = _next_is_block(node)
            if not text.strip() and (self.output.block_depth == 0 or before_block):
                return
            if self.output.block_depth == 0:
                text = text.lstrip()
            if before_block:
                text = text.rstrip()
        if text:
            self.output.write(self.cleaner.clean(encode_entities(text)))

    @contextmanager
    def capture(self) -> Iterator[BlockWriter]:
        """Temporarily redirect output into a fresh in-memory writer."""
        previous = self.output
        self.output = BlockWriter()
        try:
            yield self.output
        finally:
            self.output = previous

    def get_inline_content(self, node: Tag, undo_leading_escapes: bool = False) -> str:
        """Render the children of ``node`` as inline Markdown and return it stripped.

        Parameters
        ----------
        node : Tag
            Element whose children are rendered
        undo_leading_escapes : bool, default False
            Remove start-of-line escapes, for text that will not start a line
            (table cells, link text, headings).

        """
        return self.render_inline(node.children, undo_leading_escapes)

    def render_inline(self, children: Iterable, undo_leading_escapes: bool = False) -> str:
        """Render a run of sibling nodes as inline Markdown."""
        with self.capture() as writer:
            self.walk_sequence(children, self.inline_nodes)
        text = writer.getvalue().strip()
        if undo_leading_escapes:
            text = self.cleaner.unescape_leading(text)
        return text

    def get_block_content(self, node: Tag) -> str:
        """Render the children of ``node`` as block-level Markdown."""
        with self.capture() as writer:
            self.walk_nodes(node, self.block_nodes)
        return writer.getvalue().strip("\n").rstrip()

    def render_node(self, node: Tag) -> str:
        """Render ``node`` itself (not only its children) as block-level Markdown."""
        with self.capture() as writer:
            self.handle_node(node, self.block_nodes)
        return writer.getvalue().strip("\n").rstrip()

    # ------------------------------------------------------------------
    # URLs and references
    # ------------------------------------------------------------------

    def resolve_url(self, url: str) -> str:
        """Resolve ``url`` against the base URI unless relative links are preserved."""
        url = url.strip()
        if not self.base_uri or self.options.preserve_relative_links or url.startswith("#"):
            return url
        if urlparse(url).scheme:
            return url
        return urljoin(self.base_uri, url)

    def _write_references(self) -> None:
        definitions = self.links.definitions()
        if definitions:
            self.output.write_block("\n".join(definitions))
        if self.abbreviations:
            self.output.write_block(
                "\n".join(f"*[{abbr}]: {title}" for abbr, title in self.abbreviations.items())
            )
        for footnote_id, content in self.footnotes.items():
            self.output.write_block(f"[^{footnote_id}]: " + indent_continuation_lines(content, "    "))


def _is_footnote_container(node: Tag) -> bool:
    classes = node.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return FOOTNOTE_CONTAINER_CLASS in classes


def _next_is_block(node: NavigableString) -> bool:
    """True if the next meaningful sibling is a block element or there is none."""
    sibling = node.next_sibling
    while isinstance(sibling, PreformattedString):
        sibling = sibling.next_sibling
    if sibling is None:
        return True
    return isinstance(sibling, Tag) and sibling.name in BLOCK_LEVEL_TAGS

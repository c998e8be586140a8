#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Block-level handlers: headings, blockquotes, rules, code blocks and definition lists."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from bs4 import Tag

from htmlremark.constants import CODE_INDENT, HORIZONTAL_RULE, LIST_INDENT
from htmlremark.handlers.base import NodeHandler
from htmlremark.utils.text import encode_entities, indent_continuation_lines, longest_run

if TYPE_CHECKING:
    from htmlremark.converter import DocumentConverter

logger = logging.getLogger(__name__)

_LANGUAGE_CLASS = re.compile(r"(?:^|\s)(?:language-|lang-|brush:\s*)([\w+#.\-]+)")
_SAFE_LANGUAGE = re.compile(r"^[\w+#.\-]+$")


class Heading(NodeHandler):
    """Render ``<h1>`` to ``<h6>`` as ATX headings, or setext headings for levels 1-2."""

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        content = " ".join(converter.get_inline_content(node, undo_leading_escapes=True).split())
        if not content:
            return
        level = int(node.name[1])
        options = converter.options

        suffix = ""
        heading_id = node.get("id")
        if options.header_ids and heading_id:
            suffix = f" {{#{heading_id}}}"

        if options.hash_headings or level > 2:
            converter.output.write_block(f"{'#' * level} {content}{suffix}")
        else:
            text = f"{content}{suffix}"
            underline = ("=" if level == 1 else "-") * len(text)
            converter.output.write_block(f"{text}\n{underline}")


class BlockQuote(NodeHandler):
    """Render ``<blockquote>`` by prefixing its block content with ``>``."""

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        content = converter.get_block_content(node)
        if not content.strip():
            return
        converter.output.write_block("\n".join(f"> {line}" if line else ">" for line in content.split("\n")))


class HorizontalRule(NodeHandler):
    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        converter.output.write_block(HORIZONTAL_RULE)


class Codeblock(NodeHandler):
    """Render ``<pre>`` as an indented or fenced code block.

    Fenced blocks use a fence one character longer than the longest run of
    the fence character inside the code, and carry the language found on the
    ``<pre>`` element or its ``<code>`` child.
    """

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        code = converter.cleaner.clean_code(encode_entities(node.get_text()))
        lines = [line.rstrip() for line in code.replace("\r\n", "\n").split("\n")]
        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()
        if not lines:
            return

        fence_char = converter.options.fence
        if fence_char is None:
            converter.output.write_block("\n".join(f"{CODE_INDENT}{line}" if line else "" for line in lines))
            return

        text = "\n".join(lines)
        width = max(converter.options.fenced_code_blocks_width, longest_run(text, fence_char) + 1)
        fence = fence_char * width
        language = extract_language(node)
        converter.output.write_block(f"{fence}{language}\n{text}\n{fence}")


class DefinitionList(NodeHandler):
    """Render ``<dl>`` in the Markdown Extra ``Term`` / ``:   definition`` form."""

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        groups: list[tuple[list[str], list[str]]] = []
        last = None
        for child in node.find_all(["dt", "dd"], recursive=False):
            if child.name == "dt":
                term = converter.get_inline_content(child, undo_leading_escapes=True)
                if not term:
                    continue
                if last != "dt":
                    groups.append(([], []))
                groups[-1][0].append(" ".join(term.split()))
            elif groups:
                definition = converter.get_block_content(child)
                if definition:
                    groups[-1][1].append(":   " + indent_continuation_lines(definition, LIST_INDENT))
            else:
                logger.debug("Skipping <dd> without a preceding <dt>")
                continue
            last = child.name
        # terms without any definition are not a definition list entry
        rendered = ["\n".join(terms + definitions) for terms, definitions in groups if definitions]
        if rendered:
            converter.output.write_block("\n\n".join(rendered))


def extract_language(node: Tag) -> str:
    """Find the code language declared on ``node`` or its ``<code>`` child.

    Recognizes ``language-x``, ``lang-x`` and ``brush: x`` classes and the
    ``data-lang`` attribute. Returns an empty string when nothing is found or
    the declared value is not a plain identifier.
    """
    candidates = [node]
    code_child = node.find("code")
    if code_child is not None:
        candidates.append(code_child)

    for candidate in candidates:
        data_lang = candidate.get("data-lang")
        if data_lang and _SAFE_LANGUAGE.match(str(data_lang)):
            return str(data_lang)
        classes = candidate.get("class") or []
        if isinstance(classes, list):
            classes = " ".join(classes)
        match = _LANGUAGE_CLASS.search(classes)
        if match:
            return match.group(1)
    return ""

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the htmlremark library.

This module centralizes the hardcoded values, lookup tables and default
configuration constants used across htmlremark.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Conversion Defaults - Default option values
3. Text Cleaning - Entity and unicode replacement tables, escape characters
4. Tables and Code - Table alignment and code fence settings
5. HTML Structure - Tag groupings used by the node dispatcher
6. Security Constants - Elements and URL schemes removed by the clean pass
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

TableMode = Literal["remove", "code_block", "leave_as_html", "markdown_extra", "multi_markdown"]
FencedCodeBlockStyle = Literal["none", "backtick", "tilde"]
AlignmentName = Literal["left", "center", "right"]

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_TABLE_MODE: TableMode = "code_block"
DEFAULT_FENCED_CODE_BLOCKS: FencedCodeBlockStyle = "none"
DEFAULT_FENCED_CODE_BLOCKS_WIDTH = 3
DEFAULT_HASH_HEADINGS = True
DEFAULT_STRIP_DANGEROUS_ELEMENTS = True
DEFAULT_PRESET = "markdown"
DEFAULT_URL_TIMEOUT = 15
DEFAULT_ENCODING = "utf-8"

# =============================================================================
# Text Cleaning
# =============================================================================

# Entities that are always reversed in normal text
BASIC_ENTITY_REPLACEMENTS = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
}

HTML_SMART_QUOTE_REPLACEMENTS = {
    "&ldquo;": '"',
    "&rdquo;": '"',
    "&lsquo;": "'",
    "&rsquo;": "'",
    "&apos;": "'",
    "&laquo;": "<<",
    "&raquo;": ">>",
}

HTML_SMART_PUNCTUATION_REPLACEMENTS = {
    "&ndash;": "--",
    "&mdash;": "---",
    "&hellip;": "...",
}

UNICODE_SMART_QUOTE_REPLACEMENTS = {
    "“": '"',  # left double quote
    "”": '"',  # right double quote
    "‘": "'",  # left single quote
    "’": "'",  # right single quote
    "«": "<<",  # left angle quote
    "»": ">>",  # right angle quote
}

UNICODE_SMART_PUNCTUATION_REPLACEMENTS = {
    "–": "--",  # en dash
    "—": "---",  # em dash
    "…": "...",  # ellipsis
}

# Characters escaped anywhere in normal text
MARKDOWN_ESCAPED_CHARS = "`*_{}[]#"

# Characters escaped only at the start of a line
MARKDOWN_LEADING_ESCAPED_CHARS = "-+"

# Any run of whitespace that ends in a newline
LINEBREAK_PATTERN = r"(?:\s*\n)+"

# =============================================================================
# Tables and Code
# =============================================================================

MIN_TABLE_COLUMN_WIDTH = 3
TABLE_CODE_INDENT = "    "
TABLE_CODE_COLUMN_SEPARATOR = "  "

STYLE_ALIGNMENT_PATTERN = r"text-align:\s*([a-z]+)"
STYLE_ITALIC_PATTERN = r"font-style:\s*italic"
STYLE_BOLD_PATTERN = r"font-weight:\s*bold"

ITALIC_WRAPPER = "*"
BOLD_WRAPPER = "**"

MIN_CODE_FENCE_LENGTH = 3
CODE_INDENT = "    "
LIST_INDENT = "    "
UNORDERED_LIST_MARKER = "*   "
HORIZONTAL_RULE = "* * *"

# =============================================================================
# HTML Structure
# =============================================================================

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

BLOCK_CONTAINER_TAGS = (
    "html",
    "body",
    "div",
    "section",
    "article",
    "main",
    "header",
    "footer",
    "aside",
    "nav",
    "center",
    "figure",
    "address",
)

IGNORED_TAGS = ("head", "title", "meta", "link", "script", "style", "noscript", "template")

INLINE_STYLE_TAGS = ("i", "em", "b", "strong", "span", "font")

# Block-level children that make a list item "loose"
LOOSE_ITEM_TAGS = frozenset(
    {"p", "pre", "blockquote", "table", "h1", "h2", "h3", "h4", "h5", "h6", "div", "dl", "hr"}
)

# Tags treated as block elements when trimming surrounding text
BLOCK_LEVEL_TAGS = frozenset(
    {"p", "pre", "blockquote", "table", "ul", "ol", "li", "dl", "dt", "dd", "hr", *HEADING_TAGS, *BLOCK_CONTAINER_TAGS}
)

VOID_ELEMENTS = frozenset({"br", "hr", "img", "input", "meta", "link", "area", "base", "col", "wbr"})

FOOTNOTE_CONTAINER_CLASS = "footnotes"
FOOTNOTE_BACKREF_CLASSES = frozenset({"footnote-backref", "reversefootnote"})

# =============================================================================
# Security Constants
# =============================================================================

DANGEROUS_HTML_ELEMENTS = frozenset(
    {"script", "style", "object", "embed", "form", "input", "iframe", "noscript", "template"}
)

DANGEROUS_SCHEMES = (
    "javascript:",
    "vbscript:",
    "data:text/html",
    "data:text/javascript",
    "data:application/javascript",
    "data:application/x-javascript",
)

URL_ATTRIBUTES = frozenset({"href", "src", "action", "formaction"})

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Conversion options and Markdown dialect presets.

A :class:`RemarkOptions` instance is resolved once per conversion and never
mutated afterwards; use :meth:`RemarkOptions.create_updated` to derive a
modified copy. The preset functions at the bottom of this module build the
option sets for the supported Markdown dialects.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any, Callable, ClassVar

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from htmlremark.constants import (
    DEFAULT_FENCED_CODE_BLOCKS,
    DEFAULT_FENCED_CODE_BLOCKS_WIDTH,
    DEFAULT_HASH_HEADINGS,
    DEFAULT_STRIP_DANGEROUS_ELEMENTS,
    DEFAULT_TABLE_MODE,
    MIN_CODE_FENCE_LENGTH,
    FencedCodeBlockStyle,
    TableMode,
)
from htmlremark.exceptions import ValidationError

_TABLE_MODES = ("remove", "code_block", "leave_as_html", "markdown_extra", "multi_markdown")
_FENCE_STYLES = ("none", "backtick", "tilde")


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class InWordEmphasis:
    """Policy for emphasis that touches word characters.

    Many Markdown parsers do not recognize ``foo*bar*baz`` as emphasis.

    Parameters
    ----------
    preserve : bool, default True
        Keep emphasis markers for elements that sit inside a word.
    add_spacing : bool, default False
        Insert a space before and after such elements so the markers are
        separated from the surrounding word characters.

    """

    preserve: bool = True
    add_spacing: bool = False

    NORMAL: ClassVar[InWordEmphasis]
    ADD_SPACES: ClassVar[InWordEmphasis]
    REMOVE_EMPHASIS: ClassVar[InWordEmphasis]

    @property
    def needs_check(self) -> bool:
        """Whether neighbouring text has to be inspected at all."""
        return not self.preserve or self.add_spacing


InWordEmphasis.NORMAL = InWordEmphasis()
InWordEmphasis.ADD_SPACES = InWordEmphasis(preserve=True, add_spacing=True)
InWordEmphasis.REMOVE_EMPHASIS = InWordEmphasis(preserve=False, add_spacing=False)

IN_WORD_EMPHASIS_NAMES: dict[str, InWordEmphasis] = {
    "normal": InWordEmphasis.NORMAL,
    "add_spaces": InWordEmphasis.ADD_SPACES,
    "remove_emphasis": InWordEmphasis.REMOVE_EMPHASIS,
}


@dataclass(frozen=True)
class IgnoredHtmlElement:
    """An HTML element that is kept as raw HTML in the Markdown output.

    Parameters
    ----------
    tag : str
        Tag name, e.g. ``"span"``
    attributes : tuple[str, ...], default ()
        Attributes copied onto the emitted tag when present on the source

    """

    tag: str
    attributes: tuple[str, ...] = ()

    @classmethod
    def create(cls, tag: str, *attributes: str) -> "IgnoredHtmlElement":
        """Build an element description, lowercasing names."""
        return cls(tag.lower(), tuple(a.lower() for a in attributes))


@dataclass(frozen=True)
class RemarkOptions(CloneFrozenMixin):
    """Configuration for converting HTML to Markdown.

    Parameters
    ----------
    tables : {"remove", "code_block", "leave_as_html", "markdown_extra", "multi_markdown"}, default "code_block"
        How ``<table>`` elements are rendered:
        - "remove": drop tables entirely
        - "code_block": space-aligned columns inside an indented code block
        - "leave_as_html": copy the table HTML through unchanged
        - "markdown_extra": pipe tables without column spans
        - "multi_markdown": pipe tables with MultiMarkdown column spans
    fenced_code_blocks : {"none", "backtick", "tilde"}, default "none"
        Use fenced code blocks instead of indented ones.
    fenced_code_blocks_width : int, default 3
        Minimum number of fence characters.
    definition_lists : bool, default False
        Render ``<dl>`` as Markdown Extra definition lists.
    abbreviations : bool, default False
        Collect ``<abbr>`` titles into ``*[ABBR]: Title`` definitions.
    footnotes : bool, default False
        Render footnote references and definitions.
    header_ids : bool, default False
        Append ``{#id}`` to headings that carry an ``id``.
    inline_links : bool, default False
        Use inline links; when False, reference-style links are generated.
    simple_link_ids : bool, default False
        Number reference ids (1, 2, ...) instead of deriving them from the link text.
    autolinks : bool, default False
        Render links whose text equals their URL as ``<url>``.
    hardwraps : bool, default False
        Render ``<br>`` as a plain newline instead of two trailing spaces.
    hash_headings : bool, default True
        Use ``#`` headings; when False, levels 1 and 2 use setext underlines.
    reverse_html_smart_quotes : bool, default False
        Replace smart-quote entities (``&ldquo;`` ...) with plain quotes.
    reverse_unicode_smart_quotes : bool, default False
        Replace smart-quote characters with plain quotes.
    reverse_html_smart_punctuation : bool, default False
        Replace ``&ndash;``, ``&mdash;`` and ``&hellip;`` with ``--``, ``---`` and ``...``.
    reverse_unicode_smart_punctuation : bool, default False
        Replace en dash, em dash and ellipsis characters the same way.
    in_word_emphasis : InWordEmphasis, default InWordEmphasis.NORMAL
        Policy for emphasis that touches word characters.
    preserve_relative_links : bool, default False
        Leave relative URLs untouched even when a base URI is supplied.
    ignored_html_elements : tuple[IgnoredHtmlElement, ...], default ()
        Elements passed through as raw HTML around their converted content.
    strip_dangerous_elements : bool, default True
        Remove scripts, styles, event handlers and unsafe URL schemes before converting.

    """

    tables: TableMode = field(
        default=DEFAULT_TABLE_MODE,
        metadata={"help": "How tables are rendered", "choices": list(_TABLE_MODES)},
    )
    fenced_code_blocks: FencedCodeBlockStyle = field(
        default=DEFAULT_FENCED_CODE_BLOCKS,
        metadata={"help": "Fenced code block style", "choices": list(_FENCE_STYLES)},
    )
    fenced_code_blocks_width: int = field(
        default=DEFAULT_FENCED_CODE_BLOCKS_WIDTH,
        metadata={"help": "Minimum code fence length"},
    )
    definition_lists: bool = field(default=False, metadata={"help": "Render definition lists"})
    abbreviations: bool = field(default=False, metadata={"help": "Render abbreviation definitions"})
    footnotes: bool = field(default=False, metadata={"help": "Render footnotes"})
    header_ids: bool = field(default=False, metadata={"help": "Append {#id} to headings"})
    inline_links: bool = field(default=False, metadata={"help": "Use inline instead of reference links"})
    simple_link_ids: bool = field(default=False, metadata={"help": "Use numeric reference link ids"})
    autolinks: bool = field(default=False, metadata={"help": "Render bare URLs as <url>"})
    hardwraps: bool = field(default=False, metadata={"help": "Render <br> as a plain newline"})
    hash_headings: bool = field(default=DEFAULT_HASH_HEADINGS, metadata={"help": "Use # headings"})
    reverse_html_smart_quotes: bool = field(default=False, metadata={"help": "Reverse smart quote entities"})
    reverse_unicode_smart_quotes: bool = field(default=False, metadata={"help": "Reverse smart quote characters"})
    reverse_html_smart_punctuation: bool = field(
        default=False, metadata={"help": "Reverse dash and ellipsis entities"}
    )
    reverse_unicode_smart_punctuation: bool = field(
        default=False, metadata={"help": "Reverse dash and ellipsis characters"}
    )
    in_word_emphasis: InWordEmphasis = field(
        default_factory=InWordEmphasis,
        metadata={"help": "In-word emphasis policy", "choices": list(IN_WORD_EMPHASIS_NAMES)},
    )
    preserve_relative_links: bool = field(default=False, metadata={"help": "Keep relative URLs relative"})
    ignored_html_elements: tuple[IgnoredHtmlElement, ...] = field(
        default=(), metadata={"help": "Elements kept as raw HTML"}
    )
    strip_dangerous_elements: bool = field(
        default=DEFAULT_STRIP_DANGEROUS_ELEMENTS,
        metadata={"help": "Remove scripts, event handlers and unsafe URLs"},
    )

    def __post_init__(self) -> None:
        """Validate enumerated values and numeric ranges.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        if self.tables not in _TABLE_MODES:
            raise ValidationError(
                f"tables must be one of {', '.join(_TABLE_MODES)}, got {self.tables!r}",
                parameter_name="tables",
                parameter_value=self.tables,
            )
        if self.fenced_code_blocks not in _FENCE_STYLES:
            raise ValidationError(
                f"fenced_code_blocks must be one of {', '.join(_FENCE_STYLES)}, got {self.fenced_code_blocks!r}",
                parameter_name="fenced_code_blocks",
                parameter_value=self.fenced_code_blocks,
            )
        if self.fenced_code_blocks_width < MIN_CODE_FENCE_LENGTH:
            raise ValidationError(
                f"fenced_code_blocks_width must be at least {MIN_CODE_FENCE_LENGTH}, "
                f"got {self.fenced_code_blocks_width}",
                parameter_name="fenced_code_blocks_width",
                parameter_value=self.fenced_code_blocks_width,
            )
        if not isinstance(self.in_word_emphasis, InWordEmphasis):
            raise ValidationError(
                "in_word_emphasis must be an InWordEmphasis instance",
                parameter_name="in_word_emphasis",
                parameter_value=self.in_word_emphasis,
            )

    @property
    def tables_removed(self) -> bool:
        return self.tables == "remove"

    @property
    def tables_left_as_html(self) -> bool:
        return self.tables == "leave_as_html"

    @property
    def tables_rendered_as_code(self) -> bool:
        return self.tables == "code_block"

    @property
    def tables_colspan_enabled(self) -> bool:
        return self.tables == "multi_markdown"

    @property
    def tables_converted_to_text(self) -> bool:
        """True when tables become Markdown text (pipe tables or a code block)."""
        return self.tables in ("code_block", "markdown_extra", "multi_markdown")

    @property
    def fence(self) -> str | None:
        """The fence character, or None for indented code blocks."""
        if self.fenced_code_blocks == "backtick":
            return "`"
        if self.fenced_code_blocks == "tilde":
            return "~"
        return None

    def reverse_all_smart_punctuation(self, enabled: bool = True) -> "RemarkOptions":
        """Return a copy with all four smart quote/punctuation reversals set to ``enabled``."""
        return self.create_updated(
            reverse_html_smart_quotes=enabled,
            reverse_unicode_smart_quotes=enabled,
            reverse_html_smart_punctuation=enabled,
            reverse_unicode_smart_punctuation=enabled,
        )


# =============================================================================
# Presets
# =============================================================================


def markdown() -> RemarkOptions:
    """Options for original Markdown: tables become code blocks, links are references."""
    return RemarkOptions()


def markdown_extra() -> RemarkOptions:
    """Options for PHP Markdown Extra."""
    return RemarkOptions(
        tables="markdown_extra",
        fenced_code_blocks="tilde",
        definition_lists=True,
        abbreviations=True,
        footnotes=True,
        header_ids=True,
    )


def multi_markdown() -> RemarkOptions:
    """Options for MultiMarkdown, including column spans in tables."""
    return RemarkOptions(
        tables="multi_markdown",
        fenced_code_blocks="backtick",
        definition_lists=True,
        abbreviations=True,
        footnotes=True,
        header_ids=True,
    )


def pegdown_base() -> RemarkOptions:
    """Options for pegdown with no extensions enabled."""
    return RemarkOptions(in_word_emphasis=InWordEmphasis.REMOVE_EMPHASIS)


def pegdown_all_extensions() -> RemarkOptions:
    """Options for pegdown with every extension enabled."""
    return pegdown_base().create_updated(
        tables="multi_markdown",
        fenced_code_blocks="tilde",
        definition_lists=True,
        abbreviations=True,
        autolinks=True,
        hardwraps=True,
    ).reverse_all_smart_punctuation()


def github() -> RemarkOptions:
    """Options for GitHub-flavored Markdown."""
    return RemarkOptions(
        tables="markdown_extra",
        fenced_code_blocks="backtick",
        inline_links=True,
        autolinks=True,
        hardwraps=True,
    )


PRESETS: dict[str, Callable[[], RemarkOptions]] = {
    "markdown": markdown,
    "markdownextra": markdown_extra,
    "multimarkdown": multi_markdown,
    "pegdown": pegdown_base,
    "pegdownall": pegdown_all_extensions,
    "github": github,
}


def get_preset(name: str) -> RemarkOptions:
    """Look up a preset by name.

    Names are case-insensitive and ignore ``_`` and ``-``, so
    ``"markdown_extra"``, ``"Markdown-Extra"`` and ``"markdownextra"`` are
    equivalent.

    Raises
    ------
    ValidationError
        If no preset has that name.

    """
    key = name.lower().replace("_", "").replace("-", "")
    try:
        factory = PRESETS[key]
    except KeyError:
        raise ValidationError(
            f"Invalid type specified: {name!r} (expected one of {', '.join(PRESETS)})",
            parameter_name="preset",
            parameter_value=name,
        ) from None
    return factory()

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Escaping and entity reversal for text runs.

:class:`TextCleaner` turns HTML-encoded text into Markdown-safe text. Normal
text has Markdown metacharacters escaped and a small set of entities
reversed; code text is fully decoded and never escaped, because Markdown code
spans and blocks would otherwise show the entities literally.

Input to the cleaner is expected to be HTML-encoded (``&amp;``, ``&lt;``,
``&gt;`` at least). An entity that was itself encoded in the source, such as
``&amp;lt;``, is kept visible as ``\\&lt;`` instead of being decoded twice.
"""

from __future__ import annotations

import html
import re

from htmlremark.constants import (
    BASIC_ENTITY_REPLACEMENTS,
    HTML_SMART_PUNCTUATION_REPLACEMENTS,
    HTML_SMART_QUOTE_REPLACEMENTS,
    LINEBREAK_PATTERN,
    MARKDOWN_ESCAPED_CHARS,
    MARKDOWN_LEADING_ESCAPED_CHARS,
    UNICODE_SMART_PUNCTUATION_REPLACEMENTS,
    UNICODE_SMART_QUOTE_REPLACEMENTS,
)
from htmlremark.options import RemarkOptions
from htmlremark.utils.text import longest_run

_LINEBREAK_REMOVER = re.compile(LINEBREAK_PATTERN)


class TextCleaner:
    """Clean text according to a set of conversion options.

    The replacement tables and escape rules are built once in the constructor
    and are read-only afterwards, so one cleaner can be shared by every text
    run of a conversion.

    Parameters
    ----------
    options : RemarkOptions
        Options that decide which quotes and punctuation are reversed and
        which characters need escaping.

    """

    def __init__(self, options: RemarkOptions):
        self._replacements: dict[str, str] = {}
        self._entity_pattern = self._build_entity_pattern(options)
        self._unicode_pattern = self._build_unicode_pattern(options)
        self._escapes = self._build_escapes(options)
        self._leading_unescape = re.compile(
            r"^( ?)\\([" + re.escape(self._leading_chars(options)) + r"])"
        )

    def _build_entity_pattern(self, options: RemarkOptions) -> re.Pattern[str]:
        entities = dict(BASIC_ENTITY_REPLACEMENTS)
        if options.reverse_html_smart_quotes:
            entities.update(HTML_SMART_QUOTE_REPLACEMENTS)
        if options.reverse_html_smart_punctuation:
            entities.update(HTML_SMART_PUNCTUATION_REPLACEMENTS)
        self._replacements.update(entities)

        names = "|".join(re.escape(key[1:-1]) for key in entities)
        # the first branch catches double-encoded entities such as &amp;lt;
        return re.compile(rf"&(?:amp;([#a-z0-9]+;)|(?:{names});)", re.IGNORECASE)

    def _build_unicode_pattern(self, options: RemarkOptions) -> re.Pattern[str] | None:
        characters: dict[str, str] = {}
        if options.reverse_unicode_smart_quotes:
            characters.update(UNICODE_SMART_QUOTE_REPLACEMENTS)
        if options.reverse_unicode_smart_punctuation:
            characters.update(UNICODE_SMART_PUNCTUATION_REPLACEMENTS)
        if not characters:
            return None
        self._replacements.update(characters)
        return re.compile("[" + re.escape("".join(characters)) + "]")

    @staticmethod
    def _leading_chars(options: RemarkOptions) -> str:
        return MARKDOWN_LEADING_ESCAPED_CHARS + (":" if options.definition_lists else "")

    def _build_escapes(self, options: RemarkOptions) -> list[tuple[re.Pattern[str], str]]:
        chars = MARKDOWN_ESCAPED_CHARS
        if options.tables_converted_to_text and not options.tables_rendered_as_code:
            chars += "|"
        return [
            (re.compile(r"\\"), r"\\\\"),
            (re.compile("([" + re.escape(chars) + "])"), r"\\\1"),
            (re.compile(r"^( ?)([" + re.escape(self._leading_chars(options)) + "])"), r"\1\\\2"),
        ]

    def clean(self, text: str) -> str:
        """Clean normal (non-code) text.

        Newlines are never kept: any whitespace run ending in a newline
        becomes a single space. Markdown metacharacters are escaped, then
        entities and, if configured, smart unicode characters are reversed.

        Parameters
        ----------
        text : str
            HTML-encoded text

        Returns
        -------
        str
            Markdown-safe text

        """
        text = _LINEBREAK_REMOVER.sub(" ", text)
        for pattern, replacement in self._escapes:
            text = pattern.sub(replacement, text)
        text = self._entity_pattern.sub(self._replace, text)
        if self._unicode_pattern is not None:
            text = self._unicode_pattern.sub(self._replace, text)
        return text

    def _replace(self, match: re.Match[str]) -> str:
        key = match.group(0).lower()
        if key in self._replacements:
            return self._replacements[key]
        # double-encoded entity: keep it visible
        return "\\&" + match.group(1)

    def clean_code(self, text: str) -> str:
        """Decode every HTML entity in ``text``; nothing is escaped and newlines are kept."""
        return html.unescape(text.replace("&apos;", "'"))

    def clean_inline_code(self, text: str) -> str:
        """Clean inline code and wrap it in a backtick delimiter.

        The delimiter is one backtick longer than the longest run of backticks
        inside the text. A space is added on the side where the text itself
        starts or ends with a backtick.

        Examples
        --------
            >>> TextCleaner(RemarkOptions()).clean_inline_code("a ``` b")
            '````a ``` b````'

        """
        output = self.clean_code(text).replace("\n", " ")
        delimiter = "`" * (longest_run(output, "`") + 1)
        prefix = " " if output.startswith("`") else ""
        suffix = " " if output.endswith("`") else ""
        return f"{delimiter}{prefix}{output}{suffix}{delimiter}"

    def unescape_leading(self, text: str) -> str:
        """Undo the start-of-line escapes for text that will not begin a line."""
        return self._leading_unescape.sub(r"\1\2", text)

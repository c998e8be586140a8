"""htmlremark - convert HTML to Markdown and its dialects.

htmlremark walks a cleaned HTML document and writes plain Markdown,
PHP Markdown Extra, MultiMarkdown, pegdown or GitHub-flavored Markdown.
Output is meant to be edited by people: Markdown metacharacters in text are
escaped, nested emphasis is collapsed, tables become aligned pipe tables (or
code blocks where the dialect has no tables) and links are written as
reference links unless the dialect prefers inline links.

Basic usage:

    >>> from htmlremark import html_to_markdown
    >>> html_to_markdown("<p>Hello <b>world</b></p>")
    'Hello **world**'

Dialect presets:

    >>> from htmlremark import Remark, get_preset
    >>> remark = Remark(get_preset("markdown_extra"))
    >>> markdown = remark.convert_file("page.html")

Streaming output:

    >>> import sys
    >>> Remark().convert_to("<h1>Title</h1>", sys.stdout)
    # Title
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import logging
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "htmlremark requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from htmlremark.api import Remark, html_to_markdown
from htmlremark.converter import DocumentConverter
from htmlremark.exceptions import (
    FileAccessError,
    FileError,
    FileNotFoundError,
    HtmlRemarkError,
    NetworkError,
    OutputWriteError,
    RenderingError,
    ValidationError,
)
from htmlremark.options import IgnoredHtmlElement, InWordEmphasis, RemarkOptions, get_preset

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "DocumentConverter",
    "FileAccessError",
    "FileError",
    "FileNotFoundError",
    "HtmlRemarkError",
    "IgnoredHtmlElement",
    "InWordEmphasis",
    "NetworkError",
    "OutputWriteError",
    "Remark",
    "RemarkOptions",
    "RenderingError",
    "ValidationError",
    "get_preset",
    "html_to_markdown",
]

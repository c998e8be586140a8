#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Public conversion API.

:class:`Remark` wraps one set of options and converts HTML strings, parsed
nodes, files and URLs. Every call uses a fresh
:class:`~htmlremark.converter.DocumentConverter`, so a single ``Remark``
instance can be shared between threads.

Examples
--------
Convert an HTML string:

    >>> from htmlremark import Remark
    >>> Remark().convert("<h1>Title</h1><p>Some <strong>bold</strong> text.</p>")
    '# Title\\n\\nSome **bold** text.'

Use a preset:

    >>> from htmlremark.options import github
    >>> Remark(github()).convert('<p><a href="http://x.org">http://x.org</a></p>')
    '<http://x.org>'

"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Union
from urllib.error import URLError
from urllib.request import urlopen

from bs4 import Tag

from htmlremark.constants import DEFAULT_ENCODING, DEFAULT_URL_TIMEOUT
from htmlremark.converter import DocumentConverter
from htmlremark.exceptions import (
    FileAccessError,
    FileNotFoundError,
    NetworkError,
    ValidationError,
)
from htmlremark.options import RemarkOptions
from htmlremark.utils.block_writer import BlockWriter
from htmlremark.utils.sanitize import prepare_document

logger = logging.getLogger(__name__)


class Remark:
    """HTML to Markdown converter bound to one set of options.

    Parameters
    ----------
    options : RemarkOptions or None, default None
        Conversion options; plain Markdown when omitted.

    """

    def __init__(self, options: RemarkOptions | None = None):
        self.options = options or RemarkOptions()

    def _converter(self, base_uri: str | None) -> DocumentConverter:
        return DocumentConverter(self.options, base_uri=base_uri)

    def _parse(self, html: str) -> Tag:
        return prepare_document(html, strip_dangerous_elements=self.options.strip_dangerous_elements)

    def convert(self, html: str, base_uri: str | None = None) -> str:
        """Convert an HTML string to Markdown.

        Parameters
        ----------
        html : str
            HTML document or fragment
        base_uri : str or None, default None
            URI that relative links are resolved against

        """
        return self._converter(base_uri).convert(self._parse(html))

    def convert_node(self, node: Tag, base_uri: str | None = None) -> str:
        """Convert an already parsed BeautifulSoup element.

        The element is used as is; no clean pass is applied.
        """
        return self._converter(base_uri).convert(node)

    def convert_to(self, html: str, out: IO[str], base_uri: str | None = None) -> None:
        """Convert an HTML string and stream the Markdown into ``out``.

        Raises
        ------
        OutputWriteError
            If writing to ``out`` fails.

        """
        writer = BlockWriter(out)
        self._converter(base_uri).convert_to(self._parse(html), writer)

    def convert_file(
        self,
        path: str | os.PathLike,
        charset: str | None = None,
        base_uri: str | None = None,
    ) -> str:
        """Read an HTML file and convert it.

        Parameters
        ----------
        path : str or PathLike
            File to read
        charset : str or None, default None
            Encoding of the file, UTF-8 when omitted
        base_uri : str or None, default None
            URI that relative links are resolved against

        Raises
        ------
        FileNotFoundError
            If the file does not exist
        FileAccessError
            If the file cannot be read or decoded
        ValidationError
            If ``charset`` is not a known encoding

        """
        return self.convert(read_html_file(path, charset), base_uri=base_uri)

    def convert_url(self, url: str, timeout: float = DEFAULT_URL_TIMEOUT) -> str:
        """Download ``url`` and convert it, resolving relative links against the final URL.

        Raises
        ------
        NetworkError
            If the page cannot be fetched

        """
        html, final_url = fetch_url(url, timeout)
        return self.convert(html, base_uri=final_url)


def read_html_file(path: str | os.PathLike, charset: str | None = None) -> str:
    """Read and decode an HTML file."""
    file_path = Path(path)
    encoding = validate_charset(charset)
    if not file_path.exists():
        raise FileNotFoundError(str(file_path))
    try:
        return file_path.read_bytes().decode(encoding)
    except UnicodeDecodeError as e:
        raise FileAccessError(str(file_path), f"Cannot decode {file_path} as {encoding}", original_error=e) from e
    except OSError as e:
        raise FileAccessError(str(file_path), original_error=e) from e


def fetch_url(url: str, timeout: float = DEFAULT_URL_TIMEOUT) -> tuple[str, str]:
    """Fetch ``url`` and return the decoded body and the final URL after redirects."""
    logger.info("Fetching %s", url)
    try:
        with urlopen(url, timeout=timeout) as response:
            body = response.read()
            charset = response.headers.get_content_charset() or DEFAULT_ENCODING
            final_url = response.geturl()
    except (URLError, OSError, ValueError) as e:
        raise NetworkError(url, original_error=e) from e
    try:
        return body.decode(charset, errors="replace"), final_url
    except LookupError:
        logger.warning("Unknown charset %r from %s, using %s", charset, url, DEFAULT_ENCODING)
        return body.decode(DEFAULT_ENCODING, errors="replace"), final_url


def validate_charset(charset: str | None) -> str:
    """Return ``charset`` (or the default encoding) after checking Python knows it."""
    encoding = charset or DEFAULT_ENCODING
    try:
        "".encode(encoding)
    except LookupError as e:
        raise ValidationError(
            f"Unsupported charset: {encoding}", parameter_name="charset", parameter_value=encoding, original_error=e
        ) from e
    return encoding


def html_to_markdown(
    input_data: Union[str, Path, IO[str], IO[bytes]],
    options: RemarkOptions | None = None,
) -> str:
    """Convert HTML to Markdown.

    Parameters
    ----------
    input_data : str, pathlib.Path, or file-like object
        HTML content to convert. Can be:
        - String containing HTML content directly
        - String path to an existing HTML file
        - pathlib.Path object pointing to an HTML file
        - File-like object in text or binary mode (binary is decoded as UTF-8)
    options : RemarkOptions or None, default None
        Conversion options

    Returns
    -------
    str
        Markdown representation of the HTML content

    Raises
    ------
    ValidationError
        If the input type is not supported
    FileError
        If a path is given that cannot be read

    Examples
    --------
        >>> html_to_markdown("<p>Content with <em>emphasis</em>.</p>")
        'Content with *emphasis*.'

    """
    remark = Remark(options)
    if isinstance(input_data, Path):
        return remark.convert_file(input_data)
    if isinstance(input_data, str):
        if "<" not in input_data and len(input_data) < 4096 and os.path.isfile(input_data):
            return remark.convert_file(input_data)
        return remark.convert(input_data)
    if hasattr(input_data, "read"):
        content = input_data.read()
        if isinstance(content, bytes):
            content = content.decode(DEFAULT_ENCODING, errors="replace")
        return remark.convert(content)
    raise ValidationError(
        f"Unsupported input type for HTML conversion: {type(input_data).__name__}",
        parameter_name="input_data",
        parameter_value=input_data,
    )

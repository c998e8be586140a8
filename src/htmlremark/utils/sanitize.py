#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlremark/utils/sanitize.py
"""Parse HTML and remove markup that must never reach the converter.

The converter only ever sees a document that went through
:func:`prepare_document`. With stripping enabled, executable and form
elements are dropped, event-handler attributes are removed and links or
sources using a dangerous URL scheme lose that attribute.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Tag
from bs4.element import Comment

from htmlremark.constants import DANGEROUS_HTML_ELEMENTS, DANGEROUS_SCHEMES, URL_ATTRIBUTES

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x20\x7f]+")


def is_url_safe(url: str) -> bool:
    """Check if a URL is safe (no dangerous schemes).

    Whitespace and control characters are ignored when looking at the scheme,
    since browsers ignore them too.

    Examples
    --------
    >>> is_url_safe("https://example.com")
    True

    >>> is_url_safe(" java\\tscript:alert(1)")
    False

    """
    if not url or not url.strip():
        return True
    normalized = _CONTROL_CHARS.sub("", url).lower()
    return not normalized.startswith(DANGEROUS_SCHEMES)


def _is_event_handler_attribute(attr_name: str) -> bool:
    name = attr_name.lower()
    return len(name) > 2 and name.startswith("on") and name[2:].isalpha()


def _clean_element(element: Tag) -> None:
    for attr_name in list(element.attrs):
        value = element.attrs[attr_name]
        if _is_event_handler_attribute(attr_name):
            del element.attrs[attr_name]
        elif attr_name.lower() in URL_ATTRIBUTES and isinstance(value, str) and not is_url_safe(value):
            logger.debug("Removing unsafe %s from <%s>", attr_name, element.name)
            del element.attrs[attr_name]


def prepare_document(html: str, strip_dangerous_elements: bool = True) -> Tag:
    """Parse ``html`` and return the cleaned root the converter walks.

    Parameters
    ----------
    html : str
        HTML source
    strip_dangerous_elements : bool, default True
        Drop script-like and form elements and unsafe attributes

    Returns
    -------
    Tag
        The ``<body>`` element, or the whole document for fragments

    """
    soup = BeautifulSoup(html, "html.parser")
    if not strip_dangerous_elements:
        return document_root(soup)

    removed = 0
    for element in soup.find_all(list(DANGEROUS_HTML_ELEMENTS)):
        if element.decomposed:
            continue
        element.decompose()
        removed += 1
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    for element in soup.find_all(True):
        _clean_element(element)
    if removed:
        logger.debug("Removed %d dangerous elements", removed)
    return document_root(soup)


def document_root(soup: BeautifulSoup) -> Tag:
    """Return the ``<body>`` of ``soup``, or the document itself for fragments."""
    body = soup.body
    return body if body is not None else soup

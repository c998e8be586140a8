#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Links, images and the reference-link registry."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from bs4 import Tag

from htmlremark.handlers.base import NodeHandler
from htmlremark.utils.text import encode_entities

if TYPE_CHECKING:
    from htmlremark.converter import DocumentConverter

logger = logging.getLogger(__name__)

_ID_INVALID_CHARS = re.compile(r"[^\w\- ]+")
_FOOTNOTE_HREF = re.compile(r"^#fn[:\-]?(.+)$")


class LinkRegistry:
    """Reference ids for links and images, in first-use order.

    The same URL and title always map to the same id. Ids are either simple
    increasing numbers or derived from the link text, with a numeric suffix
    added when two different targets would otherwise share an id.

    Examples
    --------
        >>> registry = LinkRegistry()
        >>> registry.register("http://a.example", None, "Example")
        'example'
        >>> registry.register("http://b.example", None, "Example")
        'example 2'

    """

    def __init__(self, simple_ids: bool = False):
        self.simple_ids = simple_ids
        self._ids: dict[tuple[str, str | None], str] = {}
        self._used: set[str] = set()

    def register(self, url: str, title: str | None, text: str, default: str = "link") -> str:
        """Return the reference id for ``url`` and ``title``, creating it if needed."""
        key = (url, title)
        if key in self._ids:
            return self._ids[key]
        if self.simple_ids:
            link_id = str(len(self._ids) + 1)
        else:
            base = _clean_id(text) or default
            link_id = base
            counter = 2
            while link_id in self._used:
                link_id = f"{base} {counter}"
                counter += 1
        self._ids[key] = link_id
        self._used.add(link_id)
        return link_id

    def definitions(self) -> list[str]:
        """Return the ``[id]: url "title"`` lines for every registered target."""
        return [f"[{link_id}]: {url}{_format_title(title)}" for (url, title), link_id in self._ids.items()]

    def clear(self) -> None:
        self._ids.clear()
        self._used.clear()

    def __len__(self) -> int:
        return len(self._ids)


class Anchor(NodeHandler):
    """Render ``<a>`` as an inline link, a reference link, an autolink or a footnote reference."""

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        options = converter.options
        href = (node.get("href") or "").strip()

        if options.footnotes and _is_footnote_reference(node, href):
            converter.output.write(f"[^{footnote_id(href[1:] if href.startswith('#') else href)}]")
            return

        if not href:
            # named anchors and placeholders only contribute their text
            converter.walk_nodes(node, converter.inline_nodes)
            return

        url = converter.resolve_url(href)
        if options.autolinks and _is_autolink(node, href):
            converter.output.write(f"<{url}>")
            return

        content = converter.get_inline_content(node, undo_leading_escapes=True)
        if not content:
            logger.debug("Dropping link to %s without text", url)
            return

        title = _title_of(node)
        if options.inline_links:
            converter.output.write(f"[{content}]({_format_url(url)}{_format_title(title)})")
        else:
            link_id = converter.links.register(url, title, content)
            converter.output.write(f"[{content}][{link_id}]")


class Image(NodeHandler):
    """Render ``<img>`` as an inline or reference image."""

    def handle(self, node: Tag, converter: DocumentConverter) -> None:
        src = (node.get("src") or "").strip()
        if not src:
            return
        url = converter.resolve_url(src)
        alt = converter.cleaner.clean(encode_entities(node.get("alt") or "")).strip()
        title = _title_of(node)
        if converter.options.inline_links:
            converter.output.write(f"![{alt}]({_format_url(url)}{_format_title(title)})")
        else:
            link_id = converter.links.register(url, title, alt, default="image")
            converter.output.write(f"![{alt}][{link_id}]")


def footnote_id(value: str) -> str:
    """Strip the ``fn:`` / ``fn`` / ``fn-`` prefix from a footnote element id."""
    match = _FOOTNOTE_HREF.match("#" + value)
    return match.group(1) if match else value


def _is_footnote_reference(node: Tag, href: str) -> bool:
    rel = node.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    if "footnote" in rel:
        return True
    return bool(_FOOTNOTE_HREF.match(href)) and not href.startswith("#fnref")


def _is_autolink(node: Tag, href: str) -> bool:
    text = node.get_text().strip()
    if not text or node.get("title"):
        return False
    if text == href and "://" in href:
        return True
    return href.lower().startswith("mailto:") and href[len("mailto:") :] == text


def _title_of(node: Tag) -> str | None:
    title = node.get("title")
    if title is None:
        return None
    return " ".join(str(title).split()) or None


def _clean_id(text: str) -> str:
    cleaned = _ID_INVALID_CHARS.sub("", text.replace("\\", ""))
    return " ".join(cleaned.split()).lower()


def _format_url(url: str) -> str:
    return url.replace(" ", "%20").replace("(", "%28").replace(")", "%29")


def _format_title(title: str | None) -> str:
    if not title:
        return ""
    return ' "' + title.replace('"', "&quot;") + '"'

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Node handlers, one per HTML element or family of elements.

Every handler exposes a single ``handle(node, converter)`` method. Handlers
keep no state between calls; per-conversion state lives on the
:class:`~htmlremark.converter.DocumentConverter` passed in.
"""

from htmlremark.handlers.base import BlockContainer, Ignore, NodeHandler, Paragraph

__all__ = ["BlockContainer", "Ignore", "NodeHandler", "Paragraph"]

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlremark/utils/text.py
"""Small string helpers used for padding tables and indenting nested blocks."""

from __future__ import annotations

import html

from htmlremark.constants import AlignmentName


def encode_entities(text: str) -> str:
    """Re-encode ``&``, ``<`` and ``>`` in text decoded by the HTML parser.

    The text cleaner expects HTML-encoded input so that entities written
    literally in the source (``&amp;lt;``) stay distinguishable from real
    markup characters.
    """
    return html.escape(text, quote=False)


def align(text: str, width: int, alignment: AlignmentName = "left", fill: str = " ") -> str:
    """Pad ``text`` with ``fill`` up to ``width`` characters.

    Parameters
    ----------
    text : str
        String to pad
    width : int
        Minimum width of the result
    alignment : {"left", "center", "right"}, default "left"
        Where the text sits inside the padded result. Centered text puts the
        extra character on the right when the deficit is odd.
    fill : str, default " "
        Single padding character

    Returns
    -------
    str
        The padded string, or ``text`` unchanged when it is already wide enough

    Examples
    --------
        >>> align("ab", 5, "center")
        ' ab  '
        >>> align("ab", 5, "right", "-")
        '---ab'

    """
    deficit = width - len(text)
    if deficit <= 0:
        return text
    if alignment == "center":
        left = deficit // 2
        right = left + deficit % 2
    elif alignment == "right":
        left, right = deficit, 0
    else:
        left, right = 0, deficit
    return f"{fill * left}{text}{fill * right}"


def indent_continuation_lines(text: str, indent: str) -> str:
    """Indent every line after the first, leaving blank lines empty."""
    lines = text.split("\n")
    return "\n".join([lines[0]] + [f"{indent}{line}" if line.strip() else "" for line in lines[1:]])


def longest_run(text: str, char: str) -> int:
    """Return the length of the longest run of consecutive ``char`` in ``text``."""
    longest = 0
    current = 0
    for c in text:
        if c == char:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest

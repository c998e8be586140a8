#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlremark/utils/block_writer.py
"""Buffered writer that separates Markdown block elements.

Markdown needs a blank line between blocks (paragraphs, headings, lists,
tables, code blocks). ``BlockWriter`` tracks how deeply blocks are nested and
emits the blank line itself, so handlers only have to bracket their output
with :meth:`BlockWriter.start_block` / :meth:`BlockWriter.end_block`.

Text written while no block is open is promoted to a block of its own. HTML
allows inline content directly beside block elements::

    <div><p>foo</p> <em>bar</em> <p>baz</p></div>

Here ``*bar*`` becomes a separate paragraph between ``foo`` and ``baz``. The
promotion only happens at the top level; once inside a block, writes become
part of that block.
"""

from __future__ import annotations

import logging
from typing import IO

from htmlremark.exceptions import OutputWriteError

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = "\n\n"
DEFAULT_STREAM_BUFFER_SIZE = 8192


class BlockWriter:
    """Block-aware output sink.

    Parameters
    ----------
    out : IO[str] or None, default None
        Text stream that receives the output. When ``None`` the writer keeps
        everything in memory and :meth:`getvalue` returns the result.
    buffer_size : int, default 8192
        Number of buffered characters after which a stream-backed writer
        pushes its buffer to ``out``. Ignored for in-memory writers.

    Examples
    --------
        >>> writer = BlockWriter()
        >>> writer.write_block("block1")
        >>> writer.write_block("block2")
        >>> writer.getvalue()
        'block1\\n\\nblock2'

    """

    def __init__(self, out: IO[str] | None = None, buffer_size: int = DEFAULT_STREAM_BUFFER_SIZE):
        self._out = out
        self._buffer_size = buffer_size
        self._buffer: list[str] = []
        self._buffered_chars = 0
        self._block_depth = 0
        self._auto_started_block = False
        self._empty = True

    @property
    def block_depth(self) -> int:
        """Number of currently open blocks; ``0`` means none is active."""
        return self._block_depth

    @property
    def is_empty(self) -> bool:
        """True if no block has been started yet."""
        return self._empty

    def write(self, text: str) -> None:
        """Write text, promoting it to its own block when none is open."""
        if not text:
            return
        if self._block_depth == 0:
            self.start_block()
            # this block is never explicitly closed; see start_block
            self._auto_started_block = True
        self._append(text)

    def start_block(self) -> None:
        """Start a new block.

        Every call must be matched by :meth:`end_block`. A block that follows
        an auto-started block is treated as its sibling, so the depth is not
        incremented in that case.
        """
        if self._auto_started_block:
            self._auto_started_block = False
        else:
            self._block_depth += 1
        if self._empty:
            self._empty = False
        else:
            self._append(BLOCK_SEPARATOR)

    def end_block(self) -> None:
        """End the current block. The depth never drops below zero."""
        if self._block_depth > 0:
            self._block_depth -= 1

    def write_block(self, text: str) -> None:
        """Write an entire block in one go."""
        self.start_block()
        self.write(text)
        self.end_block()

    def getvalue(self) -> str:
        """Return the buffered output.

        For in-memory writers this is everything written so far. For
        stream-backed writers it is only what has not been flushed yet.
        """
        return "".join(self._buffer)

    def flush(self) -> None:
        """Push buffered output to the backing stream, if there is one.

        Raises
        ------
        OutputWriteError
            If the backing stream fails while writing or flushing.

        """
        if self._out is None:
            return
        pending = "".join(self._buffer)
        self._buffer.clear()
        self._buffered_chars = 0
        try:
            if pending:
                self._out.write(pending)
            self._out.flush()
        except (OSError, ValueError) as e:
            raise OutputWriteError(getattr(self._out, "name", repr(self._out)), original_error=e) from e

    def close(self) -> None:
        """Flush and close the backing stream."""
        self.flush()
        if self._out is not None:
            try:
                self._out.close()
            except OSError as e:
                raise OutputWriteError(getattr(self._out, "name", repr(self._out)), original_error=e) from e

    def __enter__(self) -> "BlockWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.flush()

    def __str__(self) -> str:
        return self.getvalue()

    def _append(self, text: str) -> None:
        self._buffer.append(text)
        if self._out is None:
            return
        self._buffered_chars += len(text)
        if self._buffered_chars >= self._buffer_size:
            logger.debug("Flushing %d buffered characters", self._buffered_chars)
            self.flush()

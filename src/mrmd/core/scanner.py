"""Single-pass scanner locating fenced Mermaid blocks in a document.

A block opens with a line such as `````mermaid`` optionally followed by an
output file name ending in ``.svg``, ``.png`` or ``.pdf`` and closes with a bare
fence line. Nested fences are not supported: a second opening line inside a
block restarts it and the earlier lines are dropped. An opening fence left
unterminated at the end of the document produces no block.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import logging
import os
import re

from .diagnostics import DiagnosticEmitter
from .documents import Document


logger = logging.getLogger(__name__)

OPEN_FENCE = re.compile(r"^```mermaid(?:\s+(.+\.(?:svg|png|pdf)))?\s*$", re.IGNORECASE)
CLOSE_FENCE = re.compile(r"^```\s*$")


@dataclass(frozen=True, slots=True)
class Block:
    """A Mermaid region discovered by :func:`scan_blocks`."""

    index: int
    start_line: int
    end_line: int
    body: str
    requested_output: str | None = None


def scan_blocks(
    source: Document | Iterable[str],
    *,
    emitter: DiagnosticEmitter | None = None,
) -> Iterator[Block]:
    """Yield every well-formed Mermaid block of ``source`` in document order.

    Block indices count opening fences, starting at 1. Line numbers are
    0-based and point at the fence lines themselves.
    """
    lines = source.lines if isinstance(source, Document) else source

    inside = False
    buffer: list[str] = []
    counter = 0
    start_line = -1
    requested: str | None = None

    for number, line in enumerate(lines):
        if inside and CLOSE_FENCE.match(line):
            inside = False
            yield Block(
                index=counter,
                start_line=start_line,
                end_line=number,
                body=os.linesep.join(buffer),
                requested_output=requested,
            )
            continue

        opening = OPEN_FENCE.match(line)
        if opening is None:
            if inside:
                buffer.append(line)
            continue

        if inside:
            logger.debug(
                "Mermaid block opened on line %d restarted on line %d", start_line + 1, number + 1
            )
        counter += 1
        inside = True
        buffer = []
        start_line = number
        requested = opening.group(1).strip() if opening.group(1) else None

    if inside:
        message = f"Mermaid block opened on line {start_line + 1} is never closed; skipping it"
        logger.debug(message)
        if emitter is not None:
            emitter.warning(message)


__all__ = ["CLOSE_FENCE", "OPEN_FENCE", "Block", "scan_blocks"]

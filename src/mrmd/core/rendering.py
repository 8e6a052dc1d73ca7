"""Protocol implemented by diagram renderer backends."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .config import RenderOptions


@runtime_checkable
class DiagramRenderer(Protocol):
    """Render the Mermaid definition stored at ``input_path`` into ``output_path``.

    The output format follows the output suffix. Implementations raise a
    :class:`~mrmd.core.exceptions.MermaidRenderError` subclass on failure and
    must be safe to call from several worker threads at once.
    """

    def render(self, input_path: Path, output_path: Path, options: RenderOptions) -> None: ...


__all__ = ["DiagramRenderer"]

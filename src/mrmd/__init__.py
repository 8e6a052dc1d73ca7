"""Render the Mermaid blocks of a Markdown document to images beside it."""

from __future__ import annotations

from mrmd.core import (
    BatchCoordinator,
    Block,
    ConfigurationError,
    DiagnosticEmitter,
    DiagramRenderer,
    Document,
    InvalidInvocationError,
    JobOutcome,
    LoggingEmitter,
    MermaidRenderError,
    NullEmitter,
    RecordingEmitter,
    RenderOptions,
    RendererExecutionError,
    load_options,
    render_document,
    scan_blocks,
)
from mrmd.version import get_version


__version__ = get_version()

__all__ = [
    "BatchCoordinator",
    "Block",
    "ConfigurationError",
    "DiagnosticEmitter",
    "DiagramRenderer",
    "Document",
    "InvalidInvocationError",
    "JobOutcome",
    "LoggingEmitter",
    "MermaidRenderError",
    "NullEmitter",
    "RecordingEmitter",
    "RenderOptions",
    "RendererExecutionError",
    "__version__",
    "load_options",
    "render_document",
    "scan_blocks",
]

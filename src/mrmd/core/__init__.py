"""Document scanning and batch rendering pipeline."""

from __future__ import annotations

from .batch import BatchCoordinator, JobOutcome, RenderJob, render_document, summarise
from .config import RenderOptions, build_options, load_options
from .diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
    RecordingEmitter,
    format_event_message,
)
from .dispatcher import JobDispatcher
from .documents import Document
from .exceptions import (
    ConfigurationError,
    InvalidInvocationError,
    MermaidRenderError,
    RendererExecutionError,
)
from .naming import ResolvedPaths, resolve_paths
from .rendering import DiagramRenderer
from .scanner import Block, scan_blocks
from .workspace import TemporaryWorkspace


__all__ = [
    "BatchCoordinator",
    "Block",
    "ConfigurationError",
    "DiagnosticEmitter",
    "DiagramRenderer",
    "Document",
    "InvalidInvocationError",
    "JobDispatcher",
    "JobOutcome",
    "LoggingEmitter",
    "MermaidRenderError",
    "NullEmitter",
    "RecordingEmitter",
    "RenderJob",
    "RenderOptions",
    "RendererExecutionError",
    "ResolvedPaths",
    "TemporaryWorkspace",
    "build_options",
    "format_event_message",
    "load_options",
    "render_document",
    "resolve_paths",
    "scan_blocks",
    "summarise",
]

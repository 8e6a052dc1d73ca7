"""Custom exception hierarchy for the diagram rendering pipeline."""

from __future__ import annotations


class MermaidRenderError(RuntimeError):
    """Base exception for diagram rendering failures."""


class InvalidInvocationError(MermaidRenderError):
    """Raised when a render job is requested with unusable input or output paths."""


class ConfigurationError(MermaidRenderError):
    """Raised when a referenced configuration, stylesheet, or settings file is unusable."""


class RendererExecutionError(MermaidRenderError):
    """Raised when the browser or an external renderer fails to execute properly."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConfigurationError",
    "InvalidInvocationError",
    "MermaidRenderError",
    "RendererExecutionError",
    "exception_hint",
    "exception_messages",
]

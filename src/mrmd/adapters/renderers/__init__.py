"""Renderer registry exposing the available diagram backends."""

from __future__ import annotations

from mrmd.core.exceptions import ConfigurationError
from mrmd.core.rendering import DiagramRenderer

from .browser import PlaywrightRenderer, launch_options
from .mmdc import MermaidCliRenderer


class RendererRegistry:
    """Registry storing renderer backends by name."""

    def __init__(self) -> None:
        self._renderers: dict[str, DiagramRenderer] = {}

    def register(self, name: str, renderer: DiagramRenderer) -> None:
        """Register a renderer under a unique name."""
        self._renderers[name.lower()] = renderer

    def get(self, name: str) -> DiagramRenderer:
        """Return a registered renderer or raise a configuration error."""
        try:
            return self._renderers[name.lower()]
        except KeyError as exc:
            available = ", ".join(sorted(self._renderers)) or "none"
            raise ConfigurationError(
                f"No renderer registered for '{name}' (available: {available})"
            ) from exc

    def is_registered(self, name: str) -> bool:
        """Return True when a renderer has been registered under the given name."""
        return name.lower() in self._renderers

    def names(self) -> list[str]:
        return sorted(self._renderers)


registry = RendererRegistry()

# Built-in backends
registry.register("playwright", PlaywrightRenderer())
registry.register("mmdc", MermaidCliRenderer())


def register_renderer(name: str, renderer: DiagramRenderer) -> None:
    """Expose a helper to register external backends."""
    registry.register(name, renderer)


def get_renderer(name: str) -> DiagramRenderer:
    """Return the renderer registered under ``name``."""
    return registry.get(name)


__all__ = [
    "MermaidCliRenderer",
    "PlaywrightRenderer",
    "RendererRegistry",
    "get_renderer",
    "launch_options",
    "register_renderer",
    "registry",
]

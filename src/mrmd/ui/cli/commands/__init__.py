"""CLI command implementations exposed via `mrmd.ui.cli`."""

from __future__ import annotations

from .render import render


__all__ = ["render"]

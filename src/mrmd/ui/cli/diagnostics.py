"""Emitter printing batch notifications on the rich CLI consoles."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mrmd.core.diagnostics import format_event_message

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


class CliEmitter:
    """Print per-job notifications and keep every event on the CLI state.

    Successful renders go to stdout; failed jobs and skipped blocks go to
    stderr. Events without a user-facing message are only recorded.
    """

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state or get_cli_state()

    @property
    def debug_enabled(self) -> bool:
        return self._state.show_tracebacks

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self._state.record_event(name, payload)
        message = format_event_message(name, payload)
        if message is not None:
            render_message("info", message)


__all__ = ["CliEmitter"]

"""Per-invocation CLI state and rich console helpers."""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import IO, TYPE_CHECKING, Any

import click

from mrmd.core.exceptions import exception_messages


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]


def _bound_console(console: Console | None, stream: IO[str], **kwargs: Any) -> Console:
    # CliRunner swaps sys.stdout/sys.stderr between invocations.
    from rich.console import Console

    if console is None or console.file is not stream:
        console = Console(file=stream, **kwargs)
    return console


@dataclass(slots=True)
class CLIState:
    """Verbosity flags and recorded events of one ``mrmd`` invocation."""

    verbosity: int = 0
    show_tracebacks: bool = False
    events: dict[str, list[dict[str, Any]]] = field(default_factory=dict, init=False)
    _console: Console | None = field(default=None, init=False, repr=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        """Console printing progress messages to stdout."""
        self._console = _bound_console(self._console, sys.stdout)
        return self._console

    @property
    def err_console(self) -> Console:
        """Console printing warnings and errors to stderr."""
        self._err_console = _bound_console(self._err_console, sys.stderr, highlight=False)
        return self._err_console

    def record_event(self, name: str, payload: Mapping[str, Any] | None = None) -> None:
        self.events.setdefault(name, []).append(dict(payload or {}))

    def consume_events(self, name: str) -> list[dict[str, Any]]:
        """Return and forget the events recorded under ``name``."""
        return self.events.pop(name, [])


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("mrmd_cli_state", default=None)


def set_cli_state(
    *,
    ctx: click.Context | None = None,
    verbosity: int = 0,
    debug: bool = False,
) -> CLIState:
    """Install a fresh state for the running invocation and return it."""
    state = CLIState(verbosity=max(0, verbosity), show_tracebacks=debug)
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None:
        ctx.obj = state
    _STATE_VAR.set(state)
    return state


def get_cli_state(ctx: click.Context | None = None, *, create: bool = True) -> CLIState:
    """Return the state of the running invocation.

    The Click context is consulted first so nested contexts share their
    parent's state; outside of Click the last installed state is used.
    """
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None:
        state = ctx.find_object(CLIState)
        if state is not None:
            return state
    state = _STATE_VAR.get()
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised for this invocation.")
        state = set_cli_state(ctx=ctx)
    return state


def _exception_details(message: str, exception: BaseException, verbosity: int) -> list[str]:
    if verbosity < 1:
        return []
    chain = exception_messages(exception)
    details: list[str] = []
    if chain and chain[0] not in message:
        details.append(chain[0])
    details.append(f"type: {type(exception).__name__}")
    if verbosity >= 2 and len(chain) > 1:
        details.append("caused by:")
        details.extend(f"  {entry}" for entry in chain[1:])
    return details


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print ``message`` at ``level`` (``info``, ``warning`` or ``error``)."""
    state = get_cli_state()

    if level == "info":
        state.console.print(message, highlight=False, markup=False, soft_wrap=True)
        return

    from rich.text import Text

    style = "red" if level == "error" else "yellow"
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None:
        details = _exception_details(message, exception, state.verbosity)
        if details:
            text.append("\n" + "\n".join(details), style=style)
    state.err_console.print(text, soft_wrap=True)

    if exception is not None and state.show_tracebacks and exception.__traceback__ is not None:
        from rich.traceback import Traceback

        state.err_console.print(
            Traceback.from_exception(type(exception), exception, exception.__traceback__)
        )


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether ``--debug`` was passed to the running invocation."""
    try:
        return get_cli_state(create=False).show_tracebacks
    except RuntimeError:
        return False

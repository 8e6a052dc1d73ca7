"""Typer application exposing the ``mrmd`` command."""

from __future__ import annotations

import typer

from mrmd.ui.cli.commands.render import render

from .state import debug_enabled, emit_error


app = typer.Typer(
    help="Render the Mermaid blocks of a Markdown document to SVG, PNG or PDF files.",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    pretty_exceptions_enable=False,
)

app.command()(render)


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Rendering interrupted; partial outputs may remain.", exception=exc)
        raise SystemExit(130) from exc
    except Exception as exc:
        # render_message prints the traceback itself under --debug.
        message = str(exc).strip() or type(exc).__name__
        emit_error(f"Unexpected failure: {message}", exception=exc)
        raise SystemExit(1) from exc


__all__ = ["app", "main"]

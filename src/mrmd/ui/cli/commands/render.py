"""Implementation of the primary ``mrmd`` CLI command."""

from __future__ import annotations

import logging

import typer

from mrmd.adapters.renderers import get_renderer
from mrmd.core.batch import BatchCoordinator, summarise
from mrmd.core.config import RenderOptions, load_options
from mrmd.core.documents import Document
from mrmd.core.exceptions import MermaidRenderError

from .._options import (
    BackendOption,
    BackgroundColorOption,
    BrowserConfigOption,
    ConfigFileOption,
    CssFileOption,
    DebugOption,
    DocumentArgument,
    HeightOption,
    JobsOption,
    SettingsOption,
    ThemeOption,
    TimeoutOption,
    VerboseOption,
    VersionOption,
    WidthOption,
)
from ..diagnostics import CliEmitter
from ..state import CLIState, emit_error, set_cli_state


def _configure_logging(state: CLIState) -> None:
    """Route library logging through rich once diagnostics are requested."""
    if state.verbosity < 2:
        return
    from rich.logging import RichHandler

    handler = RichHandler(console=state.err_console, show_path=False)
    root = logging.getLogger("mrmd")
    if not any(isinstance(existing, RichHandler) for existing in root.handlers):
        root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def render(
    document: DocumentArgument,
    settings: SettingsOption = None,
    theme: ThemeOption = None,
    width: WidthOption = None,
    height: HeightOption = None,
    background_color: BackgroundColorOption = None,
    config_file: ConfigFileOption = None,
    css_file: CssFileOption = None,
    browser_config_file: BrowserConfigOption = None,
    backend: BackendOption = None,
    timeout: TimeoutOption = None,
    jobs: JobsOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
    version: VersionOption = False,
) -> None:
    """Render every ```mermaid block of DOCUMENT to an image beside it."""
    state = set_cli_state(verbosity=verbose, debug=debug)
    _configure_logging(state)
    emitter = CliEmitter(state=state)

    try:
        base = load_options(settings) if settings is not None else RenderOptions()
        options = base.merged(
            theme=theme,
            width=width,
            height=height,
            background_color=background_color,
            config_file=config_file,
            css_file=css_file,
            browser_config_file=browser_config_file,
            backend=backend,
            timeout=timeout,
            max_workers=jobs,
        )
        renderer = get_renderer(options.backend)
        source = Document.from_path(document)
    except MermaidRenderError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    outcomes = BatchCoordinator(renderer, options, emitter=emitter).run(source)

    if state.verbosity >= 1:
        succeeded, failed = summarise(outcomes)
        state.console.print(
            f"{len(outcomes)} diagram(s) found in {document.name}: "
            f"{succeeded} rendered, {failed} failed",
            highlight=False,
        )


__all__ = ["render"]

"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from mrmd.version import get_version


INPUTS_PANEL = "Input Handling"
RENDERING_PANEL = "Rendering"
DIAGNOSTICS_PANEL = "Diagnostics"

DocumentArgument = Annotated[
    Path,
    typer.Argument(
        metavar="DOCUMENT",
        help="Markdown document whose ```mermaid blocks should be rendered.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

SettingsOption = Annotated[
    Path | None,
    typer.Option(
        "--settings",
        "-s",
        help="YAML or JSON file providing default render options.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

ThemeOption = Annotated[
    str | None,
    typer.Option(
        "--theme",
        "-t",
        help="Mermaid theme (default, forest, dark, neutral).",
        rich_help_panel=RENDERING_PANEL,
    ),
]

WidthOption = Annotated[
    int | None,
    typer.Option(
        "--width",
        "-w",
        min=1,
        help="Viewport width in pixels.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

HeightOption = Annotated[
    int | None,
    typer.Option(
        "--height",
        "-H",
        min=1,
        help="Viewport height in pixels.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

BackgroundColorOption = Annotated[
    str | None,
    typer.Option(
        "--background-color",
        "-b",
        help="Background colour, e.g. white, #F0F0F0 or transparent.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

ConfigFileOption = Annotated[
    Path | None,
    typer.Option(
        "--config-file",
        "-c",
        help="JSON Mermaid configuration merged over the theme.",
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=RENDERING_PANEL,
    ),
]

CssFileOption = Annotated[
    Path | None,
    typer.Option(
        "--css-file",
        "-C",
        help="Stylesheet injected into the rendering page.",
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=RENDERING_PANEL,
    ),
]

BrowserConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--browser-config-file",
        "-p",
        help="JSON browser launch options (Puppeteer-style keys are accepted).",
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=RENDERING_PANEL,
    ),
]

BackendOption = Annotated[
    str | None,
    typer.Option(
        "--backend",
        help="Renderer backend: playwright or mmdc.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

TimeoutOption = Annotated[
    float | None,
    typer.Option(
        "--timeout",
        min=0.1,
        help="Seconds allowed for each browser step.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

JobsOption = Annotated[
    int | None,
    typer.Option(
        "--jobs",
        "-j",
        min=1,
        help="Maximum number of diagrams rendered concurrently.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"mrmd {get_version()}")
        raise typer.Exit()


VersionOption = Annotated[
    bool,
    typer.Option(
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show the mrmd version and exit.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

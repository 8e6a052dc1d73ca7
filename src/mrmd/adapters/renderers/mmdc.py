"""Renderer delegating to the official Mermaid CLI (``mmdc``)."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from pathlib import Path
import shutil
import subprocess

from mrmd.core.config import RenderOptions, check_referenced_files
from mrmd.core.exceptions import RendererExecutionError
from mrmd.core.naming import check_input_path, check_output_path


logger = logging.getLogger(__name__)

MERMAID_CLI_HINT_PATHS: tuple[Path, ...] = (Path("/snap/bin/mmdc"),)


def _resolve_cli(names: Sequence[str], hints: Sequence[Path]) -> str | None:
    """Return an executable path found on $PATH or at a well-known location."""
    for name in names:
        resolved = shutil.which(name)
        if resolved:
            return resolved
    for candidate in hints:
        if candidate.exists():
            logger.warning(
                "Found '%s' at '%s'. Add this directory to PATH so it is detected automatically.",
                names[0],
                candidate,
            )
            return str(candidate)
    return None


def _run_cli(command: list[str], *, timeout: float, description: str) -> None:
    """Execute a local CLI, raising a renderer error on failure."""
    try:
        result = subprocess.run(
            command,
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise RendererExecutionError(f"{description} timed out after {timeout:g}s") from exc
    except OSError as exc:
        raise RendererExecutionError(f"Failed to execute {description}: {exc}") from exc

    if result.returncode != 0:
        detail = (result.stderr or "").strip() or (result.stdout or "").strip()
        message = f"{description} exited with status {result.returncode}"
        if detail:
            message = f"{message}: {detail}"
        raise RendererExecutionError(message)


class MermaidCliRenderer:
    """Render diagrams by shelling out to ``mmdc``."""

    def __init__(self, executable: str | None = None) -> None:
        self.executable = executable

    def build_command(
        self, executable: str, input_path: Path, output_path: Path, options: RenderOptions
    ) -> list[str]:
        command = [
            executable,
            "-i",
            str(input_path),
            "-o",
            str(output_path),
            "-t",
            options.theme,
            "-w",
            str(options.width),
            "-H",
            str(options.height),
            "-b",
            options.background_color,
        ]
        if options.config_file is not None:
            command.extend(["-c", str(options.config_file)])
        if options.css_file is not None:
            command.extend(["-C", str(options.css_file)])
        if options.browser_config_file is not None:
            command.extend(["-p", str(options.browser_config_file)])
        return command

    def render(self, input_path: Path, output_path: Path, options: RenderOptions) -> None:
        check_input_path(input_path)
        check_output_path(output_path)
        check_referenced_files(options)

        executable = self.executable or _resolve_cli(["mmdc"], MERMAID_CLI_HINT_PATHS)
        if executable is None:
            raise RendererExecutionError(
                "Mermaid CLI 'mmdc' was not found. Install @mermaid-js/mermaid-cli "
                "or use the playwright backend."
            )
        command = self.build_command(executable, input_path, output_path, options)
        _run_cli(command, timeout=options.timeout, description="Mermaid CLI")
        if not output_path.exists():
            raise RendererExecutionError(
                f"Mermaid CLI did not produce the expected file '{output_path}'."
            )


__all__ = ["MERMAID_CLI_HINT_PATHS", "MermaidCliRenderer"]

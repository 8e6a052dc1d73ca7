"""Deterministic input and output paths for discovered blocks."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .documents import Document
from .exceptions import InvalidInvocationError
from .scanner import Block


DEFAULT_OUTPUT_SUFFIX = ".png"
SUPPORTED_OUTPUT_SUFFIXES = (".svg", ".png", ".pdf")


@dataclass(frozen=True, slots=True)
class ResolvedPaths:
    """Temporary input file and final output file of one render job."""

    input_path: Path
    output_path: Path


def default_output_name(document: Document, index: int) -> str:
    """Return the output file name used when a block does not request one."""
    return f"{document.base_name}_mrmd_{index}{DEFAULT_OUTPUT_SUFFIX}"


def input_name(document: Document, index: int) -> str:
    """Return the temporary input file name for the block at ``index``."""
    return f"{document.base_name}_input_{index}.md"


def resolve_paths(block: Block, document: Document, workspace_dir: Path) -> ResolvedPaths:
    """Derive where a block is staged and where its rendering is written.

    Requested names are joined with the document directory, so an absolute
    name is used verbatim. Two blocks resolving to the same output simply
    overwrite each other.
    """
    if block.requested_output:
        output_path = document.directory / block.requested_output
    else:
        output_path = document.directory / default_output_name(document, block.index)
    return ResolvedPaths(
        input_path=Path(workspace_dir) / input_name(document, block.index),
        output_path=output_path,
    )


def output_format(path: Path) -> str | None:
    """Return ``svg``, ``png`` or ``pdf`` for supported outputs, ``None`` otherwise."""
    suffix = path.suffix.lower()
    if suffix in SUPPORTED_OUTPUT_SUFFIXES:
        return suffix[1:]
    return None


def check_output_path(path: Path) -> str:
    """Validate an output path before any rendering work, returning its format."""
    fmt = output_format(path)
    if fmt is None:
        raise InvalidInvocationError(
            f"Output file '{path}' must end with \".svg\", \".png\" or \".pdf\""
        )
    if not path.parent.is_dir():
        raise InvalidInvocationError(f'Output directory "{path.parent}/" doesn\'t exist')
    return fmt


def check_input_path(path: Path) -> None:
    """Ensure the staged diagram definition exists."""
    if not path.is_file():
        raise InvalidInvocationError(f'Input file "{path}" doesn\'t exist')


__all__ = [
    "DEFAULT_OUTPUT_SUFFIX",
    "SUPPORTED_OUTPUT_SUFFIXES",
    "ResolvedPaths",
    "check_input_path",
    "check_output_path",
    "default_output_name",
    "input_name",
    "output_format",
    "resolve_paths",
]

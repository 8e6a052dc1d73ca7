"""Stage block definitions on disk and hand them to a renderer."""

from __future__ import annotations

from concurrent.futures import Executor, Future
import contextlib
import logging
from pathlib import Path

from .config import RenderOptions
from .exceptions import MermaidRenderError
from .naming import ResolvedPaths, check_output_path
from .rendering import DiagramRenderer
from .scanner import Block


logger = logging.getLogger(__name__)


def _remove_input(path: Path) -> None:
    with contextlib.suppress(OSError):
        path.unlink(missing_ok=True)


class JobDispatcher:
    """Turn blocks into running render jobs on a shared executor."""

    def __init__(
        self,
        renderer: DiagramRenderer,
        options: RenderOptions,
        *,
        executor: Executor,
    ) -> None:
        self.renderer = renderer
        self.options = options
        self.executor = executor

    def dispatch(self, block: Block, paths: ResolvedPaths) -> Future[Path]:
        """Start rendering ``block`` and return a future resolving to the output path.

        The output path is validated and the block body written to the input
        path before the renderer is scheduled. Validation or staging failures
        come back as an already failed future so siblings keep running.
        """
        try:
            check_output_path(paths.output_path)
            paths.input_path.write_text(block.body, encoding="utf-8", newline="")
        except (MermaidRenderError, OSError, ValueError) as exc:
            _remove_input(paths.input_path)
            failed: Future[Path] = Future()
            failed.set_exception(exc)
            return failed

        logger.debug(
            "Dispatching block %d (lines %d-%d) -> %s",
            block.index,
            block.start_line + 1,
            block.end_line + 1,
            paths.output_path,
        )
        return self.executor.submit(self._render, paths)

    def _render(self, paths: ResolvedPaths) -> Path:
        try:
            self.renderer.render(paths.input_path, paths.output_path, self.options)
        finally:
            _remove_input(paths.input_path)
        return paths.output_path


__all__ = ["JobDispatcher"]

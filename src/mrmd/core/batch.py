"""Coordinate the concurrent rendering of every block found in a document.

Architecture
: `BatchCoordinator.run` scans the document, resolves paths, dispatches one
  job per block on a thread pool, reports each outcome to the emitter, and
  removes the temporary workspace once a join-all barrier is passed.
: The workspace is written by the dispatcher before the barrier and deleted by
  the coordinator after it, so no locking is involved.

Usage Example
:
    >>> from mrmd.core.batch import render_document
    >>> outcomes = render_document("notes.md")  # doctest: +SKIP
    >>> [outcome.paths.output_path.name for outcome in outcomes]  # doctest: +SKIP
    ['notes_mrmd_1.png']
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
import logging
from pathlib import Path

from .config import RenderOptions
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .dispatcher import JobDispatcher
from .documents import Document
from .exceptions import exception_hint
from .naming import ResolvedPaths, resolve_paths
from .rendering import DiagramRenderer
from .scanner import Block, scan_blocks
from .workspace import TemporaryWorkspace


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RenderJob:
    """A dispatched block and the future tracking its rendering."""

    block: Block
    paths: ResolvedPaths
    future: Future[Path]

    def outcome(self) -> JobOutcome:
        """Return the settled outcome; only valid once the future is done."""
        return JobOutcome(block=self.block, paths=self.paths, error=self.future.exception())


@dataclass(frozen=True, slots=True)
class JobOutcome:
    """Settled result of a render job."""

    block: Block
    paths: ResolvedPaths
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def failure_message(exc: BaseException) -> str:
    """Return the text reported to the host for a failed job."""
    text = str(exc).strip()
    if text:
        return text
    return exception_hint(exc) or exc.__class__.__name__


class BatchCoordinator:
    """Render every Mermaid block of one document and clean up afterwards."""

    def __init__(
        self,
        renderer: DiagramRenderer,
        options: RenderOptions | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.renderer = renderer
        self.options = options or RenderOptions()
        self.emitter = emitter or LoggingEmitter()

    def run(self, document: Document) -> list[JobOutcome]:
        """Scan ``document`` and render each block beside it."""
        workspace = TemporaryWorkspace()
        try:
            blocks = list(scan_blocks(document, emitter=self.emitter))
        except BaseException:
            workspace.remove(self.emitter)
            raise
        logger.debug("Found %d Mermaid block(s) in %s", len(blocks), document.path)
        return self.run_batch(blocks, document, workspace)

    def run_batch(
        self,
        blocks: Sequence[Block],
        document: Document,
        workspace: TemporaryWorkspace,
    ) -> list[JobOutcome]:
        """Dispatch ``blocks`` concurrently, wait for all of them, then drop ``workspace``."""
        if not blocks:
            self._remove_workspace(workspace, 0)
            return []

        workers = self.options.max_workers or len(blocks)
        jobs: list[RenderJob] = []
        try:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="mrmd-render") as pool:
                dispatcher = JobDispatcher(self.renderer, self.options, executor=pool)
                for block in blocks:
                    paths = resolve_paths(block, document, workspace.path)
                    future = dispatcher.dispatch(block, paths)
                    jobs.append(RenderJob(block=block, paths=paths, future=future))
                pending = {job.future: job for job in jobs}
                for future in as_completed(pending):
                    self._report(pending[future])
        finally:
            self._remove_workspace(workspace, len(jobs))
        return [job.outcome() for job in jobs]

    def _report(self, job: RenderJob) -> None:
        error = job.future.exception()
        if error is None:
            logger.debug("Block %d rendered to %s", job.block.index, job.paths.output_path)
            self.emitter.event("diagram_rendered", {"output": str(job.paths.output_path)})
        else:
            logger.debug("Block %d failed: %s", job.block.index, error)
            self.emitter.error(failure_message(error), error)

    def _remove_workspace(self, workspace: TemporaryWorkspace, jobs: int) -> None:
        workspace.remove(self.emitter)
        self.emitter.event("workspace_removed", {"path": str(workspace.path), "jobs": jobs})


def render_document(
    source: Document | Path | str,
    options: RenderOptions | None = None,
    *,
    renderer: DiagramRenderer | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> list[JobOutcome]:
    """Render every Mermaid block of ``source`` using the configured backend."""
    document = source if isinstance(source, Document) else Document.from_path(source)
    options = options or RenderOptions()
    if renderer is None:
        from mrmd.adapters.renderers import get_renderer

        renderer = get_renderer(options.backend)
    coordinator = BatchCoordinator(renderer, options, emitter=emitter)
    return coordinator.run(document)


def summarise(outcomes: Iterable[JobOutcome]) -> tuple[int, int]:
    """Return the number of succeeded and failed jobs."""
    succeeded = failed = 0
    for outcome in outcomes:
        if outcome.succeeded:
            succeeded += 1
        else:
            failed += 1
    return succeeded, failed


__all__ = [
    "BatchCoordinator",
    "JobOutcome",
    "RenderJob",
    "failure_message",
    "render_document",
    "summarise",
]

"""Scratch directory holding the staged diagram definitions of one batch."""

from __future__ import annotations

from pathlib import Path
import shutil
import tempfile

from .diagnostics import DiagnosticEmitter, NullEmitter


class TemporaryWorkspace:
    """Process-created directory removed once every job of a batch settled.

    The directory is created on construction. :meth:`remove` is idempotent and
    best-effort: failures are reported as warnings and never raised.
    """

    def __init__(self, *, prefix: str = "mrmd-", parent: Path | None = None) -> None:
        self.path = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))
        self._removed = False

    @property
    def removed(self) -> bool:
        return self._removed

    def remove(self, emitter: DiagnosticEmitter | None = None) -> None:
        """Delete the directory and whatever it still contains."""
        if self._removed:
            return
        self._removed = True
        emitter = emitter or NullEmitter()
        try:
            shutil.rmtree(self.path)
        except FileNotFoundError:
            return
        except OSError as exc:
            emitter.warning(f"Unable to remove temporary workspace '{self.path}': {exc}", exc)

    def __enter__(self) -> TemporaryWorkspace:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.remove()

    def __repr__(self) -> str:
        return f"TemporaryWorkspace({str(self.path)!r})"


__all__ = ["TemporaryWorkspace"]

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import threading

import pytest

from mrmd.core.config import RenderOptions
from mrmd.core.exceptions import RendererExecutionError


@dataclass
class FakeRenderer:
    """Renderer double recording the staged definitions it was asked to draw."""

    fail_on: set[str] = field(default_factory=set)
    calls: list[tuple[Path, Path]] = field(default_factory=list)
    definitions: dict[str, str] = field(default_factory=dict)
    raw_definitions: dict[str, bytes] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def render(self, input_path: Path, output_path: Path, options: RenderOptions) -> None:
        payload = input_path.read_bytes()
        with self._lock:
            self.calls.append((input_path, output_path))
            self.raw_definitions[output_path.name] = payload
            self.definitions[output_path.name] = payload.decode("utf-8")
        if output_path.name in self.fail_on:
            raise RendererExecutionError(f"Parse error in {output_path.name}")
        output_path.write_text(f"rendered:{options.theme}", encoding="utf-8")


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def document_path(tmp_path: Path) -> Path:
    path = tmp_path / "notes.md"
    path.write_text(
        "# Notes\n\n```mermaid\ngraph TD\n  A-->B\n```\n\ntext\n\n```mermaid flow.svg\nflowchart LR\n  X-->Y\n```\n",
        encoding="utf-8",
    )
    return path

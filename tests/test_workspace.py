from __future__ import annotations

import shutil

from mrmd.core.diagnostics import RecordingEmitter
from mrmd.core.workspace import TemporaryWorkspace


def test_workspace_is_created_and_removed_with_contents() -> None:
    workspace = TemporaryWorkspace()
    assert workspace.path.is_dir()
    (workspace.path / "leftover.md").write_text("A-->B", encoding="utf-8")

    workspace.remove()

    assert not workspace.path.exists()
    assert workspace.removed


def test_remove_is_idempotent() -> None:
    emitter = RecordingEmitter()
    with TemporaryWorkspace() as workspace:
        shutil.rmtree(workspace.path)
        workspace.remove(emitter)
    workspace.remove(emitter)

    assert emitter.warnings == []


def test_remove_failure_is_reported_not_raised(monkeypatch) -> None:
    emitter = RecordingEmitter()
    workspace = TemporaryWorkspace()

    def boom(path):
        raise PermissionError("denied")

    monkeypatch.setattr("mrmd.core.workspace.shutil.rmtree", boom)
    workspace.remove(emitter)
    monkeypatch.undo()
    shutil.rmtree(workspace.path)

    assert len(emitter.warnings) == 1
    assert "denied" in emitter.warnings[0]

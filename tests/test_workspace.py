from __future__ import annotations

import os
import signal
import tempfile
import time
from pathlib import Path

import pytest

from egos.core.errors import Interrupted, WorkspaceError
from egos.services.workspace import BINARY_NAME, SOURCE_NAME, Workspace
from tests.conftest import posix_only


def test_workspace_is_created_and_removed(workspace_root: Path) -> None:
    with Workspace(root=workspace_root) as workspace:
        path = workspace.path
        assert path.is_dir()
        assert path.parent == workspace_root
        assert path.name.startswith("egos-")
        source = workspace.write_source("package main\n")
        assert source == path / SOURCE_NAME
        assert source.read_text(encoding="utf-8") == "package main\n"
        assert workspace.binary_file == path / BINARY_NAME
    assert not path.exists()
    assert list(workspace_root.iterdir()) == []


def test_workspace_prefix(workspace_root: Path) -> None:
    with Workspace(prefix="snippet-", root=workspace_root) as workspace:
        assert workspace.path.name.startswith("snippet-")


def test_workspace_removed_when_block_raises(workspace_root: Path) -> None:
    with pytest.raises(KeyboardInterrupt):
        with Workspace(root=workspace_root):
            raise KeyboardInterrupt
    assert list(workspace_root.iterdir()) == []


def test_workspace_creation_failure(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceError):
        with Workspace(root=tmp_path / "missing"):
            pass


def test_write_failure_still_removes_workspace(
    workspace_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def refuse(self: Path, *args: object, **kwargs: object) -> int:
        raise PermissionError(13, "Permission denied", str(self))

    with pytest.raises(WorkspaceError) as excinfo:
        with Workspace(root=workspace_root) as workspace, monkeypatch.context() as patch:
            patch.setattr(Path, "write_bytes", refuse)
            workspace.write_source("package main\n")
    assert "Permission denied" in str(excinfo.value)
    assert list(workspace_root.iterdir()) == []


def test_path_unavailable_outside_block(workspace_root: Path) -> None:
    workspace = Workspace(root=workspace_root)
    with pytest.raises(RuntimeError):
        _ = workspace.path


@posix_only
def test_sigterm_removes_workspace_and_restores_handler(workspace_root: Path) -> None:
    before = signal.getsignal(signal.SIGTERM)
    with pytest.raises(Interrupted):
        with Workspace(root=workspace_root):
            os.kill(os.getpid(), signal.SIGTERM)
            time.sleep(5)
    assert list(workspace_root.iterdir()) == []
    assert signal.getsignal(signal.SIGTERM) == before


def test_source_is_written_as_utf8(workspace_root: Path) -> None:
    with Workspace(root=workspace_root) as workspace:
        source = workspace.write_source('x := "héllo"\n')
        assert source.read_bytes() == 'x := "héllo"\n'.encode("utf-8")


@posix_only
def test_handlers_guard_directory_creation(
    workspace_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    before = signal.getsignal(signal.SIGTERM)
    seen: list[object] = []
    real_mkdtemp = tempfile.mkdtemp

    def recording_mkdtemp(*args: object, **kwargs: object) -> str:
        seen.append(signal.getsignal(signal.SIGTERM))
        return real_mkdtemp(*args, **kwargs)  # type: ignore[arg-type]

    monkeypatch.setattr(tempfile, "mkdtemp", recording_mkdtemp)
    with Workspace(root=workspace_root):
        pass
    assert seen and seen[0] is not before
    assert signal.getsignal(signal.SIGTERM) == before


@posix_only
def test_handlers_restored_when_creation_fails(tmp_path: Path) -> None:
    before = signal.getsignal(signal.SIGTERM)
    with pytest.raises(WorkspaceError):
        with Workspace(root=tmp_path / "missing"):
            pass
    assert signal.getsignal(signal.SIGTERM) == before

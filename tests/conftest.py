"""Shared fixtures: isolated runtime config and fake Go tools.

The fake tools are small POSIX shell scripts standing in for ``go`` and
``gofmt`` so the pipeline can be exercised without a Go toolchain.
"""
from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

from egos.core.config import RuntimeConfig, get_runtime_config

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="fake toolchain uses POSIX shell scripts"
)


@pytest.fixture(autouse=True)
def _fresh_runtime_config(monkeypatch: pytest.MonkeyPatch):
    for name in list(os.environ):
        if name.upper().startswith("EGOS_"):
            monkeypatch.delenv(name, raising=False)
    get_runtime_config.cache_clear()
    yield
    get_runtime_config.cache_clear()


def write_tool(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    root = tmp_path / "workspaces"
    root.mkdir()
    return root


@pytest.fixture
def build_log(tmp_path: Path) -> Path:
    return tmp_path / "build.log"


@pytest.fixture
def fake_go(tmp_path: Path, build_log: Path) -> Path:
    """A ``go`` that 'builds' a shell script echoing its arguments.

    Called as ``go build -o <binary> <source>``. It records the workspace
    listing to ``build_log``. The produced binary exits 3 when its first
    argument is ``fail``.
    """
    body = f"""ls "$(dirname "$3")" > "{build_log}"
cat > "$3" <<'SCRIPT'
#!/bin/sh
echo "args: $*"
[ "$1" = fail ] && exit 3
exit 0
SCRIPT
chmod +x "$3"
"""
    return write_tool(tmp_path / "fake-go", body)


@pytest.fixture
def broken_go(tmp_path: Path) -> Path:
    body = """echo "./script.go:6:1: undefined: foo" >&2
exit 1
"""
    return write_tool(tmp_path / "broken-go", body)


@pytest.fixture
def runtime_config(workspace_root: Path, fake_go: Path) -> RuntimeConfig:
    return RuntimeConfig(workspace_root=workspace_root, go_command=str(fake_go))

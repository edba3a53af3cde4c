from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from egos.core.config import RuntimeConfig, get_runtime_config
from egos.core.errors import EXIT_SUCCESS, BuildError, RunError, ToolchainError
from egos.core.logging import get_logger, log_event
from egos.services.workspace import Workspace

logger = get_logger(__name__)


@dataclass(frozen=True)
class BuildOutput:
    """Exit status and captured diagnostics of one ``go build`` call."""

    returncode: int
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def compile_program(source: Path, binary: Path, go_command: str = "go") -> BuildOutput:
    try:
        completed = subprocess.run(
            [go_command, "build", "-o", str(binary), str(source)],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
        )
    except OSError as exc:
        raise ToolchainError(
            message=f"unable to run {go_command}",
            detail=str(exc),
        ) from exc
    return BuildOutput(returncode=completed.returncode, stderr=completed.stderr)


def run_binary(binary: Path, args: Sequence[str]) -> int:
    """Execute ``binary`` with the caller's stdin, stdout and stderr."""
    try:
        completed = subprocess.run([str(binary), *args])
    except OSError as exc:
        raise ToolchainError(
            message=f"unable to execute {binary.name}",
            detail=str(exc),
        ) from exc
    return completed.returncode


def build_and_run(
    program: str,
    args: Sequence[str] = (),
    config: RuntimeConfig | None = None,
) -> int:
    """Compile ``program`` in a fresh workspace and run it with ``args``.

    Returns ``EXIT_SUCCESS``; every failure is raised as an ``EgosError``
    after the workspace has been removed.
    """
    config = config or get_runtime_config()
    with Workspace(
        prefix=config.workspace_prefix,
        root=config.workspace_root,
    ) as workspace:
        source = workspace.write_source(program)
        build = compile_program(source, workspace.binary_file, config.go_command)
        if not build.ok:
            log_event(logger, "build_failed", returncode=build.returncode)
            raise BuildError(message="build failed", detail=build.stderr.rstrip("\n"))

        returncode = run_binary(workspace.binary_file, args)
        log_event(logger, "run_finished", returncode=returncode)
        if returncode != 0:
            raise RunError(message="program failed", detail=str(returncode))
    return EXIT_SUCCESS

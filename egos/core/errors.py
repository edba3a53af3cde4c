from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


@dataclass
class EgosError(Exception):
    message: str
    detail: str | None = None

    code: ClassVar[str] = "error"
    silent: ClassVar[bool] = False

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class UsageError(EgosError):
    """Missing, unknown or conflicting command-line options."""

    code = "usage"


class SourceValidationError(EgosError):
    """The generated program was rejected by gofmt."""

    code = "syntax"

    def __str__(self) -> str:
        return self.message


class WorkspaceError(EgosError):
    """The temporary workspace could not be created or written."""

    code = "workspace"


class BuildError(EgosError):
    """`go build` exited non-zero; detail holds the compiler diagnostics."""

    code = "build"

    def __str__(self) -> str:
        return self.detail or self.message


class RunError(EgosError):
    """The compiled program failed. Its own stderr already explains why."""

    code = "run"
    silent = True


class ToolchainError(EgosError):
    """A Go tool could not be started."""

    code = "toolchain"


class Interrupted(EgosError):
    """A termination signal arrived while a workspace was live."""

    code = "interrupted"


def format_error(error: EgosError) -> str | None:
    """Text written to stderr for ``error``; ``None`` when nothing is shown."""
    if error.silent:
        return None
    return str(error)


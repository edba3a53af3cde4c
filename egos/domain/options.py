from __future__ import annotations

from dataclasses import dataclass

from egos.core.errors import UsageError


@dataclass(frozen=True)
class ProgramOptions:
    """Options controlling how a snippet is wrapped and what happens to it."""

    dry_run: bool = False
    imports: str = ""
    line_mode: bool = False
    print_mode: bool = False

    def __post_init__(self) -> None:
        if self.line_mode and self.print_mode:
            raise UsageError("-n and -p are mutually exclusive")

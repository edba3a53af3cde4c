from __future__ import annotations

import subprocess

from egos.core.config import RuntimeConfig, get_runtime_config
from egos.core.errors import SourceValidationError, ToolchainError
from egos.core.logging import get_logger, log_event

logger = get_logger(__name__)

SOURCE_ENCODING = "utf-8"


def format_source(source: str, config: RuntimeConfig | None = None) -> str:
    """Run ``source`` through gofmt and return the canonical text."""
    config = config or get_runtime_config()
    try:
        # Undecodable argv bytes arrive as lone surrogates; Go source must be UTF-8.
        payload = source.encode(SOURCE_ENCODING)
    except UnicodeEncodeError as exc:
        log_event(logger, "validation_failed", diagnostics=str(exc))
        raise SourceValidationError(message="syntax error", detail=str(exc)) from exc

    try:
        completed = subprocess.run(
            [config.gofmt_command],
            input=payload,
            capture_output=True,
        )
    except OSError as exc:
        raise ToolchainError(
            message=f"unable to run {config.gofmt_command}",
            detail=str(exc),
        ) from exc

    if completed.returncode != 0:
        diagnostics = completed.stderr.decode(SOURCE_ENCODING, "replace").strip()
        log_event(logger, "validation_failed", diagnostics=diagnostics)
        raise SourceValidationError(message="syntax error", detail=diagnostics)
    return completed.stdout.decode(SOURCE_ENCODING, "replace")

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any


def get_logger(name: str = "egos") -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(
    *,
    level: str = "info",
    format_name: str = "json",
    stream=None,
    log_dir: Path | None = None,
    filename: str = "egos.log",
) -> None:
    """Attach a handler to the root logger.

    stderr belongs to the user-facing messages and the child process, so
    nothing is written there unless a stream is passed explicitly. Without a
    stream or ``log_dir`` records are dropped.
    """
    normalized = level.strip().upper()
    level_value = getattr(logging, normalized, logging.INFO)
    if format_name == "json":
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter("%(levelname)s %(name)s %(message)s")
    root = logging.getLogger()
    root.setLevel(level_value)
    if stream is None:
        if log_dir is None:
            if not root.handlers:
                root.addHandler(logging.NullHandler())
            return
        log_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(
            log_dir / filename, encoding="utf-8"
        )
    else:
        handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    if not root.handlers:
        root.addHandler(handler)


def log_event(logger: logging.Logger, event: str, **fields: Any) -> None:
    payload = {"event": event, **fields}
    logger.info(json.dumps(payload, sort_keys=True, default=str))

from __future__ import annotations

import shutil
import signal
import tempfile
import threading
from pathlib import Path
from types import FrameType, TracebackType
from typing import Any

from egos.core.errors import Interrupted, WorkspaceError
from egos.core.logging import get_logger, log_event
from egos.services.formatter import SOURCE_ENCODING

logger = get_logger(__name__)

SOURCE_NAME = "script.go"
BINARY_NAME = "script.exe"

_CLEANUP_SIGNALS = tuple(
    getattr(signal, name)
    for name in ("SIGTERM", "SIGHUP")
    if hasattr(signal, name)
)


class Workspace:
    """A temporary directory holding one generated program and its binary.

    Use as a context manager: the directory exists only inside the ``with``
    block and is removed on the way out, whatever the reason. SIGTERM and
    SIGHUP are turned into :class:`Interrupted` while the block runs so that
    removal also happens when the process is told to stop.
    """

    def __init__(self, *, prefix: str = "egos-", root: Path | None = None) -> None:
        self._prefix = prefix
        self._root = root
        self._path: Path | None = None
        self._previous_handlers: dict[int, Any] = {}

    @property
    def path(self) -> Path:
        if self._path is None:
            raise RuntimeError("Workspace is not open.")
        return self._path

    @property
    def source_file(self) -> Path:
        return self.path / SOURCE_NAME

    @property
    def binary_file(self) -> Path:
        return self.path / BINARY_NAME

    def __enter__(self) -> "Workspace":
        if self._path is not None:
            raise RuntimeError("Workspace already open.")
        # Handlers before mkdtemp, so the directory never exists unguarded.
        self._install_signal_handlers()
        try:
            created = tempfile.mkdtemp(
                prefix=self._prefix,
                dir=str(self._root) if self._root is not None else None,
            )
        except OSError as exc:
            self._restore_signal_handlers()
            raise WorkspaceError(message=str(exc)) from exc
        except BaseException:
            self._restore_signal_handlers()
            raise
        self._path = Path(created)
        log_event(logger, "workspace_created", path=self._path)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.remove()
        finally:
            self._restore_signal_handlers()

    def write_source(self, program: str) -> Path:
        target = self.source_file
        try:
            target.write_bytes(program.encode(SOURCE_ENCODING))
        except OSError as exc:
            raise WorkspaceError(message=str(exc)) from exc
        return target

    def remove(self) -> None:
        if self._path is None:
            return
        path, self._path = self._path, None
        shutil.rmtree(path, ignore_errors=True)
        log_event(logger, "workspace_removed", path=path)

    # ------------------------------------------------------------------
    # Signal handling
    # ------------------------------------------------------------------
    def _install_signal_handlers(self) -> None:
        # signal.signal only works from the main thread.
        if threading.current_thread() is not threading.main_thread():
            return
        for signum in _CLEANUP_SIGNALS:
            self._previous_handlers[signum] = signal.signal(signum, _raise_interrupted)

    def _restore_signal_handlers(self) -> None:
        handlers, self._previous_handlers = self._previous_handlers, {}
        for signum, handler in handlers.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


def _raise_interrupted(signum: int, _frame: FrameType | None) -> None:
    name = signal.Signals(signum).name
    log_event(logger, "interrupted", signal=name)
    raise Interrupted(message=f"interrupted by {name}")

"""Running a handler once when the process is interrupted."""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Callable
from types import FrameType
from typing import Any

_log = logging.getLogger(__name__)

_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class SigIntManager:
    """Calls ``handler`` once on the first interrupt or terminate signal."""

    def __init__(self, handler: Callable[[], None]) -> None:
        self._handler = handler
        self._lock = threading.Lock()
        self._running = False
        self._fired = False
        self._previous: dict[int, Any] = {}

    def _on_signal(self, signum: int, frame: FrameType | None) -> None:
        if self._fired:
            return
        self._fired = True
        _log.info("Ctrl-C captured...")
        self._handler()

    def start(self) -> None:
        """Install the signal handlers; raises RuntimeError if already running."""
        with self._lock:
            if self._running:
                raise RuntimeError("already running a signal handler")
            self._fired = False
            self._previous = {
                sig: signal.signal(sig, self._on_signal) for sig in _SIGNALS
            }
            self._running = True

    def stop(self) -> None:
        """Restore the signal handlers that were in place before start."""
        with self._lock:
            if not self._running:
                return
            _log.debug("Closing Ctrl-C capturing function")
            for sig, previous in self._previous.items():
                signal.signal(sig, previous)
            self._previous = {}
            self._running = False

    def __enter__(self) -> SigIntManager:
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        self.stop()
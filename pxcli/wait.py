"""Polling until a condition stops asking to wait."""

from __future__ import annotations

import time
from collections.abc import Callable


class WaitTimeoutError(TimeoutError):
    """Raised when waiting did not finish before the timeout."""

    def __init__(self) -> None:
        super().__init__("Timed out")


def wait_for(timeout: float, period: float, f: Callable[[], bool]) -> None:
    """Call ``f`` every ``period`` seconds while it returns True.

    Raises WaitTimeoutError once ``timeout`` seconds have passed; exceptions
    from ``f`` propagate unchanged.
    """
    deadline = time.monotonic() + timeout
    wait = True
    while wait:
        if time.monotonic() >= deadline:
            raise WaitTimeoutError()
        wait = f()
        time.sleep(period)
"""Repair of list values that a command-line parser split on commas."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence


def fix_comma_based_string_slice_input(
    params: Sequence[str], args: Sequence[str]
) -> list[str]:
    """Rejoin neighbouring params whose comma-joined form occurs in an argument."""
    if not args:
        return list(params)
    pending = deque(params)
    out: list[str] = []
    while pending:
        head = pending.popleft()
        if pending:
            combined = f"{head},{pending[0]}"
            if any(combined in arg for arg in args):
                pending.popleft()
                out.append(combined)
                continue
        out.append(head)
    return out
"""Human readable forms of SDK status values."""

from __future__ import annotations

from enum import Enum

_STATUS_PREFIX = "STATUS_"


def sdk_status_to_pretty_string(status: Enum | str) -> str:
    """Return a readable version of an SDK status given as enum member or name."""
    name = status.name if isinstance(status, Enum) else str(status)
    if name == "STATUS_OK":
        return "Ready"
    # Leading characters drawn from the prefix are stripped, as a cut set.
    text = name.lstrip(_STATUS_PREFIX)
    return text.replace("_", " ").lower().title()
"""Display helpers and checks shared by volume commands."""

from __future__ import annotations

from pxcli.api import (
    AttachState,
    StorageNode,
    Volume,
    VolumeSpecUpdate,
    VolumeState,
)


class VolumeSpecError(ValueError):
    """Raised when a volume update combines fields that cannot go together."""


def shared_string(volume: Volume) -> str:
    """Return 'v4' for sharedv4 volumes, otherwise whether the volume is shared."""
    if volume.spec.sharedv4:
        return "v4"
    return true_or_false(volume.spec.shared)


def true_or_false(value: bool) -> str:
    """Return 'true' or 'false'."""
    return str(bool(value)).lower()


def boolean_attributes(volume: Volume) -> list[str]:
    """Return the names of the boolean flags set on a volume."""
    flags = (
        (volume.readonly, "read-only"),
        (volume.spec.encrypted, "encrypted"),
        (volume.spec.sticky, "sticky"),
        (volume.spec.compressed, "compressed"),
    )
    return [name for is_set, name in flags if is_set]


def pretty_status(volume: Volume) -> str:
    """Return the volume status without its type prefix."""
    return volume.status.name


def attached_state(volume: Volume, node: StorageNode | None) -> str:
    """Describe where a volume is attached, given the node it is attached on."""
    state = "Detached"
    if volume.state == VolumeState.ATTACHED:
        if node is not None:
            if volume.attached_state == AttachState.EXTERNAL:
                state = "on " + node.hostname
        else:
            state = "Attached"
    elif volume.state == VolumeState.DETATCHING:
        state = "Was on " + node.hostname if node is not None else "Detaching"
    return state


def validate_volume_spec(update: VolumeSpecUpdate) -> VolumeSpecUpdate:
    """Return the update if its fields may be set together, else raise."""
    if update.ha_level > 0 and (update.size > 0 or update.shared or update.sticky):
        raise VolumeSpecError(
            "Invalid halevel flag combination. Size, Shared or Sticky flag not "
            "supported with halevel flag"
        )
    return update
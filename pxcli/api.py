"""Data types describing storage volumes, nodes, alerts and roles."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, TypeVar


class SeverityType(IntEnum):
    """How serious an alert is."""

    NONE = 0
    ALARM = 1
    WARNING = 2
    NOTIFY = 3


class ResourceType(IntEnum):
    """The kind of resource an alert is about."""

    NONE = 0
    VOLUME = 1
    NODE = 2
    CLUSTER = 3
    DRIVE = 4


class VolumeState(IntEnum):
    """Lifecycle state of a volume."""

    NONE = 0
    PENDING = 1
    AVAILABLE = 2
    ATTACHED = 3
    DETACHED = 4
    DETATCHING = 5
    ERROR = 6
    DELETED = 7
    TRY_DETACHING = 8
    RESTORE = 9


class AttachState(IntEnum):
    """How a volume is attached to its node."""

    EXTERNAL = 0
    INTERNAL = 1
    INTERNAL_SWITCH = 2


class VolumeStatus(IntEnum):
    """Health of a volume."""

    NONE = 0
    NOT_PRESENT = 1
    UP = 2
    DOWN = 3
    DEGRADED = 4


_E = TypeVar("_E", bound=IntEnum)

_PREFIXES: dict[type[IntEnum], str] = {
    SeverityType: "SEVERITY_TYPE_",
    ResourceType: "RESOURCE_TYPE_",
    VolumeState: "VOLUME_STATE_",
    AttachState: "ATTACH_STATE_",
    VolumeStatus: "VOLUME_STATUS_",
}


def _enum(cls: type[_E], value: Any) -> _E:
    """Accept an enum member, its number, its short name or its full wire name."""
    if isinstance(value, cls):
        return value
    if isinstance(value, str):
        name = value.removeprefix(_PREFIXES[cls])
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"unknown {cls.__name__} value {value!r}") from None
    return cls(int(value))


@dataclass
class VolumeLocator:
    """Name and labels that identify a volume."""

    name: str = ""
    volume_labels: dict[str, str] = field(default_factory=dict)


@dataclass
class VolumeSpec:
    """Configuration a volume was created or updated with."""

    size: int = 0
    ha_level: int = 0
    shared: bool = False
    sharedv4: bool = False
    encrypted: bool = False
    sticky: bool = False
    compressed: bool = False
    snapshot_schedule: str = ""


@dataclass
class ReplicaSet:
    """One set of nodes holding a replica of a volume."""

    nodes: list[str] = field(default_factory=list)
    pool_uuids: list[str] = field(default_factory=list)


@dataclass
class Volume:
    """A storage volume as reported by the cluster."""

    id: str = ""
    locator: VolumeLocator = field(default_factory=VolumeLocator)
    spec: VolumeSpec = field(default_factory=VolumeSpec)
    readonly: bool = False
    state: VolumeState = VolumeState.NONE
    attached_state: AttachState = AttachState.EXTERNAL
    attached_on: str = ""
    status: VolumeStatus = VolumeStatus.NONE
    replica_sets: list[ReplicaSet] = field(default_factory=list)
    runtime_state: list[dict[str, str] | None] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Volume:
        """Build a volume from its decoded JSON form."""
        locator = data.get("locator") or {}
        spec = data.get("spec") or {}
        runtime: list[dict[str, str] | None] = []
        for entry in data.get("runtime_state") or []:
            states = entry.get("runtime_state") if entry else None
            runtime.append(dict(states) if states is not None else None)
        return cls(
            id=data.get("id", ""),
            locator=VolumeLocator(
                name=locator.get("name", ""),
                volume_labels=dict(locator.get("volume_labels") or {}),
            ),
            spec=VolumeSpec(
                size=int(spec.get("size", 0)),
                ha_level=int(spec.get("ha_level", 0)),
                shared=bool(spec.get("shared", False)),
                sharedv4=bool(spec.get("sharedv4", False)),
                encrypted=bool(spec.get("encrypted", False)),
                sticky=bool(spec.get("sticky", False)),
                compressed=bool(spec.get("compressed", False)),
                snapshot_schedule=spec.get("snapshot_schedule", ""),
            ),
            readonly=bool(data.get("readonly", False)),
            state=_enum(VolumeState, data.get("state", 0)),
            attached_state=_enum(AttachState, data.get("attached_state", 0)),
            attached_on=data.get("attached_on", ""),
            status=_enum(VolumeStatus, data.get("status", 0)),
            replica_sets=[
                ReplicaSet(
                    nodes=list(rset.get("nodes") or []),
                    pool_uuids=list(rset.get("pool_uuids") or []),
                )
                for rset in data.get("replica_sets") or []
            ],
            runtime_state=runtime,
        )


@dataclass
class StoragePool:
    """A pool of storage on a node."""

    uuid: str = ""
    used: int = 0
    total_size: int = 0


@dataclass
class StorageNode:
    """A node of the storage cluster."""

    id: str = ""
    hostname: str = ""
    node_labels: dict[str, str] | None = None
    pools: list[StoragePool] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StorageNode:
        """Build a node from its decoded JSON form."""
        labels = data.get("node_labels")
        return cls(
            id=data.get("id", ""),
            hostname=data.get("hostname", ""),
            node_labels=dict(labels) if labels is not None else None,
            pools=[
                StoragePool(
                    uuid=pool.get("uuid", ""),
                    used=int(pool.get("used", 0)),
                    total_size=int(pool.get("total_size", 0)),
                )
                for pool in data.get("pools") or []
            ],
        )


@dataclass
class VolumeSpecUpdate:
    """Fields requested to change on an existing volume; zero means unchanged."""

    ha_level: int = 0
    size: int = 0
    shared: bool = False
    sticky: bool = False


@dataclass
class Stats:
    """Input/output statistics of a volume."""

    reads: int = 0
    read_ms: int = 0
    read_bytes: int = 0
    writes: int = 0
    write_ms: int = 0
    write_bytes: int = 0
    io_progress: int = 0
    io_ms: int = 0
    bytes_used: int = 0
    interval_ms: int = 0
    discards: int = 0
    discard_ms: int = 0
    discard_bytes: int = 0


@dataclass
class Alert:
    """An alert raised by the cluster."""

    id: int = 0
    severity: SeverityType = SeverityType.NONE
    alert_type: int = 0
    message: str = ""
    timestamp: datetime | None = None
    resource_type: ResourceType = ResourceType.NONE
    resource_id: str = ""
    cleared: bool = False
    ttl: int = 0
    unique_tag: str = ""
    count: int = 0
    first_seen: datetime | None = None


@dataclass
class Rule:
    """Services and calls a role may use; entries may be globs or negated with '!'."""

    services: list[str] = field(default_factory=list)
    apis: list[str] = field(default_factory=list)


@dataclass
class Role:
    """A named set of access rules."""

    name: str = ""
    rules: list[Rule] = field(default_factory=list)
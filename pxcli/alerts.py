"""Catalogue of alert types with their severity, resource and description."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType

from pxcli.api import ResourceType, SeverityType


class AlertType(IntEnum):
    """Numeric identifiers of the alerts the cluster raises."""

    DRIVE_OPERATION_FAILURE = 0
    DRIVE_OPERATION_SUCCESS = 1
    DRIVE_STATE_CHANGE = 2
    VOLUME_OPERATION_FAILURE_ALARM = 3
    VOLUME_OPERATION_SUCCESS = 4
    VOLUME_STATE_CHANGE = 5
    VOL_GROUP_OPERATION_FAILURE = 6
    VOL_GROUP_OPERATION_SUCCESS = 7
    VOL_GROUP_STATE_CHANGE = 8
    NODE_START_FAILURE = 9
    NODE_START_SUCCESS = 10
    NODE_STATE_CHANGE = 11
    NODE_JOURNAL_HIGH_USAGE = 12
    IO_OPERATION = 13
    CONTAINER_OPERATION_FAILURE = 14
    CONTAINER_OPERATION_SUCCESS = 15
    CONTAINER_STATE_CHANGE = 16
    PX_INIT_FAILURE = 17
    PX_INIT_SUCCESS = 18
    PX_STATE_CHANGE = 19
    VOLUME_OPERATION_FAILURE_WARN = 20
    STORAGE_VOLUME_MOUNT_DEGRADED = 21
    CLUSTER_MANAGER_FAILURE = 22
    KERNEL_DRIVER_FAILURE = 23
    NODE_DECOMMISSION_SUCCESS = 24
    NODE_DECOMMISSION_FAILURE = 25
    NODE_DECOMMISSION_PENDING = 26
    NODE_INIT_FAILURE = 27
    PX_ALERT_MAX = 28
    NODE_SCAN_COMPLETION = 29
    VOLUME_SPACE_LOW = 30
    REPL_ADD_VERSION_MISMATCH = 31
    CLOUDSNAP_SCHEDULE_FAILURE = 32
    CLOUDSNAP_OPERATION_UPDATE = 33
    CLOUDSNAP_OPERATION_FAILURE = 34
    CLOUDSNAP_OPERATION_SUCCESS = 35
    NODE_MARKED_DOWN = 36
    VOLUME_CREATE_SUCCESS = 37
    VOLUME_CREATE_FAILURE = 38
    VOLUME_DELETE_SUCCESS = 39
    VOLUME_DELETE_FAILURE = 40
    VOLUME_MOUNT_SUCCESS = 41
    VOLUME_MOUNT_FAILURE = 42
    VOLUME_UNMOUNT_SUCCESS = 43
    VOLUME_UNMOUNT_FAILURE = 44
    VOLUME_HA_UPDATE_SUCCESS = 45
    VOLUME_HA_UPDATE_FAILURE = 46
    SNAPSHOT_CREATE_SUCCESS = 47
    SNAPSHOT_CREATE_FAILURE = 48
    SNAPSHOT_RESTORE_SUCCESS = 49
    SNAPSHOT_RESTORE_FAILURE = 50
    SNAPSHOT_INTERVAL_UPDATE_FAILURE = 51
    SNAPSHOT_INTERVAL_UPDATE_SUCCESS = 52
    PX_READY = 53
    STORAGE_FAILURE = 54
    OBJECTSTORE_FAILURE = 55
    OBJECTSTORE_SUCCESS = 56
    OBJECTSTORE_STATE_CHANGE = 57
    LICENSE_EXPIRING = 58
    VOLUME_EXTENT_DIFF_SLOW = 59
    VOLUME_EXTENT_DIFF_OK = 60
    SHARED_V4_SETUP_FAILURE = 61
    SNAPSHOT_DELETE_SUCCESS = 62
    SNAPSHOT_DELETE_FAILURE = 63
    DRIVE_STATE_CHANGE_CLEAR = 64
    VOLUME_SPACE_LOW_CLEARED = 65
    CLUSTER_PAIR_SUCCESS = 66
    CLUSTER_PAIR_FAILURE = 67
    CLOUD_MIGRATION_UPDATE = 68
    CLOUD_MIGRATION_SUCCESS = 69
    CLOUD_MIGRATION_FAILURE = 70
    CLUSTER_DOMAIN_ADDED = 71
    CLUSTER_DOMAIN_REMOVED = 72
    CLUSTER_DOMAIN_ACTIVATED = 73
    CLUSTER_DOMAIN_DEACTIVATED = 74
    METERING_AGENT_WARNING = 75
    METERING_AGENT_CRITICAL = 76
    # New alerts go above this one.
    PX_MAX_ALERT_NUM = 77


@dataclass(frozen=True)
class AlertSpec:
    """What an alert type means: severity, resource, description and name."""

    severity: SeverityType
    resource_type: ResourceType
    description: str
    name: str
    uniq: bool


_T = AlertType
_ALARM = SeverityType.ALARM
_WARN = SeverityType.WARNING
_NOTIFY = SeverityType.NOTIFY
_DRIVE = ResourceType.DRIVE
_VOLUME = ResourceType.VOLUME
_NODE = ResourceType.NODE
_CLUSTER = ResourceType.CLUSTER

_SPECS: dict[AlertType, AlertSpec] = {
    alert_type: AlertSpec(severity, resource, description, name, uniq)
    for alert_type, severity, resource, description, name, uniq in (
        (_T.DRIVE_OPERATION_FAILURE, _ALARM, _DRIVE, "Drive operation failure", "DriveOperationFailure", False),
        (_T.DRIVE_OPERATION_SUCCESS, _NOTIFY, _DRIVE, "Drive operation success", "DriveOperationSuccess", False),
        (_T.DRIVE_STATE_CHANGE, _WARN, _DRIVE, "Drive state change", "DriveStateChange", False),
        (_T.VOLUME_OPERATION_FAILURE_ALARM, _ALARM, _VOLUME, "Volume operation failure", "VolumeOperationFailureAlarm", True),
        (_T.VOLUME_OPERATION_SUCCESS, _NOTIFY, _VOLUME, "Volume operation success", "VolumeOperationSuccess", False),
        (_T.VOLUME_STATE_CHANGE, _WARN, _VOLUME, "Volume state change", "VolumeStateChange", True),
        (_T.VOL_GROUP_OPERATION_FAILURE, _ALARM, _CLUSTER, "Volume group operation failure", "VolGroupOperationFailure", True),
        (_T.VOL_GROUP_OPERATION_SUCCESS, _NOTIFY, _CLUSTER, "Volume group operation failure", "VolGroupOperationSuccess", True),
        (_T.VOL_GROUP_STATE_CHANGE, _WARN, _CLUSTER, "Volume group state change", "VolGroupStateChange", True),
        (_T.NODE_START_FAILURE, _ALARM, _CLUSTER, "Node start failure", "NodeStartFailure", False),
        (_T.NODE_START_SUCCESS, _NOTIFY, _CLUSTER, "Node start success", "NodeStartSuccess", False),
        (_T.NODE_STATE_CHANGE, _ALARM, _CLUSTER, "Node state change", "NodeStateChange", False),
        (_T.NODE_JOURNAL_HIGH_USAGE, _ALARM, _CLUSTER, "Node journal high usage", "NodeJournalHighUsage", False),
        (_T.IO_OPERATION, _ALARM, _VOLUME, "Io operation", "IOOperation", False),
        (_T.CONTAINER_OPERATION_FAILURE, _ALARM, _CLUSTER, "Container operation failure", "ContainerOperationFailure", True),
        (_T.CONTAINER_OPERATION_SUCCESS, _NOTIFY, _CLUSTER, "Container operation succes", "ContainerOperationSuccess", True),
        (_T.CONTAINER_STATE_CHANGE, _WARN, _CLUSTER, "Container state change", "ContainerStateChange", True),
        (_T.PX_INIT_FAILURE, _ALARM, _NODE, "Px init failure", "PXInitFailure", False),
        (_T.PX_INIT_SUCCESS, _NOTIFY, _NODE, "Px init success", "PXInitSuccess", False),
        (_T.PX_STATE_CHANGE, _WARN, _NODE, "Px state change", "PXStateChange", False),
        (_T.VOLUME_OPERATION_FAILURE_WARN, _WARN, _VOLUME, "Volume operation failure", "VolumeOperationFailureWarn", True),
        (_T.CLUSTER_MANAGER_FAILURE, _ALARM, _NODE, "Cluster manager failure", "ClusterManagerFailure", False),
        (_T.KERNEL_DRIVER_FAILURE, _ALARM, _NODE, "Kernel driver error", "KernelDriverFailure", False),
        (_T.NODE_DECOMMISSION_SUCCESS, _NOTIFY, _CLUSTER, "Node decommission success", "NodeDecommissionSuccess", False),
        (_T.NODE_DECOMMISSION_FAILURE, _ALARM, _CLUSTER, "Node decommission failure", "NodeDecommissionFailure", False),
        (_T.NODE_DECOMMISSION_PENDING, _WARN, _CLUSTER, "Node decommission pending", "NodeDecommissionPending", False),
        (_T.NODE_INIT_FAILURE, _ALARM, _CLUSTER, "Node init failure", "NodeInitFailure", False),
        (_T.PX_ALERT_MAX, _NOTIFY, _CLUSTER, "Px Alert Max", "PXAlertMax", False),
        (_T.NODE_SCAN_COMPLETION, _NOTIFY, _NODE, "Node media scan completion", "NodeScanCompletion", False),
        (_T.VOLUME_SPACE_LOW, _ALARM, _VOLUME, "Volume space low", "VolumeSpaceLow", False),
        (_T.VOLUME_SPACE_LOW_CLEARED, _NOTIFY, _VOLUME, "Volume space no longer low", "VolumeSpaceLowCleared", False),
        (_T.REPL_ADD_VERSION_MISMATCH, _WARN, _VOLUME, "Volume HA increase operation", "ReplAddVersionMismatch", False),
        (_T.CLOUDSNAP_SCHEDULE_FAILURE, _ALARM, _NODE, "Cloudsnap schedule configuration failure", "CloudsnapScheduleFailure", False),
        (_T.CLOUDSNAP_OPERATION_UPDATE, _NOTIFY, _VOLUME, "Cloudsnap operation update", "CloudsnapOperationUpdate", True),
        (_T.CLOUDSNAP_OPERATION_FAILURE, _ALARM, _VOLUME, "Cloudsnap operation failure", "CloudsnapOperationFailure", True),
        (_T.CLOUDSNAP_OPERATION_SUCCESS, _NOTIFY, _VOLUME, "Cloudsnap opertion success", "CloudsnapOperationSuccess", True),
        (_T.NODE_MARKED_DOWN, _WARN, _CLUSTER, "Node marked down", "NodeMarkedDown", False),
        (_T.VOLUME_CREATE_SUCCESS, _NOTIFY, _VOLUME, "Volume create success", "VolumeCreateSuccess", True),
        (_T.VOLUME_CREATE_FAILURE, _ALARM, _VOLUME, "Volume create failure", "VolumeCreateFailure", True),
        (_T.VOLUME_DELETE_SUCCESS, _NOTIFY, _VOLUME, "Volume delete success", "VolumeDeleteSuccess", True),
        (_T.VOLUME_DELETE_FAILURE, _ALARM, _VOLUME, "Volume delete failure", "VolumeDeleteFailure", True),
        (_T.VOLUME_MOUNT_SUCCESS, _NOTIFY, _VOLUME, "Volume mount success", "VolumeMountSuccess", True),
        (_T.VOLUME_MOUNT_FAILURE, _ALARM, _VOLUME, "Volume mount failure", "VolumeMountFailure", True),
        (_T.VOLUME_UNMOUNT_SUCCESS, _NOTIFY, _VOLUME, "Volume unmount success", "VolumeUnmountSuccess", True),
        (_T.VOLUME_UNMOUNT_FAILURE, _ALARM, _VOLUME, "Volume unmount failure", "VolumeUnmountFailure", True),
        (_T.VOLUME_HA_UPDATE_SUCCESS, _NOTIFY, _VOLUME, "Volume ha update success", "VolumeHAUpdateSuccess", True),
        (_T.VOLUME_HA_UPDATE_FAILURE, _ALARM, _VOLUME, "Volume ha update failure", "VolumeHAUpdateFailure", True),
        (_T.SNAPSHOT_CREATE_SUCCESS, _NOTIFY, _VOLUME, "Snapshot create success", "SnapshotCreateSuccess", True),
        (_T.SNAPSHOT_CREATE_FAILURE, _ALARM, _VOLUME, "Snapshot create failure", "SnapshotCreateFailure", True),
        (_T.SNAPSHOT_RESTORE_SUCCESS, _NOTIFY, _VOLUME, "Snapshot restore success", "SnapshotRestoreSuccess", True),
        (_T.SNAPSHOT_RESTORE_FAILURE, _ALARM, _VOLUME, "Snapshot restore failure", "SnapshotRestoreFailure", True),
        (_T.SNAPSHOT_INTERVAL_UPDATE_FAILURE, _ALARM, _VOLUME, "Snapshot interval update failure", "SnapshotIntervalUpdateFailure", True),
        (_T.SNAPSHOT_INTERVAL_UPDATE_SUCCESS, _NOTIFY, _VOLUME, "Snapshot interval update success", "SnapshotIntervalUpdateSuccess", True),
        (_T.PX_READY, _NOTIFY, _NODE, "PX ready", "PXReady", False),
        (_T.STORAGE_FAILURE, _ALARM, _NODE, "Storage could not be mounted", "StorageFailure", True),
        (_T.OBJECTSTORE_STATE_CHANGE, _NOTIFY, _NODE, "Objectstore operation update", "ObjectstoreStateChange", False),
        (_T.OBJECTSTORE_FAILURE, _ALARM, _NODE, "Objectstore failure", "ObjectstoreFailure", False),
        (_T.OBJECTSTORE_SUCCESS, _NOTIFY, _NODE, "Objectstore success", "ObjectstoreSuccess", False),
        (_T.LICENSE_EXPIRING, _WARN, _CLUSTER, "License expiring", "LicenseExpiring", True),
        (_T.VOLUME_EXTENT_DIFF_SLOW, _WARN, _VOLUME, "Extent diff is slow", "VolumeExtentDiffSlow", True),
        (_T.VOLUME_EXTENT_DIFF_OK, _WARN, _VOLUME, "Extent diff is ok", "VolumeExtentDiffOk", True),
        (_T.SHARED_V4_SETUP_FAILURE, _WARN, _NODE, "Sharedv4 service setup failure", "SharedV4SetupFailure", True),
        (_T.SNAPSHOT_DELETE_SUCCESS, _NOTIFY, _VOLUME, "Snapshot delete success", "SnapshotDeleteSuccess", True),
        (_T.SNAPSHOT_DELETE_FAILURE, _ALARM, _VOLUME, "Snapshot delete failure", "SnapshotDeleteFailure", True),
        (_T.DRIVE_STATE_CHANGE_CLEAR, _WARN, _DRIVE, "Drive state change clear", "DriveStateChangeClear", False),
        (_T.CLUSTER_PAIR_SUCCESS, _NOTIFY, _CLUSTER, "Cluster Pair created successfully", "ClusterPairSuccess", False),
        (_T.CLUSTER_PAIR_FAILURE, _ALARM, _CLUSTER, "Failed to create Cluster Pair", "ClusterPairFailure", False),
        (_T.CLOUD_MIGRATION_UPDATE, _NOTIFY, _VOLUME, "CloudMigration operation update", "CloudMigrationUpdate", False),
        (_T.CLOUD_MIGRATION_SUCCESS, _NOTIFY, _VOLUME, "CloudMigration operation success", "CloudMigrationSuccess", False),
        (_T.CLOUD_MIGRATION_FAILURE, _ALARM, _VOLUME, "CloudMigration operation failure", "CloudMigrationFailure", False),
        (_T.CLUSTER_DOMAIN_ADDED, _NOTIFY, _CLUSTER, "Cluster domain added", "ClusterDomainAdded", False),
        (_T.CLUSTER_DOMAIN_REMOVED, _NOTIFY, _CLUSTER, "Cluster domain removed", "ClusterDomainRemoved", False),
        (_T.CLUSTER_DOMAIN_ACTIVATED, _NOTIFY, _CLUSTER, "Cluster domain activated", "ClusterDomainActivated", False),
        (_T.CLUSTER_DOMAIN_DEACTIVATED, _NOTIFY, _CLUSTER, "Cluster domain deactivated", "ClusterDomainDeactivated", False),
        (_T.METERING_AGENT_WARNING, _WARN, _CLUSTER, "MeteringAgent operation warning", "MeteringAgentWarning", False),
        (_T.METERING_AGENT_CRITICAL, _ALARM, _CLUSTER, "MeteringAgent operation critical", "MeteringAgentCritical", False),
        (_T.PX_MAX_ALERT_NUM, _NOTIFY, _VOLUME, "Px max alert num", "PXMaxAlertNum", False),
    )
}

_TYPE_TO_SPEC: Mapping[AlertType, AlertSpec] = MappingProxyType(_SPECS)

_RESOURCE_NAMES: Mapping[ResourceType, str] = MappingProxyType(
    {
        ResourceType.NONE: "UNKNOWN RESOURCE",
        ResourceType.DRIVE: "DRIVE",
        ResourceType.NODE: "NODE",
        ResourceType.CLUSTER: "CLUSTER",
        ResourceType.VOLUME: "VOLUME",
    }
)


def type_to_spec() -> Mapping[AlertType, AlertSpec]:
    """Return the read-only mapping of alert types to their specs.

    Each alert type is always tied to one resource type.
    """
    return _TYPE_TO_SPEC


def resource_type_string(resource_type: ResourceType) -> str:
    """Return the display name of a resource type, or '' if it has none."""
    return _RESOURCE_NAMES.get(resource_type, "")


def severity_string(severity: SeverityType) -> str:
    """Return the short display name of a severity."""
    match severity:
        case SeverityType.ALARM:
            return "ALARM"
        case SeverityType.WARNING:
            return "WARN"
        case _:
            return "NOTIFY"
"""Storage nodes and replication details of volumes."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from pxcli.api import StorageNode, Volume, VolumeState
from pxcli.errors import PxError, RpcError, px_error_message
from pxcli.output import eprintf
from pxcli.volume_common import attached_state

_REPL_CURR_SET_MID = "ReplicaSetCurrMid"
_REPL_SET_CREATE_MID = "ReplicaSetCreateMid"
_REPL_NEW_NODE_MID = "ReplNewNodeMid"
_REPL_READD_POOLS = "PXReplReAddPools"
_REPL_READD_NODE_MID = "PXReplReAddNodeMid"
_REPL_READD_USED_SIZE = "PXReplReAddUsedSize"
_REPL_NODE_POOLS = "ReplNodePools"
_REPL_NEW_NODE_POOLS = "ReplNewNodePools"
_REPL_REMOVE_MIDS = "ReplRemoveMids"
_REPL_RUNTIME_STATE = "RuntimeState"
_RUNTIME_STATE_RESYNC = "resync"
_RUNTIME_STATE_RESYNC_FAILED = "resync_failed"

_NODE_VERSION_KEY = "PX Version"
_NODE_KERNEL_VERSION_KEY = "Kernel Version"
_NODE_OS_KEY = "OS"
_UNKNOWN = "(Unknown)"

_GI = 1024 * 1024 * 1024

_IBYTE_SIZES = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")
_UINT64_LIMIT = 1 << 64
_DIGITS = re.compile(r"\d+")


class _NodeSource(Protocol):
    def enumerate_nodes(self) -> list[str]:
        """Return the ids of all nodes."""

    def get_node(self, node_id: str) -> StorageNode:
        """Return the details of one node."""


@dataclass
class NodeSelector:
    """Which nodes to fetch; all nodes when no names are given."""

    node_names: list[str] = field(default_factory=list)


class NodeNotFoundError(PxError, LookupError):
    """Raised when a node id is not among the fetched nodes."""

    def __init__(self) -> None:
        super().__init__("Node not found")


@dataclass
class ReplicationSetInfo:
    """Nodes holding one replica set of a volume and work in progress on it."""

    id: int = 0
    node_info: list[str] = field(default_factory=list)
    ha_increase: str = ""
    readd_on: list[str] = field(default_factory=list)


@dataclass
class ReplicationInfo:
    """Replica sets of a volume and the overall replication status."""

    rsi: list[ReplicationSetInfo] = field(default_factory=list)
    status: str = ""


def _ibytes(size: int) -> str:
    """Format a byte count with binary units, one decimal below ten."""
    if size < 10:
        return f"{size} B"
    value, remainder, mag = size, 0, 0
    while value >= 1024:
        value, remainder = divmod(value, 1024)
        mag += 1
        if mag == len(_IBYTE_SIZES) - 1:
            break
    scaled = value + remainder / 1024
    if scaled < 10:
        return f"{scaled:.1f} {_IBYTE_SIZES[mag]}"
    return f"{scaled:.0f} {_IBYTE_SIZES[mag]}"


def _parse_uint64(text: str) -> int | None:
    if _DIGITS.fullmatch(text) is None:
        return None
    value = int(text)
    return value if value < _UINT64_LIMIT else None


class Nodes:
    """Nodes chosen by a selector, fetched once and then cached by id."""

    def __init__(self, pxops: _NodeSource, selector: NodeSelector | None = None) -> None:
        self._pxops = pxops
        self._selector = selector if selector is not None else NodeSelector()
        self._node_map: dict[str, StorageNode] = {}
        self._nodes: list[StorageNode] = []

    def reset(self) -> None:
        """Forget the cached nodes."""
        self._node_map = {}
        self._nodes = []

    def _fetch(self) -> None:
        names = self._selector.node_names or self._pxops.enumerate_nodes()
        self._nodes = []
        for name in names:
            node = self._pxops.get_node(name)
            self._node_map[name] = node
            self._nodes.append(node)

    def get_nodes(self) -> list[StorageNode]:
        """Return the selected nodes, fetching them if not cached."""
        if not self._nodes:
            self._fetch()
        return list(self._nodes)

    def get_node(self, node_id: str) -> StorageNode:
        """Return one of the selected nodes; raises NodeNotFoundError."""
        if not self._nodes:
            self._fetch()
        try:
            return self._node_map[node_id]
        except KeyError:
            raise NodeNotFoundError() from None

    def get_attached_on(self, volume: Volume) -> StorageNode | None:
        """Return the node the volume is attached on, or None if detached."""
        if volume.attached_on:
            return self.get_node(volume.attached_on)
        return None

    def get_attached_state(self, volume: Volume) -> str:
        """Describe where the volume is attached."""
        return attached_state(volume, self.get_attached_on(volume))

    def _hostname(self, node_id: str, volume: Volume) -> str:
        try:
            return self.get_node(node_id).hostname
        except (PxError, RpcError) as err:
            message = px_error_message(
                err,
                f"Failed to get node ({node_id}) information for replica of "
                f"volume {volume.locator.name} ",
            )
            eprintf(f"{message}\n")
            return node_id

    def get_replication_info(self, volume: Volume) -> ReplicationInfo:
        """Return the replica sets of a volume and its replication status."""
        num_resync = 0
        num_resync_failed = 0
        num_readd = 0
        nodes_down = False
        info = ReplicationInfo()
        runtime_states = volume.runtime_state

        for index, rset in enumerate(volume.replica_sets):
            curr_mids = ""
            pool_ids: list[str] = []
            remove_mids = ""
            create_nodes: list[str] = []
            set_info = ReplicationSetInfo(id=index)

            irs = runtime_states[index] if index < len(runtime_states) else None
            if irs is not None:
                create_nodes = irs.get(_REPL_SET_CREATE_MID, "").split(",")
                remove_mids = irs.get(_REPL_REMOVE_MIDS, "")

                if _REPL_NODE_POOLS in irs:
                    pool_ids = irs[_REPL_NODE_POOLS].split(",")

                # Fewer current nodes than set members means some are down.
                if _REPL_CURR_SET_MID in irs:
                    curr_mids = irs[_REPL_CURR_SET_MID]
                    if len(curr_mids.split(",")) != len(rset.nodes):
                        nodes_down = True

                if volume.attached_on:
                    runtime = irs.get(_REPL_RUNTIME_STATE)
                    if runtime == _RUNTIME_STATE_RESYNC:
                        num_resync += 1
                    elif runtime == _RUNTIME_STATE_RESYNC_FAILED:
                        num_resync_failed += 1

                if _REPL_NEW_NODE_MID in irs:
                    new_node_mid = irs[_REPL_NEW_NODE_MID]
                    new_node_pool = ""
                    if _REPL_NEW_NODE_POOLS in irs:
                        new_node_pool = f" (Pool {irs[_REPL_NEW_NODE_POOLS]})"
                    if _REPL_READD_USED_SIZE in irs:
                        used = _parse_uint64(irs[_REPL_READD_USED_SIZE])
                        if used is not None:
                            new_node_pool += f" ({_ibytes(used)} transferred)"
                    hostname = self._hostname(new_node_mid, volume)
                    set_info.ha_increase = f"{hostname}{new_node_pool}"

                if _REPL_READD_NODE_MID in irs:
                    readd_mids = irs[_REPL_READD_NODE_MID]
                    readd_pools = irs.get(_REPL_READD_POOLS, "").split(",")
                    num_readd = len(readd_mids)
                    if num_readd > 0:
                        for node_id, pool in zip(readd_mids.split(","), readd_pools):
                            hostname = self._hostname(node_id, volume)
                            set_info.readd_on.append(f"{hostname} (Pool {pool})")

            if not create_nodes:
                create_nodes = list(rset.nodes)

            for position, node_id in enumerate(create_nodes):
                not_in_curr_set = "" if node_id in curr_mids else "* "
                removed = "(removal in-progess)" if node_id in remove_mids else ""
                pool_id = (
                    f" (Pool {pool_ids[position]})" if position < len(pool_ids) else ""
                )
                hostname = self._hostname(node_id, volume)
                set_info.node_info.append(
                    f"{hostname}{pool_id}{not_in_curr_set}{removed}"
                )
            info.rsi.append(set_info)

        if volume.state == VolumeState.RESTORE:
            info.status = "Restore"
        elif not volume.attached_on:
            info.status = "Detached"
        elif num_resync_failed != 0:
            info.status = "Not in quorum"
        elif (nodes_down and num_resync == 0) or num_readd > 0:
            info.status = "Degraded"
        elif num_resync > 0:
            info.status = "Resync"
        else:
            info.status = "UP"
        return info


def _add_mids(irs: dict[str, str], key: str, node_ids: dict[str, None]) -> None:
    value = irs.get(key, "")
    if value:
        node_ids.update(dict.fromkeys(value.split(",")))


def _node_ids_for_volume(volume: Volume, node_ids: dict[str, None]) -> None:
    runtime_states = volume.runtime_state
    for index, rset in enumerate(volume.replica_sets):
        irs = runtime_states[index] if index < len(runtime_states) else None
        if irs is not None:
            for key in (
                _REPL_SET_CREATE_MID,
                _REPL_REMOVE_MIDS,
                _REPL_CURR_SET_MID,
                _REPL_READD_NODE_MID,
            ):
                _add_mids(irs, key, node_ids)
            if volume.attached_on:
                node_ids[volume.attached_on] = None
            new_node_mid = irs.get(_REPL_NEW_NODE_MID, "")
            if new_node_mid:
                node_ids[new_node_mid] = None
        node_ids.update(dict.fromkeys(rset.nodes))


def get_node_spec(volumes: Iterable[Volume]) -> NodeSelector:
    """Return a selector for every node referenced by the volumes' replicas."""
    node_ids: dict[str, None] = {}
    for volume in volumes:
        _node_ids_for_volume(volume, node_ids)
    return NodeSelector(node_names=list(node_ids))


def new_nodes_for_volumes(pxops: _NodeSource, volumes: Sequence[Volume]) -> Nodes:
    """Fetch the nodes referenced by the volumes and return them cached."""
    nodes = Nodes(pxops, get_node_spec(volumes))
    nodes.get_nodes()
    return nodes


def _node_label(node: StorageNode, key: str) -> str:
    if node.node_labels is not None:
        return node.node_labels.get(key, "")
    return _UNKNOWN


def storage_node_version(node: StorageNode) -> str:
    """Return the software version of a node."""
    return _node_label(node, _NODE_VERSION_KEY)


def storage_node_os(node: StorageNode) -> str:
    """Return the operating system of a node."""
    return _node_label(node, _NODE_OS_KEY)


def storage_node_kernel_version(node: StorageNode) -> str:
    """Return the kernel version of a node."""
    return _node_label(node, _NODE_KERNEL_VERSION_KEY)


def total_capacity(node: StorageNode) -> tuple[int, int]:
    """Return the used and total bytes over all pools of a node."""
    used = sum(pool.used for pool in node.pools)
    capacity = sum(pool.total_size for pool in node.pools)
    return used, capacity


def total_capacity_gi(node: StorageNode) -> tuple[int, int]:
    """Return the used and total capacity of a node in whole GiB."""
    used, capacity = total_capacity(node)
    return used // _GI, capacity // _GI
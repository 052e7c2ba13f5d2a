"""Access to volumes and nodes through cluster service clients."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from pxcli.api import Stats, StorageNode, Volume
from pxcli.errors import RpcError, px_error, px_error_message


@dataclass
class VolumeSelector:
    """Which volumes to fetch: by name, or else by labels and owner."""

    vol_names: list[str] = field(default_factory=list)
    labels: dict[str, str] = field(default_factory=dict)
    owner: str = ""


class _VolumeClient(Protocol):
    def inspect_with_filters(
        self, labels: Mapping[str, str], owner: str | None
    ) -> list[Volume]:
        """Return volumes carrying the labels and, if given, the owner."""

    def inspect(self, volume_id: str) -> Volume:
        """Return the volume with the given id or name."""

    def stats(self, volume_id: str, not_cumulative: bool) -> Stats:
        """Return the statistics of a volume."""


class _NodeClient(Protocol):
    def enumerate(self) -> list[str]:
        """Return the ids of all nodes."""

    def inspect(self, node_id: str) -> StorageNode:
        """Return the node with the given id."""


class _Connection(Protocol):
    def close(self) -> None:
        """Close the connection."""


class PxOps:
    """Volume and node operations against one cluster connection."""

    def __init__(
        self,
        volume_client: _VolumeClient,
        node_client: _NodeClient,
        connection: _Connection | None = None,
    ) -> None:
        self._volumes = volume_client
        self._nodes = node_client
        self._connection = connection

    def close(self) -> None:
        """Close the underlying connection, if any."""
        if self._connection is not None:
            self._connection.close()

    def __enter__(self) -> PxOps:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get_volumes_by_spec(self, selector: VolumeSelector) -> list[Volume]:
        """Return the volumes matching the selector's labels and owner."""
        try:
            return list(
                self._volumes.inspect_with_filters(
                    dict(selector.labels), selector.owner or None
                )
            )
        except RpcError as err:
            raise px_error_message(err, "Failed to get volumes") from err

    def get_volume_by_id(self, volume_id: str) -> Volume:
        """Return the details of one volume."""
        return self._volumes.inspect(volume_id)

    def get_stats(self, volume: Volume, not_cumulative: bool) -> Stats:
        """Return the statistics of a volume."""
        try:
            return self._volumes.stats(volume.id, not_cumulative)
        except RpcError as err:
            raise px_error(err) from err

    def enumerate_nodes(self) -> list[str]:
        """Return the ids of all nodes."""
        try:
            return list(self._nodes.enumerate())
        except RpcError as err:
            raise px_error(err) from err

    def get_node(self, node_id: str) -> StorageNode:
        """Return the details of one node."""
        try:
            return self._nodes.inspect(node_id)
        except RpcError as err:
            raise px_error(err) from err


class Volumes:
    """Volumes chosen by a selector, fetched once and then cached."""

    def __init__(self, pxops: PxOps, selector: VolumeSelector) -> None:
        self._pxops = pxops
        self._selector = selector
        self._vols: list[Volume] = []

    def reset(self) -> None:
        """Forget the cached volumes."""
        self._vols = []

    def get_volumes(self) -> list[Volume]:
        """Return the selected volumes, fetching them if not cached."""
        if not self._vols:
            if self._selector.vol_names:
                self._vols = [
                    self._pxops.get_volume_by_id(name)
                    for name in self._selector.vol_names
                ]
            else:
                self._vols = self._pxops.get_volumes_by_spec(self._selector)
        return list(self._vols)

    def get_stats(self, volume: Volume, not_cumulative: bool) -> Stats:
        """Return the statistics of a volume."""
        return self._pxops.get_stats(volume, not_cumulative)
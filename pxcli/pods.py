"""Pods that use storage volumes and the containers mounting them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from pxcli.api import Volume
from pxcli.errors import PxError


@dataclass
class PodSelector:
    """Which pods to fetch: a namespace and labels they must carry."""

    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class VolumeMount:
    """A pod volume mounted into a container at a path."""

    name: str = ""
    mount_path: str = ""


@dataclass
class Container:
    """A container of a pod; devices are names of volumes used as raw devices."""

    name: str = ""
    volume_mounts: list[VolumeMount] = field(default_factory=list)
    volume_devices: list[str] = field(default_factory=list)


@dataclass
class PodVolume:
    """A volume declared by a pod, backed by a claim when claim_name is set."""

    name: str = ""
    claim_name: str | None = None


@dataclass
class Pod:
    """A pod with its volumes and containers."""

    name: str = ""
    namespace: str = ""
    volumes: list[PodVolume] = field(default_factory=list)
    containers: list[Container] = field(default_factory=list)


@dataclass
class ContainerInfo:
    """A container using a volume, with the path it is mounted on."""

    pod: Pod
    container: str
    mount_path: str = ""


class ClusterOps(Protocol):
    """Access to the pods of the container cluster."""

    def get_pods_by_labels(self, namespace: str, labels: str) -> list[Pod]:
        """Return pods in the namespace matching a 'k=v,k=v' label selector."""


def _label_selector(labels: dict[str, str]) -> str:
    return ",".join(f"{key}={value}" for key, value in labels.items())


class Pods:
    """Pods chosen by a selector, fetched once and then cached."""

    def __init__(self, cops: ClusterOps, selector: PodSelector | None = None) -> None:
        self._cops = cops
        self._selector = selector if selector is not None else PodSelector()
        self._pods: list[Pod] = []

    def reset(self) -> None:
        """Forget the cached pods."""
        self._pods = []

    def get_pods(self) -> list[Pod]:
        """Return the selected pods, fetching them if not cached."""
        if not self._pods:
            self._pods = list(
                self._cops.get_pods_by_labels(
                    self._selector.namespace, _label_selector(self._selector.labels)
                )
            )
        return list(self._pods)

    def pods_using_volume(self, volume: Volume) -> list[Pod]:
        """Return the pods whose claims refer to the volume's claim."""
        pods = self.get_pods()
        labels = volume.locator.volume_labels
        namespace = labels.get("namespace", "")
        pvc = labels.get("pvc", "")
        if not namespace and not pvc:
            return []
        return [
            pod
            for pod in pods
            if pod.namespace == namespace
            for pod_volume in pod.volumes
            if pod_volume.claim_name is not None and pod_volume.claim_name == pvc
        ]

    def container_info_for_volume(self, volume: Volume) -> list[ContainerInfo]:
        """Return the containers that mount or use the volume as a device."""
        pods = self.pods_using_volume(volume)
        if not pods:
            return []
        pvc_name = volume.locator.volume_labels.get("pvc", "")
        if not pvc_name:
            raise PxError("Got a volume with no pvc lable")

        infos: list[ContainerInfo] = []
        for pod in pods:
            vol_name = next(
                (
                    pod_volume.name
                    for pod_volume in pod.volumes
                    if pod_volume.claim_name is not None
                    and pod_volume.claim_name == pvc_name
                ),
                "",
            )
            for container in pod.containers:
                infos.extend(
                    ContainerInfo(pod, container.name, mount.mount_path)
                    for mount in container.volume_mounts
                    if mount.name == vol_name
                )
                infos.extend(
                    ContainerInfo(pod, container.name)
                    for device in container.volume_devices
                    if device == pvc_name
                )
        return infos
import pytest

from pxcli.api import Volume, VolumeLocator
from pxcli.errors import PxError
from pxcli.pods import (
    Container,
    ContainerInfo,
    Pod,
    PodSelector,
    Pods,
    PodVolume,
    VolumeMount,
)


class FakeClusterOps:
    def __init__(self, pods):
        self.pods = pods
        self.calls = []

    def get_pods_by_labels(self, namespace, labels):
        self.calls.append((namespace, labels))
        return list(self.pods)


def mysql_pod():
    return Pod(
        name="wordpress-mysql-684ddbbb55-zjs7b",
        namespace="wp1",
        volumes=[
            PodVolume(name="config", claim_name=None),
            PodVolume(name="mysql-persistent-storage", claim_name="mysql-pvc-1"),
        ],
        containers=[
            Container(
                name="mysql",
                volume_mounts=[
                    VolumeMount(name="mysql-persistent-storage", mount_path="/var/lib/mysql"),
                    VolumeMount(name="config", mount_path="/etc/mysql"),
                ],
            )
        ],
    )


def wordpress_pod(name):
    return Pod(
        name=name,
        namespace="wp1",
        volumes=[PodVolume(name="wordpress-persistent-storage", claim_name="wp-pv-claim")],
        containers=[
            Container(
                name="wordpress",
                volume_mounts=[
                    VolumeMount(name="wordpress-persistent-storage", mount_path="/var/www/html")
                ],
            )
        ],
    )


def other_namespace_pod():
    return Pod(
        name="mysql-elsewhere",
        namespace="other",
        volumes=[PodVolume(name="data", claim_name="mysql-pvc-1")],
    )


@pytest.fixture
def cops():
    return FakeClusterOps(
        [
            mysql_pod(),
            wordpress_pod("wordpress-7f6d665c6f-5wpm6"),
            wordpress_pod("wordpress-7f6d665c6f-7qcch"),
            other_namespace_pod(),
        ]
    )


def volume_with_labels(labels):
    return Volume(id="v", locator=VolumeLocator(name="pvc-x", volume_labels=labels))


def test_pods_using_volume_matches_namespace_and_claim(cops):
    pods = Pods(cops, PodSelector(namespace="wp1"))
    mysql = pods.pods_using_volume(volume_with_labels({"namespace": "wp1", "pvc": "mysql-pvc-1"}))
    assert [p.name for p in mysql] == ["wordpress-mysql-684ddbbb55-zjs7b"]
    wp = pods.pods_using_volume(volume_with_labels({"namespace": "wp1", "pvc": "wp-pv-claim"}))
    assert [p.name for p in wp] == ["wordpress-7f6d665c6f-5wpm6", "wordpress-7f6d665c6f-7qcch"]


def test_pods_using_volume_without_labels_is_empty(cops):
    pods = Pods(cops)
    assert pods.pods_using_volume(volume_with_labels({})) == []


def test_container_info_for_mounts(cops):
    pods = Pods(cops)
    infos = pods.container_info_for_volume(
        volume_with_labels({"namespace": "wp1", "pvc": "mysql-pvc-1"})
    )
    assert infos == [ContainerInfo(mysql_pod(), "mysql", "/var/lib/mysql")]


def test_container_info_for_devices():
    pod = Pod(
        name="block",
        namespace="ns",
        volumes=[PodVolume(name="raw", claim_name="blk-claim")],
        containers=[
            Container(name="writer", volume_devices=["blk-claim"]),
            Container(name="idle", volume_devices=["something-else"]),
        ],
    )
    pods = Pods(FakeClusterOps([pod]))
    infos = pods.container_info_for_volume(
        volume_with_labels({"namespace": "ns", "pvc": "blk-claim"})
    )
    assert [(i.pod.name, i.container, i.mount_path) for i in infos] == [("block", "writer", "")]


def test_container_info_with_no_pods_is_empty(cops):
    pods = Pods(cops)
    volume = volume_with_labels({"namespace": "nowhere", "pvc": "mysql-pvc-1"})
    assert pods.container_info_for_volume(volume) == []


def test_container_info_without_pvc_label_raises():
    pod = Pod(name="p", namespace="ns", volumes=[PodVolume(name="d", claim_name="")])
    pods = Pods(FakeClusterOps([pod]))
    with pytest.raises(PxError, match="Got a volume with no pvc lable"):
        pods.container_info_for_volume(volume_with_labels({"namespace": "ns"}))


def test_get_pods_passes_selector_and_caches(cops):
    pods = Pods(cops, PodSelector(namespace="wp1", labels={"app": "wordpress"}))
    first = pods.get_pods()
    second = pods.get_pods()
    assert first == second
    assert len(first) == 4
    assert cops.calls == [("wp1", "app=wordpress")]


def test_reset_refetches(cops):
    pods = Pods(cops)
    pods.get_pods()
    pods.reset()
    pods.get_pods()
    assert cops.calls == [("", ""), ("", "")]


def test_empty_result_is_not_cached():
    cops = FakeClusterOps([])
    pods = Pods(cops)
    assert pods.get_pods() == []
    assert pods.get_pods() == []
    assert len(cops.calls) == 2
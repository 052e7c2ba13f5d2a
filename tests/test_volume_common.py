import pytest

from pxcli.api import (
    AttachState,
    StorageNode,
    Volume,
    VolumeLocator,
    VolumeSpec,
    VolumeSpecUpdate,
    VolumeState,
)
from pxcli.volume_common import (
    VolumeSpecError,
    attached_state,
    boolean_attributes,
    pretty_status,
    shared_string,
    true_or_false,
    validate_volume_spec,
)

HOST = "ip-70-0-87-200.brbnca.spcsdns.net"


def _volume(name, readonly=False, **spec):
    return Volume(
        id=name,
        locator=VolumeLocator(name=name),
        spec=VolumeSpec(**spec),
        readonly=readonly,
    )


VOLUMES = {
    "tp1": _volume("tp1"),
    "tp2": _volume("tp2"),
    "tp2-snap": _volume("tp2-snap", readonly=True, sticky=True),
    "tp3": _volume("tp3"),
    "pvc-6fc1fe2d-25f4-40b0-a616-04c019572154": _volume(
        "pvc-6fc1fe2d-25f4-40b0-a616-04c019572154"
    ),
    "pvc-34d0f15c-65b9-4229-8b3e-b7bb912e382f": _volume(
        "pvc-34d0f15c-65b9-4229-8b3e-b7bb912e382f", shared=True
    ),
}

EXPECTED_ATTRIBUTES = {
    "tp1": [],
    "tp2": [],
    "tp2-snap": ["read-only", "sticky"],
    "tp3": [],
    "pvc-6fc1fe2d-25f4-40b0-a616-04c019572154": [],
    "pvc-34d0f15c-65b9-4229-8b3e-b7bb912e382f": [],
}

EXPECTED_SHARED = {
    "tp1": "false",
    "tp2": "false",
    "tp2-snap": "false",
    "tp3": "false",
    "pvc-6fc1fe2d-25f4-40b0-a616-04c019572154": "false",
    "pvc-34d0f15c-65b9-4229-8b3e-b7bb912e382f": "true",
}


@pytest.mark.parametrize("name", sorted(VOLUMES))
def test_boolean_attributes(name):
    assert boolean_attributes(VOLUMES[name]) == EXPECTED_ATTRIBUTES[name]


@pytest.mark.parametrize("name", sorted(VOLUMES))
def test_shared_string(name):
    assert shared_string(VOLUMES[name]) == EXPECTED_SHARED[name]


def test_sharedv4_wins():
    assert shared_string(_volume("v", shared=True, sharedv4=True)) == "v4"


def test_true_or_false():
    assert true_or_false(True) == "true"
    assert true_or_false(False) == "false"


def test_all_attributes_in_order():
    vol = _volume("v", readonly=True, encrypted=True, sticky=True, compressed=True)
    assert boolean_attributes(vol) == ["read-only", "encrypted", "sticky", "compressed"]


def test_pretty_status():
    vol = Volume.from_dict({"status": "VOLUME_STATUS_DEGRADED"})
    assert pretty_status(vol) == "DEGRADED"
    assert pretty_status(Volume.from_dict({"status": "VOLUME_STATUS_UP"})) == "UP"


@pytest.mark.parametrize(
    "state, attach, has_node, expected",
    [
        (VolumeState.ATTACHED, AttachState.EXTERNAL, True, "on " + HOST),
        (VolumeState.ATTACHED, AttachState.INTERNAL, True, "Detached"),
        (VolumeState.ATTACHED, AttachState.EXTERNAL, False, "Attached"),
        (VolumeState.DETATCHING, AttachState.EXTERNAL, True, "Was on " + HOST),
        (VolumeState.DETATCHING, AttachState.EXTERNAL, False, "Detaching"),
        (VolumeState.DETACHED, AttachState.EXTERNAL, True, "Detached"),
        (VolumeState.AVAILABLE, AttachState.EXTERNAL, False, "Detached"),
    ],
)
def test_attached_state(state, attach, has_node, expected):
    vol = Volume(id="v", state=state, attached_state=attach)
    node = StorageNode(id="n", hostname=HOST) if has_node else None
    assert attached_state(vol, node) == expected


@pytest.mark.parametrize(
    "update",
    [
        VolumeSpecUpdate(ha_level=2, size=10),
        VolumeSpecUpdate(ha_level=1, shared=True),
        VolumeSpecUpdate(ha_level=3, sticky=True),
    ],
)
def test_validate_rejects_halevel_combinations(update):
    with pytest.raises(VolumeSpecError, match="Invalid halevel flag combination"):
        validate_volume_spec(update)


@pytest.mark.parametrize(
    "update",
    [
        VolumeSpecUpdate(ha_level=2),
        VolumeSpecUpdate(size=10, shared=True, sticky=True),
        VolumeSpecUpdate(),
    ],
)
def test_validate_accepts(update):
    assert validate_volume_spec(update) is update
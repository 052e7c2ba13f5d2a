from datetime import datetime, timedelta, timezone

import pytest

from pxcli.alertops import (
    AlertQueryKind,
    CliAlertInputs,
    PxAlertOps,
    alert_resource_types,
    parse_severity,
)
from pxcli.alerts import AlertType, type_to_spec
from pxcli.api import Alert, ResourceType, SeverityType
from pxcli.errors import PxError


class FakeAlertsClient:
    def __init__(self, alerts=None, fail=False):
        self.alerts = alerts or {}
        self.fail = fail
        self.enumerated = []
        self.deleted = []

    def enumerate_with_filters(self, queries):
        if self.fail:
            raise RuntimeError("unreachable")
        self.enumerated.append(list(queries))
        return list(self.alerts.get(queries[0].resource_type, []))

    def delete(self, queries):
        if self.fail:
            raise RuntimeError("unreachable")
        self.deleted.append(list(queries))


def _at(seconds):
    return datetime(2021, 5, 1, tzinfo=timezone.utc) + timedelta(seconds=seconds)


def test_alert_resource_types():
    assert alert_resource_types("node") == [ResourceType.NODE]
    assert alert_resource_types("all") == [
        ResourceType.VOLUME,
        ResourceType.NODE,
        ResourceType.CLUSTER,
        ResourceType.DRIVE,
    ]
    assert alert_resource_types("bogus") == []


@pytest.mark.parametrize(
    "name, expected",
    [
        ("notify", SeverityType.NOTIFY),
        ("warning", SeverityType.WARNING),
        ("warn", SeverityType.WARNING),
        ("alarm", SeverityType.ALARM),
    ],
)
def test_parse_severity(name, expected):
    assert parse_severity(name) == expected


def test_parse_severity_invalid():
    with pytest.raises(PxError, match="Invalid severity level."):
        parse_severity("loud")


def test_alerts_are_sorted_by_time():
    alerts = [Alert(id=1, timestamp=_at(30)), Alert(id=2, timestamp=_at(10))]
    client = FakeAlertsClient({ResourceType.VOLUME: alerts})
    resp = PxAlertOps(client).get_px_alerts(CliAlertInputs(alert_type="volume"))
    assert [a.id for a in resp.alerts] == [2, 1]
    query = client.enumerated[0][0]
    assert query.kind is AlertQueryKind.RESOURCE_TYPE
    assert query.resource_type is ResourceType.VOLUME


def test_all_queries_each_resource_type():
    client = FakeAlertsClient(
        {
            ResourceType.NODE: [Alert(id=3, timestamp=_at(5))],
            ResourceType.DRIVE: [Alert(id=4, timestamp=_at(1))],
        }
    )
    resp = PxAlertOps(client).get_px_alerts(CliAlertInputs(alert_type="all"))
    assert [q[0].resource_type for q in client.enumerated] == alert_resource_types("all")
    assert [a.id for a in resp.alerts] == [4, 3]


def test_name_maps_are_inverse():
    resp = PxAlertOps(FakeAlertsClient()).get_px_alerts(CliAlertInputs(alert_type="node"))
    assert resp.name_to_id["PXReady"] == AlertType.PX_READY
    for name, alert_id in resp.name_to_id.items():
        assert resp.id_to_name[alert_id] == name
    assert len(resp.name_to_id) == len(type_to_spec())


def test_invalid_type():
    with pytest.raises(PxError, match="Invalid type provided."):
        PxAlertOps(FakeAlertsClient()).get_px_alerts(CliAlertInputs(alert_type="disk"))


def test_invalid_start_time():
    inputs = CliAlertInputs(
        alert_type="all", start_time="yesterday", end_time="2020-01-01T00:00:00Z"
    )
    with pytest.raises(PxError, match="Invaid start-time timestamp format."):
        PxAlertOps(FakeAlertsClient()).get_px_alerts(inputs)


def test_invalid_end_time():
    inputs = CliAlertInputs(
        alert_type="all", start_time="2020-01-01T00:00:00Z", end_time="2020-01-01"
    )
    with pytest.raises(PxError, match="Invaid end-time timestamp format."):
        PxAlertOps(FakeAlertsClient()).get_px_alerts(inputs)


def test_time_span_and_severity_are_sent():
    client = FakeAlertsClient()
    inputs = CliAlertInputs(
        alert_type="cluster",
        start_time="2020-01-01T00:00:00Z",
        end_time="2020-01-02T10:30:00+02:00",
        severity="alarm",
    )
    PxAlertOps(client).get_px_alerts(inputs)
    query = client.enumerated[0][0]
    assert query.time_span.start == datetime(2020, 1, 1, tzinfo=timezone.utc)
    assert query.time_span.end == datetime(
        2020, 1, 2, 10, 30, tzinfo=timezone(timedelta(hours=2))
    )
    assert query.min_severity is SeverityType.ALARM


def test_unknown_alert_id_returns_nothing():
    client = FakeAlertsClient()
    resp = PxAlertOps(client).get_px_alerts(
        CliAlertInputs(alert_type="volume", alert_id="NoSuchAlert")
    )
    assert resp.alerts == []
    assert client.enumerated == []


def test_known_alert_id_queries_alert_type():
    client = FakeAlertsClient()
    PxAlertOps(client).get_px_alerts(
        CliAlertInputs(alert_type="volume", alert_id="VolumeCreateSuccess")
    )
    (query,) = client.enumerated[0]
    assert query.kind is AlertQueryKind.ALERT_TYPE
    assert query.alert_type == AlertType.VOLUME_CREATE_SUCCESS


def test_resource_id_queries_every_alert_type_of_resource():
    client = FakeAlertsClient()
    PxAlertOps(client).get_px_alerts(
        CliAlertInputs(alert_type="drive", resource_id="drive-a")
    )
    queries = client.enumerated[0]
    specs = type_to_spec()
    drive_types = {k for k, s in specs.items() if s.resource_type is ResourceType.DRIVE}
    assert {q.alert_type for q in queries} == drive_types
    assert all(q.resource_id == "drive-a" for q in queries)
    assert all(q.kind is AlertQueryKind.RESOURCE_ID for q in queries)


def test_fetch_failure():
    with pytest.raises(PxError, match="Failed to fetch alerts."):
        PxAlertOps(FakeAlertsClient(fail=True)).get_px_alerts(
            CliAlertInputs(alert_type="node")
        )


def test_delete_all():
    client = FakeAlertsClient()
    PxAlertOps(client).delete_px_alerts("all")
    assert [q[0].resource_type for q in client.deleted] == alert_resource_types("all")
    assert all(q[0].kind is AlertQueryKind.RESOURCE_TYPE for q in client.deleted)


def test_delete_unknown_type_sends_nothing():
    client = FakeAlertsClient()
    PxAlertOps(client).delete_px_alerts("unknown")
    assert client.deleted == []


def test_delete_failure():
    with pytest.raises(PxError, match="Failed to delete alerts"):
        PxAlertOps(FakeAlertsClient(fail=True)).delete_px_alerts("volume")
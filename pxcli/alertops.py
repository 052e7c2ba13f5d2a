"""Querying and deleting cluster alerts."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Protocol

from pxcli.alerts import type_to_spec
from pxcli.api import Alert, ResourceType, SeverityType
from pxcli.errors import PxError
from pxcli.formatting import FormatOutput

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)

_RESOURCE_TYPES_BY_NAME: dict[str, tuple[ResourceType, ...]] = {
    "volume": (ResourceType.VOLUME,),
    "node": (ResourceType.NODE,),
    "cluster": (ResourceType.CLUSTER,),
    "drive": (ResourceType.DRIVE,),
    "all": (
        ResourceType.VOLUME,
        ResourceType.NODE,
        ResourceType.CLUSTER,
        ResourceType.DRIVE,
    ),
}

_SEVERITIES_BY_NAME: dict[str, SeverityType] = {
    "notify": SeverityType.NOTIFY,
    "warning": SeverityType.WARNING,
    "warn": SeverityType.WARNING,
    "alarm": SeverityType.ALARM,
}


@dataclass
class CliAlertInputs(FormatOutput):
    """Filters given on the command line for listing alerts."""

    wide: bool = False
    alert_type: str = ""
    alert_id: str = ""
    start_time: str = ""
    end_time: str = ""
    severity: str = ""
    resource_id: str = ""


class AlertQueryKind(Enum):
    """What an alert query selects on."""

    ALERT_TYPE = "alert_type"
    RESOURCE_ID = "resource_id"
    RESOURCE_TYPE = "resource_type"


@dataclass(frozen=True)
class AlertTimeSpan:
    """An inclusive window of alert timestamps."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class AlertQuery:
    """One filter sent to the alerts service."""

    kind: AlertQueryKind
    resource_type: ResourceType
    alert_type: int = 0
    resource_id: str = ""
    time_span: AlertTimeSpan | None = None
    min_severity: SeverityType | None = None


@dataclass
class AlertResp:
    """Alerts found, with the mapping between alert names and ids."""

    alerts: list[Alert] = field(default_factory=list)
    name_to_id: dict[str, int] = field(default_factory=dict)
    id_to_name: dict[int, str] = field(default_factory=dict)


class AlertsClient(Protocol):
    """The alerts service of a cluster."""

    def enumerate_with_filters(self, queries: Sequence[AlertQuery]) -> Iterable[Alert]:
        """Return the alerts matching any of the queries."""

    def delete(self, queries: Sequence[AlertQuery]) -> None:
        """Delete the alerts matching any of the queries."""


def alert_resource_types(name: str) -> list[ResourceType]:
    """Return the resource types named on the command line, or [] if unknown."""
    return list(_RESOURCE_TYPES_BY_NAME.get(name, ()))


def parse_severity(name: str) -> SeverityType:
    """Return the severity for its command-line name."""
    try:
        return _SEVERITIES_BY_NAME[name]
    except KeyError:
        raise PxError("Invalid severity level.") from None


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tz
    )


def _alert_sort_key(alert: Alert) -> int:
    if alert.timestamp is None:
        return 0
    return math.floor(alert.timestamp.timestamp())


class PxAlertOps:
    """Lists and deletes alerts through an alerts client."""

    def __init__(self, client: AlertsClient) -> None:
        self._client = client

    def get_px_alerts(self, inputs: CliAlertInputs) -> AlertResp:
        """Fetch alerts matching the inputs, sorted by time."""
        time_span = None
        if inputs.start_time and inputs.end_time:
            try:
                start = _parse_rfc3339(inputs.start_time)
            except ValueError:
                raise PxError("Invaid start-time timestamp format.") from None
            try:
                end = _parse_rfc3339(inputs.end_time)
            except ValueError:
                raise PxError("Invaid end-time timestamp format.") from None
            time_span = AlertTimeSpan(start, end)

        min_severity = parse_severity(inputs.severity) if inputs.severity else None

        specs = type_to_spec()
        resp = AlertResp(
            name_to_id={spec.name: int(kind) for kind, spec in specs.items()},
            id_to_name={int(kind): spec.name for kind, spec in specs.items()},
        )

        resource_types = alert_resource_types(inputs.alert_type)
        if not resource_types:
            raise PxError("Invalid type provided.")

        found: list[Alert] = []
        for resource_type in resource_types:
            if inputs.alert_id:
                alert_type = resp.name_to_id.get(inputs.alert_id)
                if alert_type is None:
                    return resp
                queries = [
                    AlertQuery(
                        AlertQueryKind.ALERT_TYPE,
                        resource_type,
                        alert_type=alert_type,
                        time_span=time_span,
                        min_severity=min_severity,
                    )
                ]
            elif inputs.resource_id:
                # The server wants an alert type with a resource id, so ask
                # once for each alert type of this resource.
                queries = [
                    AlertQuery(
                        AlertQueryKind.RESOURCE_ID,
                        resource_type,
                        alert_type=int(kind),
                        resource_id=inputs.resource_id,
                        time_span=time_span,
                        min_severity=min_severity,
                    )
                    for kind, spec in sorted(specs.items())
                    if spec.resource_type == resource_type
                ]
            else:
                queries = [
                    AlertQuery(
                        AlertQueryKind.RESOURCE_TYPE,
                        resource_type,
                        time_span=time_span,
                        min_severity=min_severity,
                    )
                ]
            try:
                found.extend(self._client.enumerate_with_filters(queries))
            except Exception as err:
                raise PxError("Failed to fetch alerts.") from err

        resp.alerts = sorted(found, key=_alert_sort_key)
        return resp

    def delete_px_alerts(self, alert: str) -> None:
        """Delete all alerts of the resource types named by alert."""
        for resource_type in alert_resource_types(alert):
            query = AlertQuery(AlertQueryKind.RESOURCE_TYPE, resource_type)
            try:
                self._client.delete([query])
            except Exception as err:
                raise PxError("Failed to delete alerts") from err
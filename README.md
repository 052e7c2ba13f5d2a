# pxcli

Python helpers for working with a storage cluster from the client side.
The package covers inspecting volumes, storage nodes and the pods that use
them, querying and deleting alerts, reading and updating access roles, and
printing results as plain text, aligned tables, JSON or YAML.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Modules

- `pxcli.errors`: RPC status handling. `RpcError` carries an `RpcStatus`
  (a `StatusCode` and a message). `from_error` returns the status of any
  exception. `px_error` and `px_error_message` build a `PxError` whose text
  is meant for the user, and `print_px_error_messagef` writes one to the
  error stream. `is_error_not_found` and `is_error_permission_denied`
  classify a failure.
- `pxcli.output`: `printf` and `eprintf` write to the current output and
  error streams; `redirect_output` is a context manager that sends them
  elsewhere for a block. `to_json`, `to_yaml`, `print_json` and
  `print_yaml` serialise dataclasses, objects with a `to_dict` method, or
  plain data. `Table` lays out rows in aligned columns, with `add_line`,
  `add_map`, `add_array`, `render` and `print`.
- `pxcli.formatting`: `FormatOutput` and `DefaultFormatOutput`.
  `get_formatted_output` renders an object in the format named by its
  `format_type` (`OutputFormat.WIDE`, `JSON` or `YAML`; anything else
  selects the default), and `print_formatted` prints it.
- `pxcli.fix`: `fix_comma_based_string_slice_input` rejoins values that a
  command-line parser split on commas.
- `pxcli.wait`: `wait_for(timeout, period, f)` calls `f` every `period`
  seconds while it returns true. It raises `WaitTimeoutError` once
  `timeout` seconds have passed. Exceptions from `f` propagate.
- `pxcli.sigint`: `SigIntManager` calls a handler once on the first
  SIGINT or SIGTERM. Use `start`/`stop`, or use it as a context manager.
  Either way the previous handlers are restored on stop.
- `pxcli.status`: `sdk_status_to_pretty_string` turns a status name or
  enum member into a readable label (`STATUS_OK` becomes `Ready`).
- `pxcli.api`: the data model. It holds `Volume`, `VolumeLocator`,
  `VolumeSpec`, `ReplicaSet`, `StorageNode`, `StoragePool`,
  `VolumeSpecUpdate`, `Stats`, `Alert`, `Rule` and `Role`, and the enums
  `SeverityType`, `ResourceType`, `VolumeState`, `AttachState` and
  `VolumeStatus`. `Volume.from_dict` and `StorageNode.from_dict` build
  objects from decoded JSON. Enum fields accept numbers, short names or
  full wire names such as `VOLUME_STATE_ATTACHED`.
- `pxcli.alerts`: the `AlertType` catalogue. `type_to_spec()` returns a
  read-only mapping to `AlertSpec` (severity, resource type, description,
  name). The display names come from `resource_type_string` and
  `severity_string`.
- `pxcli.alertops`: `PxAlertOps` builds `AlertQuery` filters from
  `CliAlertInputs` (resource type, alert name, resource id, RFC 3339 time
  span, minimum severity). It sends them to an `AlertsClient` and returns
  an `AlertResp` sorted by time. `delete_px_alerts` deletes by resource
  type.
- `pxcli.volumes`: `PxOps` wraps a volume client and a node client.
  `Volumes` fetches the volumes chosen by a `VolumeSelector` once and then
  caches them.
- `pxcli.nodes`: `Nodes` caches storage nodes by id.
  `get_replication_info` summarises the replica sets of a volume and its
  replication status (`UP`, `Detached`, `Degraded`, `Resync`,
  `Not in quorum`, `Restore`). `get_node_spec` and `new_nodes_for_volumes`
  collect every node a volume refers to. The label and capacity helpers
  are `storage_node_version`, `storage_node_os`,
  `storage_node_kernel_version`, `total_capacity` and `total_capacity_gi`.
- `pxcli.pods`: `Pods` fetches pods through a `ClusterOps`. It finds those
  using a volume's claim, and `container_info_for_volume` lists the
  containers that mount the volume or use it as a device.
- `pxcli.volume_common`: one-line summaries of a volume:
  `shared_string`, `true_or_false`, `boolean_attributes`, `pretty_status`
  and `attached_state`. `validate_volume_spec` raises `VolumeSpecError`
  for update fields that cannot be combined.
- `pxcli.authops`: `AuthOps` reads and updates roles through a
  `RoleClient`. `ROLE_GUEST_ENABLED` and `ROLE_GUEST_DISABLED` are the two
  standard guest roles.

## Examples

```python
from pxcli.formatting import DefaultFormatOutput, OutputFormat, get_formatted_output

out = DefaultFormatOutput(cmd="Create", desc="Volume created", ids=["vol1"])
out.format_type = OutputFormat.JSON
print(get_formatted_output(out))
# {
#   "cmd": "Create",
#   "desc": "Volume created",
#   "id": [
#     "vol1"
#   ]
# }
```

```python
from pxcli.fix import fix_comma_based_string_slice_input

fix_comma_based_string_slice_input(["a", "b", "c"], ["-f", "a", "-f", "b,c"])
# ['a', 'b,c']
```

## What the package does not do

- It does not connect to a cluster itself. `PxOps`, `PxAlertOps`,
  `AuthOps` and `Pods` work through client objects that you supply: a
  volume client, a node client, an `AlertsClient`, a `RoleClient` and a
  `ClusterOps`.
- It has no command-line program and no interactive terminal screen. It is
  a library of building blocks for such tools.
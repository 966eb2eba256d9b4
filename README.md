# tsnservice

Builds configuration for Time-Sensitive Networking (TSN) switches and keeps
it in a key/value store.

## What it covers

- **gNMI messages.** `tsnservice.gnmi` defines `PathElem`, `Path`,
  `TypedValue` (tagged by `ValueKind`), `Update` and `SetRequest`. It has
  helpers that extend a path by one element with zero to three keys
  (`path_down_0_keys` … `path_down_3_keys`, `path_to_bridge`), wrap scalars
  (`string_value`, `int_value`, `uint_value`, `bool_value`, `bytes_value`) and
  build an update (`make_update`). `int_value` and `uint_value` raise
  `ValueError` for numbers that do not fit in 64 bits.
- **Schema trees.** `tsnservice.schema_tree.SchemaTree` is a node of a
  device's configuration tree. The module finds children by name, by
  namespace or by one to three list keys. It also looks up bridges, bridge
  ports, component ids and MST ids, and walks up through parents. A lookup
  that finds nothing returns an empty `SchemaTree`.
- **Tree and path together.** `tsnservice.composite` moves one level down a
  schema tree and extends the matching gNMI path in the same step.
- **MSTP tables.** Each of these modules checks its values and raises
  `ValueError` for one out of range. It then writes the values into the tree
  and returns the matching `Update` objects:
  - `tsnservice.mstp_port_table`: `set_mstp_port_table`, `update_mstp_port_table`
  - `tsnservice.mstp_table`: `set_mstp_table`
  - `tsnservice.mstp_cist_table`: `set_mstp_cist_table`, `set_default_mstp_cist_table`
  - `tsnservice.mstp_cist_port_table`: `set_mstp_cist_port_table`, `set_default_mstp_cist_port_table`
  - `tsnservice.mstp_config_table`: `set_mstp_config_table`, `set_default_mstp_config_table`
  - `tsnservice.mstp_fid_table`: `set_fid_to_msti_v2_table`

  A value is written only into a node the tree already has. When the entry is
  missing, the value goes into a detached empty node, and the update is built
  all the same. `set_default_mstp_config_table` uses a format selector of 0.
  That is outside the accepted range, so it always raises.
- **Records.** `tsnservice.models` defines the records: topology (`Topology`,
  `Node`, `Port`, `Link` and their properties), schedule (`Schedule`,
  `TrafficClass`) and gate control list (`ConfigMap`, `GclConfiguration`).
  Each converts to and from plain dictionaries with `to_dict` / `from_dict`.
  `from_dict` accepts snake or camel case keys. `Topology.describe()` returns
  a readable listing.
- **Gate control lists.** `tsnservice.gcl` turns a schedule and a topology into
  a `GclConfiguration`, with one entry per port of every node. It also builds
  updates for the gate parameters of a port: gate states, control-list
  entries, time intervals, the admin cycle time and the base time.
- **Schedules.** `tsnservice.optimizer` has three functions:
  - `load_schedule` parses a schedule from YAML.
  - `create_default_schedule` reads a YAML file and stores the schedule under
    `DEFAULT_SCHEDULE_ID`. By default it reads
    `configs/schedules/default-schedule.yaml`, relative to the working
    directory.
  - `calculate_configuration` applies the stored default schedule to a
    topology.
- **Storage.** `tsnservice.store.ConfigStore` stores and loads requests,
  schedules, configurations, topology nodes and links, and device
  configuration trees. Values are JSON. Dotted names become slash-separated
  keys (`urn_to_key`). A missing key raises `KeyNotFoundError`, and a value
  that cannot be decoded raises `StoreError`. It works on any
  `KeyValueBackend`; `MemoryBackend` is the one included.
- **Notifications.** `tsnservice.handler.calculate_configuration` fetches each
  named request, reads the topology and calculates a configuration. It stores
  the result under a fresh UUID and returns that id.
  `tsnservice.server.NotificationServer` exposes `calc_config` and the MSTP
  update entry points. `ConfigNotificationService` acknowledges configuration
  events.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install .[test]
```

## Example

```python
from tsnservice import handler
from tsnservice.models import Schedule, TrafficClass
from tsnservice.optimizer import DEFAULT_SCHEDULE_ID
from tsnservice.store import ConfigStore, MemoryBackend

store = ConfigStore(MemoryBackend())
store.store_schedule(
    Schedule(gating_cycle=1.0, traffic_classes=[TrafficClass("best-effort", 100)]),
    DEFAULT_SCHEDULE_ID,
)
conf_id = handler.calculate_configuration(store, [])
print(store.get_configuration(conf_id))
```

A schedule file for `load_schedule` or `create_default_schedule` looks like this:

```yaml
gatingCycle: 1.0
trafficClasses:
  - name: isochronous
    assignedPortion: 40
  - name: best-effort
    assignedPortion: 60
```

Setting an MSTP port table entry:

```python
from tsnservice.schema_tree import SchemaTree
from tsnservice.mstp_port_table import set_mstp_port_table

trees, updates = set_mstp_port_table(SchemaTree(), 3, 2000, 1, 0, 5, "192.0.2.10")
```

## What it does not do

- It runs no network server. `NotificationServer` and
  `ConfigNotificationService` are plain classes for a transport layer to call.
- It does not send updates to switches. The `Update` objects are only built
  and returned.
- It has no client for an external key/value database. To use one, implement
  `KeyValueBackend`.
- Of the MSTP update entry points on `NotificationServer`, only
  `update_config_mstp_port_table` does work: it validates the settings and
  builds the updates. The others only log the request.

## Running the tests

```
pytest
```
import json

import pytest

from tsnservice.models import (
    ConfigMap,
    GclConfiguration,
    Link,
    Node,
    NodeType,
    Schedule,
    TrafficClass,
)
from tsnservice.schema_tree import SchemaTree
from tsnservice.store import (
    ConfigStore,
    KeyNotFoundError,
    MemoryBackend,
    SchemaEntry,
    StoreError,
    tree_from_entries,
    tree_to_entries,
    urn_to_key,
)


@pytest.fixture
def store():
    return ConfigStore(MemoryBackend())


def _sample_tree():
    root = SchemaTree(name="data")
    interfaces = root.add_child(
        SchemaTree(name="interfaces", namespace="urn:ietf:params:xml:ns:yang:ietf-interfaces")
    )
    interface = interfaces.add_child(SchemaTree(name="interface"))
    interface.add_child(SchemaTree(name="name", value="eth0"))
    interface.add_child(SchemaTree(name="enabled", value="true"))
    return root


def _put_json(store, key, data):
    store.backend.put(key, json.dumps(data).encode())


def test_urn_to_key_replaces_dots():
    assert urn_to_key("configurations.schedules.default_schedule") == (
        "configurations/schedules/default_schedule"
    )


def test_memory_backend_prefix_is_sorted_and_filtered():
    backend = MemoryBackend()
    backend.put("b/2", b"x")
    backend.put("a/1", b"y")
    backend.put("b/1", b"z")
    assert backend.get_prefix("b/") == [("b/1", b"z"), ("b/2", b"x")]
    assert backend.get("c") is None


def test_configuration_round_trip(store):
    sched = Schedule(gating_cycle=1.0, traffic_classes=[TrafficClass("best-effort", 100)])
    config = GclConfiguration(configs=[ConfigMap("sw1.Port1", sched)])
    store.store_configuration(config, "abc")
    assert store.get_configuration("abc") == config
    assert store.backend.get("configurations/tsn-configuration/abc") is not None


def test_missing_key_raises(store):
    with pytest.raises(KeyNotFoundError, match="key not found: configurations/schedules/nope"):
        store.get_schedule("nope")


def test_schedule_round_trip_from_record_and_bytes(store):
    sched = Schedule(gating_cycle=2.0, traffic_classes=[TrafficClass("isochronous", 50)])
    store.store_schedule(sched, "one")
    store.store_schedule(json.dumps(sched.to_dict()).encode(), "two")
    assert store.get_schedule("one") == sched
    assert store.get_schedule("two") == sched


def test_undecodable_schedule_raises(store):
    store.backend.put("configurations/schedules/bad", b"not json")
    with pytest.raises(StoreError):
        store.get_schedule("bad")


def test_request_data(store):
    _put_json(store, "streams/requests/r1", {"streams": []})
    assert store.get_request_data("r1") == {"streams": []}


def test_get_all_configurations_skips_invalid(store):
    config = GclConfiguration(configs=[ConfigMap("a.b")])
    store.store_configuration(config, "good")
    store.backend.put("configurations/tsn-configuration/bad", b"{{")
    assert store.get_all_configurations() == [config]


def test_topology_collects_endnodes_bridges_and_links(store):
    _put_json(store, "endnodes/es1", Node(name="es1", type=NodeType.END_STATION).to_dict())
    _put_json(store, "bridges/sw1", Node(name="sw1").to_dict())
    _put_json(store, "links/l1", Link(id="l1", source_port="es1.P1", target_port="sw1.P1").to_dict())
    topo = store.get_topology()
    assert [n.name for n in topo.nodes] == ["es1", "sw1"]
    assert [link.id for link in topo.links] == ["l1"]


def test_get_nodes_raises_on_bad_entry(store):
    store.backend.put("bridges/x", b"[1]")
    with pytest.raises(StoreError):
        store.get_nodes("bridges")


def test_get_links_stops_at_first_bad_entry(store):
    _put_json(store, "links/a", Link(id="a").to_dict())
    store.backend.put("links/b", b"broken")
    _put_json(store, "links/c", Link(id="c").to_dict())
    assert [link.id for link in store.get_links("links")] == ["a"]


def test_topology_keeps_nodes_before_a_bad_one(store):
    _put_json(store, "bridges/a", Node(name="a").to_dict())
    store.backend.put("bridges/b", b"broken")
    assert [n.name for n in store.get_topology().nodes] == ["a"]


def test_tree_to_entries_order():
    entries = tree_to_entries(_sample_tree())
    assert entries[0] == SchemaEntry(name="data", tag="start")
    assert entries[-1] == SchemaEntry(name="data", tag="end")
    assert [e.tag for e in entries].count("start") == [e.tag for e in entries].count("end")
    assert SchemaEntry(name="name", tag="start", value="eth0") in entries


def test_tree_round_trip_through_entries():
    tree = _sample_tree()
    rebuilt = tree_from_entries(tree_to_entries(tree))
    assert rebuilt == tree
    assert rebuilt.children[0].children[0].parent is rebuilt.children[0]


def test_tree_from_entries_without_data_root_returns_anonymous_root():
    entries = tree_to_entries(SchemaTree(name="bridges", namespace="ns"))
    root = tree_from_entries(entries)
    assert root.name == ""
    assert [c.name for c in root.children] == ["bridges"]


def test_unbalanced_entries_raise():
    with pytest.raises(StoreError):
        tree_from_entries([SchemaEntry(name="x", tag="end")])


def test_device_config_round_trip(store):
    tree = _sample_tree()
    store.store_device_config("10.0.0.1", tree)
    assert store.get_device_config("10.0.0.1") == tree
    assert store.backend.get("configurations/10/0/0/1/config") is not None


def test_missing_device_config_raises(store):
    with pytest.raises(KeyNotFoundError):
        store.get_device_config("10.0.0.9")
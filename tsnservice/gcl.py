"""Gate control list configurations and the gNMI updates that program them."""

from __future__ import annotations

import struct
from typing import Iterable

from tsnservice import gnmi
from tsnservice.models import ConfigMap, GclConfiguration, Schedule, Topology

INTERFACES_NAMESPACE = "urn:ietf:params:xml:ns:yang:ietf-interfaces"
SCHED_NAMESPACE = "urn:ieee:std:802.1Q:yang:ieee802-dot1q-sched"

ALL_GATES_OPEN = 255
CYCLE_TIME_DENOMINATOR = 1000

_GATE_STATES = {
    "isochronous": 128,
    "cyclic-sync": 64,
    "cyclic-async": 32,
    "alarms-events": 16,
    "config-diag": 8,
    "network-control": 4,
    "best-effort": 3,
}


def _f32(number: float) -> float:
    """Round ``number`` to single precision."""
    return struct.unpack("f", struct.pack("f", number))[0]


def _gate_parameters_path(port: str) -> list[gnmi.PathElem]:
    path = gnmi.path_down_1_key(None, "interfaces", "namespace", INTERFACES_NAMESPACE)
    path = gnmi.path_down_1_key(path, "interface", "name", port)
    return gnmi.path_down_1_key(path, "gate-parameters", "namespace", SCHED_NAMESPACE)


def _leaf_update(
    port: str,
    device_ip: str,
    names: Iterable[str],
    value: gnmi.TypedValue,
    list_index: int | None = None,
) -> gnmi.Update:
    path = _gate_parameters_path(port)
    if list_index is not None:
        path = gnmi.path_down_1_key(path, "admin-control-list", "index", str(list_index))
    for name in names:
        path = gnmi.path_down_0_keys(path, name)
    return gnmi.make_update(device_ip, path, value)


def create_configuration_from_schedule(
    schedule: Schedule, topology: Topology
) -> GclConfiguration:
    """One entry per port of every node, each carrying ``schedule``."""
    return GclConfiguration(
        configs=[
            ConfigMap(node_port=f"{node.name}.{port.name}", sched=schedule)
            for node in topology.nodes
            for port in node.ports
        ]
    )


def _split_port(endpoint: str) -> tuple[str, str]:
    parts = endpoint.split(".")
    if len(parts) < 2:
        raise ValueError(f"link endpoint {endpoint!r} is not of the form device.port")
    return parts[0], parts[1]


def find_all_ports_on_devices(topology: Topology) -> dict[str, list[str]]:
    """Map every device named by a link to the ports its links use."""
    ports: dict[str, list[str]] = {}
    for link in topology.links:
        src_device, src_port = _split_port(link.source_port)
        dst_device, dst_port = _split_port(link.target_port)
        ports.setdefault(src_device, []).append(src_port)
        ports.setdefault(dst_device, []).append(dst_port)
    return ports


def final_updates(port: str, device_ip: str) -> list[gnmi.Update]:
    """Cycle time extension, base time and config-change updates."""
    return [
        _leaf_update(port, device_ip, ["admin-cycle-time-extension"], gnmi.uint_value(0)),
        _leaf_update(port, device_ip, ["admin-base-time", "seconds"], gnmi.string_value("0")),
        _leaf_update(
            port, device_ip, ["admin-base-time", "fractional-seconds"], gnmi.string_value("0")
        ),
        _leaf_update(port, device_ip, ["config-change"], gnmi.bool_value(True)),
    ]


def status_change_updates(
    port: str, device_ip: str, traffic_class_count: int
) -> list[gnmi.Update]:
    """Gate-enabled, initial gate states and control-list length updates."""
    return [
        _leaf_update(port, device_ip, ["gate-enabled"], gnmi.bool_value(True)),
        _leaf_update(port, device_ip, ["admin-gate-states"], gnmi.uint_value(ALL_GATES_OPEN)),
        _leaf_update(
            port,
            device_ip,
            ["admin-control-list-length"],
            gnmi.uint_value(traffic_class_count),
        ),
    ]


def gcl_updates(schedule: Schedule, port: str, device_ip: str) -> list[gnmi.Update]:
    """Three control-list updates for every traffic class of ``schedule``."""
    updates: list[gnmi.Update] = []
    for index, traffic_class in enumerate(schedule.traffic_classes):
        updates.append(
            _leaf_update(
                port,
                device_ip,
                ["operation-name"],
                gnmi.string_value("set-gate-states"),
                index,
            )
        )
        updates.append(
            _leaf_update(
                port,
                device_ip,
                ["sgs-params", "gate-states-value"],
                gnmi.uint_value(gate_states_value(traffic_class.name)),
                index,
            )
        )
        updates.append(
            _leaf_update(
                port,
                device_ip,
                ["sgs-params", "time-interval-value"],
                gnmi.uint_value(
                    interval_ns(traffic_class.assigned_portion, schedule.gating_cycle)
                ),
                index,
            )
        )
    return updates


def gate_states_value(traffic_class_name: str) -> int:
    """Gate bitmask for a predefined traffic class; 0 closes every gate."""
    return _GATE_STATES.get(traffic_class_name, 0)


def interval_ns(assigned_percentage: int, gating_cycle: float) -> int:
    """Nanoseconds of a cycle given in milliseconds assigned to a percentage."""
    cycle_ns = _f32(_f32(gating_cycle) * 1000000)
    share = _f32(_f32(float(assigned_percentage)) / 100)
    interval = _f32(cycle_ns * share)
    if interval < 0:
        raise ValueError(f"negative interval {interval}")
    return int(interval)


def admin_cycle_time_updates(
    gating_cycle: float, port: str, device_ip: str
) -> list[gnmi.Update]:
    """Cycle time as a numerator over a denominator of 1000 (milliseconds)."""
    return [
        _leaf_update(
            port,
            device_ip,
            ["admin-cycle-time", "numerator"],
            gnmi.int_value(int(gating_cycle)),
        ),
        _leaf_update(
            port,
            device_ip,
            ["admin-cycle-time", "denominator"],
            gnmi.int_value(CYCLE_TIME_DENOMINATOR),
        ),
    ]
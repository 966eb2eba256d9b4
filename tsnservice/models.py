"""Topology, schedule and gate-control-list records."""

import enum
import types
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Union, get_args, get_origin


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _plain(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _convert(tp: Any, value: Any) -> Any:
    if value is None:
        return None
    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        return _convert(args[0], value)
    if origin is list:
        (item_type,) = get_args(tp)
        if not isinstance(value, list):
            raise TypeError(f"expected a list, got {type(value).__name__}")
        return [_convert(item_type, item) for item in value]
    if isinstance(tp, type) and issubclass(tp, enum.Enum):
        return tp(value)
    if isinstance(tp, type) and issubclass(tp, _Record):
        return tp.from_dict(value)
    return tp(value)


class _Record:
    """Conversion between records and plain dictionaries."""

    def to_dict(self) -> dict:
        """The record as nested plain data."""
        return _plain(self)

    @classmethod
    def from_dict(cls, data: dict):
        """Build a record from plain data; keys may be snake or camel case."""
        if not isinstance(data, dict):
            raise TypeError(f"expected a mapping for {cls.__name__}")
        kwargs = {}
        for f in fields(cls):
            for key in (f.name, _camel(f.name)):
                if key in data:
                    kwargs[f.name] = _convert(f.type, data[key])
                    break
        return cls(**kwargs)


class NodeType(enum.Enum):
    """The role of a node in the network."""

    BRIDGE = "BRIDGE"
    END_STATION = "END_STATION"
    BRIDGED_END_STATION = "BRIDGED_END_STATION"


@dataclass
class BridgeProperties(_Record):
    processing_delay_ns: int = 0


@dataclass
class EndStationProperties(_Record):
    application_type: str = ""
    function: str = ""


@dataclass
class BridgedEndStationProperties(_Record):
    processing_delay_ns: int = 0


@dataclass
class NodeProperties(_Record):
    bridge: BridgeProperties | None = None
    end_station: EndStationProperties | None = None
    bridged_end_station: BridgedEndStationProperties | None = None


@dataclass
class PortCapabilities(_Record):
    port_speed: int = 0


@dataclass
class Port(_Record):
    id: str = ""
    name: str = ""
    capabilities: PortCapabilities | None = field(default_factory=PortCapabilities)
    number_of_queues: int = 0


@dataclass
class Node(_Record):
    name: str = ""
    type: NodeType = NodeType.BRIDGE
    ports: list[Port] = field(default_factory=list)
    properties: NodeProperties | None = None


@dataclass
class Link(_Record):
    id: str = ""
    source_node: str = ""
    target_node: str = ""
    source_port: str = ""
    target_port: str = ""
    propagation_delay_ns: int = 0
    bandwidth: int = 0


@dataclass
class Topology(_Record):
    nodes: list[Node] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)

    def describe(self) -> str:
        """A readable listing of every node, port and link."""
        lines = ["Nodes:"]
        for node in self.nodes:
            lines.append(f"\tType: {node.type.name}")
            lines.append(f"\tName: {node.name}")
            props = node.properties
            if props is not None and props.bridge is not None:
                lines.append(f"\tProcessing delay (ns): {props.bridge.processing_delay_ns}")
            if props is not None and props.end_station is not None:
                lines.append(f"\tApplication type: {props.end_station.application_type}")
                lines.append(f"\tFunction: {props.end_station.function}")
            if props is not None and props.bridged_end_station is not None:
                lines.append(
                    f"\tProcessing delay (ns): {props.bridged_end_station.processing_delay_ns}"
                )
            lines.append("\tPorts:")
            for port in node.ports:
                speed = port.capabilities.port_speed if port.capabilities else 0
                lines.append(f"\t\tID: {port.id}")
                lines.append(f"\t\tName: {port.name}")
                lines.append(f"\t\tSpeed: {speed}")
                lines.append(f"\t\tNumber of queues: {port.number_of_queues}")
                lines.append("")
            lines.append("")
        lines.append("Links:")
        for link in self.links:
            lines.append(f"\tID: {link.id}")
            lines.append(f"\tSource node: {link.source_node}")
            lines.append(f"\tTarget node: {link.target_node}")
            lines.append(f"\tSource port: {link.source_port}")
            lines.append(f"\tTarget port: {link.target_port}")
            lines.append(f"\tPropagation delay (ns): {link.propagation_delay_ns}")
            lines.append(f"\tBandwidth (bps): {link.bandwidth}")
            lines.append("")
        return "\n".join(lines) + "\n"


@dataclass
class TrafficClass(_Record):
    name: str = ""
    assigned_portion: int = 0


@dataclass
class Schedule(_Record):
    gating_cycle: float = 0.0
    traffic_classes: list[TrafficClass] = field(default_factory=list)


@dataclass
class ConfigMap(_Record):
    node_port: str = ""
    sched: Schedule | None = None


@dataclass
class GclConfiguration(_Record):
    configs: list[ConfigMap] = field(default_factory=list)
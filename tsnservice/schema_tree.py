"""Schema trees describing device configuration and helpers to walk them."""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from typing import Iterator

BRIDGE_NAMESPACE = "urn:ieee:std:802.1Q:yang:ieee802-dot1q-bridge"
MSTP_NAMESPACE = "urn:ietf:params:xml:ns:yang:smiv2:ieee8021-mstp"

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass
class SchemaTree:
    """A node of a configuration tree: a directory or a leaf with a value."""

    name: str = ""
    namespace: str = ""
    children: list[SchemaTree] = field(default_factory=list)
    parent: SchemaTree | None = field(default=None, repr=False, compare=False)
    value: str = ""

    def add_child(self, child: SchemaTree) -> SchemaTree:
        """Attach ``child`` under this node and return it."""
        child.parent = self
        self.children.append(child)
        return child

    def _ancestors(self) -> Iterator[SchemaTree]:
        node: SchemaTree | None = self
        while node is not None:
            yield node
            node = node.parent


def _parse_int32(text: str) -> int:
    """Parse a decimal int32; malformed text gives 0, overflow saturates."""
    if not _DECIMAL.fullmatch(text):
        return 0
    return max(_INT32_MIN, min(_INT32_MAX, int(text)))


def one_level_down(root: SchemaTree, name: str) -> SchemaTree:
    """First child named ``name``, or an empty tree."""
    return next((c for c in root.children if c.name == name), SchemaTree())


def all_instances(root: SchemaTree, name: str) -> list[SchemaTree]:
    """All children named ``name``."""
    return [c for c in root.children if c.name == name]


def one_level_down_1_key(root: SchemaTree, name: str, key: str, value: str) -> SchemaTree:
    """First child named ``name`` whose first ``key`` leaf holds ``value``."""
    for entry in root.children:
        if entry.name != name:
            continue
        param = next((p for p in entry.children if p.name == key), None)
        if param is not None and param.value == value:
            return entry
    return SchemaTree()


def one_level_down_namespace(root: SchemaTree, name: str, namespace: str) -> SchemaTree:
    """First child with the given name and namespace, or an empty tree."""
    return next(
        (c for c in root.children if c.name == name and c.namespace == namespace),
        SchemaTree(),
    )


def _matches_keys(entry: SchemaTree, pairs: tuple[tuple[str, str], ...]) -> bool:
    found = 0
    for param in entry.children:
        mismatch = False
        for key, value in pairs:
            if param.name == key:
                if param.value == value:
                    found += 1
                else:
                    mismatch = True
                    break
        if mismatch:
            break
    return found == len(pairs)


def _down_keys(root: SchemaTree, name: str, pairs: tuple[tuple[str, str], ...]) -> SchemaTree:
    return next(
        (e for e in root.children if e.name == name and _matches_keys(e, pairs)),
        SchemaTree(),
    )


def one_level_down_2_keys(
    root: SchemaTree, name: str, key1: str, value1: str, key2: str, value2: str
) -> SchemaTree:
    """First child named ``name`` matching both keys, or an empty tree."""
    return _down_keys(root, name, ((key1, value1), (key2, value2)))


def one_level_down_3_keys(
    root: SchemaTree,
    name: str,
    key1: str,
    value1: str,
    key2: str,
    value2: str,
    key3: str,
    value3: str,
) -> SchemaTree:
    """First child named ``name`` matching all three keys, or an empty tree."""
    return _down_keys(root, name, ((key1, value1), (key2, value2), (key3, value3)))


def bridge_port(root: SchemaTree, port: str) -> SchemaTree:
    """The bridge-port node of interface ``port``."""
    interfaces = one_level_down(root, "interfaces")
    interface = one_level_down_1_key(interfaces, "interface", "name", port)
    return one_level_down(interface, "bridge-port")


def bridge_ports(root: SchemaTree) -> list[SchemaTree]:
    """The bridge-port node of every interface, in interface order."""
    interfaces = one_level_down(root, "interfaces")
    return [
        one_level_down(one_level_down_1_key(interfaces, "interface", "name", port), "bridge-port")
        for port in all_key_values(interfaces, "interface", "name")
    ]


def namespace_root(elem: SchemaTree) -> SchemaTree:
    """Nearest node, ``elem`` included, that carries a namespace."""
    return next((n for n in elem._ancestors() if n.namespace), SchemaTree())


def namespace_root_with_name(elem: SchemaTree, namespace: str) -> SchemaTree:
    """Nearest node, ``elem`` included, with exactly ``namespace``."""
    return next((n for n in elem._ancestors() if n.namespace == namespace), SchemaTree())


def all_key_values(root: SchemaTree, name: str, key: str) -> list[str]:
    """Value of the first ``key`` leaf of each child named ``name``."""
    values = []
    for entry in all_instances(root, name):
        param = next((p for p in entry.children if p.name == key), None)
        if param is not None:
            values.append(param.value)
    return values


def key_value_in_parent(obj: SchemaTree, key: str) -> str:
    """Value of the nearest node named ``key`` walking up from ``obj``."""
    for node in obj._ancestors():
        if node.name == key:
            return node.value
    raise LookupError("did not find the key: " + key)


def key_values_in_parent(obj: SchemaTree, *args: str) -> list[str]:
    """Values of the nodes named by ``args``, met in that order walking up."""
    keys = args
    output: list[str] = []
    for node in obj._ancestors():
        if len(output) == len(keys):
            break
        if node.name == keys[len(output)]:
            output.append(node.value)
    if len(output) + 1 < len(keys):
        raise LookupError("did not find all the keys")
    return output


def has_parameter(root: SchemaTree, parameter: str) -> bool:
    """Whether ``root`` has a child named ``parameter``."""
    return any(c.name == parameter for c in root.children)


def _bridge(root: SchemaTree, bridge_name: str) -> SchemaTree:
    bridges = one_level_down_namespace(root, "bridges", BRIDGE_NAMESPACE)
    return one_level_down_1_key(bridges, "bridge", "name", bridge_name)


def number_of_components_in_bridge(root: SchemaTree, bridge_name: str) -> int:
    """The ``components`` count of a bridge, 0 when absent or malformed."""
    return _parse_int32(one_level_down(_bridge(root, bridge_name), "components").value)


def component_ids_in_bridge(root: SchemaTree, bridge_name: str) -> list[int]:
    """The ids of every component of a bridge."""
    return [
        _parse_int32(param.value)
        for component in all_instances(_bridge(root, bridge_name), "component")
        for param in component.children
        if param.name == "id"
    ]


def all_bridge_names(root: SchemaTree) -> list[str]:
    """Names of all bridges."""
    bridges = one_level_down_namespace(root, "bridges", BRIDGE_NAMESPACE)
    return [
        param.value
        for bridge in bridges.children
        for param in bridge.children
        if param.name == "name"
    ]


def number_of_ports_in_bridge(root: SchemaTree, bridge_name: str) -> int:
    """The ``ports`` count of a bridge, 0 when absent or malformed."""
    return _parse_int32(one_level_down(_bridge(root, bridge_name), "ports").value)


def mstids(root: SchemaTree, bridge_name: str, component_id: str) -> list[int]:
    """The MST ids listed under a component's bridge-mst node."""
    component = one_level_down_1_key(_bridge(root, bridge_name), "component", "id", component_id)
    bridge_mst = one_level_down(component, "bridge-mst")
    return [_parse_int32(child.value) for child in bridge_mst.children]


def bridges_subtree(root: SchemaTree) -> SchemaTree:
    """A copy of the bridges node."""
    return copy.copy(one_level_down_namespace(root, "bridges", BRIDGE_NAMESPACE))


def mstp_subtree(root: SchemaTree) -> SchemaTree:
    """A copy of the ieee8021-mstp node."""
    return copy.copy(one_level_down_namespace(root, "ieee8021-mstp", MSTP_NAMESPACE))


def closest_namespace(elem: SchemaTree) -> str:
    """Namespace of the nearest node, ``elem`` included, that has one."""
    return namespace_root(elem).namespace
"""Walk a schema tree and build the matching gNMI path in one step."""

from __future__ import annotations

from typing import Sequence

from tsnservice import gnmi
from tsnservice import schema_tree as st

INTERFACES_NAMESPACE = "urn:ietf:params:xml:ns:yang:ietf-interfaces"
BRIDGE_NAMESPACE = "urn:ieee:std:802.1Q:yang:ieee802-dot1q-bridge"

PathList = Sequence[gnmi.PathElem] | None
Step = tuple[st.SchemaTree, list[gnmi.PathElem]]


def param_0_keys(node: st.SchemaTree, path: PathList, name: str) -> Step:
    """Child ``name`` of ``node`` and ``path`` extended by it."""
    return st.one_level_down(node, name), gnmi.path_down_0_keys(path, name)


def param_namespace(node: st.SchemaTree, path: PathList, name: str, namespace: str) -> Step:
    """Child ``name`` in ``namespace`` and ``path`` extended by it."""
    return (
        st.one_level_down_namespace(node, name, namespace),
        gnmi.path_down_1_key(path, name, "namespace", namespace),
    )


def _table_entry(node: st.SchemaTree, table: str, entry: str) -> tuple[st.SchemaTree, str]:
    if table:
        return st.one_level_down(node, table), table
    return node, entry


def param_1_key(
    node: st.SchemaTree, path: PathList, table: str, entry: str, key1: str, value1: str
) -> Step:
    """Entry of a table (or list when ``table`` is empty) selected by one key."""
    parent, elem = _table_entry(node, table, entry)
    return (
        st.one_level_down_1_key(parent, entry, key1, value1),
        gnmi.path_down_1_key(path, elem, key1, value1),
    )


def param_2_keys(
    node: st.SchemaTree,
    path: PathList,
    table: str,
    entry: str,
    key1: str,
    value1: str,
    key2: str,
    value2: str,
) -> Step:
    """Entry of a table (or list when ``table`` is empty) selected by two keys."""
    parent, elem = _table_entry(node, table, entry)
    return (
        st.one_level_down_2_keys(parent, entry, key1, value1, key2, value2),
        gnmi.path_down_2_keys(path, elem, key1, value1, key2, value2),
    )


def param_3_keys(
    node: st.SchemaTree,
    path: PathList,
    table: str,
    entry: str,
    key1: str,
    value1: str,
    key2: str,
    value2: str,
    key3: str,
    value3: str,
) -> Step:
    """Entry of a table (or list when ``table`` is empty) selected by three keys."""
    parent, elem = _table_entry(node, table, entry)
    return (
        st.one_level_down_3_keys(parent, entry, key1, value1, key2, value2, key3, value3),
        gnmi.path_down_3_keys(path, elem, key1, value1, key2, value2, key3, value3),
    )


def path_to_bridge(node: st.SchemaTree, port: str) -> Step:
    """The bridge-port node of interface ``port`` and the path to it."""
    tree, path = param_namespace(node, None, "interfaces", INTERFACES_NAMESPACE)
    tree, path = param_1_key(tree, path, "", "interface", "name", port)
    return param_namespace(tree, path, "bridge-port", BRIDGE_NAMESPACE)
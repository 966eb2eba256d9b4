"""Updates for the MSTP CIST port table."""

from __future__ import annotations

from typing import Callable, Union

from tsnservice import composite, gnmi
from tsnservice.schema_tree import MSTP_NAMESPACE, SchemaTree

_TABLE = "ieee8021MstpCistPortTable"
_ENTRY = "ieee8021MstpCistPortEntry"
_PSEUDO_ROOT_ID_LENGTH = 8
_MAX_PATH_COST = 200000000

_Scalar = Union[int, bool, bytes]


def _validate_pseudo_root_id(pseudo_root_id: bytes) -> None:
    if len(pseudo_root_id) != _PSEUDO_ROOT_ID_LENGTH:
        raise ValueError(
            f"Invalid PseudoRootId. PseudoRootId is an array of {len(pseudo_root_id)} "
            "bytes. PseudoRootId should be 8 bytes"
        )


def _validate_path_cost(path_cost: int) -> None:
    if not 0 <= path_cost <= _MAX_PATH_COST:
        raise ValueError(
            f"Invalid adminPathCost. Value:{path_cost}"
            "adminPathCost should be between 0 and 200000000"
        )


def _leaf_text(value: _Scalar) -> str:
    """Render a value the way it is stored in a schema tree leaf."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return "[" + " ".join(str(b) for b in value) + "]"
    return str(value)


def _set_leaf(
    root: SchemaTree,
    leaf: str,
    value: _Scalar,
    wrap: Callable[[_Scalar], gnmi.TypedValue],
    component_id: int,
    port: int,
    device_ip: str,
) -> tuple[SchemaTree, gnmi.Update]:
    tree, path = composite.param_namespace(root, None, "ieee8021-mstp", MSTP_NAMESPACE)
    tree, path = composite.param_2_keys(
        tree,
        path,
        _TABLE,
        _ENTRY,
        "ieee8021MstpCistPortComponentId",
        str(component_id),
        "ieee8021MstpCistPortNum",
        str(port),
    )
    tree, path = composite.param_0_keys(tree, path, leaf)
    tree.value = _leaf_text(value)
    return tree, gnmi.make_update(device_ip, path, wrap(value))


def set_mstp_cist_port_table(
    root: SchemaTree,
    path_cost: int,
    edge_port: bool,
    mac_enabled: bool,
    restricted_role: bool,
    restricted_tcn: bool,
    protocol_migration: bool,
    enable_bpdu_rx: bool,
    enable_bpdu_tx: bool,
    pseudo_root_id: bytes,
    is_l2gp: bool,
    port: int,
    component_id: int,
    device_ip: str,
) -> tuple[list[SchemaTree], list[gnmi.Update]]:
    """Set every CIST port parameter; return the changed nodes and updates."""
    _validate_pseudo_root_id(pseudo_root_id)
    _validate_path_cost(path_cost)

    settings: list[tuple[str, _Scalar, Callable[[_Scalar], gnmi.TypedValue]]] = [
        ("ieee8021MstpCistPortAdminPathCost", path_cost, gnmi.int_value),
        ("ieee8021MstpCistPortAdminEdgePort", edge_port, gnmi.bool_value),
        ("ieee8021MstpCistPortMacEnabled", mac_enabled, gnmi.bool_value),
        ("ieee8021MstpCistPortRestrictedRole", restricted_role, gnmi.bool_value),
        ("ieee8021MstpCistPortRestrictedTcn", restricted_tcn, gnmi.bool_value),
        ("ieee8021MstpCistPortProtocolMigration", protocol_migration, gnmi.bool_value),
        ("ieee8021MstpCistPortEnableBPDURx", enable_bpdu_rx, gnmi.bool_value),
        ("ieee8021MstpCistPortEnableBPDUTx", enable_bpdu_tx, gnmi.bool_value),
        ("ieee8021MstpCistPortPseudoRootId", bytes(pseudo_root_id), gnmi.bytes_value),
        ("ieee8021MstpCistPortIsL2Gp", is_l2gp, gnmi.bool_value),
    ]

    trees: list[SchemaTree] = []
    updates: list[gnmi.Update] = []
    for leaf, value, wrap in settings:
        tree, update = _set_leaf(root, leaf, value, wrap, component_id, port, device_ip)
        trees.append(tree)
        updates.append(update)
    return trees, updates


def set_default_mstp_cist_port_table(
    root: SchemaTree,
    protocol_migration: bool,
    pseudo_root_id: bytes,
    port: int,
    component_id: int,
    device_ip: str,
) -> tuple[list[SchemaTree], list[gnmi.Update]]:
    """Set the CIST port table to its defaults, with BPDU rx and tx enabled."""
    return set_mstp_cist_port_table(
        root,
        0,
        False,
        False,
        False,
        False,
        protocol_migration,
        True,
        True,
        pseudo_root_id,
        False,
        port,
        component_id,
        device_ip,
    )
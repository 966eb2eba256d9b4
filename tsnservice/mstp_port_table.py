"""Updates for the MSTP port table."""

from __future__ import annotations

from tsnservice import composite, gnmi
from tsnservice.schema_tree import MSTP_NAMESPACE, SchemaTree

_TABLE = "ieee8021MstpPortTable"
_ENTRY = "ieee8021MstpPortEntry"


def _validate_priority(priority: int) -> None:
    if not 0 <= priority <= 15:
        raise ValueError(
            f"Invalid mstpPortPriority. Value: {priority}. 0 <= portPriority <= 15"
        )


def _validate_path_cost(path_cost: int) -> None:
    if not 1 <= path_cost <= 200000000:
        raise ValueError(
            f"Invalid mstpPortPathCost. Value: {path_cost}. 1 <= pathCost <= 200000000"
        )


def _set_leaf(
    root: SchemaTree,
    leaf: str,
    value: int,
    component_id: int,
    mstid: int,
    port: int,
    device_ip: str,
) -> tuple[SchemaTree, gnmi.Update]:
    tree, path = composite.param_namespace(root, None, "ieee8021-mstp", MSTP_NAMESPACE)
    tree, path = composite.param_3_keys(
        tree,
        path,
        _TABLE,
        _ENTRY,
        "ieee8021MstpPortComponentId",
        str(component_id),
        "ieee8021MstpPortMstId",
        str(mstid),
        "ieee8021MstpPortNum",
        str(port),
    )
    tree, path = composite.param_0_keys(tree, path, leaf)
    tree.value = str(value)
    return tree, gnmi.make_update(device_ip, path, gnmi.int_value(value))


def set_mstp_port_table(
    root: SchemaTree,
    priority: int,
    path_cost: int,
    component_id: int,
    mstid: int,
    port: int,
    device_ip: str,
) -> tuple[list[SchemaTree], list[gnmi.Update]]:
    """Set port priority and path cost; return the changed nodes and updates."""
    _validate_priority(priority)
    _validate_path_cost(path_cost)
    priority_tree, priority_update = _set_leaf(
        root, "ieee8021MstpPortPriority", priority, component_id, mstid, port, device_ip
    )
    cost_tree, cost_update = _set_leaf(
        root, "ieee8021MstpPortPathCost", path_cost, component_id, mstid, port, device_ip
    )
    return [priority_tree, cost_tree], [priority_update, cost_update]


def update_mstp_port_table(
    priority: int,
    path_cost: int,
    component_id: int,
    port: int,
    mstid: int,
    device_ip: str,
) -> list[gnmi.Update]:
    """Validate the settings and build the port-table updates for a device."""
    _, updates = set_mstp_port_table(
        SchemaTree(), priority, path_cost, component_id, mstid, port, device_ip
    )
    return updates
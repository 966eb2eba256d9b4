"""Updates for the MSTP table."""

from __future__ import annotations

from tsnservice import composite, gnmi
from tsnservice.schema_tree import MSTP_NAMESPACE, SchemaTree


def _validate_bridge_priority(bridge_priority: int) -> None:
    if not 0 <= bridge_priority <= 15:
        raise ValueError(
            f"Invalid MstpTableBridgePriority. Value:{bridge_priority}. "
            "0 <= bridgePriority <= 15"
        )


def _set_bridge_priority(
    root: SchemaTree, bridge_priority: int, msti: int, component_id: int, device_ip: str
) -> tuple[SchemaTree, gnmi.Update]:
    tree, path = composite.param_namespace(root, None, "ieee8021-mstp", MSTP_NAMESPACE)
    tree, path = composite.param_2_keys(
        tree,
        path,
        "ieee8021MstpTable",
        "ieee8021MstpEntry",
        "ieee8021MstpComponentId",
        str(component_id),
        "ieee8021MstpId",
        str(msti),
    )
    tree, path = composite.param_0_keys(tree, path, "ieee8021MstpBridgePriority")
    tree.value = str(bridge_priority)
    return tree, gnmi.make_update(device_ip, path, gnmi.int_value(bridge_priority))


def set_mstp_table(
    root: SchemaTree, bridge_priority: int, mstp_id: int, component_id: int, device_ip: str
) -> tuple[list[SchemaTree], list[gnmi.Update]]:
    """Set the bridge priority; return the changed node and update.

    The entry is addressed with ``component_id`` as its MST id and
    ``mstp_id`` as its component id.
    """
    _validate_bridge_priority(bridge_priority)
    tree, update = _set_bridge_priority(root, bridge_priority, component_id, mstp_id, device_ip)
    return [tree], [update]
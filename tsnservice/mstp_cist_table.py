"""Updates for the MSTP CIST table."""

from __future__ import annotations

from tsnservice import composite, gnmi
from tsnservice.schema_tree import MSTP_NAMESPACE, SchemaTree

DEFAULT_MAX_HOPS = 20


def _validate_max_hops(max_hops: int) -> None:
    if not 6 <= max_hops <= 40:
        raise ValueError(
            f"Invalid MstpCistTableMaxHops. Value:{max_hops}. 6 <= maxHops <= 40"
        )


def _set_max_hops(
    root: SchemaTree, max_hops: int, component_id: int, device_ip: str
) -> tuple[SchemaTree, gnmi.Update]:
    tree, path = composite.param_namespace(root, None, "ieee8021-mstp", MSTP_NAMESPACE)
    tree, path = composite.param_1_key(
        tree,
        path,
        "ieee8021MstpCistTable",
        "ieee8021MstpCistEntry",
        "ieee8021MstpCistComponentId",
        str(component_id),
    )
    tree, path = composite.param_0_keys(tree, path, "ieee8021MstpCistMaxHops")
    tree.value = str(max_hops)
    return tree, gnmi.make_update(device_ip, path, gnmi.int_value(max_hops))


def set_mstp_cist_table(
    root: SchemaTree, max_hops: int, component_id: int, device_ip: str
) -> tuple[list[SchemaTree], list[gnmi.Update]]:
    """Set the CIST max hops; return the changed node and update."""
    _validate_max_hops(max_hops)
    tree, update = _set_max_hops(root, max_hops, component_id, device_ip)
    return [tree], [update]


def set_default_mstp_cist_table(
    root: SchemaTree, component_id: int, device_ip: str
) -> tuple[list[SchemaTree], list[gnmi.Update]]:
    """Set the CIST max hops to its default of 20."""
    return set_mstp_cist_table(root, DEFAULT_MAX_HOPS, component_id, device_ip)
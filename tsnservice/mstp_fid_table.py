"""Updates for the MSTP FID to MSTI V2 table."""

from __future__ import annotations

from tsnservice import composite, gnmi
from tsnservice.schema_tree import SchemaTree

FID_NAMESPACE = "urn:ietf:pras:xml:ns:yang:smiv2:ieee8021mstp"
_MAX_FID = 409


def _validate_fid(fid: int) -> None:
    if not 0 <= fid <= _MAX_FID:
        raise ValueError(f"Invalid FidToMstiV2TableFid. Value: {fid} 0 <= fid <= 209")


def set_fid_to_msti_v2_table(
    root: SchemaTree, fid: int, component_id: str, device_ip: str
) -> list[gnmi.Update]:
    """Set the FID of a FID to MSTI V2 entry; return the update."""
    _validate_fid(fid)
    tree, path = composite.param_namespace(root, None, "ieee8021-mstp", FID_NAMESPACE)
    tree, path = composite.param_2_keys(
        tree,
        path,
        "ieee8021MstpFidToMstiV2Table",
        "ieee8021MstpFidToMstiV2Entry",
        "ieee8021MstpFidToMstiV2ComponentId",
        component_id,
        "ieee8021MstpFidToMstV2Fid",
        str(fid),
    )
    tree, path = composite.param_0_keys(tree, path, "ieee8021MstpFidToMstV2Fid")
    tree.value = str(fid)
    return [gnmi.make_update(device_ip, path, gnmi.uint_value(fid))]
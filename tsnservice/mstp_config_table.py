"""Updates for the MSTP configuration identification table."""

from __future__ import annotations

from tsnservice import composite, gnmi
from tsnservice.schema_tree import MSTP_NAMESPACE, SchemaTree

_TABLE = "ieee8021MstpConfigIdTable"
_ENTRY = "ieee8021MstpConfigIdEntry"
_KEY = "ieee8021MstpConfigIdComponentId"
_MAX_NAME_LENGTH = 32


def _validate_format_selector(format_selector: int) -> None:
    if not 1 <= format_selector <= 200000000:
        raise ValueError(
            f"Invalid MstpConfigTableFormatSelector. Value: {format_selector}. "
            "1 <= formatSelector <= 200000000"
        )


def _validate_configuration_name(name: str) -> None:
    length = len(name.encode("utf-8"))
    if length > _MAX_NAME_LENGTH:
        raise ValueError(
            f"Invalid MstpConfigTableConfigurationName. Value: {name} is {length} "
            "but should be no more than 32 characters"
        )


def _validate_revision_level(revision_level: int) -> None:
    if not 0 <= revision_level <= 65535:
        raise ValueError(
            f"Invalid MstpConfigTableRevisionLevel. Value: {revision_level}. "
            "0 <= revisionLevel <= 65535"
        )


def _set_leaf(
    root: SchemaTree,
    leaf: str,
    text: str,
    value: gnmi.TypedValue,
    component_id: int,
    device_ip: str,
) -> gnmi.Update:
    tree, path = composite.param_namespace(root, None, "ieee8021-mstp", MSTP_NAMESPACE)
    tree, path = composite.param_1_key(tree, path, _TABLE, _ENTRY, _KEY, str(component_id))
    tree, path = composite.param_0_keys(tree, path, leaf)
    tree.value = text
    return gnmi.make_update(device_ip, path, value)


def set_mstp_config_table(
    root: SchemaTree,
    format_selector: int,
    configuration_name: str,
    revision_level: int,
    component_id: int,
    device_ip: str,
) -> list[gnmi.Update]:
    """Set format selector, configuration name and revision level."""
    _validate_format_selector(format_selector)
    _validate_configuration_name(configuration_name)
    _validate_revision_level(revision_level)
    return [
        _set_leaf(
            root,
            "ieee8021MstpConfigIdFormatSelector",
            str(format_selector),
            gnmi.int_value(format_selector),
            component_id,
            device_ip,
        ),
        _set_leaf(
            root,
            "ieee8021MstpConfigurationName",
            configuration_name,
            gnmi.string_value(configuration_name),
            component_id,
            device_ip,
        ),
        _set_leaf(
            root,
            "ieee8021MstpRevisionLevel",
            str(revision_level),
            gnmi.uint_value(revision_level),
            component_id,
            device_ip,
        ),
    ]


def set_default_mstp_config_table(
    root: SchemaTree, configuration_name: str, component_id: int, device_ip: str
) -> list[gnmi.Update]:
    """Set the table with format selector 0 and revision level 0.

    A format selector of 0 is outside the accepted range, so this raises.
    """
    return set_mstp_config_table(root, 0, configuration_name, 0, component_id, device_ip)
"""gNMI message structures and helpers for building configuration updates."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Mapping, Sequence, Union

INTERFACES_NAMESPACE = "urn:ietf:params:xml:ns:yang:ietf-interfaces"
BRIDGE_NAMESPACE = "urn:ieee:std:802.1Q:yang:ieee802-dot1q-bridge"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1


class ValueKind(enum.Enum):
    """The kind of scalar carried by a TypedValue."""

    STRING = "string_val"
    INT = "int_val"
    UINT = "uint_val"
    BOOL = "bool_val"
    BYTES = "bytes_val"


@dataclass
class PathElem:
    """One element of a gNMI path: a name and its keys."""

    name: str
    key: dict[str, str] = field(default_factory=dict)


@dataclass
class Path:
    """A gNMI path addressed to a target device."""

    elem: list[PathElem] = field(default_factory=list)
    target: str = ""


@dataclass(frozen=True)
class TypedValue:
    """A scalar value tagged with its gNMI kind."""

    kind: ValueKind
    value: Union[str, int, bool, bytes]


@dataclass
class Update:
    """A value to be written at a path."""

    path: Path
    val: TypedValue | None = None


@dataclass
class SetRequest:
    """A gNMI set request made of deletions, replacements and updates."""

    prefix: Path | None = None
    delete: list[Path] = field(default_factory=list)
    replace: list[Update] = field(default_factory=list)
    update: list[Update] = field(default_factory=list)


def _extend(
    pre_path: Sequence[PathElem] | None, name: str, keys: Mapping[str, str]
) -> list[PathElem]:
    return [*(pre_path or ()), PathElem(name, dict(keys))]


def path_down_0_keys(pre_path: Sequence[PathElem] | None, name: str) -> list[PathElem]:
    """Return ``pre_path`` extended by one element without keys."""
    return _extend(pre_path, name, {})


def path_down_1_key(
    pre_path: Sequence[PathElem] | None, name: str, key: str, value: str
) -> list[PathElem]:
    """Return ``pre_path`` extended by one element with one key."""
    return _extend(pre_path, name, {key: value})


def path_down_2_keys(
    pre_path: Sequence[PathElem] | None,
    name: str,
    key1: str,
    value1: str,
    key2: str,
    value2: str,
) -> list[PathElem]:
    """Return ``pre_path`` extended by one element with two keys."""
    return _extend(pre_path, name, {key1: value1, key2: value2})


def path_down_3_keys(
    pre_path: Sequence[PathElem] | None,
    name: str,
    key1: str,
    value1: str,
    key2: str,
    value2: str,
    key3: str,
    value3: str,
) -> list[PathElem]:
    """Return ``pre_path`` extended by one element with three keys."""
    return _extend(pre_path, name, {key1: value1, key2: value2, key3: value3})


def path_to_bridge(port: str) -> list[PathElem]:
    """Path: interfaces -> interface[name=port] -> bridge-port."""
    interfaces = path_down_1_key(None, "interfaces", "namespace", INTERFACES_NAMESPACE)
    interface = path_down_1_key(interfaces, "interface", "name", port)
    return path_down_1_key(interface, "bridge-port", "namespace", BRIDGE_NAMESPACE)


def make_update(device_ip: str, path: Sequence[PathElem], value: TypedValue) -> Update:
    """Build an update writing ``value`` at ``path`` on ``device_ip``."""
    return Update(path=Path(elem=list(path), target=device_ip), val=value)


def string_value(value: str) -> TypedValue:
    """Wrap a string."""
    return TypedValue(ValueKind.STRING, str(value))


def int_value(value: int) -> TypedValue:
    """Wrap a signed 64-bit integer."""
    number = int(value)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"integer {number} does not fit in 64 signed bits")
    return TypedValue(ValueKind.INT, number)


def uint_value(value: int) -> TypedValue:
    """Wrap an unsigned 64-bit integer."""
    number = int(value)
    if not 0 <= number <= _UINT64_MAX:
        raise ValueError(f"integer {number} does not fit in 64 unsigned bits")
    return TypedValue(ValueKind.UINT, number)


def bool_value(value: bool) -> TypedValue:
    """Wrap a boolean."""
    return TypedValue(ValueKind.BOOL, bool(value))


def bytes_value(value: bytes) -> TypedValue:
    """Wrap a byte string."""
    return TypedValue(ValueKind.BYTES, bytes(value))
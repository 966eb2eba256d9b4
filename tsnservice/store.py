"""Key/value storage of requests, schedules, topologies and configurations."""

from __future__ import annotations

import abc
import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Iterator, TypeVar

from tsnservice.models import GclConfiguration, Link, Node, Schedule, Topology
from tsnservice.schema_tree import SchemaTree

_log = logging.getLogger(__name__)

_R = TypeVar("_R")

_CONFIGURATION_PREFIX = "configurations.tsn-configuration"
_SCHEDULE_PREFIX = "configurations.schedules"
_REQUEST_PREFIX = "streams.requests"


class StoreError(Exception):
    """A value could not be stored, fetched or decoded."""


class KeyNotFoundError(StoreError, LookupError):
    """No value is stored under a key."""


def urn_to_key(urn: str) -> str:
    """Turn a dotted URN into a slash-separated store key."""
    return urn.replace(".", "/")


class KeyValueBackend(abc.ABC):
    """A key/value store of byte strings."""

    @abc.abstractmethod
    def put(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``."""

    @abc.abstractmethod
    def get(self, key: str) -> bytes | None:
        """The value under ``key``, or None."""

    @abc.abstractmethod
    def get_prefix(self, prefix: str) -> list[tuple[str, bytes]]:
        """All pairs whose key starts with ``prefix``, ordered by key."""


class MemoryBackend(KeyValueBackend):
    """A key/value store held in memory."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}

    def put(self, key: str, value: bytes) -> None:
        self._data[key] = value.encode() if isinstance(value, str) else bytes(value)

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def get_prefix(self, prefix: str) -> list[tuple[str, bytes]]:
        return sorted((k, v) for k, v in self._data.items() if k.startswith(prefix))


@dataclass
class SchemaEntry:
    """One start or end marker of a flattened schema tree."""

    name: str = ""
    tag: str = ""
    namespace: str = ""
    value: str = ""


def _walk(tree: SchemaTree) -> Iterator[SchemaEntry]:
    yield SchemaEntry(tree.name, "start", tree.namespace, tree.value)
    for child in tree.children:
        yield from _walk(child)
    yield SchemaEntry(tree.name, "end")


def tree_to_entries(tree: SchemaTree) -> list[SchemaEntry]:
    """Flatten a tree into start and end entries, depth first."""
    return list(_walk(tree))


def tree_from_entries(entries: list[SchemaEntry]) -> SchemaTree:
    """Rebuild a tree from entries; a ``data`` node is returned as the root."""
    tree = SchemaTree()
    last_node = ""
    for entry in entries:
        if entry.value == "":
            if entry.tag == "end":
                if entry.name != "data":
                    if last_node != "leaf":
                        if tree.parent is None:
                            raise StoreError("unbalanced schema entries")
                        tree = tree.parent
                    last_node = ""
            else:
                tree = tree.add_child(SchemaTree(name=entry.name, namespace=entry.namespace))
        else:
            tree.add_child(SchemaTree(name=entry.name, value=entry.value))
            last_node = "leaf"
    return tree


def _load_json(raw: bytes) -> Any:
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise StoreError(f"malformed stored value: {exc}") from exc


def _decode(raw: bytes, cls: type[_R]) -> _R:
    try:
        return cls.from_dict(_load_json(raw))
    except (ValueError, TypeError, AttributeError, KeyError) as exc:
        raise StoreError(f"cannot decode {cls.__name__}: {exc}") from exc


def _encode(record: Any) -> bytes:
    return json.dumps(record.to_dict()).encode()


class ConfigStore:
    """Typed access to the key/value store used by the service."""

    def __init__(self, backend: KeyValueBackend | None = None) -> None:
        self.backend = backend if backend is not None else MemoryBackend()

    def _put(self, urn: str, data: bytes) -> None:
        self.backend.put(urn_to_key(urn), data)

    def _fetch(self, urn: str) -> bytes:
        key = urn_to_key(urn)
        raw = self.backend.get(key)
        if raw is None:
            raise KeyNotFoundError(f"key not found: {key}")
        return raw

    def _decode_prefix(self, prefix: str, cls: type[_R]) -> Iterator[_R]:
        for _, raw in self.backend.get_prefix(urn_to_key(prefix)):
            yield _decode(raw, cls)

    def get_key_value(self, urn: str) -> dict[str, Any]:
        """The request data stored at ``urn``."""
        data = _load_json(self._fetch(urn))
        if not isinstance(data, dict):
            raise StoreError(f"request data at {urn} is not an object")
        return data

    def get_request_data(self, request_id: str) -> dict[str, Any]:
        """The stream request stored under ``request_id``."""
        return self.get_key_value(f"{_REQUEST_PREFIX}.{request_id}")

    def store_configuration(self, config: GclConfiguration, conf_id: str) -> None:
        """Store a gate-control-list configuration."""
        self._put(f"{_CONFIGURATION_PREFIX}.{conf_id}", _encode(config))

    def get_configuration(self, conf_id: str) -> GclConfiguration:
        """The configuration stored under ``conf_id``."""
        raw = self._fetch(f"{_CONFIGURATION_PREFIX}.{conf_id}")
        _log.info("Retrieved configuration from k/v store")
        return _decode(raw, GclConfiguration)

    def get_all_configurations(self) -> list[GclConfiguration]:
        """Every stored configuration; entries that cannot be decoded are skipped."""
        configs = []
        for key, raw in self.backend.get_prefix(urn_to_key(_CONFIGURATION_PREFIX)):
            try:
                configs.append(_decode(raw, GclConfiguration))
            except StoreError as exc:
                _log.warning("Failed to unmarshal config at key %s: %s", key, exc)
        return configs

    def store_schedule(self, data: Schedule | bytes, sched_id: str) -> None:
        """Store a schedule, given as a record or already encoded."""
        raw = _encode(data) if isinstance(data, Schedule) else bytes(data)
        self._put(f"{_SCHEDULE_PREFIX}.{sched_id}", raw)

    def get_schedule(self, sched_id: str) -> Schedule:
        """The schedule stored under ``sched_id``."""
        return _decode(self._fetch(f"{_SCHEDULE_PREFIX}.{sched_id}"), Schedule)

    def get_nodes(self, prefix: str) -> list[Node]:
        """Every node stored under ``prefix``."""
        return list(self._decode_prefix(prefix, Node))

    def get_links(self, prefix: str) -> list[Link]:
        """Links stored under ``prefix``, up to the first that cannot be decoded."""
        links: list[Link] = []
        try:
            for link in self._decode_prefix(prefix, Link):
                links.append(link)
        except StoreError as exc:
            _log.warning("Failed unmarshaling link: %s", exc)
        return links

    def _nodes_until_failure(self, prefix: str) -> list[Node]:
        nodes: list[Node] = []
        try:
            for node in self._decode_prefix(prefix, Node):
                nodes.append(node)
        except StoreError as exc:
            _log.warning("Failed unmarshaling node: %s", exc)
        return nodes

    def get_topology(self) -> Topology:
        """End nodes, then bridges, and all links."""
        nodes = self._nodes_until_failure("endnodes") + self._nodes_until_failure("bridges")
        return Topology(nodes=nodes, links=self.get_links("links"))

    def store_device_config(self, ip_addr: str, tree: SchemaTree) -> None:
        """Store a device's configuration tree in flattened form."""
        entries = [asdict(entry) for entry in tree_to_entries(tree)]
        self._put(f"configurations.{ip_addr}.config", json.dumps(entries).encode())

    def get_device_config(self, ip_addr: str) -> SchemaTree:
        """The configuration tree stored for a device."""
        data = _load_json(self._fetch(f"configurations.{ip_addr}.config"))
        try:
            entries = [SchemaEntry(**item) for item in data]
        except TypeError as exc:
            raise StoreError(f"malformed schema entries: {exc}") from exc
        return tree_from_entries(entries)
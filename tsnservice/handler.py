"""Handling of requests to calculate a new network configuration."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Iterable

from tsnservice import optimizer
from tsnservice.store import ConfigStore

_log = logging.getLogger(__name__)


def calculate_configuration(store: ConfigStore, ids: Iterable[str]) -> str:
    """Calculate and store a configuration for the given requests.

    Every request must exist in the store. Returns the id under which the new
    configuration was stored.
    """
    requests: list[dict[str, Any]] = []
    for request_id in ids:
        requests.append(store.get_request_data(request_id))
        _log.info("Got request from store with id: %s", request_id)

    topology = store.get_topology()
    _log.info("Successfully requested topology from k/v store!")

    config = optimizer.calculate_configuration(store, topology, None)
    _log.info("Successfully calculated new configuration!")

    conf_id = str(uuid.uuid4())
    store.store_configuration(config, conf_id)
    _log.info("Successfully stored new configuration!")
    return conf_id
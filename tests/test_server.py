import json
import logging

import pytest

from tsnservice.models import Node, NodeType, Port, Schedule, TrafficClass
from tsnservice.optimizer import DEFAULT_SCHEDULE_ID
from tsnservice.server import (
    ConfigNotificationService,
    MstpPortTableRequest,
    NotificationServer,
)
from tsnservice.store import ConfigStore, KeyNotFoundError, MemoryBackend


def _server():
    store = ConfigStore(MemoryBackend())
    store.store_schedule(
        Schedule(gating_cycle=2.0, traffic_classes=[TrafficClass("isochronous", 50)]),
        DEFAULT_SCHEDULE_ID,
    )
    node = Node(name="es1", type=NodeType.END_STATION, ports=[Port(id="x", name="eth0")])
    store.backend.put("endnodes/es1", json.dumps(node.to_dict()).encode())
    store.backend.put("streams/requests/abc", json.dumps({}).encode())
    return NotificationServer(store)


def test_calc_config_stores_configuration():
    server = _server()
    conf_id = server.calc_config(["abc"])
    config = server.store.get_configuration(conf_id)
    assert [c.node_port for c in config.configs] == ["es1.eth0"]


def test_calc_config_missing_request_raises():
    server = _server()
    with pytest.raises(KeyNotFoundError):
        server.calc_config(["nope"])


def test_port_table_update_success_logged(caplog):
    server = _server()
    request = MstpPortTableRequest(priority=3, path_cost=10, device_ip="10.0.0.1")
    with caplog.at_level(logging.INFO, logger="tsnservice.server"):
        result = server.update_config_mstp_port_table(request)
    assert result is None
    assert "Config has updated successfully" in caplog.text


def test_port_table_update_invalid_is_logged_not_raised(caplog):
    server = _server()
    request = MstpPortTableRequest(priority=99, path_cost=10, device_ip="10.0.0.1")
    with caplog.at_level(logging.INFO, logger="tsnservice.server"):
        server.update_config_mstp_port_table(request)
    assert "Invalid mstpPortPriority" in caplog.text
    assert "Config has updated successfully" not in caplog.text


def test_other_updates_accept_requests(caplog):
    server = _server()
    with caplog.at_level(logging.INFO, logger="tsnservice.server"):
        results = [
            server.update_config_mstp_cist_port_table("a"),
            server.update_config_mstp_cist_table("b"),
            server.update_config_mstp_config_table("c"),
            server.update_config_mstp_fid_to_msti_v2_table("d"),
            server.update_config_mstp_table("e"),
        ]
    assert results == [None] * 5
    assert "FidToMstiV2" in caplog.text


def test_config_notification_returns_empty_receipt():
    service = ConfigNotificationService()
    assert service.config_notification({"kind": "event"}) == {}
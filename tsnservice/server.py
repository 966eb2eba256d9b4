"""Notification services: entry points that start configuration work."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from tsnservice import handler
from tsnservice.mstp_port_table import update_mstp_port_table
from tsnservice.store import ConfigStore

_log = logging.getLogger(__name__)


@dataclass
class MstpPortTableRequest:
    """Settings for one entry of the MSTP port table."""

    priority: int = 0
    path_cost: int = 0
    component_id: int = 0
    port: int = 0
    mst_id: int = 0
    device_ip: str = ""


class NotificationServer:
    """Receives notifications to calculate or update configurations."""

    def __init__(self, store: ConfigStore | None = None) -> None:
        self.store = store if store is not None else ConfigStore()

    def update_config_mstp_cist_port_table(self, request: Any) -> None:
        """Accept an MSTP CIST port table update."""
        _log.info("Update requested for MSTP CIST port table: %s", request)

    def update_config_mstp_cist_table(self, request: Any) -> None:
        """Accept an MSTP CIST table update."""
        _log.info("Update requested for MSTP CIST table: %s", request)

    def update_config_mstp_config_table(self, request: Any) -> None:
        """Accept an MSTP configuration table update."""
        _log.info("Update requested for MSTP config table: %s", request)

    def update_config_mstp_fid_to_msti_v2_table(self, request: Any) -> None:
        """Accept an MSTP FID to MSTI V2 table update."""
        _log.info("Update requested for MSTP FidToMstiV2 table: %s", request)

    def update_config_mstp_table(self, request: Any) -> None:
        """Accept an MSTP table update."""
        _log.info("Update requested for MSTP table: %s", request)

    def update_config_mstp_port_table(self, request: MstpPortTableRequest) -> None:
        """Apply an MSTP port table update; failures are logged, not raised."""
        try:
            update_mstp_port_table(
                request.priority,
                request.path_cost,
                request.component_id,
                request.port,
                request.mst_id,
                request.device_ip,
            )
        except ValueError as exc:
            _log.error("Failed to update the config: %s", exc)
        else:
            _log.info("Config has updated successfully")

    def calc_config(self, ids: Iterable[str]) -> str:
        """Calculate a configuration for the given request ids; return its id."""
        id_list = list(ids)
        _log.info("Received notification to calculate configuration for: %s", id_list)
        return handler.calculate_configuration(self.store, id_list)


class ConfigNotificationService:
    """Receives configuration events."""

    def config_notification(self, event: Any) -> dict[str, Any]:
        """Acknowledge an event with an empty receipt."""
        _log.info("Input for config notification: %s", event)
        return {}
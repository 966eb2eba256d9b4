"""Configuration calculation from the default schedule."""

from __future__ import annotations

import logging
import os
from dataclasses import fields

import yaml

from tsnservice.gcl import create_configuration_from_schedule
from tsnservice.models import GclConfiguration, Schedule, Topology, _camel
from tsnservice.store import ConfigStore

_log = logging.getLogger(__name__)

DEFAULT_SCHEDULE_ID = "default_schedule"
DEFAULT_SCHEDULE_PATH = os.path.join("configs", "schedules", "default-schedule.yaml")


def load_schedule(text: str) -> Schedule:
    """Parse a schedule from YAML text; unknown top-level fields are rejected."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid schedule YAML: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("a schedule must be a mapping")
    known = {name for f in fields(Schedule) for name in (f.name, _camel(f.name))}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ValueError(f"unknown schedule fields: {', '.join(unknown)}")
    try:
        return Schedule.from_dict(data)
    except (TypeError, ValueError, AttributeError) as exc:
        raise ValueError(f"invalid schedule: {exc}") from exc


def calculate_configuration(
    store: ConfigStore,
    topology: Topology,
    old_config: GclConfiguration | None = None,
) -> GclConfiguration:
    """Build a configuration for every port from the stored default schedule."""
    schedule = store.get_schedule(DEFAULT_SCHEDULE_ID)
    config = create_configuration_from_schedule(schedule, topology)
    _log.info("Schedule looks like: %s", config)
    return config


def create_default_schedule(
    store: ConfigStore, path: str | os.PathLike[str] = DEFAULT_SCHEDULE_PATH
) -> Schedule:
    """Read the default schedule file and store it under the default id."""
    with open(path, encoding="utf-8") as handle:
        schedule = load_schedule(handle.read())
    _log.info("Successfully created default schedule with ID: %s", DEFAULT_SCHEDULE_ID)
    store.store_schedule(schedule, DEFAULT_SCHEDULE_ID)
    _log.info("Successfully stored default schedule with ID: %s", DEFAULT_SCHEDULE_ID)
    return schedule
"""Ejecter package exports for test/import convenience."""

from . import config, constants, coordinator, daemon, dbus_api, devices, events, logging_utils, notifications
from . import orchestrator, registry, tracker
from .ejecter import Ejecter, is_drive_mounted

__all__ = [
    "Ejecter",
    "config",
    "constants",
    "coordinator",
    "daemon",
    "dbus_api",
    "devices",
    "events",
    "is_drive_mounted",
    "logging_utils",
    "notifications",
    "orchestrator",
    "registry",
    "tracker",
]

__version__ = "1.0.0"

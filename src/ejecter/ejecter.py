from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .config import Config
from .coordinator import LifecycleCoordinator
from .events import object_name
from .orchestrator import EjectOrchestrator
from .registry import DriveRegistry
from .tracker import EjectTracker


def is_drive_mounted(drive: Any) -> bool:
    """A drive can be ejected when at least one of its volumes is mounted."""
    return any(volume.get_mount() is not None for volume in drive.get_volumes())


class Ejecter:
    """
    Process-wide eject state: mounted drives, ejects in progress and the
    handlers that keep them up to date.

    ``monitor`` provides enumeration, the event stream and the eject call
    (see ``GioVolumeMonitor``); ``notifier`` provides ``notify`` / ``clear``.
    """

    def __init__(
        self,
        monitor: Any,
        notifier: Any,
        logger: logging.Logger,
        config: Optional[Config] = None,
        on_change: Optional[Callable[[], None]] = None,
        on_event: Optional[Callable[[dict], None]] = None,
    ):
        self.monitor = monitor
        self.notifier = notifier
        self.logger = logger
        self.config = config or Config()
        self.registry = DriveRegistry(logger)
        self.tracker = EjectTracker(logger)
        self.coordinator = LifecycleCoordinator(
            self.registry,
            self.tracker,
            notifier,
            logger,
            on_change=on_change,
            on_event=on_event,
            warn_on_unsafe_removal=self.config.warn_on_unsafe_removal,
        )
        self.orchestrator = EjectOrchestrator(
            monitor,
            self.tracker,
            self.coordinator.dispatch,
            logger,
            identifier_kind=self.config.identifier_kind,
        )
        self.initialized = False

    def initialize(self) -> None:
        if self.initialized:
            return
        self.registry.init_from_current_mounts(self.monitor)
        self.monitor.connect(self.coordinator.dispatch)
        self.initialized = True
        self.logger.info("Ejecter tracking %d mounted drive(s)", len(self.registry))

    def shutdown(self) -> None:
        if not self.initialized:
            return
        self.monitor.disconnect()
        self.registry.clear()
        self.tracker.clear()
        self.initialized = False
        self.logger.info("Ejecter stopped")

    def on_command(self, identifier: str) -> bool:
        """Mark ``identifier`` as being ejected out of band. Always accepted."""
        self.orchestrator.request_eject_by_identifier(identifier)
        return True

    def eject(self, drive: Any) -> None:
        self.orchestrator.request_eject(drive)

    def eject_identifier(self, identifier: str) -> int:
        """Eject every connected drive matching ``identifier``; returns the match count."""
        matches = self.orchestrator.find_drives(identifier)
        for drive in matches:
            self.eject(drive)
        if not matches:
            self.logger.info("No connected drive matches %s", identifier)
        return len(matches)

    def ejectable_drives(self) -> List[Any]:
        return [drive for drive in self.monitor.get_connected_drives() if is_drive_mounted(drive)]

    def should_show_icon(self) -> bool:
        if not self.config.autohide:
            return True
        return bool(self.ejectable_drives())

    def describe_drive(self, drive: Any) -> Dict[str, str]:
        volumes = [volume.get_name() for volume in drive.get_volumes() if volume.get_name()]
        return {
            "identifier": drive.get_identifier(self.config.identifier_kind) or "",
            "name": object_name(drive),
            "volumes": ", ".join(volumes),
        }

    def list_drives(self) -> List[Dict[str, str]]:
        return [self.describe_drive(drive) for drive in self.ejectable_drives()]

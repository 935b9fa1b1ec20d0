from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from . import constants, devices, logging_utils
from .events import EjectCompleted, EjectResult, LifecycleEvent, object_name
from .tracker import EjectTracker


class EjectOrchestrator:
    """
    Starts ejects and marks externally ejected drives.

    ``request_eject`` returns at once; the monitor calls back with an
    ``EjectResult`` which is handed to ``dispatch`` as an ``EjectCompleted``
    event. There is no queueing: a second request for the same drive goes
    straight to the monitor.
    """

    def __init__(
        self,
        monitor: Any,
        tracker: EjectTracker,
        dispatch: Callable[[LifecycleEvent], None],
        logger: logging.Logger,
        identifier_kind: str = constants.IDENTIFIER_UNIX_DEVICE,
        resolver: Optional[Callable[[str], str]] = None,
    ):
        self.monitor = monitor
        self.tracker = tracker
        self.dispatch = dispatch
        self.logger = logger
        self.identifier_kind = identifier_kind
        self.resolver = resolver or devices.resolve_drive_node

    def request_eject(self, drive: Any) -> None:
        self.logger.debug("EJECT %s", object_name(drive))
        self.monitor.eject(drive, self.on_eject_complete)

    def on_eject_complete(self, drive: Any, result: EjectResult) -> None:
        self.logger.debug("EJECT %s %s", "COMPLETE" if result.ok else "FAILED", object_name(drive))
        self.dispatch(EjectCompleted(drive=drive, result=result))

    def find_drives(self, identifier: str) -> List[Any]:
        """Connected drives whose identifier matches, after partition-to-disk resolution."""
        if not identifier:
            return []
        wanted = {identifier, self.resolver(identifier)}
        matches = []
        for drive in self.monitor.get_connected_drives():
            if drive.get_identifier(self.identifier_kind) in wanted:
                matches.append(drive)
        return matches

    def request_eject_by_identifier(self, identifier: str) -> int:
        """
        Record that ``identifier`` is being ejected by someone else.

        The eject itself is not started here; this only keeps the removal of
        the drive from being reported as unsafe. Unknown identifiers are
        ignored.
        """
        self.logger.debug("Eject command device %s", identifier)
        matches = self.find_drives(identifier)
        for drive in matches:
            self.logger.debug("EXTERNAL EJECT %s", object_name(drive))
            self.tracker.begin_tracked_eject(drive)
            logging_utils.log_structured(
                self.logger,
                f"external eject of {object_name(drive)}",
                {
                    constants.LOG_KEY_EVENT: constants.EVENT_EXTERNAL_EJECT,
                    constants.LOG_KEY_DEVICE: identifier,
                    constants.LOG_KEY_DRIVE: object_name(drive),
                },
            )
        return len(matches)

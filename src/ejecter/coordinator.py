from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from . import constants, logging_utils
from .events import (
    DriveConnected,
    DriveRemoved,
    EjectCompleted,
    LifecycleEvent,
    MountAdded,
    MountRemoved,
    PreUnmount,
    VolumeAdded,
    VolumeRemoved,
    describe,
    object_name,
)
from .i18n import _
from .registry import DriveRegistry
from .tracker import EjectTracker

_REFRESH_ONLY = (MountRemoved, VolumeAdded, VolumeRemoved, DriveConnected)


def _drive_of(obj: Any) -> Any:
    if obj is None:
        return None
    return obj.get_drive()


def _identifier_of(drive: Any) -> str:
    get_identifier = getattr(drive, "get_identifier", None)
    if not callable(get_identifier):
        return ""
    return get_identifier(constants.IDENTIFIER_UNIX_DEVICE) or ""


class LifecycleCoordinator:
    """
    Applies volume-monitor events and eject completions to the registry and
    tracker, and decides which notifications the user sees.

    Events are handled one at a time on the main loop.
    """

    def __init__(
        self,
        registry: DriveRegistry,
        tracker: EjectTracker,
        notifier: Any,
        logger: logging.Logger,
        on_change: Optional[Callable[[], None]] = None,
        on_event: Optional[Callable[[dict], None]] = None,
        warn_on_unsafe_removal: bool = True,
    ):
        self.registry = registry
        self.tracker = tracker
        self.notifier = notifier
        self.logger = logger
        self.on_change = on_change
        self.on_event = on_event
        self.warn_on_unsafe_removal = warn_on_unsafe_removal

    def _log_event(self, message: str, fields: dict, level: int = logging.INFO) -> None:
        logging_utils.log_structured(self.logger, message, fields, level=level)
        if self.on_event:
            self.on_event(fields)

    def _refresh(self) -> None:
        if self.on_change:
            self.on_change()

    def dispatch(self, event: LifecycleEvent) -> None:
        if isinstance(event, MountAdded):
            self.logger.debug("MOUNT ADDED %s", describe(event))
            self.registry.record_mount(_drive_of(event.mount))
        elif isinstance(event, PreUnmount):
            self.logger.debug("MOUNT PREUNMOUNT %s", describe(event))
            self.tracker.begin_tracked_eject(_drive_of(event.mount))
            return
        elif isinstance(event, DriveRemoved):
            self.logger.debug("DRIVE REMOVED %s", describe(event))
            self.handle_drive_removed(event.drive)
        elif isinstance(event, EjectCompleted):
            self.handle_eject_completed(event.drive, event.result)
            return
        elif isinstance(event, _REFRESH_ONLY):
            self.logger.debug("%s %s", type(event).__name__, describe(event))
        else:
            raise TypeError(f"unknown lifecycle event: {event!r}")
        self._refresh()

    def handle_drive_removed(self, drive: Any) -> None:
        # Both checks are single use; evaluate both before deciding.
        mounted = self.registry.was_mounted(drive)
        expected = self.tracker.consume_if_tracked(drive, self.notifier.clear)
        fields = {
            constants.LOG_KEY_EVENT: constants.EVENT_DRIVE_REMOVED,
            constants.LOG_KEY_DRIVE: object_name(drive),
            constants.LOG_KEY_DEVICE: _identifier_of(drive),
        }
        if mounted and not expected:
            fields[constants.LOG_KEY_RESULT] = constants.RESULT_WARN
            self._log_event(f"{object_name(drive)} removed without ejecting", fields, level=logging.WARNING)
            if self.warn_on_unsafe_removal:
                self.notifier.notify(
                    _("Drive was removed without ejecting"),
                    _("Please use menu to eject before removal"),
                )
        elif expected:
            fields[constants.LOG_KEY_RESULT] = constants.RESULT_EXPECTED
            self._log_event(f"{object_name(drive)} removed after eject", fields)

    def handle_eject_completed(self, drive: Any, result) -> None:
        name = object_name(drive)
        fields = {
            constants.LOG_KEY_EVENT: constants.EVENT_EJECT,
            constants.LOG_KEY_DRIVE: name,
            constants.LOG_KEY_DEVICE: _identifier_of(drive),
        }
        if result.ok:
            fields[constants.LOG_KEY_RESULT] = constants.RESULT_OK
            self._log_event(f"eject of {name} complete", fields)
            handle = self.notifier.notify(
                _("{drive} has been ejected").format(drive=name),
                _("It is now safe to remove the device"),
            )
            self.tracker.attach_notification(drive, handle)
        else:
            fields[constants.LOG_KEY_RESULT] = constants.RESULT_FAIL
            fields[constants.LOG_KEY_DETAIL] = result.detail or ""
            self._log_event(f"eject of {name} failed", fields, level=logging.WARNING)
            self.notifier.notify(
                _("Failed to eject {drive}").format(drive=name),
                result.detail or "",
            )

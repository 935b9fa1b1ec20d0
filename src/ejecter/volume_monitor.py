from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Type

import gi

gi.require_version("Gio", "2.0")
from gi.repository import Gio, GLib  # noqa: E402

from . import constants  # noqa: E402
from .events import (  # noqa: E402
    DriveConnected,
    DriveRemoved,
    EjectResult,
    LifecycleEvent,
    MountAdded,
    MountRemoved,
    PreUnmount,
    VolumeAdded,
    VolumeRemoved,
)

SIGNAL_EVENTS: Dict[str, Type] = {
    constants.EVENT_VOLUME_ADDED: VolumeAdded,
    constants.EVENT_VOLUME_REMOVED: VolumeRemoved,
    constants.EVENT_MOUNT_ADDED: MountAdded,
    constants.EVENT_MOUNT_REMOVED: MountRemoved,
    constants.EVENT_PRE_UNMOUNT: PreUnmount,
    constants.EVENT_DRIVE_CONNECTED: DriveConnected,
    constants.EVENT_DRIVE_REMOVED: DriveRemoved,
}


class GioVolumeMonitor:
    """
    Thin wrapper over ``Gio.VolumeMonitor``.

    Signals are forwarded to a single sink as event objects, and ejects are
    started with ``Gio.Drive.eject_with_operation``. Everything runs on the
    GLib main loop.
    """

    def __init__(self, logger: logging.Logger, monitor: Any = None):
        self.logger = logger
        self.monitor = monitor or Gio.VolumeMonitor.get()
        self._handler_ids: List[int] = []

    def connect(self, sink: Callable[[LifecycleEvent], None]) -> None:
        if self._handler_ids:
            self.disconnect()
        for signal_name, event_type in SIGNAL_EVENTS.items():
            handler_id = self.monitor.connect(signal_name, self._relay, event_type, sink)
            self._handler_ids.append(handler_id)
        self.logger.info("Listening to volume monitor signals")

    def _relay(self, _monitor, obj, event_type, sink) -> None:
        try:
            sink(event_type(obj))
        except Exception as exc:  # pragma: no cover
            self.logger.exception("Error handling %s: %s", event_type.__name__, exc)

    def disconnect(self) -> None:
        for handler_id in self._handler_ids:
            self.monitor.disconnect(handler_id)
        self._handler_ids.clear()

    def get_mounts(self) -> List[Any]:
        return self.monitor.get_mounts()

    def get_connected_drives(self) -> List[Any]:
        return self.monitor.get_connected_drives()

    def eject(self, drive: Any, callback: Callable[[Any, EjectResult], None]) -> None:
        def _done(source, res, _data=None):
            try:
                source.eject_with_operation_finish(res)
            except GLib.Error as e:
                callback(drive, EjectResult.failure(e.message))
                return
            callback(drive, EjectResult.success())

        drive.eject_with_operation(Gio.MountUnmountFlags.NONE, None, None, _done, None)

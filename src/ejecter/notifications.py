"""
Desktop notifications through org.freedesktop.Notifications.

``notify`` returns the server's notification id so that an "ejected" toast can
be retracted later, once the drive is physically removed.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

try:
    import pydbus
    from gi.repository import GLib  # type: ignore
except ImportError:  # pragma: no cover
    pydbus = None
    GLib = None

from . import constants

NOTIFY_BUS = "org.freedesktop.Notifications"
NOTIFY_PATH = "/org/freedesktop/Notifications"
APP_NAME = "Ejecter"


class NotificationManager:
    def __init__(self, logger: logging.Logger, enabled: bool = True, timeout_ms: int = -1, bus: Any = None):
        self.logger = logger
        self.enabled = enabled
        self.timeout_ms = timeout_ms
        self.bus = bus
        self.iface = None

    def _connect(self) -> bool:
        """Attempt to connect to the notification service."""
        if self.iface:
            return True
        try:
            if self.bus is None:
                if pydbus is None:
                    self.logger.warning("pydbus not available; notifications disabled")
                    return False
                self.bus = pydbus.SessionBus()
            self.iface = self.bus.get(NOTIFY_BUS, NOTIFY_PATH)
            self.logger.debug("Connected to %s", NOTIFY_BUS)
            return True
        except Exception as e:
            self.logger.warning("Failed to connect to %s: %s", NOTIFY_BUS, e)
            self.iface = None
            return False

    def notify(self, summary: str, body: str = "") -> Optional[int]:
        if not self.enabled:
            self.logger.info("[notify disabled] %s %s", summary, body)
            return None
        # Retry connection if not connected
        if not self._connect():
            self.logger.info("[notify] %s %s", summary, body)
            return None
        hints = {}
        if GLib is not None:
            hints["urgency"] = GLib.Variant("y", 1)
        try:
            notif_id = self.iface.Notify(APP_NAME, 0, constants.EJECT_ICON, summary, body, [], hints, self.timeout_ms)
        except Exception as e:
            self.logger.warning("Notify call failed: %s", e)
            self.iface = None
            return None
        self.logger.debug("Notification %s shown: %s", notif_id, summary)
        return notif_id

    def clear(self, notif_id: Optional[int]) -> None:
        if notif_id is None:
            return
        # A failed Notify drops the proxy; reconnect so earlier toasts can still be closed
        if not self._connect():
            self.logger.debug("Cannot close notification %s: service unreachable", notif_id)
            return
        try:
            self.iface.CloseNotification(notif_id)
            self.logger.debug("Closed notification %s", notif_id)
        except Exception as e:
            self.logger.warning("Failed to close notification %s: %s", notif_id, e)

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

try:
    import pydbus
except ImportError:  # pragma: no cover
    pydbus = None
try:
    from pydbus.generic import signal as dbus_signal
except Exception:  # pragma: no cover
    dbus_signal = None


DBUS_NAME = "org.ejecter.Ejecter"
DBUS_PATH = "/org/ejecter/Ejecter"


class EjecterDBus:
    """
    <node>
      <interface name='org.ejecter.Ejecter'>
        <method name='Command'>
          <arg type='s' name='identifier' direction='in'/>
          <arg type='b' name='accepted' direction='out'/>
        </method>
        <method name='Eject'>
          <arg type='s' name='identifier' direction='in'/>
          <arg type='i' name='matches' direction='out'/>
        </method>
        <method name='ListDrives'>
          <arg type='aa{ss}' name='drives' direction='out'/>
        </method>
        <method name='ShouldShowIcon'>
          <arg type='b' name='visible' direction='out'/>
        </method>
        <signal name='Changed'/>
        <signal name='Event'>
          <arg type='a{ss}' name='fields'/>
        </signal>
      </interface>
    </node>
    """

    def __init__(
        self,
        logger: logging.Logger,
        command_func: Callable[[str], bool],
        eject_func: Callable[[str], int],
        list_drives_func: Callable[[], List[Dict[str, str]]],
        should_show_icon_func: Optional[Callable[[], bool]] = None,
    ):
        self.logger = logger
        self.command_func = command_func
        self.eject_func = eject_func
        self.list_drives_func = list_drives_func
        self.should_show_icon_func = should_show_icon_func
        self.bus: Optional[Any] = None
        self._publication: Optional[Any] = None

    # pydbus signal definitions
    Changed = dbus_signal() if dbus_signal else None
    Event = dbus_signal() if dbus_signal else None

    def Export(self, bus: Any = None):  # noqa: N802
        """
        Publish on the session bus if pydbus is available.
        """
        if bus is None:
            if not pydbus:
                self.logger.warning("pydbus not available; DBus API disabled")
                return None
        try:
            bus = bus or pydbus.SessionBus()
            self._publication = bus.publish(DBUS_NAME, self)
            self.logger.info("DBus service published at %s %s", DBUS_NAME, DBUS_PATH)
            self.bus = bus
            return self.bus
        except Exception as e:
            self.logger.error("Failed to publish DBus service: %s", e)
            self.logger.warning("DBus API disabled due to connection failure")
            return None

    def Unexport(self) -> None:  # noqa: N802
        if self._publication is not None:
            self._publication.unpublish()
            self._publication = None
        self.bus = None

    # DBus-exposed methods
    def Command(self, identifier: str) -> bool:  # noqa: N802
        return self.command_func(identifier)

    def Eject(self, identifier: str) -> int:  # noqa: N802
        return self.eject_func(identifier)

    def ListDrives(self) -> List[Dict[str, str]]:  # noqa: N802
        return self.list_drives_func()

    def ShouldShowIcon(self) -> bool:  # noqa: N802
        if self.should_show_icon_func is None:
            return True
        return bool(self.should_show_icon_func())

    def emit_changed(self) -> None:
        """Tell clients the set of ejectable drives may have changed."""
        if not self.bus or not dbus_signal:
            return
        try:
            self.Changed()
        except Exception:  # pragma: no cover
            self.logger.exception("Failed to emit Changed signal")

    # Events: emit dict fields to listeners
    def emit_event(self, fields: Dict[str, Any]) -> None:
        if not self.bus or not dbus_signal:
            return
        try:
            self.Event({key: str(value) for key, value in fields.items()})
        except Exception:  # pragma: no cover
            self.logger.exception("Failed to emit Event signal")

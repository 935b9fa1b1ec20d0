from __future__ import annotations

import argparse
import logging
import signal
from typing import Any, Callable, Dict, Optional

from . import config as config_module, dbus_api, logging_utils
from .ejecter import Ejecter
from .notifications import NotificationManager

try:
    from gi.repository import GLib  # type: ignore
except Exception:  # pragma: no cover
    GLib = None


class Daemon:
    def __init__(self, config_path=None, on_change: Optional[Callable[[], None]] = None):
        self.config = config_module.Config.load(config_path)
        self.logger = logging_utils.setup_logging(logging.DEBUG if self.config.debug else logging.INFO)
        self.dbus_service = None
        self._loop = None
        self._extra_on_change = on_change
        self.notifier = NotificationManager(
            self.logger,
            enabled=self.config.notification_enabled,
            timeout_ms=self.config.notification_timeout_ms,
        )
        self.ejecter = Ejecter(
            self._make_monitor(),
            self.notifier,
            self.logger,
            config=self.config,
            on_change=self._emit_changed,
            on_event=self._emit_event,
        )

    def _make_monitor(self) -> Any:
        from .volume_monitor import GioVolumeMonitor

        return GioVolumeMonitor(self.logger)

    def _emit_changed(self) -> None:
        if self.dbus_service:
            self.dbus_service.emit_changed()
        if self._extra_on_change:
            self._extra_on_change()

    def _emit_event(self, fields: Dict[str, str]) -> None:
        if self.dbus_service:
            self.dbus_service.emit_event(fields)

    def run(self) -> None:
        self.logger.info("Ejecter daemon starting")
        if GLib is None:
            raise RuntimeError("PyGObject is required to run the daemon")

        loop = GLib.MainLoop()
        self._loop = loop

        def stop(*_args):
            self.logger.info("Stopping daemon")
            loop.quit()
            return GLib.SOURCE_REMOVE

        # Handlers must run on the main loop, not from an arbitrary Python frame
        for signum in (signal.SIGINT, signal.SIGTERM):
            GLib.unix_signal_add(GLib.PRIORITY_DEFAULT, signum, stop)

        dbus_service = dbus_api.EjecterDBus(
            self.logger,
            self.ejecter.on_command,
            self.ejecter.eject_identifier,
            self.ejecter.list_drives,
            self.ejecter.should_show_icon,
        )
        dbus_service.Export()
        self.dbus_service = dbus_service

        self.ejecter.initialize()
        try:
            loop.run()
        finally:
            self.ejecter.shutdown()
            dbus_service.Unexport()
            self.dbus_service = None
        self.logger.info("Ejecter daemon stopped")


def main():
    parser = argparse.ArgumentParser(description="Track removable drives and warn about unsafe removal.")
    parser.add_argument("--config", type=str, help="Path to config.toml")
    parser.add_argument("--debug", action="store_true", help="Log every volume monitor event")
    args = parser.parse_args()
    daemon = Daemon(config_path=args.config)
    if args.debug:
        daemon.logger.setLevel(logging.DEBUG)
    daemon.run()


if __name__ == "__main__":
    main()

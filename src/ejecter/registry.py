from __future__ import annotations

import logging
from typing import Any, List

from .events import object_name


class DriveRegistry:
    """
    Drives currently known to have at least one mounted volume.

    Filled once from the volume monitor at startup and afterwards only through
    mount-added (insert) and drive-removed (consume) events.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._drives: List[Any] = []

    def record_mount(self, drive: Any) -> None:
        # Mounts without an owning drive (network shares, loop files) are ignored
        if drive is None:
            return
        if drive in self._drives:
            return
        self._drives.append(drive)
        self.logger.debug("MOUNTED DRIVE %s", object_name(drive))

    def was_mounted(self, drive: Any) -> bool:
        """Remove ``drive`` and report whether it was present. Single use."""
        if drive is None or drive not in self._drives:
            return False
        self._drives.remove(drive)
        return True

    def init_from_current_mounts(self, monitor: Any) -> None:
        for mount in monitor.get_mounts():
            self.record_mount(mount.get_drive())
        self.logger.debug("%d mounted drive(s) at startup", len(self._drives))

    def clear(self) -> None:
        self._drives.clear()

    def drives(self) -> List[Any]:
        return list(self._drives)

    def __contains__(self, drive: Any) -> bool:
        return drive in self._drives

    def __len__(self) -> int:
        return len(self._drives)

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .events import object_name


@dataclass
class EjectRecord:
    drive: Any
    notification: Optional[int] = None


class EjectTracker:
    """
    Drives with an eject in progress.

    A record is created whenever an eject is expected, whatever started it,
    and drained on the first removal of its drive. Records are never kept
    after consumption.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._records: List[EjectRecord] = []

    def begin_tracked_eject(self, drive: Any) -> None:
        if drive is None:
            return
        self._records.append(EjectRecord(drive=drive))
        self.logger.debug("EJECT EXPECTED %s", object_name(drive))

    def attach_notification(self, drive: Any, notification: Optional[int]) -> None:
        for record in self._records:
            if record.drive == drive:
                record.notification = notification
                return
        self.logger.debug("no eject record for %s; notification %s not attached", object_name(drive), notification)

    def consume_if_tracked(self, drive: Any, clear: Callable[[int], None]) -> bool:
        """
        Drop every record for ``drive``, retracting attached notifications.

        Returns True if the drive had an eject in progress.
        """
        if drive is None:
            return False
        matched = [record for record in self._records if record.drive == drive]
        self._records = [record for record in self._records if record.drive != drive]
        for record in matched:
            if record.notification is not None:
                clear(record.notification)
        return bool(matched)

    def is_tracked(self, drive: Any) -> bool:
        return any(record.drive == drive for record in self._records)

    def clear(self) -> None:
        self._records.clear()

    def records(self) -> List[EjectRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

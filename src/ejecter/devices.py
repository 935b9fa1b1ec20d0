from __future__ import annotations

import logging
from typing import Optional

import pyudev

logger = logging.getLogger("ejecter")


def resolve_drive_node(devnode: str, context: Optional[pyudev.Context] = None) -> str:
    """
    Map a partition node (``/dev/sdb1``) to the node of its disk (``/dev/sdb``).

    Drives are identified by their whole-disk node, while external tools
    usually act on a partition. Anything udev does not know about is returned
    unchanged.
    """
    if not devnode or not devnode.startswith("/dev/"):
        return devnode
    try:
        device = pyudev.Devices.from_device_file(context or pyudev.Context(), devnode)
    except (pyudev.DeviceNotFoundError, ImportError, ValueError, OSError) as e:
        logger.debug("udev lookup for %s failed: %s", devnode, e)
        return devnode
    if device.device_type != "partition":
        return devnode
    disk = device.find_parent("block", "disk")
    if disk is None or not disk.device_node:
        return devnode
    return disk.device_node

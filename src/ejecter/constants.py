from __future__ import annotations

# Identifier kind used to match drives against external commands
IDENTIFIER_UNIX_DEVICE = "unix-device"

# Icon shown in the panel and in notifications
EJECT_ICON = "media-eject"

# Journald keys
LOG_KEY_EVENT = "EJ_EVENT"
LOG_KEY_DEVICE = "DEVICE"
LOG_KEY_DRIVE = "DRIVE"
LOG_KEY_RESULT = "RESULT"
LOG_KEY_DETAIL = "DETAIL"

# Events
EVENT_MOUNT_ADDED = "mount-added"
EVENT_MOUNT_REMOVED = "mount-removed"
EVENT_PRE_UNMOUNT = "mount-pre-unmount"
EVENT_VOLUME_ADDED = "volume-added"
EVENT_VOLUME_REMOVED = "volume-removed"
EVENT_DRIVE_CONNECTED = "drive-connected"
EVENT_DRIVE_REMOVED = "drive-disconnected"
EVENT_EJECT = "eject"
EVENT_EXTERNAL_EJECT = "external-eject"

# Results
RESULT_OK = "ok"
RESULT_FAIL = "fail"
RESULT_WARN = "warn"
RESULT_EXPECTED = "expected"

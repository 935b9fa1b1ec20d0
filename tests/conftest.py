"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator, List, Optional

import pytest

from ejecter.events import EjectResult


class FakeMount:
    """Stand-in for Gio.Mount."""

    def __init__(self, name: str, drive: Optional["FakeDrive"]):
        self.name = name
        self.drive = drive

    def get_name(self) -> str:
        return self.name

    def get_drive(self) -> Optional["FakeDrive"]:
        return self.drive


class FakeVolume:
    """Stand-in for Gio.Volume."""

    def __init__(self, name: Optional[str], drive: Optional["FakeDrive"], mount: Optional[FakeMount] = None):
        self.name = name
        self.drive = drive
        self.mount = mount

    def get_name(self) -> Optional[str]:
        return self.name

    def get_drive(self) -> Optional["FakeDrive"]:
        return self.drive

    def get_mount(self) -> Optional[FakeMount]:
        return self.mount


class FakeDrive:
    """Stand-in for Gio.Drive; compared by identity like the real wrapper."""

    def __init__(self, name: str, devnode: str):
        self.name = name
        self.devnode = devnode
        self.volumes: List[FakeVolume] = []

    def get_name(self) -> str:
        return self.name

    def get_identifier(self, kind: str) -> Optional[str]:
        if kind == "unix-device":
            return self.devnode
        return None

    def get_volumes(self) -> List[FakeVolume]:
        return list(self.volumes)

    def add_volume(self, name: Optional[str], mounted: bool = True) -> FakeVolume:
        mount = FakeMount(name or "mount", self) if mounted else None
        volume = FakeVolume(name, self, mount)
        self.volumes.append(volume)
        return volume

    def __repr__(self) -> str:
        return f"FakeDrive({self.name!r})"


class FakeMonitor:
    """Stand-in for GioVolumeMonitor: enumeration, event sink and eject calls."""

    def __init__(self):
        self.drives: List[FakeDrive] = []
        self.extra_mounts: List[FakeMount] = []
        self.sink: Optional[Callable] = None
        self.disconnected = False
        self.eject_calls: List[FakeDrive] = []
        self._pending: List[tuple] = []

    def connect(self, sink: Callable) -> None:
        self.sink = sink
        self.disconnected = False

    def disconnect(self) -> None:
        self.sink = None
        self.disconnected = True

    def get_connected_drives(self) -> List[FakeDrive]:
        return list(self.drives)

    def get_mounts(self) -> List[FakeMount]:
        mounts = [v.get_mount() for d in self.drives for v in d.get_volumes() if v.get_mount()]
        return mounts + list(self.extra_mounts)

    def eject(self, drive: FakeDrive, callback: Callable) -> None:
        self.eject_calls.append(drive)
        self._pending.append((drive, callback))

    def complete_eject(self, drive: FakeDrive, result: Optional[EjectResult] = None) -> None:
        """Deliver the completion callback of the oldest pending eject of ``drive``."""
        for i, (pending_drive, callback) in enumerate(self._pending):
            if pending_drive is drive:
                del self._pending[i]
                callback(drive, result or EjectResult.success())
                return
        raise AssertionError(f"no pending eject for {drive!r}")

    def emit(self, event) -> None:
        assert self.sink is not None, "monitor not connected"
        self.sink(event)


class FakeNotifier:
    """Records notify/clear calls; ids start at 100."""

    def __init__(self):
        self.shown: List[Dict] = []
        self.cleared: List[int] = []
        self._next_id = 100

    def notify(self, summary: str, body: str = "") -> int:
        notif_id = self._next_id
        self._next_id += 1
        self.shown.append({"id": notif_id, "summary": summary, "body": body})
        return notif_id

    def clear(self, notif_id: int) -> None:
        self.cleared.append(notif_id)

    def summaries(self) -> List[str]:
        return [n["summary"] for n in self.shown]

    def warnings(self) -> List[Dict]:
        return [n for n in self.shown if n["summary"] == "Drive was removed without ejecting"]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_config_file(temp_dir: Path) -> Path:
    """Create a test configuration file."""
    config_content = """
autohide = false
notification_enabled = true
notification_timeout_ms = 5000
warn_on_unsafe_removal = true
identifier_kind = "unix-device"
debug = true
"""
    config_path = temp_dir / "config.toml"
    config_path.write_text(config_content)
    return config_path


@pytest.fixture
def mock_empty_config(temp_dir: Path) -> Path:
    """Create an empty configuration file."""
    config_path = temp_dir / "empty_config.toml"
    config_path.write_text("")
    return config_path


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("ejecter.tests")


@pytest.fixture
def make_drive() -> Callable[..., FakeDrive]:
    """Factory for fake drives: make_drive("USB Stick", "/dev/sdb", volumes=["DATA"])."""

    def _make(name: str = "USB Drive", devnode: str = "/dev/sdb", volumes=("DATA",), mounted: bool = True):
        drive = FakeDrive(name, devnode)
        for volume_name in volumes:
            drive.add_volume(volume_name, mounted=mounted)
        return drive

    return _make


@pytest.fixture
def monitor() -> FakeMonitor:
    return FakeMonitor()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def mount_of() -> Callable[[FakeDrive], FakeMount]:
    """First mount of a fake drive."""

    def _mount_of(drive: FakeDrive) -> FakeMount:
        for volume in drive.get_volumes():
            if volume.get_mount():
                return volume.get_mount()
        return FakeMount("detached", drive)

    return _mount_of

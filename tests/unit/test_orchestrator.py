"""Unit tests for eject requests and externally announced ejects."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest

from ejecter.events import EjectCompleted, EjectResult
from ejecter.orchestrator import EjectOrchestrator
from ejecter.tracker import EjectTracker


@pytest.fixture
def tracker(logger):
    return EjectTracker(logger)


@pytest.fixture
def dispatch():
    return Mock()


@pytest.fixture
def orchestrator(monitor, tracker, dispatch, logger):
    return EjectOrchestrator(monitor, tracker, dispatch, logger, resolver=lambda devnode: devnode)


class TestRequestEject:

    def test_request_eject_calls_monitor_once(self, orchestrator, monitor, make_drive):
        drive = make_drive()

        orchestrator.request_eject(drive)

        assert monitor.eject_calls == [drive]

    def test_duplicate_requests_pass_through(self, orchestrator, monitor, make_drive):
        drive = make_drive()

        orchestrator.request_eject(drive)
        orchestrator.request_eject(drive)

        assert monitor.eject_calls == [drive, drive]

    def test_completion_is_dispatched(self, orchestrator, monitor, dispatch, make_drive):
        drive = make_drive()
        orchestrator.request_eject(drive)

        monitor.complete_eject(drive, EjectResult.failure("busy"))

        dispatch.assert_called_once_with(EjectCompleted(drive, EjectResult.failure("busy")))

    def test_request_does_not_touch_tracker(self, orchestrator, tracker, make_drive):
        orchestrator.request_eject(make_drive())

        assert len(tracker) == 0


class TestRequestEjectByIdentifier:

    def test_matching_drive_is_tracked_without_eject(self, orchestrator, monitor, tracker, make_drive):
        drive = make_drive("Stick", "/dev/sdb")
        monitor.drives = [make_drive("Other", "/dev/sdc"), drive]

        assert orchestrator.request_eject_by_identifier("/dev/sdb") == 1

        assert tracker.is_tracked(drive)
        assert len(tracker) == 1
        assert monitor.eject_calls == []

    def test_no_match_is_noop(self, orchestrator, monitor, tracker, make_drive):
        monitor.drives = [make_drive("Other", "/dev/sdc")]

        assert orchestrator.request_eject_by_identifier("/dev/sdz") == 0

        assert len(tracker) == 0

    def test_empty_identifier_is_noop(self, orchestrator, monitor, tracker, make_drive):
        monitor.drives = [make_drive()]

        assert orchestrator.request_eject_by_identifier("") == 0
        assert len(tracker) == 0

    def test_partition_resolves_to_parent_disk(self, monitor, tracker, dispatch, logger, make_drive):
        drive = make_drive("Stick", "/dev/sdb")
        monitor.drives = [drive]
        resolver = Mock(return_value="/dev/sdb")
        orchestrator = EjectOrchestrator(monitor, tracker, dispatch, logger, resolver=resolver)

        assert orchestrator.request_eject_by_identifier("/dev/sdb1") == 1

        resolver.assert_called_once_with("/dev/sdb1")
        assert tracker.is_tracked(drive)

    @patch("ejecter.orchestrator.devices.resolve_drive_node", return_value="/dev/sdb")
    def test_default_resolver_uses_udev(self, mock_resolve, monitor, tracker, dispatch, logger, make_drive):
        monitor.drives = [make_drive("Stick", "/dev/sdb")]
        orchestrator = EjectOrchestrator(monitor, tracker, dispatch, logger)

        assert orchestrator.request_eject_by_identifier("/dev/sdb2") == 1
        mock_resolve.assert_called_once_with("/dev/sdb2")


"""
Lifecycle events delivered to the coordinator.

Each GIO volume-monitor signal maps to one event type; the asynchronous eject
completion is delivered as an ``EjectCompleted`` event so that all state
changes go through a single dispatch point.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

logger = logging.getLogger("ejecter")


@dataclass(frozen=True)
class EjectResult:
    """Outcome of one eject call. ``detail`` is the error message on failure."""

    ok: bool
    detail: Optional[str] = None

    @classmethod
    def success(cls) -> "EjectResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, detail: str) -> "EjectResult":
        return cls(ok=False, detail=detail)


@dataclass(frozen=True)
class MountAdded:
    mount: Any


@dataclass(frozen=True)
class MountRemoved:
    mount: Any


@dataclass(frozen=True)
class PreUnmount:
    mount: Any


@dataclass(frozen=True)
class VolumeAdded:
    volume: Any


@dataclass(frozen=True)
class VolumeRemoved:
    volume: Any


@dataclass(frozen=True)
class DriveConnected:
    drive: Any


@dataclass(frozen=True)
class DriveRemoved:
    drive: Any


@dataclass(frozen=True)
class EjectCompleted:
    drive: Any
    result: EjectResult


LifecycleEvent = Union[
    MountAdded,
    MountRemoved,
    PreUnmount,
    VolumeAdded,
    VolumeRemoved,
    DriveConnected,
    DriveRemoved,
    EjectCompleted,
]


def describe(event: LifecycleEvent) -> str:
    """Short human readable name of the object an event refers to."""
    target = getattr(event, "mount", None) or getattr(event, "volume", None) or getattr(event, "drive", None)
    return object_name(target)


def object_name(obj: Any) -> str:
    if obj is None:
        return "<none>"
    get_name = getattr(obj, "get_name", None)
    if callable(get_name):
        try:
            return get_name() or "<unnamed>"
        except Exception as e:
            logger.debug("get_name() failed on %r: %s", obj, e)
            return repr(obj)
    return str(obj)

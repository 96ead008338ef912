"""Containers and pod sandboxes as seen by plugins."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _time_from_offset(nanoseconds: int) -> datetime:
    # Timestamps are nanosecond offsets from the zero time; datetime keeps
    # microseconds only.
    return _ZERO_TIME + timedelta(microseconds=nanoseconds // 1000)


@dataclass
class PodSandbox:
    """A pod sandbox."""

    id: str = ""
    name: str = ""
    uid: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)


@dataclass
class Container:
    """A container with its lifecycle timestamps in nanoseconds."""

    id: str = ""
    pod_sandbox_id: str = ""
    name: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    args: list[str] = field(default_factory=list)
    created_at: int = 0
    started_at: int = 0
    finished_at: int = 0

    def created_at_time(self) -> datetime:
        """Return the creation time."""
        return _time_from_offset(self.created_at)

    def started_at_time(self) -> datetime:
        """Return the start time."""
        return _time_from_offset(self.started_at)

    def finished_at_time(self) -> datetime:
        """Return the finish time."""
        return _time_from_offset(self.finished_at)
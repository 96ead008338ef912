"""Container and pod lifecycle events and sets of them."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable


class Event(IntEnum):
    """Lifecycle events a plugin can subscribe to."""

    UNKNOWN = 0
    RUN_POD_SANDBOX = 1
    STOP_POD_SANDBOX = 2
    REMOVE_POD_SANDBOX = 3
    CREATE_CONTAINER = 4
    POST_CREATE_CONTAINER = 5
    START_CONTAINER = 6
    POST_START_CONTAINER = 7
    UPDATE_CONTAINER = 8
    POST_UPDATE_CONTAINER = 9
    STOP_CONTAINER = 10
    REMOVE_CONTAINER = 11
    UPDATE_POD_SANDBOX = 12
    POST_UPDATE_POD_SANDBOX = 13
    VALIDATE_CONTAINER_ADJUSTMENT = 14
    LAST = 15


VALID_EVENTS = (1 << (Event.LAST - 1)) - 1
"""Bit mask of all valid events."""

_EVENT_BITS: dict[str, Event] = {
    "runpodsandbox": Event.RUN_POD_SANDBOX,
    "updatepodsandbox": Event.UPDATE_POD_SANDBOX,
    "postupdatepodsandbox": Event.POST_UPDATE_POD_SANDBOX,
    "stoppodsandbox": Event.STOP_POD_SANDBOX,
    "removepodsandbox": Event.REMOVE_POD_SANDBOX,
    "createcontainer": Event.CREATE_CONTAINER,
    "postcreatecontainer": Event.POST_CREATE_CONTAINER,
    "startcontainer": Event.START_CONTAINER,
    "poststartcontainer": Event.POST_START_CONTAINER,
    "updatecontainer": Event.UPDATE_CONTAINER,
    "postupdatecontainer": Event.POST_UPDATE_CONTAINER,
    "stopcontainer": Event.STOP_CONTAINER,
    "removecontainer": Event.REMOVE_CONTAINER,
    "validatecontaineradjustment": Event.VALIDATE_CONTAINER_ADJUSTMENT,
}

_EVENT_NAMES: dict[Event, str] = {
    Event.RUN_POD_SANDBOX: "RunPodSandbox",
    Event.UPDATE_POD_SANDBOX: "UpdatePodSandbox",
    Event.POST_UPDATE_POD_SANDBOX: "PostUpdatePodSandbox",
    Event.STOP_POD_SANDBOX: "StopPodSandbox",
    Event.REMOVE_POD_SANDBOX: "RemovePodSandbox",
    Event.CREATE_CONTAINER: "CreateContainer",
    Event.POST_CREATE_CONTAINER: "PostCreateContainer",
    Event.START_CONTAINER: "StartContainer",
    Event.POST_START_CONTAINER: "PostStartContainer",
    Event.UPDATE_CONTAINER: "UpdateContainer",
    Event.POST_UPDATE_CONTAINER: "PostUpdateContainer",
    Event.STOP_CONTAINER: "StopContainer",
    Event.REMOVE_CONTAINER: "RemoveContainer",
    Event.VALIDATE_CONTAINER_ADJUSTMENT: "ValidateContainerAdjustment",
}


def _bit(event: int) -> int:
    return 1 << (int(event) - 1)


class EventMask:
    """A mutable set of events stored as a bit mask."""

    __slots__ = ("value",)

    def __init__(self, value: int = 0) -> None:
        self.value = int(value)

    def set(self, *events: int) -> EventMask:
        """Add the given events to the mask and return the mask."""
        for event in events:
            self.value |= _bit(event)
        return self

    def clear(self, *events: int) -> EventMask:
        """Remove the given events from the mask and return the mask."""
        for event in events:
            self.value &= ~_bit(event)
        return self

    def is_set(self, event: int) -> bool:
        """Return whether the given event is in the mask."""
        return bool(self.value & _bit(event))

    def pretty_string(self) -> str:
        """Return a human-readable, comma separated list of the events."""
        remaining = EventMask(self.value)
        names = []
        for event in range(Event.UNKNOWN + 1, Event.LAST + 1):
            if remaining.is_set(event):
                names.append(_EVENT_NAMES.get(Event(event), ""))
                remaining.clear(event)
        if remaining.value:
            names.append(f"unknown(0x{remaining.value:x})")
        return ",".join(names)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EventMask):
            return self.value == other.value
        if isinstance(other, int):
            return self.value == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"EventMask(0x{self.value:x})"


def _set_matching(mask: EventMask, part: str) -> None:
    mask.set(*(bit for name, bit in _EVENT_BITS.items() if part in name))


def parse_event_mask(*events: str) -> EventMask:
    """Parse comma separated, case-insensitive event names into a mask.

    Besides single event names, 'all', 'pod', 'podsandbox' and
    'container' select groups of events. Raises ValueError for an
    unknown name.
    """
    mask = EventMask()
    for event in events:
        for name in _split(event):
            if name == "all":
                mask.value |= VALID_EVENTS
            elif name in ("pod", "podsandbox"):
                _set_matching(mask, "pod")
            elif name == "container":
                _set_matching(mask, "container")
            else:
                bit = _EVENT_BITS.get(name.strip())
                if bit is None:
                    raise ValueError(f"unknown event {name!r}")
                mask.set(bit)
    return mask


def _split(event: str) -> Iterable[str]:
    return event.lower().split(",")
"""I/O priority of containers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from nri.api.optional import optional_int32


class IOPrioClass(IntEnum):
    """I/O scheduling class."""

    IOPRIO_CLASS_NONE = 0
    IOPRIO_CLASS_RT = 1
    IOPRIO_CLASS_BE = 2
    IOPRIO_CLASS_IDLE = 3

    def to_oci(self) -> str:
        """Return the OCI class name; empty for no class."""
        if self is IOPrioClass.IOPRIO_CLASS_NONE:
            return ""
        return self.name


def from_oci_io_priority_class(value: str) -> IOPrioClass:
    """Return the class for an OCI class name; unknown names give no class."""
    return IOPrioClass.__members__.get(value, IOPrioClass.IOPRIO_CLASS_NONE)


@dataclass
class LinuxIOPriority:
    """I/O class and priority of a container."""

    ioclass: IOPrioClass = IOPrioClass.IOPRIO_CLASS_NONE
    priority: int = 0

    def to_oci(self) -> dict[str, Any]:
        """Return the OCI I/O priority."""
        return {"class": self.ioclass.to_oci(), "priority": self.priority}


def from_oci_linux_io_priority(ioprio: dict[str, Any] | None) -> LinuxIOPriority | None:
    """Return the I/O priority for an OCI I/O priority."""
    if ioprio is None:
        return None
    return LinuxIOPriority(
        ioclass=from_oci_io_priority_class(ioprio.get("class", "")),
        priority=optional_int32(ioprio.get("priority", 0)) or 0,
    )
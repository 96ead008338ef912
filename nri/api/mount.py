"""Container mounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from nri.api.helpers import is_marked_for_removal

SELINUX_RELABEL = "relabel"
"""Mount pseudo-option requesting relabeling."""

_PROPAGATION_OPTIONS = frozenset({"rprivate", "rshared", "rslave"})


@dataclass
class Mount:
    """A mount of a container."""

    destination: str = ""
    type: str = ""
    source: str = ""
    options: list[str] = field(default_factory=list)

    def to_oci(self) -> tuple[dict[str, Any], str | None]:
        """Return the OCI mount and its last propagation option, if any."""
        propagation = None
        for opt in self.options:
            if opt in _PROPAGATION_OPTIONS:
                propagation = opt
        oci = {
            "destination": self.destination,
            "type": self.type,
            "source": self.source,
            "options": list(self.options),
        }
        return oci, propagation

    def cmp(self, other: Mount | None) -> bool:
        """Return whether the mounts are considered equal.

        Options are compared by count only.
        """
        if other is None:
            return False
        return (
            self.destination == other.destination
            and self.type == other.type
            and self.source == other.source
            and len(self.options) == len(other.options)
        )

    def is_marked_for_removal(self) -> tuple[str, bool]:
        """Return the plain destination and whether the mount is marked for removal."""
        return is_marked_for_removal(self.destination)


def from_oci_mounts(mounts: list[dict[str, Any]] | None) -> list[Mount]:
    """Return mounts for a list of OCI mounts."""
    return [
        Mount(
            destination=m.get("destination", ""),
            type=m.get("type", ""),
            source=m.get("source", ""),
            options=list(m.get("options") or []),
        )
        for m in mounts or ()
    ]
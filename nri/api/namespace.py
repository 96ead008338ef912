"""Linux namespaces of containers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from nri.api.helpers import is_marked_for_removal


@dataclass
class LinuxNamespace:
    """A Linux namespace of a container."""

    type: str = ""
    path: str = ""

    def is_marked_for_removal(self) -> tuple[str, bool]:
        """Return the plain type and whether the namespace is marked for removal."""
        return is_marked_for_removal(self.type)


def from_oci_linux_namespaces(
    namespaces: list[dict[str, Any]] | None,
) -> list[LinuxNamespace]:
    """Return namespaces for a list of OCI namespaces."""
    return [
        LinuxNamespace(type=ns.get("type", ""), path=ns.get("path", ""))
        for ns in namespaces or ()
    ]
"""Linux devices of containers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from nri.api.helpers import is_marked_for_removal
from nri.api.optional import optional_file_mode, optional_uint32


@dataclass
class LinuxDevice:
    """A Linux device node of a container."""

    path: str = ""
    type: str = ""
    major: int = 0
    minor: int = 0
    file_mode: int | None = None
    uid: int | None = None
    gid: int | None = None

    def to_oci(self) -> dict[str, Any]:
        """Return the device as an OCI Linux device."""
        return {
            "path": self.path,
            "type": self.type,
            "major": self.major,
            "minor": self.minor,
            "fileMode": self.file_mode,
            "uid": self.uid,
            "gid": self.gid,
        }

    def access_string(self) -> str:
        """Return the OCI cgroup access string for the device.

        Read and write access are always granted; block devices also
        get mknod access.
        """
        return "rw" + ("m" if self.type == "b" else "")

    def cmp(self, other: LinuxDevice | None) -> bool:
        """Return whether the device numbers of the two devices differ.

        Returns False if other is None.
        """
        if other is None:
            return False
        return self.major != other.major or self.minor != other.minor

    def is_marked_for_removal(self) -> tuple[str, bool]:
        """Return the plain path and whether the device is marked for removal."""
        return is_marked_for_removal(self.path)


def from_oci_linux_devices(devices: list[dict[str, Any]] | None) -> list[LinuxDevice]:
    """Return devices for a list of OCI Linux devices."""
    return [
        LinuxDevice(
            path=d.get("path", ""),
            type=d.get("type", ""),
            major=d.get("major", 0),
            minor=d.get("minor", 0),
            file_mode=optional_file_mode(d.get("fileMode")),
            uid=optional_uint32(d.get("uid")),
            gid=optional_uint32(d.get("gid")),
        )
        for d in devices or ()
    ]
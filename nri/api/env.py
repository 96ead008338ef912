"""Environment variables of containers."""

from __future__ import annotations

from dataclasses import dataclass

from nri.api.helpers import is_marked_for_removal


@dataclass
class KeyValue:
    """A single environment variable."""

    key: str = ""
    value: str = ""

    def to_oci(self) -> str:
        """Return the variable as an OCI environment entry."""
        return f"{self.key}={self.value}"

    def is_marked_for_removal(self) -> tuple[str, bool]:
        """Return the plain key and whether the variable is marked for removal."""
        return is_marked_for_removal(self.key)


def from_oci_env(entries: list[str] | None) -> list[KeyValue] | None:
    """Return key-value pairs for OCI environment entries."""
    if entries is None:
        return None
    result = []
    for entry in entries:
        key, _, value = entry.partition("=")
        result.append(KeyValue(key, value))
    return result
"""OCI hooks of containers."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from nri.api.optional import optional_int

_OCI_KEYS = {
    "prestart": "prestart",
    "create_runtime": "createRuntime",
    "create_container": "createContainer",
    "start_container": "startContainer",
    "poststart": "poststart",
    "poststop": "poststop",
}


@dataclass
class Hook:
    """A single OCI hook."""

    path: str = ""
    args: list[str] = field(default_factory=list)
    env: list[str] = field(default_factory=list)
    timeout: int | None = None

    def to_oci(self) -> dict[str, Any]:
        """Return the hook as an OCI hook."""
        return {
            "path": self.path,
            "args": list(self.args),
            "env": list(self.env),
            "timeout": self.timeout,
        }


@dataclass
class Hooks:
    """OCI hooks grouped by lifecycle stage."""

    prestart: list[Hook] = field(default_factory=list)
    create_runtime: list[Hook] = field(default_factory=list)
    create_container: list[Hook] = field(default_factory=list)
    start_container: list[Hook] = field(default_factory=list)
    poststart: list[Hook] = field(default_factory=list)
    poststop: list[Hook] = field(default_factory=list)

    def _stages(self) -> list[list[Hook]]:
        return [getattr(self, f.name) for f in fields(self)]

    def append(self, other: Hooks | None) -> Hooks:
        """Append the hooks of other to these and return these."""
        if other is None:
            return self
        for f in fields(self):
            getattr(self, f.name).extend(getattr(other, f.name))
        return self

    def hooks(self) -> Hooks | None:
        """Return self if any hook is set, None otherwise."""
        return self if any(self._stages()) else None

    def strip(self) -> Hooks | None:
        """Reduce hooks with no stage set to None."""
        return self.hooks()


def from_oci_hook_slice(hooks: list[dict[str, Any]] | None) -> list[Hook]:
    """Return hooks for a list of OCI hooks."""
    return [
        Hook(
            path=h.get("path", ""),
            args=list(h.get("args") or []),
            env=list(h.get("env") or []),
            timeout=optional_int(h.get("timeout")),
        )
        for h in hooks or ()
    ]


def from_oci_hooks(hooks: dict[str, Any] | None) -> Hooks | None:
    """Return hooks for OCI hooks."""
    if hooks is None:
        return None
    return Hooks(
        **{name: from_oci_hook_slice(hooks.get(key)) for name, key in _OCI_KEYS.items()}
    )
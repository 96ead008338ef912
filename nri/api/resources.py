"""Linux resource limits of containers."""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass, field
from typing import Any

from nri.api.optional import optional_bool, optional_int64, optional_uint64

_MEMORY_KEYS = {
    "limit": "limit",
    "reservation": "reservation",
    "swap": "swap",
    "kernel": "kernel",
    "kernel_tcp": "kernelTCP",
    "swappiness": "swappiness",
    "disable_oom_killer": "disableOOMKiller",
    "use_hierarchy": "useHierarchy",
}

_CPU_KEYS = {
    "shares": "shares",
    "quota": "quota",
    "period": "period",
    "realtime_runtime": "realtimeRuntime",
    "realtime_period": "realtimePeriod",
}


@dataclass
class LinuxMemory:
    """Memory limits; None means unset."""

    limit: int | None = None
    reservation: int | None = None
    swap: int | None = None
    kernel: int | None = None
    kernel_tcp: int | None = None
    swappiness: int | None = None
    disable_oom_killer: bool | None = None
    use_hierarchy: bool | None = None

    def strip(self) -> LinuxMemory | None:
        """Return None if nothing is set, self otherwise."""
        if all(getattr(self, name) is None for name in _MEMORY_KEYS):
            return None
        return self

    def _to_oci(self) -> dict[str, Any]:
        return {
            key: getattr(self, name)
            for name, key in _MEMORY_KEYS.items()
            if getattr(self, name) is not None
        }


@dataclass
class LinuxCPU:
    """CPU scheduling and cpuset attributes; None means unset."""

    shares: int | None = None
    quota: int | None = None
    period: int | None = None
    realtime_runtime: int | None = None
    realtime_period: int | None = None
    cpus: str = ""
    mems: str = ""

    def strip(self) -> LinuxCPU | None:
        """Return None if nothing is set, self otherwise."""
        unset = all(getattr(self, name) is None for name in _CPU_KEYS)
        if unset and not self.cpus and not self.mems:
            return None
        return self

    def _to_oci(self) -> dict[str, Any]:
        out = {
            key: getattr(self, name)
            for name, key in _CPU_KEYS.items()
            if getattr(self, name) is not None
        }
        if self.cpus:
            out["cpus"] = self.cpus
        if self.mems:
            out["mems"] = self.mems
        return out


@dataclass
class LinuxPids:
    """Process number limit."""

    limit: int = 0


@dataclass
class HugepageLimit:
    """Limit for one huge page size."""

    page_size: str = ""
    limit: int = 0


@dataclass
class LinuxDeviceCgroup:
    """A device cgroup access rule."""

    allow: bool = False
    type: str = ""
    major: int | None = None
    minor: int | None = None
    access: str = ""


@dataclass
class LinuxResources:
    """Linux resources of a container."""

    memory: LinuxMemory | None = None
    cpu: LinuxCPU | None = None
    hugepage_limits: list[HugepageLimit] = field(default_factory=list)
    blockio_class: str | None = None
    rdt_class: str | None = None
    unified: dict[str, str] = field(default_factory=dict)
    devices: list[LinuxDeviceCgroup] = field(default_factory=list)
    pids: LinuxPids | None = None

    def to_oci(self) -> dict[str, Any]:
        """Return the resources as OCI Linux resources.

        Memory and CPU are always present, empty when unset. Block I/O
        and RDT classes have no OCI counterpart and are left out.
        """
        out: dict[str, Any] = {
            "cpu": self.cpu._to_oci() if self.cpu is not None else {},
            "memory": self.memory._to_oci() if self.memory is not None else {},
        }
        if self.hugepage_limits:
            out["hugepageLimits"] = [
                {"pageSize": h.page_size, "limit": h.limit} for h in self.hugepage_limits
            ]
        if self.unified:
            out["unified"] = dict(self.unified)
        if self.devices:
            out["devices"] = [
                {
                    "allow": d.allow,
                    "type": d.type,
                    "major": d.major,
                    "minor": d.minor,
                    "access": d.access,
                }
                for d in self.devices
            ]
        if self.pids is not None:
            out["pids"] = {"limit": self.pids.limit}
        return out

    def copy(self) -> LinuxResources:
        """Return a deep copy of the resources."""
        return _copy.deepcopy(self)

    def strip(self) -> LinuxResources | None:
        """Strip empty parts, reducing fully empty resources to None."""
        self.memory = self.memory.strip() if self.memory is not None else None
        self.cpu = self.cpu.strip() if self.cpu is not None else None
        if (
            self.memory is None
            and self.cpu is None
            and not self.hugepage_limits
            and self.blockio_class is None
            and self.rdt_class is None
            and not self.unified
            and not self.devices
            and self.pids is None
        ):
            return None
        return self


def from_oci_linux_resources(
    resources: dict[str, Any] | None, annotations: dict[str, str] | None = None
) -> LinuxResources | None:
    """Return resources for OCI Linux resources; annotations are ignored."""
    if resources is None:
        return None
    out = LinuxResources()
    if (m := resources.get("memory")) is not None:
        out.memory = LinuxMemory(
            limit=optional_int64(m.get("limit")),
            reservation=optional_int64(m.get("reservation")),
            swap=optional_int64(m.get("swap")),
            kernel=optional_int64(m.get("kernel")),
            kernel_tcp=optional_int64(m.get("kernelTCP")),
            swappiness=optional_uint64(m.get("swappiness")),
            disable_oom_killer=optional_bool(m.get("disableOOMKiller")),
            use_hierarchy=optional_bool(m.get("useHierarchy")),
        )
    if (c := resources.get("cpu")) is not None:
        out.cpu = LinuxCPU(
            shares=optional_uint64(c.get("shares")),
            quota=optional_int64(c.get("quota")),
            period=optional_uint64(c.get("period")),
            realtime_runtime=optional_int64(c.get("realtimeRuntime")),
            realtime_period=optional_uint64(c.get("realtimePeriod")),
            cpus=c.get("cpus", ""),
            mems=c.get("mems", ""),
        )
    out.hugepage_limits = [
        HugepageLimit(page_size=h.get("pageSize", ""), limit=h.get("limit", 0))
        for h in resources.get("hugepageLimits") or ()
    ]
    out.devices = [
        LinuxDeviceCgroup(
            allow=d.get("allow", False),
            type=d.get("type", ""),
            major=optional_int64(d.get("major")),
            minor=optional_int64(d.get("minor")),
            access=d.get("access", ""),
        )
        for d in resources.get("devices") or ()
    ]
    if (p := resources.get("pids")) is not None:
        out.pids = LinuxPids(limit=p.get("limit", 0))
    out.unified = dict(resources.get("unified") or {})
    return out
"""Container adjustments requested by plugins at container creation."""

from __future__ import annotations

from dataclasses import dataclass, field

from nri.api.device import LinuxDevice
from nri.api.env import KeyValue
from nri.api.helpers import mark_for_removal
from nri.api.hooks import Hooks
from nri.api.ioprio import LinuxIOPriority
from nri.api.mount import Mount
from nri.api.namespace import LinuxNamespace
from nri.api.optional import (
    optional_bool,
    optional_int,
    optional_int64,
    optional_string,
    optional_uint64,
)
from nri.api.resources import (
    HugepageLimit,
    LinuxCPU,
    LinuxMemory,
    LinuxPids,
    LinuxResources,
)
from nri.api.seccomp import LinuxSeccomp

# A plugin is assumed never to add a key before deleting it: if both a
# deletion and an addition are recorded for a key, the addition wins.


@dataclass
class POSIXRlimit:
    """A POSIX resource limit."""

    type: str = ""
    hard: int = 0
    soft: int = 0


@dataclass
class CDIDevice:
    """A CDI device, referenced by its fully qualified name."""

    name: str = ""


@dataclass
class LinuxContainerAdjustment:
    """Linux-specific parts of a container adjustment."""

    devices: list[LinuxDevice] = field(default_factory=list)
    resources: LinuxResources | None = None
    cgroups_path: str = ""
    oom_score_adj: int | None = None
    io_priority: LinuxIOPriority | None = None
    seccomp_policy: LinuxSeccomp | None = None
    namespaces: list[LinuxNamespace] = field(default_factory=list)

    def strip(self) -> LinuxContainerAdjustment | None:
        """Strip empty parts, reducing a fully empty adjustment to None."""
        if self.resources is not None:
            self.resources = self.resources.strip()
        if (
            not self.devices
            and self.resources is None
            and not self.cgroups_path
            and self.oom_score_adj is None
        ):
            return None
        return self


@dataclass
class ContainerAdjustment:
    """Changes a plugin requests for a container being created."""

    annotations: dict[str, str] = field(default_factory=dict)
    mounts: list[Mount] = field(default_factory=list)
    env: list[KeyValue] = field(default_factory=list)
    hooks: Hooks | None = None
    linux: LinuxContainerAdjustment | None = None
    rlimits: list[POSIXRlimit] = field(default_factory=list)
    cdi_devices: list[CDIDevice] = field(default_factory=list)
    args: list[str] = field(default_factory=list)

    # Lazily created nested parts.

    def _linux(self) -> LinuxContainerAdjustment:
        if self.linux is None:
            self.linux = LinuxContainerAdjustment()
        return self.linux

    def _resources(self) -> LinuxResources:
        linux = self._linux()
        if linux.resources is None:
            linux.resources = LinuxResources()
        return linux.resources

    def _memory(self) -> LinuxMemory:
        resources = self._resources()
        if resources.memory is None:
            resources.memory = LinuxMemory()
        return resources.memory

    def _cpu(self) -> LinuxCPU:
        resources = self._resources()
        if resources.cpu is None:
            resources.cpu = LinuxCPU()
        return resources.cpu

    def _pids(self) -> LinuxPids:
        resources = self._resources()
        if resources.pids is None:
            resources.pids = LinuxPids()
        return resources.pids

    # Metadata, mounts, environment, command line.

    def add_annotation(self, key: str, value: str) -> None:
        """Record the addition of the annotation key=value."""
        self.annotations[key] = value

    def remove_annotation(self, key: str) -> None:
        """Record the removal of the annotation with the given key."""
        self.annotations[mark_for_removal(key)] = ""

    def add_mount(self, mount: Mount) -> None:
        """Record the addition of a mount."""
        self.mounts.append(mount)

    def remove_mount(self, container_path: str) -> None:
        """Record the removal of the mount at the given container path."""
        self.mounts.append(Mount(destination=mark_for_removal(container_path)))

    def add_env(self, key: str, value: str) -> None:
        """Record the addition of an environment variable."""
        self.env.append(KeyValue(key, value))

    def remove_env(self, key: str) -> None:
        """Record the removal of an environment variable."""
        self.env.append(KeyValue(key=mark_for_removal(key)))

    def set_args(self, args: list[str]) -> None:
        """Override the container command line."""
        self.args = list(args)

    def update_args(self, args: list[str]) -> None:
        """Override the command line without conflicting with other plugins."""
        self.args = ["", *args]

    def add_hooks(self, hooks: Hooks) -> None:
        """Record the addition of the given hooks."""
        if self.hooks is None:
            self.hooks = Hooks()
        self.hooks.append(hooks)

    def add_rlimit(self, typ: str, hard: int, soft: int) -> None:
        """Record the addition of a POSIX resource limit."""
        self.rlimits.append(POSIXRlimit(type=typ, hard=hard, soft=soft))

    # Devices and namespaces.

    def add_device(self, device: LinuxDevice) -> None:
        """Record the addition of a device."""
        self._linux().devices.append(device)

    def remove_device(self, path: str) -> None:
        """Record the removal of the device at the given path."""
        self._linux().devices.append(LinuxDevice(path=mark_for_removal(path)))

    def add_cdi_device(self, device: CDIDevice) -> None:
        """Record the addition of a CDI device."""
        self.cdi_devices.append(device)

    def add_or_replace_namespace(self, namespace: LinuxNamespace) -> None:
        """Record the addition or replacement of a namespace."""
        self._linux().namespaces.append(namespace)

    def remove_namespace(self, namespace: LinuxNamespace) -> None:
        """Record the removal of the namespace of the given type."""
        self._linux().namespaces.append(
            LinuxNamespace(type=mark_for_removal(namespace.type))
        )

    # Memory.

    def set_linux_memory_limit(self, value: int) -> None:
        """Record setting the memory limit."""
        self._memory().limit = optional_int64(value)

    def set_linux_memory_reservation(self, value: int) -> None:
        """Record setting the memory reservation."""
        self._memory().reservation = optional_int64(value)

    def set_linux_memory_swap(self, value: int) -> None:
        """Record setting the memory swap limit."""
        self._memory().swap = optional_int64(value)

    def set_linux_memory_kernel(self, value: int) -> None:
        """Record setting the kernel memory limit."""
        self._memory().kernel = optional_int64(value)

    def set_linux_memory_kernel_tcp(self, value: int) -> None:
        """Record setting the kernel TCP memory limit."""
        self._memory().kernel_tcp = optional_int64(value)

    def set_linux_memory_swappiness(self, value: int) -> None:
        """Record setting the memory swappiness."""
        self._memory().swappiness = optional_uint64(value)

    def set_linux_memory_disable_oom_killer(self) -> None:
        """Record disabling the OOM killer."""
        self._memory().disable_oom_killer = optional_bool(True)

    def set_linux_memory_use_hierarchy(self) -> None:
        """Record enabling hierarchical memory accounting."""
        self._memory().use_hierarchy = optional_bool(True)

    # CPU.

    def set_linux_cpu_shares(self, value: int) -> None:
        """Record setting the CPU shares."""
        self._cpu().shares = optional_uint64(value)

    def set_linux_cpu_quota(self, value: int) -> None:
        """Record setting the CPU quota."""
        self._cpu().quota = optional_int64(value)

    def set_linux_cpu_period(self, value: int) -> None:
        """Record setting the CPU period."""
        self._cpu().period = optional_uint64(value)

    def set_linux_cpu_realtime_runtime(self, value: int) -> None:
        """Record setting the realtime runtime."""
        self._cpu().realtime_runtime = optional_int64(value)

    def set_linux_cpu_realtime_period(self, value: int) -> None:
        """Record setting the realtime period."""
        self._cpu().realtime_period = optional_uint64(value)

    def set_linux_cpuset_cpus(self, value: str) -> None:
        """Record setting the cpuset CPUs."""
        self._cpu().cpus = value

    def set_linux_cpuset_mems(self, value: str) -> None:
        """Record setting the cpuset memory nodes."""
        self._cpu().mems = value

    # Other resources.

    def set_linux_pid_limits(self, value: int) -> None:
        """Record setting the maximum number of processes."""
        self._pids().limit = value

    def add_linux_hugepage_limit(self, page_size: str, value: int) -> None:
        """Record adding a huge page limit."""
        self._resources().hugepage_limits.append(
            HugepageLimit(page_size=page_size, limit=value)
        )

    def set_linux_blockio_class(self, value: str) -> None:
        """Record setting the block I/O class."""
        self._resources().blockio_class = optional_string(value)

    def set_linux_rdt_class(self, value: str) -> None:
        """Record setting the RDT class."""
        self._resources().rdt_class = optional_string(value)

    def add_linux_unified(self, key: str, value: str) -> None:
        """Record setting a cgroup v2 unified resource."""
        self._resources().unified[key] = value

    def set_linux_cgroups_path(self, value: str) -> None:
        """Record setting the cgroups path."""
        self._linux().cgroups_path = value

    def set_linux_oom_score_adj(self, value: int | None) -> None:
        """Record setting the OOM score adjustment; None unsets it."""
        self._linux().oom_score_adj = optional_int(value)

    def set_linux_io_priority(self, ioprio: LinuxIOPriority | None) -> None:
        """Record setting the I/O priority."""
        self._linux().io_priority = ioprio

    def set_linux_seccomp_policy(self, seccomp: LinuxSeccomp | None) -> None:
        """Record overriding the seccomp policy."""
        self._linux().seccomp_policy = seccomp

    def strip(self) -> ContainerAdjustment | None:
        """Strip empty parts, reducing a fully empty adjustment to None."""
        if self.hooks is not None:
            self.hooks = self.hooks.strip()
        if self.linux is not None:
            self.linux = self.linux.strip()
        if (
            not self.annotations
            and not self.mounts
            and not self.env
            and not self.rlimits
            and not self.cdi_devices
            and not self.args
            and self.hooks is None
            and self.linux is None
        ):
            return None
        return self
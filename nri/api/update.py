"""Container updates requested by plugins for existing containers."""

from __future__ import annotations

from dataclasses import dataclass

from nri.api.optional import (
    optional_bool,
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


@dataclass
class LinuxContainerUpdate:
    """Linux-specific parts of a container update."""

    resources: LinuxResources | None = None

    def strip(self) -> LinuxContainerUpdate | None:
        """Strip empty parts, reducing a fully empty update to None."""
        if self.resources is not None:
            self.resources = self.resources.strip()
        if self.resources is None:
            return None
        return self


@dataclass
class ContainerUpdate:
    """Changes a plugin requests for an existing container."""

    container_id: str = ""
    linux: LinuxContainerUpdate | None = None
    ignore_failure: bool = False

    # Lazily created nested parts.

    def _linux(self) -> LinuxContainerUpdate:
        if self.linux is None:
            self.linux = LinuxContainerUpdate()
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

    def set_container_id(self, container_id: str) -> None:
        """Set the id of the container to update."""
        self.container_id = container_id

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

    def set_ignore_failure(self) -> None:
        """Mark the update so that its failure does not fail the operation."""
        self.ignore_failure = True

    def strip(self) -> ContainerUpdate | None:
        """Strip empty parts, reducing a fully empty update to None."""
        if self.linux is not None:
            self.linux = self.linux.strip()
        if self.linux is None and not self.ignore_failure:
            return None
        return self
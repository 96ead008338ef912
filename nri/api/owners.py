"""Tracking of which plugin adjusted which container field.

The runtime uses these to detect conflicting requests from plugins.
None of this is safe for concurrent use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from nri.api.helpers import is_marked_for_removal, mark_for_removal


class Field(IntEnum):
    """Container fields that plugins can claim."""

    NONE = 0
    ANNOTATIONS = 1
    MOUNTS = 2
    OCI_HOOKS = 3
    DEVICES = 4
    CDI_DEVICES = 5
    NAMESPACE = 6
    ENV = 7
    ARGS = 8
    MEM_LIMIT = 9
    MEM_RESERVATION = 10
    MEM_SWAP_LIMIT = 11
    MEM_KERNEL_LIMIT = 12
    MEM_TCP_LIMIT = 13
    MEM_SWAPPINESS = 14
    MEM_DISABLE_OOM_KILLER = 15
    MEM_USE_HIERARCHY = 16
    CPU_SHARES = 17
    CPU_QUOTA = 18
    CPU_PERIOD = 19
    CPU_REALTIME_RUNTIME = 20
    CPU_REALTIME_PERIOD = 21
    CPUSET_CPUS = 22
    CPUSET_MEMS = 23
    PIDS_LIMIT = 24
    HUGEPAGE_LIMITS = 25
    BLOCKIO_CLASS = 26
    RDT_CLASS = 27
    CGROUPS_UNIFIED = 28
    CGROUPS_PATH = 29
    OOM_SCORE_ADJ = 30
    RLIMITS = 31
    IO_PRIORITY = 32
    SECCOMP_POLICY = 33

    def __str__(self) -> str:
        return _FIELD_LABELS[self]


_FIELD_LABELS: dict[Field, str] = {
    Field.NONE: "None",
    Field.ANNOTATIONS: "Annotations",
    Field.MOUNTS: "Mounts",
    Field.OCI_HOOKS: "OciHooks",
    Field.DEVICES: "Devices",
    Field.CDI_DEVICES: "CdiDevices",
    Field.NAMESPACE: "Namespace",
    Field.ENV: "Env",
    Field.ARGS: "Args",
    Field.MEM_LIMIT: "MemLimit",
    Field.MEM_RESERVATION: "MemReservation",
    Field.MEM_SWAP_LIMIT: "MemSwapLimit",
    Field.MEM_KERNEL_LIMIT: "MemKernelLimit",
    Field.MEM_TCP_LIMIT: "MemTCPLimit",
    Field.MEM_SWAPPINESS: "MemSwappiness",
    Field.MEM_DISABLE_OOM_KILLER: "MemDisableOomKiller",
    Field.MEM_USE_HIERARCHY: "MemUseHierarchy",
    Field.CPU_SHARES: "CPUShares",
    Field.CPU_QUOTA: "CPUQuota",
    Field.CPU_PERIOD: "CPUPeriod",
    Field.CPU_REALTIME_RUNTIME: "CPURealtimeRuntime",
    Field.CPU_REALTIME_PERIOD: "CPURealtimePeriod",
    Field.CPUSET_CPUS: "CPUSetCPUs",
    Field.CPUSET_MEMS: "CPUSetMems",
    Field.PIDS_LIMIT: "PidsLimit",
    Field.HUGEPAGE_LIMITS: "HugepageLimits",
    Field.BLOCKIO_CLASS: "BlockioClass",
    Field.RDT_CLASS: "RdtClass",
    Field.CGROUPS_UNIFIED: "CgroupsUnified",
    Field.CGROUPS_PATH: "CgroupsPath",
    Field.OOM_SCORE_ADJ: "OomScoreAdj",
    Field.RLIMITS: "Rlimits",
    Field.IO_PRIORITY: "IoPriority",
    Field.SECCOMP_POLICY: "SeccompPolicy",
}


class OwnershipConflict(Exception):
    """Two plugins tried to set the same container field."""

    def __init__(self, field: Field, plugin: str, other: str, *qualifiers: str) -> None:
        self.field = Field(field)
        self.plugin = plugin
        self.other = other
        self.qualifiers = qualifiers
        super().__init__(
            f'plugins "{plugin}" and "{other}" both tried to set '
            f"{self.field} {' '.join(qualifiers)}"
        )


@dataclass
class CompoundFieldOwners:
    """Owners of the entries of one compound field, by entry key."""

    owners: dict[str, str] = field(default_factory=dict)


@dataclass
class FieldOwners:
    """Owners of the fields of one container."""

    simple: dict[Field, str] = field(default_factory=dict)
    compound: dict[Field, CompoundFieldOwners] = field(default_factory=dict)

    def is_compound_conflict(self, field: Field, key: str, plugin: str) -> None:
        """Raise OwnershipConflict if another plugin owns the entry."""
        field = Field(field)
        owners = self.compound.get(field)
        if owners is None:
            self.compound[field] = CompoundFieldOwners()
            return
        other = owners.owners.get(key)
        if other is None:
            return
        clearer, marked = is_marked_for_removal(other)
        if marked:
            if clearer == plugin:
                return
            other = clearer
        raise self.conflict(field, plugin, other, key)

    def is_simple_conflict(self, field: Field, plugin: str) -> None:
        """Raise OwnershipConflict if another plugin owns the field."""
        field = Field(field)
        other = self.simple.get(field)
        if other is None:
            return
        clearer, marked = is_marked_for_removal(other)
        if marked:
            if clearer == plugin:
                return
            other = clearer
        raise self.conflict(field, plugin, other)

    def claim_compound(self, field: Field, key: str, plugin: str) -> None:
        """Claim an entry of a compound field for the plugin."""
        field = Field(field)
        self.is_compound_conflict(field, key, plugin)
        self.compound[field].owners[key] = plugin

    def claim_simple(self, field: Field, plugin: str) -> None:
        """Claim a simple field for the plugin."""
        field = Field(field)
        self.is_simple_conflict(field, plugin)
        self.simple[field] = plugin

    def claim_hooks(self, plugin: str) -> None:
        """Claim the OCI hooks; hooks never conflict."""
        plugins = plugin
        current = self.simple_owner(Field.OCI_HOOKS)
        if current is not None:
            self.clear_simple(Field.OCI_HOOKS, plugin)
            plugins = f"{current},{plugin}"
        try:
            self.claim_simple(Field.OCI_HOOKS, plugins)
        except OwnershipConflict:
            pass

    def clear_compound(self, field: Field, key: str, plugin: str) -> None:
        """Record the removal of an entry of a compound field by the plugin."""
        owners = self.compound.setdefault(Field(field), CompoundFieldOwners())
        owners.owners[key] = mark_for_removal(plugin)

    def clear_simple(self, field: Field, plugin: str) -> None:
        """Record the removal of a simple field by the plugin."""
        self.simple[Field(field)] = mark_for_removal(plugin)

    def conflict(
        self, field: Field, plugin: str, other: str, *qualifiers: str
    ) -> OwnershipConflict:
        """Return the conflict error for the field."""
        return OwnershipConflict(field, plugin, other, *qualifiers)

    def compound_owner(self, field: Field, key: str) -> str | None:
        """Return the owner of an entry of a compound field, if any."""
        owners = self.compound.get(Field(field))
        if owners is None:
            return None
        return owners.owners.get(key)

    def compound_owner_map(self, field: Field) -> dict[str, str] | None:
        """Return all owners of a compound field, if any were recorded."""
        owners = self.compound.get(Field(field))
        return None if owners is None else owners.owners

    def simple_owner(self, field: Field) -> str | None:
        """Return the owner of a simple field, if any."""
        return self.simple.get(Field(field))


@dataclass
class OwningPlugins:
    """Field owners of containers, by container id."""

    owners: dict[str, FieldOwners] = field(default_factory=dict)

    def _must_owners_for(self, container_id: str) -> FieldOwners:
        return self.owners.setdefault(container_id, FieldOwners())

    def owners_for(self, container_id: str) -> FieldOwners | None:
        """Return the field owners of a container, if any were recorded."""
        return self.owners.get(container_id)

    def claim_compound(
        self, container_id: str, field: Field, key: str, plugin: str
    ) -> None:
        """Claim an entry of a compound field of a container."""
        self._must_owners_for(container_id).claim_compound(field, key, plugin)

    def claim_simple(self, container_id: str, field: Field, plugin: str) -> None:
        """Claim a simple field of a container."""
        self._must_owners_for(container_id).claim_simple(field, plugin)

    def claim_hooks(self, container_id: str, plugin: str) -> None:
        """Claim the OCI hooks of a container."""
        self._must_owners_for(container_id).claim_hooks(plugin)

    def clear_compound(
        self, container_id: str, field: Field, key: str, plugin: str
    ) -> None:
        """Record the removal of an entry of a compound field of a container."""
        self._must_owners_for(container_id).clear_compound(field, key, plugin)

    def clear_simple(self, container_id: str, field: Field, plugin: str) -> None:
        """Record the removal of a simple field of a container."""
        self._must_owners_for(container_id).clear_simple(field, plugin)

    def compound_owner(self, container_id: str, field: Field, key: str) -> str | None:
        """Return the owner of an entry of a compound field of a container."""
        owners = self.owners_for(container_id)
        return None if owners is None else owners.compound_owner(field, key)

    def compound_owner_map(
        self, container_id: str, field: Field
    ) -> dict[str, str] | None:
        """Return all owners of a compound field of a container."""
        owners = self.owners_for(container_id)
        return None if owners is None else owners.compound_owner_map(field)

    def simple_owner(self, container_id: str, field: Field) -> str | None:
        """Return the owner of a simple field of a container."""
        owners = self.owners_for(container_id)
        return None if owners is None else owners.simple_owner(field)
"""Seccomp policies of containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from nri.api.optional import optional_uint32


@dataclass
class LinuxSeccompArg:
    """A seccomp syscall argument filter."""

    index: int = 0
    value: int = 0
    value_two: int = 0
    op: str = ""


@dataclass
class LinuxSyscall:
    """A seccomp rule for a set of syscalls."""

    names: list[str] = field(default_factory=list)
    action: str = ""
    errno_ret: int | None = None
    args: list[LinuxSeccompArg] = field(default_factory=list)


@dataclass
class LinuxSeccomp:
    """A seccomp policy."""

    default_action: str = ""
    default_errno: int | None = None
    architectures: list[str] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)
    listener_path: str = ""
    listener_metadata: str = ""
    syscalls: list[LinuxSyscall] = field(default_factory=list)


def from_oci_linux_seccomp(seccomp: dict[str, Any]) -> LinuxSeccomp:
    """Return the seccomp policy for an OCI seccomp policy."""
    return LinuxSeccomp(
        default_action=seccomp.get("defaultAction", ""),
        default_errno=optional_uint32(seccomp.get("defaultErrnoRet")),
        architectures=[str(a) for a in seccomp.get("architectures") or ()],
        flags=[str(f) for f in seccomp.get("flags") or ()],
        listener_path=seccomp.get("listenerPath", ""),
        listener_metadata=seccomp.get("listenerMetadata", ""),
        syscalls=from_oci_linux_syscalls(seccomp.get("syscalls")),
    )


def from_oci_linux_syscalls(syscalls: list[dict[str, Any]] | None) -> list[LinuxSyscall]:
    """Return syscall rules for a list of OCI syscall rules."""
    return [
        LinuxSyscall(
            names=list(s.get("names") or ()),
            action=s.get("action", ""),
            errno_ret=optional_uint32(s.get("errnoRet")),
            args=from_oci_linux_seccomp_args(s.get("args")),
        )
        for s in syscalls or ()
    ]


def from_oci_linux_seccomp_args(
    args: list[dict[str, Any]] | None,
) -> list[LinuxSeccompArg]:
    """Return argument filters for a list of OCI argument filters."""
    return [
        LinuxSeccompArg(
            index=optional_uint32(a.get("index", 0)) or 0,
            value=a.get("value", 0),
            value_two=a.get("valueTwo", 0),
            op=a.get("op", ""),
        )
        for a in args or ()
    ]


def to_oci_linux_syscalls(syscalls: list[LinuxSyscall] | None) -> list[dict[str, Any]]:
    """Return OCI syscall rules for a list of syscall rules."""
    return [
        {
            "names": list(s.names),
            "action": s.action,
            "errnoRet": s.errno_ret,
            "args": to_oci_linux_seccomp_args(s.args),
        }
        for s in syscalls or ()
    ]


def to_oci_linux_seccomp_args(
    args: list[LinuxSeccompArg] | None,
) -> list[dict[str, Any]]:
    """Return OCI argument filters for a list of argument filters."""
    return [
        {"index": a.index, "value": a.value, "valueTwo": a.value_two, "op": a.op}
        for a in args or ()
    ]
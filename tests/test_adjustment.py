import pytest

from nri.api.adjustment import (
    CDIDevice,
    ContainerAdjustment,
    LinuxContainerAdjustment,
    POSIXRlimit,
)
from nri.api.device import LinuxDevice
from nri.api.helpers import is_marked_for_removal, mark_for_removal
from nri.api.hooks import Hook, Hooks
from nri.api.ioprio import IOPrioClass, LinuxIOPriority
from nri.api.mount import Mount
from nri.api.namespace import LinuxNamespace
from nri.api.optional import optional_uint64
from nri.api.resources import HugepageLimit
from nri.api.seccomp import LinuxSeccomp


def test_annotations_add_and_remove():
    a = ContainerAdjustment()
    a.add_annotation("key", "value")
    a.remove_annotation("other")
    assert a.annotations == {"key": "value", mark_for_removal("other"): ""}


def test_mounts_add_and_remove():
    a = ContainerAdjustment()
    m = Mount(destination="/data", type="bind", source="/host")
    a.add_mount(m)
    a.remove_mount("/old")
    assert a.mounts[0] is m
    assert a.mounts[1].is_marked_for_removal() == ("/old", True)


def test_env_add_and_remove():
    a = ContainerAdjustment()
    a.add_env("FOO", "bar")
    a.remove_env("BAZ")
    assert a.env[0].to_oci() == "FOO=bar"
    assert a.env[1].is_marked_for_removal() == ("BAZ", True)


def test_set_args_copies():
    a = ContainerAdjustment()
    args = ["/bin/sh", "-c", "true"]
    a.set_args(args)
    args.append("extra")
    assert a.args == ["/bin/sh", "-c", "true"]


def test_update_args_prefixes_empty_marker():
    a = ContainerAdjustment()
    a.update_args(["/bin/sh"])
    assert a.args == ["", "/bin/sh"]


def test_add_hooks_accumulates():
    a = ContainerAdjustment()
    a.add_hooks(Hooks(prestart=[Hook(path="/a")]))
    a.add_hooks(Hooks(prestart=[Hook(path="/b")], poststop=[Hook(path="/c")]))
    assert [h.path for h in a.hooks.prestart] == ["/a", "/b"]
    assert [h.path for h in a.hooks.poststop] == ["/c"]


def test_rlimit_and_cdi_device():
    a = ContainerAdjustment()
    a.add_rlimit("RLIMIT_NOFILE", 1024, 512)
    a.add_cdi_device(CDIDevice(name="vendor.com/gpu=0"))
    assert a.rlimits == [POSIXRlimit(type="RLIMIT_NOFILE", hard=1024, soft=512)]
    assert a.cdi_devices == [CDIDevice(name="vendor.com/gpu=0")]


def test_devices_add_and_remove():
    a = ContainerAdjustment()
    d = LinuxDevice(path="/dev/null", type="c", major=1, minor=3)
    a.add_device(d)
    a.remove_device("/dev/zero")
    assert a.linux.devices[0] is d
    assert a.linux.devices[1].is_marked_for_removal() == ("/dev/zero", True)


def test_namespaces_add_and_remove():
    a = ContainerAdjustment()
    a.add_or_replace_namespace(LinuxNamespace(type="network", path="/proc/1/ns/net"))
    a.remove_namespace(LinuxNamespace(type="ipc"))
    types = [is_marked_for_removal(n.type) for n in a.linux.namespaces]
    assert types == [("network", False), ("ipc", True)]


def test_memory_setters():
    a = ContainerAdjustment()
    a.set_linux_memory_limit(1000)
    a.set_linux_memory_reservation(500)
    a.set_linux_memory_swap(2000)
    a.set_linux_memory_kernel(300)
    a.set_linux_memory_kernel_tcp(200)
    a.set_linux_memory_swappiness(60)
    a.set_linux_memory_disable_oom_killer()
    a.set_linux_memory_use_hierarchy()
    m = a.linux.resources.memory
    assert (m.limit, m.reservation, m.swap, m.kernel, m.kernel_tcp) == (
        1000, 500, 2000, 300, 200,
    )
    assert m.swappiness == 60
    assert m.disable_oom_killer is True
    assert m.use_hierarchy is True


def test_cpu_setters():
    a = ContainerAdjustment()
    a.set_linux_cpu_shares(1024)
    a.set_linux_cpu_quota(50000)
    a.set_linux_cpu_period(100000)
    a.set_linux_cpu_realtime_runtime(10)
    a.set_linux_cpu_realtime_period(20)
    a.set_linux_cpuset_cpus("0-3")
    a.set_linux_cpuset_mems("0")
    c = a.linux.resources.cpu
    assert (c.shares, c.quota, c.period) == (1024, 50000, 100000)
    assert (c.realtime_runtime, c.realtime_period) == (10, 20)
    assert (c.cpus, c.mems) == ("0-3", "0")


def test_cpu_period_negative_wraps_as_unsigned():
    a = ContainerAdjustment()
    a.set_linux_cpu_period(-1)
    assert a.linux.resources.cpu.period == optional_uint64(-1)


def test_memory_limit_out_of_range_raises():
    a = ContainerAdjustment()
    with pytest.raises(ValueError):
        a.set_linux_memory_limit(2**70)


def test_other_resources():
    a = ContainerAdjustment()
    a.set_linux_pid_limits(100)
    a.add_linux_hugepage_limit("2MB", 4096)
    a.set_linux_blockio_class("slow")
    a.set_linux_rdt_class("gold")
    a.add_linux_unified("memory.high", "1G")
    r = a.linux.resources
    assert r.pids.limit == 100
    assert r.hugepage_limits == [HugepageLimit(page_size="2MB", limit=4096)]
    assert (r.blockio_class, r.rdt_class) == ("slow", "gold")
    assert r.unified == {"memory.high": "1G"}


def test_linux_settings():
    a = ContainerAdjustment()
    a.set_linux_cgroups_path("/kubepods/pod1")
    a.set_linux_oom_score_adj(-500)
    prio = LinuxIOPriority(ioclass=IOPrioClass.IOPRIO_CLASS_BE, priority=4)
    a.set_linux_io_priority(prio)
    seccomp = LinuxSeccomp(default_action="SCMP_ACT_ALLOW")
    a.set_linux_seccomp_policy(seccomp)
    assert a.linux.cgroups_path == "/kubepods/pod1"
    assert a.linux.oom_score_adj == -500
    assert a.linux.io_priority is prio
    assert a.linux.seccomp_policy is seccomp


def test_oom_score_adj_none_unsets():
    a = ContainerAdjustment()
    a.set_linux_oom_score_adj(5)
    a.set_linux_oom_score_adj(None)
    assert a.linux.oom_score_adj is None


def test_strip_empty_adjustment_is_none():
    assert ContainerAdjustment().strip() is None


def test_strip_reduces_empty_nested_parts():
    a = ContainerAdjustment(hooks=Hooks(), linux=LinuxContainerAdjustment())
    assert a.strip() is None


def test_strip_keeps_non_empty():
    a = ContainerAdjustment()
    a.add_env("A", "1")
    a.add_hooks(Hooks())
    stripped = a.strip()
    assert stripped is a
    assert stripped.hooks is None
    assert stripped.linux is None


def test_strip_keeps_linux_resources():
    a = ContainerAdjustment()
    a.set_linux_memory_limit(1000)
    stripped = a.strip()
    assert stripped is a
    assert stripped.linux.resources.memory.limit == 1000
    assert stripped.linux.resources.cpu is None


def test_linux_adjustment_strip():
    linux = LinuxContainerAdjustment(cgroups_path="/a")
    assert linux.strip() is linux
    assert LinuxContainerAdjustment(oom_score_adj=0).strip() is not None
    assert LinuxContainerAdjustment().strip() is None
from nri.api.resources import (
    HugepageLimit,
    LinuxCPU,
    LinuxMemory,
    LinuxPids,
    LinuxResources,
    from_oci_linux_resources,
)

OCI_RESOURCES = {
    "cpu": {
        "shares": 1024,
        "quota": 50000,
        "period": 100000,
        "realtimeRuntime": 0,
        "realtimePeriod": 0,
        "cpus": "0-3",
        "mems": "0",
    },
    "memory": {
        "limit": 1 << 30,
        "reservation": 1 << 29,
        "swap": 1 << 31,
        "kernel": 0,
        "kernelTCP": 0,
        "swappiness": 60,
        "disableOOMKiller": True,
        "useHierarchy": False,
    },
    "hugepageLimits": [{"pageSize": "2MB", "limit": 4096}],
    "unified": {"memory.high": "1000000"},
    "devices": [
        {"allow": False, "type": "a", "major": None, "minor": None, "access": "rwm"},
        {"allow": True, "type": "c", "major": 1, "minor": 3, "access": "rw"},
    ],
    "pids": {"limit": 100},
}


def test_round_trip_through_oci():
    assert from_oci_linux_resources(OCI_RESOURCES, {}).to_oci() == OCI_RESOURCES


def test_from_oci_none():
    assert from_oci_linux_resources(None, None) is None


def test_to_oci_of_empty_resources():
    assert LinuxResources().to_oci() == {"cpu": {}, "memory": {}}


def test_from_oci_values():
    res = from_oci_linux_resources(OCI_RESOURCES, None)
    assert res.memory.limit == 1 << 30
    assert res.memory.disable_oom_killer is True
    assert res.cpu.cpus == "0-3"
    assert res.hugepage_limits == [HugepageLimit(page_size="2MB", limit=4096)]
    assert res.pids == LinuxPids(limit=100)
    assert res.blockio_class is None


def test_copy_is_equal_and_independent():
    res = from_oci_linux_resources(OCI_RESOURCES, None)
    res.blockio_class = "slow"
    res.rdt_class = "gold"
    dup = res.copy()
    assert dup == res
    dup.memory.limit = 1
    dup.unified["x"] = "y"
    dup.hugepage_limits.append(HugepageLimit("1GB", 1))
    assert res.memory.limit == 1 << 30
    assert "x" not in res.unified
    assert len(res.hugepage_limits) == 1
    assert dup.blockio_class == "slow"
    assert dup.rdt_class == "gold"


def test_memory_and_cpu_strip():
    assert LinuxMemory().strip() is None
    mem = LinuxMemory(swappiness=0)
    assert mem.strip() is mem
    assert LinuxCPU().strip() is None
    cpu = LinuxCPU(mems="1")
    assert cpu.strip() is cpu


def test_resources_strip():
    assert LinuxResources().strip() is None
    assert LinuxResources(memory=LinuxMemory(), cpu=LinuxCPU()).strip() is None
    res = LinuxResources(memory=LinuxMemory(), rdt_class="")
    assert res.strip() is res
    assert res.memory is None
    res = LinuxResources(pids=LinuxPids())
    assert res.strip() is res
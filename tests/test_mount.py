from nri.api.mount import SELINUX_RELABEL, Mount, from_oci_mounts


def make_mount(**kw):
    base = dict(destination="/data", type="bind", source="/host/data", options=["rbind", "ro"])
    base.update(kw)
    return Mount(**base)


def test_to_oci_copies_fields():
    mount = make_mount()
    oci, propagation = mount.to_oci()
    assert oci == {
        "destination": "/data",
        "type": "bind",
        "source": "/host/data",
        "options": ["rbind", "ro"],
    }
    assert propagation is None
    oci["options"].append("x")
    assert mount.options == ["rbind", "ro"]


def test_to_oci_reports_last_propagation_option():
    mount = make_mount(options=["rshared", "ro", "rslave"])
    _, propagation = mount.to_oci()
    assert propagation == "rslave"


def test_round_trip_through_oci():
    mounts = [make_mount(), make_mount(destination="/tmp", options=[SELINUX_RELABEL])]
    oci = [m.to_oci()[0] for m in mounts]
    assert from_oci_mounts(oci) == mounts


def test_from_oci_mounts_empty():
    assert from_oci_mounts(None) == []
    assert from_oci_mounts([{"destination": "/x"}]) == [Mount(destination="/x")]


def test_cmp():
    mount = make_mount()
    assert mount.cmp(make_mount())
    assert not mount.cmp(None)
    assert not mount.cmp(make_mount(destination="/other"))
    assert not mount.cmp(make_mount(source="/other"))
    assert not mount.cmp(make_mount(type="tmpfs"))
    assert not mount.cmp(make_mount(options=["ro"]))


def test_cmp_compares_option_count_only():
    assert make_mount().cmp(make_mount(options=["a", "b"]))


def test_marked_for_removal():
    assert Mount(destination="-/data").is_marked_for_removal() == ("/data", True)
    assert Mount(destination="/data").is_marked_for_removal() == ("/data", False)
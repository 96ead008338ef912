from nri.api.namespace import LinuxNamespace, from_oci_linux_namespaces


def test_from_oci_linux_namespaces():
    result = from_oci_linux_namespaces(
        [{"type": "network", "path": "/var/run/netns/x"}, {"type": "pid"}]
    )
    assert result == [
        LinuxNamespace("network", "/var/run/netns/x"),
        LinuxNamespace("pid", ""),
    ]


def test_from_oci_linux_namespaces_empty():
    assert from_oci_linux_namespaces(None) == []
    assert from_oci_linux_namespaces([]) == []


def test_marked_for_removal():
    assert LinuxNamespace("-network").is_marked_for_removal() == ("network", True)
    assert LinuxNamespace("network").is_marked_for_removal() == ("network", False)
    assert LinuxNamespace("").is_marked_for_removal() == ("", False)
from nri.api.hooks import Hook, Hooks, from_oci_hook_slice, from_oci_hooks


def hook(path="/bin/true", timeout=None):
    return Hook(path=path, args=[path, "-v"], env=["A=1"], timeout=timeout)


def test_hook_to_oci_and_back():
    original = [hook(timeout=5), hook("/bin/false")]
    oci = [h.to_oci() for h in original]
    assert oci[0] == {"path": "/bin/true", "args": ["/bin/true", "-v"], "env": ["A=1"], "timeout": 5}
    assert from_oci_hook_slice(oci) == original


def test_hook_to_oci_copies_lists():
    h = hook()
    oci = h.to_oci()
    oci["args"].append("x")
    assert h.args == ["/bin/true", "-v"]


def test_from_oci_hooks_none():
    assert from_oci_hooks(None) is None


def test_from_oci_hooks_maps_stages():
    result = from_oci_hooks(
        {"createRuntime": [{"path": "/a"}], "poststop": [{"path": "/b", "timeout": 3}]}
    )
    assert result == Hooks(
        create_runtime=[Hook(path="/a")], poststop=[Hook(path="/b", timeout=3)]
    )


def test_append_extends_every_stage():
    hooks = Hooks(prestart=[hook("/a")])
    other = Hooks(prestart=[hook("/b")], poststart=[hook("/c")])
    result = hooks.append(other)
    assert result is hooks
    assert [h.path for h in hooks.prestart] == ["/a", "/b"]
    assert [h.path for h in hooks.poststart] == ["/c"]


def test_append_none_is_identity():
    hooks = Hooks(prestart=[hook()])
    assert hooks.append(None) is hooks
    assert hooks.prestart == [hook()]


def test_hooks_and_strip_of_empty():
    empty = Hooks()
    assert empty.hooks() is None
    assert empty.strip() is None


def test_hooks_and_strip_of_non_empty():
    hooks = Hooks(start_container=[hook()])
    assert hooks.hooks() is hooks
    assert hooks.strip() is hooks
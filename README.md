# nri

Building blocks for the Node Resource Interface: the data model plugins use
to adjust and update containers, the bookkeeping a runtime uses to detect
conflicting requests from several plugins, and socket utilities for carrying
plugin traffic.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

- `nri.api.event` – `Event`, `EventMask` and `parse_event_mask` for
  selecting the runtime events a plugin subscribes to.
- `nri.api.adjustment` – `ContainerAdjustment`, with which a plugin asks for
  changes to a container being created (annotations, mounts, environment,
  command line, hooks, rlimits, devices, CDI devices, namespaces, memory,
  CPU, pids, huge pages, block I/O and RDT classes, cgroup settings, OOM
  score, I/O priority, seccomp policy).
- `nri.api.update` – `ContainerUpdate`, for changing the resources of an
  existing container.
- `nri.api.resources`, `nri.api.device`, `nri.api.mount`, `nri.api.hooks`,
  `nri.api.env`, `nri.api.namespace`, `nri.api.ioprio`, `nri.api.seccomp` –
  the parts of a container specification as dataclasses, with conversion to
  and from plain OCI-style dictionaries and lists (`from_oci_*` functions
  and `to_oci` methods).
- `nri.api.container` – `Container` and `PodSandbox`.
- `nri.api.optional` – normalisation and range checking of optional
  integer, string, bool and file-mode values; `None` means unset.
- `nri.api.helpers` – `mark_for_removal`, `is_marked_for_removal` and
  `clear_removal_marker` for the `-` prefix that marks a key for removal.
- `nri.api.owners` – `Field`, `FieldOwners` and `OwningPlugins`, which
  record which plugin set which field of which container and raise
  `OwnershipConflict` when two plugins try to set the same thing.
- `nri.api.validate` – `ValidateContainerAdjustmentRequest` and
  `ValidateContainerAdjustmentResponse`; a rejection is raised as
  `ValidationRejected`.
- `nri.api.plugin` – `parse_plugin_name` and `check_plugin_index` for plugin
  names of the form `NN-name`, plus well-known socket path, environment
  variable names and default timeouts.
- `nri.plugin.annotations` – `get_effective_annotation`, resolving pod- and
  container-scoped annotations.
- `nri.net.socketpair` – `SocketPair`, a connected pair of Unix stream
  sockets.
- `nri.net.conn` – `ConnListener`, a listener handing out one pre-connected
  connection, and `new_fd_conn` for wrapping a socket descriptor.
- `nri.net.multiplex` – `Mux`, `MuxConn` and `multiplex`, running several
  logical connections over one stream socket.
- `nri.log` – a replaceable logger (`set_logger`, `get_logger`) used by the
  package; by default it forwards to the standard `logging` logger `nri`.

## Examples

Subscribing to events:

```python
from nri.api.event import parse_event_mask

mask = parse_event_mask("runpodsandbox,createcontainer")
print(mask.pretty_string())   # RunPodSandbox,CreateContainer
```

`all`, `pod`, `podsandbox` and `container` select groups of events; an
unknown name raises `ValueError`.

Describing an adjustment:

```python
from nri.api.adjustment import ContainerAdjustment

adjust = ContainerAdjustment()
adjust.add_annotation("example.com/owner", "team-a")
adjust.remove_env("DEBUG")
adjust.add_env("LOG_LEVEL", "info")
adjust.set_linux_memory_limit(512 * 1024 * 1024)
adjust.set_linux_cpu_shares(1024)
```

`strip()` reduces an adjustment with nothing set to `None`.

Keys prefixed with `-` mark removals:

```python
from nri.api.helpers import mark_for_removal, is_marked_for_removal

is_marked_for_removal(mark_for_removal("PATH"))   # ("PATH", True)
```

Tracking ownership across plugins:

```python
from nri.api.owners import Field, OwningPlugins, OwnershipConflict

owners = OwningPlugins()
owners.claim_simple("ctr0", Field.MEM_LIMIT, "10-a")
try:
    owners.claim_simple("ctr0", Field.MEM_LIMIT, "20-b")
except OwnershipConflict as exc:
    print(exc)   # plugins "20-b" and "10-a" both tried to set MemLimit

owners.clear_simple("ctr0", Field.MEM_LIMIT, "20-b")
owners.claim_simple("ctr0", Field.MEM_LIMIT, "20-b")   # allowed now
```

A plugin that first clears a field may claim it even if another plugin set
it. Hooks never conflict: `claim_hooks` records every claiming plugin.

Multiplexing connections over a socket pair:

```python
from nri.net.socketpair import SocketPair
from nri.net.multiplex import multiplex

pair = SocketPair()
left = multiplex(pair.local_conn())
right = multiplex(pair.peer_conn())

a = left.open(1)
b = right.open(1)
a.write(b"hello")
print(b.read(64))   # b'hello'

left.close()
right.close()
```

Each write is delivered as one message; writes larger than
`MAX_PAYLOAD_SIZE` are split into several messages.

## What it does not do

The package is a library and has no command-line program. It does not speak
the RPC protocol between a runtime and its plugins, does not register,
launch or supervise plugins, and does not serialize the data model to a
wire format: the classes are plain dataclasses and the OCI conversions work
on plain dictionaries.
"""Plugin naming conventions, well-known paths and default timeouts."""

from __future__ import annotations

from datetime import timedelta

DEFAULT_SOCKET_PATH = "/var/run/nri/nri.sock"
"""Default socket path for external plugins."""

PLUGIN_SOCKET_ENV_VAR = "NRI_PLUGIN_SOCKET"
"""Informs plugins about pre-connected sockets."""

PLUGIN_NAME_ENV_VAR = "NRI_PLUGIN_NAME"
"""Informs launched plugins about their name."""

PLUGIN_IDX_ENV_VAR = "NRI_PLUGIN_IDX"
"""Informs launched plugins about their index."""

DEFAULT_PLUGIN_REGISTRATION_TIMEOUT = timedelta(seconds=5)
DEFAULT_PLUGIN_REQUEST_TIMEOUT = timedelta(seconds=2)


def parse_plugin_name(name: str) -> tuple[str, str]:
    """Split a plugin (file)name of the form idx-name into index and base."""
    idx, sep, base = name.partition("-")
    if not sep:
        raise ValueError(f"invalid plugin name {name!r}, idx-pluginname expected")
    check_plugin_index(idx)
    return idx, base


def check_plugin_index(idx: str) -> None:
    """Raise ValueError unless idx consists of exactly two ASCII digits."""
    if len(idx.encode("utf-8")) != 2:
        raise ValueError(f"invalid plugin index {idx!r}, must be 2 digits")
    if not all("0" <= c <= "9" for c in idx):
        raise ValueError(f"invalid plugin index {idx!r} (not [0-9][0-9])")
"""Helpers for marking keys of adjustments for removal."""

_REMOVAL_MARKER = "-"


def is_marked_for_removal(key: str) -> tuple[str, bool]:
    """Return the key without its removal marker and whether it was marked.

    The key can be an annotation name, a mount container path, a device
    path, a namespace type or an environment variable name.
    """
    if not key:
        return "", False
    if not key.startswith(_REMOVAL_MARKER):
        return key, False
    return key[1:], True


def mark_for_removal(key: str) -> str:
    """Return the key marked for removal."""
    return _REMOVAL_MARKER + key


def clear_removal_marker(key: str) -> str:
    """Return the key with a single leading removal marker removed."""
    if key.startswith(_REMOVAL_MARKER):
        return key[1:]
    return key
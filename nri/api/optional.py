"""Normalisation of optional scalar values; None means unset."""

from __future__ import annotations

from typing import Any

_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1
_UINT32_MAX = 2**32 - 1
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1
_UINT64_MAX = 2**64 - 1


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _checked(value: int, low: int, high: int, kind: str) -> int:
    if not low <= value <= high:
        raise ValueError(f"value {value} out of range for {kind}")
    return value


def optional_string(value: Any) -> str | None:
    """Return value if it is a string, None otherwise."""
    return value if isinstance(value, str) else None


def optional_int(value: Any) -> int | None:
    """Return value as a 64-bit signed integer, None if not an integer."""
    v = _as_int(value)
    return None if v is None else _checked(v, _INT64_MIN, _INT64_MAX, "int")


def optional_int32(value: Any) -> int | None:
    """Return value as a 32-bit signed integer, None if not an integer."""
    v = _as_int(value)
    return None if v is None else _checked(v, _INT32_MIN, _INT32_MAX, "int32")


def optional_uint32(value: Any) -> int | None:
    """Return value as a 32-bit unsigned integer, None if not an integer."""
    v = _as_int(value)
    return None if v is None else _checked(v, 0, _UINT32_MAX, "uint32")


def optional_int64(value: Any) -> int | None:
    """Return value as a 64-bit signed integer.

    Unsigned 64-bit values wrap around as two's complement.
    """
    v = _as_int(value)
    if v is None:
        return None
    _checked(v, _INT64_MIN, _UINT64_MAX, "int64")
    return v - 2**64 if v > _INT64_MAX else v


def optional_uint64(value: Any) -> int | None:
    """Return value as a 64-bit unsigned integer.

    Negative 64-bit values wrap around as two's complement.
    """
    v = _as_int(value)
    if v is None:
        return None
    _checked(v, _INT64_MIN, _UINT64_MAX, "uint64")
    return v & _UINT64_MAX


def optional_bool(value: Any) -> bool | None:
    """Return value if it is a bool, None otherwise."""
    return value if isinstance(value, bool) else None


def optional_file_mode(value: Any) -> int | None:
    """Return value as a 32-bit file mode, None if not an integer."""
    v = _as_int(value)
    return None if v is None else _checked(v, 0, _UINT32_MAX, "file mode")


def file_mode_perm(mode: int) -> int:
    """Return the permission bits of a file mode."""
    return mode & 0o777
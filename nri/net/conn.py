"""Connections from descriptors and listeners over pre-connected sockets."""

from __future__ import annotations

import queue
import socket
import threading
from typing import Any


def new_fd_conn(fd: int) -> socket.socket:
    """Return a socket connection taking ownership of the given descriptor."""
    try:
        return socket.socket(fileno=fd)
    except (OSError, ValueError) as exc:
        raise OSError(f"failed to create connection for fd #{fd}: {exc}") from exc


class ConnListener:
    """A listener that hands out a single pre-connected connection.

    The first accept() returns the wrapped connection. Later calls block
    until the listener is closed, then raise EOFError. close() closes
    the listener and the wrapped connection.
    """

    def __init__(self, conn: Any) -> None:
        self._conn = conn
        self._addr = conn.getsockname()
        self._next: queue.Queue[Any] = queue.Queue()
        self._next.put(conn)
        self._lock = threading.Lock()
        self._closed = False

    def __enter__(self) -> ConnListener:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def accept(self) -> Any:
        """Return the wrapped connection the first time, then wait for close."""
        conn = self._next.get()
        if conn is None:
            self._next.put(None)
            raise EOFError("listener closed")
        return conn

    def close(self) -> None:
        """Close the listener and the wrapped connection."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._next.put(None)
        self._conn.close()

    def addr(self) -> Any:
        """Return the local address of the wrapped connection."""
        return self._addr
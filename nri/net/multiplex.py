"""Multiplexing of several logical connections over a single stream socket.

Each frame on the trunk carries a 4-byte connection id and a 4-byte
payload length, both big-endian, followed by the payload. Opening a
connection is purely local: the same id is assumed to be opened at the
other end. Every write is one message; every read returns the oldest
message received for the connection.
"""

from __future__ import annotations

import errno
import os
import struct
import threading
from collections import deque
from collections.abc import Callable
from typing import Any

from nri.net.conn import ConnListener

RESERVED_CONN_ID = 0
"""Connection id reserved for future use."""

LOWEST_CONN_ID = 1
"""Lowest externally usable connection id."""

PLUGIN_SERVICE_CONN = 1
"""Connection id for plugin services."""

RUNTIME_SERVICE_CONN = 2
"""Connection id for runtime services."""

READ_QUEUE_LENGTH = 256
"""Default read queue length of a single connection."""

_TTRPC_MESSAGE_HEADER_LENGTH = 10
_TTRPC_MESSAGE_LENGTH_MAX = 4 << 20

MAX_PAYLOAD_SIZE = _TTRPC_MESSAGE_HEADER_LENGTH + _TTRPC_MESSAGE_LENGTH_MAX
"""Largest payload carried by a single frame."""

_HEADER = struct.Struct(">II")


class MuxConn:
    """A single logical connection of a Mux."""

    def __init__(self, conn_id: int, mux: Mux, queue_length: int) -> None:
        self.conn_id = conn_id
        self._mux = mux
        self._queue_length = queue_length
        self._queue: deque[bytes] = deque()
        self._cond = threading.Condition()
        self._closed = False

    def __enter__(self) -> MuxConn:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _push(self, msg: bytes) -> bool:
        with self._cond:
            if len(self._queue) >= self._queue_length:
                return False
            self._queue.append(msg)
            self._cond.notify()
            return True

    def _close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def read(self, bufsize: int | None = None) -> bytes:
        """Return the next message, waiting for one if necessary.

        Raises the error that closed the mux (EOFError by default) once
        the connection is closed, and OSError(ENOMEM) if the message is
        larger than bufsize; that message is then lost.
        """
        with self._cond:
            while not self._queue and not self._closed:
                self._cond.wait()
            if self._closed:
                raise self._mux._error()
            msg = self._queue.popleft()
        if bufsize is not None and bufsize < len(msg):
            raise OSError(errno.ENOMEM, os.strerror(errno.ENOMEM))
        return msg

    def write(self, data: bytes) -> int:
        """Send data as one message and return its length."""
        with self._cond:
            if self._closed:
                raise EOFError("connection closed")
        return self._mux._write(self.conn_id, data)

    def close(self) -> None:
        """Close the connection and forget it in the mux."""
        self._mux._forget(self)
        self._close()

    def getsockname(self) -> None:
        """Logical connections have no local address."""
        return None

    def getpeername(self) -> None:
        """Logical connections have no remote address."""
        return None


class Mux:
    """Multiplexer of logical connections over a trunk socket."""

    def __init__(
        self,
        trunk: Any,
        *,
        blocked_read: bool = False,
        read_queue_length: int = READ_QUEUE_LENGTH,
    ) -> None:
        if read_queue_length < 0:
            raise ValueError(f"invalid read queue length {read_queue_length}")
        self._trunk = trunk
        self._queue_length = read_queue_length
        self._conns: dict[int, MuxConn] = {}
        self._conn_lock = threading.RLock()
        self._write_lock = threading.Lock()
        self._err_lock = threading.Lock()
        self._err: BaseException | None = None
        self._close_lock = threading.Lock()
        self._closed = False
        self._done = threading.Event()
        self._unblocked = threading.Event()
        if not blocked_read:
            self._unblocked.set()
        self._reader_thread = threading.Thread(
            target=self._reader, name="nri-mux-reader", daemon=True
        )
        self._reader_thread.start()

    def __enter__(self) -> Mux:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def trunk(self) -> Any:
        """The trunk connection of the mux."""
        return self._trunk

    def unblock(self) -> None:
        """Let the mux start reading from the trunk."""
        self._unblocked.set()

    def open(self, conn_id: int) -> MuxConn:
        """Return the connection for the given id, creating it if needed."""
        if conn_id == RESERVED_CONN_ID:
            raise ValueError(f"ConnID {conn_id} is reserved")
        with self._conn_lock:
            conn = self._conns.get(conn_id)
            if conn is None:
                conn = MuxConn(conn_id, self, self._queue_length)
                self._conns[conn_id] = conn
            return conn

    def close(self) -> None:
        """Close the mux, all its connections and the trunk."""
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        with self._conn_lock:
            for conn in self._conns.values():
                conn._close()
        self._done.set()
        self._unblocked.set()
        try:
            self._trunk.shutdown(2)  # SHUT_RDWR wakes a blocked reader
        except OSError:
            pass
        self._trunk.close()

    def dialer(self, conn_id: int) -> Callable[..., MuxConn]:
        """Return a dial-like function returning the connection for the id."""

        def dial(*_args: Any) -> MuxConn:
            return self.open(conn_id)

        return dial

    def listen(self, conn_id: int) -> ConnListener:
        """Return a listener whose first accept() returns the connection."""
        return ConnListener(self.open(conn_id))

    def _forget(self, conn: MuxConn) -> None:
        with self._conn_lock:
            if self._conns.get(conn.conn_id) is conn:
                del self._conns[conn.conn_id]

    def _set_error(self, err: BaseException) -> None:
        with self._err_lock:
            if self._err is None:
                self._err = err

    def _error(self) -> BaseException:
        with self._err_lock:
            if self._err is None:
                self._err = EOFError("mux closed")
            return self._err.with_traceback(None)

    def _write(self, conn_id: int, data: bytes) -> int:
        view = memoryview(data)
        total = len(view)
        offset = 0
        with self._write_lock:
            while True:
                chunk = view[offset : offset + MAX_PAYLOAD_SIZE]
                self._send(_HEADER.pack(conn_id, len(chunk)), "header")
                self._send(chunk, "payload")
                offset += len(chunk)
                if offset >= total:
                    break
        return total

    def _send(self, data: Any, what: str) -> None:
        try:
            self._trunk.sendall(data)
        except OSError as exc:
            err = ConnectionError(f"failed to write {what} to trunk: {exc}")
            self._set_error(err)
            self.close()
            raise err from exc

    def _recv_exact(self, size: int, what: str) -> bytes:
        buf = bytearray(size)
        view = memoryview(buf)
        got = 0
        while got < size:
            try:
                n = self._trunk.recv_into(view[got:])
            except OSError as exc:
                if self._done.is_set():
                    raise EOFError("mux closed") from exc
                raise ConnectionError(
                    f"failed to read {what} from trunk: {exc}"
                ) from exc
            if n == 0:
                if got == 0:
                    raise EOFError("trunk closed")
                raise ConnectionError(f"failed to read {what} from trunk: unexpected EOF")
            got += n
        return bytes(buf)

    def _reader(self) -> None:
        self._unblocked.wait()
        while not self._done.is_set():
            try:
                conn_id, size = _HEADER.unpack(self._recv_exact(_HEADER.size, "header"))
                payload = self._recv_exact(size, "payload")
            except (EOFError, ConnectionError) as exc:
                self._set_error(exc)
                self.close()
                return
            with self._conn_lock:
                conn = self._conns.get(conn_id)
            if conn is not None and not conn._push(payload):
                self._set_error(ConnectionError("failed to queue payload for reading"))
                self.close()
                return


def multiplex(
    trunk: Any,
    *,
    blocked_read: bool = False,
    read_queue_length: int = READ_QUEUE_LENGTH,
) -> Mux:
    """Return a multiplexer for the given trunk connection."""
    return Mux(trunk, blocked_read=blocked_read, read_queue_length=read_queue_length)
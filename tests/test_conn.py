import os
import socket
import threading
from contextlib import suppress

import pytest

from nri.net.conn import ConnListener, new_fd_conn
from nri.net.socketpair import SocketPair


def test_preconnected_read_write():
    sp = SocketPair()
    conn = sp.local_conn()
    recv = []
    errors = []

    def reader():
        try:
            pconn_raw = sp.peer_conn()
            listener = ConnListener(pconn_raw)
            pconn = listener.accept()
            with pconn.makefile("rb") as f:
                for line in f:
                    recv.append(line.decode())
            listener.close()
        except Exception as exc:  # pragma: no cover - reported below
            errors.append(exc)

    thread = threading.Thread(target=reader)
    thread.start()

    listener = ConnListener(conn)
    lconn = listener.accept()
    assert lconn is conn

    sent = []
    for i in range(32):
        msg = f"message #{i}\n"
        lconn.sendall(msg.encode())
        sent.append(msg)
    lconn.close()

    thread.join(timeout=10)
    assert not thread.is_alive()
    assert errors == []
    assert recv == sent


def test_accept_after_close_raises_eof():
    a, b = socket.socketpair()
    try:
        listener = ConnListener(a)
        assert listener.accept() is a
        listener.close()
        with pytest.raises(EOFError):
            listener.accept()
        with pytest.raises(EOFError):
            listener.accept()
        assert a.fileno() == -1
    finally:
        b.close()


def test_second_accept_blocks_until_close():
    a, b = socket.socketpair()
    try:
        listener = ConnListener(a)
        assert listener.accept() is a
        outcome = []

        def waiter():
            try:
                listener.accept()
                outcome.append("accepted")
            except EOFError:
                outcome.append("eof")

        thread = threading.Thread(target=waiter)
        thread.start()
        thread.join(timeout=0.2)
        assert thread.is_alive()
        listener.close()
        thread.join(timeout=5)
        assert outcome == ["eof"]
    finally:
        b.close()


def test_new_fd_conn_takes_over_descriptor():
    a, b = socket.socketpair()
    fd = a.detach()
    conn = new_fd_conn(fd)
    try:
        assert conn.fileno() == fd
        conn.sendall(b"hello")
        assert b.recv(5) == b"hello"
    finally:
        conn.close()
        b.close()


def test_new_fd_conn_rejects_non_socket():
    r, w = os.pipe()
    try:
        with pytest.raises(OSError, match="failed to create connection"):
            new_fd_conn(r)
    finally:
        for fd in (r, w):
            with suppress(OSError):
                os.close(fd)
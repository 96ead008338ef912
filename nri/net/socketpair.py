"""A connected pair of Unix stream sockets."""

from __future__ import annotations

import io
import socket


def _new_socket_pair() -> tuple[socket.socket, socket.socket]:
    # Python creates sockets non-inheritable, i.e. close-on-exec.
    try:
        return socket.socketpair(socket.AF_UNIX, socket.SOCK_STREAM)
    except OSError as exc:
        raise OSError(exc.errno, f"failed to create socketpair: {exc}") from exc


class SocketPair:
    """Both ends of a connected socket pair, held as raw files."""

    def __init__(self) -> None:
        local, peer = _new_socket_pair()
        name = f"socketpair-#{local.fileno()}:{peer.fileno()}"
        self._local = io.FileIO(local.detach(), "r+", closefd=True)
        self._peer = io.FileIO(peer.detach(), "r+", closefd=True)
        self._local.name = name + "[0]"
        self._peer.name = name + "[1]"

    def __enter__(self) -> SocketPair:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def local_file(self) -> io.FileIO:
        """Return the local end as a file."""
        return self._local

    def peer_file(self) -> io.FileIO:
        """Return the peer end as a file."""
        return self._peer

    @staticmethod
    def _to_conn(file: io.FileIO) -> socket.socket:
        name = file.name
        with file:
            try:
                return socket.fromfd(file.fileno(), socket.AF_UNIX, socket.SOCK_STREAM)
            except OSError as exc:
                raise OSError(
                    exc.errno, f"failed to create connection for {name}: {exc}"
                ) from exc

    def local_conn(self) -> socket.socket:
        """Return a socket for the local end; this closes local_file()."""
        return self._to_conn(self._local)

    def peer_conn(self) -> socket.socket:
        """Return a socket for the peer end; this closes peer_file()."""
        return self._to_conn(self._peer)

    def close(self) -> None:
        """Close both ends."""
        self.local_close()
        self.peer_close()

    def local_close(self) -> None:
        """Close the local end."""
        self._local.close()

    def peer_close(self) -> None:
        """Close the peer end."""
        self._peer.close()
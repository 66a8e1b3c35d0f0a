"""TCP connection listener.

Binds the identity's port on all interfaces (IPv6 dual-stack where the
platform supports it, else IPv4 only) from a background daemon thread and
accepts connections forever. There is no wire protocol yet: every accepted
connection is closed immediately without reading or writing.
"""

import contextlib
import errno
import logging
import socket
import threading
from enum import Enum
from typing import Optional

from .errors import ListenerBindFailure

logger = logging.getLogger(__name__)

BIND_HOST = "0.0.0.0"

# Bind errors that a fallback to IPv4 would hit as well
FATAL_BIND_ERRNOS = (errno.EADDRINUSE, errno.EACCES)

# Backoff between consecutive accept() failures, in seconds
INITIAL_BACKOFF = 0.01
MAX_BACKOFF = 1.0


class ListenerState(Enum):
    UNBOUND = "unbound"
    BOUND = "bound"
    ACCEPTING = "accepting"
    FAILED = "failed"
    CLOSED = "closed"


class Listener:
    """Accept loop for one TCP port, run on its own thread."""

    def __init__(self, port: int, host: Optional[str] = None):
        # None binds the wildcard address, dual-stack when available
        self.host = host
        self.family = socket.AF_INET
        self.port = port
        self.state = ListenerState.UNBOUND
        self.error: Optional[ListenerBindFailure] = None
        self.accepted = 0
        self._sock: Optional[socket.socket] = None
        self._ready = threading.Event()
        self._closing = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "Listener":
        self._thread = threading.Thread(
            target=self._run, name=f"total-listener-{self.port}", daemon=True
        )
        self._thread.start()
        return self

    def wait_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the socket is bound or binding failed."""
        return self._ready.wait(timeout)

    def close(self):
        self._closing.set()
        sock = self._sock
        if sock is None:
            return
        # wakes a thread blocked in accept()
        with contextlib.suppress(OSError):
            sock.shutdown(socket.SHUT_RDWR)
        sock.close()

    def _bind(self) -> socket.socket:
        if self.host is None and socket.has_dualstack_ipv6():
            try:
                return socket.create_server(
                    ("", self.port), family=socket.AF_INET6, dualstack_ipv6=True
                )
            except OSError as e:
                if e.errno in FATAL_BIND_ERRNOS:
                    raise
                logger.info(f"Dual-stack bind on port {self.port} failed, using IPv4: {e}")
        return socket.create_server((self.host or BIND_HOST, self.port))

    def _run(self):
        try:
            sock = self._bind()
        except OSError as e:
            self.error = ListenerBindFailure(self.port, e)
            self.state = ListenerState.FAILED
            logger.error(str(self.error))
            print(self.error)
            self._ready.set()
            return

        self._sock = sock
        self.port = sock.getsockname()[1]
        self.family = sock.family
        self.state = ListenerState.BOUND
        logger.info(f"Listening on port {self.port} ({self.family.name})")
        self._ready.set()

        with sock:
            self._accept_loop(sock)
        self.state = ListenerState.CLOSED
        logger.info(f"Listener on port {self.port} stopped")

    def _accept_loop(self, sock: socket.socket):
        self.state = ListenerState.ACCEPTING
        delay = 0.0
        while not self._closing.is_set():
            try:
                conn, addr = sock.accept()
            except OSError as e:
                if self._closing.is_set():
                    break
                delay = min(max(delay * 2, INITIAL_BACKOFF), MAX_BACKOFF)
                logger.debug(f"accept() failed, retrying in {delay:.2f}s: {e}")
                self._closing.wait(delay)
                continue

            delay = 0.0
            self.accepted += 1
            logger.debug(f"Accepted connection from {addr[0]}:{addr[1]}, closing")
            conn.close()


def start_listener(port: int) -> Listener:
    """Start accepting on ``port`` in the background and return immediately."""
    return Listener(port).start()

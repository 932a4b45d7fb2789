"""A single-process keep-alive static file server driven by an event selector."""

import argparse
import selectors

from .buffer import WriteBuffer
from .http import respond_epoll
from .net import KEEPALIVE_TIMEOUT, MAXLINE, SERV_PORT, listen_tcp
from .scanner import DEFAULT_ROOT


class EventServer:
    """Serves files from root on non-blocking sockets.

    With buffering on, each connection gets a WriteBuffer; data the socket
    cannot take at once is flushed when it becomes writable, and a connection
    whose buffer failed is closed.
    """

    def __init__(self, listener, root=DEFAULT_ROOT, buffered=True, timeout=KEEPALIVE_TIMEOUT):
        self.listener = listener
        self.root = root
        self.buffered = buffered
        self.timeout = timeout
        self._conns = {}
        listener.setblocking(False)
        self._selector = selectors.DefaultSelector()
        self._selector.register(listener, selectors.EVENT_READ)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def clients(self):
        """The connected client sockets."""
        return tuple(self._conns)

    def _drop(self, conn):
        if self._conns.pop(conn, None) is None and conn not in self._conns:
            pass
        try:
            self._selector.unregister(conn)
        except (KeyError, ValueError):
            pass
        conn.close()

    def _accept(self):
        try:
            conn, _ = self.listener.accept()
        except BlockingIOError:
            return
        conn.setblocking(False)
        self._conns[conn] = WriteBuffer() if self.buffered else None
        self._selector.register(conn, selectors.EVENT_READ)

    def _read(self, conn):
        try:
            data = conn.recv(MAXLINE)
        except BlockingIOError:
            return
        except OSError:
            data = b""
        if not data:
            self._drop(conn)
            return
        buffer = self._conns[conn]
        try:
            respond_epoll(conn, data, self.root, buffer)
        except BlockingIOError:
            pass
        except OSError:
            self._drop(conn)
            return
        if buffer is not None and (buffer.pending or buffer.failed):
            self._selector.modify(conn, selectors.EVENT_READ | selectors.EVENT_WRITE)

    def _write(self, conn):
        buffer = self._conns[conn]
        if buffer is None:
            self._selector.modify(conn, selectors.EVENT_READ)
            return
        if buffer.failed:
            self._drop(conn)
        elif buffer.flush(conn):
            self._selector.modify(conn, selectors.EVENT_READ)

    def step(self):
        """Wait for one round of events and handle them; return how many were ready."""
        events = self._selector.select(self.timeout)
        for key, mask in events:
            conn = key.fileobj
            if conn is self.listener:
                self._accept()
            elif conn not in self._conns:
                continue
            elif mask & selectors.EVENT_READ:
                self._read(conn)
            elif mask & selectors.EVENT_WRITE:
                self._write(conn)
        return len(events)

    def serve_forever(self):
        """Handle events until interrupted."""
        while True:
            self.step()

    def close(self):
        """Close every client, the selector and the listening socket."""
        for conn in list(self._conns):
            self._drop(conn)
        self._selector.close()
        self.listener.close()


def main(argv=None):
    """Run the event-driven static file server."""
    parser = argparse.ArgumentParser(prog="tinyserve-event", description="Event-driven file server")
    parser.add_argument("--port", type=int, default=SERV_PORT, help="port to listen on")
    parser.add_argument("--root", default=DEFAULT_ROOT, help="directory to serve files from")
    parser.add_argument(
        "--unbuffered", action="store_true", help="write responses without per-connection buffering"
    )
    args = parser.parse_args(argv)
    with EventServer(listen_tcp(args.port), args.root, not args.unbuffered) as server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0
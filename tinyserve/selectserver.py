"""A single-process TCP echo server built on select()."""

import select

from .echo import _port_parser, _serve_until_interrupted
from .errors import err_quit
from .net import MAXLINE, listen_tcp

FD_SETSIZE = 1024


class _MultiplexServer:
    """Client bookkeeping shared by the single-process multiplexing servers."""

    def __init__(self, listener, max_clients):
        self.listener = listener
        self.max_clients = max_clients
        self._clients = {}

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def clients(self):
        """The connected client sockets."""
        return tuple(self._clients.values())

    def _register(self, conn):
        """Hook called when a client is added."""

    def _unregister(self, fd):
        """Hook called when a client is removed, before it is closed."""

    def _drop(self, fd):
        conn = self._clients.pop(fd, None)
        if conn is None:
            return
        self._unregister(fd)
        conn.close()

    def _drop_all(self):
        for fd in list(self._clients):
            self._drop(fd)

    def _close_all(self):
        self._drop_all()
        self.listener.close()

    def _accept(self):
        conn, _ = self.listener.accept()
        if len(self._clients) >= self.max_clients:
            conn.close()
            err_quit("too many clients")
        self._clients[conn.fileno()] = conn
        self._register(conn)

    def _reply(self, fd, answer):
        """Read from client fd and send answer(data); drop it on EOF or error."""
        conn = self._clients.get(fd)
        if conn is None:
            return
        try:
            data = conn.recv(MAXLINE)
        except OSError:
            data = b""
        if not data:
            self._drop(fd)
            return
        try:
            conn.sendall(answer(data))
        except OSError:
            self._drop(fd)


def _echo(data):
    return data


class SelectServer(_MultiplexServer):
    """Echoes data back to every client, multiplexing them with select()."""

    def __init__(self, listener, max_clients=FD_SETSIZE):
        super().__init__(listener, max_clients)

    def step(self, timeout=None):
        """Wait up to timeout seconds (forever if None) and handle what is ready.

        Returns the number of ready sockets.
        """
        readable, _, _ = select.select([self.listener, *self._clients.values()], [], [], timeout)
        if self.listener in readable:
            self._accept()
        for conn in readable:
            if conn is not self.listener:
                self._reply(conn.fileno(), _echo)
        return len(readable)

    def serve_forever(self):
        """Handle events until interrupted."""
        while True:
            self.step()

    def close(self):
        """Close every client and the listening socket."""
        self._close_all()


def main(argv=None):
    """Run the select-based echo server."""
    args = _port_parser("tinyserve-select", "select() echo server").parse_args(argv)
    return _serve_until_interrupted(SelectServer(listen_tcp(args.port)))
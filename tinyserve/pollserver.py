"""A single-process keep-alive HTTP server built on poll()."""

import select

from .echo import _port_parser, _serve_until_interrupted
from .net import KEEPALIVE_TIMEOUT, MAXFD, listen_tcp
from .selectserver import _MultiplexServer

HTTP_RESPONSE = (
    b"HTTP/1.1 200 OK\r\n"
    b"Content-Type: text/plain\r\n"
    b"Connection: keep-alive\r\n"
    b"Keep-Alive: timeout=8\r\n"
    b"Content-Length: 5\r\n"
    b"\r\n"
    b"boom\n"
)

_READ_EVENTS = select.POLLIN | select.POLLPRI
_CLOSE_EVENTS = select.POLLERR | select.POLLHUP | select.POLLNVAL


def _fixed_response(_data):
    return HTTP_RESPONSE


class PollServer(_MultiplexServer):
    """Answers every request with a fixed response; idle clients are dropped on timeout.

    When a whole timeout passes without any event, every client is closed.
    """

    def __init__(self, listener, timeout=KEEPALIVE_TIMEOUT, max_clients=MAXFD - 1):
        super().__init__(listener, max_clients)
        self.timeout = timeout
        self._poller = select.poll()
        self._poller.register(listener, select.POLLIN)

    def _register(self, conn):
        self._poller.register(conn, select.POLLIN)

    def _unregister(self, fd):
        self._poller.unregister(fd)

    def step(self):
        """Wait for one round of events and handle them; return how many were ready."""
        timeout_ms = None if self.timeout is None else int(self.timeout * 1000)
        events = self._poller.poll(timeout_ms)
        if not events:
            self._drop_all()
            return 0
        listen_fd = self.listener.fileno()
        if any(fd == listen_fd for fd, _ in events):
            self._accept()
        for fd, revents in events:
            if fd != listen_fd and revents & (_READ_EVENTS | _CLOSE_EVENTS):
                self._reply(fd, _fixed_response)
        return len(events)

    def serve_forever(self):
        """Handle events until interrupted."""
        while True:
            self.step()

    def close(self):
        """Close every client and the listening socket."""
        try:
            self._poller.unregister(self.listener)
        except (KeyError, ValueError):
            pass
        self._close_all()


def main(argv=None):
    """Run the poll-based keep-alive server."""
    args = _port_parser("tinyserve-poll", "poll() HTTP server").parse_args(argv)
    return _serve_until_interrupted(PollServer(listen_tcp(args.port)))
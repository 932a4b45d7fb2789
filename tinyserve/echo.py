"""A forking TCP server that echoes back whatever it receives."""

import argparse
import socketserver

from .errors import err_sys
from .net import LISTENQ, MAXLINE, SERV_PORT


def str_echo(conn):
    """Send back everything read from conn until the peer closes its side."""
    while True:
        try:
            data = conn.recv(MAXLINE)
        except InterruptedError:
            continue
        except OSError:
            err_sys("str_echo: read error")
        if not data:
            return
        conn.sendall(data)


class _ForkingServer(socketserver.ForkingTCPServer):
    allow_reuse_address = True
    request_queue_size = LISTENQ


def _port_parser(prog, description):
    """An argument parser that knows the --port option every server takes."""
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument("--port", type=int, default=SERV_PORT, help="port to listen on")
    return parser


def _serve_until_interrupted(server):
    """Run server until interrupted from the keyboard, then close it."""
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


def _forking_main(parser, argv, serve):
    """Parse argv and call serve(conn, args) in one child process per client."""
    args = parser.parse_args(argv)

    class _Handler(socketserver.BaseRequestHandler):
        def handle(self):
            serve(self.request, args)

    return _serve_until_interrupted(_ForkingServer(("", args.port), _Handler))


def main(argv=None):
    """Serve echo connections, one child process per client."""
    parser = _port_parser("tinyserve-echo", "TCP echo server")
    return _forking_main(parser, argv, lambda conn, _args: str_echo(conn))
"""A forking HTTP server that answers a few fixed paths."""

import argparse
import socketserver

from .lineio import parse_request
from .net import LISTENQ, SERV_PORT

_ROUTES = {
    "/start": "Successfully!\r\nHello World!\r\n",
    "/": "Oops! There is nothing!",
}
_NOT_FOUND_BODY = "Apparently! You're worry!"


def route(path):
    """Return (status_code, body) for a request path."""
    body = _ROUTES.get(path)
    if body is None:
        return 404, _NOT_FOUND_BODY
    return 200, body


def echo_resp(conn):
    """Read a request line from conn and send the matching plain-text response."""
    status, body = route(parse_request(conn))
    payload = body.encode("utf-8")
    reason = "OK" if status == 200 else "Not Found"
    header = (
        f"HTTP/1.1 {status} {reason}\r\n"
        "Content-Type: text/plain\r\n"
        f"Content-Length: {len(payload)}\r\n"
        "Connection: close\r\n"
        "\r\n"
    ).encode("ascii")
    conn.sendall(header)
    conn.sendall(payload)
    return status


class _GetHandler(socketserver.BaseRequestHandler):
    def handle(self):
        echo_resp(self.request)


class _ForkingServer(socketserver.ForkingTCPServer):
    allow_reuse_address = True
    request_queue_size = LISTENQ


def main(argv=None):
    """Serve the fixed routes, one child process per client."""
    parser = argparse.ArgumentParser(prog="tinyserve-get", description="Minimal GET server")
    parser.add_argument("--port", type=int, default=SERV_PORT, help="port to listen on")
    args = parser.parse_args(argv)
    with _ForkingServer(("", args.port), _GetHandler) as server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0
"""Shared network constants and socket helpers."""

import socket

SERV_PORT = 8080
MAX_FILE_SIZE = 4096
MAXLINE = 4096
LISTENQ = 1024
MAXFD = 65536
KEEPALIVE_TIMEOUT = 8.0  # seconds


def listen_tcp(port=SERV_PORT, host="", backlog=LISTENQ):
    """Return a TCP socket bound to (host, port) and listening; an empty host means any address."""
    return socket.create_server((host, port), family=socket.AF_INET, backlog=backlog)


def connect_tcp(address, port=SERV_PORT):
    """Connect to an IPv4 address given in dotted form and return the socket."""
    try:
        socket.inet_pton(socket.AF_INET, address)
    except OSError:
        raise ValueError(f"invalid IPv4 address: {address!r}") from None
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect((address, port))
    except OSError:
        sock.close()
        raise
    return sock
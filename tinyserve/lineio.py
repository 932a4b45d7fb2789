"""Reading lines and request paths from sockets."""

import os

from .net import MAXLINE


def read_line(sock, maxlen=MAXLINE):
    """Read one byte at a time up to and including a newline, at most maxlen - 1 bytes.

    Returns the bytes read; an empty result means the peer closed the connection.
    """
    line = bytearray()
    while len(line) < maxlen - 1:
        byte = sock.recv(1)
        if not byte:
            break
        line += byte
        if byte == b"\n":
            break
    return bytes(line)


def request_path(line):
    """Return the word after the first space of a request line, or None if there is no space."""
    if isinstance(line, (bytes, bytearray)):
        line = os.fsdecode(bytes(line))
    _, sep, rest = line.partition(" ")
    if not sep:
        return None
    return rest.split(" ", 1)[0]


def parse_request(sock):
    """Read the request line from sock and return its path, or "" when it has none."""
    path = request_path(read_line(sock, MAXLINE))
    return path if path is not None else ""
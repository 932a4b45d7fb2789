"""Interactive TCP client that relays standard input to a server."""

import os
import selectors
import socket
import sys

from .errors import err_quit, err_sys
from .lineio import read_line
from .net import MAXLINE, SERV_PORT, connect_tcp

_USAGE = "usage: tcpcli [--lines] <IPaddress>"


def str_cli_lines(infile, sock, out):
    """Send infile line by line, printing one reply line after each.

    infile and out are binary streams.
    """
    while True:
        line = infile.readline(MAXLINE - 1)
        if not line:
            return
        sock.sendall(line)
        reply = read_line(sock, MAXLINE)
        if not reply:
            err_quit("str_cli: server terminated prematurely")
        out.write(reply)
        out.flush()


def str_cli(infile, sock, out):
    """Relay input to sock and replies to out, waiting on both at once.

    At end of input the socket's write side is shut down, and the function
    returns once the server closes its side. infile must have a file
    descriptor; out is a binary stream.
    """
    in_fd = infile.fileno()
    stdin_eof = False
    with selectors.DefaultSelector() as selector:
        selector.register(sock, selectors.EVENT_READ)
        selector.register(in_fd, selectors.EVENT_READ)
        while True:
            for key, _ in selector.select():
                if key.fileobj is sock:
                    data = sock.recv(MAXLINE)
                    if not data:
                        if stdin_eof:
                            return
                        err_quit("str_cli: server terminated prematurely")
                    out.write(data)
                    out.flush()
                else:
                    data = os.read(in_fd, MAXLINE)
                    if not data:
                        stdin_eof = True
                        sock.shutdown(socket.SHUT_WR)
                        selector.unregister(in_fd)
                        continue
                    sock.sendall(data)


def main(argv=None):
    """Connect to the server at the given IPv4 address and relay standard input."""
    args = sys.argv[1:] if argv is None else list(argv)
    lines = "--lines" in args
    args = [arg for arg in args if arg != "--lines"]
    if len(args) != 1:
        err_quit(_USAGE)
    address = args[0]
    try:
        sock = connect_tcp(address, SERV_PORT)
    except ValueError:
        err_quit(f"inet_pton error for {address}")
    except OSError:
        err_sys("connect error")
    with sock:
        if lines:
            str_cli_lines(sys.stdin.buffer, sock, sys.stdout.buffer)
        else:
            str_cli(sys.stdin, sock, sys.stdout.buffer)
    return 0
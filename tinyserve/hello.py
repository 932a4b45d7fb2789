"""A forking HTTP server that answers every connection with a fixed greeting."""

from .echo import _forking_main, _port_parser

RESPONSE = (
    b"HTTP/1.1 200 OK\r\n"
    b"Content-Type: text/plain\r\n"
    b"Content-Length: 12\r\n\r\n"
    b"Hello World!\n"
)


def echo_hello(conn):
    """Send the fixed greeting response to conn."""
    conn.sendall(RESPONSE)


def main(argv=None):
    """Answer every client with the greeting, one child process per client."""
    parser = _port_parser("tinyserve-hello", "Greeting HTTP server")
    return _forking_main(parser, argv, lambda conn, _args: echo_hello(conn))
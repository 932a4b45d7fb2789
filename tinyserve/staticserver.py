"""A forking HTTP server for static files."""

from .echo import _forking_main, _port_parser
from .http import respond_fork
from .scanner import DEFAULT_ROOT


def handle(conn, root=DEFAULT_ROOT):
    """Answer one request on conn with a file from root; return the status code."""
    return respond_fork(conn, root)


def main(argv=None):
    """Serve files from the document root, one child process per client."""
    parser = _port_parser("tinyserve-static", "Static file server")
    parser.add_argument("--root", default=DEFAULT_ROOT, help="directory to serve files from")
    return _forking_main(parser, argv, lambda conn, args: handle(conn, args.root))
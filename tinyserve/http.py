"""Building and sending HTTP responses for static files."""

from .lineio import parse_request, request_path
from .scanner import DEFAULT_ROOT, scan

BAD_REQUEST = (
    b"HTTP/1.1 400 Bad Request\r\n"
    b"Content-Length: 0\r\n"
    b"Connection: close\r\n\r\n"
)


def build_header(status_code, length, keep_alive=False):
    """Return the status line and headers for an HTML body of the given length."""
    reason = "OK" if status_code == 200 else "Not Found"
    if keep_alive:
        connection = "Connection: keep-alive\r\nKeep-Alive: timeout=8\r\n"
    else:
        connection = "Connection: close\r\n"
    return (
        f"HTTP/1.1 {status_code} {reason}\r\n"
        "Content-Type: text/html\r\n"
        f"Content-Length: {length}\r\n"
        f"{connection}\r\n"
    ).encode("ascii")


def _serve(path, root, keep_alive):
    filename = path[1:] if path.startswith("/") else path
    status, body = scan(filename, root)
    return status, [build_header(status, len(body), keep_alive), body]


def response_parts(request, root=DEFAULT_ROOT, keep_alive=True):
    """Return (status_code, parts) answering the raw request data.

    Parts are the header and the body, or only the 400 response when the
    request has no path.
    """
    path = request_path(request)
    if path is None:
        return 400, [BAD_REQUEST]
    return _serve(path, root, keep_alive)


def _send(sock, parts, buffer):
    if buffer is None:
        sock.sendall(b"".join(parts))
    else:
        buffer.writev(sock, parts)


def respond_fork(sock, root=DEFAULT_ROOT, buffer=None):
    """Read the request line from sock, answer it and close-style; return the status code."""
    status, parts = _serve(parse_request(sock), root, False)
    _send(sock, parts, buffer)
    return status


def respond_epoll(sock, data, root=DEFAULT_ROOT, buffer=None):
    """Answer request data already read from sock with keep-alive; return the status code."""
    status, parts = response_parts(data, root, True)
    if status == 400:
        sock.sendall(BAD_REQUEST)
        return status
    _send(sock, parts, buffer)
    return status
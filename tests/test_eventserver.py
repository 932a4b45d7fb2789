import socket

import pytest

from tinyserve.eventserver import EventServer
from tinyserve.net import listen_tcp
from tinyserve.scanner import FALLBACK_BODY


def _connect(server):
    client = socket.create_connection(server.listener.getsockname()[:2])
    client.settimeout(5)
    return client


def _read_response(sock):
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = sock.recv(4096)
        assert chunk, "connection closed before headers"
        data += chunk
    head, _, body = data.partition(b"\r\n\r\n")
    length = 0
    for line in head.split(b"\r\n")[1:]:
        name, _, value = line.partition(b":")
        if name.strip().lower() == b"content-length":
            length = int(value.strip())
    while len(body) < length:
        chunk = sock.recv(4096)
        assert chunk, "connection closed before body"
        body += chunk
    return head.decode("ascii"), body


@pytest.fixture
def root(tmp_path):
    (tmp_path / "index.html").write_bytes(b"<h1>hi</h1>")
    sub = tmp_path / "pages"
    sub.mkdir()
    (sub / "about.html").write_bytes(b"about page")
    return tmp_path


@pytest.fixture(params=[True, False], ids=["buffered", "unbuffered"])
def server(request, root):
    srv = EventServer(listen_tcp(0, "127.0.0.1"), str(root), buffered=request.param, timeout=2.0)
    yield srv
    srv.close()


def _request(server, client, data):
    client.sendall(data)
    server.step()
    return _read_response(client)


def test_serves_found_file(server):
    client = _connect(server)
    with client:
        assert server.step() == 1
        head, body = _request(server, client, b"GET /index.html HTTP/1.1\r\n\r\n")
        assert head.splitlines()[0] == "HTTP/1.1 200 OK"
        assert "Connection: keep-alive" in head
        assert "Keep-Alive: timeout=8" in head
        assert body == b"<h1>hi</h1>"


def test_finds_file_in_subdirectory(server):
    client = _connect(server)
    with client:
        server.step()
        head, body = _request(server, client, b"GET /about.html HTTP/1.1\r\n\r\n")
        assert head.splitlines()[0] == "HTTP/1.1 200 OK"
        assert body == b"about page"


def test_missing_file_without_404_page(server):
    client = _connect(server)
    with client:
        server.step()
        head, body = _request(server, client, b"GET /nope.html HTTP/1.1\r\n\r\n")
        assert head.splitlines()[0] == "HTTP/1.1 404 Not Found"
        assert body == FALLBACK_BODY


def test_missing_file_uses_404_page(server, root):
    (root / "404.html").write_bytes(b"custom not found")
    client = _connect(server)
    with client:
        server.step()
        head, body = _request(server, client, b"GET /nope.html HTTP/1.1\r\n\r\n")
        assert head.splitlines()[0] == "HTTP/1.1 404 Not Found"
        assert body == b"custom not found"


def test_request_without_space_is_bad_request(server):
    client = _connect(server)
    with client:
        server.step()
        head, body = _request(server, client, b"garbage")
        assert head.splitlines()[0] == "HTTP/1.1 400 Bad Request"
        assert "Connection: close" in head
        assert body == b""


def test_keep_alive_serves_several_requests(server):
    client = _connect(server)
    with client:
        server.step()
        for _ in range(3):
            head, body = _request(server, client, b"GET /index.html HTTP/1.1\r\n\r\n")
            assert body == b"<h1>hi</h1>"
        assert len(server.clients) == 1


def test_peer_close_removes_client(server):
    client = _connect(server)
    server.step()
    client.close()
    server.step()
    assert server.clients == ()


def test_timeout_keeps_clients(root):
    srv = EventServer(listen_tcp(0, "127.0.0.1"), str(root), timeout=0.05)
    try:
        client = _connect(srv)
        with client:
            assert srv.step() == 1
            assert srv.step() == 0
            assert len(srv.clients) == 1
    finally:
        srv.close()
import http.client
import socket

import pytest

from tinyserve.staticserver import handle

FALLBACK = b"Oops! It seems developer made a little mistake!"


def _get(path, root):
    """Request path from handle(); return its status, the parsed response and the body."""
    client, server = socket.socketpair()
    with client, server:
        client.sendall(b"GET " + path + b" HTTP/1.1\r\n\r\n")
        status = handle(server, str(root))
        server.close()
        response = http.client.HTTPResponse(client)
        response.begin()
        return status, response, response.read()


@pytest.fixture
def root(tmp_path):
    (tmp_path / "index.html").write_bytes(b"<h1>index</h1>")
    nested = tmp_path / "pages" / "deep"
    nested.mkdir(parents=True)
    (nested / "about.html").write_bytes(b"<p>about</p>")
    return tmp_path


def test_serves_file_at_top_level(root):
    status, response, body = _get(b"/index.html", root)
    assert status == response.status == 200
    assert response.reason == "OK"
    assert body == b"<h1>index</h1>"
    assert response.getheader("Content-Type") == "text/html"
    assert response.getheader("Connection") == "close"
    assert int(response.getheader("Content-Length")) == len(body)


def test_serves_file_found_in_subdirectory(root):
    status, _, body = _get(b"/about.html", root)
    assert status == 200
    assert body == b"<p>about</p>"


def test_missing_file_uses_404_page(root):
    (root / "404.html").write_bytes(b"<h1>gone</h1>")
    status, response, body = _get(b"/nope.html", root)
    assert status == response.status == 404
    assert response.reason == "Not Found"
    assert body == b"<h1>gone</h1>"


def test_missing_file_without_404_page_uses_fallback(root):
    status, response, body = _get(b"/nope.html", root)
    assert status == 404
    assert body == FALLBACK
    assert response.getheader("Content-Length") == str(len(FALLBACK))


def test_large_file_is_cut_to_limit(root):
    (root / "big.html").write_bytes(b"x" * 10000)
    status, response, body = _get(b"/big.html", root)
    assert status == 200
    assert body == b"x" * 4096
    assert response.getheader("Content-Length") == "4096"
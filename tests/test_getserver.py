import socket

import pytest

from tinyserve.getserver import echo_resp, route

START_BODY = "Successfully!\r\nHello World!\r\n"
ROOT_BODY = "Oops! There is nothing!"
MISSING_BODY = "Apparently! You're worry!"


@pytest.mark.parametrize(
    "path, status, body",
    [
        ("/start", 200, START_BODY),
        ("/", 200, ROOT_BODY),
        ("/other", 404, MISSING_BODY),
        ("", 404, MISSING_BODY),
    ],
)
def test_route(path, status, body):
    assert route(path) == (status, body)


def test_start_body_length_is_pinned():
    _, body = route("/start")
    assert len(body) == 29
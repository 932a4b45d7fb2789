import socket
from unittest import mock

import pytest

from tinyserve.echo import str_echo
from tinyserve.errors import FatalError


@pytest.mark.parametrize(
    "reads, echoed",
    [
        ([b"hello", b""], [b"hello"]),
        ([b"first line\n", b"second line\n", b""], [b"first line\n", b"second line\n"]),
        ([b""], []),
        ([InterruptedError(), b"abc", b""], [b"abc"]),
    ],
)
def test_echoes_every_read_until_eof(reads, echoed):
    conn = mock.Mock()
    conn.recv.side_effect = reads
    str_echo(conn)
    assert conn.sendall.call_args_list == [mock.call(data) for data in echoed]
    assert conn.recv.call_count == len(reads)


def test_echo_over_real_socket_pair():
    client, server = socket.socketpair()
    with client, server:
        client.sendall(b"ping")
        client.shutdown(socket.SHUT_WR)
        watched = mock.Mock(wraps=server)
        str_echo(watched)
        watched.sendall.assert_called_once_with(b"ping")
        server.close()
        assert client.recv(64) == b"ping"


def test_read_error_is_fatal():
    conn = mock.Mock()
    conn.recv.side_effect = ConnectionResetError(104, "Connection reset by peer")
    with pytest.raises(FatalError) as info:
        str_echo(conn)
    assert str(info.value).startswith("str_echo: read error: ")
    assert info.value.code == 1
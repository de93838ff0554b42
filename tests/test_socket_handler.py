"""Unit tests for single-read request capture and two-step response writes."""

import socket

import pytest

from response import HTTPResponse
from socket_handler import HTTPWriteError, SocketTimeoutError, read_http_request, write_http_response_message


def test_read_returns_short_read_as_is() -> None:
    server_side, client_side = socket.socketpair()
    with server_side, client_side:
        client_side.sendall(b"GET / HTTP/1.1\r\n\r\n")

        assert read_http_request(server_side) == b"GET / HTTP/1.1\r\n\r\n"


def test_read_is_capped_at_buffer_size() -> None:
    server_side, client_side = socket.socketpair()
    with server_side, client_side:
        client_side.sendall(b"x" * 4096)

        assert len(read_http_request(server_side, buffer_size=1024)) <= 1024


def test_read_returns_empty_bytes_when_client_closes() -> None:
    server_side, client_side = socket.socketpair()
    with server_side:
        client_side.close()

        assert read_http_request(server_side) == b""


def test_read_timeout_raises() -> None:
    server_side, client_side = socket.socketpair()
    with server_side, client_side:
        server_side.settimeout(0.05)

        with pytest.raises(SocketTimeoutError):
            read_http_request(server_side)


def test_write_sends_head_then_body() -> None:
    server_side, client_side = socket.socketpair()
    with server_side, client_side:
        response = HTTPResponse(status_code=200, content_type="text/html", body="<p>hi</p>")

        bytes_sent = write_http_response_message(server_side, response)
        server_side.shutdown(socket.SHUT_WR)

        received = b""
        while chunk := client_side.recv(1024):
            received += chunk

    assert received == response.to_bytes()
    assert bytes_sent == len(received)


def test_write_to_closed_peer_raises() -> None:
    server_side, client_side = socket.socketpair()
    with server_side:
        client_side.close()

        with pytest.raises(HTTPWriteError) as exc_info:
            write_http_response_message(server_side, HTTPResponse(status_code=404, body="Page not found"))

    assert exc_info.value.head_sent is False


class FailingBodySocket:
    """Accepts the response head, then fails on the body write."""

    def __init__(self) -> None:
        self.sent: list[bytes] = []

    def sendall(self, data: bytes) -> None:
        if self.sent:
            raise BrokenPipeError("peer went away")
        self.sent.append(data)


def test_body_write_failure_after_head_is_flagged() -> None:
    stub = FailingBodySocket()
    response = HTTPResponse(status_code=200, body="Hello, Rustacean!")

    with pytest.raises(HTTPWriteError) as exc_info:
        write_http_response_message(stub, response)  # type: ignore[arg-type]

    assert exc_info.value.head_sent is True
    assert stub.sent == [response.to_bytes().split(b"\r\n\r\n", 1)[0] + b"\r\n\r\n"]
